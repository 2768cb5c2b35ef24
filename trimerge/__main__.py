"""Allow ``python -m trimerge``."""

from trimerge.cli import run

run()
