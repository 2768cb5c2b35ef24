"""
Main entry point for running trimerge from a source checkout.
"""

from trimerge.cli import run

if __name__ == "__main__":
    run()
