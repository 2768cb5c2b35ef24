"""Shared fixtures for trimerge tests."""

import pytest

from trimerge.core.merge.three_way import ThreeWayMergeEngine


@pytest.fixture
def engine():
    """A merge engine with the default block matcher."""
    return ThreeWayMergeEngine()


@pytest.fixture
def write_inputs(tmp_path):
    """Write mine/base/yours files and return their paths as strings."""
    def _write(mine: str, base: str, yours: str) -> tuple[str, str, str]:
        paths = []
        for name, text in (("mine.txt", mine), ("base.txt", base), ("yours.txt", yours)):
            path = tmp_path / name
            path.write_bytes(text.encode("utf-8"))
            paths.append(str(path))
        return tuple(paths)
    return _write
