"""Shared fixtures for nodesweep tests."""

import logging
import os
import sys

import pytest

from nodesweep.log import LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point the settings file somewhere empty so user config never leaks in."""
    path = tmp_path_factory.mktemp("config") / "config.json"
    monkeypatch.setenv("NODESWEEP_CONFIG", str(path))
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging so caplog sees records in the next test."""
    logger = logging.getLogger(LOGGER_NAME)
    yield
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def sample_tree(tmp_path):
    """
    a/node_modules/x.txt                       10 bytes
    b/node_modules/nested/node_modules/y.txt    5 bytes
    c/file.txt                                  3 bytes
    """
    a = tmp_path / "a" / "node_modules"
    a.mkdir(parents=True)
    (a / "x.txt").write_bytes(b"x" * 10)

    nested = tmp_path / "b" / "node_modules" / "nested" / "node_modules"
    nested.mkdir(parents=True)
    (nested / "y.txt").write_bytes(b"y" * 5)

    c = tmp_path / "c"
    c.mkdir()
    (c / "file.txt").write_bytes(b"z" * 3)

    return tmp_path


@pytest.fixture
def deep_chain(tmp_path, monkeypatch):
    """
    d/d/d/.../d/leaf.txt (7 bytes), nested past the interpreter recursion limit.

    Removed level by level on teardown so temp-dir cleanup never walks it.
    """
    levels = sys.getrecursionlimit() + 100
    monkeypatch.chdir(tmp_path)
    for _ in range(levels):
        os.mkdir("d")
        os.chdir("d")
    with open("leaf.txt", "wb") as f:
        f.write(b"\0" * 7)
    os.chdir(tmp_path)

    yield tmp_path

    os.chdir(tmp_path)
    for _ in range(levels):
        os.chdir("d")
    os.remove("leaf.txt")
    for _ in range(levels):
        os.chdir("..")
        os.rmdir("d")
    os.chdir(tmp_path)
