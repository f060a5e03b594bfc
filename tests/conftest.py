"""Shared fixtures for envrender tests."""

from pathlib import Path

import pytest


TESTFILES = Path(__file__).parent / "testfiles"


@pytest.fixture
def testfiles(monkeypatch):
    """Run the test from inside tests/testfiles."""
    monkeypatch.chdir(TESTFILES)
    return TESTFILES


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Empty working directory with no .env in it."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    monkeypatch.chdir(workspace)
    return workspace
