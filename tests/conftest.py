"""Shared fixtures."""

import pytest

from tests._fixtures.git_repos import FakeGit


@pytest.fixture
def fake_git():
    return FakeGit()


@pytest.fixture
def rig_dir(tmp_path):
    """Empty rig directory `testrig` under a temporary town root."""
    d = tmp_path / "testrig"
    d.mkdir()
    return d
