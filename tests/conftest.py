from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from tests._fixtures.fake_git import FakeGit
from tests._fixtures.repo_builder import GitRepoBuilder


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepoBuilder:
    """Provide a real git repository rooted under the pytest tmp_path."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    return GitRepoBuilder(tmp_path)


@pytest.fixture
def fake_git() -> FakeGit:
    """Provide a scripted stand-in for the git CLI."""
    return FakeGit()


@pytest.fixture
def log() -> logging.Logger:
    return logging.getLogger("tests.repolink")
