"""Shared pytest fixtures for MiniGit tests."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from minigit.core.config import Config
from minigit.core.repository import Repository

BASE_TIME = 1700000000


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's global config and MINIGIT_* variables."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.minigitconfig')
    for key in list(os.environ):
        if key.startswith('MINIGIT_'):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def write_file(repo):
    """Write a file in the work tree and return its path."""
    def _write(name, content):
        path = repo.work_tree / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
        return path
    return _write


@pytest.fixture
def commit_files(repo, write_file):
    """
    Write, stage and commit files in one go.

    Usage: commit_files({'a.txt': 'hello'}, 'message', timestamp=...)
    Timestamps default to a strictly increasing sequence.
    """
    clock = iter(range(BASE_TIME, BASE_TIME + 10000))

    def _commit(files, message="Test commit", timestamp=None):
        for name, content in files.items():
            write_file(name, content)
        repo.add(list(files))
        return repo.commit(message, timestamp=timestamp if timestamp is not None else next(clock))
    return _commit


@pytest.fixture
def repo_with_commits(repo, commit_files):
    """Repository with two commits on main."""
    first = commit_files({'file1.txt': 'Hello, World!'}, "First commit")
    second = commit_files({'file1.txt': 'Hello, World!', 'file2.txt': 'Second file'}, "Second commit")
    repo.commit_hashes = [first, second]
    return repo


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Run with the repository root as the current directory."""
    monkeypatch.chdir(repo.work_tree)
    return repo


@pytest.fixture
def runner():
    """Click test runner."""
    return CliRunner()
