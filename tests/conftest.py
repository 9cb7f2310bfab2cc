"""Pytest configuration and fixtures for stagegate tests."""
import subprocess
from pathlib import Path

import pytest


def pytest_sessionfinish(session, exitstatus):
    """Check that coverage data was collected if --cov was requested.

    This prevents silent "no data collected" scenarios that produce 0% coverage
    without failing the test run.
    """
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)

    if not cov_enabled:
        return

    cwd = Path.cwd()
    coverage_files = list(cwd.glob(".coverage*"))

    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "Check that tests import from 'stagegate' (the package) not 'src/stagegate' (filesystem path).",
            returncode=1
        )


def _git(repo: Path, *args: str) -> subprocess.CompletedProcess:
    return subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True, text=True)


def _write(repo: Path, relpath: str, content: str) -> Path:
    path = repo / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def _stage(repo: Path, relpath: str, content: str) -> None:
    _write(repo, relpath, content)
    _git(repo, "--literal-pathspecs", "add", relpath)


@pytest.fixture
def git_cmd():
    """Run a git command in a repo, raising on failure."""
    return _git


@pytest.fixture
def stage():
    """Write a file into a repo and add it to the index."""
    return _stage


@pytest.fixture
def empty_repo(tmp_path: Path) -> Path:
    """Create a git repository with no commits."""
    repo = tmp_path / "empty_repo"
    repo.mkdir()
    _git(repo, "init")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test User")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def git_repo(empty_repo: Path) -> Path:
    """Create a git repository with one commit."""
    _write(empty_repo, "README.md", "# Test Repo\n")
    _write(empty_repo, "old.php", "<?php\n")
    _git(empty_repo, "add", "README.md", "old.php")
    _git(empty_repo, "commit", "-m", "Initial commit")
    return empty_repo
