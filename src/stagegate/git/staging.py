"""Read the staged index: added/modified files and staged blob content."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from stagegate.errors import VcsError
from stagegate.exec import ExecResult, run_command

logger = logging.getLogger(__name__)

# Object id of git's empty tree; the diff baseline before the first commit.
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

_STAGED_STATUSES = ("A", "M")


def run_git(args: list[str], *, repo_root: Path, check: bool = True) -> ExecResult:
    """Run a git command rooted at repo, raising ``VcsError`` on failure."""
    result = run_command(["git", *args], cwd=repo_root)
    if check and result.returncode != 0:
        raise VcsError(args, (result.stderr or result.stdout).strip() or f"exit {result.returncode}")
    return result


def resolve_repo_root(start: Path | None = None) -> Path:
    """Resolve the git toplevel from ``start`` (defaults to cwd)."""
    probe = (start or Path.cwd()).resolve()
    out = run_git(["rev-parse", "--show-toplevel"], repo_root=probe).stdout.strip()
    if not out:
        raise VcsError(["rev-parse", "--show-toplevel"], f"empty output from {probe}")
    return Path(out).resolve()


def has_head(repo_root: Path) -> bool:
    """Return True when the repository has at least one commit."""
    result = run_git(["rev-parse", "--verify", "--quiet", "HEAD"], repo_root=repo_root, check=False)
    return result.returncode == 0


def diff_base(repo_root: Path) -> str:
    return "HEAD" if has_head(repo_root) else EMPTY_TREE_SHA


def list_staged_files(repo_root: Path) -> list[str]:
    """List added or modified staged paths, in the order git reports them."""
    base = diff_base(repo_root)
    logger.debug("listing staged files against %s", base)
    out = run_git(["diff-index", "--cached", "--name-status", "-z", base], repo_root=repo_root).stdout

    # -z output alternates status and path fields; renames and copies carry two paths.
    fields = iter(out.split("\0"))
    staged: list[str] = []
    for status in fields:
        if not status:
            continue
        path = next(fields, "")
        if status[0] in "RC":
            path = next(fields, "")
        if status in _STAGED_STATUSES and path:
            staged.append(PurePosixPath(path).as_posix())
    return staged


def staged_diff_matching(file_pattern: str, repo_root: Path) -> Iterator[str]:
    """Yield staged (non-deleted) file names matching ``file_pattern``.

    The git call happens eagerly so a broken toolchain surfaces before the
    caller starts consuming the sequence.
    """
    out = run_git(
        ["diff", "--cached", "--name-only", "-z", "--no-renames", "--diff-filter=d"],
        repo_root=repo_root,
    ).stdout
    compiled = re.compile(file_pattern)
    names = [name for name in out.split("\0") if name and compiled.search(name)]
    return iter(names)


def read_staged_lines(path: str, repo_root: Path) -> list[str]:
    """Return the staged blob content of ``path`` split into lines."""
    result = run_git(["show", f":{path}"], repo_root=repo_root)
    return result.stdout.splitlines()
