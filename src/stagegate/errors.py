"""Error taxonomy for stagegate runs.

Fatal conditions (tool launch failures, git failures, a missing lockfile)
abort the run as soon as they are raised. Policy violations are collected by
the pipeline and only escalated through ``GateFailedError`` after every
non-fatal check has finished.
"""

from __future__ import annotations

from collections.abc import Sequence


class GateError(RuntimeError):
    """Base class for every error that terminates a gate run."""


class ConfigError(GateError):
    """Raised when a configuration file is malformed."""


class ToolLaunchError(GateError):
    """Raised when an external binary cannot be started at all."""

    def __init__(self, argv: Sequence[str], reason: str):
        self.argv = tuple(argv)
        self.reason = reason
        super().__init__(f"unable to launch {argv[0] if argv else '<empty>'}: {reason}")


class VcsError(GateError):
    """Raised when a git invocation itself fails."""

    def __init__(self, args: Sequence[str], detail: str):
        self.git_args = tuple(args)
        self.detail = detail
        super().__init__(f"git {' '.join(args)} failed: {detail}")


class LockfileMissingError(GateError):
    """Raised when composer.json is staged without composer.lock."""


class GateFailedError(GateError):
    """Raised after all checks ran and at least one reported a violation."""

    def __init__(self, failed: Sequence[str]):
        self.failed = tuple(failed)
        super().__init__(f"There are errors in: {', '.join(self.failed)}")
