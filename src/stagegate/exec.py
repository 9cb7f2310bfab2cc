"""Process runner for external tools."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

from stagegate.errors import ToolLaunchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, in that order."""
        if self.stdout and self.stderr:
            joiner = "" if self.stdout.endswith("\n") else "\n"
            return f"{self.stdout}{joiner}{self.stderr}"
        return self.stdout or self.stderr


def run_command(
    argv: list[str],
    *,
    cwd: Path,
) -> ExecResult:
    """Run command and return structured result.

    A non-zero exit is a normal outcome and never raises.
    Failing to start the process at all raises ``ToolLaunchError``.
    """
    logger.debug("exec: %s (cwd=%s)", " ".join(argv), cwd)
    try:
        completed = subprocess.run(
            argv, cwd=cwd, capture_output=True, text=True, errors="replace", check=False
        )
    except (FileNotFoundError, PermissionError) as exc:
        raise ToolLaunchError(argv, exc.strerror or str(exc)) from exc
    except OSError as exc:
        raise ToolLaunchError(argv, str(exc)) from exc

    result = ExecResult(
        argv=tuple(argv),
        cwd=cwd.resolve(),
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    logger.debug("exec: %s exited %d", argv[0], result.returncode)
    return result
