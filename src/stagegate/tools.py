"""Narrow adapters around the external PHP toolchain.

Each adapter owns one tool's argv layout and returns the raw ``ExecResult``;
interpreting the outcome is left to the check that uses it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from stagegate.config import GateConfig
from stagegate.exec import ExecResult, run_command


@dataclass(frozen=True)
class SyntaxChecker:
    """``php -l <file>``."""

    argv: tuple[str, ...]
    repo_root: Path

    def check(self, path: str) -> ExecResult:
        return run_command([*self.argv, "-l", path], cwd=self.repo_root)


@dataclass(frozen=True)
class StyleFixer:
    """php-cs-fixer in dry-run mode; exits non-zero when a fix would apply."""

    argv: tuple[str, ...]
    standard: str
    repo_root: Path

    def check(self, path: str) -> ExecResult:
        return run_command(
            [*self.argv, "fix", "--dry-run", "--verbose", "--diff", f"--rules=@{self.standard}", path],
            cwd=self.repo_root,
        )


@dataclass(frozen=True)
class StyleChecker:
    """phpcs against a fixed standard and encoding."""

    argv: tuple[str, ...]
    standard: str
    encoding: str
    repo_root: Path

    def check(self, path: str) -> ExecResult:
        return run_command(
            [*self.argv, f"--standard={self.standard}", f"--encoding={self.encoding}", "-n", "-p", path],
            cwd=self.repo_root,
        )


@dataclass(frozen=True)
class TestSuite:
    """Whole-project unit test run with no arguments."""

    __test__ = False

    argv: tuple[str, ...]
    repo_root: Path

    def run(self) -> ExecResult:
        return run_command(list(self.argv), cwd=self.repo_root)


@dataclass(frozen=True)
class Toolchain:
    syntax: SyntaxChecker
    fixer: StyleFixer
    style: StyleChecker
    tests: TestSuite

    @classmethod
    def from_config(cls, config: GateConfig, repo_root: Path) -> Toolchain:
        return cls(
            syntax=SyntaxChecker(argv=config.tools.php, repo_root=repo_root),
            fixer=StyleFixer(argv=config.tools.php_cs_fixer, standard=config.style.standard, repo_root=repo_root),
            style=StyleChecker(
                argv=config.tools.phpcs,
                standard=config.style.standard,
                encoding=config.style.encoding,
                repo_root=repo_root,
            ),
            tests=TestSuite(argv=config.tools.phpunit, repo_root=repo_root),
        )
