"""Gate pipeline - runs the staged-file checks in a fixed order.

Order:
1. Composer lockfile consistency (fatal on failure)
2. PHP syntax
3. php-cs-fixer dry run
4. phpcs standard conformance (source directory only)
5. Forbidden debug code
6. Unit test suite

Policy violations are collected and reported after every check has run.
Fatal errors (``ToolLaunchError``, ``VcsError``, ``LockfileMissingError``)
propagate immediately and stop the run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from stagegate.checks import (
    CheckResult,
    check_composer_lock,
    check_style_fixer,
    check_style_standard,
    check_syntax,
    check_unit_tests,
    scan_debug_code,
)
from stagegate.classify import source_php_rule
from stagegate.config import GateConfig
from stagegate.errors import GateFailedError
from stagegate.git.staging import list_staged_files
from stagegate.tools import Toolchain
from stagegate.ui import ConsoleReporter

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Pipeline passed: ready to commit."


@dataclass(frozen=True)
class GateCheck:
    """One pipeline stage."""

    name: str
    title: str
    run: Callable[[Sequence[str]], CheckResult]


@dataclass(frozen=True)
class CheckOutcome:
    name: str
    title: str
    result: CheckResult


@dataclass
class PipelineReport:
    """Outcome of a full pipeline run."""

    staged_files: tuple[str, ...] = ()
    outcomes: list[CheckOutcome] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(o.result.passed for o in self.outcomes)

    @property
    def failed_checks(self) -> list[str]:
        return [o.name for o in self.outcomes if not o.result.passed]

    def raise_for_failure(self) -> None:
        """Raise ``GateFailedError`` naming every failed check."""
        failed = self.failed_checks
        if failed:
            raise GateFailedError(failed)


def build_checks(config: GateConfig, repo_root: Path, toolchain: Toolchain | None = None) -> list[GateCheck]:
    """Bind each check to its tools and settings, in execution order."""
    tools = toolchain or Toolchain.from_config(config, repo_root)
    source_rule = source_php_rule(config.style.source_dir)

    return [
        GateCheck("composer", "Checking composer.lock", check_composer_lock),
        GateCheck("syntax", "Checking PHP syntax", lambda staged: check_syntax(staged, tools.syntax)),
        GateCheck(
            "style-fixer",
            f"Checking code style with php-cs-fixer ({config.style.standard})",
            lambda staged: check_style_fixer(staged, tools.fixer),
        ),
        GateCheck(
            "style-standard",
            f"Checking code style with phpcs ({config.style.standard})",
            lambda staged: check_style_standard(staged, tools.style, source_rule),
        ),
        GateCheck(
            "debug-code",
            "Checking for forbidden debug code",
            lambda staged: scan_debug_code(
                config.debug_code,
                repo_root,
                collect_all=config.collect_all_debug_matches,
            ),
        ),
        GateCheck("unit-tests", "Running unit tests", lambda staged: check_unit_tests(tools.tests)),
    ]


def run_pipeline(
    repo_root: Path,
    config: GateConfig | None = None,
    *,
    checks: list[GateCheck] | None = None,
    reporter: ConsoleReporter | None = None,
) -> PipelineReport:
    """Run every check against the staged index and collect the results.

    Args:
        repo_root: Repository root; every tool runs from here
        config: Gate configuration (defaults when omitted)
        checks: Explicit check list, mainly for tests
        reporter: Progress sink (console reporter when omitted)

    Returns:
        PipelineReport; call ``raise_for_failure()`` to escalate violations

    Raises:
        GateError: On any fatal condition, before later checks run
    """
    config = config or GateConfig()
    reporter = reporter or ConsoleReporter(color=config.color)
    checks = checks if checks is not None else build_checks(config, repo_root)

    staged = list_staged_files(repo_root)
    logger.debug("staged files: %s", staged)
    reporter.staged(staged)

    report = PipelineReport(staged_files=tuple(staged))
    for check in checks:
        reporter.start(check.title)
        result = check.run(report.staged_files)
        reporter.finish(check.title, result)
        report.outcomes.append(CheckOutcome(name=check.name, title=check.title, result=result))

    return report
