"""Code-style checks: php-cs-fixer dry run and phpcs standard conformance."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from stagegate.checks.types import CheckResult
from stagegate.classify import PHP_FILE, SOURCE_PHP_FILE, FilePatternRule, select
from stagegate.exec import ExecResult
from stagegate.tools import StyleChecker, StyleFixer


def _run_per_file(
    files: list[str],
    invoke: Callable[[str], ExecResult],
    empty_detail: str,
) -> CheckResult:
    diagnostics: list[str] = []
    for path in files:
        result = invoke(path)
        if result.ok:
            continue
        detail = result.output.rstrip() or f"{empty_detail} (exit {result.returncode})"
        diagnostics.append(f"{path}:")
        diagnostics.extend(f"  {line}" for line in detail.splitlines())

    if diagnostics:
        return CheckResult.failed(diagnostics)
    return CheckResult.ok(f"{len(files)} file(s) checked")


def check_style_fixer(staged: Sequence[str], fixer: StyleFixer) -> CheckResult:
    """Fail when the fixer would change any staged PHP file."""
    files = select(list(staged), PHP_FILE)
    if not files:
        return CheckResult.skip()
    return _run_per_file(files, fixer.check, "style fixer reported changes")


def check_style_standard(
    staged: Sequence[str],
    checker: StyleChecker,
    rule: FilePatternRule = SOURCE_PHP_FILE,
) -> CheckResult:
    """Fail when the style checker rejects any staged source-directory PHP file."""
    files = select(list(staged), rule)
    if not files:
        return CheckResult.skip()
    return _run_per_file(files, checker.check, "style checker rejected file")
