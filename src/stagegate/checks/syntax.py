"""PHP syntax check, one linter invocation per staged file."""

from __future__ import annotations

from collections.abc import Sequence

from stagegate.checks.types import CheckResult
from stagegate.classify import SYNTAX_FILE, select
from stagegate.tools import SyntaxChecker


def check_syntax(staged: Sequence[str], checker: SyntaxChecker) -> CheckResult:
    files = select(list(staged), SYNTAX_FILE)
    if not files:
        return CheckResult.skip()

    diagnostics: list[str] = []
    for path in files:
        result = checker.check(path)
        if result.ok:
            continue
        detail = result.output.strip() or f"exit {result.returncode}"
        diagnostics.append(f"{path}:")
        diagnostics.extend(f"  {line}" for line in detail.splitlines())

    if diagnostics:
        return CheckResult.failed(diagnostics)
    return CheckResult.ok(f"{len(files)} file(s) checked")
