"""Check result types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DebugMatch:
    """One forbidden snippet found in a staged file."""

    group: str
    snippet: str
    path: str
    line_number: int
    line: str
    span: tuple[int, int] = (0, 0)

    def render(self) -> str:
        return f"{self.path}:{self.line_number}: {self.line}"


@dataclass(frozen=True)
class CheckResult:
    """Verdict of a single check plus its diagnostic lines."""

    passed: bool
    diagnostics: tuple[str, ...] = ()
    skipped: bool = False
    matches: tuple[DebugMatch, ...] = ()

    @classmethod
    def ok(cls, *diagnostics: str) -> CheckResult:
        return cls(passed=True, diagnostics=tuple(diagnostics))

    @classmethod
    def skip(cls, reason: str = "no matching staged files") -> CheckResult:
        return cls(passed=True, diagnostics=(reason,), skipped=True)

    @classmethod
    def failed(cls, diagnostics: list[str]) -> CheckResult:
        if not diagnostics:
            raise ValueError("a failing check must carry at least one diagnostic line")
        return cls(passed=False, diagnostics=tuple(diagnostics))
