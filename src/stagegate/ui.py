from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.text import Text

from stagegate.checks.types import CheckResult, DebugMatch

console = Console()
err_console = Console(stderr=True)

MATCH_STYLE = "bold white on red"


def render_match(match: DebugMatch, *, color: bool = True) -> Text:
    """Render ``path:line: text`` with the snippet highlighted."""
    prefix = Text(f"{match.path}:{match.line_number}: ", style="cyan" if color else "")
    line = Text(match.line)
    start, end = match.span
    if color and end > start:
        line.stylize(MATCH_STYLE, start, end)
    return prefix + line


@dataclass
class ConsoleReporter:
    """Progress and diagnostics for a pipeline run."""

    out: Console = field(default_factory=lambda: console)
    color: bool = True

    def _print(self, text: Text | str, style: str = "") -> None:
        if isinstance(text, str):
            text = Text(text, style=style if self.color else "")
        self.out.print(text, highlight=False, markup=False, soft_wrap=True)

    def staged(self, files: list[str]) -> None:
        self._print(f"{len(files)} staged file(s)", style="dim")

    def start(self, title: str) -> None:
        self._print(f"{title}...", style="bold bright_cyan")

    def finish(self, title: str, result: CheckResult) -> None:
        if result.passed:
            suffix = " (skipped)" if result.skipped else ""
            self._print(f"✓ {title}{suffix}", style="green")
            return

        self._print(f"✗ {title}", style="bold red")
        if result.matches:
            for match in result.matches:
                self.out.print(render_match(match, color=self.color), highlight=False, soft_wrap=True)
            self._print(result.diagnostics[-1], style="red")
            return
        for line in result.diagnostics:
            self._print(line)

    def success(self, message: str) -> None:
        self._print(message, style="bold green")

    def failure(self, message: str) -> None:
        self._print(message, style="bold bright_white on red")
