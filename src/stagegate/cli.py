"""stagegate CLI - gate the staged index before a commit."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
from rich.logging import RichHandler
from rich.text import Text

from stagegate import __version__
from stagegate.config import load_gate_config
from stagegate.errors import ConfigError, GateError
from stagegate.git.staging import resolve_repo_root
from stagegate.pipeline import SUCCESS_MESSAGE, run_pipeline
from stagegate.ui import ConsoleReporter, console, err_console

app = typer.Typer(
    name="stagegate",
    help="Pre-commit quality gate for staged changes.",
    add_completion=False,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"stagegate {__version__}")
        raise typer.Exit()


@app.command()
def gate(
    repo: Path | None = typer.Option(
        None,
        "--repo",
        help="Repository path (defaults to the git toplevel of the current directory).",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Configuration file (.toml or .yaml). Defaults to .stagegate/config.{toml,yaml}.",
    ),
    log_level: str = typer.Option(
        os.getenv("STAGEGATE_LOG_LEVEL", "WARNING"),
        "--log-level",
        help="Internal log level.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Run every check against the staged index; exit non-zero on any failure."""
    _configure_logging(log_level)

    try:
        repo_root = resolve_repo_root(repo)
        config = load_gate_config(repo_root, config_path)
    except ConfigError as exc:
        err_console.print(Text(str(exc), style="bold red"), soft_wrap=True)
        raise typer.Exit(2) from exc
    except GateError as exc:
        err_console.print(Text(str(exc), style="bold red"), soft_wrap=True)
        raise typer.Exit(1) from exc

    reporter = ConsoleReporter(out=console, color=config.color)
    try:
        report = run_pipeline(repo_root, config, reporter=reporter)
        report.raise_for_failure()
    except GateError as exc:
        reporter.failure(str(exc))
        raise typer.Exit(1) from exc

    reporter.success(SUCCESS_MESSAGE)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
