"""logfan CLI -- typer-based command interface.

Commands:
    logfan describe <config>            Print the dispatch tree a config builds
    logfan emit <config> <message>      Send one message through the tree
"""

from __future__ import annotations

from pathlib import Path

import typer

from logfan.builder import build_from_file
from logfan.cli._errors import handle_error, reports_errors
from logfan.config import LogFanConfig
from logfan.errors import DeliveryError
from logfan.levels import LogContext, LogLevel
from logfan.logging import setup_logging

app = typer.Typer(
    name="logfan",
    help="Build log-dispatch trees from YAML and push messages through them.",
    no_args_is_help=True,
)


@app.callback()
def _main() -> None:
    """Configure diagnostics logging from LOGFAN_* env vars."""
    setup_logging(LogFanConfig())


@app.command()
@reports_errors
def describe(
    config: Path = typer.Argument(..., help="YAML tree configuration."),
) -> None:
    """Print the dispatcher tree built from CONFIG."""
    root = build_from_file(config)
    try:
        typer.echo(root.describe())
    finally:
        root.close()


@app.command()
@reports_errors
def emit(
    config: Path = typer.Argument(..., help="YAML tree configuration."),
    message: str = typer.Argument(..., help="Message to dispatch."),
    level: str = typer.Option("info", "--level", "-l", help="Log level of the message."),
) -> None:
    """Dispatch MESSAGE through the tree built from CONFIG, then close it."""
    try:
        log_level = LogLevel.parse(level)
    except ValueError as err:
        handle_error(str(err))

    root = build_from_file(config)
    failures: list[DeliveryError] = []
    try:
        root.dispatch(message, log_level, LogContext(func="emit"), failures.append)
    finally:
        root.close()

    if failures:
        for failure in failures:
            typer.echo(f"Error: {failure}", err=True)
        raise typer.Exit(1)


def main() -> None:
    """Entry point for the logfan CLI."""
    app()
