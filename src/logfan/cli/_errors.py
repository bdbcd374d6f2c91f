"""CLI error handling."""

from __future__ import annotations

import functools
from typing import Any, Callable

import typer

from logfan.errors import LogFanError


def handle_error(msg: str) -> None:
    """Print an error message and exit."""
    typer.echo(f"Error: {msg}", err=True)
    raise typer.Exit(1)


def reports_errors(f: Callable) -> Callable:
    """Decorator turning LogFanError and OSError into ``Error: ...`` and exit code 1."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except (LogFanError, OSError) as err:
            handle_error(str(err))

    return wrapper
