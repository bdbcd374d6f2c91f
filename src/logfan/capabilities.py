"""Capability protocols for sinks and tree nodes.

A Sink only has to accept text. Flushing and closing are independent,
optional capabilities checked at flush/close time; lacking one is never an
error.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

from logfan.levels import LogContext, LogLevel

ErrorCallback = Callable[[Exception], None]


@runtime_checkable
class Sink(Protocol):
    """A raw writable destination for formatted text."""

    def write(self, text: str) -> Any: ...


@runtime_checkable
class Flushable(Protocol):
    def flush(self) -> None: ...


@runtime_checkable
class Closable(Protocol):
    def close(self) -> None: ...


@runtime_checkable
class DispatcherNode(Protocol):
    """Contract shared by every branch of a dispatch tree.

    dispatch() never raises for a failing destination; failures go to
    on_error. flush() never raises. close() raises the first teardown
    failure it meets.
    """

    def dispatch(
        self,
        message: str,
        level: LogLevel,
        context: LogContext | None,
        on_error: ErrorCallback | None = None,
    ) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...

    def describe(self, indent: int = 0) -> str: ...
