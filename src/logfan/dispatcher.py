"""Dispatcher: a node of the log-dispatch tree.

A dispatcher owns an ordered list of FormattedWriters (leaves) and an
ordered list of child nodes (branches). Events fan out writers-first,
lifecycle operations (flush, close) run children-first.

    root = Dispatcher(formatter, [ConsoleSink(), FileSink("app.log"), errors_only])
    root.dispatch("started", LogLevel.INFO, LogContext.capture(), on_error=report)
    root.close()

Building a tree without cycles is the caller's job; a node never checks
whether it appears in its own subtree.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from logfan.capabilities import DispatcherNode, ErrorCallback, Sink
from logfan.errors import (
    DeliveryError,
    DispatcherClosedError,
    EmptyReceiversError,
    NilFormatterError,
    UnsupportedReceiverTypeError,
)
from logfan.formatter import Formatter
from logfan.levels import LogContext, LogLevel
from logfan.logging import get_logger
from logfan.writer import FormattedWriter

_INDENT = "    "


class Dispatcher:
    """Fans events out to writers and child dispatchers.

    Receivers are classified in order: a FormattedWriter is kept as-is, a
    raw Sink is wrapped (and owned) with the shared formatter, a
    DispatcherNode becomes a child. Anything else is rejected.
    """

    def __init__(self, formatter: Formatter, receivers: Iterable[object]) -> None:
        if formatter is None:
            raise NilFormatterError()
        receivers = list(receivers) if receivers is not None else []
        if not receivers:
            raise EmptyReceiversError()

        self._formatter = formatter
        writers: list[FormattedWriter] = []
        children: list[DispatcherNode] = []
        for receiver in receivers:
            if isinstance(receiver, FormattedWriter):
                writers.append(receiver)
            elif isinstance(receiver, Sink):
                writers.append(FormattedWriter(receiver, formatter, owns_sink=True))
            elif isinstance(receiver, DispatcherNode):
                children.append(receiver)
            else:
                raise UnsupportedReceiverTypeError(receiver)

        self._writers: tuple[FormattedWriter, ...] = tuple(writers)
        self._children: tuple[DispatcherNode, ...] = tuple(children)
        self._closed = False

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @property
    def writers(self) -> Sequence[FormattedWriter]:
        return self._writers

    @property
    def children(self) -> Sequence[DispatcherNode]:
        return self._children

    @property
    def closed(self) -> bool:
        return self._closed

    def dispatch(
        self,
        message: str,
        level: LogLevel,
        context: LogContext | None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Deliver one event to every writer, then to every child.

        A failing writer is reported through ``on_error`` (or the logfan
        logger when no callback is given) and delivery carries on.
        """
        self._check_open("dispatch")
        report = on_error or _log_delivery_error

        for writer in self._writers:
            try:
                writer.write(message, level, context)
            except Exception as exc:
                report(DeliveryError(writer, exc))

        for child in self._children:
            child.dispatch(message, level, context, report)

    def flush(self) -> None:
        """Flush children, then writers. Best effort, never raises."""
        self._check_open("flush")
        for child in self._children:
            child.flush()
        for writer in self._writers:
            writer.flush()

    def close(self) -> None:
        """Tear down the subtree: children first (flush, close), then writers.

        Stops at the first failure and re-raises it; whatever comes after
        in this node is left unclosed. The node is closed either way.
        """
        self._check_open("close")
        self._closed = True
        for child in self._children:
            child.flush()
            child.close()
        for writer in self._writers:
            writer.close()

    def describe(self, indent: int = 0) -> str:
        """Indented dump of the subtree, for debugging only."""
        pad = _INDENT * indent
        lines = [f"{pad}{self._header()}"]

        if self._children:
            lines.append(f"{pad}{_INDENT}->Dispatchers:")
            for child in self._children:
                lines.append(f"{pad}{_INDENT * 2}->{child.describe(indent + 2).lstrip()}")
        else:
            lines.append(f"{pad}{_INDENT}->Dispatchers: none")

        if self._writers:
            lines.append(f"{pad}{_INDENT}->Writers:")
            for writer in self._writers:
                lines.append(f"{pad}{_INDENT * 2}->{writer}")
        else:
            lines.append(f"{pad}{_INDENT}->Writers: none")

        return "\n".join(lines)

    def _header(self) -> str:
        return f"Formatter: {self._formatter}"

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise DispatcherClosedError(f"Cannot {operation}: dispatcher is closed")

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(writers={len(self._writers)}, "
            f"children={len(self._children)}, closed={self._closed})"
        )


def _log_delivery_error(err: Exception) -> None:
    get_logger("logfan.dispatcher").warning("delivery.failed", error=str(err))
