"""FormattedWriter: one sink bound to one formatter."""

from __future__ import annotations

from logfan.capabilities import Closable, Flushable, Sink
from logfan.formatter import Formatter
from logfan.levels import LogContext, LogLevel
from logfan.logging import get_logger


class FormattedWriter:
    """Formats events with a shared formatter and writes them to a sink.

    ``owns_sink`` decides whether close() closes the sink. A non-owned sink
    (stdout, a stream handed in by the caller) is flushed but left open.
    """

    def __init__(self, sink: Sink, formatter: Formatter, owns_sink: bool = True) -> None:
        if sink is None:
            raise ValueError("Sink can not be None")
        if formatter is None:
            raise ValueError("Formatter can not be None")
        self._sink = sink
        self._formatter = formatter
        self._owns_sink = owns_sink

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @property
    def owns_sink(self) -> bool:
        return self._owns_sink

    def write(self, message: str, level: LogLevel, context: LogContext | None) -> None:
        """Format and write one event. Sink errors propagate to the caller."""
        self._sink.write(self._formatter.format(message, level, context))

    def flush(self) -> None:
        """Flush the sink if it can be flushed. Never raises."""
        if not isinstance(self._sink, Flushable):
            return
        try:
            self._sink.flush()
        except Exception as exc:
            get_logger("logfan.writer").warning(
                "sink.flush_failed", writer=str(self), error=repr(exc)
            )

    def close(self) -> None:
        """Flush, then close the sink if owned and closable.

        Close failures propagate.
        """
        self.flush()
        if self._owns_sink and isinstance(self._sink, Closable):
            self._sink.close()

    def __str__(self) -> str:
        return f"FormattedWriter(sink={_sink_name(self._sink)}, formatter={self._formatter})"


def _sink_name(sink: Sink) -> str:
    name = getattr(sink, "name", None)
    if isinstance(name, str):
        return f"{type(sink).__name__}({name!r})"
    return type(sink).__name__
