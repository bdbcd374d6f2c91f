"""FilterDispatcher: a dispatcher that only lets some levels through."""

from __future__ import annotations

from typing import Iterable

from logfan.capabilities import ErrorCallback
from logfan.dispatcher import Dispatcher
from logfan.errors import ConfigError
from logfan.formatter import Formatter
from logfan.levels import LogContext, LogLevel


class FilterDispatcher(Dispatcher):
    """Dispatcher whose subtree only sees events at the allowed levels.

    Flush and close are not filtered.
    """

    def __init__(
        self,
        formatter: Formatter,
        receivers: Iterable[object],
        allowed_levels: Iterable[LogLevel],
    ) -> None:
        super().__init__(formatter, receivers)
        self._allowed = frozenset(LogLevel(level) for level in allowed_levels)
        if not self._allowed:
            raise ConfigError("FilterDispatcher needs at least one allowed level")

    @property
    def allowed_levels(self) -> frozenset[LogLevel]:
        return self._allowed

    def dispatch(
        self,
        message: str,
        level: LogLevel,
        context: LogContext | None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._check_open("dispatch")
        if level not in self._allowed:
            return
        super().dispatch(message, level, context, on_error)

    def _header(self) -> str:
        levels = ", ".join(str(level) for level in sorted(self._allowed))
        return f"Filter [{levels}] {super()._header()}"
