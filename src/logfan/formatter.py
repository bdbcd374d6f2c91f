"""Formatters: turn (message, level, context) into the text a sink receives."""

from __future__ import annotations

import string
from datetime import datetime
from typing import Any, Callable, Protocol, runtime_checkable

from logfan.errors import FormatterError
from logfan.levels import LogContext, LogLevel

DEFAULT_TEMPLATE = "{time} [{level}] {msg}{n}"


@runtime_checkable
class Formatter(Protocol):
    """Pure function of an event. Shared read-only across a whole tree."""

    def format(self, message: str, level: LogLevel, context: LogContext | None) -> str: ...


_FIELDS: dict[str, Callable[[str, LogLevel, LogContext, datetime], Any]] = {
    "msg": lambda m, lv, c, t: m,
    "level": lambda m, lv, c, t: str(lv),
    "lev": lambda m, lv, c, t: lv.short,
    "LEVEL": lambda m, lv, c, t: lv.name,
    "func": lambda m, lv, c, t: c.func,
    "file": lambda m, lv, c, t: c.file_name,
    "path": lambda m, lv, c, t: c.short_path,
    "line": lambda m, lv, c, t: c.line,
    "time": lambda m, lv, c, t: t.isoformat(timespec="seconds"),
    "date": lambda m, lv, c, t: t.date().isoformat(),
    "n": lambda m, lv, c, t: "\n",
}

_EMPTY_CONTEXT = LogContext()


class TemplateFormatter:
    """str.format-style template over a fixed set of event fields.

    Fields: msg, level, lev, LEVEL, func, file, path, line, time, date, n.
    Format specs are honoured, e.g. ``{level:<8}``.
    """

    def __init__(
        self,
        template: str = DEFAULT_TEMPLATE,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._template = template
        self._clock = clock
        self._fields = _parse_fields(template)

    @property
    def template(self) -> str:
        return self._template

    def format(self, message: str, level: LogLevel, context: LogContext | None) -> str:
        ctx = context or _EMPTY_CONTEXT
        now = self._clock()
        values = {name: _FIELDS[name](message, level, ctx, now) for name in self._fields}
        return self._template.format(**values)

    def __str__(self) -> str:
        return f"TemplateFormatter({self._template!r})"


def _parse_fields(template: str) -> set[str]:
    try:
        parsed = list(string.Formatter().parse(template))
    except ValueError as err:
        raise FormatterError(f"Malformed template {template!r}: {err}") from err

    names: set[str] = set()
    for _, field_name, format_spec, _ in parsed:
        if field_name is None:
            continue
        if field_name not in _FIELDS:
            raise FormatterError(
                f"Unknown field {{{field_name}}} in template {template!r}. "
                f"Available: {sorted(_FIELDS)}"
            )
        if format_spec and "{" in format_spec:
            raise FormatterError(
                f"Nested field in format spec of {{{field_name}}} in template {template!r}"
            )
        names.add(field_name)

    # Static specs such as {msg:d} only fail when applied
    sample = LogContext(func="f", path="f.py", line=1)
    when = datetime(2000, 1, 1)
    values = {name: _FIELDS[name]("", LogLevel.INFO, sample, when) for name in names}
    try:
        template.format(**values)
    except (ValueError, TypeError, KeyError, IndexError) as err:
        raise FormatterError(f"Invalid template {template!r}: {err}") from err
    return names
