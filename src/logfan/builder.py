"""Build a dispatch tree from a mapping (usually loaded from YAML).

    formats:
      short: "[{lev}] {msg}{n}"
    format: short
    outputs:
      - console: {}
      - file: {path: app.log}
      - filter:
          levels: [error, critical]
          outputs:
            - file: {path: errors.log}

For build_logger() the top level also takes

    type: asynctimer     # sync | asyncloop (default) | asynctimer
    interval: 0.5        # asynctimer period, seconds
    min_level: info

``format`` is either a name from ``formats`` or a literal template.
Nested mappings can only describe trees, so no cycle check is needed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import yaml

from logfan.capabilities import Closable, DispatcherNode
from logfan.dispatcher import Dispatcher
from logfan.errors import ConfigError, LogFanError
from logfan.filter import FilterDispatcher
from logfan.formatter import DEFAULT_TEMPLATE, Formatter, TemplateFormatter
from logfan.levels import LogLevel
from logfan.logger import AsyncLoopLogger, AsyncTimerLogger, SyncLogger
from logfan.logging import get_logger
from logfan.sinks import ConsoleSink, FileSink


def _console(options: dict[str, Any]) -> ConsoleSink:
    return ConsoleSink()


def _file(options: dict[str, Any]) -> FileSink:
    path = options.get("path")
    if not path:
        raise ConfigError("file output requires a 'path'")
    return FileSink(path)


_SINKS: dict[str, Callable[[dict[str, Any]], object]] = {
    "console": _console,
    "file": _file,
}


def register_sink(name: str, factory: Callable[[dict[str, Any]], object]) -> None:
    """Register a custom output kind. ``factory`` receives the entry's options."""
    _SINKS[name] = factory


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a YAML tree configuration."""
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except (OSError, yaml.YAMLError) as err:
        raise ConfigError(f"Cannot read config {str(path)!r}: {err}") from err
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {str(path)!r} must be a mapping")
    return raw


def build_dispatcher(config: dict[str, Any]) -> Dispatcher:
    """Build the root dispatcher described by ``config``."""
    formats = config.get("formats") or {}
    if not isinstance(formats, dict):
        raise ConfigError("'formats' must be a mapping of name to template")
    for name, template in formats.items():
        if not isinstance(template, str):
            raise ConfigError(
                f"Template for format {name!r} must be a string, got {type(template).__name__}"
            )
    formatter = _resolve_formatter(config.get("format"), formats, None)
    receivers = _build_receivers(config.get("outputs"), formats, formatter)
    try:
        return Dispatcher(formatter, receivers)
    except Exception:
        _discard(receivers)
        raise


def build_from_file(path: str | Path) -> Dispatcher:
    return build_dispatcher(load_config(path))


_LOGGER_TYPES = ("sync", "asyncloop", "asynctimer")


def build_logger(config: dict[str, Any]) -> SyncLogger | AsyncLoopLogger | AsyncTimerLogger:
    """Build the tree and wrap it in the logger chosen by ``type``.

    ``type`` is sync, asyncloop (default) or asynctimer; ``interval`` is the
    asynctimer period in seconds; ``min_level`` drops calls below it.
    """
    kind = str(config.get("type", "asyncloop")).lower()
    if kind not in _LOGGER_TYPES:
        raise ConfigError(f"Unknown logger type {kind!r}. Available: {list(_LOGGER_TYPES)}")
    try:
        min_level = LogLevel.parse(str(config.get("min_level", "trace")))
    except ValueError as err:
        raise ConfigError(str(err)) from err
    interval = config.get("interval", 0.1)
    if kind == "asynctimer" and (
        isinstance(interval, bool) or not isinstance(interval, (int, float)) or interval <= 0
    ):
        raise ConfigError(f"interval must be a positive number of seconds, got {interval!r}")

    root = build_dispatcher(config)
    if kind == "sync":
        return SyncLogger(root, min_level)
    if kind == "asynctimer":
        return AsyncTimerLogger(root, float(interval), min_level)
    return AsyncLoopLogger(root, min_level)


def logger_from_file(path: str | Path) -> SyncLogger | AsyncLoopLogger | AsyncTimerLogger:
    return build_logger(load_config(path))


def _resolve_formatter(
    spec: Any, formats: dict[str, str], inherited: Formatter | None
) -> Formatter:
    if spec is None:
        return inherited if inherited is not None else TemplateFormatter(DEFAULT_TEMPLATE)
    if not isinstance(spec, str):
        raise ConfigError(f"format must be a string, got {type(spec).__name__}")
    template = formats.get(spec, spec)
    if spec not in formats and "{" not in spec:
        raise ConfigError(f"Unknown format {spec!r}. Available: {sorted(formats)}")
    try:
        return TemplateFormatter(template)
    except LogFanError as err:
        raise ConfigError(str(err)) from err


def _build_receivers(
    outputs: Any, formats: dict[str, str], formatter: Formatter
) -> list[object]:
    if not outputs or not isinstance(outputs, list):
        raise ConfigError("'outputs' must be a non-empty list")

    receivers: list[object] = []
    try:
        for entry in outputs:
            receivers.append(_build_receiver(entry, formats, formatter))
    except Exception:
        _discard(receivers)
        raise
    return receivers


def _build_receiver(entry: Any, formats: dict[str, str], formatter: Formatter) -> object:
    if not isinstance(entry, dict) or len(entry) != 1:
        raise ConfigError(f"Each output must be a single-key mapping, got {entry!r}")
    ((kind, options),) = entry.items()
    options = options or {}
    if not isinstance(options, dict):
        raise ConfigError(f"Options for {kind!r} must be a mapping")
    if kind == "filter":
        return _build_filter(options, formats, formatter)
    factory = _SINKS.get(kind)
    if factory is None:
        raise ConfigError(
            f"Unknown output kind {kind!r}. Available: {sorted([*_SINKS, 'filter'])}"
        )
    return factory(options)


def _discard(receivers: list[object]) -> None:
    """Close whatever a failed build already created."""
    for receiver in receivers:
        if not isinstance(receiver, (DispatcherNode, Closable)):
            continue
        try:
            receiver.close()
        except Exception as exc:
            get_logger("logfan.builder").warning(
                "build.discard_failed", receiver=repr(receiver), error=repr(exc)
            )


def _build_filter(
    options: dict[str, Any], formats: dict[str, str], inherited: Formatter
) -> FilterDispatcher:
    levels = options.get("levels")
    if isinstance(levels, str):
        levels = [part for part in levels.replace(",", " ").split() if part]
    if not levels:
        raise ConfigError("filter requires a non-empty 'levels' list")
    try:
        allowed = [LogLevel.parse(str(level)) for level in levels]
    except ValueError as err:
        raise ConfigError(str(err)) from err
    formatter = _resolve_formatter(options.get("format"), formats, inherited)
    receivers = _build_receivers(options.get("outputs"), formats, formatter)
    try:
        return FilterDispatcher(formatter, receivers, allowed)
    except Exception:
        _discard(receivers)
        raise
