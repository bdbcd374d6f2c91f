"""logfan's own diagnostics: failed deliveries, failed flushes, bad formats.

Loggers come from structlog wrapped around stdlib loggers under the
"logfan" namespace, so nothing here touches the global structlog config of
the host application. Records leave as plain stdlib records
(``msg`` = event name, keys in ``extra``); pytest's caplog or any handler
the host attaches sees them as-is.

setup_logging(config) attaches one handler to the "logfan" logger that
renders those records through structlog's ProcessorFormatter:

    LOGFAN_LOG_DESTINATION=stderr (default) | jsonl
    LOGFAN_LOG_FORMAT=json (default) | console
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from logfan.config import LogFanConfig

ROOT_LOGGER_NAME = "logfan"

_DESTINATIONS = ("stderr", "jsonl")

_handler: logging.Handler | None = None


def get_logger(name: str = ROOT_LOGGER_NAME, **kwargs: Any) -> Any:
    """Structured logger: ``get_logger(__name__).warning("event", key=value)``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        **kwargs,
    )


def setup_logging(config: LogFanConfig) -> None:
    """Route the "logfan" logger to the configured destination and renderer."""
    global _handler

    if config.log_destination not in _DESTINATIONS:
        raise ValueError(
            f"Unknown log destination: {config.log_destination!r}. "
            f"Available: {list(_DESTINATIONS)}."
        )

    shutdown_logging()

    if config.log_destination == "jsonl":
        path = Path(config.jsonl_path or "logfan.jsonl")
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(str(path), mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    if config.log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.ExtraAdder(),
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    pkg_logger = logging.getLogger(ROOT_LOGGER_NAME)
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(getattr(logging, config.log_level.upper(), logging.WARNING))
    _handler = handler


def shutdown_logging() -> None:
    """Detach and close the handler installed by setup_logging()."""
    global _handler

    if _handler is not None:
        logging.getLogger(ROOT_LOGGER_NAME).removeHandler(_handler)
        _handler.close()
        _handler = None
