"""Diagnostics configuration, env-var driven.

Covers logfan's own logging (dropped deliveries, flush failures), not the
events routed through a dispatch tree.

    Destination: LOGFAN_LOG_DESTINATION=stderr (default) | jsonl
    Renderer:    LOGFAN_LOG_FORMAT=json (default) | console
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class LogFanConfig:
    """Diagnostics configuration, env-var driven."""

    log_destination: str = field(
        default_factory=lambda: os.environ.get("LOGFAN_LOG_DESTINATION", "stderr")
    )  # "stderr" | "jsonl"

    log_level: str = field(
        default_factory=lambda: os.environ.get("LOGFAN_LOG_LEVEL", "WARNING")
    )

    log_format: str = field(
        default_factory=lambda: os.environ.get("LOGFAN_LOG_FORMAT", "json")
    )  # "json" | "console"

    # JSONL file destination
    jsonl_path: str | None = field(
        default_factory=lambda: os.environ.get("LOGFAN_LOG_PATH")
    )
