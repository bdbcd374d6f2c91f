"""Shared fixtures: recording sinks and a fixed-clock formatter."""

from __future__ import annotations

from datetime import datetime

import pytest

from logfan.formatter import TemplateFormatter
from logfan.logging import shutdown_logging


class RecordingSink:
    """Sink with flush and close that records every call into a shared log."""

    def __init__(self, name: str, calls: list[str] | None = None) -> None:
        self.name = name
        self.calls = calls if calls is not None else []
        self.written: list[str] = []
        self.closed = False

    def write(self, text: str) -> None:
        self.calls.append(f"{self.name}.write")
        self.written.append(text)

    def flush(self) -> None:
        self.calls.append(f"{self.name}.flush")

    def close(self) -> None:
        self.calls.append(f"{self.name}.close")
        self.closed = True


class FailingSink:
    """Sink whose write, flush and close all raise."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or OSError("disk full")
        self.attempts = 0

    def write(self, text: str) -> None:
        self.attempts += 1
        raise self.error

    def flush(self) -> None:
        raise OSError("flush failed")

    def close(self) -> None:
        raise OSError("close failed")


@pytest.fixture()
def formatter():
    """Deterministic formatter: '[Inf] hello\\n'."""
    return TemplateFormatter("[{lev}] {msg}{n}", clock=lambda: datetime(2026, 1, 1, 12, 0, 0))


@pytest.fixture()
def calls():
    return []


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop any diagnostics handler a test installed."""
    yield
    shutdown_logging()
