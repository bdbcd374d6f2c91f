"""Exception hierarchy for logfan.

Construction errors are raised synchronously and leave no usable tree.
Delivery errors never propagate out of dispatch(); they are wrapped in
DeliveryError and handed to the caller's on_error callback.
"""

from __future__ import annotations

from typing import Any


class LogFanError(Exception):
    """Base class for every error raised by logfan."""


class ConstructionError(LogFanError, ValueError):
    """A dispatcher could not be built from the given arguments."""


class NilFormatterError(ConstructionError):
    def __init__(self) -> None:
        super().__init__("Formatter can not be None")


class EmptyReceiversError(ConstructionError):
    def __init__(self) -> None:
        super().__init__("Receivers can not be None or empty")


class UnsupportedReceiverTypeError(ConstructionError):
    """Receiver is neither a FormattedWriter, a Sink nor a dispatcher node."""

    def __init__(self, receiver: Any) -> None:
        self.receiver = receiver
        super().__init__(
            f"Unsupported receiver type {type(receiver).__name__!r}: "
            "expected a FormattedWriter, a Sink or a dispatcher node"
        )


class DispatcherClosedError(LogFanError, RuntimeError):
    """Operation attempted on a dispatcher that has already been closed."""


class DeliveryError(LogFanError):
    """A single writer failed to write a formatted event.

    The original exception is kept as ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, writer: Any, cause: BaseException) -> None:
        self.writer = writer
        self.cause = cause
        super().__init__(f"Delivery to {writer} failed: {cause}")
        self.__cause__ = cause


class FormatterError(LogFanError, ValueError):
    """Template refers to an unknown field or is malformed."""


class ConfigError(LogFanError, ValueError):
    """Tree configuration is invalid."""
