"""logfan: hierarchical log-dispatch trees.

A Dispatcher fans each formatted log event out to its writers (sinks bound
to a formatter) and then to its child dispatchers. Flush and close walk
the same tree children-first.

Public API:
    Dispatcher(formatter, receivers)        tree node
    FilterDispatcher(..., allowed_levels)   node that only passes some levels
    FormattedWriter(sink, formatter)        sink + formatter leaf
    TemplateFormatter(template)             str.format-style formatter
    SyncLogger(root)                        trace/debug/info/... front end
    AsyncLoopLogger, AsyncTimerLogger       queued front ends (worker thread)
    build_dispatcher(mapping)               tree from a YAML-shaped mapping
    build_logger(mapping)                   logger of the configured type over that tree
"""

from logfan.builder import (
    build_dispatcher,
    build_from_file,
    build_logger,
    load_config,
    logger_from_file,
    register_sink,
)
from logfan.capabilities import Closable, DispatcherNode, Flushable, Sink
from logfan.dispatcher import Dispatcher
from logfan.errors import (
    ConfigError,
    ConstructionError,
    DeliveryError,
    DispatcherClosedError,
    EmptyReceiversError,
    FormatterError,
    LogFanError,
    NilFormatterError,
    UnsupportedReceiverTypeError,
)
from logfan.filter import FilterDispatcher
from logfan.formatter import DEFAULT_TEMPLATE, Formatter, TemplateFormatter
from logfan.levels import LogContext, LogLevel
from logfan.logger import AsyncLoopLogger, AsyncTimerLogger, SyncLogger
from logfan.sinks import ConsoleSink, FileSink, MemorySink
from logfan.writer import FormattedWriter

__all__ = [
    # Tree
    "Dispatcher",
    "FilterDispatcher",
    "FormattedWriter",
    "DispatcherNode",
    # Capabilities
    "Sink",
    "Flushable",
    "Closable",
    # Formatting
    "Formatter",
    "TemplateFormatter",
    "DEFAULT_TEMPLATE",
    "LogLevel",
    "LogContext",
    # Sinks
    "ConsoleSink",
    "FileSink",
    "MemorySink",
    # Front end + builder
    "SyncLogger",
    "AsyncLoopLogger",
    "AsyncTimerLogger",
    "build_dispatcher",
    "build_from_file",
    "build_logger",
    "logger_from_file",
    "load_config",
    "register_sink",
    # Errors
    "LogFanError",
    "ConstructionError",
    "NilFormatterError",
    "EmptyReceiversError",
    "UnsupportedReceiverTypeError",
    "DispatcherClosedError",
    "DeliveryError",
    "FormatterError",
    "ConfigError",
]
