"""Loggers: front ends deciding when a log call reaches the dispatch tree.

    SyncLogger        dispatches on the calling thread
    AsyncLoopLogger   queues calls, a worker thread dispatches them as they come
    AsyncTimerLogger  queues calls, a worker thread dispatches them every interval

All three capture the call site on the calling thread and never raise into
it: delivery failures and bad %-formats go to the logfan diagnostics logger.
"""

from __future__ import annotations

import queue
import threading
from typing import Any

from logfan.capabilities import DispatcherNode
from logfan.levels import LogContext, LogLevel
from logfan.logging import get_logger

_STOP = object()


class _CommonLogger:
    """Level methods, level gate, call-site capture and message rendering."""

    def __init__(self, root: DispatcherNode, min_level: LogLevel = LogLevel.TRACE) -> None:
        self._root = root
        self._min_level = LogLevel(min_level)
        self._closed = False

    @property
    def root(self) -> DispatcherNode:
        return self._root

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    @property
    def closed(self) -> bool:
        return self._closed

    def trace(self, fmt: str, *params: Any) -> None:
        self._log(LogLevel.TRACE, fmt, params)

    def debug(self, fmt: str, *params: Any) -> None:
        self._log(LogLevel.DEBUG, fmt, params)

    def info(self, fmt: str, *params: Any) -> None:
        self._log(LogLevel.INFO, fmt, params)

    def warn(self, fmt: str, *params: Any) -> None:
        self._log(LogLevel.WARN, fmt, params)

    def error(self, fmt: str, *params: Any) -> None:
        self._log(LogLevel.ERROR, fmt, params)

    def critical(self, fmt: str, *params: Any) -> None:
        self._log(LogLevel.CRITICAL, fmt, params)

    def _log(self, level: LogLevel, fmt: str, params: tuple) -> None:
        if self._closed or level < self._min_level or level >= LogLevel.OFF:
            return
        # _log <- trace/debug/... <- user code
        context = LogContext.capture(skip=2)
        self._process(_render(fmt, params), level, context)

    def _process(self, message: str, level: LogLevel, context: LogContext) -> None:
        raise NotImplementedError

    def _deliver(self, message: str, level: LogLevel, context: LogContext) -> None:
        self._root.dispatch(message, level, context, _report_internal_error)

    def __enter__(self) -> Any:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def flush(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class SyncLogger(_CommonLogger):
    """Synchronous front end for a root dispatcher.

    Every call at or above ``min_level`` is dispatched straight into the
    tree before the log call returns.
    """

    def _process(self, message: str, level: LogLevel, context: LogContext) -> None:
        self._deliver(message, level, context)

    def flush(self) -> None:
        if not self._closed:
            self._root.flush()

    def close(self) -> None:
        """Close the whole tree. Later calls are no-ops."""
        if self._closed:
            return
        self._closed = True
        self._root.close()


class AsyncLoopLogger(_CommonLogger):
    """Queues log calls; one worker thread dispatches them in call order.

    The tree is only touched from the worker thread until close() has
    joined it. ``max_queue`` bounds the backlog (0 means unbounded); when
    full, the log call blocks.
    """

    def __init__(
        self,
        root: DispatcherNode,
        min_level: LogLevel = LogLevel.TRACE,
        max_queue: int = 0,
    ) -> None:
        super().__init__(root, min_level)
        self._queue: queue.Queue = queue.Queue(maxsize=max_queue)
        self._lock = threading.Lock()
        self._worker = threading.Thread(
            target=self._run, name="logfan-async-loop", daemon=True
        )
        self._worker.start()

    def _process(self, message: str, level: LogLevel, context: LogContext) -> None:
        self._queue.put((message, level, context))

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                if callable(item):
                    item()
                else:
                    self._deliver(*item)
            except Exception as exc:
                _report_worker_error(exc)
            finally:
                self._queue.task_done()

    def flush(self) -> None:
        """Wait for every queued call to be dispatched, then flush the tree."""
        with self._lock:
            if self._closed:
                return
            self._queue.put(self._root.flush)
        self._queue.join()

    def close(self) -> None:
        """Drain the queue, stop the worker, then close the tree."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._worker.join()
        self._root.close()


class AsyncTimerLogger(_CommonLogger):
    """Buffers log calls; a worker thread dispatches the backlog every ``interval`` seconds."""

    def __init__(
        self,
        root: DispatcherNode,
        interval: float = 0.1,
        min_level: LogLevel = LogLevel.TRACE,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        super().__init__(root, min_level)
        self._interval = interval
        self._pending: list[tuple[str, LogLevel, LogContext]] = []
        self._lock = threading.Lock()
        # Serializes tree access between the worker and flush()
        self._tree_lock = threading.Lock()
        self._stop = threading.Event()
        self._worker = threading.Thread(
            target=self._run, name="logfan-async-timer", daemon=True
        )
        self._worker.start()

    @property
    def interval(self) -> float:
        return self._interval

    def _process(self, message: str, level: LogLevel, context: LogContext) -> None:
        with self._lock:
            self._pending.append((message, level, context))

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self._drain()
        self._drain()

    def _drain(self) -> None:
        # Taking the batch under the tree lock keeps batches in call order
        with self._tree_lock:
            with self._lock:
                batch, self._pending = self._pending, []
            for item in batch:
                try:
                    self._deliver(*item)
                except Exception as exc:
                    _report_worker_error(exc)

    def flush(self) -> None:
        """Dispatch the backlog now, then flush the tree."""
        if self._closed:
            return
        self._drain()
        with self._tree_lock:
            self._root.flush()

    def close(self) -> None:
        """Stop the worker after a final drain, then close the tree."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._stop.set()
        self._worker.join()
        self._root.close()


def _render(fmt: str, params: tuple) -> str:
    if not params:
        return fmt
    try:
        return fmt % params
    except (TypeError, ValueError) as exc:
        get_logger("logfan.logger").warning("format.failed", template=fmt, error=repr(exc))
        return f"{fmt} {params!r}"


def _report_internal_error(err: Exception) -> None:
    get_logger("logfan.logger").warning("delivery.failed", error=str(err))


def _report_worker_error(exc: Exception) -> None:
    get_logger("logfan.logger").error("worker.dispatch_failed", error=repr(exc))
