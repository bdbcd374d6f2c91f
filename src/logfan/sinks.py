"""Ready-made sinks.

Any object with ``write(str)`` is a sink; these cover the common cases and
declare their capabilities by which of flush()/close() they define.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO


class ConsoleSink:
    """Write to a console stream (stdout by default). Never closes it."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved late so redirected/captured stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    @property
    def name(self) -> str:
        return getattr(self.stream, "name", "<console>")

    def write(self, text: str) -> None:
        self.stream.write(text)

    def flush(self) -> None:
        self.stream.flush()


class FileSink:
    """Append to a text file, opened on the first write."""

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding
        self._file: TextIO | None = None
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return str(self._path)

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> None:
        if self._closed:
            raise ValueError(f"FileSink {self.name!r} is closed")
        if self._file is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self._path, "a", encoding=self._encoding)
        self._file.write(text)

    def flush(self) -> None:
        if self._file is not None:
            self._file.flush()

    def close(self) -> None:
        self._closed = True
        if self._file is not None:
            self._file.close()
            self._file = None


class MemorySink:
    """Collect written text in memory. Has no flush or close capability."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def write(self, text: str) -> None:
        self.lines.append(text)

    def getvalue(self) -> str:
        return "".join(self.lines)
