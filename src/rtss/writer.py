"""Line-prefixing writer that annotates output with relative timestamps."""

import time
from typing import BinaryIO, Callable

from rtss.duration import DurationFormatter, duration_to_human

STDOUT_SEPARATOR = "|"
STDERR_SEPARATOR = "#"


class RtssWriter:
    """A writer that prefixes every line with relative timestamps.

    Each line starts with the time elapsed since ``start`` and the time since
    the previous line completed, followed by the separator character:

        "   1.50s  423.1ms | original line\\n"

    Chunks may split lines anywhere; the prefix for a line is written once,
    when its first byte arrives.
    """

    def __init__(
        self,
        inner: BinaryIO,
        start: int,
        separator: str = STDOUT_SEPARATOR,
        formatter: DurationFormatter = duration_to_human,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        self.inner = inner
        self.formatter = formatter
        self.separator = separator
        self.clock = clock
        self.start = start
        self.last = start
        self.at_line_start = True

    def _write_all(self, data: bytes) -> None:
        # Raw sinks may accept fewer bytes than offered
        view = memoryview(data)
        while view:
            written = self.inner.write(view)
            view = view[written:]

    def _prefix(self, since_start: str, since_last: str) -> bytes:
        return f"{since_start:>8} {since_last:>8} {self.separator} ".encode("utf-8")

    def write(self, data: bytes) -> int:
        """Write a chunk to the underlying sink, prefixing any new lines.

        Returns:
            Number of bytes accepted, always ``len(data)``
        """
        size = len(data)
        if size == 0:
            return 0

        now = self.clock()
        since_start = self.formatter(now - self.start)
        first_prefix = self._prefix(since_start, self.formatter(now - self.last))
        rest_prefix = self._prefix(since_start, "")

        pos = 0
        saw_eol = False
        first = True

        while pos < size:
            if self.at_line_start:
                self._write_all(first_prefix if first else rest_prefix)
                first = False

            newline = data.find(b"\n", pos)
            if newline == -1:
                self.at_line_start = False
                self._write_all(data[pos:])
                break

            saw_eol = True
            self.at_line_start = True
            self._write_all(data[pos : newline + 1])
            pos = newline + 1

        self.inner.flush()

        if saw_eol:
            self.last = now

        return size

    def flush(self) -> None:
        self.inner.flush()
