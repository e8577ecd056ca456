"""Copy one byte stream into a timestamping writer until EOF or error."""

import logging
import time
from dataclasses import dataclass
from typing import BinaryIO, Callable

from rtss.duration import DurationFormatter, duration_to_human
from rtss.writer import STDOUT_SEPARATOR, RtssWriter

logger = logging.getLogger(__name__)

# Large enough to batch chatty writers, small enough to keep timestamps fresh
BUFFER_SIZE = 8 * 1024


@dataclass
class PumpResult:
    """Outcome of a finished pump."""

    bytes_copied: int
    error: OSError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def _reader_for(source: BinaryIO) -> Callable[[int], bytes]:
    # read1() returns whatever is available on buffered streams instead of
    # blocking until the whole buffer is filled
    read1 = getattr(source, "read1", None)
    if read1 is not None:
        return read1
    return source.read


def line_timing_copy(
    source: BinaryIO,
    sink: BinaryIO,
    start: int,
    separator: str = STDOUT_SEPARATOR,
    formatter: DurationFormatter = duration_to_human,
    clock: Callable[[], int] = time.monotonic_ns,
    on_progress: Callable[[int], None] | None = None,
) -> int:
    """Copy each line from source to sink, prefixed with relative timestamps.

    Lines are prefixed with the elapsed time since ``start`` and since the
    previous line, followed by ``separator``. Interrupted reads are retried.

    Args:
        source: Readable byte stream
        sink: Writable byte stream
        start: Monotonic start instant in nanoseconds
        separator: Character marking which stream a line came from
        formatter: Duration formatter for both timestamp fields
        clock: Monotonic nanosecond clock
        on_progress: Optional callback receiving the running byte total

    Returns:
        Number of bytes read from source

    Raises:
        OSError: If reading from source or writing to sink fails
    """
    writer = RtssWriter(sink, start, separator, formatter, clock)
    read = _reader_for(source)
    total = 0

    while True:
        try:
            chunk = read(BUFFER_SIZE)
        except InterruptedError:
            continue

        if not chunk:
            return total

        total += writer.write(chunk)
        if on_progress is not None:
            on_progress(total)


class StreamPump:
    """Drains one input stream through its own RtssWriter.

    Meant to run on a dedicated thread; ``result`` is set once ``run`` returns.
    """

    def __init__(
        self,
        name: str,
        source: BinaryIO,
        sink: BinaryIO,
        start: int,
        separator: str = STDOUT_SEPARATOR,
        formatter: DurationFormatter = duration_to_human,
        clock: Callable[[], int] = time.monotonic_ns,
    ) -> None:
        self.name = name
        self.source = source
        self.sink = sink
        self.start = start
        self.separator = separator
        self.formatter = formatter
        self.clock = clock
        self.bytes_copied = 0
        self.result: PumpResult | None = None

    def _on_progress(self, total: int) -> None:
        self.bytes_copied = total

    def run(self) -> PumpResult:
        """Pump until EOF or the first non-interrupt I/O error."""
        try:
            copied = line_timing_copy(
                self.source,
                self.sink,
                self.start,
                separator=self.separator,
                formatter=self.formatter,
                clock=self.clock,
                on_progress=self._on_progress,
            )
            self.result = PumpResult(bytes_copied=copied)
        except OSError as e:
            logger.debug(f"{self.name} pump stopped after {self.bytes_copied} bytes: {e}")
            self.result = PumpResult(bytes_copied=self.bytes_copied, error=e)
        else:
            logger.debug(f"{self.name} pump reached EOF after {copied} bytes")
        return self.result
