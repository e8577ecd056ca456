"""Test doubles shared by the rtss tests."""

import io

SECOND = 1_000_000_000


class FakeClock:
    """Monotonic nanosecond clock that only moves when told to."""

    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def set_seconds(self, seconds: float) -> None:
        self.now = int(seconds * SECOND)


class CountingSink(io.BytesIO):
    """BytesIO that counts flush calls."""

    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


class BrokenSink:
    """Sink whose reader has gone away."""

    def write(self, data) -> int:
        raise BrokenPipeError(32, "Broken pipe")

    def flush(self) -> None:
        pass


class ChunkSource:
    """Source that returns pre-split chunks from read() and then EOF.

    ``error`` is raised after the chunks instead of returning EOF, and
    ``interrupts`` InterruptedErrors are raised before the first chunk.
    """

    def __init__(self, chunks, error=None, interrupts=0) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.interrupts = interrupts
        self.requested_sizes = []

    def read(self, size: int = -1) -> bytes:
        self.requested_sizes.append(size)
        if self.interrupts:
            self.interrupts -= 1
            raise InterruptedError(4, "Interrupted system call")
        if self.chunks:
            return self.chunks.pop(0)
        if self.error is not None:
            raise self.error
        return b""

    def close(self) -> None:
        pass


class FakeChild:
    """Stand-in for rtss.spawn.ChildProcess."""

    def __init__(self, stdout, stderr, returncode=0, uses_pty=False) -> None:
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.uses_pty = uses_pty
        self.pid = 4242
        self.closed = False

    def wait(self) -> int:
        return self.returncode

    def close(self) -> None:
        self.closed = True
