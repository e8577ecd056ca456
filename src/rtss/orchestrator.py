"""Run a command (or filter stdin) with every output line timestamped.

Command mode drains the child's stdout and stderr on two threads, each through
its own RtssWriter, while the calling thread waits for the child to exit.
Filter mode pumps the wrapper's own stdin through a single writer.
"""

import errno
import logging
import sys
import threading
import time
from dataclasses import dataclass
from typing import BinaryIO, Callable

from rtss.console import error, warning
from rtss.duration import DurationFormatter, duration_to_human
from rtss.pump import PumpResult, StreamPump
from rtss.spawn import ChildProcess, spawn
from rtss.utils import (
    describe_returncode,
    exit_code_for_error,
    exit_code_for_returncode,
)
from rtss.writer import STDERR_SEPARATOR, STDOUT_SEPARATOR

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Aggregated outcome of a wrapped command or filter run."""

    exit_code: int
    status: str
    stdout: PumpResult | None = None
    stderr: PumpResult | None = None


class ProcessOrchestrator:
    """Coordinates the stream pumps against the lifetime of a child process.

    ``start`` is captured once, on construction, and shared by every pump so
    that "time since start" is process-wide rather than per stream.
    """

    def __init__(
        self,
        formatter: DurationFormatter = duration_to_human,
        stdout: BinaryIO | None = None,
        stderr: BinaryIO | None = None,
        clock: Callable[[], int] = time.monotonic_ns,
        start: int | None = None,
        spawner: Callable[[list[str], bool], ChildProcess] = spawn,
    ) -> None:
        self.clock = clock
        self.start = clock() if start is None else start
        self.formatter = formatter
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.stderr = stderr if stderr is not None else sys.stderr.buffer
        self.spawner = spawner

    def _make_pump(
        self, name: str, source: BinaryIO, sink: BinaryIO, separator: str
    ) -> StreamPump:
        return StreamPump(
            name,
            source,
            sink,
            self.start,
            separator=separator,
            formatter=self.formatter,
            clock=self.clock,
        )

    def _start_pump(self, pump: StreamPump) -> threading.Thread:
        thread = threading.Thread(target=pump.run, name=f"rtss-{pump.name}", daemon=True)
        thread.start()
        return thread

    def _collect(self, pump: StreamPump) -> PumpResult:
        # A pump thread that died on a non-I/O exception never set its result
        if pump.result is None:
            return PumpResult(
                bytes_copied=pump.bytes_copied,
                error=OSError(f"{pump.name} pump terminated unexpectedly"),
            )
        return pump.result

    def _write_summary(self, status: str) -> None:
        elapsed = self.formatter(self.clock() - self.start)
        line = f"{elapsed:>8}    {status}\n"
        try:
            self.stdout.write(line.encode("utf-8"))
            self.stdout.flush()
        except OSError as e:
            logger.debug(f"Could not write summary line: {e}")

    def run_filter(self, source: BinaryIO | None = None) -> RunResult:
        """Timestamp lines read from ``source`` (stdin by default) until EOF."""
        if source is None:
            source = sys.stdin.buffer

        pump = self._make_pump("stdin", source, self.stdout, STDOUT_SEPARATOR)
        result = pump.run()

        exit_code = 0
        if result.error is not None:
            error(str(result.error))
            exit_code = exit_code_for_error(result.error)

        status = f"exit code: {exit_code}"
        self._write_summary(status)
        return RunResult(exit_code=exit_code, status=status, stdout=result)

    def run_command(self, command: list[str], use_pty: bool = False) -> RunResult:
        """Run ``command``, timestamping its stdout (``|``) and stderr (``#``).

        Args:
            command: Program and arguments
            use_pty: Give the child a pseudo-terminal for stdout

        Returns:
            RunResult whose exit_code mirrors the child's

        Raises:
            ValueError: If command is empty
        """
        if not command:
            raise ValueError("command must name a program to run")

        try:
            child = self.spawner(command, use_pty)
        except OSError as e:
            error(f"{command[0]}: {e.strerror or e}")
            exit_code = exit_code_for_error(e)
            return RunResult(exit_code=exit_code, status=f"spawn failed: {e}")

        out_pump = self._make_pump("stdout", child.stdout, self.stdout, STDOUT_SEPARATOR)
        err_pump = self._make_pump("stderr", child.stderr, self.stderr, STDERR_SEPARATOR)
        out_thread = self._start_pump(out_pump)
        err_thread = self._start_pump(err_pump)

        returncode = child.wait()
        logger.info(f"Child {child.pid} finished with returncode {returncode}")

        # Output may still be draining after the child has exited
        err_thread.join()
        out_thread.join()
        child.close()

        out_result = self._collect(out_pump)
        err_result = self._collect(err_pump)

        if err_result.error is not None:
            warning(f"stderr: {err_result.error}")

        if out_result.error is not None:
            if child.uses_pty and out_result.error.errno == errno.EIO:
                # The pty master reports EIO once the child side has closed
                logger.debug("Ignoring EIO from pty master at end of output")
                out_result = PumpResult(bytes_copied=out_result.bytes_copied)
            else:
                warning(f"stdout: {out_result.error}")

        status = describe_returncode(returncode)
        self._write_summary(status)
        return RunResult(
            exit_code=exit_code_for_returncode(returncode),
            status=status,
            stdout=out_result,
            stderr=err_result,
        )
