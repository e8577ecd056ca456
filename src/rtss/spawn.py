"""Child process creation, with an optional pseudo-terminal for stdout."""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import BinaryIO

import psutil

logger = logging.getLogger(__name__)

PTY_SUPPORTED = os.name == "posix"


@dataclass
class ChildProcess:
    """A running child and the byte streams carrying its output.

    ``stdout`` is the pty master when ``uses_pty`` is set, otherwise a pipe.
    """

    process: psutil.Popen
    stdout: BinaryIO
    stderr: BinaryIO
    uses_pty: bool = False

    @property
    def pid(self) -> int:
        return self.process.pid

    def wait(self) -> int:
        """Block until the child terminates and return its returncode."""
        # psutil reports signals as a negative Negsignal enum
        return int(self.process.wait())

    def close(self) -> None:
        """Close the parent's ends of the output streams."""
        for stream in (self.stdout, self.stderr):
            try:
                stream.close()
            except OSError as e:
                logger.debug(f"Error closing child stream: {e}")


def _open_pty() -> tuple[int, int]:
    master, slave = os.openpty()
    logger.debug(f"Opened pty master={master} slave={slave}")
    return master, slave


def spawn(command: list[str], use_pty: bool = False) -> ChildProcess:
    """Start a command with stdin inherited and stdout/stderr captured.

    Args:
        command: Program and arguments
        use_pty: Attach the child's stdout to a pseudo-terminal so that
            programs which only line-buffer on a tty flush promptly

    Returns:
        ChildProcess with unbuffered output streams

    Raises:
        OSError: If the program cannot be started
    """
    if use_pty and not PTY_SUPPORTED:
        raise OSError("pseudo-terminals are not supported on this platform")

    if not use_pty:
        process = psutil.Popen(
            command,
            stdin=None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            bufsize=0,
        )
        logger.info(f"Started {command[0]!r} as pid {process.pid}")
        return ChildProcess(process=process, stdout=process.stdout, stderr=process.stderr)

    master, slave = _open_pty()
    try:
        process = psutil.Popen(
            command,
            stdin=None,
            stdout=slave,
            stderr=subprocess.PIPE,
            bufsize=0,
        )
    except OSError:
        os.close(master)
        raise
    finally:
        # The child holds its own copy; keeping ours open would hide EOF
        os.close(slave)

    logger.info(f"Started {command[0]!r} as pid {process.pid} on a pty")
    return ChildProcess(
        process=process,
        stdout=open(master, "rb", buffering=0),
        stderr=process.stderr,
        uses_pty=True,
    )
