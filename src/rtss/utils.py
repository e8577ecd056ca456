"""Utility functions for rtss."""

import logging
import signal
import sys

logger = logging.getLogger(__name__)

# Exit code used when the child was killed by a signal, and the base added to
# errno for the wrapper's own I/O failures
FALLBACK_EXIT_CODE = 64


def configure_logging(enable_file_logging: bool, verbose: bool = False) -> None:
    """Configure logging based on whether file logging should be enabled."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setLevel(logging.INFO if verbose else logging.WARNING)
    if enable_file_logging:
        handlers.append(logging.FileHandler("rtss.log"))

    logging.basicConfig(
        level=logging.DEBUG if enable_file_logging else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,  # Override any existing configuration
    )


def exit_code_for_error(e: OSError) -> int:
    """Map an OS-level failure to the wrapper's exit code (64 + errno)."""
    return FALLBACK_EXIT_CODE + (e.errno or 0)


def exit_code_for_returncode(returncode: int) -> int:
    """Mirror a child's exit code; signal-terminated children map to 64."""
    if returncode < 0:
        return FALLBACK_EXIT_CODE
    return returncode


def describe_returncode(returncode: int) -> str:
    """Render a child's termination status, e.g. "exit code: 1" or "signal: 9 (SIGKILL)"."""
    if returncode >= 0:
        return f"exit code: {returncode}"

    signum = -returncode
    try:
        name = signal.Signals(signum).name
    except ValueError:
        return f"signal: {signum}"
    return f"signal: {signum} ({name})"
