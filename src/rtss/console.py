"""Console output utilities with color support."""

import sys

from colorama import Fore, Style, init

# Initialize colorama for cross-platform support
init(autoreset=True)


def warning(message: str, file=None) -> None:
    """Print a warning message in yellow."""
    if file is None:
        file = sys.stderr
    print(f"{Fore.YELLOW}{message}{Style.RESET_ALL}", file=file, flush=True)


def error(message: str, file=None) -> None:
    """Print an error message in red."""
    if file is None:
        file = sys.stderr
    print(f"{Fore.RED}{message}{Style.RESET_ALL}", file=file, flush=True)
