"""Command-line argument definitions for rtss."""

import argparse
from dataclasses import dataclass

from rtss import __version__
from rtss.spawn import PTY_SUPPORTED

DESCRIPTION = """\
Prepends output lines with elapsed times since program start and previous line.

Use either to wrap stdout and stderr of a given command, or as a filter.
"""


@dataclass
class Args:
    command: list[str]
    pty: bool
    sortable: bool
    verbose: bool
    log: bool

    def __post_init__(self) -> None:
        assert isinstance(
            self.command, list
        ), f"Expected list, got {type(self.command)}"
        assert isinstance(self.pty, bool), f"Expected bool, got {type(self.pty)}"
        assert isinstance(
            self.sortable, bool
        ), f"Expected bool, got {type(self.sortable)}"
        assert isinstance(
            self.verbose, bool
        ), f"Expected bool, got {type(self.verbose)}"
        assert isinstance(self.log, bool), f"Expected bool, got {type(self.log)}"

    @staticmethod
    def parse_args(argv: list[str] | None = None) -> "Args":
        """Parse command-line arguments and return Args instance."""
        return _parse_args(argv)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rtss",
        description=DESCRIPTION,
        epilog="Use --pty/--tty to unbuffer commands like tcpdump when ran under rtss.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"rtss version {__version__}",
    )
    if PTY_SUPPORTED:
        parser.add_argument(
            "--pty",
            "--tty",
            dest="pty",
            help="Run the command with a pseudo-terminal as its stdout",
            action="store_true",
        )
    parser.add_argument(
        "--sortable",
        help="Use fixed-width HH:MM:SS.ffffff timestamps",
        action="store_true",
    )
    parser.add_argument(
        "--verbose",
        help="Log informational messages to stderr",
        action="store_true",
    )
    parser.add_argument(
        "--log",
        help="Enable logging to rtss.log file",
        action="store_true",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run; reads stdin as a filter when omitted",
    )
    return parser


def _parse_args(argv: list[str] | None = None) -> Args:
    """Parse command-line arguments."""
    parser = _build_parser()
    tmp = parser.parse_args(argv)

    command = list(tmp.command)
    if command and command[0] == "--":
        command = command[1:]

    out: Args = Args(
        command=command,
        pty=bool(getattr(tmp, "pty", False)),
        sortable=tmp.sortable,
        verbose=tmp.verbose,
        log=tmp.log,
    )
    return out
