"""
rtss - Relative TimeStamps for Stuff.

Runs:
  * rtss COMMAND [ARGS ...]
    * stdout lines are prefixed with "|", stderr lines with "#"
    * the exit code mirrors the command's
  * COMMAND | rtss
    * stdin lines are prefixed with "|"
"""

import logging
import sys

from rtss.args import Args
from rtss.config import resolve_settings
from rtss.console import error
from rtss.duration import get_formatter
from rtss.orchestrator import ProcessOrchestrator
from rtss.utils import configure_logging

logger = logging.getLogger(__name__)

# Conventional exit code for termination by Ctrl+C
INTERRUPTED_EXIT_CODE = 130


def run(args: Args) -> int:
    """Run rtss for already-parsed arguments and return the exit code."""
    # The start instant is taken before anything else happens
    orchestrator = ProcessOrchestrator()

    settings = resolve_settings(args.sortable, args.pty)
    orchestrator.formatter = get_formatter(settings.formatter_name)
    logger.debug(f"Effective settings: {settings}")

    if not args.command:
        return orchestrator.run_filter().exit_code

    return orchestrator.run_command(args.command, use_pty=settings.use_pty).exit_code


def main(argv: list[str] | None = None) -> int:
    """Entry point for the rtss command."""
    args = Args.parse_args(argv)
    configure_logging(args.log, args.verbose)

    try:
        return run(args)
    except KeyboardInterrupt:
        logger.info("rtss interrupted by user")
        error("Aborting")
        return INTERRUPTED_EXIT_CODE


if __name__ == "__main__":
    sys.exit(main())
