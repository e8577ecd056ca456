"""rtss - Relative TimeStamps for Stuff."""

__version__ = "0.6.0"


class Rtss:
    """Stable public API for rtss.

    All methods are static; they return the exit code the rtss command
    would exit with.
    """

    # ===== Entry Points =====

    @staticmethod
    def main() -> int:
        """Run the rtss command-line tool with sys.argv.

        Returns:
            Exit code mirroring the wrapped command's
        """
        from .main import main as _main

        return _main()

    # ===== Programmatic API =====

    @staticmethod
    def wrap(command: list[str], use_pty: bool = False, sortable: bool = False) -> int:
        """Run a command with its stdout and stderr lines timestamped.

        Args:
            command: Program and arguments
            use_pty: Give the command a pseudo-terminal for stdout
            sortable: Use fixed-width HH:MM:SS.ffffff timestamps

        Returns:
            The command's exit code (64 if it was killed by a signal)

        Raises:
            ValueError: If command is empty
        """
        from .duration import duration_to_human, duration_to_sortable
        from .orchestrator import ProcessOrchestrator

        formatter = duration_to_sortable if sortable else duration_to_human
        orchestrator = ProcessOrchestrator(formatter=formatter)
        return orchestrator.run_command(command, use_pty=use_pty).exit_code

    @staticmethod
    def filter(sortable: bool = False) -> int:
        """Timestamp lines read from stdin until EOF.

        Returns:
            0, or 64 + errno if copying failed
        """
        from .duration import duration_to_human, duration_to_sortable
        from .orchestrator import ProcessOrchestrator

        formatter = duration_to_sortable if sortable else duration_to_human
        orchestrator = ProcessOrchestrator(formatter=formatter)
        return orchestrator.run_filter().exit_code
