"""Elapsed-time formatting for line prefixes.

Durations are plain integers of nanoseconds, as produced by subtracting two
``time.monotonic_ns()`` readings.
"""

from typing import Callable

DurationFormatter = Callable[[int], str]

NANOS_PER_SEC = 1_000_000_000


def duration_to_human(duration: int) -> str:
    """Format a duration like "15h4m5.42s" or "424.2ms", or "" when negligible.

    Args:
        duration: Elapsed time in nanoseconds

    Returns:
        Variable-width, unit-suffixed string
    """
    secs, nanos = divmod(duration, NANOS_PER_SEC)

    if secs > 0:
        # Round half-up to the nearest centisecond
        centis = (nanos + 5_000_000) // 10_000_000
        if centis == 100:
            secs += 1
            centis = 0

        parts = []
        remaining = secs

        if secs >= 86400:
            parts.append(f"{remaining // 86400}d")
            remaining %= 86400

        if secs >= 3600:
            parts.append(f"{remaining // 3600}h")
            remaining %= 3600

        if secs >= 60:
            parts.append(f"{remaining // 60}m")
            remaining %= 60

        parts.append(f"{remaining}.{centis:02d}s")
        return "".join(parts)

    if nanos > 100_000:
        return f"{nanos / 1_000_000:.1f}ms"
    if nanos > 100:
        return f"{nanos / 1_000:.1f}μs"
    return ""


def duration_to_sortable(duration: int) -> str:
    """Format a duration as a fixed-width, lexically sortable "15:04:05.421224"."""
    secs, nanos = divmod(duration, NANOS_PER_SEC)
    micros = nanos // 1000
    return f"{secs // 3600:02d}:{(secs % 3600) // 60:02d}:{secs % 60:02d}.{micros:06d}"


FORMATTERS: dict[str, DurationFormatter] = {
    "human": duration_to_human,
    "sortable": duration_to_sortable,
}


def get_formatter(name: str) -> DurationFormatter:
    """Look up a formatter by name ("human" or "sortable")."""
    try:
        return FORMATTERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown duration format: {name!r} (expected one of {sorted(FORMATTERS)})"
        ) from None
