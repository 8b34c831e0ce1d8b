"""
Formatting utilities for display.
"""

from autopace.shared.units import round_half_up


def format_pace(pace_min_mile: float | None) -> str:
    """
    Format pace as 'M:SS'.

    Args:
        pace_min_mile: Pace in minutes per mile

    Returns:
        Formatted string (e.g., '7:30'), '—' when missing
    """
    if pace_min_mile is None:
        return "—"

    minutes = int(pace_min_mile // 1)
    seconds = round_half_up((pace_min_mile - minutes) * 60)
    if seconds == 60:
        minutes += 1
        seconds = 0

    return f"{minutes}:{seconds:02d}"


def format_seconds_delta(seconds: int) -> str:
    """Signed seconds for reasoning strings ('+42s', '-8s')."""
    if seconds >= 0:
        return f"+{seconds}s"
    return f"{seconds}s"
