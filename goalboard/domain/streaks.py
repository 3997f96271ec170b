"""Activity streaks from the progress log.

Pure functions -- `today` is injectable for testing.
"""

from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta


def utc_today() -> date:
    """Calendar day in UTC. Every stored day (creation, progress) uses this clock."""
    return datetime.now(UTC).date()


def compute_streak(activity_dates: Iterable[date], today: date | None = None) -> dict:
    """Compute current and longest streak of consecutive active days.

    Args:
        activity_dates: Days with at least one progress entry (duplicates allowed)
        today: Reference day (defaults to utc_today())

    Returns:
        {"current_streak": int, "longest_streak": int, "last_updated": date | None}

    The current streak is still alive when the last active day is today or
    yesterday; anything older resets it to 0.
    """
    if today is None:
        today = utc_today()

    days = sorted(set(activity_dates))
    if not days:
        return {"current_streak": 0, "longest_streak": 0, "last_updated": None}

    longest = 1
    run = 1
    for previous, current in zip(days, days[1:]):
        if current - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)

    last_day = days[-1]
    if today - last_day > timedelta(days=1):
        current_streak = 0
    else:
        # run already holds the length of the trailing sequence
        current_streak = run

    return {
        "current_streak": current_streak,
        "longest_streak": longest,
        "last_updated": last_day,
    }
