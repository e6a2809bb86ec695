"""
Streak tracking — pure functions, no DB access.
"""
from datetime import date, datetime, timedelta
from typing import Iterable


def compute_streak(dates: Iterable[date], today: date | None = None) -> int:
    """
    Returns the current run of consecutive study days.

    The run must end today or yesterday: a user who logged yesterday but not
    yet today keeps their streak until the day is over. Dates must already be
    calendar days in the same time zone as `today`.
    """
    unique_dates = sorted(set(dates), reverse=True)
    if not unique_dates:
        return 0

    if today is None:
        today = date.today()

    gap = (today - unique_dates[0]).days
    if gap > 1:
        return 0

    cursor = today - timedelta(days=1) if gap == 1 else today
    streak = 0
    for d in unique_dates:
        if d == cursor:
            streak += 1
            cursor -= timedelta(days=1)
        elif d < cursor:
            break

    return streak


def longest_streak(dates: Iterable[date]) -> int:
    """Longest run of consecutive days anywhere in the history."""
    unique_dates = sorted(set(dates))
    longest = 0
    run = 0
    previous: date | None = None
    for d in unique_dates:
        if previous is not None and d - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = d
    return longest


def is_streak_at_risk(sessions_today: int, now: datetime, risk_hour: int = 21) -> bool:
    """True late in the day when nothing has been logged yet."""
    return sessions_today == 0 and now.hour >= risk_hour
