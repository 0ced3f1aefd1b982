"""
Streak calculation from submission history.

Reduces an unordered collection of submission events to a StreakResult.
All dates are UTC calendar days; the functions here are pure.
"""

from datetime import date, datetime, timedelta
from typing import AbstractSet, Iterable

from models.streak import StreakResult, SubmissionEvent, ensure_utc

ONE_DAY = timedelta(days=1)


def activity_days(events: Iterable[SubmissionEvent]) -> set[date]:
    """Collapse submission events to the set of distinct UTC activity days."""
    return {event.activity_day for event in events}


def longest_run(days: AbstractSet[date]) -> int:
    """Length of the longest run of consecutive days in the set."""
    if not days:
        return 0

    ordered = sorted(days)
    longest = 1
    run = 1
    for previous, current in zip(ordered, ordered[1:]):
        if current - previous == ONE_DAY:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest


def current_run(days: AbstractSet[date], reference_now: datetime) -> int:
    """
    Length of the streak that is still live at ``reference_now``.

    The streak may end today or, if nothing has been solved yet today,
    yesterday (one-day grace period). Otherwise it is broken.
    """
    today = ensure_utc(reference_now).date()
    yesterday = today - ONE_DAY

    if today in days:
        cursor = today
    elif yesterday in days:
        cursor = yesterday
    else:
        return 0

    count = 0
    while cursor in days:
        count += 1
        cursor -= ONE_DAY
    return count


def compute_streak(days: AbstractSet[date], reference_now: datetime) -> StreakResult:
    """Compute current and longest streak for a set of activity days."""
    if not days:
        return StreakResult.empty()

    current = current_run(days, reference_now)
    longest = max(longest_run(days), current)

    return StreakResult(
        current_streak=current,
        longest_streak=longest,
        last_activity_date=max(days),
    )


def compute_streak_from_events(events: Iterable[SubmissionEvent], reference_now: datetime) -> StreakResult:
    """Convenience wrapper: events -> activity days -> StreakResult."""
    return compute_streak(activity_days(events), reference_now)
