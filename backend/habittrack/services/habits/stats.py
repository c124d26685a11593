"""
Habit statistics - streaks, totals and completion rate
Pure functions over one habit's check-in map; "today" is always passed in
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping, Optional
import logging
import math

from habittrack.utils.timezone import to_local_date

logger = logging.getLogger(__name__)

CheckInMap = Mapping[str, Mapping[str, Any]]


def _parse_day(key: str) -> Optional[date]:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError):
        return None


def completed_dates(check_ins: CheckInMap, today: Optional[date] = None) -> List[date]:
    """
    Get the sorted completion set of a habit

    Args:
        check_ins: Map of 'YYYY-MM-DD' -> check-in record
        today: When given, records dated after today are left out

    Returns:
        Ascending list of dates whose record is completed
    """
    days = []
    for key, record in check_ins.items():
        if not record or not record.get("completed"):
            continue
        day = _parse_day(key)
        if day is None:
            logger.debug(f"Skipping check-in with unreadable date key {key!r}")
            continue
        if today is not None and day > today:
            continue
        days.append(day)
    return sorted(days)


def total_completions(check_ins: CheckInMap, today: Optional[date] = None) -> int:
    return len(completed_dates(check_ins, today))


def days_tracked(created_at: Any, today: date, tz=None) -> int:
    """
    Number of calendar days from creation through today, inclusive

    Args:
        created_at: Habit createdAt (ISO instant string, datetime or date)
        today: Reference day
        tz: Optional timezone used to turn createdAt into a local day

    Returns:
        (today - created day) + 1, never below 0
    """
    try:
        created_day = to_local_date(created_at, tz)
    except (TypeError, ValueError):
        logger.warning(f"Unreadable createdAt {created_at!r}, treating as not tracked")
        return 0
    return max(0, (today - created_day).days + 1)


def completion_rate(completions: int, tracked_days: int) -> int:
    """
    Integer completion percentage, rounded half up

    Returns:
        round(100 * completions / tracked_days), or 0 when nothing is tracked
    """
    if tracked_days <= 0:
        return 0
    return int(math.floor(100 * completions / tracked_days + 0.5))


def longest_streak(check_ins: CheckInMap, today: Optional[date] = None) -> int:
    """
    Length of the longest run of consecutive completed days

    Args:
        check_ins: Map of 'YYYY-MM-DD' -> check-in record
        today: When given, records dated after today do not count

    Returns:
        Longest streak in days (0 when nothing is completed)
    """
    days = completed_dates(check_ins, today)
    if not days:
        return 0

    longest = run = 1
    for previous, current in zip(days, days[1:]):
        if (current - previous).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
    return longest


def current_streak(check_ins: CheckInMap, today: date) -> int:
    """
    Consecutive completed days ending today, or yesterday if today is open

    An unchecked today does not break a streak that ran through yesterday.

    Args:
        check_ins: Map of 'YYYY-MM-DD' -> check-in record
        today: Reference day

    Returns:
        Current streak in days
    """
    done = set(completed_dates(check_ins, today))
    cursor = today if today in done else today - timedelta(days=1)

    streak = 0
    # A streak can never be longer than the completion set
    while streak < len(done) and cursor in done:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def habit_stats(habit: Mapping[str, Any], check_ins: CheckInMap, today: date, tz=None) -> Dict[str, int]:
    """
    All derived statistics for one habit

    Args:
        habit: Habit dict (createdAt is used)
        check_ins: That habit's check-in map
        today: Reference day
        tz: Optional timezone for interpreting createdAt

    Returns:
        Dict with currentStreak, longestStreak, totalCompletions,
        daysTracked and completionRate
    """
    total = total_completions(check_ins, today)
    tracked = days_tracked(habit.get("createdAt"), today, tz)

    return {
        "currentStreak": current_streak(check_ins, today),
        "longestStreak": longest_streak(check_ins, today),
        "totalCompletions": total,
        "daysTracked": tracked,
        "completionRate": completion_rate(total, tracked),
    }
