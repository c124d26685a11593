"""
Calendar bucketing for heatmaps and recent-day strips
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Mapping

from habittrack.core.constants import WEEK_STARTS
from habittrack.core.exceptions import InvalidHabitDataError
from habittrack.utils.themes import intensity_level

CheckInMap = Mapping[str, Mapping[str, Any]]


def start_of_week(day: date, week_start: str = "sunday") -> date:
    """First day of the week containing `day`"""
    if week_start == "monday":
        return day - timedelta(days=day.weekday())
    return day - timedelta(days=(day.weekday() + 1) % 7)


def day_entry(check_ins: CheckInMap, day: date, today: date) -> Dict[str, Any]:
    """
    Describe one calendar cell

    Days after today are flagged future and never report completion, even
    when a stray record exists for them.
    """
    record = check_ins.get(day.isoformat())
    is_future = day > today

    completed = bool(record and record.get("completed")) and not is_future
    if not completed:
        value = 0
    elif record.get("value") is None:
        value = 1
    else:
        value = record["value"]

    return {
        "date": day.isoformat(),
        "weekday": day.strftime("%a"),
        "isToday": day == today,
        "isFuture": is_future,
        "hasRecord": record is not None,
        "completed": completed,
        "value": value,
        "hasNote": bool(record and record.get("note")),
        "intensity": intensity_level(value),
    }


def build_calendar(
    check_ins: CheckInMap,
    today: date,
    weeks: int = 16,
    week_start: str = "sunday",
) -> List[Dict[str, Any]]:
    """
    Group the trailing `weeks` weeks into week buckets of seven days

    The last bucket is the week containing today, so it can hold future
    days.

    Args:
        check_ins: Map of 'YYYY-MM-DD' -> check-in record for one habit
        today: Reference day
        weeks: Number of weeks to show (at least 1)
        week_start: 'sunday' or 'monday'

    Returns:
        List of {'weekStart', 'days'} dicts, oldest week first

    Raises:
        InvalidHabitDataError: If weeks < 1 or week_start is unknown
    """
    if weeks < 1:
        raise InvalidHabitDataError(f"weeks must be at least 1, got {weeks}")
    if week_start not in WEEK_STARTS:
        raise InvalidHabitDataError(f"week_start must be one of {', '.join(WEEK_STARTS)}")

    first = start_of_week(today - timedelta(weeks=weeks - 1), week_start)

    buckets = []
    for week in range(weeks):
        week_first = first + timedelta(weeks=week)
        buckets.append({
            "weekStart": week_first.isoformat(),
            "days": [day_entry(check_ins, week_first + timedelta(days=i), today) for i in range(7)],
        })
    return buckets


def recent_days(check_ins: CheckInMap, today: date, days: int = 7) -> List[Dict[str, Any]]:
    """Last `days` days ending today, oldest first"""
    return [day_entry(check_ins, today - timedelta(days=offset), today) for offset in range(days - 1, -1, -1)]
