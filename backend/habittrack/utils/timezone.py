"""
Timezone Utilities - Centralized timezone handling
"""
from datetime import date, datetime
from typing import Optional, Union
import pytz

from habittrack.core.config import settings


def get_local_tz(name: Optional[str] = None):
    """
    Get the configured local timezone object

    Args:
        name: Optional IANA timezone name overriding HABITTRACK_TIMEZONE

    Returns:
        pytz timezone
    """
    return pytz.timezone(name or settings.TIMEZONE)


def get_local_now() -> datetime:
    """
    Get current datetime in the local timezone

    Returns:
        Timezone-aware datetime object
    """
    return datetime.now(get_local_tz())


def get_local_today_date() -> date:
    """
    Get today's calendar date in the local timezone

    Returns:
        date object for today
    """
    return get_local_now().date()


def to_iso_instant(moment: datetime) -> str:
    """
    Format a datetime as a UTC ISO-8601 instant with millisecond precision

    Args:
        moment: Timezone-aware datetime (naive values are taken as UTC)

    Returns:
        String such as '2024-01-01T09:30:00.000Z'
    """
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    moment = moment.astimezone(pytz.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def to_epoch_ms(moment: datetime) -> int:
    """Milliseconds since the Unix epoch"""
    if moment.tzinfo is None:
        moment = pytz.utc.localize(moment)
    return int(moment.timestamp() * 1000)


def to_local_date(value: Union[str, date, datetime], tz=None) -> date:
    """
    Reduce an ISO instant, datetime or date to a calendar date

    Aware datetimes are converted to `tz` first when it is given. Plain
    YYYY-MM-DD strings are read as calendar days.

    Raises:
        ValueError: If the string is not ISO-8601
        TypeError: If the value is not a string, date or datetime
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text) if "T" in text or " " in text else date.fromisoformat(text)

    if isinstance(value, datetime):
        if tz is not None and value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()

    if not isinstance(value, date):
        raise TypeError(f"Expected a date or ISO string, got {type(value).__name__}")
    return value
