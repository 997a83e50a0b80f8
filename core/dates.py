import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

DAY = timedelta(days=1)

DateLike = Union[date, datetime, str]


def to_date(value: Optional[DateLike]) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_datetime(value).date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def to_datetime(value: Optional[DateLike]) -> Optional[datetime]:
    """Naive datetime; plain dates become midnight, aware values are shifted to UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return to_datetime(datetime.fromisoformat(str(value)))


def add_days(start: DateLike, days: int) -> date:
    return to_date(start) + timedelta(days=days)


def ceil_days(target: DateLike, now: DateLike) -> int:
    """Whole days from now until target, rounded up."""
    return math.ceil((to_datetime(target) - to_datetime(now)) / DAY)


def days_between(target: DateLike, now: DateLike) -> int:
    """Calendar-day difference; time of day is ignored."""
    return (to_date(target) - to_date(now)).days


def start_of_month(now: DateLike) -> date:
    return to_date(now).replace(day=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
