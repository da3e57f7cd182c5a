from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Dict, Tuple

from event_stats.domain.enums import Granularity

_TRUNCATORS: Dict[Granularity, Callable[[datetime], datetime]] = {
    Granularity.HOUR: lambda dt: dt.replace(minute=0, second=0, microsecond=0),
    Granularity.DAY: lambda dt: dt.replace(
        hour=0, minute=0, second=0, microsecond=0
    ),
    Granularity.TOTAL: lambda dt: dt,
}

_STEPS: Dict[Granularity, timedelta] = {
    Granularity.HOUR: timedelta(hours=1),
    Granularity.DAY: timedelta(days=1),
}

_LABEL_FORMATS: Dict[Granularity, str] = {
    Granularity.HOUR: "%Y-%m-%d %H:00",
    Granularity.DAY: "%Y-%m-%d",
    Granularity.TOTAL: "%Y-%m-%d %H:%M",
}


class Period(Enum):
    """Dashboard lookback windows, in seconds."""

    MONTH = 30 * 24 * 60 * 60
    WEEK = 7 * 24 * 60 * 60
    DAY = 24 * 60 * 60


def to_utc(moment: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def truncate(granularity: Granularity, moment: datetime) -> datetime:
    return _TRUNCATORS[Granularity(granularity)](to_utc(moment))


def step(granularity: Granularity) -> timedelta:
    granularity = Granularity(granularity)
    if granularity not in _STEPS:
        raise ValueError(f"Granularity '{granularity.value}' has no fixed step")
    return _STEPS[granularity]


def bucket_label(
    bucket: datetime, granularity: Granularity, time_in_utc: bool = True
) -> str:
    moment = to_utc(bucket)
    if not time_in_utc:
        moment = moment.astimezone()
    return moment.strftime(_LABEL_FORMATS[Granularity(granularity)])


def lookback_range(now: datetime, period: Period) -> Tuple[datetime, datetime]:
    end = to_utc(now)
    return end - timedelta(seconds=period.value), end
