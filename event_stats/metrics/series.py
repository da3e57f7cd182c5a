from datetime import datetime
from typing import Dict, Iterable, List

from event_stats.domain.enums import Granularity
from event_stats.domain.models import DatePoint

from .bucketing import step, to_utc, truncate


def empty_series(start: datetime, end: datetime, granularity: Granularity) -> List[DatePoint]:
    """Zero-valued scaffold for every bucket in [start, end], newest first.

    Returns an empty list when ``start`` falls after ``end`` once both are
    truncated.
    """
    last = truncate(granularity, end)
    first = truncate(granularity, start)
    if Granularity(granularity) is Granularity.TOTAL:
        return [DatePoint(bucket=last, events=0)] if first <= last else []

    delta = step(granularity)
    points = []
    bucket = last
    while bucket >= first:
        points.append(DatePoint(bucket=bucket, events=0))
        bucket -= delta
    return points


def index_series(series: Iterable[DatePoint]) -> Dict[datetime, int]:
    return {to_utc(point.bucket): point.events for point in series}


def merge_series(
    scaffold: Iterable[DatePoint], sparse: Iterable[DatePoint]
) -> List[DatePoint]:
    """Overlay backend counts on a zero scaffold, oldest bucket first.

    Keys are normalized to UTC so that the same instant reported with a
    different offset collapses onto one bucket; sparse values win.
    """
    merged = index_series(scaffold)
    merged.update(index_series(sparse))
    return [
        DatePoint(bucket=bucket, events=events)
        for bucket, events in sorted(merged.items())
    ]
