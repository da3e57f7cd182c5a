from typing import Sequence

from event_stats.domain.models import DatePoint, EventsComparison


def compare_periods(series: Sequence[DatePoint]) -> EventsComparison:
    """Compare the last bucket of an ascending series with the one before it.

    The two buckets are taken positionally; adjacency is guaranteed by the
    gap-free series the statistics service returns, not checked here.
    """
    if not series:
        return EventsComparison(current=0, previous=0, last_period_bucket=None)
    last = series[-1]
    return EventsComparison(
        current=last.events,
        previous=series[-2].events if len(series) > 1 else None,
        last_period_bucket=last.bucket,
    )
