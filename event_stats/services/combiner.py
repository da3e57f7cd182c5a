import asyncio
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from event_stats.core.config import settings
from event_stats.core.logger import get_logger
from event_stats.core.metrics import COMBINATION_FAILURES
from event_stats.core.tracing import get_tracer
from event_stats.domain.enums import (
    DESTINATION_STATUSES,
    SOURCE_STATUSES,
    EventsCountStatus,
    EventsNamespace,
    EventsType,
    Granularity,
)
from event_stats.domain.exceptions import CombinationError
from event_stats.domain.models import DatePoint, DetailedStatisticsPoint

from .statistics_service import StatisticsService

logger = get_logger("statistics.combiner")
tracer = get_tracer(__name__)

SeriesEntry = Tuple[EventsCountStatus, Sequence[DatePoint]]


def combine_series(entries: Sequence[SeriesEntry]) -> List[DetailedStatisticsPoint]:
    """Fold per-status series into one record per bucket.

    All series come from the same scaffold, so they are zipped by position.
    """
    if not entries:
        return []
    length = len(entries[0][1])
    if any(len(series) != length for _, series in entries):
        raise ValueError("Cannot combine series of different lengths")

    combined = []
    for idx in range(length):
        values: Dict[str, int] = {}
        total = 0
        bucket = entries[0][1][idx].bucket
        for status, series in entries:
            point = series[idx]
            bucket = point.bucket
            values[EventsCountStatus(status).value] = point.events
            total += point.events
        combined.append(DetailedStatisticsPoint(bucket=bucket, total=total, **values))
    return combined


class MetricsCombiner:
    """Fetches several statuses concurrently and combines them per bucket.

    Fan-out is bounded by ``max_concurrency``. The first failing branch
    cancels the others and the whole call fails with CombinationError.
    """

    def __init__(
        self, service: StatisticsService, max_concurrency: Optional[int] = None
    ):
        self.service = service
        self.max_concurrency = max_concurrency or settings.stats_max_concurrent_fetches

    async def fetch(
        self,
        statuses: Iterable[EventsCountStatus],
        start: datetime,
        end: datetime,
        granularity: Granularity,
        namespace: EventsNamespace,
        destination_id: Optional[str] = None,
        events_type: Optional[EventsType] = None,
    ) -> List[DetailedStatisticsPoint]:
        statuses = [EventsCountStatus(s) for s in statuses]
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _branch(status: EventsCountStatus) -> List[DatePoint]:
            async with semaphore:
                return await self.service.get(
                    start,
                    end,
                    granularity,
                    namespace=namespace,
                    status=status,
                    destination_id=destination_id,
                    events_type=events_type,
                )

        with tracer.start_as_current_span("statistics.combine") as span:
            span.set_attribute("statistics.statuses", [s.value for s in statuses])
            tasks = {s: asyncio.create_task(_branch(s)) for s in statuses}
            if not tasks:
                return []
            try:
                await asyncio.wait(
                    tasks.values(), return_when=asyncio.FIRST_EXCEPTION
                )
            finally:
                for task in tasks.values():
                    if not task.done():
                        task.cancel()
                # let cancelled branches unwind before we return or raise
                await asyncio.gather(*tasks.values(), return_exceptions=True)

            for status, task in tasks.items():
                if not task.cancelled() and task.exception() is not None:
                    COMBINATION_FAILURES.inc()
                    logger.error(
                        "statistics_combination_failed",
                        extra={
                            "status": status.value,
                            "namespace": EventsNamespace(namespace).value,
                            "error": str(task.exception()),
                        },
                    )
                    raise CombinationError(status.value) from task.exception()

            return combine_series([(s, task.result()) for s, task in tasks.items()])

    async def get_combined_statistics_by_sources(
        self,
        start: datetime,
        end: datetime,
        granularity: Granularity,
        events_type: Optional[EventsType] = None,
        source_id: Optional[str] = None,
        namespace: EventsNamespace = EventsNamespace.SOURCE,
    ) -> List[DetailedStatisticsPoint]:
        return await self.fetch(
            SOURCE_STATUSES,
            start,
            end,
            granularity,
            namespace=namespace,
            destination_id=source_id,
            events_type=events_type,
        )

    async def get_combined_statistics_by_destinations(
        self,
        start: datetime,
        end: datetime,
        granularity: Granularity,
        events_type: Optional[EventsType] = None,
        destination_id: Optional[str] = None,
    ) -> List[DetailedStatisticsPoint]:
        statuses = DESTINATION_STATUSES
        if events_type is not None and EventsType(events_type) is EventsType.PULL:
            # errors are not counted for pulled events
            statuses = tuple(s for s in statuses if s is not EventsCountStatus.ERRORS)
        return await self.fetch(
            statuses,
            start,
            end,
            granularity,
            namespace=EventsNamespace.DESTINATION,
            destination_id=destination_id,
            events_type=events_type,
        )
