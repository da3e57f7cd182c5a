import time
from datetime import datetime
from typing import Any, List, Mapping, Optional

from pydantic import ValidationError

from event_stats.core.config import settings
from event_stats.core.logger import get_logger
from event_stats.core.metrics import BACKEND_LATENCY, BACKEND_REQUESTS
from event_stats.core.tracing import get_tracer
from event_stats.domain.enums import (
    EventsCountStatus,
    EventsNamespace,
    EventsType,
    Granularity,
)
from event_stats.domain.exceptions import StatisticsFetchError
from event_stats.domain.models import DatePoint, EventsComparison
from event_stats.infrastructure.backend.client import CountingBackend
from event_stats.infrastructure.backend.query import build_query
from event_stats.infrastructure.backend.schemas import OK_STATUS, BackendResponse
from event_stats.metrics.bucketing import bucket_label, to_utc, truncate
from event_stats.metrics.comparison import compare_periods
from event_stats.metrics.series import empty_series, merge_series

logger = get_logger("statistics.service")
tracer = get_tracer(__name__)


class StatisticsService:
    """Fetches one metric's series for a project and gap-fills it.

    Every call is a single backend round trip; failures surface as
    StatisticsFetchError and are never replaced with zeros.
    """

    def __init__(
        self,
        backend: CountingBackend,
        project_id: str,
        time_in_utc: Optional[bool] = None,
    ):
        self.backend = backend
        self.project_id = project_id
        self.time_in_utc = (
            settings.stats_time_in_utc if time_in_utc is None else time_in_utc
        )

    async def get(
        self,
        start: datetime,
        end: datetime,
        granularity: Granularity,
        namespace: Optional[EventsNamespace] = None,
        status: Optional[EventsCountStatus] = None,
        destination_id: Optional[str] = None,
        events_type: Optional[EventsType] = None,
    ) -> List[DatePoint]:
        """Ascending, gap-free series covering every bucket of [start, end]."""
        query = build_query(
            self.project_id,
            start,
            end,
            granularity,
            namespace=namespace,
            status=status,
            destination_id=destination_id,
            events_type=events_type,
        )
        with tracer.start_as_current_span("statistics.get") as span:
            span.set_attribute("statistics.granularity", Granularity(granularity).value)
            if status:
                span.set_attribute("statistics.status", EventsCountStatus(status).value)
            response = await self._fetch(query)
            points = self._parse(response, query, granularity, end)

        BACKEND_REQUESTS.labels(outcome="ok").inc()
        return merge_series(empty_series(start, end, granularity), points)

    async def compare(
        self,
        start: datetime,
        end: datetime,
        granularity: Granularity,
        namespace: Optional[EventsNamespace] = None,
        status: Optional[EventsCountStatus] = None,
        destination_id: Optional[str] = None,
        events_type: Optional[EventsType] = None,
    ) -> EventsComparison:
        series = await self.get(
            start,
            end,
            granularity,
            namespace=namespace,
            status=status,
            destination_id=destination_id,
            events_type=events_type,
        )
        return compare_periods(series)

    def label(self, point: DatePoint, granularity: Granularity) -> str:
        return bucket_label(point.bucket, granularity, time_in_utc=self.time_in_utc)

    async def _fetch(self, query: str) -> Mapping[str, Any]:
        started = time.perf_counter()
        try:
            return await self.backend.get_detailed(query)
        except StatisticsFetchError:
            BACKEND_REQUESTS.labels(outcome="failed").inc()
            raise
        except Exception as e:
            BACKEND_REQUESTS.labels(outcome="failed").inc()
            logger.error(
                "statistics_fetch_failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            raise StatisticsFetchError(query=query) from e
        finally:
            BACKEND_LATENCY.observe(time.perf_counter() - started)

    def _parse(
        self,
        response: Mapping[str, Any],
        query: str,
        granularity: Granularity,
        end: datetime,
    ) -> List[DatePoint]:
        if not isinstance(response, Mapping) or response.get("status") != OK_STATUS:
            BACKEND_REQUESTS.labels(outcome="rejected").inc()
            logger.error(
                "statistics_backend_rejected",
                extra={"response": response, "project_id": self.project_id},
            )
            raise StatisticsFetchError(response=response, query=query)
        try:
            parsed = BackendResponse.model_validate(response)
        except ValidationError as e:
            BACKEND_REQUESTS.labels(outcome="rejected").inc()
            logger.error(
                "statistics_backend_malformed",
                extra={"error": str(e), "project_id": self.project_id},
            )
            raise StatisticsFetchError(response=response, query=query) from e

        if Granularity(granularity) is Granularity.TOTAL:
            # a single bucket pinned to the range end, whatever key the backend used
            if not parsed.data:
                return []
            return [
                DatePoint(
                    bucket=truncate(Granularity.TOTAL, end),
                    events=sum(p.events for p in parsed.data),
                )
            ]
        return [DatePoint(bucket=to_utc(p.key), events=p.events) for p in parsed.data]
