from datetime import datetime, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from event_stats.domain.enums import (
    EventsCountStatus,
    EventsNamespace,
    EventsType,
    Granularity,
)
from event_stats.domain.exceptions import StatisticsFetchError
from event_stats.domain.models import DatePoint
from event_stats.services.statistics_service import StatisticsService


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class DummyBackend:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.queries = []

    async def get_detailed(self, query: str):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.mark.asyncio
async def test_get_fills_gaps_ascending(day_range, ok_payload):
    backend = DummyBackend(ok_payload(("2024-01-02T00:00:00Z", 5)))
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    series = await svc.get(*day_range, Granularity.DAY)

    assert series == [
        DatePoint(bucket=utc(2024, 1, 1), events=0),
        DatePoint(bucket=utc(2024, 1, 2), events=5),
        DatePoint(bucket=utc(2024, 1, 3), events=0),
    ]


@pytest.mark.asyncio
async def test_get_sends_one_query_with_filters(day_range, ok_payload):
    backend = DummyBackend(ok_payload())
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    await svc.get(
        *day_range,
        Granularity.HOUR,
        namespace=EventsNamespace.PUSH_SOURCE,
        status=EventsCountStatus.SKIP,
        destination_id="src_9",
        events_type=EventsType.PUSH,
    )

    assert len(backend.queries) == 1
    params = parse_qs(backend.queries[0])
    assert params["project_id"] == ["p1"]
    assert params["granularity"] == ["hour"]
    assert params["namespace"] == ["push_source"]
    assert params["status"] == ["skip"]
    assert params["source_id"] == ["src_9"]
    assert "destination_id" not in params
    assert params["type"] == ["push"]


@pytest.mark.asyncio
async def test_hour_series_with_offset_keys(ok_payload):
    backend = DummyBackend(ok_payload(("2024-01-01T03:00:00+02:00", 4)))
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    series = await svc.get(utc(2024, 1, 1, 0), utc(2024, 1, 1, 2, 30), Granularity.HOUR)

    assert [(p.bucket.hour, p.events) for p in series] == [(0, 0), (1, 4), (2, 0)]


@pytest.mark.asyncio
async def test_non_ok_status_raises_with_raw_response(day_range):
    response = {"status": "error", "message": "project not found"}
    backend = DummyBackend(response)
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    with pytest.raises(StatisticsFetchError) as exc_info:
        await svc.get(*day_range, Granularity.DAY)

    assert exc_info.value.response == response
    assert exc_info.value.query == backend.queries[0]


@pytest.mark.asyncio
async def test_malformed_payload_raises(day_range):
    backend = DummyBackend({"status": "ok", "data": [{"key": "yesterday", "events": 1}]})
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    with pytest.raises(StatisticsFetchError):
        await svc.get(*day_range, Granularity.DAY)


@pytest.mark.asyncio
async def test_network_failure_is_wrapped_and_not_retried(day_range):
    error = httpx.ReadTimeout("timed out")
    backend = DummyBackend(error=error)
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    with pytest.raises(StatisticsFetchError) as exc_info:
        await svc.get(*day_range, Granularity.DAY)

    assert exc_info.value.__cause__ is error
    assert exc_info.value.response is None
    assert len(backend.queries) == 1


@pytest.mark.asyncio
async def test_fetch_error_from_backend_passes_through(day_range):
    error = StatisticsFetchError(query="q")
    svc = StatisticsService(DummyBackend(error=error), "p1")  # type: ignore[arg-type]

    with pytest.raises(StatisticsFetchError) as exc_info:
        await svc.get(*day_range, Granularity.DAY)

    assert exc_info.value is error


@pytest.mark.asyncio
async def test_total_collapses_to_range_end(ok_payload):
    end = utc(2024, 1, 31, 12)
    backend = DummyBackend(
        ok_payload(("2024-01-01T00:00:00Z", 3), ("2024-01-15T00:00:00Z", 4))
    )
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    series = await svc.get(utc(2024, 1, 1), end, Granularity.TOTAL)

    assert series == [DatePoint(bucket=end, events=7)]


@pytest.mark.asyncio
async def test_total_without_data_is_zero(ok_payload):
    end = utc(2024, 1, 31, 12)
    svc = StatisticsService(DummyBackend(ok_payload()), "p1")  # type: ignore[arg-type]

    assert await svc.get(utc(2024, 1, 1), end, Granularity.TOTAL) == [
        DatePoint(bucket=end, events=0)
    ]


@pytest.mark.asyncio
async def test_compare_uses_last_two_buckets(day_range, ok_payload):
    backend = DummyBackend(
        ok_payload(("2024-01-02T00:00:00Z", 3), ("2024-01-03T00:00:00Z", 7))
    )
    svc = StatisticsService(backend, "p1")  # type: ignore[arg-type]

    comparison = await svc.compare(*day_range, Granularity.DAY)

    assert comparison.current == 7
    assert comparison.previous == 3
    assert comparison.last_period_bucket == utc(2024, 1, 3)


def test_time_zone_flag_only_changes_labels():
    point = DatePoint(bucket=utc(2024, 1, 5, 13), events=1)
    utc_svc = StatisticsService(DummyBackend(), "p1", time_in_utc=True)  # type: ignore[arg-type]
    local_svc = StatisticsService(DummyBackend(), "p1", time_in_utc=False)  # type: ignore[arg-type]

    assert utc_svc.label(point, Granularity.HOUR) == "2024-01-05 13:00"
    assert local_svc.label(point, Granularity.HOUR) == point.bucket.astimezone().strftime(
        "%Y-%m-%d %H:00"
    )
