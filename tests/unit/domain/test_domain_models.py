from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from event_stats.domain import (
    CombinationError,
    DatePoint,
    DetailedStatisticsPoint,
    EventsComparison,
    EventsNamespace,
    StatisticsError,
    StatisticsFetchError,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_date_point_is_immutable():
    point = DatePoint(bucket=T0, events=3)
    with pytest.raises(ValidationError):
        point.events = 4  # type: ignore[misc]


def test_date_point_rejects_negative_counts():
    with pytest.raises(ValidationError):
        DatePoint(bucket=T0, events=-1)


def test_detailed_point_carries_named_metrics():
    point = DetailedStatisticsPoint(bucket=T0, total=12, success=10, skip=2)

    assert point.success == 10
    assert point.skip == 2
    assert point.metrics == {"success": 10, "skip": 2}
    assert point.model_dump() == {"bucket": T0, "total": 12, "success": 10, "skip": 2}


def test_events_comparison_dump():
    comparison = EventsComparison(current=1, previous=None, last_period_bucket=T0)
    assert comparison.model_dump() == {
        "current": 1,
        "previous": None,
        "last_period_bucket": T0,
    }


def test_namespace_wire_values():
    assert [n.value for n in EventsNamespace] == ["source", "push_source", "destination"]


def test_error_hierarchy():
    fetch = StatisticsFetchError(response={"status": "error"}, query="project_id=p1")
    assert isinstance(fetch, StatisticsError)
    assert fetch.response == {"status": "error"}
    assert fetch.query == "project_id=p1"
    assert str(fetch) == "Failed to fetch statistics data"

    combination = CombinationError("skip")
    assert isinstance(combination, StatisticsError)
    assert combination.status == "skip"
    assert "skip" in str(combination)
