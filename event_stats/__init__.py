"""Event statistics read/transform layer.

Fetches sparse per-bucket event counts from the counting backend, fills the
gaps against a calendar grid, combines named counters and compares periods
for ingestion and delivery dashboards.
"""

from .domain import (
    CombinationError,
    DatePoint,
    DetailedStatisticsPoint,
    EventsComparison,
    EventsCountStatus,
    EventsNamespace,
    EventsType,
    Granularity,
    StatisticsError,
    StatisticsFetchError,
)
from .infrastructure.backend import CountingBackend, HttpCountingBackend, build_query
from .metrics.comparison import compare_periods
from .services import MetricsCombiner, StatisticsService, combine_series

__all__ = [
    "Granularity",
    "EventsNamespace",
    "EventsType",
    "EventsCountStatus",
    "DatePoint",
    "DetailedStatisticsPoint",
    "EventsComparison",
    "StatisticsError",
    "StatisticsFetchError",
    "CombinationError",
    "CountingBackend",
    "HttpCountingBackend",
    "build_query",
    "StatisticsService",
    "MetricsCombiner",
    "combine_series",
    "compare_periods",
]
