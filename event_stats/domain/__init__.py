from .enums import (
    DESTINATION_STATUSES,
    SOURCE_STATUSES,
    EventsCountStatus,
    EventsNamespace,
    EventsType,
    Granularity,
)
from .exceptions import CombinationError, StatisticsError, StatisticsFetchError
from .models import DatePoint, DetailedStatisticsPoint, EventsComparison

__all__ = [
    "Granularity",
    "EventsNamespace",
    "EventsType",
    "EventsCountStatus",
    "SOURCE_STATUSES",
    "DESTINATION_STATUSES",
    "DatePoint",
    "DetailedStatisticsPoint",
    "EventsComparison",
    "StatisticsError",
    "StatisticsFetchError",
    "CombinationError",
]
