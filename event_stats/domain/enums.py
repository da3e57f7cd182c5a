from enum import Enum


class Granularity(str, Enum):
    """Bucket width of a statistics series.

    TOTAL collapses the whole range into a single bucket at the range end.
    """

    HOUR = "hour"
    DAY = "day"
    TOTAL = "total"


class EventsNamespace(str, Enum):
    """Pipeline stage the events are counted at.

    Events coming directly from sources are counted in the source namespaces.
    Once processed they may be multiplexed to several destinations and are
    counted again in the destination namespace, so destination totals are
    greater than or equal to source totals.
    """

    SOURCE = "source"
    PUSH_SOURCE = "push_source"
    DESTINATION = "destination"


class EventsType(str, Enum):
    PUSH = "push"
    PULL = "pull"


class EventsCountStatus(str, Enum):
    SUCCESS = "success"
    SKIP = "skip"
    ERRORS = "errors"


SOURCE_STATUSES: tuple[EventsCountStatus, ...] = (
    EventsCountStatus.SUCCESS,
    EventsCountStatus.SKIP,
)
DESTINATION_STATUSES: tuple[EventsCountStatus, ...] = (
    EventsCountStatus.SUCCESS,
    EventsCountStatus.SKIP,
    EventsCountStatus.ERRORS,
)
