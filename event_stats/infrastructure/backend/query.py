from datetime import datetime
from typing import List, Optional, Tuple
from urllib.parse import quote

from event_stats.domain.enums import (
    EventsCountStatus,
    EventsNamespace,
    EventsType,
    Granularity,
)
from event_stats.metrics.bucketing import to_utc

# Dashboard filter value meaning "every connector"
ALL_IDS = "all"

# The backend reads the connector id under a namespace-specific key
_SOURCE_NAMESPACES = (EventsNamespace.SOURCE, EventsNamespace.PUSH_SOURCE)


def format_timestamp(moment: datetime) -> str:
    return to_utc(moment).isoformat().replace("+00:00", "Z")


def id_key(namespace: Optional[EventsNamespace]) -> str:
    if namespace and EventsNamespace(namespace) in _SOURCE_NAMESPACES:
        return "source_id"
    return "destination_id"


def build_query(
    project_id: str,
    start: datetime,
    end: datetime,
    granularity: Granularity,
    namespace: Optional[EventsNamespace] = None,
    status: Optional[EventsCountStatus] = None,
    destination_id: Optional[str] = None,
    events_type: Optional[EventsType] = None,
) -> str:
    """Render the counting backend query string.

    Pairs always come out in the same order; optional parameters that are
    not set are left out rather than sent empty. ``destination_id`` is the
    connector filter: it goes out as ``source_id`` for source namespaces.
    """
    params: List[Tuple[str, str]] = [
        ("project_id", project_id),
        ("start", format_timestamp(start)),
        ("end", format_timestamp(end)),
        ("granularity", Granularity(granularity).value),
    ]
    if events_type:
        params.append(("type", EventsType(events_type).value))
    if namespace:
        params.append(("namespace", EventsNamespace(namespace).value))
    if status:
        params.append(("status", EventsCountStatus(status).value))
    if destination_id and destination_id != ALL_IDS:
        params.append((id_key(namespace), destination_id))
    # joined by hand: httpx.QueryParams escapes the ":" in timestamps
    return "&".join(f"{name}={quote(str(value), safe=':')}" for name, value in params)
