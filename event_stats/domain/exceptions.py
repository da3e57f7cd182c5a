from typing import Any, Mapping, Optional


class StatisticsError(Exception):
    """Base class for statistics layer failures."""


class StatisticsFetchError(StatisticsError):
    """The counting backend failed or reported a non-ok status.

    ``response`` holds the raw payload when one was received, ``query`` the
    query string that was sent. The underlying exception, if any, is chained
    as ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Failed to fetch statistics data",
        response: Optional[Mapping[str, Any]] = None,
        query: Optional[str] = None,
    ):
        super().__init__(message)
        self.response = response
        self.query = query


class CombinationError(StatisticsError):
    """A branch of a multi-metric fetch failed; no partial result exists."""

    def __init__(self, status: str, message: Optional[str] = None):
        super().__init__(message or f"Failed to fetch '{status}' statistics")
        self.status = status
