from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class DatePoint(BaseModel):
    """Events counted for one metric in one time bucket."""

    model_config = ConfigDict(frozen=True)

    bucket: datetime
    events: int = Field(ge=0)


class DetailedStatisticsPoint(BaseModel):
    """Several metrics for one bucket folded together.

    Each requested status is stored as an extra integer field named after it
    (``point.success``, ``point.skip``...); ``total`` is their sum.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    bucket: datetime
    total: int

    @property
    def metrics(self) -> Dict[str, int]:
        return dict(self.model_extra or {})


class EventsComparison(BaseModel):
    """Latest bucket of a series against the one before it."""

    model_config = ConfigDict(frozen=True)

    current: int
    previous: Optional[int]
    last_period_bucket: Optional[datetime]

    @property
    def delta(self) -> Optional[int]:
        if self.previous is None:
            return None
        return self.current - self.previous

    @property
    def change_ratio(self) -> Optional[float]:
        if not self.previous:
            return None
        return (self.current - self.previous) / self.previous
