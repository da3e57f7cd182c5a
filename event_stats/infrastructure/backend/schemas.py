from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

OK_STATUS = "ok"


class BackendPoint(BaseModel):
    key: datetime
    events: int = Field(ge=0)


class BackendResponse(BaseModel):
    """Payload of the detailed statistics endpoint.

    {"status": "ok", "data": [{"key": "2024-01-01T00:00:00Z", "events": 10}]}
    """

    status: str
    data: List[BackendPoint] = []
