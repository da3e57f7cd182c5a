import os
from datetime import datetime, timezone

import pytest

# Must be set before event_stats.core.config builds its settings singleton
os.environ.setdefault("APP_ENVIRONMENT", "testing")


@pytest.fixture
def day_range():
    """Jan 1st to Jan 3rd 2024, neither end aligned to a bucket."""
    return (
        datetime(2024, 1, 1, 10, 20, tzinfo=timezone.utc),
        datetime(2024, 1, 3, 5, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def ok_payload():
    def _payload(*points):
        return {
            "status": "ok",
            "data": [{"key": key, "events": events} for key, events in points],
        }

    return _payload
