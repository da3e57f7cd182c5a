from shared.metrics import get_counter, get_histogram

BACKEND_REQUESTS = get_counter(
    "backend_requests_total",
    "Statistics backend requests by outcome",
    service="statistics",
    labelnames=("outcome",),
)
BACKEND_LATENCY = get_histogram(
    "backend_latency_seconds",
    "Statistics backend round trip latency",
    service="statistics",
)
COMBINATION_FAILURES = get_counter(
    "combination_failures_total",
    "Multi-metric combinations aborted by a failed branch",
    service="statistics",
)
