from shared.config import BaseServiceConfig


class Settings(BaseServiceConfig):
    # Counting backend
    stats_backend_url: str = "http://configurator:7000/api/v1"
    stats_backend_path: str = "/statistics/detailed"
    stats_backend_token: str | None = None
    stats_backend_timeout_seconds: float = 10.0
    stats_backend_retries: int = 2  # transport errors only
    stats_backend_retry_base_delay: float = 0.25

    # Fan-out
    stats_max_concurrent_fetches: int = 4

    # Display
    stats_time_in_utc: bool = True

    # Tracing
    otel_exporter_endpoint: str = "http://jaeger:4317"


settings = Settings()
