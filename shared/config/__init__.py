"""Settings shared by every host of the statistics layer."""

from pydantic_settings import BaseSettings


class BaseServiceConfig(BaseSettings):
    """Logging and service identity; hosts subclass it with their own fields."""

    app_environment: str = "production"
    app_log_level: str = "INFO"
    # substrings of log keys and messages that get redacted
    app_log_redaction_patterns: list[str] = [
        "token",
        "secret",
        "password",
        "authorization",
        "cookie",
    ]
    otel_service_name: str = "statistics"


__all__ = ["BaseServiceConfig"]
