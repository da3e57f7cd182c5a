from enum import Enum


class Environment(str, Enum):
    PRODUCTION = "production"
    TESTING = "testing"
    DEVELOPMENT = "development"

    @classmethod
    def is_testing(cls, env: str) -> bool:
        """Testing runs keep spans in-process and never export them."""
        return env.lower() == cls.TESTING.value

    @classmethod
    def is_development(cls, env: str) -> bool:
        """Local runs log plain text instead of JSON."""
        return env.lower() == cls.DEVELOPMENT.value
