"""Configuration settings for the cycle ingestor API."""
import os
from typing import Literal


EnvironmentType = Literal["development", "staging", "production"]


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # Parser limits
    MAX_PLAN_LENGTH: int = 50000
    MAX_EXERCISE_LINE_LENGTH: int = 1000

    # Terse prompt defaults
    DEFAULT_PROMPT_WEEKS: int = 8

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        # Parser limits
        self.MAX_PLAN_LENGTH = _int_env("MAX_PLAN_LENGTH", 50000)
        self.MAX_EXERCISE_LINE_LENGTH = _int_env("MAX_EXERCISE_LINE_LENGTH", 1000)

        self.DEFAULT_PROMPT_WEEKS = _int_env("DEFAULT_PROMPT_WEEKS", 8)


settings = Settings()
