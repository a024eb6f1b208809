"""
Engine settings, validation limits and configuration defaults.
"""

import os
from dataclasses import dataclass

# Validation limits
MIN_INTERVAL = 1
MAX_INTERVAL = 365
MIN_DURATION = 1
MAX_DURATION = 100

# Unit conversions
DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30

# Holiday lookups
DEFAULT_HOLIDAY_TTL = 24 * 60 * 60  # seconds
DEFAULT_MAX_RELOCATION_ATTEMPTS = 30
DEFAULT_HOLIDAY_API_URL = "https://date.nager.at/api/v3"
DEFAULT_REQUEST_TIMEOUT = 10.0  # seconds
MIN_HOLIDAY_YEAR = 1900
MAX_HOLIDAY_YEAR = 2100

# Formats
DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"
DISPLAY_FMT = "%d/%m/%Y"
EXPORT_FORMATS = ("txt", "csv", "json")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


@dataclass(frozen=True)
class EngineSettings:
    """Runtime settings for holiday loading and date relocation."""

    holiday_ttl: float = DEFAULT_HOLIDAY_TTL
    max_relocation_attempts: int = DEFAULT_MAX_RELOCATION_ATTEMPTS
    holiday_api_base_url: str = DEFAULT_HOLIDAY_API_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    def __post_init__(self):
        if self.holiday_ttl <= 0:
            raise ValueError("holiday_ttl must be positive")
        if self.max_relocation_attempts < 1:
            raise ValueError("max_relocation_attempts must be at least 1")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """
        Build settings from environment variables, falling back to defaults.

        Reads DOSECRON_HOLIDAY_TTL, DOSECRON_MAX_RELOCATION_ATTEMPTS,
        DOSECRON_HOLIDAY_API_URL and DOSECRON_REQUEST_TIMEOUT.
        """
        return cls(
            holiday_ttl=_env_float("DOSECRON_HOLIDAY_TTL", DEFAULT_HOLIDAY_TTL),
            max_relocation_attempts=_env_int(
                "DOSECRON_MAX_RELOCATION_ATTEMPTS", DEFAULT_MAX_RELOCATION_ATTEMPTS
            ),
            holiday_api_base_url=os.getenv("DOSECRON_HOLIDAY_API_URL") or DEFAULT_HOLIDAY_API_URL,
            request_timeout=_env_float("DOSECRON_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        )
