"""Recurring Date Schedule Engine.

This package generates recurring calendar dates (medication doses, billing
cycles) from an anchor date, a fixed interval and a total duration, relocating
dates that fall on weekends or public holidays.

Key modules:
- schedule: Period resolution, date counting, validation and generation
- holidays: Holiday sources and the TTL holiday cache
- conventions: Duration/interval units and QuantLib national calendars
- settings: Engine settings and validation limits
"""

from .errors import (
    ConfigurationError,
    DoseCronError,
    DurationRangeError,
    HolidayFetchError,
    IntervalRangeError,
    InvalidDateError,
    InvalidUnitError,
    RelocationExhaustedWarning,
    ValidationError,
)
from .holidays import HolidayCache, HolidayRecord, create_holiday_source
from .schedule import (
    DateEntry,
    RecurrenceConfig,
    RecurrenceGenerator,
    generate_dates,
)
from .settings import EngineSettings

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Engine
    "RecurrenceConfig",
    "RecurrenceGenerator",
    "DateEntry",
    "generate_dates",
    "EngineSettings",
    # Holidays
    "HolidayCache",
    "HolidayRecord",
    "create_holiday_source",
    # Errors
    "DoseCronError",
    "ValidationError",
    "InvalidDateError",
    "IntervalRangeError",
    "DurationRangeError",
    "InvalidUnitError",
    "ConfigurationError",
    "HolidayFetchError",
    "RelocationExhaustedWarning",
]
