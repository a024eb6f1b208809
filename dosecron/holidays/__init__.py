"""
Holiday loading module.

Provides holiday sources, filters and the TTL holiday cache.
"""

from .base import BaseFilter, BaseHolidaySource, HolidayFilter, HolidaySource
from .cache import CacheEntry, HolidayCache, HolidayLoadResult
from .factory import HolidaySourceType, create_holiday_source
from .filters import CustomFilter, HolidayTypeFilter, NationwideFilter
from .loaders import (
    SUPPORTED_COUNTRIES,
    JSONHolidaySource,
    NagerDateHolidaySource,
    QuantLibHolidaySource,
    get_countries,
)
from .records import HolidayRecord, normalize_holidays

__all__ = [
    # Base abstractions
    "HolidaySource",
    "HolidayFilter",
    "BaseHolidaySource",
    "BaseFilter",
    # Records
    "HolidayRecord",
    "normalize_holidays",
    # Concrete implementations
    "NagerDateHolidaySource",
    "QuantLibHolidaySource",
    "JSONHolidaySource",
    "SUPPORTED_COUNTRIES",
    "get_countries",
    # Filters
    "NationwideFilter",
    "HolidayTypeFilter",
    "CustomFilter",
    # Cache
    "HolidayCache",
    "HolidayLoadResult",
    "CacheEntry",
    # Factory
    "create_holiday_source",
    "HolidaySourceType",
]
