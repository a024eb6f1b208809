"""
Factory for creating holiday sources.

Provides convenient methods for creating and configuring holiday sources.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from dosecron.settings import EngineSettings

from .base import BaseHolidaySource
from .filters import HolidayTypeFilter, NationwideFilter
from .loaders import JSONHolidaySource, NagerDateHolidaySource, QuantLibHolidaySource


class HolidaySourceType(Enum):
    """Supported holiday source types."""
    NAGER_DATE = "nager_date"
    QUANTLIB = "quantlib"
    JSON = "json"


def create_holiday_source(
    source_type: HolidaySourceType = HolidaySourceType.NAGER_DATE,
    settings: Optional[EngineSettings] = None,
    nationwide_only: bool = False,
    public_only: bool = False,
    **kwargs
) -> BaseHolidaySource:
    """
    Create holiday source with appropriate configuration.

    Args:
        source_type: Type of holiday source to create
        settings: Engine settings supplying API URL and timeout
        nationwide_only: Drop regional holidays
        public_only: Keep only holidays typed as "Public"
        **kwargs: Configuration parameters specific to source type

    Returns:
        Configured holiday source

    Examples:
        >>> # Nager.Date API with default settings
        >>> source = create_holiday_source()

        >>> # Offline source using QuantLib calendars
        >>> source = create_holiday_source(HolidaySourceType.QUANTLIB)

        >>> # JSON files
        >>> source = create_holiday_source(
        ...     HolidaySourceType.JSON,
        ...     data_directory="/path/to/holidays"
        ... )
    """
    if isinstance(source_type, str):
        source_type = HolidaySourceType(source_type)

    if source_type == HolidaySourceType.NAGER_DATE:
        settings = settings or EngineSettings.from_env()
        source = NagerDateHolidaySource(
            base_url=kwargs.get("base_url") or settings.holiday_api_base_url,
            timeout=kwargs.get("timeout") or settings.request_timeout,
            session=kwargs.get("session"),
        )
    elif source_type == HolidaySourceType.QUANTLIB:
        source = QuantLibHolidaySource()
    elif source_type == HolidaySourceType.JSON:
        data_directory = kwargs.get("data_directory")
        if not data_directory:
            raise ValueError("data_directory required for JSON holiday source")
        source = JSONHolidaySource(data_directory=Path(data_directory))
    else:
        raise ValueError(f"Unsupported holiday source type: {source_type}")

    if nationwide_only:
        source.add_filter(NationwideFilter())
    if public_only:
        source.add_filter(HolidayTypeFilter.public_only())

    return source
