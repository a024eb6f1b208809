"""
Base abstractions for holiday loading.

Defines interfaces for holiday sources and holiday-record filters.
"""

from abc import ABC, abstractmethod
from typing import List, Protocol, runtime_checkable

from .records import HolidayPayload, HolidayRecord


@runtime_checkable
class HolidaySource(Protocol):
    """
    Protocol for holiday providers.

    Any object with a ``fetch(year, country_code)`` method can feed the
    holiday cache (HTTP API, bundled files, QuantLib calendars, test fakes).
    """

    def fetch(self, year: int, country_code: str) -> HolidayPayload:
        """
        Load the public holidays of one country for one year.

        Args:
            year: Calendar year (e.g. 2025)
            country_code: ISO 3166-1 alpha-2 code (e.g. "ES")

        Returns:
            Holiday records or raw Nager.Date style mappings

        Raises:
            HolidayFetchError: If the holidays cannot be obtained
        """
        ...


@runtime_checkable
class HolidayFilter(Protocol):
    """
    Protocol for filtering holiday records.

    Allows composable filtering strategies.
    """

    def filter(self, holidays: List[HolidayRecord]) -> List[HolidayRecord]:
        ...


class BaseHolidaySource(ABC):
    """
    Abstract base class for holiday sources.

    Provides filter registration; subclasses implement ``_load``.
    """

    def __init__(self):
        self._filters: List[HolidayFilter] = []

    def add_filter(self, filter_instance: HolidayFilter) -> None:
        """
        Add a filter to be applied when loading holidays.

        Args:
            filter_instance: Filter to add
        """
        self._filters.append(filter_instance)

    def _apply_filters(self, holidays: List[HolidayRecord]) -> List[HolidayRecord]:
        result = holidays
        for filter_instance in self._filters:
            result = filter_instance.filter(result)
        return result

    def fetch(self, year: int, country_code: str) -> List[HolidayRecord]:
        """Load holidays and apply the registered filters."""
        return self._apply_filters(self._load(year, country_code.upper()))

    @abstractmethod
    def _load(self, year: int, country_code: str) -> List[HolidayRecord]:
        """Load holidays (to be implemented by subclasses)."""
        pass


class BaseFilter(ABC):
    """
    Abstract base class for holiday filters.
    """

    @abstractmethod
    def filter(self, holidays: List[HolidayRecord]) -> List[HolidayRecord]:
        """
        Filter holidays based on specific criteria.

        Args:
            holidays: Holidays to filter

        Returns:
            Filtered holidays
        """
        pass
