"""
Holiday filtering strategies.

Provides composable filters for holiday records.
"""

from typing import Callable, Iterable, List, Optional

from .base import BaseFilter
from .records import HolidayRecord


class NationwideFilter(BaseFilter):
    """
    Keep only holidays observed across the whole country.

    Regional holidays (those limited to some counties) are dropped.
    """

    def filter(self, holidays: List[HolidayRecord]) -> List[HolidayRecord]:
        return [h for h in holidays if h.nationwide]


class HolidayTypeFilter(BaseFilter):
    """
    Filter holidays by Nager.Date holiday type (Public, Bank, School, ...).

    Records without type information are kept.
    """

    PUBLIC_ONLY = {"Public"}

    def __init__(self, allowed_types: Iterable[str]):
        """
        Initialize type filter.

        Args:
            allowed_types: Holiday types to keep (e.g. {"Public", "Bank"})
        """
        self.allowed_types = set(allowed_types)

    @classmethod
    def public_only(cls) -> "HolidayTypeFilter":
        return cls(cls.PUBLIC_ONLY)

    def filter(self, holidays: List[HolidayRecord]) -> List[HolidayRecord]:
        return [
            h for h in holidays
            if not h.types or self.allowed_types.intersection(h.types)
        ]


class CustomFilter(BaseFilter):
    """
    Filter holidays with a custom predicate.
    """

    def __init__(self, predicate: Callable[[HolidayRecord], bool], description: Optional[str] = None):
        """
        Initialize custom filter.

        Args:
            predicate: Function returning True for holidays to keep
            description: Optional description for logging/debugging
        """
        self.predicate = predicate
        self.description = description or "Custom filter"

    def filter(self, holidays: List[HolidayRecord]) -> List[HolidayRecord]:
        return [h for h in holidays if self.predicate(h)]

    def __repr__(self) -> str:
        return f"CustomFilter({self.description})"
