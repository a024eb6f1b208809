"""
QuantLib-backed national holiday calendars.

This module wraps QuantLib's built-in country calendars so they can serve as an
offline holiday source when no holiday API is reachable.
"""

from datetime import date, datetime
from typing import Callable, Dict, List, Union

import QuantLib as ql


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    if isinstance(dt, datetime):
        dt = dt.date()
    return ql.Date(dt.day, dt.month, dt.year)


def _to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class Calendar:
    """National calendar backed by a QuantLib calendar."""

    def __init__(self, country_code: str, ql_calendar: ql.Calendar):
        self.country_code = country_code
        self._ql_calendar = ql_calendar

    @property
    def name(self) -> str:
        return self._ql_calendar.name()

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a public holiday that does not fall on a weekend."""
        ql_date = _to_ql_date(dt)
        return self._ql_calendar.isHoliday(ql_date) and not self._ql_calendar.isWeekend(
            ql_date.weekday()
        )

    def holidays_in_year(self, year: int) -> List[date]:
        """List the non-weekend holidays of a calendar year in date order."""
        current = ql.Date(1, 1, year)
        end = ql.Date(31, 12, year)

        holidays = []
        while current <= end:
            if self._ql_calendar.isHoliday(current) and not self._ql_calendar.isWeekend(
                current.weekday()
            ):
                holidays.append(_to_py_date(current))
            current += 1
        return holidays


# Calendars are built on first use; some QuantLib markets need constructor arguments
_CALENDAR_FACTORIES: Dict[str, Callable[[], ql.Calendar]] = {
    "AR": lambda: ql.Argentina(ql.Argentina.Merval),
    "AU": lambda: ql.Australia(),
    "BR": lambda: ql.Brazil(ql.Brazil.Settlement),
    "CA": lambda: ql.Canada(ql.Canada.Settlement),
    "CH": lambda: ql.Switzerland(),
    "DE": lambda: ql.Germany(ql.Germany.Settlement),
    "FR": lambda: ql.France(ql.France.Settlement),
    "GB": lambda: ql.UnitedKingdom(ql.UnitedKingdom.Settlement),
    "IT": lambda: ql.Italy(ql.Italy.Settlement),
    "JP": lambda: ql.Japan(),
    "KR": lambda: ql.SouthKorea(ql.SouthKorea.Settlement),
    "MX": lambda: ql.Mexico(ql.Mexico.BMV),
    "SE": lambda: ql.Sweden(),
    "US": lambda: ql.UnitedStates(ql.UnitedStates.Settlement),
}

_CALENDARS: Dict[str, Calendar] = {}


def available_countries() -> List[str]:
    """Country codes that have a QuantLib calendar."""
    return sorted(_CALENDAR_FACTORIES)


def get_calendar(country_code: str) -> Calendar:
    """
    Get the national calendar for a country.

    Args:
        country_code: ISO 3166-1 alpha-2 code (case-insensitive)

    Raises:
        ValueError: If no QuantLib calendar is registered for the country
    """
    code = country_code.upper()
    if code not in _CALENDAR_FACTORIES:
        raise ValueError(
            f"Unknown calendar: {country_code}. Available: {available_countries()}"
        )
    if code not in _CALENDARS:
        _CALENDARS[code] = Calendar(code, _CALENDAR_FACTORIES[code]())
    return _CALENDARS[code]
