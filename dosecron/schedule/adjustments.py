"""
Weekend and holiday exclusion for generated dates.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, Optional

from dosecron.holidays.records import HolidayRecord
from dosecron.utils.date import datetime_to_str, is_weekend

HolidayIndex = Dict[str, HolidayRecord]


def build_holiday_index(records: Iterable[HolidayRecord]) -> HolidayIndex:
    """Index holidays by 'YYYY-MM-DD'. The first record for a date wins."""
    index: HolidayIndex = {}
    for record in records:
        index.setdefault(record.date_string, record)
    return index


@dataclass(frozen=True)
class ExclusionResult:
    """Classification of a single date."""

    is_weekend: bool
    is_holiday: bool
    holiday: Optional[HolidayRecord]
    should_exclude: bool


def evaluate_exclusions(
    dt: date,
    holiday_index: HolidayIndex,
    exclude_weekends: bool = True,
    exclude_holidays: bool = True,
) -> ExclusionResult:
    """Classify a date and decide whether it must be moved."""
    weekend = is_weekend(dt)
    holiday = holiday_index.get(datetime_to_str(dt))
    is_holiday = holiday is not None
    return ExclusionResult(
        is_weekend=weekend,
        is_holiday=is_holiday,
        holiday=holiday,
        should_exclude=(exclude_weekends and weekend) or (exclude_holidays and is_holiday),
    )


@dataclass(frozen=True)
class Relocation:
    """Where a theoretical date ended up after exclusion."""

    date: date
    exclusion: ExclusionResult
    attempts: int
    exhausted: bool


def relocate_date(
    dt: date,
    holiday_index: HolidayIndex,
    max_attempts: int,
    exclude_weekends: bool = True,
    exclude_holidays: bool = True,
) -> Relocation:
    """
    Move a date forward one day at a time until it is allowed.

    At most ``max_attempts`` candidates are tried, the original date
    included, and the search stops at ``date.max``. If none is allowed the
    last candidate is kept and the relocation is flagged as exhausted.

    Args:
        dt: Theoretical date
        holiday_index: Holidays keyed by 'YYYY-MM-DD'
        max_attempts: Upper bound on candidates tried
        exclude_weekends: Treat Saturday and Sunday as excluded
        exclude_holidays: Treat indexed holidays as excluded

    Returns:
        Relocation with the final date and its classification
    """
    candidate = dt
    exclusion = evaluate_exclusions(candidate, holiday_index, exclude_weekends, exclude_holidays)
    attempts = 1
    while exclusion.should_exclude and attempts < max_attempts and candidate < date.max:
        candidate += timedelta(days=1)
        exclusion = evaluate_exclusions(candidate, holiday_index, exclude_weekends, exclude_holidays)
        attempts += 1
    return Relocation(
        date=candidate,
        exclusion=exclusion,
        attempts=attempts,
        exhausted=exclusion.should_exclude,
    )
