"""
Period resolution and closed-form date counting.
"""

from datetime import date, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

from dosecron.conventions.types import DurationUnit, IntervalUnit
from dosecron.errors import ConfigurationError
from dosecron.settings import DAYS_PER_MONTH, DAYS_PER_WEEK


def _coerce_unit(unit, enum_cls):
    if isinstance(unit, enum_cls):
        return unit
    if isinstance(unit, str):
        try:
            return enum_cls(unit.strip().lower())
        except ValueError:
            pass
    raise ConfigurationError(f"Unknown {enum_cls.__name__}: {unit!r}")


def interval_to_days(interval: int, interval_unit: Union[IntervalUnit, str] = IntervalUnit.DAYS) -> int:
    """Convert a unit-qualified interval to days (week = 7, month = 30)."""
    unit = _coerce_unit(interval_unit, IntervalUnit)
    if unit == IntervalUnit.DAYS:
        return interval
    elif unit == IntervalUnit.WEEKS:
        return interval * DAYS_PER_WEEK
    elif unit == IntervalUnit.MONTHS:
        return interval * DAYS_PER_MONTH
    raise ConfigurationError(f"Unknown interval unit: {interval_unit!r}")


def resolve_end_date(
    start_date: date, duration: int, duration_unit: Union[DurationUnit, str]
) -> date:
    """
    Exclusive end of the period starting at ``start_date``.

    Months and years are added on the calendar and clamp to the end of a
    shorter month (Jan 31 + 1 month = Feb 28/29, Feb 29 + 1 year = Feb 28).

    Raises:
        ConfigurationError: If the duration unit is unknown or the period ends
            outside the supported date range
    """
    unit = _coerce_unit(duration_unit, DurationUnit)

    try:
        if unit == DurationUnit.DAYS:
            return start_date + timedelta(days=duration)
        elif unit == DurationUnit.WEEKS:
            return start_date + timedelta(days=duration * DAYS_PER_WEEK)
        elif unit == DurationUnit.MONTHS:
            return start_date + relativedelta(months=duration)
        elif unit == DurationUnit.YEARS:
            return start_date + relativedelta(years=duration)
    except (OverflowError, ValueError) as exc:
        raise ConfigurationError(
            f"Period of {duration} {unit.value} from {start_date.isoformat()} "
            f"ends outside the supported date range"
        ) from exc
    raise ConfigurationError(f"Unknown duration unit: {duration_unit!r}")


def total_days(start_date: date, end_date: date) -> int:
    """Whole days in the half-open period [start_date, end_date)."""
    return (end_date - start_date).days


def count_dates(start_date: date, end_date: date, interval_days: int) -> int:
    """
    Number of recurring dates in [start_date, end_date).

    Slot ``i`` sits at offset ``i * interval_days``; the start date is slot 0.
    The count does not depend on weekend or holiday exclusion.
    """
    if interval_days <= 0:
        return 0
    days = total_days(start_date, end_date)
    if days <= 0:
        return 0
    return days // interval_days
