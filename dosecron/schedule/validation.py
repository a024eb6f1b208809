"""
Validation of recurrence configurations.
"""

import logging
import numbers
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from dosecron.conventions.types import DurationUnit, IntervalUnit
from dosecron.errors import (
    DurationRangeError,
    IntervalRangeError,
    InvalidDateError,
    InvalidUnitError,
    ValidationError,
)
from dosecron.settings import MAX_DURATION, MAX_INTERVAL, MIN_DURATION, MIN_INTERVAL
from dosecron.utils.date import to_date

from .core import RecurrenceConfig
from .period import interval_to_days, resolve_end_date, total_days

logger = logging.getLogger(__name__)


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass(frozen=True)
class ValidationReport:
    """Normalized values of a configuration that passed validation."""

    start_date: date
    interval_days: int
    duration: int
    duration_unit: DurationUnit
    end_date: date
    warnings: Tuple[str, ...] = ()


class ConfigValidator:
    """Checks a RecurrenceConfig against the allowed ranges."""

    def __init__(
        self,
        min_interval: int = MIN_INTERVAL,
        max_interval: int = MAX_INTERVAL,
        min_duration: int = MIN_DURATION,
        max_duration: int = MAX_DURATION,
    ):
        self.min_interval = min_interval
        self.max_interval = max_interval
        self.min_duration = min_duration
        self.max_duration = max_duration

    def _check_start_date(self, config: RecurrenceConfig) -> Tuple[Optional[date], Optional[ValidationError]]:
        if config.start_date is None or config.start_date == "":
            return None, InvalidDateError("Start date is required")
        try:
            return to_date(config.start_date), None
        except (TypeError, ValueError):
            return None, InvalidDateError(f"Invalid start date: {config.start_date!r}")

    def _check_interval(self, config: RecurrenceConfig) -> Tuple[Optional[int], Optional[ValidationError]]:
        if not isinstance(config.interval_unit, IntervalUnit):
            return None, InvalidUnitError(f"Unknown interval unit: {config.interval_unit!r}")
        message = (
            f"Interval must be a whole number of days between "
            f"{self.min_interval} and {self.max_interval}, got {config.interval!r}"
        )
        if not _is_integer(config.interval):
            return None, IntervalRangeError(message)
        days = interval_to_days(int(config.interval), config.interval_unit)
        if days < self.min_interval or days > self.max_interval:
            return None, IntervalRangeError(
                f"Interval must be a whole number of days between "
                f"{self.min_interval} and {self.max_interval}, got {days} days"
            )
        return days, None

    def _check_duration(self, config: RecurrenceConfig) -> Optional[ValidationError]:
        if not _is_integer(config.duration) or not (
            self.min_duration <= config.duration <= self.max_duration
        ):
            return DurationRangeError(
                f"Duration must be a whole number between "
                f"{self.min_duration} and {self.max_duration}, got {config.duration!r}"
            )
        return None

    def _check_duration_unit(self, config: RecurrenceConfig) -> Optional[ValidationError]:
        if not isinstance(config.duration_unit, DurationUnit):
            return InvalidUnitError(f"Unknown duration unit: {config.duration_unit!r}")
        return None

    def _run_checks(self, config: RecurrenceConfig):
        start_date, start_error = self._check_start_date(config)
        interval_days, interval_error = self._check_interval(config)
        errors = [
            start_error,
            interval_error,
            self._check_duration(config),
            self._check_duration_unit(config),
        ]
        return start_date, interval_days, [err for err in errors if err is not None]

    def collect_errors(self, config: RecurrenceConfig) -> List[ValidationError]:
        """Return every failed rule without raising."""
        return self._run_checks(config)[2]

    def validate(self, config: RecurrenceConfig) -> ValidationReport:
        """
        Validate a configuration.

        Args:
            config: Configuration to check

        Returns:
            Report with the parsed start date, interval in days and end date

        Raises:
            ValidationError: The failing rule's subtype when one rule fails,
                otherwise a ValidationError carrying all of them in ``errors``
        """
        start_date, interval_days, errors = self._run_checks(config)
        if errors:
            raise ValidationError.aggregate(errors)

        end_date = resolve_end_date(start_date, int(config.duration), config.duration_unit)

        warnings = []
        if config.exclude_holidays and not config.country_code:
            warnings.append("Holiday exclusion is enabled but no country code is set; holidays are ignored")
        period_days = total_days(start_date, end_date)
        if interval_days > period_days:
            warnings.append(
                f"Interval of {interval_days} days exceeds the {period_days}-day period; no dates fit"
            )
        elif interval_days == period_days:
            warnings.append(
                f"Interval of {interval_days} days equals the period length; only the start date fits"
            )
        for message in warnings:
            logger.warning(message)

        return ValidationReport(
            start_date=start_date,
            interval_days=interval_days,
            duration=int(config.duration),
            duration_unit=config.duration_unit,
            end_date=end_date,
            warnings=tuple(warnings),
        )
