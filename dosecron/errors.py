"""Exception and warning types raised by the recurrence engine."""

from datetime import date
from typing import List, Optional, Sequence


class DoseCronError(Exception):
    """Base class for all engine errors."""


class ValidationError(DoseCronError, ValueError):
    """Raised when a recurrence configuration fails validation.

    When several rules fail at once the individual errors are kept in
    ``errors`` and the message holds one line per failed rule.
    """

    def __init__(self, message: str, errors: Optional[Sequence["ValidationError"]] = None):
        super().__init__(message)
        self.errors: List[ValidationError] = list(errors) if errors else [self]

    @classmethod
    def aggregate(cls, errors: Sequence["ValidationError"]) -> "ValidationError":
        """Return the single error, or one error wrapping all of them."""
        if len(errors) == 1:
            return errors[0]
        message = "\n".join(str(err) for err in errors)
        return cls(message, errors)


class InvalidDateError(ValidationError):
    """Start date is missing or does not parse to a calendar date."""


class IntervalRangeError(ValidationError):
    """Interval is not a positive integer within the allowed range."""


class DurationRangeError(ValidationError):
    """Duration is not a positive integer within the allowed range."""


class InvalidUnitError(ValidationError):
    """Duration or interval unit is not one of the supported units."""


class ConfigurationError(DoseCronError, ValueError):
    """Raised for configuration the engine cannot interpret (e.g. unknown unit)."""


class HolidayFetchError(DoseCronError):
    """Raised when a holiday source cannot deliver holidays for a country/year."""

    def __init__(
        self,
        message: str,
        country_code: Optional[str] = None,
        year: Optional[int] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.country_code = country_code
        self.year = year
        self.status_code = status_code


class RelocationExhaustedWarning(UserWarning):
    """A slot could not be moved to an allowed day within the attempt bound."""

    def __init__(self, interval_number: int, original_date: date, final_date: date, attempts: int):
        super().__init__(
            f"Slot {interval_number}: no allowed day found within {attempts} days "
            f"of {original_date.isoformat()}; keeping {final_date.isoformat()}"
        )
        self.interval_number = interval_number
        self.original_date = original_date
        self.final_date = final_date
        self.attempts = attempts
