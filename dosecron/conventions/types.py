"""
Basic types and enums used across the scheduling system.
"""

from enum import Enum


class DurationUnit(Enum):
    """Units for the total schedule duration."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"


class IntervalUnit(Enum):
    """Units for the spacing between recurring dates."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


class GenerationState(Enum):
    """Stages of a single generation run."""

    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    RESOLVING_PERIOD = "RESOLVING_PERIOD"
    LOADING_HOLIDAYS = "LOADING_HOLIDAYS"
    COUNTING = "COUNTING"
    GENERATING = "GENERATING"
    DONE = "DONE"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (GenerationState.DONE, GenerationState.FAILED)
