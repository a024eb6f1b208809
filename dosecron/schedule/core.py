"""
Core data structures for recurring date generation.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Union

from dosecron.conventions.types import DurationUnit, GenerationState, IntervalUnit
from dosecron.errors import ConfigurationError
from dosecron.holidays.records import HolidayRecord
from dosecron.utils.date import DateLike, datetime_to_str, format_display

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Keys sent by form-style clients
_FIELD_ALIASES = {
    "startDate": "start_date",
    "intervalUnit": "interval_unit",
    "durationUnit": "duration_unit",
    "excludeWeekends": "exclude_weekends",
    "excludeHolidays": "exclude_holidays",
    "countryCode": "country_code",
    "country": "country_code",
}


@dataclass(frozen=True)
class RecurrenceConfig:
    """Input of one generation run.

    ``start_date`` and the numeric fields are kept as given; the validator
    decides whether they are acceptable. Unit strings are converted to enums
    when they name a known unit.
    """

    start_date: Optional[DateLike] = None
    interval: Optional[int] = None
    duration: Optional[int] = None
    duration_unit: Union[DurationUnit, str] = DurationUnit.MONTHS
    interval_unit: Union[IntervalUnit, str] = IntervalUnit.DAYS
    exclude_weekends: bool = True
    exclude_holidays: bool = True
    country_code: Optional[str] = None

    def __post_init__(self):
        for name, enum_cls in (("duration_unit", DurationUnit), ("interval_unit", IntervalUnit)):
            value = getattr(self, name)
            if isinstance(value, str):
                try:
                    object.__setattr__(self, name, enum_cls(value.strip().lower()))
                except ValueError:
                    pass
        if isinstance(self.country_code, str):
            object.__setattr__(self, "country_code", self.country_code.strip().upper() or None)

    @property
    def has_exclusions(self) -> bool:
        return self.exclude_weekends or self.exclude_holidays

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "RecurrenceConfig":
        """
        Build a config from a plain mapping.

        Accepts field names and the camelCase keys used by form clients.

        Raises:
            ConfigurationError: If the mapping holds unknown keys
        """
        known = {f.name for f in fields(cls)}
        values = {}
        unknown = []
        for key, value in mapping.items():
            name = _FIELD_ALIASES.get(key, key)
            if name not in known:
                unknown.append(key)
                continue
            values[name] = value
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**values)

    def with_changes(self, **changes) -> "RecurrenceConfig":
        return replace(self, **changes)


@dataclass(frozen=True)
class DateEntry:
    """One generated date of the recurrence."""

    date: date
    interval_number: int
    is_weekend: bool
    is_holiday: bool
    original_date: date
    holiday: Optional[HolidayRecord] = None
    relocation_exhausted: bool = False

    @property
    def date_string(self) -> str:
        return datetime_to_str(self.date)

    @property
    def was_relocated(self) -> bool:
        return self.date != self.original_date

    @property
    def formatted(self) -> str:
        return format_display(self.date)

    @property
    def day_of_week(self) -> int:
        """ISO weekday, Monday=1 ... Sunday=7."""
        return self.date.isoweekday()

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.date.weekday()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date_string,
            "interval_number": self.interval_number,
            "formatted": self.formatted,
            "day_name": self.day_name,
            "is_weekend": self.is_weekend,
            "is_holiday": self.is_holiday,
            "holiday": self.holiday.to_dict() if self.holiday else None,
            "original_date": datetime_to_str(self.original_date),
            "was_relocated": self.was_relocated,
            "relocation_exhausted": self.relocation_exhausted,
        }


@dataclass
class GenerationResult:
    """Entries of one run together with its advisory messages."""

    entries: List[DateEntry]
    end_date: Optional[date] = None
    interval_days: int = 0
    warnings: List[str] = field(default_factory=list)
    holidays_loaded: bool = False
    state: GenerationState = GenerationState.DONE

    def __len__(self) -> int:
        return len(self.entries)
