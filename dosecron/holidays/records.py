"""
Holiday record schema and payload normalization.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from dosecron.utils.date import datetime_to_str, to_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HolidayRecord:
    """A public holiday of one country on one calendar day."""

    date: date
    local_name: str
    name: str
    country_code: str
    fixed: bool = False
    nationwide: bool = True
    counties: Optional[Tuple[str, ...]] = None
    types: Tuple[str, ...] = field(default_factory=tuple)
    launch_year: Optional[int] = None

    @property
    def date_string(self) -> str:
        """ISO date used as the holiday index key."""
        return datetime_to_str(self.date)

    @classmethod
    def from_payload(cls, item: Mapping[str, Any], country_code: str) -> "HolidayRecord":
        """
        Build a record from a Nager.Date style mapping.

        Args:
            item: Mapping with at least ``date`` and ``name`` or ``localName``
            country_code: Country used when the payload omits ``countryCode``

        Raises:
            ValueError: If the date or both names are missing or invalid
        """
        raw_date = item.get("date")
        if not raw_date:
            raise ValueError("holiday entry has no date")
        try:
            holiday_date = to_date(raw_date)
        except TypeError as exc:
            raise ValueError(f"holiday entry has invalid date: {raw_date!r}") from exc

        name = item.get("name") or item.get("localName")
        if not name:
            raise ValueError(f"holiday entry on {raw_date} has no name")

        counties = item.get("counties")
        types = item.get("types") or ([item["type"]] if item.get("type") else [])

        return cls(
            date=holiday_date,
            local_name=item.get("localName") or name,
            name=name,
            country_code=(item.get("countryCode") or country_code).upper(),
            fixed=bool(item.get("fixed", False)),
            nationwide=bool(item.get("global", True)),
            counties=tuple(counties) if counties else None,
            types=tuple(types),
            launch_year=item.get("launchYear"),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date_string,
            "localName": self.local_name,
            "name": self.name,
            "countryCode": self.country_code,
            "fixed": self.fixed,
            "global": self.nationwide,
            "counties": list(self.counties) if self.counties else None,
            "types": list(self.types),
            "launchYear": self.launch_year,
        }


HolidayPayload = Sequence[Union[HolidayRecord, Mapping[str, Any]]]


def normalize_holidays(payload: HolidayPayload, country_code: str) -> List[HolidayRecord]:
    """
    Turn a raw source payload into holiday records sorted by date.

    Malformed entries are dropped and a missing local name defaults to the
    English name.

    Args:
        payload: Records or mappings returned by a holiday source
        country_code: Country the payload was requested for

    Returns:
        Normalized holiday records
    """
    if isinstance(payload, (str, bytes)) or not isinstance(payload, Sequence):
        raise ValueError(f"Holiday payload must be a list, got {type(payload).__name__}")

    records = []
    for item in payload:
        if isinstance(item, HolidayRecord):
            if not item.local_name:
                item = replace(item, local_name=item.name)
            records.append(item)
            continue
        if not isinstance(item, Mapping):
            logger.debug("Skipping non-mapping holiday entry: %r", item)
            continue
        try:
            records.append(HolidayRecord.from_payload(item, country_code))
        except ValueError as exc:
            logger.debug("Skipping malformed holiday entry for %s: %s", country_code, exc)

    return sorted(records, key=lambda r: r.date)
