"""
Summaries, filtering and export of generated entries.
"""

import json
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, Sequence

import pandas as pd

from dosecron.settings import DATE_FMT, EXPORT_FORMATS
from dosecron.utils.date import DateLike, to_date

from .core import DateEntry

FRAME_COLUMNS = [
    "interval_number",
    "date",
    "day_name",
    "is_weekend",
    "is_holiday",
    "holiday_name",
    "original_date",
    "was_relocated",
    "relocation_exhausted",
]

EntryPredicate = Callable[[DateEntry], bool]


@dataclass(frozen=True)
class ScheduleSummary:
    """Counts over a list of generated entries."""

    total: int
    working_days: int
    weekends: int
    holidays: int
    relocated: int
    exhausted: int
    first_date: Optional[date]
    last_date: Optional[date]


def summarize(entries: Sequence[DateEntry]) -> ScheduleSummary:
    """Count working days, weekends, holidays and relocations."""
    return ScheduleSummary(
        total=len(entries),
        working_days=sum(1 for e in entries if not e.is_weekend and not e.is_holiday),
        weekends=sum(1 for e in entries if e.is_weekend),
        holidays=sum(1 for e in entries if e.is_holiday),
        relocated=sum(1 for e in entries if e.was_relocated),
        exhausted=sum(1 for e in entries if e.relocation_exhausted),
        first_date=entries[0].date if entries else None,
        last_date=entries[-1].date if entries else None,
    )


def filter_entries(
    entries: Sequence[DateEntry],
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
    working_days_only: bool = False,
    relocated_only: bool = False,
    predicate: Optional[EntryPredicate] = None,
) -> List[DateEntry]:
    """
    Select entries by date range and flags.

    Args:
        entries: Generated entries
        start: Keep entries on or after this date
        end: Keep entries on or before this date
        working_days_only: Drop weekend and holiday entries
        relocated_only: Keep only entries moved off their theoretical date
        predicate: Additional custom condition

    Returns:
        Matching entries in their original order
    """
    start_date = to_date(start) if start is not None else None
    end_date = to_date(end) if end is not None else None

    selected = []
    for entry in entries:
        if start_date and entry.date < start_date:
            continue
        if end_date and entry.date > end_date:
            continue
        if working_days_only and (entry.is_weekend or entry.is_holiday):
            continue
        if relocated_only and not entry.was_relocated:
            continue
        if predicate and not predicate(entry):
            continue
        selected.append(entry)
    return selected


def find_entry(entries: Sequence[DateEntry], dt: DateLike) -> Optional[DateEntry]:
    """Return the entry falling on a date, if any."""
    target = to_date(dt)
    for entry in entries:
        if entry.date == target:
            return entry
    return None


def entries_to_frame(entries: Sequence[DateEntry]) -> pd.DataFrame:
    """Tabulate entries, one row per slot."""
    if not entries:
        return pd.DataFrame(columns=FRAME_COLUMNS)

    rows = [
        {
            "interval_number": entry.interval_number,
            "date": pd.Timestamp(entry.date),
            "day_name": entry.day_name,
            "is_weekend": entry.is_weekend,
            "is_holiday": entry.is_holiday,
            "holiday_name": entry.holiday.name if entry.holiday else None,
            "original_date": pd.Timestamp(entry.original_date),
            "was_relocated": entry.was_relocated,
            "relocation_exhausted": entry.relocation_exhausted,
        }
        for entry in entries
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _to_text(entries: Sequence[DateEntry]) -> str:
    lines = []
    for entry in entries:
        line = f"{entry.interval_number}. {entry.formatted} ({entry.day_name})"
        if entry.is_holiday and entry.holiday:
            line += f" - {entry.holiday.local_name}"
        if entry.was_relocated:
            line += f" [moved from {entry.original_date.strftime(DATE_FMT)}]"
        lines.append(line)
    return "\n".join(lines)


def export_entries(entries: Sequence[DateEntry], fmt: str = "csv") -> str:
    """
    Render entries as text, CSV or JSON.

    Raises:
        ValueError: If the format is not supported
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}. Expected one of {EXPORT_FORMATS}")

    if fmt == "txt":
        return _to_text(entries)
    elif fmt == "csv":
        return entries_to_frame(entries).to_csv(index=False, date_format=DATE_FMT)
    else:
        return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)
