from datetime import date, datetime
from typing import Iterator, Union

from pandas import Timestamp

from dosecron.settings import COMPACT_FMT, DATE_FMT, DISPLAY_FMT

DateLike = Union[str, date, datetime, Timestamp]


def to_date(date_like: DateLike) -> date:
    """
    Convert a string, datetime or pandas Timestamp to a calendar date.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        text = date_like.strip()
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Unsupported date string format: {date_like!r}")
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def datetime_to_str(datetime_date: DateLike) -> str:
    """
    Format a date-like into 'YYYY-MM-DD' string.
    """
    return to_date(datetime_date).strftime(DATE_FMT)


def format_display(dt: date) -> str:
    """Format a date as 'DD/MM/YYYY'."""
    return dt.strftime(DISPLAY_FMT)


def is_weekend(dt: date) -> bool:
    """True for Saturday and Sunday."""
    return dt.weekday() in (5, 6)


def iter_years(start: date, end: date) -> Iterator[int]:
    """Yield every calendar year touched by the closed range [start, end]."""
    for year in range(start.year, end.year + 1):
        yield year
