import json
from datetime import date

import pandas as pd
import pytest

from dosecron.schedule import DateEntry
from dosecron.schedule.results import (
    FRAME_COLUMNS,
    entries_to_frame,
    export_entries,
    filter_entries,
    find_entry,
    summarize,
)


@pytest.fixture
def entries(make_holiday):
    return [
        DateEntry(date(2025, 1, 2), 1, False, False, original_date=date(2025, 1, 1)),
        DateEntry(date(2025, 1, 8), 2, False, False, original_date=date(2025, 1, 8)),
        DateEntry(date(2025, 1, 11), 3, True, False, original_date=date(2025, 1, 11)),
        DateEntry(
            date(2025, 1, 20),
            4,
            False,
            True,
            original_date=date(2025, 1, 20),
            holiday=make_holiday(date(2025, 1, 20), "Test Day"),
            relocation_exhausted=True,
        ),
    ]


def test_summarize(entries):
    summary = summarize(entries)
    assert summary.total == 4
    assert summary.working_days == 2
    assert summary.weekends == 1
    assert summary.holidays == 1
    assert summary.relocated == 1
    assert summary.exhausted == 1
    assert summary.first_date == date(2025, 1, 2)
    assert summary.last_date == date(2025, 1, 20)


def test_summarize_empty():
    summary = summarize([])
    assert summary.total == 0
    assert summary.first_date is None
    assert summary.last_date is None


class TestFilterEntries:
    def test_date_range(self, entries):
        assert [e.interval_number for e in filter_entries(entries, start="2025-01-05")] == [2, 3, 4]
        assert [e.interval_number for e in filter_entries(entries, end=date(2025, 1, 11))] == [1, 2, 3]

    def test_working_days_only(self, entries):
        assert [e.interval_number for e in filter_entries(entries, working_days_only=True)] == [1, 2]

    def test_relocated_only(self, entries):
        assert [e.interval_number for e in filter_entries(entries, relocated_only=True)] == [1]

    def test_predicate(self, entries):
        even = filter_entries(entries, predicate=lambda e: e.interval_number % 2 == 0)
        assert [e.interval_number for e in even] == [2, 4]


def test_find_entry(entries):
    assert find_entry(entries, "2025-01-08").interval_number == 2
    assert find_entry(entries, date(2025, 1, 9)) is None


class TestEntriesToFrame:
    def test_columns_and_values(self, entries):
        frame = entries_to_frame(entries)
        assert list(frame.columns) == FRAME_COLUMNS
        assert len(frame) == 4
        assert pd.api.types.is_datetime64_any_dtype(frame["date"])
        assert frame.loc[3, "holiday_name"] == "Test Day"
        assert frame["was_relocated"].tolist() == [True, False, False, False]

    def test_empty(self):
        frame = entries_to_frame([])
        assert frame.empty
        assert list(frame.columns) == FRAME_COLUMNS


class TestExportEntries:
    def test_text(self, entries):
        lines = export_entries(entries, "txt").splitlines()
        assert lines[0] == "1. 02/01/2025 (Thursday) [moved from 2025-01-01]"
        assert lines[3] == "4. 20/01/2025 (Monday) - Test Day"

    def test_csv(self, entries):
        lines = export_entries(entries, "CSV").splitlines()
        assert lines[0] == ",".join(FRAME_COLUMNS)
        assert lines[1].startswith("1,2025-01-02,Thursday,")
        assert len(lines) == 5

    def test_json(self, entries):
        data = json.loads(export_entries(entries, "json"))
        assert len(data) == 4
        assert data[0]["was_relocated"] is True
        assert data[0]["original_date"] == "2025-01-01"
        assert data[3]["holiday"]["name"] == "Test Day"

    def test_unknown_format(self, entries):
        with pytest.raises(ValueError, match="Unsupported export format"):
            export_entries(entries, "xml")
