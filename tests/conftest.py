"""Shared fixtures: in-memory holiday source, fake clock and fake HTTP session."""

from datetime import date

import pytest
import requests

from dosecron.errors import HolidayFetchError
from dosecron.holidays import HolidayCache, HolidayRecord
from dosecron.settings import EngineSettings


class FakeHolidaySource:
    """In-memory holiday source that counts calls per (country, year)."""

    def __init__(self, holidays=None, failing_years=()):
        self.holidays = holidays or {}
        self.failing_years = set(failing_years)
        self.calls = []

    def fetch(self, year, country_code):
        self.calls.append((country_code, year))
        if year in self.failing_years:
            raise HolidayFetchError("source unavailable", country_code=country_code, year=year)
        return list(self.holidays.get((country_code, year), []))


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code=200, payload=None, reason="OK", invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason
        self._invalid_json = invalid_json

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays one response or raises."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(payload=[])
        self.error = error
        self.requests = []

    def get(self, url, headers=None, timeout=None):
        self.requests.append({"url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def holiday(day, name="Holiday", country_code="ES"):
    return HolidayRecord(date=day, local_name=name, name=name, country_code=country_code)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return HolidayCache(ttl=3600, clock=clock)


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def spanish_source():
    """Spain 2025 with New Year, Epiphany and the first May weekday holiday."""
    return FakeHolidaySource(
        {
            ("ES", 2025): [
                holiday(date(2025, 1, 1), "Año Nuevo"),
                holiday(date(2025, 1, 6), "Epifanía del Señor"),
                holiday(date(2025, 5, 1), "Fiesta del Trabajo"),
                holiday(date(2025, 12, 25), "Navidad"),
            ],
            ("ES", 2026): [holiday(date(2026, 1, 1), "Año Nuevo")],
        }
    )


@pytest.fixture
def timeout_session():
    return FakeSession(error=requests.Timeout("read timed out"))


@pytest.fixture
def make_holiday():
    return holiday


@pytest.fixture
def make_source():
    return FakeHolidaySource


@pytest.fixture
def make_session():
    def _make(status_code=200, payload=None, reason="OK", invalid_json=False):
        return FakeSession(FakeResponse(status_code, payload, reason, invalid_json))

    return _make
