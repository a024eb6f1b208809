import json
from datetime import date

import pytest
import requests

from dosecron.conventions.calendars_quantlib import available_countries, get_calendar
from dosecron.errors import HolidayFetchError
from dosecron.holidays import (
    CustomFilter,
    HolidaySource,
    HolidaySourceType,
    HolidayTypeFilter,
    JSONHolidaySource,
    NagerDateHolidaySource,
    NationwideFilter,
    QuantLibHolidaySource,
    create_holiday_source,
    get_countries,
)
from dosecron.settings import EngineSettings

SPAIN_2025 = [
    {
        "date": "2025-01-01",
        "localName": "Año Nuevo",
        "name": "New Year's Day",
        "countryCode": "ES",
        "fixed": True,
        "global": True,
        "counties": None,
        "launchYear": None,
        "types": ["Public"],
    },
    {
        "date": "2025-03-19",
        "localName": "San José",
        "name": "Saint Joseph's Day",
        "countryCode": "ES",
        "fixed": False,
        "global": False,
        "counties": ["ES-MC", "ES-VC"],
        "launchYear": None,
        "types": ["Public"],
    },
    {
        "date": "2025-08-15",
        "localName": "Asunción",
        "name": "Assumption",
        "countryCode": "ES",
        "fixed": True,
        "global": True,
        "counties": None,
        "launchYear": None,
        "types": ["Public", "Bank"],
    },
]


class TestNagerDateHolidaySource:
    def test_fetches_and_normalizes(self, make_session):
        session = make_session(payload=SPAIN_2025)
        source = NagerDateHolidaySource(base_url="https://holidays.test/api/v3/", timeout=3, session=session)

        records = source.fetch(2025, "es")

        request = session.requests[0]
        assert request["url"] == "https://holidays.test/api/v3/PublicHolidays/2025/ES"
        assert request["headers"] == {"Accept": "application/json"}
        assert request["timeout"] == 3
        assert [r.local_name for r in records] == ["Año Nuevo", "San José", "Asunción"]
        assert records[1].counties == ("ES-MC", "ES-VC")
        assert not records[1].nationwide

    def test_satisfies_protocol(self, make_session):
        assert isinstance(NagerDateHolidaySource(session=make_session()), HolidaySource)

    def test_no_content(self, make_session):
        source = NagerDateHolidaySource(session=make_session(status_code=204))
        assert source.fetch(2025, "ES") == []

    def test_not_found(self, make_session):
        source = NagerDateHolidaySource(session=make_session(status_code=404, reason="Not Found"))
        with pytest.raises(HolidayFetchError, match="No holidays found for Spain in 2025") as excinfo:
            source.fetch(2025, "ES")
        assert excinfo.value.status_code == 404

    def test_server_error(self, make_session):
        source = NagerDateHolidaySource(session=make_session(status_code=503, reason="Unavailable"))
        with pytest.raises(HolidayFetchError, match="server error") as excinfo:
            source.fetch(2025, "ES")
        assert excinfo.value.status_code == 503

    def test_other_http_error(self, make_session):
        source = NagerDateHolidaySource(session=make_session(status_code=400, reason="Bad Request"))
        with pytest.raises(HolidayFetchError, match="HTTP Error: 400 Bad Request"):
            source.fetch(2025, "ES")

    def test_timeout(self, timeout_session):
        source = NagerDateHolidaySource(session=timeout_session, timeout=2)
        with pytest.raises(HolidayFetchError, match="timed out") as excinfo:
            source.fetch(2025, "ES")
        assert isinstance(excinfo.value.__cause__, requests.Timeout)

    def test_connection_error(self, make_session):
        session = make_session()
        session.error = requests.ConnectionError("connection refused")
        source = NagerDateHolidaySource(session=session)
        with pytest.raises(HolidayFetchError, match="Connection error"):
            source.fetch(2025, "ES")

    def test_invalid_json(self, make_session):
        source = NagerDateHolidaySource(session=make_session(invalid_json=True))
        with pytest.raises(HolidayFetchError, match="invalid JSON"):
            source.fetch(2025, "ES")

    def test_payload_not_a_list(self, make_session):
        source = NagerDateHolidaySource(session=make_session(payload={"status": "error"}))
        with pytest.raises(HolidayFetchError, match="Invalid response"):
            source.fetch(2025, "ES")

    @pytest.mark.parametrize(
        "year, country_code",
        [(1899, "ES"), (2101, "ES"), (2025, "ESP"), (2025, "E1"), (2025, "XX")],
    )
    def test_rejects_invalid_requests_without_calling_api(self, make_session, year, country_code):
        session = make_session(payload=SPAIN_2025)
        source = NagerDateHolidaySource(session=session)
        with pytest.raises(HolidayFetchError):
            source.fetch(year, country_code)
        assert session.requests == []

    def test_filters_applied(self, make_session):
        source = NagerDateHolidaySource(session=make_session(payload=SPAIN_2025))
        source.add_filter(NationwideFilter())
        records = source.fetch(2025, "ES")
        assert [r.date for r in records] == [date(2025, 1, 1), date(2025, 8, 15)]


def test_get_countries():
    countries = get_countries()
    assert {"code": "ES", "name": "Spain"} in countries
    assert all(len(c["code"]) == 2 for c in countries)


class TestJSONHolidaySource:
    def test_reads_year_country_file(self, tmp_path):
        (tmp_path / "2025_ES.json").write_text(json.dumps(SPAIN_2025), encoding="utf-8")
        source = JSONHolidaySource(tmp_path)

        records = source.fetch(2025, "es")

        assert len(records) == 3
        assert records[0].name == "New Year's Day"

    def test_missing_file(self, tmp_path):
        with pytest.raises(HolidayFetchError, match="not found"):
            JSONHolidaySource(tmp_path).fetch(2025, "ES")

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "2025_ES.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(HolidayFetchError):
            JSONHolidaySource(tmp_path).fetch(2025, "ES")

    def test_file_not_holding_a_list(self, tmp_path):
        (tmp_path / "2025_ES.json").write_text('{"holidays": []}', encoding="utf-8")
        with pytest.raises(HolidayFetchError):
            JSONHolidaySource(tmp_path).fetch(2025, "ES")


class TestQuantLibHolidaySource:
    def test_us_settlement_2025(self):
        records = QuantLibHolidaySource().fetch(2025, "us")
        days = [r.date for r in records]

        assert date(2025, 1, 1) in days
        assert date(2025, 7, 4) in days
        assert date(2025, 12, 25) in days
        assert all(d.weekday() < 5 for d in days)
        assert all(d.year == 2025 for d in days)
        assert records[0].country_code == "US"

    def test_unknown_country(self):
        with pytest.raises(HolidayFetchError, match="Unknown calendar"):
            QuantLibHolidaySource().fetch(2025, "ES")


class TestFilters:
    def test_type_filter_keeps_untyped(self, make_holiday):
        typed = HolidayTypeFilter({"Bank"})
        holidays = [make_holiday(date(2025, 1, 1))]
        assert typed.filter(holidays) == holidays

    def test_public_only(self, make_session):
        payload = SPAIN_2025 + [
            {"date": "2025-12-24", "name": "Christmas Eve", "types": ["Optional"]},
        ]
        source = NagerDateHolidaySource(session=make_session(payload=payload))
        source.add_filter(HolidayTypeFilter.public_only())
        assert len(source.fetch(2025, "ES")) == 3

    def test_custom_filter(self, make_holiday):
        summer_only = CustomFilter(lambda h: 6 <= h.date.month <= 8, "summer")
        holidays = [make_holiday(date(2025, 1, 1)), make_holiday(date(2025, 8, 15))]
        assert [h.date for h in summer_only.filter(holidays)] == [date(2025, 8, 15)]
        assert repr(summer_only) == "CustomFilter(summer)"


class TestFactory:
    def test_nager_source_uses_settings(self):
        settings = EngineSettings(holiday_api_base_url="https://holidays.test/api", request_timeout=4)
        source = create_holiday_source(settings=settings)
        assert isinstance(source, NagerDateHolidaySource)
        assert source.base_url == "https://holidays.test/api"
        assert source.timeout == 4

    def test_source_type_as_string(self):
        assert isinstance(create_holiday_source("quantlib"), QuantLibHolidaySource)

    def test_json_requires_directory(self):
        with pytest.raises(ValueError):
            create_holiday_source(HolidaySourceType.JSON)

    def test_json_source_with_filters(self, tmp_path):
        (tmp_path / "2025_ES.json").write_text(json.dumps(SPAIN_2025), encoding="utf-8")
        source = create_holiday_source(
            HolidaySourceType.JSON, data_directory=tmp_path, nationwide_only=True
        )
        assert isinstance(source, JSONHolidaySource)
        assert len(source.fetch(2025, "ES")) == 2


def test_calendar_is_holiday_ignores_weekends():
    calendar = get_calendar("us")
    assert calendar.is_holiday(date(2025, 7, 4))
    assert not calendar.is_holiday(date(2025, 7, 7))
    # Saturday is closed but not reported as a holiday
    assert not calendar.is_holiday(date(2025, 7, 5))
    assert "US" in available_countries()
