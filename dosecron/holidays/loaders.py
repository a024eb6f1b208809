"""
Concrete holiday source implementations.

Provides loaders for the Nager.Date public holiday API, QuantLib national
calendars and JSON files.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

import requests

from dosecron.conventions.calendars_quantlib import get_calendar
from dosecron.errors import HolidayFetchError
from dosecron.settings import (
    DEFAULT_HOLIDAY_API_URL,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_HOLIDAY_YEAR,
    MIN_HOLIDAY_YEAR,
)

from .base import BaseHolidaySource
from .records import HolidayRecord, normalize_holidays

logger = logging.getLogger(__name__)

COUNTRY_CODE_PATTERN = re.compile(r"^[A-Z]{2}$")

# Countries served by the Nager.Date public holiday API
SUPPORTED_COUNTRIES: Dict[str, str] = {
    "AD": "Andorra",
    "AR": "Argentina",
    "AU": "Australia",
    "AT": "Austria",
    "BE": "Belgium",
    "BO": "Bolivia",
    "BR": "Brazil",
    "CA": "Canada",
    "CL": "Chile",
    "CO": "Colombia",
    "CR": "Costa Rica",
    "HR": "Croatia",
    "CZ": "Czechia",
    "DK": "Denmark",
    "EC": "Ecuador",
    "EE": "Estonia",
    "FI": "Finland",
    "FR": "France",
    "DE": "Germany",
    "GR": "Greece",
    "GT": "Guatemala",
    "HN": "Honduras",
    "HU": "Hungary",
    "IS": "Iceland",
    "IE": "Ireland",
    "IT": "Italy",
    "LV": "Latvia",
    "LI": "Liechtenstein",
    "LT": "Lithuania",
    "LU": "Luxembourg",
    "MT": "Malta",
    "MX": "Mexico",
    "MC": "Monaco",
    "NL": "Netherlands",
    "NZ": "New Zealand",
    "NI": "Nicaragua",
    "NO": "Norway",
    "PA": "Panama",
    "PY": "Paraguay",
    "PE": "Peru",
    "PL": "Poland",
    "PT": "Portugal",
    "RO": "Romania",
    "SM": "San Marino",
    "SK": "Slovakia",
    "SI": "Slovenia",
    "ZA": "South Africa",
    "ES": "Spain",
    "SE": "Sweden",
    "CH": "Switzerland",
    "UA": "Ukraine",
    "GB": "United Kingdom",
    "US": "United States",
    "UY": "Uruguay",
    "VA": "Vatican City",
    "VE": "Venezuela",
}


def get_countries() -> List[Dict[str, str]]:
    """Supported countries as ``{"code", "name"}`` dicts."""
    return [{"code": code, "name": name} for code, name in SUPPORTED_COUNTRIES.items()]


class NagerDateHolidaySource(BaseHolidaySource):
    """
    Load public holidays from the Nager.Date REST API.

    Issues ``GET {base_url}/PublicHolidays/{year}/{country_code}``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Nager.Date source.

        Args:
            base_url: API root (defaults to env var DOSECRON_HOLIDAY_API_URL)
            timeout: Request timeout in seconds
            session: requests session to reuse (a new one is created if omitted)
        """
        super().__init__()
        self.base_url = (
            base_url or os.getenv("DOSECRON_HOLIDAY_API_URL") or DEFAULT_HOLIDAY_API_URL
        ).rstrip("/")
        self.timeout = timeout or DEFAULT_REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def _check_request(self, year: int, country_code: str) -> None:
        if not isinstance(year, int) or not MIN_HOLIDAY_YEAR <= year <= MAX_HOLIDAY_YEAR:
            raise HolidayFetchError(
                f"Invalid year {year!r}: must be between {MIN_HOLIDAY_YEAR} and {MAX_HOLIDAY_YEAR}",
                country_code=country_code,
                year=year,
            )
        if not COUNTRY_CODE_PATTERN.match(country_code):
            raise HolidayFetchError(
                f"Invalid country code: {country_code!r}", country_code=country_code, year=year
            )
        if country_code not in SUPPORTED_COUNTRIES:
            raise HolidayFetchError(
                f"Country {country_code!r} is not supported", country_code=country_code, year=year
            )

    def _load(self, year: int, country_code: str) -> List[HolidayRecord]:
        """
        Fetch holidays from the API.

        Args:
            year: Calendar year
            country_code: Upper-case ISO country code

        Returns:
            Normalized holiday records

        Raises:
            HolidayFetchError: On invalid requests, HTTP errors, timeouts and bad payloads
        """
        self._check_request(year, country_code)

        url = f"{self.base_url}/PublicHolidays/{year}/{country_code}"
        logger.info("Fetching holidays from API: %s %s", country_code, year)
        try:
            response = self.session.get(
                url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise HolidayFetchError(
                f"Holiday request timed out after {self.timeout}s",
                country_code=country_code,
                year=year,
            ) from exc
        except requests.RequestException as exc:
            raise HolidayFetchError(
                f"Connection error while fetching holidays: {exc}",
                country_code=country_code,
                year=year,
            ) from exc

        status = response.status_code
        if status == 204:
            return []
        if status == 404:
            raise HolidayFetchError(
                f"No holidays found for {SUPPORTED_COUNTRIES[country_code]} in {year}",
                country_code=country_code,
                year=year,
                status_code=status,
            )
        if status >= 500:
            raise HolidayFetchError(
                f"Holiday server error ({status}), try again later",
                country_code=country_code,
                year=year,
                status_code=status,
            )
        if not response.ok:
            raise HolidayFetchError(
                f"HTTP Error: {status} {response.reason}",
                country_code=country_code,
                year=year,
                status_code=status,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise HolidayFetchError(
                "Holiday API returned invalid JSON", country_code=country_code, year=year
            ) from exc

        if not isinstance(payload, list):
            raise HolidayFetchError(
                "Invalid response from holiday API", country_code=country_code, year=year
            )

        return normalize_holidays(payload, country_code)


class QuantLibHolidaySource(BaseHolidaySource):
    """
    Derive holidays from QuantLib national calendars.

    Works offline; holiday names are generic because QuantLib calendars
    only know which days are closed.
    """

    def _load(self, year: int, country_code: str) -> List[HolidayRecord]:
        try:
            calendar = get_calendar(country_code)
        except ValueError as exc:
            raise HolidayFetchError(str(exc), country_code=country_code, year=year) from exc

        name = f"{calendar.name} holiday"
        return [
            HolidayRecord(date=day, local_name=name, name=name, country_code=country_code)
            for day in calendar.holidays_in_year(year)
        ]


class JSONHolidaySource(BaseHolidaySource):
    """
    Load holidays from JSON files.

    Useful for testing, air-gapped deployments, or when the API is unavailable.
    Files are named ``{year}_{COUNTRY}.json`` and hold a Nager.Date payload.
    """

    def __init__(self, data_directory: Path):
        """
        Initialize JSON holiday source.

        Args:
            data_directory: Directory containing JSON holiday files
        """
        super().__init__()
        self.data_directory = Path(data_directory)

    def _get_holiday_file(self, year: int, country_code: str) -> Path:
        return self.data_directory / f"{year}_{country_code}.json"

    def _load(self, year: int, country_code: str) -> List[HolidayRecord]:
        filepath = self._get_holiday_file(year, country_code)
        if not filepath.exists():
            raise HolidayFetchError(
                f"Holiday file not found: {filepath}", country_code=country_code, year=year
            )

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise HolidayFetchError(
                f"Cannot read holiday file {filepath}: {exc}",
                country_code=country_code,
                year=year,
            ) from exc

        try:
            return normalize_holidays(payload, country_code)
        except ValueError as exc:
            raise HolidayFetchError(str(exc), country_code=country_code, year=year) from exc
