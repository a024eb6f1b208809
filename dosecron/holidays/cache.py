"""
Time-to-live cache for holiday lists.

Entries are keyed by ``(COUNTRY, year)``. Lookups never touch the network;
misses are filled through ``fetch_and_cache`` from a holiday source. Failed
fetches are never cached, so the next call retries the source.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from dosecron.errors import HolidayFetchError
from dosecron.settings import DEFAULT_HOLIDAY_TTL

from .base import HolidaySource
from .records import HolidayRecord, normalize_holidays

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, int]


@dataclass(frozen=True)
class CacheEntry:
    """Holiday list stored for one country and year."""

    value: Tuple[HolidayRecord, ...]
    expires_at: float
    created_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass
class HolidayLoadResult:
    """Outcome of loading several years of holidays for one country."""

    country_code: str
    records: List[HolidayRecord] = field(default_factory=list)
    loaded_years: List[int] = field(default_factory=list)
    failures: Dict[int, HolidayFetchError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def any_loaded(self) -> bool:
        return bool(self.loaded_years)


def make_key(country_code: str, year: int) -> CacheKey:
    return (country_code.strip().upper(), int(year))


class HolidayCache:
    """
    In-memory TTL cache of holiday lists.

    Construct one instance and pass it to every generator that should share
    holiday data. All operations hold an internal lock.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_HOLIDAY_TTL,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize holiday cache.

        Args:
            ttl: Default time to live in seconds
            clock: Returns the current time in seconds (injectable for tests)
        """
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}
        self._lock = threading.RLock()
        self._stats = {"hits": 0, "misses": 0, "fetches": 0, "fetch_errors": 0, "expirations": 0}

    def get(self, country_code: str, year: int) -> Optional[List[HolidayRecord]]:
        """
        Return the cached holidays, or None on a miss or an expired entry.

        Args:
            country_code: ISO country code (case-insensitive)
            year: Calendar year

        Returns:
            A new list of holiday records, or None
        """
        key = make_key(country_code, year)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._stats["misses"] += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._stats["expirations"] += 1
                self._stats["misses"] += 1
                logger.debug("Holiday cache entry expired: %s %s", *key)
                return None
            self._stats["hits"] += 1
            return list(entry.value)

    def set(
        self,
        country_code: str,
        year: int,
        records: Iterable[HolidayRecord],
        ttl: Optional[float] = None,
    ) -> None:
        """
        Store holidays for a country and year.

        Args:
            country_code: ISO country code (case-insensitive)
            year: Calendar year
            records: Holiday records to store
            ttl: Time to live in seconds (defaults to the cache TTL)
        """
        ttl = self.ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        key = make_key(country_code, year)
        with self._lock:
            now = self._clock()
            self._entries[key] = CacheEntry(
                value=tuple(records), expires_at=now + ttl, created_at=now
            )

    def invalidate(self, country_code: str) -> int:
        """
        Remove every cached year of a country.

        Returns:
            Number of removed entries
        """
        code = country_code.strip().upper()
        with self._lock:
            keys = [key for key in self._entries if key[0] == code]
            for key in keys:
                del self._entries[key]
        if keys:
            logger.debug("Invalidated %d holiday cache entries for %s", len(keys), code)
        return len(keys)

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            self._stats["expirations"] += len(expired)
        return len(expired)

    def fetch_and_cache(
        self,
        country_code: str,
        year: int,
        source: HolidaySource,
        ttl: Optional[float] = None,
    ) -> List[HolidayRecord]:
        """
        Return cached holidays, fetching and storing them on a miss.

        Args:
            country_code: ISO country code (case-insensitive)
            year: Calendar year
            source: Holiday source used on a miss
            ttl: Time to live for a newly stored entry

        Returns:
            Holiday records for the country and year

        Raises:
            HolidayFetchError: If the source fails; nothing is cached
        """
        cached = self.get(country_code, year)
        if cached is not None:
            logger.debug("Holidays loaded from cache: %s %s", country_code.upper(), year)
            return cached

        code = country_code.strip().upper()
        with self._lock:
            self._stats["fetches"] += 1
        try:
            payload = source.fetch(year, code)
            records = normalize_holidays(payload, code)
        except HolidayFetchError:
            with self._lock:
                self._stats["fetch_errors"] += 1
            raise
        except Exception as exc:
            with self._lock:
                self._stats["fetch_errors"] += 1
            raise HolidayFetchError(
                f"Holiday source failed for {code} {year}: {exc}",
                country_code=code,
                year=year,
            ) from exc

        self.set(code, year, records, ttl)
        logger.debug("Cached %d holidays for %s %s", len(records), code, year)
        return list(records)

    def load_years(
        self,
        country_code: str,
        years: Iterable[int],
        source: HolidaySource,
    ) -> HolidayLoadResult:
        """
        Load several years of holidays, collecting failures instead of raising.

        Args:
            country_code: ISO country code
            years: Calendar years to load
            source: Holiday source used on cache misses

        Returns:
            Union of the loaded records plus the per-year fetch errors
        """
        result = HolidayLoadResult(country_code=country_code.strip().upper())
        for year in years:
            try:
                records = self.fetch_and_cache(country_code, year, source)
            except HolidayFetchError as exc:
                logger.warning("Could not load holidays for %s %s: %s", result.country_code, year, exc)
                result.failures[year] = exc
                continue
            result.records.extend(records)
            result.loaded_years.append(year)
        return result

    def stats(self) -> dict:
        """Entry counts plus hit/miss/fetch counters."""
        with self._lock:
            keys = list(self._entries)
            counters = dict(self._stats)
        return {
            "total_entries": len(keys),
            "countries": sorted({key[0] for key in keys}),
            "years": sorted({key[1] for key in keys}),
            **counters,
        }

    def __contains__(self, key: CacheKey) -> bool:
        country_code, year = key
        with self._lock:
            entry = self._entries.get(make_key(country_code, year))
            return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
