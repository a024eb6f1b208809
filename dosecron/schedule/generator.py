"""
Main recurrence generation logic.
"""

import logging
import warnings
from datetime import date, timedelta
from typing import List, Optional, Tuple

from dosecron.conventions.types import GenerationState
from dosecron.errors import DoseCronError, RelocationExhaustedWarning
from dosecron.holidays.base import HolidaySource
from dosecron.holidays.cache import HolidayCache
from dosecron.holidays.factory import create_holiday_source
from dosecron.settings import DEFAULT_MAX_RELOCATION_ATTEMPTS, EngineSettings
from dosecron.utils.date import iter_years

from .adjustments import HolidayIndex, build_holiday_index, evaluate_exclusions, relocate_date
from .core import DateEntry, GenerationResult, RecurrenceConfig
from .period import count_dates
from .validation import ConfigValidator

logger = logging.getLogger(__name__)


def build_entries(
    start_date: date,
    count: int,
    interval_days: int,
    holiday_index: HolidayIndex,
    exclude_weekends: bool = True,
    exclude_holidays: bool = True,
    max_attempts: int = DEFAULT_MAX_RELOCATION_ATTEMPTS,
) -> List[DateEntry]:
    """
    Build ``count`` entries spaced ``interval_days`` apart.

    Slot ``i`` (1-based) is scheduled at ``start_date + (i - 1) * interval_days``
    and then moved forward off excluded days. A relocation never shifts later
    slots. The number of entries is fixed by ``count`` and never changes with
    exclusion.

    Args:
        start_date: Date of slot 1
        count: Number of entries to build
        interval_days: Spacing between slots
        holiday_index: Holidays keyed by 'YYYY-MM-DD'
        exclude_weekends: Move Saturday/Sunday slots forward
        exclude_holidays: Move holiday slots forward
        max_attempts: Bound on candidates tried per slot

    Returns:
        Entries ordered by interval number
    """
    if count <= 0 or interval_days <= 0:
        return []

    relocating = exclude_weekends or exclude_holidays
    entries = []
    for number in range(1, count + 1):
        theoretical = start_date + timedelta(days=(number - 1) * interval_days)

        if relocating:
            relocation = relocate_date(
                theoretical, holiday_index, max_attempts, exclude_weekends, exclude_holidays
            )
            final, exclusion, exhausted = relocation.date, relocation.exclusion, relocation.exhausted
        else:
            final = theoretical
            exclusion = evaluate_exclusions(final, holiday_index, False, False)
            exhausted = False

        if exhausted:
            warning = RelocationExhaustedWarning(number, theoretical, final, max_attempts)
            logger.warning(str(warning))
            warnings.warn(warning, stacklevel=2)
        elif final != theoretical:
            logger.debug("Slot %d moved from %s to %s", number, theoretical, final)

        entries.append(
            DateEntry(
                date=final,
                interval_number=number,
                is_weekend=exclusion.is_weekend,
                is_holiday=exclusion.is_holiday,
                original_date=theoretical,
                holiday=exclusion.holiday,
                relocation_exhausted=exhausted,
            )
        )

    return entries


class RecurrenceGenerator:
    """
    Generates recurring dates for a configuration.

    One generator can be reused for many runs. Holidays are read through the
    shared cache; the source is only consulted on cache misses.
    """

    def __init__(
        self,
        cache: Optional[HolidayCache] = None,
        source: Optional[HolidaySource] = None,
        settings: Optional[EngineSettings] = None,
        validator: Optional[ConfigValidator] = None,
    ):
        self.settings = settings or EngineSettings()
        self.cache = cache if cache is not None else HolidayCache(ttl=self.settings.holiday_ttl)
        self.source = source
        self.validator = validator or ConfigValidator()
        self.state = GenerationState.IDLE

    def _transition(self, state: GenerationState) -> None:
        logger.debug("Generation state: %s -> %s", self.state.value, state.value)
        self.state = state

    def _load_holidays(
        self, config: RecurrenceConfig, start_date: date, end_date: date
    ) -> Tuple[HolidayIndex, bool, List[str]]:
        """Load holidays for every year a slot can land in."""
        if not config.exclude_holidays or not config.country_code:
            return {}, False, []
        if self.source is None:
            message = "No holiday source configured; holidays are ignored"
            logger.warning(message)
            return {}, False, [message]

        # Relocation can push the last slot past the end date
        reach = timedelta(days=self.settings.max_relocation_attempts)
        horizon = date.max if date.max - end_date < reach else end_date + reach
        result = self.cache.load_years(config.country_code, iter_years(start_date, horizon), self.source)

        messages = [
            f"Holidays for {result.country_code} {year} could not be loaded: {error}"
            for year, error in sorted(result.failures.items())
        ]
        if not result.any_loaded:
            logger.warning(
                "No holidays loaded for %s; dates are not adjusted for holidays",
                result.country_code,
            )
        return build_holiday_index(result.records), result.any_loaded, messages

    def run(self, config: RecurrenceConfig) -> GenerationResult:
        """
        Generate dates and return them with run metadata.

        Args:
            config: Recurrence configuration

        Returns:
            GenerationResult with entries, end date and warnings

        Raises:
            ValidationError: If the configuration is invalid
            ConfigurationError: If the configuration cannot be interpreted
        """
        self.state = GenerationState.IDLE
        try:
            self._transition(GenerationState.VALIDATING)
            report = self.validator.validate(config)

            self._transition(GenerationState.RESOLVING_PERIOD)
            end_date = report.end_date

            self._transition(GenerationState.LOADING_HOLIDAYS)
            holiday_index, holidays_loaded, load_warnings = self._load_holidays(
                config, report.start_date, end_date
            )

            self._transition(GenerationState.COUNTING)
            count = count_dates(report.start_date, end_date, report.interval_days)

            self._transition(GenerationState.GENERATING)
            entries = build_entries(
                report.start_date,
                count,
                report.interval_days,
                holiday_index,
                exclude_weekends=config.exclude_weekends,
                exclude_holidays=config.exclude_holidays,
                max_attempts=self.settings.max_relocation_attempts,
            )
        except DoseCronError:
            self._transition(GenerationState.FAILED)
            raise

        self._transition(GenerationState.DONE)
        logger.info(
            "Generated %d dates from %s to %s every %d days",
            len(entries),
            report.start_date,
            end_date,
            report.interval_days,
        )
        return GenerationResult(
            entries=entries,
            end_date=end_date,
            interval_days=report.interval_days,
            warnings=list(report.warnings) + load_warnings + [
                f"Slot {entry.interval_number} kept on excluded day {entry.date_string}"
                for entry in entries
                if entry.relocation_exhausted
            ],
            holidays_loaded=holidays_loaded,
            state=self.state,
        )

    def generate(self, config: RecurrenceConfig) -> List[DateEntry]:
        """Generate the dates for a configuration."""
        return self.run(config).entries


def generate_dates(
    config: RecurrenceConfig,
    cache: Optional[HolidayCache] = None,
    source: Optional[HolidaySource] = None,
    settings: Optional[EngineSettings] = None,
) -> List[DateEntry]:
    """
    Generate dates with a one-off generator.

    Uses the Nager.Date source when holidays are excluded for a country and
    no source is given.

    Examples:
        >>> config = RecurrenceConfig(start_date="2025-08-13", interval=15, duration=4)
        >>> len(generate_dates(config))
        8
    """
    settings = settings or EngineSettings.from_env()
    if source is None and config.exclude_holidays and config.country_code:
        source = create_holiday_source(settings=settings)
    return RecurrenceGenerator(cache=cache, source=source, settings=settings).generate(config)
