# Re-export schedule components
# Re-export types from conventions
from dosecron.conventions.types import DurationUnit, GenerationState, IntervalUnit

from .adjustments import (
    ExclusionResult,
    Relocation,
    build_holiday_index,
    evaluate_exclusions,
    relocate_date,
)
from .core import DateEntry, GenerationResult, RecurrenceConfig
from .generator import RecurrenceGenerator, build_entries, generate_dates
from .period import count_dates, interval_to_days, resolve_end_date, total_days
from .results import (
    ScheduleSummary,
    entries_to_frame,
    export_entries,
    filter_entries,
    find_entry,
    summarize,
)
from .validation import ConfigValidator, ValidationReport
