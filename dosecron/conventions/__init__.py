from .types import DurationUnit, GenerationState, IntervalUnit

__all__ = [
    "DurationUnit",
    "IntervalUnit",
    "GenerationState",
]
