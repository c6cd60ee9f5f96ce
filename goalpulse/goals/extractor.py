"""Pick baseline/current values out of an ordered sample window."""

from __future__ import annotations

import math
from typing import Any, Sequence

from goalpulse.goals.models import ExtractedValues, Goal, GoalType, Sample, SuggestedRange

NICE_STEPS = (1, 2, 5, 10)


def is_number(value: Any) -> bool:
    """True for finite int/float values (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def well_formed_values(samples: Sequence[Sample]) -> list[float]:
    """Values of samples that carry a finite number, in input order.

    Anything else is treated as absent and never raises.
    """
    return [float(s.value) for s in samples if is_number(s.value)]


def extract_values(goal: Goal, samples_in_period: Sequence[Sample]) -> ExtractedValues:
    """Baseline (frozen or first sample) and current (last sample) values.

    An empty window is a valid outcome meaning "no data yet this period".
    """
    usable = [s for s in samples_in_period if is_number(s.value)]
    current = float(usable[-1].value) if usable else None

    if goal.baseline_value is not None:
        baseline = goal.baseline_value
        baseline_ts = goal.baseline_timestamp
    elif usable:
        baseline = float(usable[0].value)
        baseline_ts = usable[0].timestamp
    else:
        baseline = None
        baseline_ts = None

    return ExtractedValues(baseline_value=baseline, baseline_timestamp=baseline_ts, current_value=current)


def _round_to_nice(value: float, round_up: bool) -> float:
    """Round to 1, 2, 5 or 10 times a power of ten.

    Values that cannot be rounded without leaving the float range come back
    unchanged.
    """
    if value == 0:
        return 0.0
    if not math.isfinite(value):
        return value
    if value < 0:
        return -_round_to_nice(-value, not round_up)
    magnitude = 10.0 ** math.floor(math.log10(value))
    if magnitude == 0:
        return value
    normalized = value / magnitude
    if round_up:
        nice = next((n for n in NICE_STEPS if n >= normalized), 10)
    else:
        nice = next((n for n in reversed(NICE_STEPS) if n <= normalized), 1)
    rounded = nice * magnitude
    return rounded if math.isfinite(rounded) else value


def suggest_target_range(values: Sequence[float], goal_type: GoalType) -> SuggestedRange:
    """Slider bounds for the goal editor.

    RELATIVE targets are growth percentages, so the range is fixed at 0–100.
    ABSOLUTE ranges leave room for growth: at least twice the current value or
    1.5x the historical max, whichever is larger.
    """
    if goal_type == GoalType.RELATIVE or not values:
        return SuggestedRange(suggested_min=0.0, suggested_max=100.0)

    current = values[-1]
    lowest = min(values)
    highest = max(values)

    floor = lowest * 1.2
    if not math.isfinite(floor):
        floor = lowest
    ceiling = max(current * 2, highest * 1.5, current + 100)
    if not math.isfinite(ceiling):
        ceiling = highest

    suggested_min = 0.0 if lowest >= 0 else _round_to_nice(floor, round_up=False)
    suggested_max = _round_to_nice(ceiling, round_up=True)
    return SuggestedRange(suggested_min=suggested_min, suggested_max=suggested_max)
