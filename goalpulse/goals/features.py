"""Pure stateless feature functions. Math only, never raises.

Progress, trend and status for a single goal. Every arithmetic result that
could come out as NaN or infinity is replaced with its documented fallback
before it leaves this module.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from goalpulse.goals.extractor import is_number
from goalpulse.goals.goals_config import StatusThresholds
from goalpulse.goals.models import Goal, GoalStatus, GoalType, ProgressResult, Trend, TrendResult

MIN_POINTS_FOR_TREND = 3
TREND_SIGNIFICANCE = 0.1  # 10% of the early rate of change
TREND_MIN_THRESHOLD = 0.01
RELATIVE_PROGRESS_FLOOR = -100.0

# Past 2**52 every float is already a whole number.
_EXACT_INTEGER_LIMIT = 2.0**52


def _finite_or(value: float, fallback: float = 0.0) -> float:
    return value if math.isfinite(value) else fallback


def round_half_away(value: float, places: int = 1) -> float:
    """Round half away from zero (2.25 -> 2.3, -2.25 -> -2.3). Non-finite -> 0."""
    if not math.isfinite(value):
        return 0.0
    if abs(value) >= _EXACT_INTEGER_LIMIT:
        return float(value)
    quantum = Decimal(1).scaleb(-places)
    # repr() gives the shortest decimal that round-trips, so 0.05 stays 0.05
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0  # normalise -0.0


def _percent(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return _finite_or(numerator / denominator * 100.0)


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def expected_progress_pct(days_elapsed: int, days_total: int) -> float:
    """Share of the period already elapsed, in percent (time-based only)."""
    return _percent(days_elapsed, max(days_total, 1))


def compute_progress(
    goal: Goal,
    baseline_value: float | None,
    current_value: float | None,
    days_elapsed: int,
    days_total: int,
) -> ProgressResult:
    """Percent-of-target progress for ABSOLUTE or RELATIVE goals.

    - ABSOLUTE: current / target * 100
    - RELATIVE: growth = (current - baseline) / baseline * 100,
      progress = growth / target * 100, floored at -100 (no ceiling)
    - target == 0 always yields progress 0
    Missing data and unusable baselines short-circuit with early_exit set.
    """
    expected = round_half_away(expected_progress_pct(days_elapsed, days_total))

    if current_value is None:
        return ProgressResult(
            progress_percent=0.0,
            expected_progress_percent=expected,
            early_exit=GoalStatus.no_data,
        )

    if goal.goal_type == GoalType.RELATIVE and (baseline_value is None or baseline_value == 0):
        return ProgressResult(
            progress_percent=0.0,
            expected_progress_percent=expected,
            early_exit=GoalStatus.invalid_baseline,
        )

    growth: float | None = None
    if goal.goal_type == GoalType.ABSOLUTE:
        progress = _percent(current_value, goal.target_value)
    else:
        growth = _percent(current_value - baseline_value, baseline_value)
        progress = _percent(growth, goal.target_value)
        progress = max(progress, RELATIVE_PROGRESS_FLOOR)

    if goal.target_value == 0:
        progress = 0.0

    return ProgressResult(
        progress_percent=round_half_away(progress),
        expected_progress_percent=expected,
        growth_percent=round_half_away(growth) if growth is not None else None,
    )


def resolve_display_target(goal: Goal, baseline_value: float | None) -> float | None:
    """Absolute value to draw as the target line on a chart."""
    if goal.goal_type == GoalType.ABSOLUTE:
        return goal.target_value
    if baseline_value is None:
        return None
    target = baseline_value * (1.0 + goal.target_value / 100.0)
    return target if math.isfinite(target) else None


# ---------------------------------------------------------------------------
# Trend
# ---------------------------------------------------------------------------

def avg_change(values: Sequence[float | None]) -> float:
    """Mean step-to-step change, skipping pairs whose previous value is 0 or missing."""
    total = 0.0
    pairs = 0
    for prev, curr in zip(values, values[1:]):
        if not is_number(prev) or not is_number(curr) or prev == 0:
            continue
        total += curr - prev
        pairs += 1
    if pairs == 0:
        return 0.0
    return _finite_or(total / pairs)


def compute_trend(values: Sequence[float | None], days_remaining: int) -> TrendResult:
    """Compare early vs recent rate of change and project the period end.

    The midpoint value belongs to both windows so odd-length series split
    into windows of equal size.
    """
    n = len(values)
    if n < MIN_POINTS_FOR_TREND:
        return TrendResult(trend=Trend.unknown, projected_end_value=None)

    midpoint = n // 2
    early_change = avg_change(values[: midpoint + 1])
    recent_change = avg_change(values[midpoint:])

    acceleration = recent_change - early_change
    threshold = max(abs(early_change) * TREND_SIGNIFICANCE, TREND_MIN_THRESHOLD)

    if abs(acceleration) < threshold:
        trend = Trend.stable
    elif acceleration > 0:
        trend = Trend.accelerating
    else:
        trend = Trend.decelerating

    last = values[-1]
    if not is_number(last):
        return TrendResult(trend=trend, projected_end_value=None)

    projected = last + recent_change * days_remaining
    if not math.isfinite(projected):
        return TrendResult(trend=trend, projected_end_value=None)
    return TrendResult(trend=trend, projected_end_value=round_half_away(projected, 2))


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

def classify_status(
    progress_pct: float,
    expected_progress_pct: float,
    thresholds: StatusThresholds,
    early_exit: GoalStatus | None = None,
) -> GoalStatus:
    """Map progress vs time-expected progress to a status.

    early_exit (no_data / invalid_baseline) wins over every threshold.
    """
    if early_exit is not None:
        return early_exit
    if progress_pct >= thresholds.exceeded:
        return GoalStatus.exceeded

    on_track_target = expected_progress_pct * thresholds.on_track / 100.0
    behind_target = expected_progress_pct * thresholds.behind / 100.0

    if progress_pct >= on_track_target:
        return GoalStatus.on_track
    if progress_pct >= behind_target:
        return GoalStatus.behind
    return GoalStatus.at_risk


def is_decline(baseline_value: float | None, current_value: float | None) -> bool:
    if baseline_value is None or current_value is None:
        return False
    return current_value < baseline_value
