"""GoalProgress builders: the engine entry point.

Takes (goal, cadence, samples, now), runs period bounds, value extraction,
progress, trend and status, and returns a GoalProgress.
Graceful degradation: missing or unusable data never raises.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

import structlog

from goalpulse.goals import extractor, features, periods
from goalpulse.goals.goals_config import StatusThresholds, default_thresholds, thresholds_for
from goalpulse.goals.models import (
    Cadence,
    Goal,
    GoalProgress,
    GoalStatus,
    GoalsSummary,
    MetricGoalProgress,
    MetricSnapshot,
    Sample,
)

logger = structlog.get_logger(__name__)

# Worst first
STATUS_SEVERITY: tuple[GoalStatus, ...] = (
    GoalStatus.at_risk,
    GoalStatus.behind,
    GoalStatus.invalid_baseline,
    GoalStatus.no_data,
    GoalStatus.on_track,
    GoalStatus.exceeded,
)


def compute_goal_progress(
    goal: Goal,
    cadence: Cadence,
    samples_in_period: Sequence[Sample],
    now: datetime | None = None,
    thresholds: StatusThresholds | None = None,
) -> GoalProgress:
    """Full progress record for one goal at `now` (defaults to the current UTC time).

    `samples_in_period` must already be sorted and restricted to the active
    period; samples outside the recomputed bounds are reported in `warnings`
    but not dropped.
    """
    now = periods.as_utc(now) if now is not None else datetime.now(timezone.utc)
    bounds = periods.compute_period_bounds(cadence, now)

    warnings: list[str] = []
    outside = sum(1 for s in samples_in_period if not periods.in_period(s.timestamp, bounds))
    if outside:
        warnings.append(f"{outside} sample(s) fall outside the {cadence.value.lower()} period.")
        logger.warning(
            "samples_outside_period",
            cadence=cadence.value,
            outside=outside,
            period_start=bounds.start.isoformat(),
            period_end=bounds.end.isoformat(),
        )

    values = extractor.well_formed_values(samples_in_period)
    dropped = len(samples_in_period) - len(values)
    if dropped:
        warnings.append(f"{dropped} sample(s) without a numeric value were ignored.")

    extracted = extractor.extract_values(goal, samples_in_period)
    baseline = extracted.baseline_value
    current = extracted.current_value

    progress = features.compute_progress(goal, baseline, current, bounds.days_elapsed, bounds.days_total)
    trend = features.compute_trend(values, bounds.days_remaining)

    if thresholds is None:
        thresholds = thresholds_for(goal, default_thresholds())
    status = features.classify_status(
        progress.progress_percent,
        progress.expected_progress_percent,
        thresholds,
        progress.early_exit,
    )

    logger.debug(
        "goal_progress_computed",
        cadence=cadence.value,
        goal_type=goal.goal_type.value,
        samples=len(values),
        status=status.value,
        progress=progress.progress_percent,
    )

    return GoalProgress(
        cadence=cadence,
        period_start=bounds.start,
        period_end=bounds.end,
        days_total=bounds.days_total,
        days_elapsed=bounds.days_elapsed,
        days_remaining=bounds.days_remaining,
        hours_remaining=bounds.hours_remaining,
        baseline_value=baseline,
        baseline_timestamp=extracted.baseline_timestamp,
        current_value=current,
        target_value=goal.target_value,
        target_display_value=features.resolve_display_target(goal, baseline),
        progress_percent=progress.progress_percent,
        expected_progress_percent=progress.expected_progress_percent,
        growth_percent=progress.growth_percent,
        status=status,
        trend=trend.trend,
        projected_end_value=trend.projected_end_value,
        is_decline=features.is_decline(baseline, current),
        sample_count=len(values),
        warnings=warnings,
    )


def enrich_metrics(
    metrics: Sequence[MetricSnapshot],
    now: datetime | None = None,
    defaults: StatusThresholds | None = None,
) -> list[MetricGoalProgress]:
    """Attach goal progress to each metric; None when it has no goal or no cadence."""
    now = periods.as_utc(now) if now is not None else datetime.now(timezone.utc)
    base = defaults if defaults is not None else default_thresholds()

    results: list[MetricGoalProgress] = []
    for metric in metrics:
        if metric.goal is None or metric.cadence is None:
            results.append(MetricGoalProgress(metric_id=metric.metric_id, goal_progress=None))
            continue
        with structlog.contextvars.bound_contextvars(metric_id=metric.metric_id):
            progress = compute_goal_progress(
                metric.goal,
                metric.cadence,
                metric.samples,
                now=now,
                thresholds=thresholds_for(metric.goal, base),
            )
        results.append(MetricGoalProgress(metric_id=metric.metric_id, goal_progress=progress))
    return results


def summarize_progress(progresses: Sequence[GoalProgress]) -> GoalsSummary | None:
    """Roll several goals up into one status line.

    Progress is clamped to 0–100 per goal before averaging, the way progress
    bars display it.
    """
    if not progresses:
        return None

    counts: dict[str, int] = {}
    for gp in progresses:
        counts[gp.status.value] = counts.get(gp.status.value, 0) + 1

    worst = next(s for s in STATUS_SEVERITY if s.value in counts)
    clamped = [min(max(gp.progress_percent, 0.0), 100.0) for gp in progresses]
    avg_progress = sum(clamped) / len(clamped)

    parts = [f"{counts[s.value]} {s.value}" for s in reversed(STATUS_SEVERITY) if s.value in counts]
    return GoalsSummary(
        status=worst,
        progress=features.round_half_away(avg_progress),
        counts=counts,
        message=f"{len(progresses)} goal(s): {', '.join(parts)}",
    )
