"""Status threshold configuration: no DB, config only.

StatusThresholds is handed to the classifier explicitly. The goal-level
on_track_threshold override is applied here, by the caller, before
classification.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from goalpulse.config import settings
from goalpulse.goals.models import Goal


@dataclass(frozen=True, slots=True)
class StatusThresholds:
    exceeded: float = 100.0  # progress % at or above which the goal is exceeded
    on_track: float = 80.0  # % of expected progress
    behind: float = 50.0  # % of expected progress


DEFAULT_THRESHOLDS = StatusThresholds()


def default_thresholds() -> StatusThresholds:
    """Thresholds from settings (env / .env)."""
    return StatusThresholds(
        exceeded=settings.goals_exceeded_threshold,
        on_track=settings.goals_on_track_threshold,
        behind=settings.goals_behind_threshold,
    )


def thresholds_for(goal: Goal, defaults: StatusThresholds | None = None) -> StatusThresholds:
    base = defaults if defaults is not None else default_thresholds()
    if goal.on_track_threshold is None:
        return base
    return replace(base, on_track=goal.on_track_threshold)
