"""GoalProgress contract (Pydantic v2 models)."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class GoalType(str, Enum):
    ABSOLUTE = "ABSOLUTE"
    RELATIVE = "RELATIVE"


class Cadence(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class GoalStatus(str, Enum):
    exceeded = "exceeded"
    on_track = "on_track"
    behind = "behind"
    at_risk = "at_risk"
    no_data = "no_data"
    invalid_baseline = "invalid_baseline"


class Trend(str, Enum):
    accelerating = "accelerating"
    decelerating = "decelerating"
    stable = "stable"
    unknown = "unknown"


class Goal(BaseModel):
    goal_type: GoalType
    target_value: float = Field(allow_inf_nan=False)  # RELATIVE: growth percent
    baseline_value: float | None = Field(default=None, allow_inf_nan=False)
    baseline_timestamp: datetime | None = None
    on_track_threshold: float | None = Field(default=None, ge=0, le=100)


class Sample(BaseModel):
    timestamp: datetime
    value: float | None = None


class PeriodBounds(BaseModel):
    start: datetime
    end: datetime
    days_total: int
    days_elapsed: int
    days_remaining: int
    hours_remaining: int  # DAILY cards show hours instead of days


class ExtractedValues(BaseModel):
    baseline_value: float | None = None
    baseline_timestamp: datetime | None = None  # when the baseline was frozen or sampled
    current_value: float | None = None


class ProgressResult(BaseModel):
    progress_percent: float = 0.0
    expected_progress_percent: float = 0.0
    growth_percent: float | None = None  # RELATIVE goals only
    early_exit: GoalStatus | None = None  # no_data | invalid_baseline


class TrendResult(BaseModel):
    trend: Trend = Trend.unknown
    projected_end_value: float | None = None


class SuggestedRange(BaseModel):
    suggested_min: float
    suggested_max: float


class GoalProgress(BaseModel):
    """Engine output. Recomputed on every call, never cached."""

    cadence: Cadence
    period_start: datetime
    period_end: datetime
    days_total: int
    days_elapsed: int
    days_remaining: int
    hours_remaining: int

    baseline_value: float | None = None
    baseline_timestamp: datetime | None = None
    current_value: float | None = None
    target_value: float
    target_display_value: float | None = None

    progress_percent: float = 0.0
    expected_progress_percent: float = 0.0
    growth_percent: float | None = None

    status: GoalStatus
    trend: Trend = Trend.unknown
    projected_end_value: float | None = None
    is_decline: bool = False

    sample_count: int = 0
    warnings: list[str] = Field(default_factory=list)


class MetricSnapshot(BaseModel):
    """One dashboard metric as handed over by the metric store."""

    metric_id: str
    goal: Goal | None = None
    cadence: Cadence | None = None
    samples: list[Sample] = Field(default_factory=list)


class MetricGoalProgress(BaseModel):
    metric_id: str
    goal_progress: GoalProgress | None = None


class GoalsSummary(BaseModel):
    status: GoalStatus  # worst status across goals
    progress: float  # 0–100, average of display-clamped progress
    counts: dict[str, int] = Field(default_factory=dict)
    message: str = ""


# ---------------------------------------------------------------------------
# Request / response bodies
# ---------------------------------------------------------------------------

class ProgressRequest(BaseModel):
    goal: Goal
    cadence: Cadence
    samples: list[Sample] = Field(default_factory=list)
    now: datetime | None = None


class BatchProgressRequest(BaseModel):
    metrics: list[MetricSnapshot] = Field(default_factory=list)
    now: datetime | None = None


class BatchProgressResponse(BaseModel):
    results: list[MetricGoalProgress] = Field(default_factory=list)
    summary: GoalsSummary | None = None


class RangeRequest(BaseModel):
    goal_type: GoalType = GoalType.ABSOLUTE
    samples: list[Sample] = Field(default_factory=list)
