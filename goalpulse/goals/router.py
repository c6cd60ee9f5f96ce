"""Goals HTTP router: stateless progress computation."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from goalpulse.auth import verify_api_key
from goalpulse.goals import builders, extractor, periods
from goalpulse.goals.goals_config import default_thresholds
from goalpulse.goals.models import (
    BatchProgressRequest,
    BatchProgressResponse,
    Cadence,
    GoalProgress,
    PeriodBounds,
    ProgressRequest,
    RangeRequest,
    SuggestedRange,
)

router = APIRouter(prefix="/goals", tags=["goals"])


def _parse_now(value: str | None) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid datetime for 'now': {value}")


# ---------------------------------------------------------------------------
# /goals/progress
# ---------------------------------------------------------------------------


@router.post("/progress", response_model=GoalProgress)
async def goal_progress(
    body: ProgressRequest,
    _: str = Depends(verify_api_key),
) -> GoalProgress:
    return builders.compute_goal_progress(body.goal, body.cadence, body.samples, now=body.now)


@router.post("/progress/batch", response_model=BatchProgressResponse)
async def goal_progress_batch(
    body: BatchProgressRequest,
    _: str = Depends(verify_api_key),
) -> BatchProgressResponse:
    results = builders.enrich_metrics(body.metrics, now=body.now)
    progresses = [r.goal_progress for r in results if r.goal_progress is not None]
    return BatchProgressResponse(results=results, summary=builders.summarize_progress(progresses))


# ---------------------------------------------------------------------------
# /goals/range, /goals/period, /goals/thresholds
# ---------------------------------------------------------------------------


@router.post("/range", response_model=SuggestedRange)
async def suggested_range(
    body: RangeRequest,
    _: str = Depends(verify_api_key),
) -> SuggestedRange:
    values = extractor.well_formed_values(body.samples)
    return extractor.suggest_target_range(values, body.goal_type)


@router.get("/period", response_model=PeriodBounds)
async def period_bounds(
    cadence: Cadence = Query(..., description="DAILY | WEEKLY | MONTHLY"),
    now: str | None = Query(default=None, description="ISO datetime, defaults to current UTC time"),
    _: str = Depends(verify_api_key),
) -> PeriodBounds:
    return periods.compute_period_bounds(cadence, _parse_now(now))


@router.get("/thresholds")
async def thresholds(
    _: str = Depends(verify_api_key),
) -> dict[str, float]:
    return asdict(default_thresholds())
