"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from goalpulse.goals.models import Goal, GoalType, Sample
from goalpulse.main import app


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_goal(
    goal_type: GoalType = GoalType.ABSOLUTE,
    target_value: float = 100.0,
    baseline_value: float | None = None,
    on_track_threshold: float | None = None,
    baseline_timestamp: datetime | None = None,
) -> Goal:
    return Goal(
        goal_type=goal_type,
        target_value=target_value,
        baseline_value=baseline_value,
        baseline_timestamp=baseline_timestamp,
        on_track_threshold=on_track_threshold,
    )


def make_sample(value: float | None, ts: datetime | None = None) -> Sample:
    """Helper to build a Sample; defaults to 2026-02-15 12:00 UTC."""
    if ts is None:
        ts = datetime(2026, 2, 15, 12, 0, tzinfo=timezone.utc)
    return Sample(timestamp=ts, value=value)


def make_series(
    values: list[float | None],
    start: datetime | None = None,
    step: timedelta = timedelta(days=1),
) -> list[Sample]:
    """One sample per step starting at `start` (default 2026-02-01 UTC)."""
    if start is None:
        start = datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)
    return [make_sample(v, start + step * i) for i, v in enumerate(values)]


def sample_json(value: Any, ts: str = "2026-02-15T12:00:00Z") -> dict[str, Any]:
    return {"timestamp": ts, "value": value}
