"""Property-based tests for goal-progress invariants (Hypothesis)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from goalpulse.goals.builders import compute_goal_progress
from goalpulse.goals.features import compute_progress, compute_trend
from goalpulse.goals.models import Cadence, GoalStatus, GoalType, Trend
from goalpulse.goals.periods import compute_period_bounds
from tests.conftest import make_goal, make_sample

finite = st.floats(min_value=-1e9, max_value=1e9, allow_nan=False, allow_infinity=False)
instants = st.datetimes(
    min_value=datetime(2000, 1, 1),
    max_value=datetime(2100, 12, 31),
    timezones=st.just(timezone.utc),
)
cadences = st.sampled_from(list(Cadence))
goal_types = st.sampled_from(list(GoalType))


@given(cadence=cadences, now=instants)
@settings(max_examples=200)
def test_prop_period_is_whole_days(cadence, now):
    """days_total >= 1 and end - start + 1ms spans exactly days_total days."""
    b = compute_period_bounds(cadence, now)
    assert b.days_total >= 1
    assert b.end - b.start + timedelta(milliseconds=1) == timedelta(days=b.days_total)
    assert 0 <= b.days_elapsed <= b.days_total
    assert b.days_remaining == b.days_total - b.days_elapsed
    assert b.start <= now < b.end + timedelta(milliseconds=1)


@given(goal_type=goal_types, current=finite, baseline=finite)
def test_prop_zero_target_means_zero_progress(goal_type, current, baseline):
    r = compute_progress(make_goal(goal_type, target_value=0.0), baseline, current, 3, 7)
    assert r.progress_percent == 0.0


@given(
    target=st.floats(min_value=0.01, max_value=1e6, allow_nan=False),
    low=st.floats(min_value=-1e6, max_value=1e6, allow_nan=False),
    delta=st.floats(min_value=1.0, max_value=1e6, allow_nan=False),
)
def test_prop_absolute_progress_monotonic(target, low, delta):
    """Rounded to one decimal, so strictly increasing only once the step is visible."""
    goal = make_goal(GoalType.ABSOLUTE, target_value=target)
    high = low + delta
    assume(delta / target * 100 >= 0.2)
    a = compute_progress(goal, None, low, 0, 1).progress_percent
    b = compute_progress(goal, None, high, 0, 1).progress_percent
    assert b > a


@given(target=finite, current=finite, baseline=st.sampled_from([None, 0.0]))
def test_prop_relative_invalid_baseline(target, current, baseline):
    goal = make_goal(GoalType.RELATIVE, target_value=target, baseline_value=baseline)
    now = datetime(2026, 4, 11, 12, tzinfo=timezone.utc)
    samples = [make_sample(baseline if baseline is not None else 0.0, now), make_sample(current, now)]
    gp = compute_goal_progress(goal, Cadence.MONTHLY, samples, now=now)
    assert gp.status == GoalStatus.invalid_baseline
    assert gp.progress_percent == 0.0


@given(target=finite, baseline=finite.filter(lambda v: v != 0), current=finite)
def test_prop_relative_floor(target, baseline, current):
    r = compute_progress(make_goal(GoalType.RELATIVE, target_value=target), baseline, current, 0, 1)
    assert r.progress_percent >= -100.0


@given(goal_type=goal_types, target=finite, cadence=cadences, now=instants)
def test_prop_no_data(goal_type, target, cadence, now):
    gp = compute_goal_progress(make_goal(goal_type, target_value=target), cadence, [], now=now)
    assert gp.status == GoalStatus.no_data
    assert gp.progress_percent == 0.0


@given(
    current=st.floats(min_value=100.0, max_value=1e9, allow_nan=False),
    elapsed=st.integers(min_value=0, max_value=31),
)
def test_prop_exceeded_is_unconditional(current, elapsed):
    goal = make_goal(GoalType.ABSOLUTE, target_value=100.0)
    now = datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(days=elapsed)
    gp = compute_goal_progress(goal, Cadence.MONTHLY, [make_sample(current, now)], now=now)
    assert gp.status == GoalStatus.exceeded


@given(values=st.lists(finite, max_size=40), days_remaining=st.integers(min_value=0, max_value=31))
def test_prop_trend_total(values, days_remaining):
    r = compute_trend(values, days_remaining)
    assert r.trend in set(Trend)
    if len(values) < 3:
        assert r.trend == Trend.unknown
        assert r.projected_end_value is None
    else:
        assert r.projected_end_value is not None
