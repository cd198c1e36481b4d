from datetime import datetime, timedelta

import pytest

from deepwork_engine.config import ScoringWeights
from deepwork_engine.schema import ActivityRecord, ActivityType, ScoreBreakdown
from deepwork_engine.scoring import (
    activity_quality_score,
    composite_score,
    confidence_score,
    consistency_score,
    days_spanned,
    focus_effectiveness_score,
    time_optimization_score,
)


def rec(start, seconds, activity_type=ActivityType.CODE, app="VSCode"):
    return ActivityRecord(start, seconds, activity_type, app)


def test_quality_bounds():
    assert activity_quality_score([rec(datetime(2025, 1, 1, 9), 3600)]) == 100.0
    assert activity_quality_score([rec(datetime(2025, 1, 1, 9), 3600, ActivityType.ENTERTAINMENT)]) == 0.0
    assert activity_quality_score([]) == 0.0


def test_quality_mixed_day():
    records = [
        rec(datetime(2025, 1, 1, 9), 1800),
        rec(datetime(2025, 1, 1, 10), 1800, ActivityType.MEETING, "Zoom"),
    ]
    # 75 from the weighted mean, 10 from half the time in deep work
    assert activity_quality_score(records) == pytest.approx(85.0)


def test_quality_unknown_type_uses_neutral_weight():
    assert activity_quality_score([rec(datetime(2025, 1, 1, 9), 600, ActivityType.OTHER)]) == pytest.approx(50.0)


def test_quality_monotonic_in_code_share():
    total = 3600
    scores = []
    for code_seconds in range(0, total + 1, 600):
        records = []
        if code_seconds < total:
            records.append(rec(datetime(2025, 1, 1, 9), total - code_seconds, ActivityType.SOCIAL, "Twitter"))
        if code_seconds:
            records.append(rec(datetime(2025, 1, 1, 11), code_seconds))
        scores.append(activity_quality_score(records))
    assert scores == sorted(scores)


def test_focus_rewards_long_deep_sessions():
    long_session = [rec(datetime(2025, 1, 1, 9), 7200)]
    short_browse = [rec(datetime(2025, 1, 1, 9), 600, ActivityType.BROWSE, "Firefox")]
    assert focus_effectiveness_score(long_session) == 100.0
    assert focus_effectiveness_score(short_browse) == pytest.approx(2.5)
    assert focus_effectiveness_score([]) == 0.0


def test_time_optimization_prefers_peak_hours():
    morning = [rec(datetime(2025, 1, 1, 10), 1800)]
    night = [rec(datetime(2025, 1, 1, 3), 1800)]
    assert time_optimization_score(morning) == 100.0
    assert time_optimization_score(night) == pytest.approx(10.0)
    assert time_optimization_score([]) == 0.0


def test_consistency_of_identical_days():
    records = [rec(datetime(2025, 1, day, 9), 3600) for day in range(1, 6)]
    assert consistency_score(records) == 100.0
    assert consistency_score([]) == 0.0


def test_consistency_penalizes_volatile_days():
    records = [
        rec(datetime(2025, 1, 1, 9), 3600),
        rec(datetime(2025, 1, 2, 9), 3600, ActivityType.ENTERTAINMENT, "Netflix"),
    ]
    # daily scores 100 and 0, standard deviation 50
    assert consistency_score(records) == 0.0


def test_composite_weights():
    weights = ScoringWeights()
    assert composite_score(ScoreBreakdown(100, 100, 100, 100, 100), weights) == 100
    assert composite_score(ScoreBreakdown(0, 0, 0, 0, 0), weights) == 0
    assert composite_score(ScoreBreakdown(100, 0, 0, 0, 0), weights) == 30


def test_confidence_from_quantity_and_span():
    same_day = [rec(datetime(2025, 1, 1, 8) + timedelta(minutes=5 * i), 60) for i in range(50)]
    assert days_spanned(same_day) == 1
    assert confidence_score(same_day, 50) == 62

    month = [rec(datetime(2025, 1, 1, 9) + timedelta(days=i % 30, minutes=i), 60) for i in range(100)]
    assert confidence_score(month, 50) == 100
    assert confidence_score([], 50) == 0
