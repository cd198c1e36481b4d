from datetime import datetime, timedelta

import pytest

from deepwork_engine.config import PersonalizedBaseline
from deepwork_engine.flow import assess_work_quality, detect_flow_states, task_complexity
from deepwork_engine.schema import ActivityRecord, ActivityType


def daily_coding(days=3, seconds=3600):
    return [ActivityRecord(datetime(2025, 1, day, 9), seconds, ActivityType.CODE, "VSCode") for day in range(1, days + 1)]


def test_flow_needs_three_days():
    assert detect_flow_states(daily_coding(days=2)) == []


def test_long_single_task_sessions_are_flow():
    states = detect_flow_states(daily_coding())
    assert len(states) == 3
    for state in states:
        assert state.session_length == 3600
        assert state.activity_consistency == 1.0
        assert state.interruption_rate == 0.0
        assert state.flow_probability == pytest.approx(0.94)
        assert state.in_flow


def test_short_sessions_are_skipped():
    assert detect_flow_states(daily_coding(seconds=600)) == []


def test_baseline_session_length_scales_probability():
    relaxed = detect_flow_states(daily_coding(), PersonalizedBaseline(optimal_session_length=7200))
    assert relaxed[0].flow_probability == pytest.approx(0.79)


def test_fragmented_session_scores_lower():
    start = datetime(2025, 1, 3, 14)
    apps = [("Slack", ActivityType.COMMUNICATION), ("VSCode", ActivityType.CODE), ("Firefox", ActivityType.BROWSE)]
    fragmented = [
        ActivityRecord(start + timedelta(seconds=90 * i), 90, apps[i % 3][1], apps[i % 3][0]) for i in range(20)
    ]
    states = detect_flow_states(daily_coding() + fragmented)
    scores = {state.started_at: state.flow_probability for state in states}
    assert scores[start] < scores[datetime(2025, 1, 1, 9)]
    assert not [s for s in states if s.started_at == start][0].in_flow


def test_work_quality_of_pure_coding():
    quality = assess_work_quality(daily_coding())
    assert quality.score == 100
    assert quality.error_rate == 0.0
    assert quality.confidence == pytest.approx(0.06)


def test_work_quality_counts_debugging_as_errors():
    records = daily_coding() + [ActivityRecord(datetime(2025, 1, 1, 11), 3600, ActivityType.DEBUG, "VSCode")]
    assert assess_work_quality(records).error_rate == 1.0


def test_work_quality_empty():
    assert assess_work_quality([]).score == 0


def test_task_complexity_grades_testing_and_docs():
    records = [
        ActivityRecord(datetime(2025, 1, 1, 9), 600, ActivityType.TEST, "Terminal"),
        ActivityRecord(datetime(2025, 1, 1, 10), 600, ActivityType.DOCUMENT, "Notion"),
    ]
    assert task_complexity(records) == pytest.approx(0.55)
    assert task_complexity([ActivityRecord(datetime(2025, 1, 1, 9), 60, ActivityType.MEETING, "Zoom")]) == 0.5
