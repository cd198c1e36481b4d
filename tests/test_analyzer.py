import logging
from datetime import datetime, timedelta

import pytest

from deepwork_engine.analyzer import ProductivityAnalyzer, analyze
from deepwork_engine.config import AnalyzerOptions, PersonalizedBaseline
from deepwork_engine.errors import ValidationError
from deepwork_engine.schema import ActivityRecord, ActivityType, AnomalyKind


def sample_records(days=10):
    plan = [
        (9, 0, 3000, ActivityType.CODE, "VSCode"),
        (9, 55, 600, ActivityType.COMMUNICATION, "Slack"),
        (10, 10, 2400, ActivityType.TEST, "Terminal"),
        (11, 0, 1800, ActivityType.MEETING, "Zoom"),
        (14, 0, 3600, ActivityType.DEBUG, "VSCode"),
        (15, 5, 900, ActivityType.BROWSE, "Firefox"),
    ]
    records = []
    for day in range(days):
        base = datetime(2025, 1, 6) + timedelta(days=day)
        for hour, minute, seconds, activity_type, app in plan:
            records.append(ActivityRecord(base.replace(hour=hour, minute=minute), seconds, activity_type, app))
    return records


def test_empty_input_contract():
    metrics = analyze([])
    assert metrics.score == 0
    assert metrics.confidence == 0
    assert len(metrics.insights) == 1
    assert metrics.insights[0].category == "focus"
    assert metrics.insights[0].type == "neutral"
    assert metrics.predictions.optimal_work_hours == (9, 10, 11, 14, 15, 16)
    assert analyze(None) == metrics


def test_scores_within_bounds():
    metrics = analyze(sample_records())
    assert 0 <= metrics.score <= 100
    assert 0 <= metrics.confidence <= 100
    for value in vars(metrics.breakdown).values():
        assert 0.0 <= value <= 100.0
    assert 0 <= metrics.predictions.burnout_risk <= 100


def test_analysis_is_idempotent():
    records = sample_records()
    assert analyze(records) == analyze(records)
    assert analyze(records).to_dict() == analyze(list(reversed(records))).to_dict()


def test_predictions_from_observed_hours():
    predictions = analyze(sample_records()).predictions
    assert predictions.optimal_work_hours == (9, 10, 11, 14, 15)
    assert predictions.weekly_capacity == 17


def test_confidence_reaches_full_with_enough_history():
    metrics = analyze(sample_records(days=20))
    assert metrics.confidence == 100


def test_invalid_record_raises():
    records = sample_records(days=1)
    records.append(ActivityRecord(datetime(2025, 1, 6, 16), 0, ActivityType.CODE, "VSCode"))
    with pytest.raises(ValidationError):
        analyze(records)


def test_low_data_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="deepwork_engine.analyzer"):
        analyze(sample_records(days=1))
    assert "records supplied" in caplog.text


def test_baseline_changes_timing_insight():
    night = [
        ActivityRecord(datetime(2025, 1, 6, 2) + timedelta(minutes=30 * i), 1500, ActivityType.CODE, "VSCode")
        for i in range(4)
    ]
    default_titles = {i.category for i in analyze(night).insights}
    night_owl = PersonalizedBaseline(peak_hours=(2, 3))
    owl_titles = {i.category for i in analyze(night, baseline=night_owl).insights}
    assert "timing" in default_titles
    assert "timing" not in owl_titles


def test_custom_gap_threshold_changes_focus():
    records = sample_records(days=1)
    strict = ProductivityAnalyzer(AnalyzerOptions(session_gap_seconds=0)).analyze(records)
    loose = ProductivityAnalyzer(AnalyzerOptions(session_gap_seconds=3 * 3600)).analyze(records)
    assert strict.breakdown.focus_effectiveness != loose.breakdown.focus_effectiveness


def test_analyzer_entry_points():
    analyzer = ProductivityAnalyzer()
    records = sample_records()
    records.extend(
        ActivityRecord(datetime(2025, 1, 15, 21) + timedelta(minutes=10 * i), 300, ActivityType.SOCIAL, "Twitter")
        for i in range(6)
    )

    anomalies = analyzer.detect_anomalies(records)
    assert AnomalyKind.UNUSUAL_TIMING in {a.kind for a in anomalies}

    now = datetime(2025, 1, 16, 8, 0)
    energy = analyzer.predict_energy(records, now)
    assert energy.hours[0] == 8
    assert len(analyzer.detect_flow_states(records)) > 0
    assert 0 <= analyzer.assess_work_quality(records).score <= 100
    assert analyzer.updated_baseline(records, now).updated_at == now
    assert analyzer.suggest_schedule(records, now).confidence == pytest.approx(0.66)


def test_metrics_serialize():
    payload = analyze(sample_records()).to_dict()
    assert set(payload) == {"score", "confidence", "breakdown", "insights", "predictions"}
    assert isinstance(payload["predictions"]["optimal_work_hours"], list)
