import pytest

from deepwork_engine.config import AnalyzerOptions, PersonalizedBaseline, ScoringWeights
from deepwork_engine.errors import ConfigError


def test_weights_must_sum_to_one():
    with pytest.raises(ConfigError):
        ScoringWeights(activity_quality=0.5)


def test_options_from_mapping():
    options = AnalyzerOptions.from_mapping(
        {
            "session_gap_seconds": 600,
            "weights": {
                "activity_quality": 0.2,
                "focus_effectiveness": 0.2,
                "time_optimization": 0.2,
                "context_switching": 0.2,
                "consistency": 0.2,
            },
        }
    )
    assert options.session_gap_seconds == 600
    assert options.weights.consistency == 0.2
    assert options.min_data_points == 50


def test_unknown_option_rejected():
    with pytest.raises(ConfigError):
        AnalyzerOptions.from_mapping({"gap": 10})


def test_bad_weight_field_rejected():
    with pytest.raises(ConfigError):
        AnalyzerOptions.from_mapping({"weights": {"speed": 1.0}})


def test_invalid_threshold_rejected():
    with pytest.raises(ValueError):
        AnalyzerOptions(min_data_points=0)


def test_default_baseline():
    baseline = PersonalizedBaseline.default()
    assert baseline.peak_hours == (9, 10, 11, 14, 15)
    assert baseline.optimal_session_length == 2700
