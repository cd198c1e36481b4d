"""Analyzer tunables and the personalized baseline profile."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Mapping, Optional

from deepwork_engine.errors import ConfigError

DEFAULT_OPTIMAL_HOURS = (9, 10, 11, 14, 15, 16)


@dataclass(frozen=True)
class ScoringWeights:
    """Weights combining the five sub-scores into the deep work score."""

    activity_quality: float = 0.30
    focus_effectiveness: float = 0.25
    time_optimization: float = 0.20
    context_switching: float = 0.15
    consistency: float = 0.10

    def __post_init__(self):
        values = [getattr(self, f.name) for f in fields(self)]
        if any(value < 0 for value in values):
            raise ConfigError("Scoring weights must be non-negative")
        total = sum(values)
        if abs(total - 1.0) > 1e-9:
            raise ConfigError(f"Scoring weights must sum to 1.0, got {total}")


@dataclass(frozen=True)
class AnalyzerOptions:
    """Thresholds and window sizes shared by the analyzers."""

    # Max idle seconds between two records of the same session
    session_gap_seconds: int = 300
    # Window size for the multitasking index
    multitasking_window_seconds: int = 300
    min_data_points: int = 50
    min_anomaly_days: int = 7
    min_flow_days: int = 3
    anomaly_sigma: float = 2.0
    weights: ScoringWeights = field(default_factory=ScoringWeights)

    def __post_init__(self):
        if self.session_gap_seconds < 0:
            raise ConfigError("session_gap_seconds must be >= 0")
        if self.multitasking_window_seconds <= 0:
            raise ConfigError("multitasking_window_seconds must be > 0")
        if self.min_data_points <= 0:
            raise ConfigError("min_data_points must be > 0")
        if self.min_anomaly_days < 2 or self.min_flow_days < 1:
            raise ConfigError("minimum history windows are too small")
        if self.anomaly_sigma <= 0:
            raise ConfigError("anomaly_sigma must be > 0")

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> AnalyzerOptions:
        """Build options from a plain mapping, e.g. a parsed JSON config file."""

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ConfigError(f"Unknown analyzer options {unknown}")

        values = dict(payload)
        weights = values.pop("weights", None)
        try:
            if weights is not None:
                values["weights"] = ScoringWeights(**weights)
            return cls(**values)
        except TypeError as exc:
            raise ConfigError(f"Invalid analyzer options: {exc}") from exc


@dataclass(frozen=True)
class PersonalizedBaseline:
    """Reference profile of a user's working rhythm.

    Callers own its lifecycle: persist it, re-supply it, and replace it with
    the value returned by ``baseline.learn_baseline``. It is never mutated.
    """

    user_id: str = "default"
    average_productivity: float = 75.0
    peak_hours: tuple[int, ...] = (9, 10, 11, 14, 15)
    low_energy_hours: tuple[int, ...] = (13, 17, 18)
    optimal_session_length: int = 45 * 60
    context_switch_tolerance: float = 0.3
    preferred_activities: tuple[str, ...] = ("code", "design", "test")
    updated_at: Optional[datetime] = None

    @classmethod
    def default(cls) -> PersonalizedBaseline:
        return cls()
