"""Core data schema for activity records and analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional


class ActivityType(str, Enum):
    """Fixed productivity taxonomy for activity records."""

    CODE = "code"
    BUILD = "build"
    TEST = "test"
    DEBUG = "debug"
    DESIGN = "design"
    RESEARCH = "research"
    DOCUMENT = "document"
    REVIEW = "review"
    MEETING = "meeting"
    COMMUNICATION = "communication"
    BROWSE = "browse"
    SOCIAL = "social"
    ENTERTAINMENT = "entertainment"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | ActivityType | None) -> ActivityType:
        """Map a raw category string onto the taxonomy; unknown values become OTHER."""

        if isinstance(value, cls):
            return value
        if value is None:
            return cls.OTHER
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ActivityRecord:
    """Normalized activity record used by all modules."""

    started_at: datetime
    duration_seconds: int
    activity_type: ActivityType
    app_name: str
    project_id: Optional[str] = None
    ended_at: Optional[datetime] = None

    @property
    def ends_at(self) -> datetime:
        return self.started_at + timedelta(seconds=self.duration_seconds)

    @property
    def hour(self) -> int:
        return self.started_at.hour

    @property
    def day(self) -> date:
        return self.started_at.date()


@dataclass(frozen=True)
class Session:
    """Maximal run of records with no gap above the segmentation threshold."""

    records: tuple[ActivityRecord, ...]

    def __post_init__(self) -> None:
        if not self.records:
            raise ValueError("Session requires at least one record")

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[ActivityRecord]:
        return iter(self.records)

    @property
    def started_at(self) -> datetime:
        return self.records[0].started_at

    @property
    def ended_at(self) -> datetime:
        return max(record.ends_at for record in self.records)

    @property
    def duration_seconds(self) -> int:
        return sum(record.duration_seconds for record in self.records)


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _plain(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(_plain(k)): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return _plain(self)


@dataclass(frozen=True)
class ScoreBreakdown(_Serializable):
    activity_quality: float
    focus_effectiveness: float
    time_optimization: float
    context_switching: float
    consistency_bonus: float


@dataclass(frozen=True)
class Insight(_Serializable):
    """Structured, rule-derived observation about a user's activity."""

    type: str  # positive | neutral | negative
    category: str  # focus | timing | balance | efficiency | patterns
    title: str
    description: str
    confidence: float
    actionable: bool
    recommendation: Optional[str] = None


@dataclass(frozen=True)
class Predictions(_Serializable):
    optimal_work_hours: tuple[int, ...]
    burnout_risk: int
    weekly_capacity: int


@dataclass(frozen=True)
class DeepWorkMetrics(_Serializable):
    """Result of one analysis call."""

    score: int
    confidence: int
    breakdown: ScoreBreakdown
    insights: tuple[Insight, ...]
    predictions: Predictions


@dataclass(frozen=True)
class CognitiveLoadMetrics(_Serializable):
    context_switches: int
    multitasking_index: float
    attention_residue: float
    overall_load: float


@dataclass(frozen=True)
class EnergyPrediction(_Serializable):
    """Projected energy levels; ``projected_hourly[i]`` belongs to clock hour ``hours[i]``."""

    current_level: float
    projected_hourly: tuple[float, ...]
    hours: tuple[int, ...]
    optimal_task_timing: Mapping[str, tuple[int, ...]]
    recovery_needed: bool

    def __post_init__(self) -> None:
        frozen = MappingProxyType({task: tuple(hours) for task, hours in self.optimal_task_timing.items()})
        object.__setattr__(self, "optimal_task_timing", frozen)


@dataclass(frozen=True)
class ScheduleBlock(_Serializable):
    start_hour: int
    end_hour: int
    task_type: str
    energy_level: float


@dataclass(frozen=True)
class ScheduleSuggestion(_Serializable):
    blocks: tuple[ScheduleBlock, ...]
    break_hours: tuple[int, ...]
    confidence: float
    reasoning: tuple[str, ...]


@dataclass(frozen=True)
class FlowState(_Serializable):
    started_at: datetime
    session_length: int
    activity_consistency: float
    interruption_rate: float
    cognitive_load: float
    flow_probability: float
    in_flow: bool


@dataclass(frozen=True)
class WorkQualityMetrics(_Serializable):
    score: int
    confidence: float
    session_depth: float
    task_complexity: float
    output_consistency: float
    error_rate: float


@dataclass(frozen=True)
class DailyAggregate(_Serializable):
    """Per-day totals consumed by the anomaly detector."""

    date: date
    total_seconds: int
    productive_seconds: int
    activity_count: int
    start_hours: tuple[int, ...] = field(default_factory=tuple)
    unique_apps: int = 0


class AnomalyKind(str, Enum):
    SPIKE = "spike"
    DIP = "dip"
    PATTERN_BREAK = "pattern_break"
    UNUSUAL_TIMING = "unusual_timing"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.LOW: 1, Severity.MEDIUM: 2, Severity.HIGH: 3, Severity.CRITICAL: 4}


@dataclass(frozen=True)
class AnomalyMetrics(_Serializable):
    actual: float
    expected: float
    deviation: float


@dataclass(frozen=True)
class AnomalyRecord(_Serializable):
    date: date
    kind: AnomalyKind
    severity: Severity
    title: str
    description: str
    metrics: AnomalyMetrics
    insights: tuple[str, ...]
    recommendations: tuple[str, ...]
    confidence: float
