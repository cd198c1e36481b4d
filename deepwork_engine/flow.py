"""Flow-state detection and work quality assessment."""

from __future__ import annotations

import numpy as np

from deepwork_engine.cognitive import estimate_cognitive_load
from deepwork_engine.config import PersonalizedBaseline
from deepwork_engine.schema import ActivityRecord, ActivityType, FlowState, Session, WorkQualityMetrics
from deepwork_engine.scoring import group_by_day
from deepwork_engine.sessions import DEFAULT_GAP_SECONDS, segment_sessions
from deepwork_engine.weights import INTENSIVE_TYPES, is_deep_work, task_complexity_weight

FLOW_THRESHOLD = 0.7
MIN_FLOW_SESSION_SECONDS = 1200
INTERRUPTION_SECONDS = 120
MIN_FLOW_DAYS = 3


def activity_consistency(session: Session) -> float:
    if len(session) <= 1:
        return 1.0
    unique_types = len({r.activity_type for r in session})
    return max(0.0, 1.0 - (unique_types - 1) / len(session))


def interruption_rate(session: Session) -> float:
    """Share of transitions that follow a record shorter than two minutes."""

    if len(session) <= 1:
        return 0.0
    records = session.records
    interruptions = sum(1 for prev in records[:-1] if prev.duration_seconds < INTERRUPTION_SECONDS)
    return interruptions / len(session)


def flow_probability(
    session_length: int, consistency: float, interruptions: float, load: float, preferred_length: int
) -> float:
    session_factor = min(1.0, session_length / max(1, preferred_length))
    probability = 0.3 * session_factor + 0.3 * consistency + 0.2 * (1 - interruptions) + 0.2 * (1 - load)
    return max(0.0, min(1.0, probability))


def detect_flow_states(
    records: list[ActivityRecord],
    baseline: PersonalizedBaseline | None = None,
    gap_threshold: int = DEFAULT_GAP_SECONDS,
    min_days: int = MIN_FLOW_DAYS,
    window_seconds: int = 300,
) -> list[FlowState]:
    """Score every session of 20+ minutes for flow; needs ``min_days`` distinct days."""

    if len(group_by_day(records)) < min_days:
        return []

    baseline = baseline or PersonalizedBaseline.default()
    states = []
    for session in segment_sessions(records, gap_threshold):
        length = session.duration_seconds
        if length < MIN_FLOW_SESSION_SECONDS:
            continue

        consistency = activity_consistency(session)
        interruptions = interruption_rate(session)
        load = estimate_cognitive_load(list(session.records), window_seconds).overall_load
        probability = flow_probability(length, consistency, interruptions, load, baseline.optimal_session_length)
        states.append(
            FlowState(
                started_at=session.started_at,
                session_length=length,
                activity_consistency=consistency,
                interruption_rate=interruptions,
                cognitive_load=load,
                flow_probability=probability,
                in_flow=probability >= FLOW_THRESHOLD,
            )
        )
    return states


def session_depth(records: list[ActivityRecord], gap_threshold: int = DEFAULT_GAP_SECONDS) -> float:
    sessions = segment_sessions(records, gap_threshold)
    if not sessions:
        return 0.0

    depths = []
    for session in sessions:
        focus_ratio = sum(1 for r in session if is_deep_work(r.activity_type)) / len(session)
        avg_duration = session.duration_seconds / len(session)
        depths.append(focus_ratio * 0.7 + min(1.0, avg_duration / 1800) * 0.3)
    return float(np.mean(depths))


def task_complexity(records: list[ActivityRecord]) -> float:
    total = sum(r.duration_seconds for r in records)
    if total <= 0:
        return 0.0
    return sum(r.duration_seconds * task_complexity_weight(r.activity_type) for r in records) / total


def output_consistency(records: list[ActivityRecord]) -> float:
    shares = []
    for day_records in group_by_day(records).values():
        total = sum(r.duration_seconds for r in day_records)
        productive = sum(r.duration_seconds for r in day_records if is_deep_work(r.activity_type))
        shares.append(productive / total if total > 0 else 0.0)

    if not shares:
        return 0.0
    mean = float(np.mean(shares))
    cv = float(np.std(shares)) / mean if mean > 0 else 1.0
    return max(0.0, 1.0 - cv)


def error_rate(records: list[ActivityRecord]) -> float:
    """Debugging share of intensive work, saturating at 20%."""

    intensive = sum(r.duration_seconds for r in records if r.activity_type in INTENSIVE_TYPES)
    if intensive <= 0:
        return 0.0
    debug = sum(r.duration_seconds for r in records if r.activity_type is ActivityType.DEBUG)
    return min(1.0, debug / intensive / 0.2)


def assess_work_quality(records: list[ActivityRecord], gap_threshold: int = DEFAULT_GAP_SECONDS) -> WorkQualityMetrics:
    if not records:
        return WorkQualityMetrics(
            score=0, confidence=0.0, session_depth=0.0, task_complexity=0.0, output_consistency=0.0, error_rate=0.0
        )

    depth = session_depth(records, gap_threshold)
    complexity = task_complexity(records)
    consistency = output_consistency(records)
    errors = error_rate(records)
    score = (depth * 0.3 + complexity * 0.2 + consistency * 0.3 + (1 - errors) * 0.2) * 100

    return WorkQualityMetrics(
        score=int(round(score)),
        confidence=min(1.0, len(records) / 50),
        session_depth=depth,
        task_complexity=complexity,
        output_consistency=consistency,
        error_rate=errors,
    )
