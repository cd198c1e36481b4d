"""Sub-scores and the composite deep work score.

Every scorer returns a value in [0, 100]; inputs with no time recorded
score 0 except where noted.
"""

from __future__ import annotations

import math
from collections import defaultdict
from datetime import date

import numpy as np

from deepwork_engine.config import ScoringWeights
from deepwork_engine.schema import ActivityRecord, ScoreBreakdown, Session
from deepwork_engine.sessions import DEFAULT_GAP_SECONDS, segment_sessions
from deepwork_engine.weights import HOURLY_PRODUCTIVITY_BASELINE, PEAK_HOURS, activity_weight, is_deep_work

LONG_SESSION_SECONDS = 1800
SECONDS_PER_DAY = 86400


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def total_seconds(records: list[ActivityRecord]) -> int:
    return sum(r.duration_seconds for r in records)


def group_by_day(records: list[ActivityRecord]) -> dict[date, list[ActivityRecord]]:
    grouped: dict[date, list[ActivityRecord]] = defaultdict(list)
    for record in records:
        grouped[record.day].append(record)
    return dict(grouped)


def hourly_distribution(records: list[ActivityRecord]) -> tuple[np.ndarray, np.ndarray]:
    """Return (raw seconds, weight-adjusted seconds) per hour of day."""

    raw = np.zeros(24)
    weighted = np.zeros(24)
    for record in records:
        raw[record.hour] += record.duration_seconds
        weighted[record.hour] += record.duration_seconds * activity_weight(record.activity_type)
    return raw, weighted


def activity_quality_score(records: list[ActivityRecord]) -> float:
    """Duration-weighted type value plus up to 20 points for deep work share."""

    total = total_seconds(records)
    if total <= 0:
        return 0.0

    weighted = sum(r.duration_seconds * activity_weight(r.activity_type) for r in records)
    deep = sum(r.duration_seconds for r in records if is_deep_work(r.activity_type))

    quality = weighted / total * 100.0
    bonus = deep / total * 20.0
    return _clamp(quality + bonus)


def session_score(session: Session) -> float:
    focus_ratio = sum(1 for r in session if is_deep_work(r.activity_type)) / len(session)
    duration_score = min(100.0, session.duration_seconds / 3600.0 * 50.0)
    return 0.7 * focus_ratio * 100.0 + 0.3 * duration_score


def focus_effectiveness_score(records: list[ActivityRecord], gap_threshold: int = DEFAULT_GAP_SECONDS) -> float:
    """Mean session score plus up to 15 points for the share of 30+ minute sessions."""

    sessions = segment_sessions(records, gap_threshold)
    if not sessions:
        return 0.0

    mean_score = sum(session_score(s) for s in sessions) / len(sessions)
    long_sessions = sum(1 for s in sessions if s.duration_seconds > LONG_SESSION_SECONDS)
    bonus = long_sessions / len(sessions) * 15.0
    return _clamp(mean_score + bonus)


def time_optimization_score(records: list[ActivityRecord]) -> float:
    """Alignment of the hourly productivity profile with the circadian reference."""

    raw, weighted = hourly_distribution(records)
    total = raw.sum()
    if total <= 0:
        return 0.0

    reference = np.asarray(HOURLY_PRODUCTIVITY_BASELINE)
    active = raw > 0
    ratio = weighted[active] / raw[active]
    alignment = (1.0 - np.abs(ratio - reference[active])) * (raw[active] / total)

    peak_share = raw[list(PEAK_HOURS)].sum() / total
    return _clamp(float(alignment.sum()) * 100.0 + peak_share * 20.0)


def consistency_score(records: list[ActivityRecord]) -> float:
    daily = [activity_quality_score(day_records) for day_records in group_by_day(records).values()]
    if not daily:
        return 0.0
    return max(0.0, 100.0 - 2.0 * float(np.std(daily)))


def context_switching_score(overall_load: float) -> float:
    return _clamp(100.0 - overall_load * 100.0)


def composite_score(breakdown: ScoreBreakdown, weights: ScoringWeights) -> int:
    score = round(
        weights.activity_quality * breakdown.activity_quality
        + weights.focus_effectiveness * breakdown.focus_effectiveness
        + weights.time_optimization * breakdown.time_optimization
        + weights.context_switching * breakdown.context_switching
        + weights.consistency * breakdown.consistency_bonus
    )
    return int(_clamp(score))


def days_spanned(records: list[ActivityRecord]) -> int:
    """Whole days between the first and last record start, rounded up."""

    if not records:
        return 0
    starts = [r.started_at for r in records]
    span = (max(starts) - min(starts)).total_seconds()
    return math.ceil(span / SECONDS_PER_DAY)


def confidence_score(records: list[ActivityRecord], min_data_points: int) -> int:
    if not records:
        return 0
    quantity = 60.0 * len(records) / min_data_points
    span = min(40.0, 2.0 * days_spanned(records))
    return int(round(min(100.0, quantity + span)))
