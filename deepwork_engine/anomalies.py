"""Daily anomaly detection against the history's own mean and spread."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np
from sklearn.preprocessing import StandardScaler

from deepwork_engine.schema import (
    ActivityRecord,
    AnomalyKind,
    AnomalyMetrics,
    AnomalyRecord,
    DailyAggregate,
    Severity,
)
from deepwork_engine.scoring import group_by_day
from deepwork_engine.weights import is_deep_work

logger = logging.getLogger(__name__)

MIN_DAYS = 7
LATE_HOURS = frozenset({20, 21, 22, 23, 0, 1, 2, 3, 4, 5})
LATE_SHARE_THRESHOLD = 0.3
EXPECTED_LATE_PERCENT = 10

_TOTAL, _PRODUCTIVE, _COUNT = range(3)


def build_daily_aggregates(records: list[ActivityRecord]) -> list[DailyAggregate]:
    """Summarize records per calendar day, oldest first."""

    aggregates = []
    for day, day_records in sorted(group_by_day(records).items()):
        aggregates.append(
            DailyAggregate(
                date=day,
                total_seconds=sum(r.duration_seconds for r in day_records),
                productive_seconds=sum(r.duration_seconds for r in day_records if is_deep_work(r.activity_type)),
                activity_count=len(day_records),
                start_hours=tuple(r.hour for r in day_records),
                unique_apps=len({r.app_name for r in day_records}),
            )
        )
    return aggregates


def _hours(seconds: float) -> float:
    return round(seconds / 3600.0, 1)


def _spike(day: DailyAggregate, mean: float, z: float) -> AnomalyRecord:
    return AnomalyRecord(
        date=day.date,
        kind=AnomalyKind.SPIKE,
        severity=Severity.HIGH if z > 3 else Severity.MEDIUM,
        title="Exceptional Productivity Day",
        description="You achieved significantly higher productive output than usual.",
        metrics=AnomalyMetrics(actual=_hours(day.productive_seconds), expected=_hours(mean), deviation=round(z, 1)),
        insights=(
            "Identify what made this day special",
            "Consider replicating successful patterns",
            "Note energy levels and external factors",
        ),
        recommendations=(
            "Document your workflow from this day",
            "Try to replicate the conditions that led to this performance",
            "Schedule similar work patterns for upcoming days",
        ),
        confidence=0.85,
    )


def _dip(day: DailyAggregate, mean: float, z: float) -> AnomalyRecord:
    return AnomalyRecord(
        date=day.date,
        kind=AnomalyKind.DIP,
        severity=Severity.HIGH if z > 3 else Severity.MEDIUM,
        title="Productivity Decline Detected",
        description="Your productive output was significantly lower than your typical performance.",
        metrics=AnomalyMetrics(actual=_hours(day.productive_seconds), expected=_hours(mean), deviation=round(z, 1)),
        insights=(
            "Check for external factors or distractions",
            "Evaluate energy levels and health",
            "Review task complexity and motivation",
        ),
        recommendations=(
            "Take extra rest and recovery time",
            "Identify and eliminate distractions",
            "Break down complex tasks into smaller parts",
            "Consider adjusting your schedule",
        ),
        confidence=0.82,
    )


def _pattern_break(day: DailyAggregate, mean: float, z: float) -> AnomalyRecord:
    return AnomalyRecord(
        date=day.date,
        kind=AnomalyKind.PATTERN_BREAK,
        severity=Severity.MEDIUM,
        title="Excessive Task Switching",
        description="You switched between tasks more frequently than usual, which may indicate scattered focus.",
        metrics=AnomalyMetrics(actual=day.activity_count, expected=round(mean), deviation=round(z, 1)),
        insights=(
            "High cognitive load from frequent switching",
            "Possible external interruptions",
            "May indicate unclear priorities",
        ),
        recommendations=(
            "Use time-blocking techniques",
            "Set specific times for different activities",
            "Minimize notifications during focus periods",
            "Clarify daily priorities",
        ),
        confidence=0.78,
    )


def _unusual_timing(day: DailyAggregate, late_share: float) -> AnomalyRecord:
    return AnomalyRecord(
        date=day.date,
        kind=AnomalyKind.UNUSUAL_TIMING,
        severity=Severity.HIGH,
        title="Unusual Working Hours",
        description=(
            "A significant portion of your work occurred during late hours, "
            "which may impact sleep and recovery."
        ),
        # Percent of the day's records, not standard deviations
        metrics=AnomalyMetrics(
            actual=round(late_share * 100),
            expected=EXPECTED_LATE_PERCENT,
            deviation=round(late_share * 100 - EXPECTED_LATE_PERCENT),
        ),
        insights=(
            "Working late may disrupt circadian rhythms",
            "Could indicate deadline pressure or poor planning",
            "May affect next-day performance",
        ),
        recommendations=(
            "Set strict work cutoff times",
            "Improve time management and planning",
            "Consider redistributing workload",
            "Prioritize sleep for optimal performance",
        ),
        confidence=0.90,
    )


def late_share(day: DailyAggregate) -> float:
    if not day.start_hours:
        return 0.0
    return sum(1 for hour in day.start_hours if hour in LATE_HOURS) / len(day.start_hours)


def detect_anomalies(
    aggregates: Optional[Sequence[DailyAggregate]], min_days: int = MIN_DAYS, sigma: float = 2.0
) -> list[AnomalyRecord]:
    """Flag days deviating more than ``sigma`` standard deviations from the mean.

    Returns an empty list when fewer than ``min_days`` days are supplied.
    """

    days = list(aggregates or [])
    if len(days) < min_days:
        logger.debug("Skipping anomaly detection: %d days of history, need %d", len(days), min_days)
        return []

    matrix = np.array(
        [[day.total_seconds, day.productive_seconds, day.activity_count] for day in days], dtype=float
    )
    scaler = StandardScaler().fit(matrix)
    means = scaler.mean_
    stds = np.sqrt(scaler.var_)
    # A flat series has no spread to deviate from
    spread = stds > 1e-9 * np.maximum(1.0, np.abs(means))
    z_scores = np.where(spread, (matrix - means) / np.where(spread, stds, 1.0), 0.0)

    anomalies: list[AnomalyRecord] = []
    for row, day in enumerate(days):
        z_productive = float(z_scores[row, _PRODUCTIVE])
        z_count = float(z_scores[row, _COUNT])

        if z_productive > sigma:
            anomalies.append(_spike(day, float(means[_PRODUCTIVE]), z_productive))
        if z_productive < -sigma and day.total_seconds >= 0.5 * means[_TOTAL]:
            anomalies.append(_dip(day, float(means[_PRODUCTIVE]), -z_productive))
        if z_count > sigma:
            anomalies.append(_pattern_break(day, float(means[_COUNT]), z_count))

        share = late_share(day)
        if share >= LATE_SHARE_THRESHOLD:
            anomalies.append(_unusual_timing(day, share))

    logger.debug("Detected %d anomalies across %d days", len(anomalies), len(days))
    return sorted(anomalies, key=lambda a: (-a.severity.rank, -a.date.toordinal()))
