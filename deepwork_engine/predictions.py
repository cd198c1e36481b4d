"""Optimal hours, burnout risk and weekly capacity projections."""

from __future__ import annotations

import numpy as np

from deepwork_engine.config import DEFAULT_OPTIMAL_HOURS
from deepwork_engine.schema import ActivityRecord, Predictions
from deepwork_engine.scoring import group_by_day, hourly_distribution, total_seconds
from deepwork_engine.weights import INTENSIVE_TYPES

WORKDAY_SECONDS = 8 * 3600
WORKDAYS_PER_WEEK = 5
DEFAULT_PREDICTIONS = Predictions(optimal_work_hours=DEFAULT_OPTIMAL_HOURS, burnout_risk=0, weekly_capacity=40)


def hourly_consistency(raw: np.ndarray) -> float:
    """100 minus the coefficient of variation (in percent) of active hours."""

    active = raw[raw > 0]
    if active.size == 0:
        return 0.0
    mean = active.mean()
    return max(0.0, 100.0 - float(active.std() / mean * 100.0))


def optimal_work_hours(records: list[ActivityRecord], limit: int = 6) -> tuple[int, ...]:
    raw, weighted = hourly_distribution(records)
    observed = [hour for hour in range(24) if raw[hour] > 0]
    if not observed:
        return DEFAULT_OPTIMAL_HOURS
    ranked = sorted(observed, key=lambda hour: (-weighted[hour], hour))[:limit]
    return tuple(sorted(ranked))


def generate_predictions(records: list[ActivityRecord]) -> Predictions:
    total = total_seconds(records)
    if total <= 0:
        return DEFAULT_PREDICTIONS

    raw, _ = hourly_distribution(records)
    avg_daily = total / max(1, len(group_by_day(records)))
    intensive = sum(r.duration_seconds for r in records if r.activity_type in INTENSIVE_TYPES)

    risk = (
        avg_daily / WORKDAY_SECONDS * 50.0
        + intensive / total * 30.0
        + (100.0 - hourly_consistency(raw)) * 0.2
    )

    return Predictions(
        optimal_work_hours=optimal_work_hours(records),
        burnout_risk=int(round(max(0.0, min(100.0, risk)))),
        weekly_capacity=int(round(avg_daily * WORKDAYS_PER_WEEK / 3600.0)),
    )
