"""Energy level prediction from hourly productivity and recent load."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import numpy as np

from deepwork_engine.cognitive import estimate_cognitive_load
from deepwork_engine.schema import ActivityRecord, EnergyPrediction, ScheduleBlock, ScheduleSuggestion
from deepwork_engine.weights import HIGH_INTENSITY_TYPES, INTENSIVE_TYPES, is_deep_work

logger = logging.getLogger(__name__)

DEFAULT_HOURLY_ENERGY = 0.5
DEFAULT_CURRENT_ENERGY = 0.7
RECENT_WINDOW = timedelta(hours=2)
INTENSITY_WINDOW = timedelta(hours=6)
INTENSITY_LIMIT_SECONDS = 4 * 3600
HIGH_LOAD_THRESHOLD = 0.8
TASK_TYPES = ("deep-work", "meetings", "administrative", "creative", "learning")


def _started_within(records: list[ActivityRecord], now: datetime, window: timedelta) -> list[ActivityRecord]:
    return [r for r in records if timedelta(0) <= now - r.started_at <= window]


def hourly_energy_curve(records: list[ActivityRecord]) -> np.ndarray:
    """Share of productive time per hour of day; hours without data default to 0.5."""

    total = np.zeros(24)
    productive = np.zeros(24)
    for record in records:
        total[record.hour] += record.duration_seconds
        if is_deep_work(record.activity_type):
            productive[record.hour] += record.duration_seconds

    curve = np.full(24, DEFAULT_HOURLY_ENERGY)
    observed = total > 0
    curve[observed] = np.minimum(1.0, productive[observed] / total[observed])
    return curve


def current_energy_level(records: list[ActivityRecord], now: datetime, window_seconds: int = 300) -> float:
    recent = _started_within(records, now, RECENT_WINDOW)
    if not recent:
        return DEFAULT_CURRENT_ENERGY

    load = estimate_cognitive_load(recent, window_seconds).overall_load
    recent_total = sum(r.duration_seconds for r in recent)
    productive = sum(r.duration_seconds for r in recent if r.activity_type in INTENSIVE_TYPES)
    productivity = productive / max(1, recent_total)

    return max(0.1, min(1.0, 0.8 - load * 0.5 + productivity * 0.3))


def project_energy(curve: np.ndarray, current_hour: int) -> tuple[tuple[float, ...], tuple[int, ...]]:
    """Project the next 24 hours, fading after the first 12 to model fatigue."""

    levels = []
    hours = []
    for offset in range(24):
        hour = (current_hour + offset) % 24
        fatigue = 1.0 if offset < 12 else max(0.3, 1.0 - (offset - 12) * 0.05)
        levels.append(max(0.1, float(curve[hour]) * fatigue))
        hours.append(hour)
    return tuple(levels), tuple(hours)


def optimal_task_timing(levels: tuple[float, ...], hours: tuple[int, ...]) -> dict[str, list[int]]:
    timing: dict[str, list[int]] = {task: [] for task in TASK_TYPES}
    for level, hour in zip(levels, hours):
        if level > 0.8:
            timing["deep-work"].append(hour)
            timing["creative"].append(hour)
        elif level > 0.6:
            timing["learning"].append(hour)
            timing["meetings"].append(hour)
        elif level > 0.4:
            timing["administrative"].append(hour)
    return timing


def recovery_needed(records: list[ActivityRecord], now: datetime, current_level: float) -> bool:
    intensive = sum(
        r.duration_seconds
        for r in _started_within(records, now, INTENSITY_WINDOW)
        if r.activity_type in HIGH_INTENSITY_TYPES
    )
    return current_level < 0.3 or intensive > INTENSITY_LIMIT_SECONDS


def predict_energy(records: list[ActivityRecord], now: datetime, window_seconds: int = 300) -> EnergyPrediction:
    """Predict energy for the 24 hours following ``now``.

    ``records`` must be sorted by start time; ``now`` is the reference clock.
    """

    curve = hourly_energy_curve(records)
    current = current_energy_level(records, now, window_seconds)
    levels, hours = project_energy(curve, now.hour)
    needs_recovery = recovery_needed(records, now, current)
    logger.debug("Energy at %s: current=%.2f recovery=%s", now.isoformat(), current, needs_recovery)

    return EnergyPrediction(
        current_level=current,
        projected_hourly=levels,
        hours=hours,
        optimal_task_timing=optimal_task_timing(levels, hours),
        recovery_needed=needs_recovery,
    )


def hourly_cognitive_load(records: list[ActivityRecord], window_seconds: int = 300) -> np.ndarray:
    """Cognitive load of the records started in each hour of day."""

    by_hour: dict[int, list[ActivityRecord]] = {}
    for record in records:
        by_hour.setdefault(record.hour, []).append(record)

    loads = np.zeros(24)
    for hour, hour_records in by_hour.items():
        loads[hour] = estimate_cognitive_load(hour_records, window_seconds).overall_load
    return loads


def suggest_schedule(records: list[ActivityRecord], now: datetime, window_seconds: int = 300) -> ScheduleSuggestion:
    """Place deep work in peak projected hours and breaks after high-load hours."""

    prediction = predict_energy(records, now, window_seconds)
    peaks = [
        (hour, level) for level, hour in zip(prediction.projected_hourly, prediction.hours) if level > 0.7
    ][:4]
    blocks = tuple(
        ScheduleBlock(start_hour=hour, end_hour=(hour + 2) % 24, task_type="deep-work", energy_level=level)
        for hour, level in peaks
    )

    loads = hourly_cognitive_load(records, window_seconds)
    break_hours = tuple(int(hour) for hour in np.flatnonzero(loads > HIGH_LOAD_THRESHOLD))

    reasoning = []
    if blocks:
        reasoning.append(
            "Scheduled deep work during peak energy hours: " + ", ".join(str(b.start_hour) for b in blocks)
        )
    else:
        reasoning.append("No projected hour clears the peak energy threshold")
    if break_hours:
        reasoning.append("Recommended breaks after high cognitive load hours: " + ", ".join(map(str, break_hours)))

    return ScheduleSuggestion(
        blocks=blocks,
        break_hours=break_hours,
        confidence=min(1.0, len(records) / 100),
        reasoning=tuple(reasoning),
    )
