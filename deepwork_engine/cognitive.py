"""Cognitive load estimation from switching behaviour."""

from __future__ import annotations

from collections import defaultdict
from datetime import timedelta

from deepwork_engine.schema import ActivityRecord, CognitiveLoadMetrics
from deepwork_engine.sessions import gap_seconds
from deepwork_engine.weights import activity_complexity

RECOVERY_SECONDS = 300.0


def count_context_switches(records: list[ActivityRecord]) -> int:
    return sum(
        1
        for prev, curr in zip(records, records[1:])
        if prev.app_name != curr.app_name or prev.activity_type != curr.activity_type
    )


def _time_windows(records: list[ActivityRecord], window_seconds: int) -> list[list[ActivityRecord]]:
    if not records:
        return []

    # Windows are anchored at the first start; only non-empty ones are kept
    step = timedelta(seconds=window_seconds)
    first = records[0].started_at
    buckets: dict[int, list[ActivityRecord]] = defaultdict(list)
    for record in records:
        buckets[(record.started_at - first) // step].append(record)
    return [buckets[key] for key in sorted(buckets)]


def multitasking_index(records: list[ActivityRecord], window_seconds: int = 300) -> float:
    """Average diversity of apps and activity types per fixed time window."""

    windows = _time_windows(records, window_seconds)
    if not windows:
        return 0.0

    scores = []
    for window in windows:
        unique_apps = len({r.app_name for r in window})
        unique_types = len({r.activity_type for r in window})
        scores.append((unique_apps + unique_types) / (len(window) + 1))
    return sum(scores) / len(scores)


def switch_cost(from_record: ActivityRecord, to_record: ActivityRecord) -> float:
    return abs(activity_complexity(from_record.activity_type) - activity_complexity(to_record.activity_type))


def attention_residue(records: list[ActivityRecord]) -> float:
    """Mean switch cost per transition, discounted by the idle gap before the switch."""

    if len(records) <= 1:
        return 0.0

    residue = 0.0
    for prev, curr in zip(records, records[1:]):
        gap = max(0.0, gap_seconds(prev, curr))
        penalty = 1.0 - gap / RECOVERY_SECONDS if gap < RECOVERY_SECONDS else 0.0
        residue += switch_cost(prev, curr) * penalty

    return min(1.0, residue / (len(records) - 1))


def estimate_cognitive_load(records: list[ActivityRecord], window_seconds: int = 300) -> CognitiveLoadMetrics:
    """Combine switch rate, multitasking and attention residue into a [0, 1] load.

    ``records`` must be sorted by start time.
    """

    if not records:
        return CognitiveLoadMetrics(context_switches=0, multitasking_index=0.0, attention_residue=0.0, overall_load=0.0)

    switches = count_context_switches(records)
    multitasking = multitasking_index(records, window_seconds)
    residue = attention_residue(records)

    switch_rate = switches / len(records)
    overall = 0.4 * switch_rate + 0.3 * multitasking + 0.3 * residue

    return CognitiveLoadMetrics(
        context_switches=switches,
        multitasking_index=multitasking,
        attention_residue=residue,
        overall_load=max(0.0, min(1.0, overall)),
    )
