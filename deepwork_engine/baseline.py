"""Learning a personalized baseline from observed activity."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

import numpy as np

from deepwork_engine.cognitive import count_context_switches
from deepwork_engine.config import PersonalizedBaseline
from deepwork_engine.energy import hourly_energy_curve
from deepwork_engine.schema import ActivityRecord
from deepwork_engine.scoring import activity_quality_score, hourly_distribution
from deepwork_engine.sessions import DEFAULT_GAP_SECONDS, segment_sessions

logger = logging.getLogger(__name__)

MIN_SESSION_SECONDS = 1200


def learn_baseline(
    records: list[ActivityRecord],
    previous: PersonalizedBaseline,
    now: datetime,
    min_data_points: int = 50,
    gap_threshold: int = DEFAULT_GAP_SECONDS,
) -> PersonalizedBaseline:
    """Return an updated copy of ``previous``; ``previous`` itself is left untouched.

    With fewer than ``min_data_points`` records the previous baseline is
    returned as-is.
    """

    if len(records) < min_data_points:
        logger.debug("Keeping baseline for %s: %d records", previous.user_id, len(records))
        return previous

    raw, _ = hourly_distribution(records)
    curve = hourly_energy_curve(records)
    observed = [hour for hour in range(24) if raw[hour] > 0]

    peak_hours = sorted(sorted(observed, key=lambda h: (-curve[h], h))[:5])
    low_energy = sorted(sorted(observed, key=lambda h: (curve[h], h))[:3])

    long_sessions = [
        s.duration_seconds for s in segment_sessions(records, gap_threshold) if s.duration_seconds >= MIN_SESSION_SECONDS
    ]
    session_length = int(np.median(long_sessions)) if long_sessions else previous.optimal_session_length

    return replace(
        previous,
        average_productivity=activity_quality_score(records),
        peak_hours=tuple(peak_hours),
        low_energy_hours=tuple(low_energy),
        optimal_session_length=session_length,
        context_switch_tolerance=count_context_switches(records) / len(records),
        updated_at=now,
    )
