"""Session segmentation by inactivity gap."""

from __future__ import annotations

from deepwork_engine.schema import ActivityRecord, Session

DEFAULT_GAP_SECONDS = 300


def gap_seconds(previous: ActivityRecord, current: ActivityRecord) -> float:
    """Idle time between the end of ``previous`` and the start of ``current``."""

    return (current.started_at - previous.ends_at).total_seconds()


def segment_sessions(records: list[ActivityRecord], gap_threshold: int = DEFAULT_GAP_SECONDS) -> list[Session]:
    """Partition chronologically sorted records into sessions."""

    if not records:
        return []

    sessions: list[Session] = []
    current = [records[0]]
    for previous, record in zip(records, records[1:]):
        if gap_seconds(previous, record) <= gap_threshold:
            current.append(record)
        else:
            sessions.append(Session(tuple(current)))
            current = [record]
    sessions.append(Session(tuple(current)))
    return sessions
