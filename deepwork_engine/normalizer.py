"""Validation and ordering of raw activity records."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from deepwork_engine.errors import ValidationError
from deepwork_engine.schema import ActivityRecord, ActivityType

logger = logging.getLogger(__name__)


def _is_aware(moment: datetime) -> bool:
    return moment.tzinfo is not None and moment.utcoffset() is not None


def _validate(record: ActivityRecord, index: int, aware: Optional[bool] = None) -> None:
    if not isinstance(record, ActivityRecord):
        raise ValidationError(f"Record {index}: expected ActivityRecord, got {type(record).__name__}", index, record)

    if not isinstance(record.started_at, datetime):
        raise ValidationError(f"Record {index}: started_at must be a datetime", index, record)
    if record.ended_at is not None and not isinstance(record.ended_at, datetime):
        raise ValidationError(f"Record {index}: ended_at must be a datetime", index, record)

    # Naive and timezone-aware timestamps cannot be ordered against each other
    if aware is not None and _is_aware(record.started_at) != aware:
        raise ValidationError(f"Record {index}: mixes naive and timezone-aware timestamps", index, record)
    if record.ended_at is not None and _is_aware(record.ended_at) != _is_aware(record.started_at):
        raise ValidationError(f"Record {index}: mixes naive and timezone-aware timestamps", index, record)

    duration = record.duration_seconds
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise ValidationError(f"Record {index}: duration_seconds must be an integer", index, record)
    if duration <= 0:
        raise ValidationError(f"Record {index}: non-positive duration {duration}", index, record)

    if not isinstance(record.activity_type, ActivityType):
        raise ValidationError(f"Record {index}: unknown activity type {record.activity_type!r}", index, record)

    if record.ended_at is not None and record.ended_at < record.started_at:
        raise ValidationError(f"Record {index}: ends before it starts", index, record)


def normalize_records(records: Optional[Iterable[ActivityRecord]]) -> list[ActivityRecord]:
    """Validate records and return them sorted by start time.

    Invalid records are rejected, never dropped or clamped.
    """

    if records is None:
        return []

    items = list(records)
    aware = None
    for index, record in enumerate(items):
        _validate(record, index, aware)
        if aware is None:
            aware = _is_aware(record.started_at)

    ordered = sorted(items, key=lambda r: r.started_at)
    logger.debug("Normalized %d activity records", len(ordered))
    return ordered
