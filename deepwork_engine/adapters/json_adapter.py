"""JSON adapter for activity records."""

from __future__ import annotations

import json
from datetime import datetime

from deepwork_engine.errors import ValidationError
from deepwork_engine.schema import ActivityRecord, ActivityType

_REQUIRED_FIELDS = {"started_at", "duration_seconds", "activity_type", "app_name"}


def _parse_item(item: dict, index: int) -> ActivityRecord:
    if not isinstance(item, dict):
        raise ValidationError(f"Item {index}: expected an object", index, item)

    missing = sorted(field for field in _REQUIRED_FIELDS if item.get(field) in (None, ""))
    if missing:
        raise ValidationError(f"Item {index}: missing required fields {missing}", index, item)

    try:
        started_at = datetime.fromisoformat(str(item["started_at"]))
    except ValueError as exc:
        raise ValidationError(f"Item {index}: malformed started_at", index, item) from exc

    duration_raw = item["duration_seconds"]
    if isinstance(duration_raw, bool) or not isinstance(duration_raw, (int, str)):
        raise ValidationError(f"Item {index}: invalid duration_seconds", index, item)
    try:
        duration = int(duration_raw)
    except ValueError as exc:
        raise ValidationError(f"Item {index}: invalid duration_seconds", index, item) from exc

    ended_raw = item.get("ended_at")
    ended_at = None
    if ended_raw is not None:
        try:
            ended_at = datetime.fromisoformat(str(ended_raw))
        except ValueError as exc:
            raise ValidationError(f"Item {index}: malformed ended_at", index, item) from exc

    project_raw = item.get("project_id")
    project_id = str(project_raw).strip() if project_raw is not None else None

    return ActivityRecord(
        started_at=started_at,
        duration_seconds=duration,
        activity_type=ActivityType.parse(item["activity_type"]),
        app_name=str(item["app_name"]).strip(),
        project_id=project_id,
        ended_at=ended_at,
    )


def parse(file_path: str) -> list[ActivityRecord]:
    """Parse JSON file into activity records."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValidationError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
