"""CSV adapter for activity records."""

from __future__ import annotations

import csv
from datetime import datetime

from deepwork_engine.errors import ValidationError
from deepwork_engine.schema import ActivityRecord, ActivityType

_REQUIRED_FIELDS = {"started_at", "duration_seconds", "activity_type", "app_name"}


def _parse_row(row: dict, row_number: int) -> ActivityRecord:
    missing = sorted(field for field in _REQUIRED_FIELDS if not row.get(field))
    if missing:
        raise ValidationError(f"Row {row_number}: missing required fields {missing}", row_number, row)

    try:
        started_at = datetime.fromisoformat(row["started_at"].strip())
    except ValueError as exc:
        raise ValidationError(f"Row {row_number}: malformed started_at", row_number, row) from exc

    try:
        duration = int(row["duration_seconds"])
    except ValueError as exc:
        raise ValidationError(f"Row {row_number}: invalid duration_seconds", row_number, row) from exc

    ended_raw = row.get("ended_at")
    ended_at = None
    if ended_raw not in (None, ""):
        try:
            ended_at = datetime.fromisoformat(ended_raw.strip())
        except ValueError as exc:
            raise ValidationError(f"Row {row_number}: malformed ended_at", row_number, row) from exc

    project_raw = row.get("project_id")
    project_id = project_raw.strip() if project_raw else None

    return ActivityRecord(
        started_at=started_at,
        duration_seconds=duration,
        activity_type=ActivityType.parse(row["activity_type"]),
        app_name=row["app_name"].strip(),
        project_id=project_id,
        ended_at=ended_at,
    )


def parse(file_path: str) -> list[ActivityRecord]:
    """Parse CSV file into a list of activity records."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        records: list[ActivityRecord] = []
        for row_number, row in enumerate(reader, start=2):
            records.append(_parse_row(row, row_number))
        return records
