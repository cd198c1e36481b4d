from datetime import datetime, timezone

import pytest

from deepwork_engine.analyzer import analyze
from deepwork_engine.errors import ValidationError
from deepwork_engine.normalizer import normalize_records
from deepwork_engine.schema import ActivityRecord, ActivityType


def test_records_are_sorted_by_start():
    late = ActivityRecord(datetime(2025, 1, 1, 11), 60, ActivityType.CODE, "VSCode")
    early = ActivityRecord(datetime(2025, 1, 1, 9), 60, ActivityType.TEST, "Terminal")
    assert normalize_records([late, early]) == [early, late]


def test_none_and_empty_are_not_errors():
    assert normalize_records(None) == []
    assert normalize_records([]) == []


@pytest.mark.parametrize("duration", [0, -5])
def test_non_positive_duration_rejected(duration):
    good = ActivityRecord(datetime(2025, 1, 1, 9), 60, ActivityType.CODE, "VSCode")
    bad = ActivityRecord(datetime(2025, 1, 1, 10), duration, ActivityType.CODE, "VSCode")
    with pytest.raises(ValidationError) as info:
        normalize_records([good, bad])
    assert info.value.index == 1
    assert info.value.record is bad


def test_end_before_start_rejected():
    record = ActivityRecord(
        datetime(2025, 1, 1, 10), 60, ActivityType.CODE, "VSCode", ended_at=datetime(2025, 1, 1, 9)
    )
    with pytest.raises(ValidationError):
        normalize_records([record])


def test_raw_string_type_rejected():
    record = ActivityRecord(datetime(2025, 1, 1, 10), 60, "code", "VSCode")
    with pytest.raises(ValidationError):
        normalize_records([record])


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)


def test_activity_type_parse_defaults_to_other():
    assert ActivityType.parse("Code ") is ActivityType.CODE
    assert ActivityType.parse("gaming") is ActivityType.OTHER
    assert ActivityType.parse(None) is ActivityType.OTHER


def test_string_start_rejected():
    record = ActivityRecord("2025-01-06T09:00:00", 600, ActivityType.CODE, "VSCode")
    with pytest.raises(ValidationError) as info:
        normalize_records([record])
    assert info.value.index == 0


def test_string_start_rejected_by_analyze():
    record = ActivityRecord("2025-01-06T09:00:00", 600, ActivityType.CODE, "VSCode")
    with pytest.raises(ValidationError):
        analyze([record])


def test_string_end_rejected():
    record = ActivityRecord(datetime(2025, 1, 1, 9), 60, ActivityType.CODE, "VSCode", ended_at="2025-01-01T09:01")
    with pytest.raises(ValidationError):
        normalize_records([record])


def test_naive_and_aware_starts_rejected():
    naive = ActivityRecord(datetime(2025, 1, 1, 9), 60, ActivityType.CODE, "VSCode")
    aware = ActivityRecord(datetime(2025, 1, 1, 10, tzinfo=timezone.utc), 60, ActivityType.CODE, "VSCode")
    with pytest.raises(ValidationError) as info:
        normalize_records([naive, aware])
    assert info.value.index == 1
    with pytest.raises(ValidationError):
        analyze([aware, naive])


def test_aware_start_with_naive_end_rejected():
    record = ActivityRecord(
        datetime(2025, 1, 1, 9, tzinfo=timezone.utc), 60, ActivityType.CODE, "VSCode", ended_at=datetime(2025, 1, 1, 9, 1)
    )
    with pytest.raises(ValidationError):
        normalize_records([record])


def test_all_aware_records_accepted():
    later = ActivityRecord(datetime(2025, 1, 1, 11, tzinfo=timezone.utc), 60, ActivityType.CODE, "VSCode")
    earlier = ActivityRecord(datetime(2025, 1, 1, 9, tzinfo=timezone.utc), 60, ActivityType.TEST, "Terminal")
    assert normalize_records([later, earlier]) == [earlier, later]
