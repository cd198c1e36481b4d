from datetime import datetime

import pytest

from deepwork_engine.baseline import learn_baseline
from deepwork_engine.config import PersonalizedBaseline
from deepwork_engine.schema import ActivityRecord, ActivityType

NOW = datetime(2025, 2, 1, 12, 0)


def sample_records(days=15):
    records = []
    for day in range(1, days + 1):
        records.append(ActivityRecord(datetime(2025, 1, day, 9), 3000, ActivityType.CODE, "VSCode"))
        records.append(ActivityRecord(datetime(2025, 1, day, 10), 3000, ActivityType.DESIGN, "Figma"))
        records.append(ActivityRecord(datetime(2025, 1, day, 20), 600, ActivityType.SOCIAL, "Twitter"))
        records.append(ActivityRecord(datetime(2025, 1, day, 21), 600, ActivityType.ENTERTAINMENT, "Netflix"))
    return records


def test_not_enough_data_keeps_previous():
    previous = PersonalizedBaseline.default()
    assert learn_baseline(sample_records(days=2), previous, NOW) is previous


def test_learned_baseline_is_a_new_object():
    previous = PersonalizedBaseline.default()
    learned = learn_baseline(sample_records(), previous, NOW)

    assert learned is not previous
    assert previous == PersonalizedBaseline.default()
    assert learned.updated_at == NOW
    assert learned.user_id == previous.user_id
    assert learned.peak_hours == (9, 10, 20, 21)
    assert learned.low_energy_hours == (9, 20, 21)
    assert learned.optimal_session_length == 3000
    assert learned.context_switch_tolerance == pytest.approx(59 / 60)
