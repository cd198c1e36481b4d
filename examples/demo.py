"""Demo script for deepwork-engine on a synthetic week of activity."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from deepwork_engine.analyzer import ProductivityAnalyzer
from deepwork_engine.schema import ActivityRecord, ActivityType


def synthetic_week() -> list[ActivityRecord]:
    records = []
    start = datetime(2025, 3, 3, 9, 0)
    day_plan = [
        (ActivityType.CODE, "VSCode", 50 * 60),
        (ActivityType.COMMUNICATION, "Slack", 10 * 60),
        (ActivityType.TEST, "Terminal", 30 * 60),
        (ActivityType.MEETING, "Zoom", 30 * 60),
        (ActivityType.DEBUG, "VSCode", 40 * 60),
        (ActivityType.BROWSE, "Firefox", 15 * 60),
    ]
    for day in range(7):
        cursor = start + timedelta(days=day)
        for activity_type, app, seconds in day_plan:
            records.append(ActivityRecord(cursor, seconds, activity_type, app))
            cursor += timedelta(seconds=seconds + 60)
    return records


def main() -> None:
    records = synthetic_week()
    analyzer = ProductivityAnalyzer()
    now = records[-1].ends_at
    print("Metrics:", analyzer.analyze(records).to_dict())
    print("Energy:", analyzer.predict_energy(records, now).to_dict())
    print("Anomalies:", [a.to_dict() for a in analyzer.detect_anomalies(records)])


if __name__ == "__main__":
    main()
