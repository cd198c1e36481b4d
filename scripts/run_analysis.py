"""Run the productivity analysis on a CSV/JSON activity export."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from deepwork_engine.adapters import csv_adapter, json_adapter
from deepwork_engine.analyzer import ProductivityAnalyzer
from deepwork_engine.config import AnalyzerOptions


def _load_records(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _load_options(path: str | None) -> AnalyzerOptions:
    if path is None:
        return AnalyzerOptions()
    return AnalyzerOptions.from_mapping(json.loads(Path(path).read_text(encoding="utf-8")))


def main() -> None:
    parser = argparse.ArgumentParser(description="Analyze activity records for deep work metrics")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON activity file")
    parser.add_argument("--now", help="Reference time (ISO-8601) for energy prediction; defaults to the last record")
    parser.add_argument("--config", help="Optional JSON file with analyzer options")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    records = _load_records(Path(args.data))
    analyzer = ProductivityAnalyzer(_load_options(args.config))

    if args.now:
        now = datetime.fromisoformat(args.now)
    elif records:
        now = max(record.ends_at for record in records)
    else:
        now = datetime.now()

    report = {
        "n_records": len(records),
        "reference_time": now.isoformat(),
        "metrics": analyzer.analyze(records).to_dict(),
        "energy": analyzer.predict_energy(records, now).to_dict(),
        "anomalies": [anomaly.to_dict() for anomaly in analyzer.detect_anomalies(records)],
        "flow_states": [state.to_dict() for state in analyzer.detect_flow_states(records)],
    }
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
