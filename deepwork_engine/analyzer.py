"""Productivity analysis entry points."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from deepwork_engine.anomalies import build_daily_aggregates, detect_anomalies
from deepwork_engine.baseline import learn_baseline
from deepwork_engine.cognitive import estimate_cognitive_load
from deepwork_engine.config import AnalyzerOptions, PersonalizedBaseline
from deepwork_engine.energy import predict_energy, suggest_schedule
from deepwork_engine.flow import assess_work_quality, detect_flow_states
from deepwork_engine.insights import NO_DATA_INSIGHT, build_context, generate_insights
from deepwork_engine.normalizer import normalize_records
from deepwork_engine.predictions import DEFAULT_PREDICTIONS, generate_predictions
from deepwork_engine.schema import (
    ActivityRecord,
    AnomalyRecord,
    DeepWorkMetrics,
    EnergyPrediction,
    FlowState,
    ScheduleSuggestion,
    ScoreBreakdown,
    WorkQualityMetrics,
)
from deepwork_engine.scoring import (
    activity_quality_score,
    composite_score,
    confidence_score,
    consistency_score,
    context_switching_score,
    focus_effectiveness_score,
    time_optimization_score,
)

logger = logging.getLogger(__name__)


def empty_metrics() -> DeepWorkMetrics:
    return DeepWorkMetrics(
        score=0,
        confidence=0,
        breakdown=ScoreBreakdown(
            activity_quality=0.0,
            focus_effectiveness=0.0,
            time_optimization=0.0,
            context_switching=0.0,
            consistency_bonus=0.0,
        ),
        insights=(NO_DATA_INSIGHT,),
        predictions=DEFAULT_PREDICTIONS,
    )


class ProductivityAnalyzer:
    """Stateless analyzer configured with options and a baseline profile.

    Instances hold no mutable state, so one instance may serve concurrent
    callers.
    """

    def __init__(self, options: Optional[AnalyzerOptions] = None, baseline: Optional[PersonalizedBaseline] = None):
        self.options = options or AnalyzerOptions()
        self.baseline = baseline or PersonalizedBaseline.default()

    def analyze(self, records: Optional[Iterable[ActivityRecord]]) -> DeepWorkMetrics:
        """Compute the deep work score, breakdown, insights and predictions."""

        items = normalize_records(records)
        if not items:
            return empty_metrics()

        opts = self.options
        load = estimate_cognitive_load(items, opts.multitasking_window_seconds)
        breakdown = ScoreBreakdown(
            activity_quality=activity_quality_score(items),
            focus_effectiveness=focus_effectiveness_score(items, opts.session_gap_seconds),
            time_optimization=time_optimization_score(items),
            context_switching=context_switching_score(load.overall_load),
            consistency_bonus=consistency_score(items),
        )
        score = composite_score(breakdown, opts.weights)
        confidence = confidence_score(items, opts.min_data_points)

        logger.debug("Analyzed %d records: score=%d breakdown=%s", len(items), score, breakdown)
        if len(items) < opts.min_data_points:
            logger.warning(
                "Only %d records supplied (%d recommended); score confidence is %d",
                len(items),
                opts.min_data_points,
                confidence,
            )

        return DeepWorkMetrics(
            score=score,
            confidence=confidence,
            breakdown=breakdown,
            insights=generate_insights(build_context(items, breakdown, self.baseline)),
            predictions=generate_predictions(items),
        )

    def detect_anomalies(self, records: Optional[Iterable[ActivityRecord]]) -> list[AnomalyRecord]:
        aggregates = build_daily_aggregates(normalize_records(records))
        return detect_anomalies(aggregates, self.options.min_anomaly_days, self.options.anomaly_sigma)

    def predict_energy(self, records: Optional[Iterable[ActivityRecord]], now: datetime) -> EnergyPrediction:
        return predict_energy(normalize_records(records), now, self.options.multitasking_window_seconds)

    def suggest_schedule(self, records: Optional[Iterable[ActivityRecord]], now: datetime) -> ScheduleSuggestion:
        return suggest_schedule(normalize_records(records), now, self.options.multitasking_window_seconds)

    def detect_flow_states(self, records: Optional[Iterable[ActivityRecord]]) -> list[FlowState]:
        return detect_flow_states(
            normalize_records(records),
            self.baseline,
            gap_threshold=self.options.session_gap_seconds,
            min_days=self.options.min_flow_days,
            window_seconds=self.options.multitasking_window_seconds,
        )

    def assess_work_quality(self, records: Optional[Iterable[ActivityRecord]]) -> WorkQualityMetrics:
        return assess_work_quality(normalize_records(records), self.options.session_gap_seconds)

    def updated_baseline(self, records: Optional[Iterable[ActivityRecord]], now: datetime) -> PersonalizedBaseline:
        """Learn a new baseline; the caller decides whether to swap it in."""

        return learn_baseline(
            normalize_records(records),
            self.baseline,
            now,
            min_data_points=self.options.min_data_points,
            gap_threshold=self.options.session_gap_seconds,
        )


def analyze(
    records: Optional[Iterable[ActivityRecord]],
    options: Optional[AnalyzerOptions] = None,
    baseline: Optional[PersonalizedBaseline] = None,
) -> DeepWorkMetrics:
    return ProductivityAnalyzer(options, baseline).analyze(records)
