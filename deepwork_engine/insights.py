"""Threshold rules mapping score breakdowns to insights."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from deepwork_engine.config import PersonalizedBaseline
from deepwork_engine.schema import ActivityRecord, Insight, ScoreBreakdown
from deepwork_engine.scoring import hourly_distribution
from deepwork_engine.weights import LOW_VALUE_WEIGHT, activity_weight


@dataclass(frozen=True)
class InsightContext:
    """Facts the rules are evaluated against."""

    breakdown: ScoreBreakdown
    low_value_share: float
    peak_hour_share: float


@dataclass(frozen=True)
class InsightRule:
    predicate: Callable[[InsightContext], bool]
    insight: Insight


INSIGHT_RULES: list[InsightRule] = [
    InsightRule(
        lambda ctx: ctx.breakdown.focus_effectiveness < 60,
        Insight(
            type="negative",
            category="focus",
            title="Focus Sessions Need Improvement",
            description="Your focus sessions are being interrupted frequently or are too short to achieve deep work.",
            confidence=0.85,
            actionable=True,
            recommendation=(
                "Try using the Pomodoro technique with 25-50 minute focused blocks, "
                "and turn off notifications during deep work."
            ),
        ),
    ),
    InsightRule(
        lambda ctx: ctx.breakdown.focus_effectiveness > 80,
        Insight(
            type="positive",
            category="focus",
            title="Excellent Focus Quality",
            description="You maintain strong focus during work sessions with minimal interruptions.",
            confidence=0.9,
            actionable=False,
        ),
    ),
    InsightRule(
        lambda ctx: ctx.peak_hour_share == 0 and ctx.breakdown.time_optimization < 70,
        Insight(
            type="neutral",
            category="timing",
            title="Optimize Your Work Schedule",
            description=(
                "You could increase productivity by aligning your most challenging work "
                "with your natural energy peaks."
            ),
            confidence=0.75,
            actionable=True,
            recommendation=(
                "Schedule your most important deep work tasks between 9-11 AM or 2-4 PM "
                "when cognitive performance typically peaks."
            ),
        ),
    ),
    InsightRule(
        lambda ctx: ctx.breakdown.context_switching < 50,
        Insight(
            type="negative",
            category="efficiency",
            title="Excessive Context Switching",
            description="Frequent switching between apps and tasks is reducing your cognitive efficiency.",
            confidence=0.9,
            actionable=True,
            recommendation=(
                "Batch similar tasks together and use time blocking to minimize context switches. "
                "Consider using focus apps to limit distractions."
            ),
        ),
    ),
    InsightRule(
        lambda ctx: ctx.low_value_share > 0.3,
        Insight(
            type="negative",
            category="balance",
            title="High Proportion of Low-Value Activities",
            description=(
                "A significant portion of your time is spent on activities that don't directly "
                "contribute to deep work."
            ),
            confidence=0.8,
            actionable=True,
            recommendation=(
                "Review your daily activities and try to delegate, automate, or eliminate low-value tasks. "
                "Focus more time on coding, designing, and problem-solving."
            ),
        ),
    ),
    InsightRule(
        lambda ctx: ctx.breakdown.consistency_bonus > 80,
        Insight(
            type="positive",
            category="patterns",
            title="Strong Consistency",
            description="You maintain consistent productivity patterns, which helps build sustainable work habits.",
            confidence=0.85,
            actionable=False,
        ),
    ),
    InsightRule(
        lambda ctx: ctx.breakdown.consistency_bonus < 40,
        Insight(
            type="neutral",
            category="patterns",
            title="Inconsistent Productivity Patterns",
            description=(
                "Your productivity varies significantly day to day, which might indicate "
                "energy management issues."
            ),
            confidence=0.7,
            actionable=True,
            recommendation=(
                "Try to establish more consistent daily routines, including regular sleep, "
                "exercise, and work start times."
            ),
        ),
    ),
]

NO_DATA_INSIGHT = Insight(
    type="neutral",
    category="focus",
    title="No Data Available",
    description="Start tracking your activities to receive productivity insights.",
    confidence=1.0,
    actionable=True,
    recommendation="Keep activity tracking running; personalized insights appear once enough data is collected.",
)


def build_context(
    records: list[ActivityRecord], breakdown: ScoreBreakdown, baseline: PersonalizedBaseline
) -> InsightContext:
    low_value = sum(1 for r in records if activity_weight(r.activity_type) < LOW_VALUE_WEIGHT)
    low_value_share = low_value / len(records) if records else 0.0

    raw, _ = hourly_distribution(records)
    total = raw.sum()
    peak = sum(raw[hour] for hour in baseline.peak_hours if 0 <= hour < 24)
    peak_hour_share = float(peak / total) if total > 0 else 0.0

    return InsightContext(breakdown=breakdown, low_value_share=low_value_share, peak_hour_share=peak_hour_share)


def generate_insights(context: InsightContext, rules: list[InsightRule] | None = None) -> tuple[Insight, ...]:
    """Evaluate every rule and return matches ordered by descending confidence."""

    active = [rule.insight for rule in (INSIGHT_RULES if rules is None else rules) if rule.predicate(context)]
    return tuple(sorted(active, key=lambda insight: insight.confidence, reverse=True))
