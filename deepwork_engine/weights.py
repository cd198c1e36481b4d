"""Activity weight tables and the circadian reference curve."""

from __future__ import annotations

from deepwork_engine.schema import ActivityType

# Productivity value of each activity type, in [0, 1]
ACTIVITY_TYPE_WEIGHTS: dict[ActivityType, float] = {
    ActivityType.CODE: 1.0,
    ActivityType.BUILD: 0.9,
    ActivityType.TEST: 0.9,
    ActivityType.DEBUG: 0.85,
    ActivityType.DESIGN: 0.8,
    ActivityType.RESEARCH: 0.75,
    ActivityType.DOCUMENT: 0.7,
    ActivityType.REVIEW: 0.7,
    ActivityType.MEETING: 0.5,
    ActivityType.COMMUNICATION: 0.4,
    ActivityType.BROWSE: 0.2,
    ActivityType.SOCIAL: 0.1,
    ActivityType.ENTERTAINMENT: 0.0,
    ActivityType.OTHER: 0.5,
}

# Mental effort of an activity type; switching between distant levels is costly
ACTIVITY_COMPLEXITY: dict[ActivityType, float] = {
    ActivityType.CODE: 1.0,
    ActivityType.DEBUG: 0.9,
    ActivityType.TEST: 0.8,
    ActivityType.DESIGN: 0.8,
    ActivityType.RESEARCH: 0.7,
    ActivityType.BUILD: 0.6,
    ActivityType.DOCUMENT: 0.5,
    ActivityType.COMMUNICATION: 0.3,
    ActivityType.BROWSE: 0.2,
}
DEFAULT_COMPLEXITY = 0.5

# Cognitive demand of the work itself, used to grade work quality
TASK_COMPLEXITY: dict[ActivityType, float] = {
    ActivityType.CODE: 1.0,
    ActivityType.DEBUG: 0.9,
    ActivityType.DESIGN: 0.8,
    ActivityType.TEST: 0.7,
    ActivityType.RESEARCH: 0.7,
    ActivityType.BUILD: 0.6,
    ActivityType.DOCUMENT: 0.4,
    ActivityType.COMMUNICATION: 0.3,
    ActivityType.BROWSE: 0.2,
}

DEEP_WORK_TYPES = frozenset(
    {ActivityType.CODE, ActivityType.BUILD, ActivityType.TEST, ActivityType.DEBUG, ActivityType.DESIGN}
)
# Used for burnout risk and current energy
INTENSIVE_TYPES = frozenset({ActivityType.CODE, ActivityType.BUILD, ActivityType.TEST, ActivityType.DEBUG})
# Used for recovery assessment
HIGH_INTENSITY_TYPES = frozenset({ActivityType.CODE, ActivityType.DEBUG, ActivityType.BUILD})

LOW_VALUE_WEIGHT = 0.3

# Expected productivity by hour of day, 0-23
HOURLY_PRODUCTIVITY_BASELINE = (
    0.3, 0.2, 0.1, 0.1, 0.1, 0.2,
    0.4, 0.6, 0.8, 0.9, 1.0, 0.9,
    0.7, 0.8, 0.9, 1.0, 0.9, 0.8,
    0.6, 0.5, 0.4, 0.4, 0.3, 0.3,
)
PEAK_HOURS = (9, 10, 14, 15)


def activity_weight(activity_type: ActivityType) -> float:
    return ACTIVITY_TYPE_WEIGHTS[activity_type]


def activity_complexity(activity_type: ActivityType) -> float:
    """Types without a calibrated complexity sit at the neutral midpoint."""
    return ACTIVITY_COMPLEXITY.get(activity_type, DEFAULT_COMPLEXITY)


def is_deep_work(activity_type: ActivityType) -> bool:
    return activity_type in DEEP_WORK_TYPES


def task_complexity_weight(activity_type: ActivityType) -> float:
    return TASK_COMPLEXITY.get(activity_type, DEFAULT_COMPLEXITY)
