"""Rule engine for scoring activities against daily forecasts."""

from weather_activities.rules.engine import (
    ActivityProfile,
    ActivityScorer,
    default_profiles,
    to_display_score,
)
from weather_activities.rules.conditions import (
    Condition,
    ConditionType,
    ComparisonOperator,
    ConditionResult,
    ScoringRule,
)

__all__ = [
    "ActivityProfile",
    "ActivityScorer",
    "default_profiles",
    "to_display_score",
    "Condition",
    "ConditionType",
    "ComparisonOperator",
    "ConditionResult",
    "ScoringRule",
]
