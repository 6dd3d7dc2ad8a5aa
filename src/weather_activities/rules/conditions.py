"""Condition and scoring rule definitions.

Conditions are individual comparisons evaluated against one day of
forecast data. A scoring rule groups conditions (all must hold) and awards
a fixed number of points when they do.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from weather_activities.models.weather import SNOW_CODES, DailyForecast


class ConditionType(str, Enum):
    """Daily forecast values that can be evaluated."""

    TEMPERATURE_MAX = "temperature_max"
    TEMPERATURE_MIN = "temperature_min"
    PRECIPITATION = "precipitation"
    WEATHER_CODE = "weather_code"
    WIND_SPEED = "wind_speed"
    UV_INDEX = "uv_index"


class ComparisonOperator(str, Enum):
    """Operators for comparing values."""

    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    BETWEEN = "between"  # Inclusive on both ends


class ConditionResult(BaseModel):
    """Result of evaluating a single condition."""

    condition_type: ConditionType
    passed: bool
    actual_value: Any
    expected_value: Any
    operator: ComparisonOperator
    message: str


class Condition(BaseModel):
    """A single comparison against one day of forecast data.

    Example:
        ```python
        # Less than 2 mm of rain
        dry = Condition(
            type=ConditionType.PRECIPITATION,
            operator=ComparisonOperator.LESS_THAN,
            value=2,
        )

        # Maximum temperature between 18 and 35 °C
        warm = Condition(
            type=ConditionType.TEMPERATURE_MAX,
            operator=ComparisonOperator.BETWEEN,
            value=(18, 35),
        )
        ```
    """

    type: ConditionType = Field(..., description="Forecast value to evaluate")
    operator: ComparisonOperator = Field(..., description="Comparison operator")
    value: Any = Field(..., description="Value to compare against")
    description: str | None = Field(default=None, description="Human-readable description")

    def evaluate(self, forecast: DailyForecast) -> ConditionResult:
        """Evaluate this condition against one day of forecast data."""
        actual = getattr(forecast, self.type.value)
        passed = self._compare(actual, self.value)

        if passed:
            message = f"{self.type.value}: {actual} meets requirement"
        else:
            message = (
                f"{self.type.value}: {actual} does not meet "
                f"{self.operator.value} {self.value}"
            )

        return ConditionResult(
            condition_type=self.type,
            passed=passed,
            actual_value=actual,
            expected_value=self.value,
            operator=self.operator,
            message=message,
        )

    def _compare(self, actual: Any, expected: Any) -> bool:
        """Compare actual value against expected using the operator."""
        if actual is None:
            return False

        comparisons = {
            ComparisonOperator.LESS_THAN: lambda a, e: a < e,
            ComparisonOperator.LESS_THAN_OR_EQUAL: lambda a, e: a <= e,
            ComparisonOperator.GREATER_THAN: lambda a, e: a > e,
            ComparisonOperator.GREATER_THAN_OR_EQUAL: lambda a, e: a >= e,
            ComparisonOperator.BETWEEN: lambda a, e: e[0] <= a <= e[1],
        }

        comparator = comparisons.get(self.operator)
        if comparator:
            try:
                return comparator(actual, expected)
            except (TypeError, IndexError):
                return False
        return False


class ScoringRule(BaseModel):
    """Awards ``points`` for a day on which every condition holds."""

    conditions: list[Condition] = Field(..., min_length=1)
    points: int = Field(..., ge=0)
    description: str | None = None

    def evaluate(self, forecast: DailyForecast) -> int:
        """Points earned by this rule for one day."""
        if all(c.evaluate(forecast).passed for c in self.conditions):
            return self.points
        return 0


def when(
    condition_type: ConditionType,
    operator: ComparisonOperator,
    value: Any,
) -> Condition:
    """Shorthand for building a condition."""
    return Condition(type=condition_type, operator=operator, value=value)


def rule(points: int, description: str, *conditions: Condition) -> ScoringRule:
    """Shorthand for building a scoring rule."""
    return ScoringRule(conditions=list(conditions), points=points, description=description)


LT = ComparisonOperator.LESS_THAN
LTE = ComparisonOperator.LESS_THAN_OR_EQUAL
GT = ComparisonOperator.GREATER_THAN
GTE = ComparisonOperator.GREATER_THAN_OR_EQUAL
BETWEEN = ComparisonOperator.BETWEEN


def create_skiing_rules() -> list[ScoringRule]:
    """Cold but not bitter, snowing, low wind."""
    return [
        rule(
            1,
            "Cold temperatures (-15 to 2 °C)",
            when(ConditionType.TEMPERATURE_MIN, GTE, -15),
            when(ConditionType.TEMPERATURE_MAX, LTE, 2),
        ),
        rule(2, "Snow", when(ConditionType.WEATHER_CODE, BETWEEN, SNOW_CODES)),
        rule(1, "Low wind", when(ConditionType.WIND_SPEED, LT, 20)),
    ]


def create_surfing_rules() -> list[ScoringRule]:
    """Warm, dry, moderate wind, safe UV."""
    return [
        rule(1, "Warm weather (18 to 35 °C)", when(ConditionType.TEMPERATURE_MAX, BETWEEN, (18, 35))),
        rule(2, "Low rain", when(ConditionType.PRECIPITATION, LT, 2)),
        rule(1, "Moderate wind", when(ConditionType.WIND_SPEED, LT, 25)),
        rule(1, "Safe UV", when(ConditionType.UV_INDEX, LT, 8)),
    ]


def create_outdoor_sightseeing_rules() -> list[ScoringRule]:
    """Mild, dry, light breeze, moderate UV."""
    return [
        rule(1, "Mild temperatures (10 to 28 °C)", when(ConditionType.TEMPERATURE_MAX, BETWEEN, (10, 28))),
        rule(2, "Low rain", when(ConditionType.PRECIPITATION, LT, 2)),
        rule(1, "Light breeze", when(ConditionType.WIND_SPEED, BETWEEN, (5, 15))),
        rule(1, "Moderate UV", when(ConditionType.UV_INDEX, BETWEEN, (3, 7))),
    ]


def create_indoor_sightseeing_rules() -> list[ScoringRule]:
    """Bad outdoor weather favours indoor sightseeing."""
    return [
        rule(1, "Heavy rain", when(ConditionType.PRECIPITATION, GT, 3)),
        rule(1, "Extreme cold", when(ConditionType.TEMPERATURE_MAX, LT, 0)),
        rule(1, "Storms", when(ConditionType.WEATHER_CODE, GT, 60)),
        rule(1, "High wind", when(ConditionType.WIND_SPEED, GT, 30)),
    ]
