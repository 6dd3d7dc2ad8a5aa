"""Tests for the activity scoring engine."""

import asyncio

import pytest

from conftest import make_days
from weather_activities.models.activity import ActivityType
from weather_activities.models.weather import WeatherForecast
from weather_activities.rules.engine import (
    ActivityProfile,
    ActivityScorer,
    default_profiles,
    to_display_score,
)
from weather_activities.rules.conditions import ConditionType, LT, rule, when
from weather_activities.services.forecast import CityNotFoundError

ACTIVITY_ORDER = [
    ActivityType.SKIING,
    ActivityType.SURFING,
    ActivityType.OUTDOOR_SIGHTSEEING,
    ActivityType.INDOOR_SIGHTSEEING,
]


class StubForecasts:
    """Forecast provider returning a canned forecast for one city."""

    def __init__(self, forecasts: dict[str, WeatherForecast]):
        self.forecasts = forecasts
        self.requested: list[str] = []

    async def get_weather_forecast(self, city_id):
        self.requested.append(str(city_id))
        if str(city_id) not in self.forecasts:
            raise CityNotFoundError(city_id)
        return self.forecasts[str(city_id)]


class TestDisplayScore:
    """Tests for raw point rescaling."""

    @pytest.mark.parametrize(
        "raw,expected",
        [(0, 0), (1, 0), (2, 1), (7, 3), (14, 5), (21, 8), (28, 10), (35, 10)],
    )
    def test_rescaling(self, raw, expected):
        """Test raw points map onto 0-10 with halves rounding up."""
        assert to_display_score(raw) == expected


class TestScoreDays:
    """Tests for ActivityScorer.score_days."""

    def test_fixed_order_and_reasons(self):
        """Test rankings come back in a fixed order with fixed phrases."""
        rankings = ActivityScorer().score_days(make_days())

        assert [r.activity for r in rankings] == ACTIVITY_ORDER
        assert rankings[0].reason.endswith("Cold temperatures, snow conditions, low wind")
        assert rankings[1].reason.endswith("Warm weather, low rain, moderate wind, safe UV")
        assert rankings[2].reason.endswith(
            "Mild temperatures, low rain, light breeze, moderate UV"
        )
        assert rankings[3].reason.endswith(
            "Poor outdoor conditions (rain, cold, storms, high wind)"
        )

    def test_mild_week(self):
        """Test a mild, dry week favours outdoor activities over skiing."""
        rankings = {r.activity: r for r in ActivityScorer().score_days(make_days())}

        # Only the low-wind rule fires for skiing: 7 raw points
        assert rankings[ActivityType.SKIING].score == 3
        assert rankings[ActivityType.SKIING].reason.startswith("7 points:")
        assert rankings[ActivityType.SURFING].score == 10
        assert rankings[ActivityType.OUTDOOR_SIGHTSEEING].score == 10
        assert rankings[ActivityType.INDOOR_SIGHTSEEING].score == 0
        assert rankings[ActivityType.INDOOR_SIGHTSEEING].reason.startswith("0 points:")

    def test_perfect_ski_week(self):
        """Test seven snowy, cold, calm days give the maximum skiing score."""
        days = make_days(
            temperature_max=-3.0,
            temperature_min=-9.0,
            precipitation=0.5,
            weather_code=73,
            wind_speed=8.0,
            uv_index=1.0,
        )
        rankings = {r.activity: r for r in ActivityScorer().score_days(days)}

        assert rankings[ActivityType.SKIING].score == 10
        assert rankings[ActivityType.SKIING].reason.startswith("28 points:")
        # Dry and breezy, but too cold and dull for sightseeing: 21 raw points
        assert rankings[ActivityType.OUTDOOR_SIGHTSEEING].score == 8

    def test_stormy_week(self):
        """Test a wet, windy, freezing week favours indoor sightseeing."""
        days = make_days(
            temperature_max=-1.0,
            temperature_min=-4.0,
            precipitation=15.0,
            weather_code=95,
            wind_speed=50.0,
            uv_index=0.0,
        )
        rankings = {r.activity: r for r in ActivityScorer().score_days(days)}

        assert rankings[ActivityType.INDOOR_SIGHTSEEING].score == 10
        assert rankings[ActivityType.OUTDOOR_SIGHTSEEING].score == 0

    def test_no_days(self):
        """Test an empty forecast scores zero everywhere."""
        rankings = ActivityScorer().score_days([])
        assert all(r.score == 0 for r in rankings)

    def test_custom_profiles(self):
        """Test profiles can be replaced."""
        profile = ActivityProfile(
            activity=ActivityType.SURFING,
            summary="Dry",
            rules=[rule(4, "Dry", when(ConditionType.PRECIPITATION, LT, 2))],
        )
        rankings = ActivityScorer(profiles=[profile]).score_days(make_days())

        assert len(rankings) == 1
        assert rankings[0].score == 10
        assert rankings[0].reason == "28 points: Dry"

    def test_default_profiles_are_fresh(self):
        """Test each call builds independent rule lists."""
        first, second = default_profiles(), default_profiles()
        first[0].rules.clear()
        assert second[0].rules


class TestRankActivities:
    """Tests for ActivityScorer.rank_activities."""

    def test_ranks_by_city_id(self):
        """Test the forecast for the given city is scored."""
        stub = StubForecasts({"2988507": WeatherForecast(city_id="2988507", daily=make_days())})
        scorer = ActivityScorer(stub)

        rankings = asyncio.run(scorer.rank_activities(2988507))

        assert stub.requested == ["2988507"]
        assert [r.activity for r in rankings] == ACTIVITY_ORDER

    def test_unknown_city_propagates(self):
        """Test lookup errors propagate unchanged."""
        scorer = ActivityScorer(StubForecasts({}))
        with pytest.raises(CityNotFoundError):
            asyncio.run(scorer.rank_activities("404"))

    def test_requires_provider(self):
        """Test ranking by id needs a forecast provider."""
        with pytest.raises(RuntimeError):
            asyncio.run(ActivityScorer().rank_activities("1"))
