"""
Unit tests for crop suitability scoring
"""

import itertools

import pytest

from agents.knowledge.models import CLIMATE_TYPES, LEVELS, SOIL_TYPES, Crop
from agents.recommendation.models import FarmInput
from agents.recommendation.scoring import ScoringEngine, format_score_breakdown, parse_score_breakdown
from agents.weather.models import WeatherSnapshot


def weather(humidity):
    return WeatherSnapshot(temperature=30, humidity=humidity, rainfall=0, description="clear sky")


@pytest.fixture
def engine():
    return ScoringEngine()


class TestScore:
    """Point allocation"""

    def test_full_match_with_high_humidity(self, engine, clay_humid_crop, farm_input, humid_weather):
        result = engine.score(clay_humid_crop, farm_input, humid_weather)

        assert result.score == 95
        assert (result.soilPoints, result.climatePoints, result.weatherPoints, result.sustainabilityPoints) == (
            40, 40, 10, 5
        )
        assert result.reasons[0] == (
            "Score breakdown → Soil: 40, Climate: 40, Weather: 10, Sustainability: 5; Total: 95%"
        )
        assert "Current high humidity (80%) supports water-intensive crops" in result.reasons

    def test_mismatch_without_weather(self, engine, clay_humid_crop):
        farm = FarmInput(state="Rajasthan", district="Jodhpur", soilType="Sandy", climate="Dry", farmSize=1.0)

        result = engine.score(clay_humid_crop, farm)

        assert result.score == 25
        assert result.weatherPoints == 0
        assert "Sandy soil is not the ideal match for Paddy" in result.soilReasoning
        assert "prefers Clay soil" in result.soilReasoning
        assert "Dry climate may pose challenges for Paddy" in result.climateReasoning

    def test_low_water_crop_in_dry_air(self, engine):
        crop = Crop(id="millet", name="Millet", suitableSoils=["Sandy"], suitableClimates=["Dry"],
                    waterUsage="Low", carbonFootprint="Low")
        farm = FarmInput(state="Rajasthan", district="Jodhpur", soilType="Sandy", climate="Dry", farmSize=3.0)

        result = engine.score(crop, farm, weather(40))

        # 40 + 40 + 10 + 5 + 5 caps at 100
        assert result.score == 100
        assert result.sustainabilityPoints == 10
        assert "Low humidity conditions favor drought-tolerant varieties" in result.reasons
        assert "Water-efficient crop is well-suited for dry climate conditions" in result.reasons

    @pytest.mark.parametrize("water_usage,humidity", [
        ("High", 70),
        ("Low", 60),
        ("Medium", 90),
        ("Medium", 10),
    ])
    def test_partial_weather_points(self, engine, farm_input, water_usage, humidity):
        crop = Crop(id="x", name="X", suitableSoils=["Clay"], suitableClimates=["Humid"], waterUsage=water_usage)

        result = engine.score(crop, farm_input, weather(humidity))

        assert result.weatherPoints == 5
        assert "Weather conditions are moderately suitable" in result.reasons

    def test_dry_bonus_needs_dry_climate(self, engine):
        crop = Crop(id="millet", name="Millet", suitableSoils=["Sandy"], suitableClimates=["Dry"], waterUsage="Low")
        farm = FarmInput(state="Goa", district="North Goa", soilType="Sandy", climate="Tropical", farmSize=1.0)

        assert engine.score(crop, farm).sustainabilityPoints == 0

    def test_matching_ignores_case(self, engine, farm_input):
        crop = Crop(id="x", name="X", suitableSoils=["clay"], suitableClimates=["HUMID"])

        result = engine.score(crop, farm_input)

        assert (result.soilPoints, result.climatePoints) == (40, 40)

    def test_high_market_value_is_narrative_only(self, engine, farm_input):
        plain = Crop(id="x", name="X", suitableSoils=["Clay"], suitableClimates=["Humid"])
        valuable = plain.model_copy(update={"marketValue": "High"})

        assert engine.score(plain, farm_input).score == engine.score(valuable, farm_input).score
        assert "High market value provides strong economic returns" in engine.score(valuable, farm_input).reasons

    def test_deterministic(self, engine, clay_humid_crop, farm_input, humid_weather):
        first = engine.score(clay_humid_crop, farm_input, humid_weather)
        second = engine.score(clay_humid_crop, farm_input, humid_weather)

        assert first == second


class TestScoreProperties:
    """Bounds that hold for every crop and farm combination"""

    CASES = list(itertools.product(SOIL_TYPES, CLIMATE_TYPES, LEVELS, LEVELS, [None, 20, 65, 95]))

    @pytest.mark.parametrize("soil,climate,water,carbon,humidity", CASES)
    def test_score_bounds(self, engine, soil, climate, water, carbon, humidity):
        crop = Crop(id="c", name="C", suitableSoils=["Clay", "Loam"], suitableClimates=["Humid", "Dry"],
                    waterUsage=water, carbonFootprint=carbon)
        farm = FarmInput(state="S", district="D", soilType=soil, climate=climate, farmSize=1.0)
        snapshot = weather(humidity) if humidity is not None else None

        result = engine.score(crop, farm, snapshot)

        assert 0 <= result.score <= 100
        if soil in crop.suitableSoils and climate in crop.suitableClimates:
            assert result.score >= 80
        assert parse_score_breakdown(result.reasons[0])[4] == result.score


class TestBreakdownLine:

    def test_parse(self):
        assert parse_score_breakdown(
            "Score breakdown → Soil: 10, Climate: 40, Weather: 5, Sustainability: 0; Total: 55%"
        ) == (10, 40, 5, 0, 55)

    def test_format_matches_parser(self):
        line = format_score_breakdown(40, 10, 0, 5, 55)

        assert line == "Score breakdown → Soil: 40, Climate: 10, Weather: 0, Sustainability: 5; Total: 55%"
        assert parse_score_breakdown(line) == (40, 10, 0, 5, 55)

    @pytest.mark.parametrize("line", [
        "Score breakdown: Soil 40",
        "Ontology rule: Paddy thrives in Clay soil conditions",
        "Score breakdown → Soil: 40, Climate: 40, Weather: 10, Sustainability: 5; Total: 95",
    ])
    def test_rejects_other_lines(self, line):
        with pytest.raises(ValueError):
            parse_score_breakdown(line)
