# agents/recommendation/scoring.py
"""
Rule-based crop suitability scoring

Additive points, capped at 100:
- soil match 40 (mismatch 10)
- climate match 40 (mismatch 10)
- weather fit 10 / 5, only when a weather snapshot is available
- sustainability: low carbon +5, low water use in a dry climate +5
"""
import re
from typing import Optional, Tuple

from agents.knowledge.models import Crop
from agents.recommendation.models import FarmInput, SuitabilityResult
from agents.weather.models import WeatherSnapshot

MAX_SCORE = 100
MATCH_POINTS = 40
MISMATCH_POINTS = 10
WEATHER_FIT_POINTS = 10
WEATHER_PARTIAL_POINTS = 5
SUSTAINABILITY_POINTS = 5

HIGH_HUMIDITY = 70
LOW_HUMIDITY = 60

BREAKDOWN_PATTERN = re.compile(
    r"^Score breakdown → Soil: (\d+), Climate: (\d+), Weather: (\d+), "
    r"Sustainability: (\d+); Total: (\d+)%$"
)


def format_score_breakdown(soil: int, climate: int, weather: int, sustainability: int, total: int) -> str:
    return (
        f"Score breakdown → Soil: {soil}, Climate: {climate}, Weather: {weather}, "
        f"Sustainability: {sustainability}; Total: {total}%"
    )


def parse_score_breakdown(line: str) -> Tuple[int, int, int, int, int]:
    """(soil, climate, weather, sustainability, total) from a breakdown line"""
    match = BREAKDOWN_PATTERN.match(line.strip())
    if not match:
        raise ValueError(f"Not a score breakdown line: {line!r}")
    soil, climate, weather, sustainability, total = (int(g) for g in match.groups())
    return soil, climate, weather, sustainability, total


def _matches(value: str, options) -> bool:
    wanted = value.lower()
    return any(option.lower() == wanted for option in options)


class ScoringEngine:
    """Deterministic suitability scoring of one crop against farm conditions"""

    def score(
        self,
        crop: Crop,
        farm_input: FarmInput,
        weather: Optional[WeatherSnapshot] = None
    ) -> SuitabilityResult:
        reasons = []

        # Soil
        if _matches(farm_input.soilType, crop.suitableSoils):
            soil_points = MATCH_POINTS
            soil_reasoning = f"{farm_input.soilType} soil is optimal for {crop.name} cultivation based on ontology rules"
            reasons.append(f"Ontology rule: {crop.name} thrives in {farm_input.soilType} soil conditions")
        else:
            soil_points = MISMATCH_POINTS
            soil_reasoning = (
                f"{farm_input.soilType} soil is not the ideal match for {crop.name}, "
                f"which prefers {' or '.join(crop.suitableSoils)} soil"
            )

        # Climate
        if _matches(farm_input.climate, crop.suitableClimates):
            climate_points = MATCH_POINTS
            climate_reasoning = f"{farm_input.climate} climate conditions are ideal for {crop.name} growth"
            reasons.append(f"Climate requirements perfectly align with {farm_input.climate} conditions")
        else:
            climate_points = MISMATCH_POINTS
            climate_reasoning = (
                f"{farm_input.climate} climate may pose challenges for {crop.name}, "
                f"which prefers {' or '.join(crop.suitableClimates)} conditions"
            )

        # Weather, only with live data
        weather_points = 0
        if weather is not None:
            if crop.waterUsage == "High" and weather.humidity > HIGH_HUMIDITY:
                weather_points = WEATHER_FIT_POINTS
                reasons.append(f"Current high humidity ({weather.humidity:g}%) supports water-intensive crops")
            elif crop.waterUsage == "Low" and weather.humidity < LOW_HUMIDITY:
                weather_points = WEATHER_FIT_POINTS
                reasons.append("Low humidity conditions favor drought-tolerant varieties")
            else:
                weather_points = WEATHER_PARTIAL_POINTS
                reasons.append("Weather conditions are moderately suitable")

        # Sustainability
        sustainability_points = 0
        if crop.carbonFootprint == "Low":
            sustainability_points += SUSTAINABILITY_POINTS
            reasons.append("Low carbon footprint supports sustainable farming practices")
        if crop.waterUsage == "Low" and farm_input.climate == "Dry":
            sustainability_points += SUSTAINABILITY_POINTS
            reasons.append("Water-efficient crop is well-suited for dry climate conditions")

        # Market value is narrative only
        if crop.marketValue == "High":
            reasons.append("High market value provides strong economic returns")

        total = min(MAX_SCORE, soil_points + climate_points + weather_points + sustainability_points)
        reasons.insert(0, format_score_breakdown(
            soil_points, climate_points, weather_points, sustainability_points, total
        ))

        return SuitabilityResult(
            score=total,
            soilPoints=soil_points,
            climatePoints=climate_points,
            weatherPoints=weather_points,
            sustainabilityPoints=sustainability_points,
            soilReasoning=soil_reasoning,
            climateReasoning=climate_reasoning,
            reasons=reasons,
        )
