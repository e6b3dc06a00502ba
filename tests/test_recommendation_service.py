"""
Unit tests for ranking, pricing and explanation enrichment
"""

import asyncio
import time
from unittest.mock import MagicMock

import pytest

from agents.explanation.service import ExplanationProvider
from agents.knowledge.models import Crop
from agents.knowledge.prices import MarketPriceIndex
from agents.knowledge.store import KnowledgeStore
from agents.recommendation.models import SuitabilityResult
from agents.recommendation.service import RecommendationService
from tests.conftest import make_record


class FixedScores:
    """Scoring engine stand-in returning a preset score per crop name"""

    def __init__(self, scores):
        self.scores = scores

    def score(self, crop, farm_input, weather=None):
        total = self.scores[crop.name]
        return SuitabilityResult(
            score=total,
            soilPoints=0,
            climatePoints=0,
            weatherPoints=0,
            sustainabilityPoints=0,
            soilReasoning=f"{crop.name} soil",
            climateReasoning=f"{crop.name} climate",
            reasons=[f"breakdown {total}"],
        )


class StaticExplainer(ExplanationProvider):
    def __init__(self, text=None, error=None, delay=0):
        self.text = text
        self.error = error
        self.delay = delay
        self.calls = []

    def explain(self, crop_name, soil_match, climate_match, market_price, location, weather):
        self.calls.append((crop_name, soil_match, climate_match, market_price, location, weather))
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return self.text


def build_store(names, records=()):
    crops = [Crop(id=n.lower(), name=n) for n in names]
    return KnowledgeStore(crops, MarketPriceIndex(list(records), synonyms={}))


class TestRankCrops:
    """Admission, pricing and ordering"""

    def test_admission_boundary_is_strict(self, farm_input):
        service = RecommendationService(
            build_store(["Fifty", "FiftyOne"]),
            scoring_engine=FixedScores({"Fifty": 50, "FiftyOne": 51}),
        )

        assert [r.cropName for r in service.rank_crops(farm_input)] == ["FiftyOne"]

    def test_sorted_descending_and_ties_keep_store_order(self, farm_input):
        names = ["A", "B", "C", "D", "E"]
        service = RecommendationService(
            build_store(names),
            scoring_engine=FixedScores({"A": 60, "B": 90, "C": 60, "D": 90, "E": 75}),
        )

        ranked = service.rank_crops(farm_input)

        assert [r.cropName for r in ranked] == ["B", "D", "E", "A", "C"]

    def test_missing_price_becomes_zero(self, farm_input):
        service = RecommendationService(
            build_store(["Saffron", "Rice"], [make_record("Rice", 2000)]),
            scoring_engine=FixedScores({"Saffron": 80, "Rice": 70}),
        )

        ranked = service.rank_crops(farm_input)

        assert [(r.cropName, r.marketPrice) for r in ranked] == [("Saffron", 0), ("Rice", 2000)]

    def test_recommendation_carries_crop_and_scoring_fields(self, farm_input):
        store = KnowledgeStore(
            [Crop(id="tea", name="Tea", waterUsage="High", carbonFootprint="Low")],
            MarketPriceIndex([], synonyms={}),
        )
        service = RecommendationService(store, scoring_engine=FixedScores({"Tea": 77}))

        rec = service.rank_crops(farm_input)[0]

        assert rec.suitabilityScore == 77
        assert rec.waterUsage == "High"
        assert rec.carbonFootprint == "Low"
        assert rec.soilMatch == "Tea soil"
        assert rec.climateMatch == "Tea climate"
        assert rec.reasoning == ["breakdown 77"]

    def test_custom_threshold(self, farm_input):
        service = RecommendationService(
            build_store(["A", "B"]),
            scoring_engine=FixedScores({"A": 30, "B": 20}),
            min_score=25,
        )

        assert [r.cropName for r in service.rank_crops(farm_input)] == ["A"]


class TestBundledData:
    """End-to-end ranking over the sample ontology and price table"""

    def test_clay_humid_farm_in_ernakulam(self, store, farm_input, humid_weather):
        service = RecommendationService(store)

        ranked = asyncio.run(service.generate_recommendations(farm_input, humid_weather))

        assert [(r.cropName, r.suitabilityScore, r.marketPrice) for r in ranked] == [
            ("Paddy", 90, 2000),
            ("Sugarcane", 90, 320),
            ("Cotton", 60, 6900),
            ("Coconut", 55, 3000),
        ]

    def test_without_weather(self, store, farm_input):
        service = RecommendationService(store)

        ranked = asyncio.run(service.generate_recommendations(farm_input))

        # Cotton and Coconut sit at exactly 50 without the weather component
        assert [(r.cropName, r.suitabilityScore) for r in ranked] == [
            ("Paddy", 80),
            ("Sugarcane", 80),
        ]


class TestExplanations:
    """Optional enrichment never changes scores or order"""

    @pytest.fixture
    def service_factory(self):
        def factory(explainer, timeout=8.0):
            return RecommendationService(
                build_store(["A", "B"], [make_record("A", 1500)]),
                scoring_engine=FixedScores({"A": 70, "B": 90}),
                explainer=explainer,
                explanation_timeout=timeout,
            )
        return factory

    def test_text_is_appended_as_last_reasoning_line(self, service_factory, farm_input, humid_weather):
        explainer = StaticExplainer(text="  Grows well here.  ")

        ranked = asyncio.run(service_factory(explainer).generate_recommendations(farm_input, humid_weather))

        assert [r.cropName for r in ranked] == ["B", "A"]
        assert ranked[0].reasoning == ["breakdown 90", "Grows well here."]
        assert ranked[1].suitabilityScore == 70

    def test_explainer_receives_crop_context(self, service_factory, farm_input, humid_weather):
        explainer = StaticExplainer(text="ok")

        asyncio.run(service_factory(explainer).generate_recommendations(farm_input, humid_weather))

        assert ("A", "A soil", "A climate", 1500, "Ernakulam, Kerala", humid_weather) in explainer.calls

    def test_not_called_without_weather(self, service_factory, farm_input):
        explainer = StaticExplainer(text="ok")

        ranked = asyncio.run(service_factory(explainer).generate_recommendations(farm_input))

        assert explainer.calls == []
        assert ranked[0].reasoning == ["breakdown 90"]

    @pytest.mark.parametrize("explainer", [
        StaticExplainer(text=None),
        StaticExplainer(text="   "),
        StaticExplainer(error=RuntimeError("quota exceeded")),
    ])
    def test_failures_leave_reasoning_untouched(self, service_factory, farm_input, humid_weather, explainer):
        ranked = asyncio.run(service_factory(explainer).generate_recommendations(farm_input, humid_weather))

        assert [r.reasoning for r in ranked] == [["breakdown 90"], ["breakdown 70"]]

    def test_timeout_is_absorbed(self, service_factory, farm_input, humid_weather):
        explainer = StaticExplainer(text="too late", delay=0.3)

        ranked = asyncio.run(
            service_factory(explainer, timeout=0.05).generate_recommendations(farm_input, humid_weather)
        )

        assert [r.reasoning for r in ranked] == [["breakdown 90"], ["breakdown 70"]]

    def test_mock_provider(self, service_factory, farm_input, humid_weather):
        explainer = MagicMock(spec=ExplanationProvider)
        explainer.explain.return_value = "Mocked"

        ranked = asyncio.run(service_factory(explainer).generate_recommendations(farm_input, humid_weather))

        assert explainer.explain.call_count == 2
        assert all(r.reasoning[-1] == "Mocked" for r in ranked)
