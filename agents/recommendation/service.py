# agents/recommendation/service.py
"""
Recommendation service - ranks every known crop for a farm
"""
import asyncio
import logging
from typing import List, Optional

from agents.explanation.service import ExplanationProvider
from agents.knowledge.store import KnowledgeStore
from agents.recommendation.models import FarmInput, Recommendation
from agents.recommendation.scoring import ScoringEngine
from agents.weather.models import WeatherSnapshot

logger = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 50
DEFAULT_EXPLANATION_TIMEOUT = 8.0


class RecommendationService:
    """Score, filter, price, enrich and rank crops from the knowledge store"""

    def __init__(
        self,
        store: KnowledgeStore,
        scoring_engine: Optional[ScoringEngine] = None,
        explainer: Optional[ExplanationProvider] = None,
        min_score: int = DEFAULT_MIN_SCORE,
        explanation_timeout: float = DEFAULT_EXPLANATION_TIMEOUT
    ):
        self.store = store
        self.scoring_engine = scoring_engine or ScoringEngine()
        self.explainer = explainer
        self.min_score = min_score
        self.explanation_timeout = explanation_timeout

    def rank_crops(
        self,
        farm_input: FarmInput,
        weather: Optional[WeatherSnapshot] = None
    ) -> List[Recommendation]:
        """Admitted crops (score > min_score) with prices, best first"""
        recommendations = []

        for crop in self.store.all_crops():
            suitability = self.scoring_engine.score(crop, farm_input, weather)
            if suitability.score <= self.min_score:
                continue

            price = self.store.average_price(crop.name, farm_input.state, farm_input.district)
            recommendations.append(Recommendation(
                cropName=crop.name,
                suitabilityScore=suitability.score,
                marketPrice=price if price is not None else 0,
                waterUsage=crop.waterUsage,
                carbonFootprint=crop.carbonFootprint,
                soilMatch=suitability.soilReasoning,
                climateMatch=suitability.climateReasoning,
                reasoning=suitability.reasons,
            ))

        # sorted() is stable, ties keep store order
        return sorted(recommendations, key=lambda r: r.suitabilityScore, reverse=True)

    async def _explain(
        self,
        recommendation: Recommendation,
        location: str,
        weather: WeatherSnapshot
    ) -> Optional[str]:
        loop = asyncio.get_running_loop()
        call = loop.run_in_executor(
            None,
            self.explainer.explain,
            recommendation.cropName,
            recommendation.soilMatch,
            recommendation.climateMatch,
            recommendation.marketPrice,
            location,
            weather
        )
        try:
            text = await asyncio.wait_for(call, timeout=self.explanation_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Explanation for {recommendation.cropName} timed out after {self.explanation_timeout}s")
            return None
        except Exception as e:
            logger.warning(f"Explanation for {recommendation.cropName} failed: {e}")
            return None

        if isinstance(text, str) and text.strip():
            return text.strip()
        return None

    async def generate_recommendations(
        self,
        farm_input: FarmInput,
        weather: Optional[WeatherSnapshot] = None
    ) -> List[Recommendation]:
        """
        Ranked, explained recommendations for one farm

        The explainer is consulted only with live weather; its answers are
        appended to the reasoning and never change scores or order.
        """
        recommendations = self.rank_crops(farm_input, weather)

        if self.explainer is None or weather is None or not recommendations:
            return recommendations

        explanations = await asyncio.gather(*(
            self._explain(rec, farm_input.location, weather) for rec in recommendations
        ))

        enriched = []
        for rec, text in zip(recommendations, explanations):
            if text:
                rec = rec.model_copy(update={"reasoning": [*rec.reasoning, text]})
            enriched.append(rec)
        return enriched
