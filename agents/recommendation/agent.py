# agents/recommendation/agent.py
"""
Crop recommendation agent - ontology rules, live weather and mandi prices
"""

import asyncio
from typing import Optional
from datetime import datetime

from agents.base import BaseAgent
from agents.explanation.service import ExplanationProvider
from agents.knowledge.store import KnowledgeStore
from agents.recommendation.models import FarmInput, RecommendationResponse
from agents.recommendation.service import RecommendationService
from agents.weather.models import WeatherSnapshot
from agents.weather.service import WeatherService
from core.exceptions import AgentConfigError, ExternalAPIError

class RecommendationAgent(BaseAgent[FarmInput, RecommendationResponse]):
    """
    Crop recommendation agent

    Features:
    - Soil and climate matching against ontology-derived crop facts
    - Weather-aware bonus from current humidity
    - Sustainability scoring (carbon footprint, water use)
    - Local or national average mandi prices
    - Optional AI explanation per crop
    """

    def __init__(
        self,
        store: KnowledgeStore,
        weather_service: Optional[WeatherService] = None,
        explainer: Optional[ExplanationProvider] = None
    ):
        super().__init__("recommendation")
        self.store = store
        self.weather_service = weather_service or WeatherService(
            api_key=self.settings.openweather_api_key,
            config=self.settings.get_agent_config("weather")
        )

        self.service = RecommendationService(
            store=store,
            explainer=explainer,
            min_score=self.config.get("min_score", 50),
            explanation_timeout=self.config.get("explanation_timeout_seconds", 8.0)
        )
        self.logger.info(
            f"Recommendation agent initialized ({len(store.all_crops())} crops, "
            f"explanations {'enabled' if explainer else 'disabled'})"
        )

    def _validate_config(self) -> None:
        """Validate recommendation agent configuration"""
        min_score = self.config.get("min_score", 50)
        if not isinstance(min_score, int) or not 0 <= min_score < 100:
            raise AgentConfigError(f"min_score must be an integer in [0, 100), got {min_score!r}")

        timeout = self.config.get("explanation_timeout_seconds", 8.0)
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            raise AgentConfigError(f"explanation_timeout_seconds must be positive, got {timeout!r}")

    async def _fetch_weather(self, farm_input: FarmInput) -> Optional[WeatherSnapshot]:
        """Current weather, or None so scoring skips the weather component"""
        try:
            return await asyncio.get_running_loop().run_in_executor(
                None,
                self.weather_service.get_weather,
                farm_input.state,
                farm_input.district
            )
        except ExternalAPIError as e:
            self.logger.warning(f"Weather unavailable for {farm_input.location}, scoring without it: {e}")
            return None

    async def process_request(self, request: FarmInput) -> RecommendationResponse:
        """Score every crop for the farm and return the admitted ones, best first"""

        self.logger.info(
            f"Processing recommendation request: {request.location} "
            f"({request.soilType} soil, {request.climate} climate)"
        )

        weather = await self._fetch_weather(request)
        recommendations = await self.service.generate_recommendations(request, weather)

        if recommendations:
            message = f"{len(recommendations)} crop(s) recommended for {request.location}"
        else:
            message = f"No crop scored above {self.service.min_score} for {request.location}"

        return RecommendationResponse(
            success=True,
            recommendations=recommendations,
            weatherData=weather,
            location=request.location,
            message=message,
            timestamp=datetime.now().isoformat(),
            metadata={
                "request_params": request.model_dump(),
                "crops_evaluated": len(self.store.all_crops()),
                "weather_available": weather is not None,
                "min_score": self.service.min_score
            }
        )

    def get_fallback_response(self, request: FarmInput, error: Exception) -> RecommendationResponse:
        """Get fallback response when agent fails"""
        return RecommendationResponse(
            success=False,
            recommendations=[],
            weatherData=None,
            location=request.location,
            message=f"Could not generate recommendations: {str(error)}",
            timestamp=datetime.now().isoformat(),
            metadata={"fallback": True, "error": str(error)}
        )
