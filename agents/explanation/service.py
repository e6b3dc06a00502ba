# agents/explanation/service.py
"""
Natural-language explanation of crop recommendations using Google Generative AI
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import logging

from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.messages import SystemMessage, HumanMessage

from agents.weather.models import WeatherSnapshot

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a precise, neutral agronomy assistant."


class ExplanationProvider(ABC):
    """Optional capability: one extra reasoning line per recommendation"""

    @abstractmethod
    def explain(
        self,
        crop_name: str,
        soil_match: str,
        climate_match: str,
        market_price: int,
        location: str,
        weather: WeatherSnapshot
    ) -> Optional[str]:
        """Return explanation text, or None when nothing is available"""
        pass


class ExplanationService(ExplanationProvider):
    """Explanation enricher backed by Gemini; disabled without an API key"""

    def __init__(self, api_key: Optional[str], config: Dict[str, Any]):
        self.config = config

        if not api_key:
            logger.info("No GOOGLE_API_KEY found - explanation enrichment disabled")
            self.llm = None
        else:
            self.llm = ChatGoogleGenerativeAI(
                model=config.get("model", "gemini-1.5-flash"),
                temperature=config.get("temperature", 0.2),
                max_output_tokens=config.get("max_output_tokens", 180),
                google_api_key=api_key
            )
            logger.info("Explanation service initialized with Google Generative AI")

    @property
    def available(self) -> bool:
        return self.llm is not None

    def _build_prompt(
        self,
        crop_name: str,
        soil_match: str,
        climate_match: str,
        market_price: int,
        location: str,
        weather: WeatherSnapshot
    ) -> str:
        return (
            f'Explain concisely (in 2-4 sentences) why the crop "{crop_name}" is recommended for {location} given:\n'
            f"- Soil: {soil_match}\n"
            f"- Climate: {climate_match}\n"
            f"- Weather: {weather.temperature}°C, {weather.humidity}% humidity, "
            f"rainfall {weather.rainfall}mm, {weather.description}\n"
            f"- Typical local market price (modal): ₹{market_price}\n"
            "Focus on agronomic suitability and market context."
        )

    def explain(
        self,
        crop_name: str,
        soil_match: str,
        climate_match: str,
        market_price: int,
        location: str,
        weather: WeatherSnapshot
    ) -> Optional[str]:
        if not self.llm:
            return None

        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=self._build_prompt(
                crop_name, soil_match, climate_match, market_price, location, weather
            ))
        ]

        try:
            response = self.llm.invoke(messages)
        except Exception as e:
            logger.warning(f"Explanation request for {crop_name} failed: {e}")
            return None

        text = response.content if isinstance(response.content, str) else None
        if not text or not text.strip():
            logger.warning(f"Empty explanation returned for {crop_name}")
            return None
        return text.strip()
