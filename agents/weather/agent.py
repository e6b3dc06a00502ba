# agents/weather/agent.py
"""
Weather lookup agent
"""

import asyncio
from datetime import datetime

from agents.base import BaseAgent
from agents.weather.models import WeatherRequest, WeatherResponse
from agents.weather.service import WeatherService
from core.exceptions import AgentError, ExternalAPIError

class WeatherAgent(BaseAgent[WeatherRequest, WeatherResponse]):
    """
    Current weather agent backed by OpenWeatherMap

    Features:
    - District/state geocoding with broader fallbacks
    - Metric temperature, humidity and rainfall
    """

    def __init__(self, service: WeatherService = None):
        super().__init__("weather")
        self.service = service or WeatherService(
            api_key=self.settings.openweather_api_key,
            config=self.config
        )
        self.logger.info("Weather agent initialized")

    def _validate_config(self) -> None:
        """Validate weather agent configuration"""
        if not self.settings.openweather_api_key:
            self.logger.warning("OPENWEATHER_API_KEY not set - weather lookups will fail")

    async def process_request(self, request: WeatherRequest) -> WeatherResponse:
        """Fetch current weather for the requested location"""
        snapshot = await asyncio.get_running_loop().run_in_executor(
            None,
            self.service.get_weather,
            request.state,
            request.district
        )

        return WeatherResponse(
            success=True,
            data=snapshot,
            message=f"Current weather for {request.district}, {request.state}",
            timestamp=datetime.now().isoformat(),
            metadata={"source": "openweathermap"}
        )

    def get_fallback_response(self, request: WeatherRequest, error: Exception) -> WeatherResponse:
        """No made-up weather: lookup failures surface to the caller"""
        if isinstance(error, ExternalAPIError):
            raise error
        raise AgentError(f"Weather lookup failed: {error}") from error
