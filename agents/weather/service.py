# agents/weather/service.py
"""
Weather service - OpenWeatherMap geocoding plus current conditions
"""
import logging
from typing import Any, Dict, Optional, Tuple

import requests

from agents.knowledge.prices import round_half_up
from agents.weather.models import WeatherSnapshot
from core.exceptions import ExternalAPIError

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://api.openweathermap.org/geo/1.0/direct"
WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


class WeatherService:
    """Resolve a state/district to coordinates and fetch current weather"""

    def __init__(self, api_key: Optional[str], config: Dict[str, Any]):
        self.api_key = api_key
        self.config = config
        self.country_code = config.get("country_code", "IN")
        self.timeout = config.get("request_timeout_seconds", 10)

    def _geocode(self, query: str) -> Optional[Tuple[float, float]]:
        params = {"q": query, "limit": 1, "appid": self.api_key}
        try:
            resp = requests.get(GEOCODE_URL, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Geocoding request failed for '{query}': {e}")
            return None

        if not resp.ok:
            return None

        try:
            results = resp.json()
        except ValueError:
            return None
        if not isinstance(results, list) or not results:
            return None

        lat, lon = results[0].get("lat"), results[0].get("lon")
        if lat is None or lon is None:
            return None
        return float(lat), float(lon)

    def resolve_coordinates(self, state: str, district: str) -> Tuple[float, float]:
        """Try district+state, then district, then state"""
        queries = [
            f"{district}, {state}, {self.country_code}",
            f"{district}, {self.country_code}",
            f"{state}, {self.country_code}",
        ]
        for query in queries:
            coords = self._geocode(query)
            if coords:
                logger.debug(f"Geocoded '{query}' to {coords}")
                return coords

        raise ExternalAPIError(f"Could not geocode location: {district}, {state}")

    def get_weather(self, state: str, district: str) -> WeatherSnapshot:
        """Current weather for a location; raises ExternalAPIError on any failure"""
        if not self.api_key:
            raise ExternalAPIError("OPENWEATHER_API_KEY not set")

        lat, lon = self.resolve_coordinates(state, district)
        params = {"lat": lat, "lon": lon, "appid": self.api_key, "units": "metric"}

        try:
            resp = requests.get(WEATHER_URL, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise ExternalAPIError(f"Weather request failed: {e}") from e

        if not resp.ok:
            raise ExternalAPIError(f"Weather API error {resp.status_code}: {resp.text}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise ExternalAPIError(f"Weather API returned invalid JSON: {e}") from e
        main = payload.get("main") or {}
        rain = payload.get("rain") or {}
        conditions = payload.get("weather") or [{}]

        snapshot = WeatherSnapshot(
            temperature=round_half_up(main.get("temp") or 0),
            humidity=round_half_up(main.get("humidity") or 0),
            rainfall=round_half_up(rain.get("1h") or rain.get("3h") or 0),
            description=str(conditions[0].get("description") or "current weather"),
        )
        logger.info(f"Weather for {district}, {state}: {snapshot.temperature}°C, {snapshot.humidity}% humidity")
        return snapshot
