"""
Weather agent package
"""

from .agent import WeatherAgent
from .models import WeatherRequest, WeatherResponse, WeatherSnapshot

__all__ = ["WeatherAgent", "WeatherRequest", "WeatherResponse", "WeatherSnapshot"]
