# api/v1/endpoints/weather.py
from fastapi import APIRouter, HTTPException, Query
from typing import Optional

from agents.base import agent_registry
from agents.weather.models import WeatherRequest
from core.exceptions import ExternalAPIError

router = APIRouter()

@router.get("")
async def get_weather(
    state: Optional[str] = Query(None, description="State name"),
    district: Optional[str] = Query(None, description="District name")
):
    """Get current weather for a district"""
    if not state or not state.strip() or not district or not district.strip():
        raise HTTPException(status_code=400, detail="State and district are required")

    weather_agent = agent_registry.get("weather")
    if not weather_agent:
        raise HTTPException(status_code=500, detail="Weather agent not available")

    try:
        response = await weather_agent.execute(
            WeatherRequest(state=state.strip(), district=district.strip())
        )
        return response.data

    except Exception as e:
        if isinstance(e.__cause__, ExternalAPIError):
            raise HTTPException(status_code=502, detail=str(e.__cause__))
        raise HTTPException(status_code=500, detail=f"Error processing weather request: {str(e)}")
