# agents/weather/models.py
"""
Pydantic models for weather agent
"""
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

class WeatherRequest(BaseModel):
    state: str = Field(..., min_length=1, description="State name")
    district: str = Field(..., min_length=1, description="District name")

class WeatherSnapshot(BaseModel):
    temperature: float = Field(..., description="Temperature in °C")
    humidity: float = Field(..., description="Relative humidity in %")
    rainfall: float = Field(..., description="Rainfall in mm over the last hour(s)")
    description: str = Field(..., description="Short weather description")

class WeatherResponse(BaseModel):
    success: bool
    data: Optional[WeatherSnapshot] = None
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
