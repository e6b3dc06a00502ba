# agents/recommendation/models.py
"""
Pydantic models for recommendation agent
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any

from agents.knowledge.models import SoilType, ClimateType, Level
from agents.weather.models import WeatherSnapshot

class FarmInput(BaseModel):
    state: str = Field(..., min_length=1, description="State name")
    district: str = Field(..., min_length=1, description="District name")
    soilType: SoilType = Field(..., description="Soil type (Clay, Loam, Sandy, ClayLoam)")
    climate: ClimateType = Field(..., description="Climate (Tropical, Humid, Dry, Moderate)")
    farmSize: float = Field(..., gt=0, strict=True, description="Farm size in acres (numbers only)")

    @property
    def location(self) -> str:
        return f"{self.district}, {self.state}"

class SuitabilityResult(BaseModel):
    score: int = Field(..., ge=0, le=100)
    soilPoints: int
    climatePoints: int
    weatherPoints: int
    sustainabilityPoints: int
    soilReasoning: str
    climateReasoning: str
    reasons: List[str]

class Recommendation(BaseModel):
    cropName: str
    suitabilityScore: int = Field(..., ge=0, le=100)
    marketPrice: int = Field(0, ge=0)
    waterUsage: Level
    carbonFootprint: Level
    soilMatch: str
    climateMatch: str
    reasoning: List[str]

class RecommendationResponse(BaseModel):
    success: bool
    recommendations: List[Recommendation]
    weatherData: Optional[WeatherSnapshot] = None
    location: str
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
