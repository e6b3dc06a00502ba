# agents/knowledge/models.py
"""
Pydantic models for the crop knowledge base
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal

SoilType = Literal["Clay", "Loam", "Sandy", "ClayLoam"]
ClimateType = Literal["Tropical", "Humid", "Dry", "Moderate"]
Level = Literal["Low", "Medium", "High"]

SOIL_TYPES = ("Clay", "Loam", "Sandy", "ClayLoam")
CLIMATE_TYPES = ("Tropical", "Humid", "Dry", "Moderate")
LEVELS = ("Low", "Medium", "High")

class Crop(BaseModel):
    """Crop facts derived from the ontology. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Lowercase crop key")
    name: str = Field(..., description="Display name")
    suitableSoils: List[str] = Field(default_factory=lambda: ["Loam"], min_length=1)
    suitableClimates: List[str] = Field(default_factory=lambda: ["Moderate"], min_length=1)
    waterUsage: Level = "Medium"
    carbonFootprint: Level = "Medium"
    marketValue: Level = "Medium"

class MarketPriceRecord(BaseModel):
    """One mandi price quotation"""
    model_config = ConfigDict(frozen=True)

    state: str
    district: str
    market: str
    commodity: str
    variety: str
    grade: str
    arrivalDate: str
    minPrice: int = Field(..., ge=0)
    maxPrice: int = Field(..., ge=0)
    modalPrice: int = Field(..., ge=0)
