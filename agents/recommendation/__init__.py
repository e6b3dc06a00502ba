"""
Crop recommendation agent package
"""

from .agent import RecommendationAgent
from .models import FarmInput, Recommendation, RecommendationResponse
from .scoring import ScoringEngine, parse_score_breakdown
from .service import RecommendationService

__all__ = [
    "RecommendationAgent", "FarmInput", "Recommendation", "RecommendationResponse",
    "ScoringEngine", "parse_score_breakdown", "RecommendationService"
]
