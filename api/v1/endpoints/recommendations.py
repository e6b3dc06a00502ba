from fastapi import APIRouter, HTTPException

from agents.base import agent_registry
from agents.recommendation.models import FarmInput, RecommendationResponse

router = APIRouter()

@router.post("", response_model=RecommendationResponse)
async def generate_recommendations(farm_input: FarmInput):
    """
    Generate crop recommendations for a farm

    Crops are scored on soil, climate, current weather and sustainability;
    only crops scoring above 50 are returned, best first.
    """
    recommendation_agent = agent_registry.get("recommendation")
    if not recommendation_agent:
        raise HTTPException(status_code=500, detail="Recommendation agent not available")

    try:
        return await recommendation_agent.execute(farm_input)

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error generating recommendations: {str(e)}")

@router.get("/health")
async def recommendation_health():
    """Check recommendation agent health"""
    try:
        recommendation_agent = agent_registry.get("recommendation")
        if not recommendation_agent:
            return {"status": "unhealthy", "error": "Recommendation agent not available"}

        health = await recommendation_agent.health_check()
        return health

    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}
