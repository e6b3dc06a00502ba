# api/v1/endpoints/health.py
from fastapi import APIRouter, Request
from datetime import datetime

from agents.base import agent_registry

router = APIRouter()

@router.get("/")
async def health_check(request: Request):
    """Basic health check endpoint"""
    store = getattr(request.app.state, "knowledge_store", None)
    return {
        "status": "healthy" if store is not None else "degraded",
        "timestamp": datetime.now().isoformat(),
        "service": "CropWise AI Backend",
        "knowledge": store.summary() if store is not None else None,
        "agents": agent_registry.list_agents()
    }
