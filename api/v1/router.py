# api/v1/router.py
from fastapi import APIRouter
from .endpoints import health, crops, market_prices, weather, recommendations

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(crops.router, prefix="/crops", tags=["crops"])
api_router.include_router(market_prices.router, prefix="/market-prices", tags=["market-prices"])
api_router.include_router(weather.router, prefix="/weather", tags=["weather"])
api_router.include_router(recommendations.router, prefix="/recommendations", tags=["recommendations"])
