# api/v1/endpoints/market_prices.py
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from agents.knowledge.models import MarketPriceRecord
from agents.knowledge.store import KnowledgeStore
from api.deps import get_knowledge_store

router = APIRouter()

@router.get("", response_model=List[MarketPriceRecord])
async def get_market_prices(
    state: Optional[str] = Query(None, description="State name (exact, case-insensitive)"),
    district: Optional[str] = Query(None, description="District name (exact, case-insensitive)"),
    commodity: Optional[str] = Query(None, description="Commodity name (substring, case-insensitive)"),
    store: KnowledgeStore = Depends(get_knowledge_store)
):
    """
    Get mandi price records, optionally filtered

    Filters that are not provided are ignored.
    """
    return store.price_query(
        state=state.strip() if state else None,
        district=district.strip() if district else None,
        commodity=commodity.strip() if commodity else None
    )
