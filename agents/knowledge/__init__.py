"""
Crop knowledge base package
"""

from .models import Crop, MarketPriceRecord
from .ontology import OntologyGraph, extract_crops, load_crops
from .prices import MarketPriceIndex, load_market_prices, load_commodity_synonyms
from .store import KnowledgeStore

__all__ = [
    "Crop", "MarketPriceRecord", "OntologyGraph", "extract_crops", "load_crops",
    "MarketPriceIndex", "load_market_prices", "load_commodity_synonyms", "KnowledgeStore"
]
