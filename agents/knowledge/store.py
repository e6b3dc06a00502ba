# agents/knowledge/store.py
"""
Knowledge store - crop facts and market prices held for the process lifetime
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from agents.knowledge.models import Crop, MarketPriceRecord
from agents.knowledge.ontology import load_crops
from agents.knowledge.prices import MarketPriceIndex, load_commodity_synonyms, load_market_prices
from core.exceptions import OntologyError

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """
    Read-only handle over the derived crop set and the price index

    Built once at startup and passed explicitly to whatever needs it.
    """

    def __init__(self, crops: Sequence[Crop], price_index: MarketPriceIndex):
        if not crops:
            raise OntologyError("No crops derived: refusing to build an empty knowledge store")

        self._crops: Dict[str, Crop] = {}
        for crop in crops:
            key = crop.name.lower()
            if key in self._crops:
                logger.warning(f"Duplicate crop '{crop.name}' in ontology, keeping the later definition")
            self._crops[key] = crop
        self._prices = price_index

    @classmethod
    def initialize(
        cls,
        ontology_source: Union[str, Path],
        prices_source: Union[str, Path],
        synonyms_path: Optional[Union[str, Path]] = None
    ) -> "KnowledgeStore":
        """Load prices, then the ontology. Any data error propagates."""
        records = load_market_prices(prices_source)
        price_index = MarketPriceIndex(records, load_commodity_synonyms(synonyms_path))
        crops = load_crops(ontology_source)

        store = cls(crops, price_index)
        logger.info(
            f"Knowledge store ready: {len(store._crops)} crops, {len(price_index)} price records"
        )
        return store

    def all_crops(self) -> List[Crop]:
        return list(self._crops.values())

    def crop_by_name(self, name: str) -> Optional[Crop]:
        return self._crops.get(name.lower())

    def price_query(
        self,
        state: Optional[str] = None,
        district: Optional[str] = None,
        commodity: Optional[str] = None
    ) -> List[MarketPriceRecord]:
        return self._prices.query(state=state, district=district, commodity=commodity)

    def average_price(
        self,
        crop_name: str,
        state: Optional[str] = None,
        district: Optional[str] = None
    ) -> Optional[int]:
        return self._prices.average_price_for_crop(crop_name, state=state, district=district)

    def summary(self) -> Dict[str, Any]:
        return {
            "crops": len(self._crops),
            "price_records": len(self._prices)
        }
