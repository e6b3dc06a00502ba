# agents/knowledge/prices.py
"""
Market price index built from the mandi price table (data.gov.in export)
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union, IO

import numpy as np
import pandas as pd

from agents.knowledge.models import MarketPriceRecord
from core.exceptions import PriceDataError

logger = logging.getLogger(__name__)

PRICE_COLUMNS = [
    "state", "district", "market", "commodity", "variety", "grade",
    "arrivalDate", "minPrice", "maxPrice", "modalPrice"
]
TEXT_COLUMNS = PRICE_COLUMNS[:7]
NUMERIC_COLUMNS = PRICE_COLUMNS[7:]

SYNONYMS_FILE = Path(__file__).with_name("commodity_synonyms.json")
FALLBACK_SUFFIXES = (" seed", " grain")


def load_commodity_synonyms(path: Optional[Union[str, Path]] = None) -> Dict[str, List[str]]:
    """Load the crop -> commodity alias table (bundled table when path is None)"""
    path = Path(path) if path else SYNONYMS_FILE
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise PriceDataError(f"Cannot read commodity synonyms file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PriceDataError(f"Commodity synonyms file {path} is not valid JSON: {e}") from e

    if not isinstance(raw, dict) or not all(
        isinstance(aliases, list) and all(isinstance(a, str) for a in aliases)
        for aliases in raw.values()
    ):
        raise PriceDataError(f"Commodity synonyms file {path} must map names to lists of strings")

    return {name.strip().lower(): aliases for name, aliases in raw.items()}


def load_market_prices(source: Union[str, Path, IO[str]]) -> List[MarketPriceRecord]:
    """Parse the delimited price table.

    The header row is skipped and columns are read by position. Rows with
    fewer than ten fields are dropped, unparseable prices count as 0.
    """
    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines="skip",
        )
    except OSError as e:
        raise PriceDataError(f"Cannot read market price table {source}: {e}") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise PriceDataError(f"Malformed market price table {source}: {e}") from e

    if df.shape[1] < len(PRICE_COLUMNS):
        raise PriceDataError(
            f"Market price table needs {len(PRICE_COLUMNS)} columns, found {df.shape[1]}"
        )

    df = df.iloc[:, :len(PRICE_COLUMNS)].copy()
    df.columns = PRICE_COLUMNS
    df = df.dropna(subset=["modalPrice"])

    for column in TEXT_COLUMNS:
        df[column] = df[column].fillna("").astype(str).str.replace('"', "", regex=False).str.strip()

    for column in NUMERIC_COLUMNS:
        values = pd.to_numeric(df[column].fillna("").str.strip(), errors="coerce")
        df[column] = np.trunc(values.fillna(0).clip(lower=0)).astype(int)

    records = [
        MarketPriceRecord(
            state=row.state,
            district=row.district,
            market=row.market,
            commodity=row.commodity,
            variety=row.variety,
            grade=row.grade,
            arrivalDate=row.arrivalDate,
            minPrice=int(row.minPrice),
            maxPrice=int(row.maxPrice),
            modalPrice=int(row.modalPrice),
        )
        for row in df.itertuples(index=False)
    ]
    logger.info(f"Loaded {len(records)} market price records")
    return records


def round_half_up(value: float) -> int:
    """Halves round towards +infinity: 22.5 -> 23, -2.5 -> -2"""
    return int(np.floor(value + 0.5))


class MarketPriceIndex:
    """Read-only price lookups by location and commodity name"""

    def __init__(
        self,
        records: Sequence[MarketPriceRecord],
        synonyms: Optional[Mapping[str, Sequence[str]]] = None
    ):
        self._records = tuple(records)
        if synonyms is None:
            synonyms = load_commodity_synonyms()
        self._synonyms = {name.strip().lower(): list(aliases) for name, aliases in synonyms.items()}

        # Lowercased lookup columns, row i mirrors self._records[i]
        self._frame = pd.DataFrame({
            "state": pd.Series([r.state.lower() for r in self._records], dtype=object),
            "district": pd.Series([r.district.lower() for r in self._records], dtype=object),
            "commodity": pd.Series([r.commodity.lower() for r in self._records], dtype=object),
            "modal": pd.Series([r.modalPrice for r in self._records], dtype="int64"),
        })

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple:
        return self._records

    def _mask(
        self,
        state: Optional[str] = None,
        district: Optional[str] = None,
        commodity: Optional[str] = None
    ) -> pd.Series:
        mask = pd.Series(True, index=self._frame.index)
        if state:
            mask &= self._frame["state"] == state.lower()
        if district:
            mask &= self._frame["district"] == district.lower()
        if commodity:
            mask &= self._frame["commodity"].str.contains(commodity.lower(), regex=False)
        return mask

    def query(
        self,
        state: Optional[str] = None,
        district: Optional[str] = None,
        commodity: Optional[str] = None
    ) -> List[MarketPriceRecord]:
        """Records matching every given filter, in load order.

        State and district match exactly, commodity by substring; all
        comparisons ignore case.
        """
        if not self._records:
            return []
        positions = np.flatnonzero(self._mask(state, district, commodity).to_numpy())
        return [self._records[i] for i in positions]

    def commodity_variants(self, crop_name: str) -> List[str]:
        """Commodity names worth trying for a crop, most literal first"""
        name = crop_name.strip().lower()
        candidates = [crop_name.strip()]

        aliases = self._synonyms.get(name)
        if aliases:
            candidates.extend(aliases)
        elif name and " " not in name:
            candidates.extend(f"{name}{suffix}" for suffix in FALLBACK_SUFFIXES)

        variants: List[str] = []
        seen = set()
        for candidate in candidates:
            key = candidate.lower()
            if candidate and key not in seen:
                seen.add(key)
                variants.append(candidate)
        return variants

    def _mean_modal(self, **filters) -> Optional[int]:
        matches = self._frame.loc[self._mask(**filters), "modal"]
        if matches.empty:
            return None
        return round_half_up(float(matches.mean()))

    def average_price_for_crop(
        self,
        crop_name: str,
        state: Optional[str] = None,
        district: Optional[str] = None
    ) -> Optional[int]:
        """Rounded mean modal price for a crop, or None when nothing matches.

        Each commodity variant is tried at the requested location first and
        only then nationally; the first variant with any match decides the
        price, matches are never merged across variants.
        """
        if not self._records:
            return None

        variants = self.commodity_variants(crop_name)
        for variant in variants:
            price = self._mean_modal(state=state, district=district, commodity=variant)
            if price is not None:
                return price

        for variant in variants:
            price = self._mean_modal(commodity=variant)
            if price is not None:
                logger.debug(f"No local price for {crop_name}, using national average for '{variant}'")
                return price

        return None
