"""
Shared fixtures
"""
from pathlib import Path

import pytest

from agents.base import agent_registry
from agents.knowledge.models import Crop, MarketPriceRecord
from agents.knowledge.store import KnowledgeStore
from agents.recommendation.models import FarmInput
from agents.weather.models import WeatherSnapshot

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
ONTOLOGY_FILE = DATA_DIR / "crop_ontology.owx"
PRICES_FILE = DATA_DIR / "market_prices.csv"


def make_record(commodity, modal, state="Kerala", district="Ernakulam", market="Aluva"):
    return MarketPriceRecord(
        state=state,
        district=district,
        market=market,
        commodity=commodity,
        variety="Other",
        grade="FAQ",
        arrivalDate="05/11/2025",
        minPrice=max(0, modal - 100),
        maxPrice=modal + 100,
        modalPrice=modal,
    )


@pytest.fixture
def store():
    """Knowledge store over the bundled sample ontology and price table"""
    return KnowledgeStore.initialize(ONTOLOGY_FILE, PRICES_FILE)


@pytest.fixture
def clay_humid_crop():
    return Crop(
        id="paddy",
        name="Paddy",
        suitableSoils=["Clay"],
        suitableClimates=["Humid"],
        waterUsage="High",
        carbonFootprint="Low",
    )


@pytest.fixture
def farm_input():
    return FarmInput(state="Kerala", district="Ernakulam", soilType="Clay", climate="Humid", farmSize=2.5)


@pytest.fixture
def humid_weather():
    return WeatherSnapshot(temperature=29, humidity=80, rainfall=4, description="light rain")


@pytest.fixture
def clean_registry():
    yield agent_registry
    agent_registry.clear()
