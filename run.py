# run.py
"""
Main entry point for CropWise AI Backend
"""

import uvicorn
import logging
from contextlib import asynccontextmanager

from api.app import create_app
from core.config import get_settings, validate_api_keys
from core.logging import setup_logging
from agents.knowledge.store import KnowledgeStore
from agents.explanation.service import ExplanationService
from agents.recommendation.agent import RecommendationAgent
from agents.weather.agent import WeatherAgent
from agents.base import agent_registry

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

def build_knowledge_store(settings) -> KnowledgeStore:
    """Load prices and ontology; any data error aborts startup"""
    return KnowledgeStore.initialize(
        ontology_source=settings.ontology_path,
        prices_source=settings.market_prices_path,
        synonyms_path=settings.commodity_synonyms_path
    )

@asynccontextmanager
async def lifespan(app):
    """Application lifespan management"""
    settings = get_settings()

    # Startup
    logger.info("🚀 Starting CropWise AI Backend")
    validate_api_keys(settings)

    try:
        logger.info("Loading knowledge base...")
        store = build_knowledge_store(settings)
        app.state.knowledge_store = store
        logger.info(f"✅ Knowledge base loaded: {store.summary()}")

        # Initialize and register agents
        explainer = ExplanationService(
            api_key=settings.google_api_key,
            config=settings.get_agent_config("explanation")
        )
        agent_registry.register(RecommendationAgent(
            store,
            explainer=explainer if explainer.available else None
        ))
        logger.info("✅ Recommendation agent registered")

        agent_registry.register(WeatherAgent())
        logger.info("✅ Weather agent registered")

        # Test agent health
        health_results = await agent_registry.health_check_all()
        for agent_name, health in health_results.items():
            status = "✅" if health["status"] == "healthy" else "❌"
            logger.info(f"{status} {agent_name}: {health['status']}")

        logger.info("🎯 All agents initialized successfully")

    except Exception as e:
        logger.error(f"❌ Failed to initialize backend: {e}")
        raise

    yield

    # Shutdown
    agent_registry.clear()
    logger.info("🛑 Shutting down CropWise AI Backend")

def create_application():
    """Create FastAPI application with all configurations"""
    return create_app(lifespan=lifespan)

def main():
    """Main entry point"""
    settings = get_settings()

    logger.info(f"Starting server on {settings.api_host}:{settings.api_port}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")

    # Run server with proper import string for reload
    if settings.debug:
        uvicorn.run(
            "run:create_application",
            factory=True,
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )
    else:
        app = create_application()
        uvicorn.run(
            app,
            host=settings.api_host,
            port=settings.api_port,
            reload=False,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )

if __name__ == "__main__":
    main()
