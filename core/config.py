# core/config.py
"""
Configuration management for backend services
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Dict, Any
from pathlib import Path
from functools import lru_cache
from enum import Enum
import logging
from dotenv import load_dotenv
load_dotenv()

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"

class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

class Settings(BaseSettings):
    """Application settings with validation"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True

    # API Configuration
    api_title: str = "CropWise AI Backend"
    api_version: str = "1.0.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:4173"
    ]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # External API Keys
    openweather_api_key: Optional[str] = None
    google_api_key: Optional[str] = None

    # Knowledge base sources, read once at startup
    ontology_path: Path = DATA_DIR / "crop_ontology.owx"
    market_prices_path: Path = DATA_DIR / "market_prices.csv"
    commodity_synonyms_path: Optional[Path] = None  # None -> bundled table

    # Agent Configurations
    recommendation_config: Dict[str, Any] = {
        "min_score": 50,
        "explanation_timeout_seconds": 8.0
    }

    weather_config: Dict[str, Any] = {
        "country_code": "IN",
        "request_timeout_seconds": 10
    }

    explanation_config: Dict[str, Any] = {
        "model": "gemini-1.5-flash",
        "temperature": 0.2,
        "max_output_tokens": 180
    }

    def get_agent_config(self, agent_name: str) -> Dict[str, Any]:
        """Get configuration for specific agent"""
        config_map = {
            "recommendation": self.recommendation_config,
            "weather": self.weather_config,
            "explanation": self.explanation_config
        }
        return config_map.get(agent_name, {})

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

# Validation functions
def validate_api_keys(settings: Settings) -> None:
    """Validate required API keys based on environment"""
    required_keys = []

    if not settings.openweather_api_key:
        required_keys.append("OPENWEATHER_API_KEY")

    if required_keys and settings.is_production:
        raise ValueError(f"Missing required API keys in production: {', '.join(required_keys)}")

    if required_keys:
        logger.warning(f"⚠️  Missing API keys ({settings.environment.value} mode): {', '.join(required_keys)}")
        logger.warning("⚠️  Recommendations will be scored without live weather data")
    else:
        logger.info("✅ All required API keys are present")

    if not settings.google_api_key:
        logger.info("GOOGLE_API_KEY not set - explanation enrichment disabled")
