"""
Configuration, constants, and generation rules
Settings are read from the environment once at startup
"""
from functools import lru_cache
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings loaded from environment"""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    # OpenAI Configuration
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 2000
    openai_timeout: float = 60.0

    # Retry behaviour
    generation_max_retries: int = 2
    retry_backoff_base: float = 1.0
    retry_backoff_cap: float = 5.0

    # API
    listing_api_key: str = ""
    port: int = 8080

    # URL Scraping
    url_scrape_timeout: float = 30.0
    url_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Request limits
    max_payload_bytes: int = 100_000
    max_input_chars: int = 10_000

    # Usage tiers
    tier_limits: Dict[str, int] = Field(
        default_factory=lambda: {"free": 3, "basic": 20, "premium": 75}
    )
    default_tier_limit: int = 3

    def tier_limit(self, tier: Optional[str]) -> int:
        """Monthly optimization allowance for a tier"""
        if not tier:
            return self.default_tier_limit
        return self.tier_limits.get(tier.strip().lower(), self.default_tier_limit)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings"""
    return Settings()


settings = get_settings()


# Generation modes
SUPPORTED_MODES = ("optimize", "create", "analyze")

# Phrases stripped from user input before it reaches the prompt
PROMPT_INJECTION_PHRASES = [
    "ignore previous instructions",
    "disregard all",
    "forget everything",
    "new instructions:",
]

# Words the generator is told never to use; flagged as warnings on output
GENERATOR_PROHIBITED_WORDS = [
    "FREE", "SALE", "BEST", "#1", "CHEAP", "GUARANTEE", "WINNER",
    "AMAZING", "INCREDIBLE", "UNBELIEVABLE", "PERFECT", "ULTIMATE",
    "REVOLUTIONARY", "MIRACLE", "MAGIC", "INSTANT", "EASY MONEY",
]

# Fields every generated listing must carry
REQUIRED_LISTING_FIELDS = ("title", "bullets", "description", "keywords", "platform_notes")

# Image analysis below this confidence is reported as low-confidence
IMAGE_CONFIDENCE_THRESHOLD = 0.5
