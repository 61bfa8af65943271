"""
Pytest Configuration and Shared Fixtures

Provides common products, generator payloads and service doubles for all test modules.
"""

import pytest
from typing import Any, Dict
from unittest.mock import AsyncMock

from listing_optimizer.config import Settings
from listing_optimizer.models import (
    GenerationRequest,
    ProductInfo,
    Specification,
)
from listing_optimizer.services.ai_service import AIService, GenerationOptions


# ============================================================================
# Product Fixtures
# ============================================================================

@pytest.fixture
def sample_product() -> ProductInfo:
    """Typical kitchen product with specifications."""
    return ProductInfo(
        title="Stainless Steel Water Bottle 32oz Insulated",
        description=(
            "Keeps drinks cold for 24 hours and hot for 12 hours. "
            "Made from food grade stainless steel with a leak proof lid. "
            "Fits most car cup holders and backpack pockets."
        ),
        category="kitchen",
        price=24.99,
        specifications=(
            Specification(name="Capacity", value="32", unit="oz"),
            Specification(name="Material", value="stainless steel"),
        ),
    )


@pytest.fixture
def product_payload() -> Dict[str, Any]:
    """productData body as the API receives it."""
    return {
        "title": "Stainless Steel Water Bottle 32oz Insulated",
        "description": "Keeps drinks cold for 24 hours. Made from food grade stainless steel.",
        "category": "kitchen",
        "price": 24.99,
        "keywords": ["water bottle", "insulated bottle"],
        "specifications": [{"name": "Capacity", "value": "32", "unit": "oz"}],
    }


# ============================================================================
# Generator Fixtures
# ============================================================================

@pytest.fixture
def generated_listing() -> Dict[str, Any]:
    """Well-formed generator output."""
    return {
        "title": (
            "Insulated Stainless Steel Water Bottle 32 oz with Leak Proof Lid "
            "for Travel, Gym and Office Use"
        ),
        "bullets": [
            "ALL DAY COLD: Double wall vacuum insulation keeps drinks cold for 24 hours",
            "LEAK PROOF LID: Threaded lid with silicone seal stops spills in your bag",
            "FOOD GRADE STEEL: 18/8 stainless steel keeps flavors clean with no aftertaste",
            "FITS CUP HOLDERS: Slim 3 inch base fits most car cup holders and bike cages",
            "EASY TO CLEAN: Wide 2 inch mouth fits ice cubes and a bottle brush",
        ],
        "description": (
            "Stay hydrated through long days with a 32 oz insulated water bottle. "
            "Double wall vacuum insulation keeps drinks cold for 24 hours and hot for 12 hours. "
            "The threaded lid seals tight so the bottle can ride in a backpack without leaks."
        ),
        "keywords": ["Water Bottle", "insulated bottle", "stainless steel bottle", "water bottle"],
        "platform_notes": "Primary keyword is front-loaded in the title.",
    }


@pytest.fixture
def mock_generator(generated_listing) -> AsyncMock:
    """Content generator double returning a valid listing."""
    generator = AsyncMock()
    generator.generate.return_value = generated_listing
    return generator


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no backoff delay."""
    return Settings(retry_backoff_base=0.0, retry_backoff_cap=0.0, openai_api_key="test-key")


@pytest.fixture
def ai_service(mock_generator, test_settings) -> AIService:
    return AIService(generator=mock_generator, settings=test_settings)


@pytest.fixture
def no_backoff() -> GenerationOptions:
    return GenerationOptions(max_retries=2, backoff_base=0.0, backoff_cap=0.0)


@pytest.fixture
def generation_request(sample_product) -> GenerationRequest:
    return GenerationRequest(platform="amazon", mode="optimize", product_data=sample_product)
