"""
Platform engines: one stateless optimization strategy per marketplace
"""
from functools import lru_cache

from ..services.platform_rules import normalize_platform
from .amazon import AmazonEngine
from .base import PlatformEngine
from .ebay import EbayEngine
from .etsy import EtsyEngine
from .shopify import ShopifyEngine
from .walmart import WalmartEngine

ENGINE_CLASSES = {
    "amazon": AmazonEngine,
    "ebay": EbayEngine,
    "etsy": EtsyEngine,
    "shopify": ShopifyEngine,
    "walmart": WalmartEngine,
}


@lru_cache()
def _cached_engine(platform: str) -> PlatformEngine:
    return ENGINE_CLASSES[platform]()


def get_engine(platform: str) -> PlatformEngine:
    """
    Get the engine for a platform
    Raises:
        UnsupportedPlatformError: For unknown platforms
    """
    return _cached_engine(normalize_platform(platform))


__all__ = ["PlatformEngine", "ENGINE_CLASSES", "get_engine"]
