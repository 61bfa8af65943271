"""
API Routers for the Listing Optimizer
"""
from .listing import router as listing_router
from .url import router as url_router
from .seo import router as seo_router

__all__ = [
    "listing_router",
    "url_router",
    "seo_router",
]
