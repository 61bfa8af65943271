"""
URL Analysis Router
Quick extraction and scoring of an existing product page
"""
import logging

from fastapi import APIRouter, Depends

from ..dependencies import check_key
from ..models import URLAnalyzeRequest
from ..services import url_scraper
from ..services.quick_scorer import quick_seo_score

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["URL Analysis"], dependencies=[Depends(check_key)])

DEFAULT_PLATFORM = "amazon"


@router.post("/analyze-url")
async def analyze_url(request: URLAnalyzeRequest):
    """
    Scrape a product page and score it as it stands
    """
    listing = await url_scraper.scrape(request.url)
    platform = listing.platform or DEFAULT_PLATFORM

    score = quick_seo_score(listing.title, listing.description, (), platform)
    logger.info(f"🔎 Analyzed URL for {platform}: quick score {score}")

    return {
        "success": True,
        "data": {
            "title": listing.title,
            "description": listing.description,
            "price": listing.price,
            "images": list(listing.images),
            "platform": platform,
            "quickScore": score,
        },
    }
