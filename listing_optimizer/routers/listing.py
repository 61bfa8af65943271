"""
Listing Generation Router
AI listing generation from manual input or a product URL
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..dependencies import check_key, check_quota
from ..models import GenerateListingRequest, GenerationRequest, GenerationResult, URLAnalyzeRequest
from ..services import image_analysis, url_scraper
from ..services.ai_service import AIService, check_payload_size, validate_generation_request
from ..services.platform_rules import normalize_platform
from ..services.quick_scorer import quick_seo_score
from ..utils.normalisers import product_from_scraped

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Listing Generation"], dependencies=[Depends(check_key)])


def get_ai_service() -> AIService:
    return AIService()


def result_payload(result: GenerationResult) -> Dict[str, Any]:
    """Listing fields at the top level, plus optimization and quality score"""
    data = result.listing.model_dump(by_alias=True)
    data["optimization"] = result.optimization.model_dump(by_alias=True) if result.optimization else None
    data["qualityScore"] = result.quality_score.model_dump(by_alias=True) if result.quality_score else None
    return data


@router.post("/generate-listing", dependencies=[Depends(check_quota)])
async def generate_listing(request: GenerateListingRequest, service: AIService = Depends(get_ai_service)):
    """
    Generate an optimized listing for one platform
    """
    generation = validate_generation_request(request)

    if request.deepAnalysis and request.images:
        analysis = await image_analysis.analyze_multiple_images(request.images)
        generation = generation.model_copy(update={"image_analysis": analysis})

    logger.info(f"📝 Generating {generation.platform} listing in {generation.mode} mode")
    result = await service.generate_listing(generation)

    return {
        "success": True,
        "data": result_payload(result),
        "warnings": list(result.warnings),
    }


@router.post("/analyze-url-deep", dependencies=[Depends(check_quota)])
async def analyze_url_deep(request: URLAnalyzeRequest, service: AIService = Depends(get_ai_service)):
    """
    Deep-scrape a product page and regenerate it for a platform
    """
    check_payload_size(request)
    requested = normalize_platform(request.platform) if request.platform else None

    scraped = await url_scraper.scrape_deep(request.url)
    platform = requested or scraped.platform or "amazon"

    analysis = None
    if scraped.images:
        analysis = await image_analysis.analyze_multiple_images(list(scraped.images))

    generation = GenerationRequest(
        platform=platform,
        mode="analyze",
        product_data=product_from_scraped(scraped),
        image_analysis=analysis,
    )
    result = await service.generate_listing(generation)

    original_score = quick_seo_score(scraped.title, scraped.description, (), platform)
    return {
        "success": True,
        "data": {
            "original": scraped.model_dump(by_alias=True),
            "imageAnalysis": analysis.model_dump(by_alias=True) if analysis else None,
            "optimized": result_payload(result),
            "metadata": {
                "platform": platform,
                "sourcePlatform": scraped.platform,
                "originalScore": original_score,
                "optimizedScore": result.quality_score.overall if result.quality_score else None,
            },
        },
        "warnings": list(result.warnings),
    }
