"""
SEO Router
Deterministic scoring, optimization and keyword research; no AI calls
"""
import logging

from fastapi import APIRouter, Depends

from ..dependencies import check_key
from ..engines import get_engine
from ..models import (
    KeywordSet,
    OptimizedContent,
    OptimizeRequest,
    PlatformOptimizedContent,
    SEOScoreRequest,
)
from ..services import keywords as keyword_service
from ..services.optimizer import optimize_listing
from ..services.platform_rules import (
    ALGORITHM_FACTORS,
    PLATFORM_RULES,
    SUPPORTED_PLATFORMS,
    normalize_platform,
)
from ..services.quick_scorer import quick_seo_score
from ..services.seo_scorer import calculate_seo_score
from ..utils.normalisers import product_from_input

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["SEO"], dependencies=[Depends(check_key)])


@router.post("/seo-score")
async def seo_score(request: SEOScoreRequest):
    """
    Score an existing listing as published
    """
    platform = normalize_platform(request.platform)
    keywords = tuple(k.strip() for k in request.keywords if k.strip())
    tags = tuple(t.strip() for t in request.tags if t.strip())

    content = OptimizedContent(
        title=request.title,
        description=request.description,
        keywords=keywords,
        optimized_title=request.title,
        optimized_description=request.description,
        integrated_keywords=KeywordSet(primary=keywords),
        tags=tags,
    )
    score = calculate_seo_score(content, platform)
    quick = quick_seo_score(request.title, request.description, tags, platform)
    compliance = get_engine(platform).validate_platform_compliance(
        PlatformOptimizedContent(platform=platform, title=request.title, description=request.description, tags=tags)
    )

    logger.info(f"📊 Scored listing for {platform}: SEO {score.overall}, quick {quick}")
    return {
        "success": True,
        "data": {
            "seoScore": score.model_dump(by_alias=True),
            "quickScore": quick,
            "compliance": compliance.model_dump(by_alias=True),
        },
    }


@router.post("/optimize")
async def optimize(request: OptimizeRequest):
    """
    Run the deterministic optimization pipeline for one platform
    """
    result = optimize_listing(product_from_input(request.productData), request.platform)
    return {"success": True, "data": result.model_dump(by_alias=True)}


@router.post("/keywords")
async def keywords(request: OptimizeRequest):
    """
    Keyword research with backend search terms and competitor keywords
    """
    platform = normalize_platform(request.platform)
    product = product_from_input(request.productData)

    keyword_set = keyword_service.research_keywords(product, platform)
    backend_terms = keyword_service.generate_backend_search_terms(keyword_set, platform)
    competitors = keyword_service.analyze_competitor_keywords(product.category or "general", platform)

    return {
        "success": True,
        "data": {
            "keywords": keyword_set.model_dump(by_alias=True),
            "backendSearchTerms": backend_terms,
            "competitors": competitors.model_dump(by_alias=True),
        },
    }


@router.get("/platforms")
async def platforms():
    """List supported platforms with their rules and ranking factors"""
    return {
        "success": True,
        "data": [
            {
                "platform": platform,
                "rules": PLATFORM_RULES[platform].model_dump(by_alias=True),
                "algorithmFactors": ALGORITHM_FACTORS[platform].model_dump(by_alias=True),
            }
            for platform in SUPPORTED_PLATFORMS
        ],
    }
