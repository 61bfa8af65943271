"""
Listing Optimizer
Runs keyword research, keyword integration, platform formatting and scoring
for one product on one platform.
"""
import logging

from ..engines import get_engine
from ..models import BaseContent, OptimizationResult, OptimizedContent, ProductInfo
from .keywords import dedupe, integrate_keywords, research_keywords
from .platform_rules import normalize_platform
from .quick_scorer import quick_seo_score
from .seo_scorer import calculate_seo_score

logger = logging.getLogger(__name__)


def optimize_listing(product: ProductInfo, platform: str) -> OptimizationResult:
    """
    Optimize a product listing for a platform
    Args:
        product: Normalized product input
        platform: Target platform key
    Returns:
        OptimizationResult with final content, formatted listing, keywords and scores
    Raises:
        UnsupportedPlatformError: For unknown platforms
    """
    platform = normalize_platform(platform)
    engine = get_engine(platform)

    keyword_set = research_keywords(product, platform)
    keywords = product.keywords or dedupe((*keyword_set.primary, *keyword_set.secondary))

    base = BaseContent(
        title=product.title,
        description=product.description,
        keywords=keywords,
        category=product.category,
        specifications=product.specifications,
    )
    integrated = integrate_keywords(base, keyword_set)

    listing = engine.format_for_platform(base.model_copy(update={
        "title": integrated.optimized_title,
        "description": integrated.optimized_description,
    }))

    content = OptimizedContent(
        **integrated.model_dump(exclude={"optimized_title", "optimized_description"}),
        optimized_title=listing.content.title,
        optimized_description=listing.content.description,
        tags=listing.content.tags,
        improvements=dedupe(r.action for r in listing.compliance.recommendations),
    )
    seo_score = calculate_seo_score(content, platform)
    content = content.model_copy(update={"seo_score": seo_score})

    quick_score = quick_seo_score(
        listing.content.title, listing.content.description, listing.content.tags, platform
    )

    logger.info(
        f"📈 Optimized listing for {platform}: SEO {seo_score.overall}, "
        f"compliance {listing.compliance.score}, {len(listing.compliance.violations)} violations"
    )
    return OptimizationResult(
        platform=platform,
        content=content,
        listing=listing,
        keywords=keyword_set,
        seo_score=seo_score,
        quick_score=quick_score,
    )
