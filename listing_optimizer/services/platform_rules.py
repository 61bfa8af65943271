"""
Platform Rule Table
Structural constraints and ranking factors for every supported marketplace
"""
from typing import Dict

from ..errors import UnsupportedPlatformError
from ..models import AlgorithmFactors, PlatformRules, TitleRange

SUPPORTED_PLATFORMS = ("amazon", "shopify", "etsy", "ebay", "walmart")

# Narrower ranges the SEO scorer rewards; hard limits live in PLATFORM_RULES
OPTIMAL_TITLE_RANGES: Dict[str, TitleRange] = {
    "amazon": TitleRange(min=80, max=200),
    "ebay": TitleRange(min=40, max=80),
    "etsy": TitleRange(min=60, max=140),
    "shopify": TitleRange(min=40, max=70),
    "walmart": TitleRange(min=40, max=75),
}

PLATFORM_RULES: Dict[str, PlatformRules] = {
    "amazon": PlatformRules(
        name="Amazon",
        title_range=TitleRange(min=80, max=200),
        min_description=2000,
        max_tags=10,
        tag_format="lowercase-hyphenated",
        guidelines=(
            "Front-load important keywords in first 80 characters",
            "Use Title Case capitalization",
            "Include brand, key features, product type, size, and color",
            "No promotional language (Best, #1, Top Rated)",
            "No seller information or special characters",
            "Optimize for mobile display (first 60-80 chars visible)",
        ),
        prohibited_words=(
            "best", "top", "#1", "premium", "luxury", "ultimate", "amazing",
            "awesome", "great", "excellent", "perfect", "guaranteed", "free shipping",
            "sale", "discount", "cheap", "deal", "offer", "promotion",
        ),
        formatting={
            "title": "Brand + Key Features + Product Type + Size/Quantity + Color",
            "description": "HTML allowed: <b>, <br>, <p>, <ul>, <li>",
            "tags": "Backend search terms: 249 bytes max",
            "bullet_points": "ALL CAPS FEATURE: Description with benefits (200-250 chars optimal)",
        },
        content_restrictions=(
            "No external links",
            "No contact information",
            "No promotional language",
            "No medical claims without FDA approval",
        ),
    ),
    "etsy": PlatformRules(
        name="Etsy",
        title_range=TitleRange(min=60, max=140),
        min_description=800,
        max_tags=13,
        tag_format="multi-word-phrases",
        guidelines=(
            "Lead with what the item is, then style, material and occasion",
            "Use natural language buyers would search for",
            "Use all 13 tags with multi-word phrases up to 20 characters",
            "Describe materials, dimensions and customization options",
            "Tell the story behind the item",
        ),
        prohibited_words=("best", "top", "premium", "luxury", "ultimate", "perfect"),
        formatting={
            "title": "Item + Style/Material + Occasion + Recipient, pipe separated",
            "description": "Plain text with emoji section headers",
            "tags": "13 tags, 20 characters max each",
        },
        content_restrictions=(
            "Items must be handmade, vintage or craft supplies",
            "No external links",
        ),
    ),
    "ebay": PlatformRules(
        name="eBay",
        title_range=TitleRange(min=40, max=80),
        min_description=300,
        max_tags=20,
        tag_format="item-specifics",
        guidelines=(
            "Use all 80 title characters",
            "Include brand, model, size and condition",
            "Fill out item specifics completely",
            "State shipping and return terms clearly",
        ),
        prohibited_words=(
            "best", "top", "premium", "luxury", "ultimate", "amazing",
            "awesome", "great", "excellent", "perfect",
        ),
        formatting={
            "title": "Brand + Model + Key Spec + Condition + Compatibility",
            "description": "HTML template with features list and spec table",
            "tags": "Item specifics instead of tags",
        },
        content_restrictions=(
            "No links to other sites",
            "No contact information",
        ),
    ),
    "shopify": PlatformRules(
        name="Shopify",
        title_range=TitleRange(min=40, max=70),
        min_description=150,
        max_tags=250,
        tag_format="comma-separated",
        guidelines=(
            "Keep the title under 70 characters for search results",
            "Write a meta description of about 155 characters",
            "Use a short, keyword-rich URL handle",
            "Organize products into collections",
        ),
        prohibited_words=("best", "top", "premium", "luxury", "ultimate", "perfect"),
        formatting={
            "title": "Brand + Product Name + Key Feature",
            "description": "Rich text with headings and bullet lists",
            "tags": "Comma separated, prefixed attribute tags",
        },
        content_restrictions=(
            "Follow search engine guidelines for structured content",
        ),
    ),
    "walmart": PlatformRules(
        name="Walmart",
        title_range=TitleRange(min=40, max=75),
        min_description=400,
        max_tags=10,
        tag_format="product-attributes",
        guidelines=(
            "Start the title with the brand name",
            "Use Title Case without promotional language",
            "List 4-6 key features",
            "Provide complete product attributes",
        ),
        prohibited_words=(
            "best", "top", "premium", "luxury", "ultimate", "perfect",
            "amazing", "awesome", "great", "excellent",
        ),
        formatting={
            "title": "Brand + Quality Descriptor + Item Type + Key Feature + Pack Count",
            "description": "Overview followed by KEY FEATURES list",
            "tags": "Product attributes instead of tags",
        },
        content_restrictions=(
            "No competitor references",
            "No pricing or shipping claims",
        ),
    ),
}

_RANKING_KEYS = (
    "keywordRelevance", "titleOptimization", "descriptionQuality", "imageQuality",
    "priceCompetitiveness", "sellerPerformance", "customerReviews", "conversionRate",
)
_WEIGHT_KEYS = ("seoOptimization", "userExperience", "mobileOptimization", "complianceAdherence")

_FACTOR_TABLE = {
    "amazon": ((0.25, 0.20, 0.15, 0.10, 0.10, 0.10, 0.05, 0.05), (0.40, 0.30, 0.20, 0.10)),
    "etsy": ((0.25, 0.20, 0.15, 0.10, 0.05, 0.10, 0.10, 0.05), (0.30, 0.35, 0.20, 0.15)),
    "ebay": ((0.20, 0.20, 0.15, 0.10, 0.15, 0.10, 0.05, 0.05), (0.35, 0.25, 0.20, 0.20)),
    "shopify": ((0.30, 0.25, 0.20, 0.10, 0.05, 0.05, 0.03, 0.02), (0.45, 0.30, 0.15, 0.10)),
    "walmart": ((0.20, 0.20, 0.15, 0.10, 0.20, 0.10, 0.03, 0.02), (0.30, 0.25, 0.20, 0.25)),
}

ALGORITHM_FACTORS: Dict[str, AlgorithmFactors] = {
    platform: AlgorithmFactors(
        platform=platform,
        ranking_factors=dict(zip(_RANKING_KEYS, ranking)),
        optimization_weights=dict(zip(_WEIGHT_KEYS, weights)),
    )
    for platform, (ranking, weights) in _FACTOR_TABLE.items()
}


def normalize_platform(platform: str) -> str:
    """
    Canonical platform key
    Raises:
        UnsupportedPlatformError: If platform is not in the closed set
    """
    key = (platform or "").strip().lower()
    if key not in PLATFORM_RULES:
        raise UnsupportedPlatformError(platform)
    return key


def is_supported(platform: str) -> bool:
    return (platform or "").strip().lower() in PLATFORM_RULES


def get_rules(platform: str) -> PlatformRules:
    """
    Get rules for a platform
    Args:
        platform: Platform key (amazon, shopify, etsy, ebay, walmart)
    Returns:
        PlatformRules for the platform
    Raises:
        UnsupportedPlatformError: For unknown platforms
    """
    return PLATFORM_RULES[normalize_platform(platform)]


def get_algorithm_factors(platform: str) -> AlgorithmFactors:
    return ALGORITHM_FACTORS[normalize_platform(platform)]


def get_optimal_title_range(platform: str) -> TitleRange:
    return OPTIMAL_TITLE_RANGES[normalize_platform(platform)]
