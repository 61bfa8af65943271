"""
Keyword Research & Integration Engine
Extracts primary/secondary/long-tail/synonym keywords from product text
and works the missing ones into title and description.
Deterministic: no randomness, no I/O.
"""
import logging
import re
from typing import Dict, Iterable, List, Tuple

from ..models import (
    BaseContent,
    CompetitorKeywords,
    KeywordOptimizedContent,
    KeywordSet,
    ProductInfo,
)
from .platform_rules import normalize_platform

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset({
    "the", "and", "for", "with", "from", "this", "that", "have", "been",
    "your", "their", "what", "which", "when", "where", "who", "how", "will",
    "can", "are", "was", "were", "has", "had", "does", "did",
})

SYNONYM_MAP: Dict[str, Tuple[str, ...]] = {
    "bottle": ("flask", "container", "vessel", "canteen"),
    "case": ("cover", "protector", "shell", "sleeve"),
    "bag": ("tote", "carrier", "sack", "pouch"),
    "mug": ("cup", "tumbler", "glass", "beaker"),
    "wallet": ("billfold", "purse", "holder", "organizer"),
    "phone": ("mobile", "smartphone", "cell", "device"),
    "laptop": ("notebook", "computer", "pc", "macbook"),
    "watch": ("timepiece", "wristwatch", "chronograph"),
    "headphone": ("earphone", "earbud", "headset"),
    "charger": ("adapter", "power supply", "charging cable"),
}

PLATFORM_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "amazon": ("prime eligible", "fast shipping", "amazon choice"),
    "etsy": ("handmade", "custom", "personalized", "unique gift"),
    "ebay": ("free shipping", "best offer", "buy it now"),
    "shopify": ("online store", "shop now", "free delivery"),
    "walmart": ("everyday low price", "value", "quality"),
}

CATEGORY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "electronics": ("wireless", "bluetooth", "rechargeable", "portable", "smart"),
    "clothing": ("comfortable", "stylish", "durable", "breathable", "fashionable"),
    "home": ("modern", "decorative", "functional", "space-saving", "elegant"),
    "kitchen": ("stainless steel", "dishwasher safe", "non-stick", "durable", "easy clean"),
    "accessories": ("versatile", "compact", "lightweight", "practical", "stylish"),
}
DEFAULT_CATEGORY_KEYWORDS = ("quality", "durable", "practical", "affordable", "reliable")

MAX_LONG_TAIL = 10
MAX_LONG_TAIL_LENGTH = 50
TITLE_KEYWORD_LIMIT = 200
MAX_DESCRIPTION_INSERTS = 5
AMAZON_BACKEND_LIMIT = 249
DESCRIPTION_TEMPLATE = " This {keyword} provides excellent value and performance."

_ALPHA_WORD = re.compile(r"^[a-z]+$")


def dedupe(items: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate keeping first-seen order"""
    return tuple(dict.fromkeys(items))


def extract_significant_words(text: str) -> List[str]:
    return [
        word for word in (text or "").lower().split()
        if len(word) > 3 and word not in STOP_WORDS and _ALPHA_WORD.match(word)
    ]


def generate_long_tail_keywords(product: ProductInfo) -> List[str]:
    words = extract_significant_words(f"{product.title} {product.description}")
    phrases = []
    for i in range(len(words) - 2):
        phrase = " ".join(words[i:i + 3])
        if len(phrase) <= MAX_LONG_TAIL_LENGTH:
            phrases.append(phrase)

    if product.category:
        category = product.category.strip().lower()
        phrases.extend([f"{category} for sale", f"best {category}", f"{category} online"])

    return list(dedupe(phrases))[:MAX_LONG_TAIL]


def generate_synonyms(keywords: Iterable[str]) -> List[str]:
    synonyms = []
    for keyword in keywords:
        lower = keyword.lower()
        for word, alternatives in SYNONYM_MAP.items():
            if word in lower:
                synonyms.extend(alternatives)
    return synonyms


def research_keywords(product: ProductInfo, platform: str) -> KeywordSet:
    """
    Research keywords for a product
    Args:
        product: Normalized product input
        platform: Target platform key
    Returns:
        KeywordSet with every group deduplicated in first-seen order
    """
    platform = normalize_platform(platform)

    primary = extract_significant_words(product.title)[:3]
    secondary = extract_significant_words(product.description)[:5]
    secondary.extend(PLATFORM_KEYWORDS[platform])

    keyword_set = KeywordSet(
        primary=dedupe(primary),
        secondary=dedupe(secondary),
        long_tail=dedupe(generate_long_tail_keywords(product)),
        synonyms=dedupe(generate_synonyms(primary)),
        competitors=(),
    )
    logger.debug(
        f"Researched keywords for {platform}: {len(keyword_set.primary)} primary, "
        f"{len(keyword_set.secondary)} secondary, {len(keyword_set.long_tail)} long-tail"
    )
    return keyword_set


def calculate_keyword_density(text: str, keywords: KeywordSet) -> Dict[str, float]:
    """Occurrences per 100 words for every primary, secondary and long-tail keyword"""
    lower_text = (text or "").lower()
    total_words = len(lower_text.split())
    density = {}
    for keyword in (*keywords.primary, *keywords.secondary, *keywords.long_tail):
        if total_words == 0:
            density[keyword] = 0.0
            continue
        pattern = r"\b" + re.escape(keyword.lower()) + r"\b"
        count = len(re.findall(pattern, lower_text))
        density[keyword] = count / total_words * 100
    return density


def integrate_keywords(content: BaseContent, keywords: KeywordSet) -> KeywordOptimizedContent:
    """
    Work missing keywords into title and description
    Args:
        content: Title/description to enrich
        keywords: Researched keyword set
    Returns:
        New KeywordOptimizedContent; the input is left untouched
    """
    title = content.title
    for keyword in keywords.primary[:2]:
        if keyword.lower() in title.lower():
            continue
        if len(title) + len(keyword) + 3 < TITLE_KEYWORD_LIMIT:
            title = f"{title} {keyword}"

    description = content.description
    candidates = (*keywords.primary, *keywords.secondary[:3], *keywords.long_tail[:2])
    missing = [k for k in dedupe(candidates) if k.lower() not in description.lower()]
    for keyword in missing[:MAX_DESCRIPTION_INSERTS]:
        description += DESCRIPTION_TEMPLATE.format(keyword=keyword)

    return KeywordOptimizedContent(
        **content.model_dump(include=set(BaseContent.model_fields)),
        optimized_title=title,
        optimized_description=description,
        integrated_keywords=keywords,
        keyword_density=calculate_keyword_density(description, keywords),
    )


def generate_backend_search_terms(keywords: KeywordSet, platform: str) -> List[str]:
    """
    Hidden search terms with plural/singular variants
    Amazon caps the joined string at 249 characters; other platforms get 50 terms
    """
    platform = normalize_platform(platform)
    terms = list(dedupe(
        k.lower() for k in (*keywords.primary, *keywords.secondary, *keywords.synonyms)
    ))

    variants = []
    for term in terms:
        if not term.endswith("s"):
            variants.append(term + "s")
        elif len(term) > 3:
            variants.append(term[:-1])
    terms = list(dedupe([*terms, *variants]))

    if platform == "amazon":
        packed: List[str] = []
        length = 0
        for term in terms:
            extra = len(term) + (1 if packed else 0)
            if length + extra > AMAZON_BACKEND_LIMIT:
                break
            packed.append(term)
            length += extra
        return packed

    return terms[:50]


def analyze_competitor_keywords(category: str, platform: str) -> CompetitorKeywords:
    platform = normalize_platform(platform)
    lower_category = (category or "").lower()
    found = DEFAULT_CATEGORY_KEYWORDS
    for key, category_keywords in CATEGORY_KEYWORDS.items():
        if key in lower_category:
            found = category_keywords
            break

    return CompetitorKeywords(
        platform=platform,
        keywords=found,
        frequency={kw: max(10, 100 - index * 5) for index, kw in enumerate(found)},
    )
