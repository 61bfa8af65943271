"""
Image Analysis Service
Keyword heuristics over image URLs; stands in for a vision model
"""
import logging
from collections import Counter
from typing import List

from ..models import ImageAnalysis

logger = logging.getLogger(__name__)

MAX_IMAGES = 3
MAX_FEATURES = 5
MAX_COLORS = 3

DEFAULT_FEATURES = ("high-quality design", "modern appearance")
DEFAULT_COLORS = ("neutral tones",)
DEFAULT_STYLE = "contemporary"
DEFAULT_QUALITY = "high-quality"

URL_CONFIDENCE = 0.85
BASE64_CONFIDENCE = 0.80

FEATURE_HINTS = [
    (("wireless", "bluetooth"), "wireless connectivity"),
    (("portable", "compact"), "portable design"),
    (("premium", "luxury"), "premium construction"),
]

COLOR_HINTS = [
    (("black",), "black"),
    (("white",), "white"),
    (("blue",), "blue"),
    (("red",), "red"),
    (("silver", "grey", "gray"), "silver"),
]

STYLE_HINTS = [
    (("modern", "contemporary"), "modern"),
    (("vintage", "retro"), "vintage"),
    (("minimalist", "simple"), "minimalist"),
    (("luxury", "premium"), "luxury"),
    (("rustic", "farmhouse"), "rustic"),
]


def _matches(text: str, hints) -> List[str]:
    return [label for needles, label in hints if any(n in text for n in needles)]


def analyze_image(url: str) -> ImageAnalysis:
    """
    Analyze a product image from its URL
    Args:
        url: Image URL
    Returns:
        ImageAnalysis built from hints in the URL, or fallback values
    """
    text = (url or "").lower()
    styles = _matches(text, STYLE_HINTS)

    return ImageAnalysis(
        main_features=tuple(_matches(text, FEATURE_HINTS)) or DEFAULT_FEATURES,
        colors=tuple(_matches(text, COLOR_HINTS)) or DEFAULT_COLORS,
        style=styles[0] if styles else DEFAULT_STYLE,
        quality=DEFAULT_QUALITY,
        confidence=URL_CONFIDENCE,
    )


def analyze_base64(data: str) -> ImageAnalysis:
    """Inline image data carries no hints; returns fallback values"""
    return ImageAnalysis(
        main_features=DEFAULT_FEATURES,
        colors=DEFAULT_COLORS,
        style=DEFAULT_STYLE,
        quality=DEFAULT_QUALITY,
        confidence=BASE64_CONFIDENCE,
    )


async def analyze_multiple_images(urls: List[str]) -> ImageAnalysis:
    """
    Combine analyses of the first few images
    Args:
        urls: Image URLs (only the first three are analyzed)
    Returns:
        Merged ImageAnalysis: most common features and colors,
        style of the first image, mean confidence
    """
    analyses = []
    for url in urls[:MAX_IMAGES]:
        try:
            if url.startswith("data:"):
                analyses.append(analyze_base64(url))
            else:
                analyses.append(analyze_image(url))
        except Exception as e:
            logger.warning(f"⚠️ Image analysis failed for {url[:80]}: {e}")

    if not analyses:
        return analyze_base64("")

    features = Counter(f for a in analyses for f in a.main_features)
    colors = Counter(c for a in analyses for c in a.colors)
    confidence = sum(a.confidence for a in analyses) / len(analyses)

    logger.info(f"🖼️ Analyzed {len(analyses)} image(s)")
    return ImageAnalysis(
        main_features=tuple(f for f, _ in features.most_common(MAX_FEATURES)),
        colors=tuple(c for c, _ in colors.most_common(MAX_COLORS)),
        style=analyses[0].style,
        quality=analyses[0].quality,
        confidence=round(confidence, 2),
    )


def is_generic(analysis: ImageAnalysis) -> bool:
    """True when every field holds a fallback value"""
    return (
        set(analysis.main_features) <= set(DEFAULT_FEATURES)
        and set(analysis.colors) <= set(DEFAULT_COLORS)
        and analysis.style == DEFAULT_STYLE
    )
