"""
Input normalization
Turns API request bodies and scraped pages into core records
"""
import re
from typing import Any, List, Optional

from ..models import (
    ImageAnalysis,
    ImageAnalysisInput,
    ProductDataInput,
    ProductInfo,
    ScrapedListing,
    Specification,
)


def normalize_list_field(values: Optional[List[Any]]) -> List[str]:
    """
    Normalize a list of strings
    Args:
        values: Raw list (may contain blanks or non-strings)
    Returns:
        Trimmed, non-empty strings with duplicates removed in order
    """
    if not values:
        return []

    cleaned = [str(v).strip() for v in values if v is not None]
    return list(dict.fromkeys(v for v in cleaned if v))


def parse_float(value: Any) -> Optional[float]:
    """
    Parse a price-like value to float
    Args:
        value: Number or string such as "$24.99" or "1,299.00"
    Returns:
        Float, or None when nothing numeric is found
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)

    match = re.search(r"\d+(?:\.\d+)?", str(value).replace(",", ""))
    return float(match.group(0)) if match else None


def product_from_input(data: ProductDataInput) -> ProductInfo:
    """
    Build a ProductInfo from a request body
    Args:
        data: productData from the request
    Returns:
        Immutable ProductInfo
    """
    return ProductInfo(
        title=(data.title or "").strip(),
        description=(data.description or "").strip(),
        category=(data.category or "").strip() or None,
        price=data.price,
        keywords=tuple(normalize_list_field(data.keywords)),
        specifications=tuple(
            Specification(name=s.name.strip(), value=s.value.strip(), unit=(s.unit or "").strip() or None)
            for s in data.specifications
            if s.name.strip() and s.value.strip()
        ),
    )


def image_analysis_from_input(data: Optional[ImageAnalysisInput]) -> Optional[ImageAnalysis]:
    if data is None:
        return None
    return ImageAnalysis(
        main_features=tuple(normalize_list_field(data.mainFeatures)),
        colors=tuple(normalize_list_field(data.colors)),
        style=data.style,
        quality=data.quality,
        confidence=max(0.0, min(1.0, data.confidence)),
    )


def product_from_scraped(listing: ScrapedListing) -> ProductInfo:
    """
    Build a ProductInfo from a scraped page
    Bullets are folded into the description; specifications keep their order
    """
    description = listing.description
    if listing.bullets:
        description = "\n".join([description, *listing.bullets]).strip()

    return ProductInfo(
        title=listing.title,
        description=description,
        price=parse_float(listing.price),
        specifications=tuple(
            Specification(name=name, value=value) for name, value in listing.specifications.items() if value
        ),
    )
