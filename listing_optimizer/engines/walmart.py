"""
Walmart Engine
Brand-first titles, plain feature-list descriptions and product attributes.
"""
import re
from typing import Any, Dict, List, Sequence

from ..models import BaseContent, Specification
from .base import COLORS, PlatformEngine, find_first, first_sentence, format_spec_value, split_sentences, truncate_at_word

KNOWN_BRANDS = ("Apple", "Samsung", "Sony", "HP", "Dell", "Nike", "Adidas")
ATTRIBUTE_COLORS = COLORS[:9]
ATTRIBUTE_MATERIALS = ("stainless steel", "plastic", "metal", "wood", "glass", "ceramic", "leather")
FEATURE_FLAGS = (("waterproof", "Waterproof"), ("wireless", "Wireless"), ("rechargeable", "Rechargeable"))
GTIN_NOTE = "Exemption required - Contact seller"

_MODEL = re.compile(r"\b([A-Z0-9]{3,})\b")
_SIZE = re.compile(r"(\d+\.?\d*)\s*(oz|ml|inch|cm|gb|l|ft)\b", re.IGNORECASE)


def to_title_case(text: str) -> str:
    """Title Case with words of two characters or fewer lowercased"""
    return " ".join(
        word.lower() if len(word) <= 2 else word[:1].upper() + word[1:].lower()
        for word in text.split(" ")
    )


class WalmartEngine(PlatformEngine):
    platform = "walmart"

    def optimize_title(self, title: str, keywords: Sequence[str]) -> str:
        optimized = self.clean_for_platform(title)

        brand = self.find_brand(optimized)
        if brand and not optimized.startswith(brand):
            rest = re.sub(r"\s+", " ", optimized.replace(brand, "", 1)).strip()
            optimized = f"{brand} {rest}".strip()

        return truncate_at_word(to_title_case(optimized), self.rules.title_range.max)

    def optimize_description(
        self, description: str, keywords: Sequence[str], specifications: Sequence[Specification]
    ) -> str:
        overview = first_sentence(description)
        sections = [f"{overview}." if overview else ""]

        features = "\n".join(f"- {feature}" for feature in split_sentences(description, 15)[:6])
        sections.append(f"KEY FEATURES:\n{features}".rstrip())

        if specifications:
            lines = "\n".join(f"- {spec.name}: {format_spec_value(spec)}" for spec in specifications)
            sections.append(f"SPECIFICATIONS:\n{lines}")

        sections.extend([
            "WHAT'S INCLUDED:\n- 1x Product as described\n- User manual and documentation",
            "CARE INSTRUCTIONS:\nFollow the care guidelines for optimal performance and longevity.",
        ])
        return "\n\n".join(s for s in sections if s)

    def generate_tags(self, content: BaseContent) -> List[str]:
        # Product attributes replace tags on Walmart
        return []

    def generate_attributes(self, content: BaseContent) -> Dict[str, Any]:
        return {"product_attributes": self.generate_product_attributes(content)}

    def generate_product_attributes(self, content: BaseContent) -> Dict[str, str]:
        text = f"{content.title} {content.description}"
        attributes = {"Brand": self.find_brand(self.clean_for_platform(content.title)) or "Generic"}

        model = _MODEL.search(content.title)
        if model:
            attributes["Model"] = model.group(1)

        attributes["Product Type"] = content.category or "General Merchandise"

        color = find_first(text, ATTRIBUTE_COLORS)
        if color:
            attributes["Color"] = color.capitalize()

        material = find_first(text, ATTRIBUTE_MATERIALS)
        if material:
            attributes["Material"] = material.title()

        size = _SIZE.search(text)
        if size:
            attributes["Size"] = f"{size.group(1)} {size.group(2).lower()}"

        features = [label for needle, label in FEATURE_FLAGS if needle in text.lower()]
        if features:
            attributes["Features"] = ", ".join(features)

        attributes["GTIN"] = GTIN_NOTE

        for spec in content.specifications:
            name = spec.name.lower()
            if "mpn" in name or "part number" in name:
                attributes["MPN"] = spec.value
                break

        return self.merge_specifications(attributes, content.specifications)

    def find_brand(self, title: str) -> str:
        brand = self.extract_brand(title)
        if brand:
            return brand
        for known in KNOWN_BRANDS:
            if known in title:
                return known
        return ""
