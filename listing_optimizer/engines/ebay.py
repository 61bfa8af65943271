"""
eBay Engine
Uppercase 80-character titles, an HTML description template and item specifics.
"""
from typing import Any, Dict, List, Sequence

from ..models import BaseContent, Specification
from .base import COLORS, PlatformEngine, find_first, format_spec_value, split_sentences, truncate_at_word

ITEM_MATERIALS = ("stainless steel", "leather", "silicone", "ceramic", "plastic", "metal")
ITEM_COLORS = COLORS[:8]
FEATURE_FLAGS = (("waterproof", "Waterproof"), ("insulated", "Insulated"), ("leak proof", "Leak-Proof"))

_H3 = '<h3 style="color: #333;">{}</h3>'


class EbayEngine(PlatformEngine):
    platform = "ebay"

    def optimize_title(self, title: str, keywords: Sequence[str]) -> str:
        optimized = self.clean_for_platform(title).upper()
        return truncate_at_word(optimized, self.rules.title_range.max)

    def optimize_description(
        self, description: str, keywords: Sequence[str], specifications: Sequence[Specification]
    ) -> str:
        parts = [
            '<div style="font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto;">',
            '<h2 style="color: #333; border-bottom: 2px solid #0066c0; padding-bottom: 10px;">'
            'Product Description</h2>',
            f'<p style="font-size: 14px; line-height: 1.6;">{description}</p>',
            _H3.format("Key Features:"),
            '<ul style="font-size: 14px; line-height: 1.8;">',
            *(f"<li>{feature}</li>" for feature in split_sentences(description, 20)[:5]),
            "</ul>",
        ]

        if specifications:
            parts.append(_H3.format("Specifications:"))
            parts.append('<table style="width: 100%; border-collapse: collapse;">')
            for spec in specifications:
                parts.append(
                    '<tr style="border-bottom: 1px solid #ddd;">'
                    f'<td style="padding: 8px; font-weight: bold; width: 40%;">{spec.name}</td>'
                    f'<td style="padding: 8px;">{format_spec_value(spec)}</td>'
                    "</tr>"
                )
            parts.append("</table>")

        parts.append(_H3.format("Shipping & Returns:"))
        parts.append(
            '<p style="font-size: 14px;">Fast shipping available. '
            "30-day return policy for buyer satisfaction.</p>"
        )
        parts.append("</div>")
        return "".join(parts)

    def generate_tags(self, content: BaseContent) -> List[str]:
        # Item specifics replace tags on eBay
        return []

    def generate_attributes(self, content: BaseContent) -> Dict[str, Any]:
        return {"item_specifics": self.generate_item_specifics(content)}

    def generate_item_specifics(self, content: BaseContent) -> Dict[str, str]:
        text = f"{content.title} {content.description}"
        specifics = {
            "Brand": self.extract_brand(self.clean_for_platform(content.title)) or "Unbranded",
            "Type": content.category or "General",
        }

        material = find_first(text, ITEM_MATERIALS)
        if material:
            specifics["Material"] = material.title()

        color = find_first(text, ITEM_COLORS)
        if color:
            specifics["Color"] = color.capitalize()

        features = [label for needle, label in FEATURE_FLAGS if needle in text.lower()]
        if features:
            specifics["Features"] = ", ".join(features)

        specifics["Condition"] = "New"
        return self.merge_specifications(specifics, content.specifications)
