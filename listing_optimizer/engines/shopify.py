"""
Shopify Engine
SERP-friendly titles, markdown descriptions, attribute tags and store SEO metadata.
"""
import re
from typing import Any, Dict, List, Sequence

from ..models import BaseContent, Specification
from ..services.keywords import dedupe
from .base import PlatformEngine, first_sentence, format_spec_value, split_sentences, truncate_at_word

META_TITLE_LIMIT = 70
META_DESCRIPTION_LIMIT = 155
META_DESCRIPTION_PAD_BELOW = 120
URL_HANDLE_LIMIT = 50

TAG_COLORS = ("black", "white", "blue", "red", "green", "brown", "gray", "silver")
TAG_MATERIALS = ("cotton", "leather", "metal", "wood", "plastic", "glass")
TAG_SIZES = ("small", "medium", "large", "xl", "xxl")
FEATURE_TAGS = ("waterproof", "wireless", "portable", "eco-friendly")
USE_CASE_TAGS = ("gift-idea", "everyday-use", "practical")


def to_title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def slugify(text: str, limit: int = URL_HANDLE_LIMIT) -> str:
    slug = re.sub(r"[^a-z0-9\s-]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug.strip())
    slug = re.sub(r"-+", "-", slug)
    return slug[:limit].strip("-")


def clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit - 3] + "..."


class ShopifyEngine(PlatformEngine):
    platform = "shopify"

    def optimize_title(self, title: str, keywords: Sequence[str]) -> str:
        max_length = self.rules.title_range.max
        optimized = truncate_at_word(to_title_case(self.clean_for_platform(title)), max_length)

        allowed = self.allowed_keywords(keywords[:1])
        if allowed and allowed[0].lower() not in optimized.lower():
            if len(optimized) + len(allowed[0]) + 3 <= max_length:
                optimized = f"{allowed[0]} - {optimized}"

        return optimized

    def optimize_description(
        self, description: str, keywords: Sequence[str], specifications: Sequence[Specification]
    ) -> str:
        sections = [self.opening_paragraph(description, keywords)]

        features = "\n".join(f"• {feature}" for feature in split_sentences(description, 20)[:5])
        sections.append(f"**Key Features:**\n\n{features}".rstrip())

        if specifications:
            lines = "\n".join(f"• **{spec.name}:** {format_spec_value(spec)}" for spec in specifications)
            sections.append(f"**Specifications:**\n\n{lines}")

        sections.extend([
            "**Use It For:**\n\n• Everyday use and special occasions\n• Home, office and travel\n"
            "• A thoughtful gift",
            "**Care Instructions:**\n\nEasy to clean and maintain. "
            "Follow the included care guidelines for lasting results.",
            "**Why Choose Us:**\n\nWe are committed to high-quality products and attentive "
            "customer service. Your satisfaction is our priority.",
        ])
        return self.format_description_for_mobile("\n\n".join(sections))

    def generate_tags(self, content: BaseContent) -> List[str]:
        text = f"{content.title} {content.description}".lower()
        tags = []
        if content.category:
            tags.append(content.category.strip().lower())
        tags.extend(f"color-{color}" for color in TAG_COLORS if color in text)
        tags.extend(f"material-{material}" for material in TAG_MATERIALS if material in text)
        tags.extend(f"size-{size}" for size in TAG_SIZES if size in text)
        tags.extend(feature for feature in FEATURE_TAGS if feature in text)
        tags.extend(USE_CASE_TAGS)
        return list(dedupe(tags))

    def generate_attributes(self, content: BaseContent) -> Dict[str, Any]:
        title = self.clean_for_platform(content.title)
        return {
            "meta_title": clip(title, META_TITLE_LIMIT),
            "meta_description": self.meta_description(content.description),
            "url_handle": slugify(title),
            "product_type": content.category or "General",
            "collections": self.suggest_collections(content),
        }

    def opening_paragraph(self, description: str, keywords: Sequence[str]) -> str:
        opening = first_sentence(description) + "."
        allowed = self.allowed_keywords(keywords[:1])
        if allowed and allowed[0].lower() not in opening.lower():
            opening += f" This {allowed[0]} is designed for dependable everyday performance."
        return opening

    @staticmethod
    def meta_description(description: str) -> str:
        meta = first_sentence(description)
        if len(meta) < META_DESCRIPTION_PAD_BELOW:
            meta = f"{meta}. Shop now for fast shipping and friendly service." if meta else (
                "Shop now for fast shipping and friendly service."
            )
        return clip(meta, META_DESCRIPTION_LIMIT)

    @staticmethod
    def suggest_collections(content: BaseContent) -> List[str]:
        text = f"{content.title} {content.description}".lower()
        collections = []
        if content.category:
            collections.append(content.category)
        if "new" in text:
            collections.append("New Arrivals")
        if "sale" in text or "discount" in text:
            collections.append("Sale")
        if "gift" in text:
            collections.append("Gift Ideas")
        return collections
