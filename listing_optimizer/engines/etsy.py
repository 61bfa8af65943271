"""
Etsy Engine
Natural sentence-case titles, story-style sectioned descriptions
and exactly 13 multi-word tags.
"""
import re
from typing import Any, Dict, List, Sequence

from ..models import BaseContent, Specification
from ..services.keywords import dedupe
from .base import COLORS, PlatformEngine, find_first, first_sentence, format_spec_value, truncate_at_word

TAG_COUNT = 13
MAX_TAG_LENGTH = 20
PIPE_THRESHOLD = 120
OPENING_LIMIT = 160

STORY_MATERIALS = ("leather", "wood", "metal", "ceramic", "cotton", "silk", "wool")
TAG_MATERIALS = (*STORY_MATERIALS, "glass", "stone")
TAG_STYLES = ("boho", "modern", "rustic", "vintage", "minimalist")
ATTRIBUTE_STYLES = (*TAG_STYLES, "classic", "contemporary")
USE_CASE_TAGS = ("gift idea", "handmade", "unique gift")
FILLER_TAGS = (
    "home decor", "gift for her", "gift for him", "birthday gift", "custom made",
    "anniversary gift", "holiday gift", "keepsake", "artisan made", "one of a kind",
)

_SENTENCE_START = re.compile(r"\.\s+([a-z])")


def to_sentence_case(text: str) -> str:
    if not text:
        return text
    cased = text[0].upper() + text[1:].lower()
    return _SENTENCE_START.sub(lambda m: ". " + m.group(1).upper(), cased)


def two_word_phrases(text: str) -> List[str]:
    words = text.lower().split()
    return [
        f"{first} {second}" for first, second in zip(words, words[1:])
        if first != second and len(f"{first} {second}") <= MAX_TAG_LENGTH
    ]


class EtsyEngine(PlatformEngine):
    platform = "etsy"

    def optimize_title(self, title: str, keywords: Sequence[str]) -> str:
        optimized = to_sentence_case(self.clean_for_platform(title))
        if "|" not in optimized and len(optimized) < PIPE_THRESHOLD:
            optimized = re.sub(r"\s-\s", " | ", optimized)
        return truncate_at_word(optimized, self.rules.title_range.max)

    def optimize_description(
        self, description: str, keywords: Sequence[str], specifications: Sequence[Specification]
    ) -> str:
        sections = [self.opening_statement(description)]
        sections.append(f"✨ MATERIALS & CRAFTSMANSHIP:\n{self.materials_story(description)}")

        if specifications:
            lines = "\n".join(f"• {spec.name}: {format_spec_value(spec)}" for spec in specifications)
            sections.append(f"📏 DIMENSIONS & SPECIFICATIONS:\n{lines}")

        sections.extend([
            "🎨 CUSTOMIZATION:\nThis item can be personalized to make it uniquely yours. "
            "Please message me with your customization requests.",
            "🧼 CARE INSTRUCTIONS:\nHandle with care. Clean gently as needed. "
            "Store in a cool, dry place when not in use.",
            "📦 PRODUCTION & SHIPPING:\nEach item is made to order with care. "
            "Processing time: 3-5 business days. Shipping time varies by location.",
            "💝 ABOUT THIS ITEM:\nHandcrafted with attention to detail, this piece suits anyone "
            "who appreciates quality and uniqueness. Makes a thoughtful gift for any occasion.",
            "Please review shop policies for returns and exchanges. "
            "Feel free to message with any questions!",
        ])
        return self.format_description_for_mobile("\n\n".join(sections))

    def generate_tags(self, content: BaseContent) -> List[str]:
        """
        Build exactly 13 tags of at most 20 characters
        Args:
            content: Listing content
        Returns:
            Title phrases, category, materials, use cases and styles, topped up with fillers
        """
        title = self.clean_for_platform(content.title)
        text = f"{title} {content.description}".lower()

        candidates = two_word_phrases(title)[:5]
        if content.category:
            candidates.append(content.category.strip().lower())
        candidates.extend([m for m in TAG_MATERIALS if m in content.description.lower()][:2])
        candidates.extend(USE_CASE_TAGS)
        candidates.extend(style for style in TAG_STYLES if style in text)

        tags = [t for t in dedupe(candidates) if t and len(t) <= MAX_TAG_LENGTH][:TAG_COUNT]
        for filler in FILLER_TAGS:
            if len(tags) >= TAG_COUNT:
                break
            if filler not in tags:
                tags.append(filler)
        return tags

    def generate_attributes(self, content: BaseContent) -> Dict[str, Any]:
        text = f"{content.title} {content.description}"
        color = find_first(text, COLORS)
        style = find_first(text, ATTRIBUTE_STYLES)
        return {
            "attributes": {
                "primary_color": color.capitalize() if color else "Multi-color",
                "occasion": "Any Occasion",
                "recipient": "Anyone",
                "style": style.capitalize() if style else "Classic",
            }
        }

    @staticmethod
    def opening_statement(description: str) -> str:
        sentence = first_sentence(description)
        if len(sentence) > OPENING_LIMIT:
            return sentence[:OPENING_LIMIT - 3] + "..."
        return sentence + "."

    @staticmethod
    def materials_story(description: str) -> str:
        material = find_first(description, STORY_MATERIALS)
        if material:
            return (
                f"Crafted from high-quality {material} with careful attention to detail. "
                "Each piece is unique and made with love."
            )
        return "Made with carefully selected materials to ensure quality and durability."
