"""
Amazon Engine
A9/A10 oriented listing: Title Case titles, HTML descriptions,
five CAPS bullet points and packed backend search terms.
"""
import re
from typing import Any, Dict, List, Sequence

from ..models import BaseContent, KeywordSet, Specification
from ..services.keywords import (
    STOP_WORDS,
    dedupe,
    generate_backend_search_terms,
    generate_synonyms,
)
from .base import MATERIALS, PlatformEngine, find_first, format_spec_value, truncate_at_word

SMALL_WORDS = frozenset({
    "a", "an", "and", "as", "at", "by", "for", "in", "of", "on", "or", "the", "to", "with",
})
KEYWORD_APPEND_THRESHOLD = 180
EXPANSION_THRESHOLD = 2000
KEYWORD_SENTENCE = " This {keyword} is designed for optimal performance."

_BULLET_LINE = re.compile(r"•[ \t]*([^\n<]+)")
_LIST_RUN = re.compile(r"((?:<li>.*?</li>\n?)+)")
_SECTION_HEADER = re.compile(r"\b([A-Z][A-Z ]{2,}:)")


def to_title_case(text: str) -> str:
    words = []
    for index, word in enumerate(text.split(" ")):
        lower = word.lower()
        if index > 0 and lower in SMALL_WORDS:
            words.append(lower)
        else:
            words.append(word[:1].upper() + word[1:].lower())
    return " ".join(words)


def significant_title_words(title: str) -> List[str]:
    return [w for w in title.lower().split() if len(w) > 3 and w not in STOP_WORDS]


class AmazonEngine(PlatformEngine):
    platform = "amazon"

    def optimize_title(self, title: str, keywords: Sequence[str]) -> str:
        max_length = self.rules.title_range.max
        optimized = to_title_case(self.clean_for_platform(title))
        optimized = truncate_at_word(optimized, max_length)

        if keywords and len(optimized) < KEYWORD_APPEND_THRESHOLD:
            missing = [
                k for k in self.allowed_keywords(keywords) if k.lower() not in optimized.lower()
            ][:2]
            if missing:
                addition = f" - {' '.join(missing)}"
                if len(optimized) + len(addition) <= max_length:
                    optimized += addition

        return optimized

    def optimize_description(
        self, description: str, keywords: Sequence[str], specifications: Sequence[Specification]
    ) -> str:
        optimized = description
        if len(optimized) < EXPANSION_THRESHOLD:
            optimized = self.expand_description(optimized, specifications)

        optimized = self.format_description_html(optimized)

        for keyword in self.allowed_keywords(keywords):
            if keyword.lower() not in optimized.lower():
                optimized += KEYWORD_SENTENCE.format(keyword=keyword)

        return optimized

    def generate_tags(self, content: BaseContent) -> List[str]:
        title = self.clean_for_platform(content.title)
        tags = significant_title_words(title)[:5]
        tags.extend(content.keywords[:5])
        if content.category:
            tags.append(re.sub(r"\s+", "-", content.category.strip().lower()))
        return list(dedupe(tags))[:self.rules.max_tags]

    def generate_bullet_points(self, content: BaseContent) -> List[str]:
        title = self.clean_for_platform(content.title)
        text = f"{title} {content.description}"

        material = find_first(text, MATERIALS)
        material_text = (
            f"{material.capitalize()} construction" if material else "Durable materials"
        )

        if content.specifications:
            specs = ", ".join(
                f"{spec.name}: {format_spec_value(spec)}" for spec in content.specifications[:3]
            )
        else:
            specs = "Made with careful attention to every detail"

        return [
            f"KEY FEATURE: {' '.join(title.split()[:5])} designed for dependable everyday use",
            f"QUALITY MATERIALS: {material_text} for durability and long-lasting performance",
            "VERSATILE USE: Designed for practical everyday use with attention to detail",
            f"SPECIFICATIONS: {specs}",
            "CUSTOMER SUPPORT: Backed by quality checks and responsive customer support",
        ]

    def generate_attributes(self, content: BaseContent) -> Dict[str, Any]:
        return {"backend_search_terms": self.generate_backend_search_terms(content)}

    def generate_backend_search_terms(self, content: BaseContent) -> List[str]:
        """Title words, keywords and synonyms packed into 249 characters"""
        title_words = significant_title_words(self.clean_for_platform(content.title))
        keyword_set = KeywordSet(
            primary=dedupe(title_words),
            secondary=dedupe(k.lower() for k in content.keywords),
            synonyms=dedupe(generate_synonyms(title_words)),
        )
        return generate_backend_search_terms(keyword_set, self.platform)

    @staticmethod
    def expand_description(description: str, specifications: Sequence[Specification]) -> str:
        expanded = description

        if specifications and "Specifications" not in description:
            expanded += "\n\nSPECIFICATIONS:\n"
            expanded += "".join(f"{spec.name}: {format_spec_value(spec)}\n" for spec in specifications)

        if "Use Cases" not in description and "Applications" not in description:
            expanded += (
                "\n\nUSE CASES:\n"
                "• Suitable for everyday use and special occasions\n"
                "• Works at home, in the office and while traveling\n"
                "• A thoughtful gift for friends and family\n"
            )

        if "Care" not in description and "Maintenance" not in description:
            expanded += (
                "\n\nCARE INSTRUCTIONS:\n"
                "Easy to clean and maintain for long-lasting use. "
                "Follow the included care guidelines.\n"
            )

        return expanded

    @staticmethod
    def format_description_html(description: str) -> str:
        formatted = "\n".join(
            f"<p>{paragraph.strip()}</p>" for paragraph in description.split("\n\n")
        )
        formatted = _BULLET_LINE.sub(r"<li>\1</li>", formatted)
        formatted = _LIST_RUN.sub(r"<ul>\1</ul>", formatted)
        return _SECTION_HEADER.sub(r"<b>\1</b>", formatted)
