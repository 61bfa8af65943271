"""
Base Platform Engine
Shared optimization steps for every marketplace strategy.
Engines hold no request state; every method is a pure transformation.
"""
import html
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Sequence

from ..models import (
    AlgorithmFactors,
    BaseContent,
    ComplianceResult,
    FormattedListing,
    ListingFormatting,
    PlatformOptimizedContent,
    PlatformRules,
    Specification,
)
from ..services import compliance
from ..services.platform_rules import get_algorithm_factors, get_rules

MOBILE_PARAGRAPH_LIMIT = 200

COLORS = ("black", "white", "blue", "red", "green", "brown", "gray", "silver", "gold", "pink")
MATERIALS = ("stainless steel", "leather", "silicone", "ceramic", "plastic", "metal", "glass", "wood", "cotton")

_ENTITY = re.compile(r"&[a-z]+;|&#x?[0-9a-f]+;", re.IGNORECASE)
_DOMAIN_SUFFIX = re.compile(
    r"[\s\-–—|:]*\b[\w-]+\.(?:com|net|org|co\.uk|co|uk|pk|in|us)$", re.IGNORECASE
)
_SENTENCE_END = re.compile(r"[.!?]+")


def truncate_at_word(text: str, limit: int) -> str:
    """Cut text to limit characters without splitting a word"""
    if len(text) <= limit:
        return text
    cut = text[:limit]
    if text[limit] == " ":
        return cut.rstrip()
    space = cut.rfind(" ")
    if space <= 0:
        return cut
    return cut[:space].rstrip()


def split_sentences(text: str, min_length: int = 0) -> List[str]:
    return [s.strip() for s in _SENTENCE_END.split(text or "") if len(s.strip()) > min_length]


def first_sentence(text: str) -> str:
    sentences = split_sentences(text)
    return sentences[0] if sentences else ""


def find_first(text: str, candidates: Iterable[str]) -> str:
    """First candidate contained in text, or empty string"""
    lower = text.lower()
    for candidate in candidates:
        if candidate in lower:
            return candidate
    return ""


def format_spec_value(spec: Specification) -> str:
    return f"{spec.value} {spec.unit}" if spec.unit else spec.value


class PlatformEngine(ABC):
    """Strategy for one marketplace"""

    platform: str = ""

    @property
    def rules(self) -> PlatformRules:
        return get_rules(self.platform)

    def get_algorithm_factors(self) -> AlgorithmFactors:
        return get_algorithm_factors(self.platform)

    # ------------------------------------------------------------------
    # Platform-specific steps
    # ------------------------------------------------------------------

    @abstractmethod
    def optimize_title(self, title: str, keywords: Sequence[str]) -> str:
        ...

    @abstractmethod
    def optimize_description(
        self, description: str, keywords: Sequence[str], specifications: Sequence[Specification]
    ) -> str:
        ...

    @abstractmethod
    def generate_tags(self, content: BaseContent) -> List[str]:
        ...

    def generate_bullet_points(self, content: BaseContent) -> List[str]:
        return []

    def generate_attributes(self, content: BaseContent) -> Dict[str, Any]:
        return {}

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def optimize_for_platform(self, content: BaseContent) -> PlatformOptimizedContent:
        """
        Apply every platform step to the content
        Args:
            content: Title, description, keywords, category and specs
        Returns:
            PlatformOptimizedContent ready for compliance checks
        """
        description = self.remove_prohibited_words(content.description, self.rules.prohibited_words)
        title = self.optimize_title(content.title, content.keywords)
        attributes = self.generate_attributes(content)
        attributes["mobile_title"] = self.optimize_title_for_mobile(title)
        return PlatformOptimizedContent(
            platform=self.platform,
            title=title,
            description=self.optimize_description(description, content.keywords, content.specifications),
            tags=tuple(self.generate_tags(content)),
            bullet_points=tuple(self.generate_bullet_points(content)),
            attributes=attributes,
        )

    def validate_platform_compliance(self, content: PlatformOptimizedContent) -> ComplianceResult:
        rules = self.rules
        violations = [
            *compliance.validate_title_length(content.title, rules.title_range.max),
            *compliance.validate_description_length(content.description, rules.min_description),
            *compliance.check_prohibited_words(
                f"{content.title} {content.description}", rules.prohibited_words
            ),
            *compliance.validate_tag_count(content.tags, rules.max_tags),
            *compliance.check_content_policy(content.title, content.description),
        ]
        return compliance.build_compliance_result(violations)

    def format_for_platform(self, content: BaseContent) -> FormattedListing:
        platform_content = self.optimize_for_platform(content)
        return FormattedListing(
            platform=self.platform,
            content=platform_content,
            formatting=ListingFormatting(
                title_length=len(platform_content.title),
                description_length=len(platform_content.description),
                tag_count=len(platform_content.tags),
                bullet_point_count=len(platform_content.bullet_points),
            ),
            compliance=self.validate_platform_compliance(platform_content),
        )

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    @staticmethod
    def optimize_title_for_mobile(title: str, front_load_length: int = 60) -> str:
        """
        Pack whole words into the mobile front-load limit
        Args:
            title: Full title
            front_load_length: Characters visible on mobile
        Returns:
            Whole-word prefix; ellipsis cut only when no word fits
        """
        if len(title) <= front_load_length:
            return title

        packed = ""
        for word in title.split():
            candidate = f"{packed} {word}" if packed else word
            if len(candidate) > front_load_length:
                break
            packed = candidate

        if not packed:
            return title[:max(front_load_length - 3, 0)] + "..."
        return packed

    @staticmethod
    def format_description_for_mobile(description: str) -> str:
        """Split long paragraphs into sentence chunks of at most 200 characters"""
        chunks = []
        for paragraph in description.split("\n\n"):
            if len(paragraph) <= MOBILE_PARAGRAPH_LIMIT:
                chunks.append(paragraph)
                continue

            current = ""
            for sentence in paragraph.split(". "):
                candidate = f"{current}. {sentence}" if current else sentence
                if current and len(candidate) >= MOBILE_PARAGRAPH_LIMIT:
                    chunks.append(current if current.endswith(".") else current + ".")
                    current = sentence
                else:
                    current = candidate
            if current:
                chunks.append(current)

        return "\n\n".join(chunks)

    @staticmethod
    def extract_key_specifications(specifications: Iterable[Specification]) -> Dict[str, str]:
        return {
            re.sub(r"\s+", "_", spec.name.strip().lower()): format_spec_value(spec)
            for spec in specifications
        }

    @classmethod
    def merge_specifications(
        cls, attributes: Dict[str, str], specifications: Iterable[Specification]
    ) -> Dict[str, str]:
        """Add seller specifications under display names; detected keys win"""
        taken = {key.lower() for key in attributes}
        for key, value in cls.extract_key_specifications(specifications).items():
            name = key.replace("_", " ").title()
            if name.lower() not in taken:
                attributes[name] = value
                taken.add(name.lower())
        return attributes

    @staticmethod
    def clean_title(title: str) -> str:
        """Decode entities, drop store domains, collapse whitespace and stray dashes"""
        cleaned = _ENTITY.sub("", html.unescape(title or ""))
        cleaned = _DOMAIN_SUFFIX.sub("", cleaned)
        cleaned = re.sub(r"\s+", " ", cleaned).strip()
        return cleaned.strip("-–— ").strip()

    @staticmethod
    def remove_prohibited_words(text: str, prohibited_words: Iterable[str]) -> str:
        cleaned = text
        for word in prohibited_words:
            cleaned = re.sub(rf"(?<!\w){re.escape(word)}(?!\w)", "", cleaned, flags=re.IGNORECASE)
        cleaned = re.sub(r"[ \t]{2,}", " ", cleaned)
        cleaned = re.sub(r" +([.,;:!?])", r"\1", cleaned)
        return "\n".join(line.strip() for line in cleaned.split("\n")).strip()

    def allowed_keywords(self, keywords: Iterable[str]) -> List[str]:
        """Keywords that contain none of the platform's prohibited words"""
        prohibited = [w.lower() for w in self.rules.prohibited_words]
        return [k for k in keywords if k and not any(w in k.lower() for w in prohibited)]

    def clean_for_platform(self, title: str) -> str:
        return self.remove_prohibited_words(self.clean_title(title), self.rules.prohibited_words)

    @staticmethod
    def extract_brand(title: str) -> str:
        """Leading capitalized word, which is usually the brand"""
        words = title.split()
        if words and len(words[0]) > 2 and words[0][0].isupper():
            return words[0]
        return ""
