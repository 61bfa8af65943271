"""
Response Validator
Checks and sanitizes a generated listing before post-processing
"""
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from ..config import GENERATOR_PROHIBITED_WORDS, REQUIRED_LISTING_FIELDS
from ..engines.base import truncate_at_word
from ..models import GeneratedListing
from .keywords import dedupe
from .platform_rules import get_rules
from .prompt_builder import PLATFORM_PROMPT_CONFIG

logger = logging.getLogger(__name__)

MIN_BULLET_LENGTH = 20
MAX_BULLET_LENGTH = 500

_TITLE_ENTITY = re.compile(r"&[a-z]+;|&#x?[0-9a-f]+;", re.IGNORECASE)
_TITLE_SPECIAL = re.compile(r"[<>{}\[\]\\]")
_URL = re.compile(r"https?://\S+|www\.\S+", re.IGNORECASE)
_EMAIL = re.compile(r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}", re.IGNORECASE)
_PHONE = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")


class ValidationOutcome(BaseModel):
    is_valid: bool
    errors: List[str] = []
    warnings: List[str] = []
    fields: List[str] = []
    listing: Optional[GeneratedListing] = None


def validate_title(title: Any, title_max: int, title_min: int = 0) -> Tuple[str, List[str], List[str]]:
    errors, warnings = [], []
    if not isinstance(title, str) or not title.strip():
        return "", ["Title is empty"], warnings

    sanitized = title.strip()
    if _TITLE_ENTITY.search(sanitized):
        warnings.append("Title contains HTML entities")
        sanitized = _TITLE_ENTITY.sub("", sanitized)
    if _TITLE_SPECIAL.search(sanitized):
        warnings.append("Title contains special characters")
        sanitized = _TITLE_SPECIAL.sub("", sanitized)
    sanitized = re.sub(r"\s+", " ", sanitized).strip()

    if len(sanitized) > title_max:
        warnings.append(f"Title truncated to {title_max} characters (was {len(sanitized)})")
        sanitized = truncate_at_word(sanitized, title_max)
    elif len(sanitized) < title_min:
        warnings.append(
            f"Title is below recommended minimum of {title_min} characters (current: {len(sanitized)})"
        )

    return sanitized, errors, warnings


def validate_bullets(bullets: Any) -> Tuple[List[str], List[str], List[str]]:
    errors, warnings, sanitized = [], [], []
    if not isinstance(bullets, list):
        return sanitized, ["Bullets must be a list"], warnings

    for index, bullet in enumerate(bullets, start=1):
        if not isinstance(bullet, str):
            errors.append(f"Bullet {index} is not a string")
            continue
        trimmed = bullet.strip()
        if not trimmed:
            continue
        if len(trimmed) < MIN_BULLET_LENGTH:
            warnings.append(f"Bullet {index} is too short ({len(trimmed)} chars)")
        elif len(trimmed) > MAX_BULLET_LENGTH:
            warnings.append(f"Bullet {index} is too long ({len(trimmed)} chars)")
        sanitized.append(trimmed)

    return sanitized, errors, warnings


def validate_description(description: Any) -> Tuple[str, List[str], List[str]]:
    errors, warnings = [], []
    if not isinstance(description, str) or not description.strip():
        return "", ["Description is empty"], warnings

    sanitized = description.strip()
    for pattern, label in ((_URL, "URLs"), (_EMAIL, "email addresses"), (_PHONE, "phone numbers")):
        if pattern.search(sanitized):
            warnings.append(f"Description contained {label}; removed")
            sanitized = pattern.sub("", sanitized)

    sanitized = re.sub(r"[ \t]{2,}", " ", sanitized).strip()
    return sanitized, errors, warnings


def validate_keywords(keywords: Any, keywords_max: int) -> Tuple[List[str], List[str], List[str]]:
    errors, warnings = [], []
    if not isinstance(keywords, list):
        return [], ["Keywords must be a list"], warnings

    cleaned = []
    for keyword in keywords:
        if not isinstance(keyword, str):
            warnings.append(f"Keyword {keyword!r} is not a string")
            continue
        trimmed = keyword.strip().lower()
        if len(trimmed) < 2:
            continue
        cleaned.append(trimmed)

    unique = list(dedupe(cleaned))
    if len(unique) > keywords_max:
        warnings.append(f"Too many keywords: {len(unique)} (maximum: {keywords_max})")
        unique = unique[:keywords_max]

    return unique, errors, warnings


def find_prohibited_words(text: str) -> List[str]:
    return [
        word for word in GENERATOR_PROHIBITED_WORDS
        if re.search(rf"(?<!\w){re.escape(word)}(?!\w)", text, re.IGNORECASE)
    ]


def validate_response(raw: Dict[str, Any], platform: str) -> ValidationOutcome:
    """
    Validate and sanitize a generated listing
    Args:
        raw: Parsed generator output
        platform: Platform key (already validated)
    Returns:
        ValidationOutcome; listing is set only when there are no errors
    """
    cfg = PLATFORM_PROMPT_CONFIG[platform]
    missing = [field for field in REQUIRED_LISTING_FIELDS if field not in raw]
    if missing:
        return ValidationOutcome(
            is_valid=False,
            errors=[f"Missing field: {field}" for field in missing],
            fields=missing,
        )

    title, title_errors, title_warnings = validate_title(
        raw["title"], cfg["title_max"], get_rules(platform).title_range.min
    )
    bullets, bullet_errors, bullet_warnings = validate_bullets(raw["bullets"])
    description, description_errors, description_warnings = validate_description(raw["description"])
    keywords, keyword_errors, keyword_warnings = validate_keywords(raw["keywords"], cfg["keywords_max"])

    field_errors = {
        "title": title_errors,
        "bullets": bullet_errors,
        "description": description_errors,
        "keywords": keyword_errors,
    }
    errors = [error for group in field_errors.values() for error in group]
    fields = [name for name, group in field_errors.items() if group]
    warnings = [*title_warnings, *bullet_warnings, *description_warnings, *keyword_warnings]

    all_text = " ".join([title, description, *bullets])
    warnings.extend(f'Contains prohibited word: "{word}"' for word in find_prohibited_words(all_text))

    if errors:
        logger.warning(f"⚠️ Generated listing failed validation: {errors}")
        return ValidationOutcome(is_valid=False, errors=errors, warnings=warnings, fields=fields)

    notes = raw["platform_notes"]
    listing = GeneratedListing(
        title=title,
        bullets=tuple(bullets),
        description=description,
        keywords=tuple(keywords),
        platform_notes=notes if isinstance(notes, str) else "",
    )
    return ValidationOutcome(is_valid=True, warnings=warnings, listing=listing)


def coerce_listing(raw: Dict[str, Any]) -> Tuple[GeneratedListing, List[str]]:
    """
    Build a listing from raw output without validation
    Returns:
        (listing, warnings) with one warning per defaulted field
    """
    warnings = []

    def text_field(name: str) -> str:
        value = raw.get(name)
        if isinstance(value, str):
            return value
        warnings.append(f"Field '{name}' missing from generated listing; defaulted")
        return ""

    def list_field(name: str) -> Tuple[str, ...]:
        value = raw.get(name)
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        warnings.append(f"Field '{name}' missing from generated listing; defaulted")
        return ()

    listing = GeneratedListing(
        title=text_field("title"),
        bullets=list_field("bullets"),
        description=text_field("description"),
        keywords=list_field("keywords"),
        platform_notes=text_field("platform_notes"),
    )
    return listing, warnings
