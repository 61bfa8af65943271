"""
SEO Scoring Engine
Weighted five-factor score over final, platform-formatted content.
Every sub-score is a pure function of its inputs and clamped to 0-100.
"""
import re
from typing import Sequence

from ..models import OptimizedContent, SEOScore
from .platform_rules import get_optimal_title_range, normalize_platform

SCORE_WEIGHTS = {
    "keyword_relevance": 0.30,
    "title_optimization": 0.25,
    "description_quality": 0.20,
    "tag_effectiveness": 0.15,
    "mobile_optimization": 0.10,
}

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_BULLET_CHARS = re.compile(r"[•\-*]")
_DIGIT = re.compile(r"\d")


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def score_keyword_relevance(title: str, description: str, keywords: Sequence[str]) -> float:
    text = f"{title} {description}".lower()
    found = sum(1 for k in keywords if k.lower() in text)
    return _clamp(found / max(len(keywords), 1) * 100)


def score_title_optimization(title: str, platform: str) -> float:
    optimal = get_optimal_title_range(platform)
    score = 100
    if len(title) < optimal.min:
        score -= 20
    elif len(title) > optimal.max:
        score -= 30

    if not _DIGIT.search(title):
        score -= 10

    # eBay allows all-caps titles
    if title and title == title.upper() and normalize_platform(platform) != "ebay":
        score -= 15

    return _clamp(score)


def average_words_per_sentence(text: str) -> float:
    """Average words per sentence; 0 when text has no sentences"""
    sentences = [s for s in _SENTENCE_SPLIT.split(text or "") if s.strip()]
    if not sentences:
        return 0.0
    return len(text.split()) / len(sentences)


def score_description_quality(description: str) -> float:
    length = len(description)
    if length >= 800:
        score = 40
    elif length >= 400:
        score = 30
    elif length >= 200:
        score = 20
    else:
        score = 10

    if "\n" in description:
        score += 10
    if _BULLET_CHARS.search(description):
        score += 10
    if _DIGIT.search(description):
        score += 10

    avg = average_words_per_sentence(description)
    if 10 <= avg <= 20:
        score += 30
    elif 8 <= avg <= 25:
        score += 20
    else:
        score += 10

    return _clamp(score)


def score_tag_effectiveness(tags: Sequence[str]) -> float:
    count = len(tags)
    if count >= 7:
        score = 40
    elif count >= 5:
        score = 30
    elif count >= 3:
        score = 20
    else:
        score = 10

    avg_length = sum(len(t) for t in tags) / count if count else 0
    score += 30 if 5 <= avg_length <= 15 else 15

    multi_word = sum(1 for t in tags if " " in t or "-" in t)
    score += min(30, multi_word * 10)

    return _clamp(score)


def score_mobile_optimization(title: str, description: str) -> float:
    score = 100
    if len(title) > 80:
        score -= 20

    paragraphs = description.split("\n\n")
    if len(paragraphs) < 3:
        score -= 15

    score -= 10 * sum(1 for p in paragraphs if len(p) > 500)
    return _clamp(score)


def calculate_seo_score(content: OptimizedContent, platform: str) -> SEOScore:
    """
    Calculate SEO score for optimized content
    Args:
        content: Final content; the optimized title/description are what get published
        platform: Platform key for title range rules
    Returns:
        SEOScore with overall = round(0.30*kr + 0.25*to + 0.20*dq + 0.15*te + 0.10*mo)
    """
    title = content.optimized_title
    description = content.optimized_description

    scores = {
        "keyword_relevance": score_keyword_relevance(title, description, content.keywords),
        "title_optimization": score_title_optimization(title, platform),
        "description_quality": score_description_quality(description),
        "tag_effectiveness": score_tag_effectiveness(content.tags),
        "mobile_optimization": score_mobile_optimization(title, description),
    }
    scores = {name: int(round(value)) for name, value in scores.items()}
    overall = round(sum(scores[name] * weight for name, weight in SCORE_WEIGHTS.items()))

    return SEOScore(overall=int(_clamp(overall)), **scores)
