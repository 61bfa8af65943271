"""
Quick SEO pre-scan for scraped or unoptimized content.
Needs no keyword research; scores against the hard platform rules.
"""
import math
from collections import Counter
from typing import Sequence

from .platform_rules import get_rules
from .seo_scorer import _SENTENCE_SPLIT


def dominant_keyword_density(title: str, description: str) -> float:
    """Share (percent) of the most frequent word among words longer than 3 chars"""
    words = [w for w in f"{title} {description}".lower().split() if len(w) > 3]
    if not words:
        return 0.0
    return Counter(words).most_common(1)[0][1] / len(words) * 100


def readability_factor(text: str) -> float:
    sentences = [s for s in _SENTENCE_SPLIT.split(text or "") if s.strip()]
    words = (text or "").split()
    if not sentences or not words:
        return 0.0

    avg = len(words) / len(sentences)
    if 15 <= avg <= 20:
        return 1.0
    if 10 <= avg < 15:
        return 0.8
    if 20 < avg <= 25:
        return 0.7
    return 0.5


def quick_seo_score(title: str, description: str, tags: Sequence[str], platform: str) -> int:
    """
    Simplified 0-100 score
    Args:
        title: Listing title
        description: Listing description
        tags: Listing tags
        platform: Platform key
    Returns:
        keyword density (25) + title fit (20) + description completeness (20)
        + readability (15) + platform compliance (20), capped at 100
    """
    rules = get_rules(platform)
    score = 0

    density = dominant_keyword_density(title, description)
    if 2 <= density <= 4:
        score += 25
    elif 1 <= density < 2 or 4 < density <= 6:
        score += 15
    else:
        score += 5

    title_length = len(title)
    if rules.title_range.min <= title_length <= rules.title_range.max:
        score += 20
    elif abs(title_length - rules.title_range.min) <= 20:
        score += 10
    else:
        score += 5

    description_length = len(description)
    if description_length >= rules.min_description:
        score += 20
    else:
        score += math.floor(description_length / rules.min_description * 20)

    score += math.floor(readability_factor(description) * 15)

    if 0 < len(tags) <= rules.max_tags:
        score += 10
    elif tags:
        score += 5
    score += 10 if title_length <= rules.title_range.max else 5

    return min(score, 100)
