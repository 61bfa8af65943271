"""
Text sanitization for scraped pages and user-supplied prompt input
"""
import html
import re
from typing import Iterable, Optional

from ..config import PROMPT_INJECTION_PHRASES


def sanitize_prompt_input(content: str, max_chars: int, phrases: Optional[Iterable[str]] = None) -> str:
    """
    Remove prompt-injection phrases and cap length
    Args:
        content: User-supplied text
        max_chars: Maximum characters kept
        phrases: Phrases to remove (defaults to PROMPT_INJECTION_PHRASES)
    Returns:
        Sanitized text
    """
    if not content:
        return content

    result = content
    for phrase in phrases if phrases is not None else PROMPT_INJECTION_PHRASES:
        # Allow any run of whitespace between the words of a phrase
        pattern = r"\s+".join(re.escape(w) for w in phrase.split())
        result = re.sub(pattern, "", result, flags=re.IGNORECASE)

    result = re.sub(r"\n{3,}", "\n\n", result)
    result = re.sub(r"[ \t]{2,}", " ", result)
    return result.strip()[:max_chars]


def sanitize_html(content: str) -> str:
    """
    Remove scripts, styles, and dangerous tags
    Args:
        content: HTML content to sanitize
    Returns:
        HTML without executable content
    """
    if not content:
        return content

    content = re.sub(r'<script[^>]*>.*?</script>', '', content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r'<style[^>]*>.*?</style>', '', content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r'<iframe[^>]*>.*?</iframe>', '', content, flags=re.IGNORECASE | re.DOTALL)
    content = re.sub(r'<noscript[^>]*>.*?</noscript>', '', content, flags=re.IGNORECASE | re.DOTALL)

    # Remove event handlers
    content = re.sub(r'\s+on\w+\s*=\s*["\'][^"\']*["\']', '', content, flags=re.IGNORECASE)

    return content.strip()


def decode_html_entities(content: str) -> str:
    """Decode named and numeric entities; &nbsp; becomes a plain space"""
    if not content:
        return content
    return html.unescape(content).replace("\u00a0", " ")


def clean_whitespace(content: str) -> str:
    if not content:
        return content
    return re.sub(r"\s+", " ", content.replace("\t", " ")).strip()


def strip_html_tags(content: str) -> str:
    """
    Remove all HTML tags, leaving only text content
    Args:
        content: HTML content
    Returns:
        Plain text with entities decoded and whitespace collapsed
    """
    if not content:
        return content

    text = re.sub(r"<[^>]+>", " ", sanitize_html(content))
    return clean_whitespace(decode_html_entities(text))
