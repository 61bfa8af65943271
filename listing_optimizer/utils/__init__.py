"""
Utility modules for listing inputs
"""
from .sanitizers import sanitize_prompt_input, sanitize_html, decode_html_entities, strip_html_tags
from .normalisers import product_from_input, image_analysis_from_input, product_from_scraped

__all__ = [
    "sanitize_prompt_input",
    "sanitize_html",
    "decode_html_entities",
    "strip_html_tags",
    "product_from_input",
    "image_analysis_from_input",
    "product_from_scraped",
]
