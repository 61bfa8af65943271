"""
URL Scraper Service
httpx fetch with regex extraction for quick analysis and
BeautifulSoup per-marketplace extraction for deep analysis
"""
import logging
import re
from typing import Callable, Dict, List, Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup

from ..config import Settings, get_settings
from ..errors import ScrapeError
from ..models import ScrapedListing
from ..utils.sanitizers import clean_whitespace, decode_html_entities, strip_html_tags

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description found"
MAX_BULLETS = 5
MAX_IMAGES = 6

HOST_PLATFORMS = (
    ("amazon.", "amazon"),
    ("ebay.", "ebay"),
    ("etsy.", "etsy"),
    ("walmart.", "walmart"),
)

TITLE_PATTERNS = [
    re.compile(r'<title[^>]*>([^<]+)</title>', re.IGNORECASE),
    re.compile(r'<meta[^>]*property="og:title"[^>]*content="([^"]+)"', re.IGNORECASE),
    re.compile(r'<meta[^>]*name="title"[^>]*content="([^"]+)"', re.IGNORECASE),
    re.compile(r'<h1[^>]*id="title"[^>]*>([^<]+)</h1>', re.IGNORECASE),
    re.compile(r'<h1[^>]*class="[^"]*product[^"]*"[^>]*>([^<]+)</h1>', re.IGNORECASE),
]

DESCRIPTION_PATTERNS = [
    re.compile(r'<meta[^>]*property="og:description"[^>]*content="([^"]+)"', re.IGNORECASE),
    re.compile(r'<meta[^>]*name="description"[^>]*content="([^"]+)"', re.IGNORECASE),
    re.compile(r'<div[^>]*id="productDescription"[^>]*>([^<]+)</div>', re.IGNORECASE),
    re.compile(r'<div[^>]*class="[^"]*description[^"]*"[^>]*>([^<]+)</div>', re.IGNORECASE),
]

PRICE_PATTERNS = [
    re.compile(r'itemprop="price"[^>]*content="([0-9.,]+)"', re.IGNORECASE),
    re.compile(r'<span[^>]*class="a-price-whole"[^>]*>([0-9,]+)', re.IGNORECASE),
    re.compile(r'[$£€]\s?([0-9][0-9,]*(?:\.[0-9]{2})?)'),
]

IMAGE_PATTERNS = [
    re.compile(r'<meta[^>]*property="og:image"[^>]*content="([^"]+)"', re.IGNORECASE),
]

_HIRES_IMAGE = re.compile(r'"hiRes":"([^"]+)"')
_NUMBER = re.compile(r"[0-9][0-9,]*(?:\.[0-9]+)?")


# =============================================================================
# FETCHING
# =============================================================================

def detect_platform(url: str) -> Optional[str]:
    """Marketplace key from the URL host, or None for other stores"""
    host = urlparse(url).netloc.lower()
    for needle, platform in HOST_PLATFORMS:
        if needle in host:
            return platform
    return None


def validate_url(url: str) -> str:
    url = (url or "").strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ScrapeError("A valid http(s) URL is required", details={"url": url})
    return url


async def fetch_html(url: str, settings: Optional[Settings] = None) -> str:
    """
    Fetch a product page
    Args:
        url: Product page URL
        settings: Timeout and user agent source
    Returns:
        Page HTML
    Raises:
        ScrapeError: 400 for invalid URLs, 502 when the page cannot be fetched
    """
    settings = settings or get_settings()
    url = validate_url(url)
    logger.info(f"🌐 Fetching URL: {url}")

    try:
        async with httpx.AsyncClient(
            timeout=settings.url_scrape_timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.url_user_agent},
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
    except httpx.HTTPStatusError as e:
        logger.warning(f"Fetch failed with HTTP {e.response.status_code}: {url}")
        raise ScrapeError(
            "Failed to fetch product page. Please check the URL and try again.",
            details={"status": e.response.status_code},
            status_code=502,
        ) from e
    except httpx.HTTPError as e:
        logger.warning(f"Fetch failed: {e}")
        raise ScrapeError(
            "Failed to fetch product page. Please check the URL and try again.",
            status_code=502,
        ) from e


# =============================================================================
# REGEX EXTRACTION
# =============================================================================

def _first_match(html: str, patterns: List[re.Pattern]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(html)
        if match and match.group(1).strip():
            return clean_whitespace(decode_html_entities(match.group(1)))
    return None


def extract_title(html: str) -> Optional[str]:
    return _first_match(html, TITLE_PATTERNS)


def extract_description(html: str) -> Optional[str]:
    return _first_match(html, DESCRIPTION_PATTERNS)


def extract_price(html: str) -> Optional[str]:
    return _first_match(html, PRICE_PATTERNS)


def extract_main_image(html: str) -> Optional[str]:
    return _first_match(html, IMAGE_PATTERNS)


def extract_listing(html: str, url: str) -> ScrapedListing:
    """
    Extract a listing with regex patterns
    Args:
        html: Page HTML
        url: Source URL
    Returns:
        ScrapedListing with title, description, price and main image
    Raises:
        ScrapeError: If no title can be found
    """
    title = extract_title(html)
    if not title:
        raise ScrapeError("Could not extract product title from URL. Please try manual input.")

    image = extract_main_image(html)
    return ScrapedListing(
        url=url,
        title=title,
        description=extract_description(html) or NO_DESCRIPTION,
        price=extract_price(html),
        images=(image,) if image else (),
        platform=detect_platform(url),
    )


# =============================================================================
# DEEP EXTRACTION
# =============================================================================

def _text(soup: BeautifulSoup, selectors: List[str]) -> str:
    for selector in selectors:
        elem = soup.select_one(selector)
        if elem:
            text = clean_whitespace(elem.get_text(" ", strip=True))
            if text:
                return text
    return ""


def _meta(soup: BeautifulSoup, **attrs) -> str:
    meta = soup.find("meta", attrs=attrs)
    if meta and meta.get("content"):
        return clean_whitespace(meta["content"])
    return ""


def _number(text: str) -> Optional[str]:
    match = _NUMBER.search(text or "")
    return match.group(0).replace(",", "") if match else None


def _table_specs(rows) -> Dict[str, str]:
    specs = {}
    for row in rows:
        cells = row.select("th, td")
        if len(cells) >= 2:
            key = clean_whitespace(cells[0].get_text(" ", strip=True))
            value = clean_whitespace(cells[1].get_text(" ", strip=True))
            if key and value:
                specs[key] = value
    return specs


def extract_amazon(soup: BeautifulSoup, html: str, url: str) -> ScrapedListing:
    bullets = [
        clean_whitespace(item.get_text(" ", strip=True))
        for item in soup.select("#feature-bullets span.a-list-item, span.a-list-item")
    ]
    brand = _text(soup, ["#bylineInfo"])
    brand = re.sub(r"^(Visit the|Brand:)\s*|\s*Store$", "", brand).strip()

    return ScrapedListing(
        url=url,
        title=_text(soup, ["#productTitle"]),
        description=_text(soup, ["#productDescription"]),
        price=_number(_text(soup, [".a-price-whole"])),
        bullets=tuple(list(dict.fromkeys(b for b in bullets if len(b) > 20))[:MAX_BULLETS]),
        images=tuple(list(dict.fromkeys(_HIRES_IMAGE.findall(html)))[:MAX_IMAGES]),
        specifications=_table_specs(soup.select("table.prodDetTable tr, #productDetails_techSpec_section_1 tr")),
        brand=brand or None,
        rating=_number(_text(soup, ["#acrPopover span.a-icon-alt", "span.a-icon-alt"])),
        review_count=_number(_text(soup, ["#acrCustomerReviewText"])),
        platform="amazon",
    )


def extract_ebay(soup: BeautifulSoup, html: str, url: str) -> ScrapedListing:
    specs = {}
    for pair in soup.select(".ux-labels-values"):
        label = _text(pair, [".ux-labels-values__labels"]).rstrip(":")
        value = _text(pair, [".ux-labels-values__values"])
        if label and value:
            specs[label] = value

    price_match = re.search(r"US \$\s?([0-9][0-9,]*(?:\.[0-9]+)?)", soup.get_text(" "))
    images = [img.get("src") for img in soup.select("img.ux-image-carousel-item, .ux-image-carousel-item img")]

    return ScrapedListing(
        url=url,
        title=_text(soup, [".x-item-title__mainTitle", "h1"]),
        description=_text(soup, [".x-item-description", "#viTabs_0_is"]),
        price=price_match.group(1).replace(",", "") if price_match else None,
        images=tuple(list(dict.fromkeys(i for i in images if i))[:MAX_IMAGES]),
        specifications=specs,
        platform="ebay",
    )


def extract_etsy(soup: BeautifulSoup, html: str, url: str) -> ScrapedListing:
    images = []
    for img in soup.find_all("img"):
        src = img.get("data-src") or img.get("src") or ""
        if "il_fullxfull" in src:
            images.append(src)

    return ScrapedListing(
        url=url,
        title=_text(soup, ["h1"]),
        description=_text(soup, ["[data-product-details-description-text-content]", "p.wt-text-body-01"]),
        price=_number(_text(soup, ["p.wt-text-title-03", "[data-buy-box-region=price] p"])),
        images=tuple(list(dict.fromkeys(images))[:MAX_IMAGES]),
        platform="etsy",
    )


def extract_walmart(soup: BeautifulSoup, html: str, url: str) -> ScrapedListing:
    price_elem = soup.find(attrs={"itemprop": "price"})
    price = None
    if price_elem:
        price = _number(price_elem.get("content") or price_elem.get_text(strip=True))

    return ScrapedListing(
        url=url,
        title=_text(soup, ['[itemprop="name"]', "h1"]),
        description=_text(soup, ['[itemprop="description"]']),
        price=price,
        platform="walmart",
    )


def extract_generic(soup: BeautifulSoup, html: str, url: str) -> ScrapedListing:
    title = _meta(soup, property="og:title") or _text(soup, ["title", "h1"])
    description = _meta(soup, property="og:description") or _meta(soup, name="description")
    price_match = re.search(r"\$\s?([0-9][0-9,]*(?:\.[0-9]+)?)", soup.get_text(" "))

    images = []
    og_image = _meta(soup, property="og:image")
    if og_image:
        images.append(og_image)
    for img in soup.find_all("img"):
        src = img.get("src") or ""
        lower = src.lower()
        if src.startswith("http") and "logo" not in lower and "icon" not in lower:
            images.append(src)

    return ScrapedListing(
        url=url,
        title=title,
        description=description,
        price=price_match.group(1).replace(",", "") if price_match else None,
        images=tuple(list(dict.fromkeys(images))[:MAX_IMAGES]),
    )


DEEP_EXTRACTORS: Dict[Optional[str], Callable[[BeautifulSoup, str, str], ScrapedListing]] = {
    "amazon": extract_amazon,
    "ebay": extract_ebay,
    "etsy": extract_etsy,
    "walmart": extract_walmart,
    None: extract_generic,
}


def deep_extract(html: str, url: str) -> ScrapedListing:
    """
    Marketplace-aware extraction
    Args:
        html: Page HTML
        url: Source URL (host picks the extractor)
    Returns:
        ScrapedListing; fields the page lacks are left empty
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()

    platform = detect_platform(url)
    listing = DEEP_EXTRACTORS[platform](soup, html, url)
    return listing.model_copy(update={
        "title": decode_html_entities(listing.title),
        "description": strip_html_tags(listing.description),
    })


# =============================================================================
# ENTRY POINTS
# =============================================================================

async def scrape(url: str, settings: Optional[Settings] = None) -> ScrapedListing:
    html = await fetch_html(url, settings)
    listing = extract_listing(html, url)
    logger.info(f"✅ Extracted listing: {listing.title[:60]}")
    return listing


async def scrape_deep(url: str, settings: Optional[Settings] = None) -> ScrapedListing:
    """
    Deep scrape with regex fallback for missing fields
    Raises:
        ScrapeError: If the page cannot be fetched or has no title
    """
    html = await fetch_html(url, settings)
    deep = deep_extract(html, url)

    title = deep.title or extract_title(html)
    if not title:
        raise ScrapeError("Could not extract product title from URL. Please try manual input.")

    main_image = extract_main_image(html)
    listing = deep.model_copy(update={
        "title": title,
        "description": deep.description or extract_description(html) or NO_DESCRIPTION,
        "price": deep.price or extract_price(html),
        "images": deep.images or ((main_image,) if main_image else ()),
    })
    logger.info(
        f"✅ Deep extraction ({listing.platform or 'generic'}): {len(listing.bullets)} bullets, "
        f"{len(listing.images)} images, {len(listing.specifications)} specs"
    )
    return listing
