"""
Test Suite for Listing Sources: URL Scraping and Image Analysis
"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from listing_optimizer.config import Settings
from listing_optimizer.errors import ScrapeError
from listing_optimizer.models import ScrapedListing
from listing_optimizer.services import image_analysis, url_scraper
from listing_optimizer.utils.normalisers import product_from_scraped


AMAZON_HTML = """
<html><head><title>Amazon.com: Acme Bottle</title>
<meta property="og:image" content="https://example.com/og.jpg"></head>
<body>
<span id="productTitle"> Acme Steel Water Bottle 32oz </span>
<div id="productDescription"><p>Keeps drinks cold for 24 hours.</p></div>
<span class="a-price-whole">24.</span>
<div id="feature-bullets"><ul>
<li><span class="a-list-item">Double wall vacuum insulation keeps drinks cold</span></li>
<li><span class="a-list-item">Short</span></li>
</ul></div>
<a id="bylineInfo">Visit the Acme Store</a>
<span class="a-icon-alt">4.6 out of 5 stars</span>
<span id="acrCustomerReviewText">1,234 ratings</span>
<table class="prodDetTable"><tr><th>Capacity</th><td>32 oz</td></tr></table>
<script>var data = {"hiRes":"https://m.media-amazon.com/images/I/1.jpg"};</script>
</body></html>
"""

GENERIC_HTML = """
<html><head>
<meta property="og:title" content="Handmade Oak Cutting Board">
<meta name="description" content="Solid oak board finished with food safe oil.">
<meta property="og:image" content="https://shop.example.com/board.jpg">
</head><body>
<p>Now only $45.00</p>
<img src="https://shop.example.com/logo.png">
<img src="https://shop.example.com/board-side.jpg">
<img src="/relative.jpg">
</body></html>
"""


class TestDetectPlatform:
    """Test marketplace detection from URLs."""

    @pytest.mark.parametrize("url,platform", [
        ("https://www.amazon.com/dp/B000", "amazon"),
        ("https://www.ebay.co.uk/itm/123", "ebay"),
        ("https://www.etsy.com/listing/1", "etsy"),
        ("https://www.walmart.com/ip/2", "walmart"),
        ("https://shop.example.com/products/board", None),
    ])
    def test_detect(self, url, platform):
        assert url_scraper.detect_platform(url) == platform


class TestRegexExtraction:
    """Test quick regex extraction."""

    def test_extract_listing(self):
        html = (
            '<title>Acme Mug &amp; Saucer</title>'
            '<meta property="og:description" content="Stoneware mug &quot;set&quot;">'
            '<span itemprop="price" content="19.99"></span>'
            '<meta property="og:image" content="https://example.com/mug.jpg">'
        )
        listing = url_scraper.extract_listing(html, "https://example.com/mug")
        assert listing.title == "Acme Mug & Saucer"
        assert listing.description == 'Stoneware mug "set"'
        assert listing.price == "19.99"
        assert listing.images == ("https://example.com/mug.jpg",)

    def test_description_default(self):
        listing = url_scraper.extract_listing("<title>Mug</title>", "https://example.com")
        assert listing.description == url_scraper.NO_DESCRIPTION

    def test_missing_title(self):
        with pytest.raises(ScrapeError) as exc_info:
            url_scraper.extract_listing("<html><body>nothing</body></html>", "https://example.com")
        assert exc_info.value.status_code == 400

    def test_currency_price(self):
        assert url_scraper.extract_price("<p>Only £1,299.50 today</p>") == "1,299.50"


class TestDeepExtraction:
    """Test marketplace-aware extraction."""

    def test_amazon(self):
        listing = url_scraper.deep_extract(AMAZON_HTML, "https://www.amazon.com/dp/B000")
        assert listing.platform == "amazon"
        assert listing.title == "Acme Steel Water Bottle 32oz"
        assert listing.description == "Keeps drinks cold for 24 hours."
        assert listing.price == "24"
        assert listing.bullets == ("Double wall vacuum insulation keeps drinks cold",)
        assert listing.images == ("https://m.media-amazon.com/images/I/1.jpg",)
        assert listing.specifications == {"Capacity": "32 oz"}
        assert listing.brand == "Acme"
        assert listing.rating == "4.6"
        assert listing.review_count == "1234"

    def test_generic(self):
        listing = url_scraper.deep_extract(GENERIC_HTML, "https://shop.example.com/products/board")
        assert listing.platform is None
        assert listing.title == "Handmade Oak Cutting Board"
        assert listing.description == "Solid oak board finished with food safe oil."
        assert listing.price == "45.00"
        assert listing.images == (
            "https://shop.example.com/board.jpg",
            "https://shop.example.com/board-side.jpg",
        )

    def test_scraped_to_product(self):
        listing = url_scraper.deep_extract(AMAZON_HTML, "https://www.amazon.com/dp/B000")
        product = product_from_scraped(listing)
        assert product.price == 24.0
        assert "Double wall vacuum insulation" in product.description
        assert product.specifications[0].name == "Capacity"


class TestFetching:
    """Test page fetching and the scrape entry points."""

    @pytest.fixture
    def mock_transport(self):
        """Route httpx.AsyncClient through a MockTransport."""
        real_client = httpx.AsyncClient

        def install(handler):
            def factory(**kwargs):
                return real_client(transport=httpx.MockTransport(handler), **kwargs)
            return patch.object(url_scraper.httpx, "AsyncClient", side_effect=factory)

        return install

    async def test_fetch_ok(self, mock_transport):
        with mock_transport(lambda request: httpx.Response(200, text="<title>Mug</title>")):
            html = await url_scraper.fetch_html("https://example.com/mug", Settings())
        assert html == "<title>Mug</title>"

    async def test_fetch_http_error(self, mock_transport):
        with mock_transport(lambda request: httpx.Response(404)):
            with pytest.raises(ScrapeError) as exc_info:
                await url_scraper.fetch_html("https://example.com/missing", Settings())
        assert exc_info.value.status_code == 502

    async def test_invalid_url(self):
        with pytest.raises(ScrapeError) as exc_info:
            await url_scraper.fetch_html("not a url", Settings())
        assert exc_info.value.status_code == 400

    async def test_scrape_deep_falls_back_to_regex(self):
        html = '<title>Plain Store Lamp</title><meta name="description" content="Brass desk lamp">'
        with patch.object(url_scraper, "fetch_html", new=AsyncMock(return_value=html)):
            listing = await url_scraper.scrape_deep("https://www.walmart.com/ip/lamp")
        assert listing.platform == "walmart"
        assert listing.title == "Plain Store Lamp"
        assert listing.description == "Brass desk lamp"

    async def test_scrape_deep_without_title(self):
        with patch.object(url_scraper, "fetch_html", new=AsyncMock(return_value="<p>empty</p>")):
            with pytest.raises(ScrapeError):
                await url_scraper.scrape_deep("https://www.etsy.com/listing/1")


class TestImageAnalysis:
    """Test URL-hint image analysis."""

    def test_hints_from_url(self):
        analysis = image_analysis.analyze_image("cdn/black-wireless-headphones-modern.jpg")
        assert analysis.main_features == ("wireless connectivity",)
        assert analysis.colors == ("black",)
        assert analysis.style == "modern"
        assert analysis.confidence == 0.85

    def test_grey_maps_to_silver(self):
        assert image_analysis.analyze_image("img/grey-lamp.png").colors == ("silver",)

    def test_fallbacks_are_generic(self):
        analysis = image_analysis.analyze_image("img/12345.jpg")
        assert analysis.main_features == image_analysis.DEFAULT_FEATURES
        assert image_analysis.is_generic(analysis)
        assert not image_analysis.is_generic(image_analysis.analyze_image("img/red.jpg"))

    def test_base64(self):
        analysis = image_analysis.analyze_base64("iVBORw0KGgo=")
        assert analysis.confidence == 0.80
        assert image_analysis.is_generic(analysis)

    async def test_multiple_images(self):
        """Only the first three images count; style comes from the first."""
        analysis = await image_analysis.analyze_multiple_images([
            "a/red-portable.jpg",
            "b/red-wireless-vintage.jpg",
            "c/blue.jpg",
            "d/white-luxury.jpg",
        ])
        assert analysis.colors == ("red", "blue")
        assert "premium construction" not in analysis.main_features
        assert analysis.style == "contemporary"
        assert analysis.confidence == 0.85

    async def test_multiple_images_empty(self):
        analysis = await image_analysis.analyze_multiple_images([])
        assert image_analysis.is_generic(analysis)


class TestScrapedListingModel:
    """Test the scraped record defaults."""

    def test_defaults(self):
        listing = ScrapedListing(url="https://example.com", title="Mug", description="")
        assert listing.images == ()
        assert listing.specifications == {}
