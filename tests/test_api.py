"""
Test Suite for the HTTP API

Routes are exercised through FastAPI's TestClient with the generator
and scraper replaced by doubles.
"""

import logging

import pytest
from unittest.mock import AsyncMock, patch
from fastapi.testclient import TestClient

from listing_optimizer.config import get_settings
from listing_optimizer.errors import UpstreamAuthError, UpstreamTimeoutError
from listing_optimizer.main import app
from listing_optimizer.models import ScrapedListing
from listing_optimizer.routers.listing import get_ai_service
from listing_optimizer.services import url_scraper


@pytest.fixture
def client(ai_service):
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def listing_body(product_payload):
    return {"platform": "amazon", "mode": "optimize", "productData": product_payload}


class TestHealthAndPlatforms:
    """Test informational endpoints."""

    def test_healthz(self, client):
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_platforms(self, client):
        data = client.get("/api/platforms").json()["data"]
        assert [p["platform"] for p in data] == ["amazon", "shopify", "etsy", "ebay", "walmart"]
        assert data[0]["rules"]["titleRange"]["max"] == 200


class TestGenerateListing:
    """Test the listing generation endpoint."""

    def test_success(self, client, listing_body):
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["title"].startswith("Insulated")
        assert len(body["data"]["bullets"]) == 5
        assert "overall" in body["data"]["qualityScore"]
        assert body["data"]["optimization"]["platform"] == "amazon"
        assert isinstance(body["warnings"], list)

    def test_missing_platform(self, client, listing_body):
        del listing_body["platform"]
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Missing required field: platform"}

    def test_unsupported_platform(self, client, listing_body):
        listing_body["platform"] = "woocommerce"
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 400
        assert response.json()["details"] == {"platform": "woocommerce"}

    def test_malformed_body(self, client, listing_body):
        listing_body["productData"] = "not an object"
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_generator_timeout(self, client, listing_body, mock_generator):
        mock_generator.generate.side_effect = UpstreamTimeoutError("AI service timed out")
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 504
        assert response.json()["error"] == "AI service timed out"

    def test_generator_auth_failure(self, client, listing_body, mock_generator):
        mock_generator.generate.side_effect = UpstreamAuthError(
            "AI service authentication failed. Please contact support."
        )
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 500
        assert mock_generator.generate.await_count == 1

    def test_invalid_generated_listing(self, client, listing_body, mock_generator):
        mock_generator.generate.return_value = {"title": "Mug"}
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 422
        assert "bullets" in response.json()["details"]["fields"]

    def test_deep_analysis_uses_images(self, client, listing_body, mock_generator):
        listing_body.update({"deepAnalysis": True, "images": ["https://cdn.example.com/blue-portable.jpg"]})
        response = client.post("/api/generate-listing", json=listing_body)
        assert response.status_code == 200
        prompt = mock_generator.generate.await_args.args[0]
        assert "Visual Features: portable design" in prompt.user_prompt


class TestQuotaAndAuth:
    """Test request gates."""

    def test_quota_exceeded(self, client, listing_body, mock_generator):
        headers = {"x-user-tier": "free", "x-usage-count": "3"}
        response = client.post("/api/generate-listing", json=listing_body, headers=headers)
        assert response.status_code == 403
        assert response.json()["error"] == "Usage limit exceeded"
        mock_generator.generate.assert_not_awaited()

    def test_quota_under_limit(self, client, listing_body):
        headers = {"x-user-tier": "basic", "x-usage-count": "19"}
        assert client.post("/api/generate-listing", json=listing_body, headers=headers).status_code == 200

    def test_unknown_tier_uses_default(self, client, listing_body):
        headers = {"x-user-tier": "enterprise", "x-usage-count": "3"}
        assert client.post("/api/generate-listing", json=listing_body, headers=headers).status_code == 403

    def test_api_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(get_settings(), "listing_api_key", "secret")
        response = client.get("/api/platforms")
        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Invalid API key"}
        assert client.get("/api/platforms", headers={"x-api-key": "secret"}).status_code == 200

    def test_rejected_key_logged_as_warning(self, client, monkeypatch, caplog):
        monkeypatch.setattr(get_settings(), "listing_api_key", "secret")
        with caplog.at_level(logging.WARNING, logger="listing_optimizer.main"):
            assert client.get("/api/platforms").status_code == 401
        records = [r for r in caplog.records if r.name == "listing_optimizer.main"]
        assert records
        assert all(r.levelno == logging.WARNING for r in records)


class TestDeterministicEndpoints:
    """Test endpoints that never call the generator."""

    def test_seo_score(self, client):
        response = client.post("/api/seo-score", json={
            "platform": "etsy",
            "title": "Handmade ceramic mug | Speckled stoneware coffee cup 12 oz",
            "description": "A handmade mug for slow mornings.",
            "keywords": ["ceramic mug", "coffee cup"],
            "tags": ["ceramic mug", "coffee cup"],
        })
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["seoScore"]["keywordRelevance"] == 100
        assert 0 <= data["quickScore"] <= 100
        assert "violations" in data["compliance"]

    def test_seo_score_unknown_platform(self, client):
        response = client.post("/api/seo-score", json={"platform": "woocommerce", "title": "Mug"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_optimize(self, client, product_payload, mock_generator):
        response = client.post("/api/optimize", json={"platform": "shopify", "productData": product_payload})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["platform"] == "shopify"
        assert len(data["listing"]["content"]["title"]) <= 70
        mock_generator.generate.assert_not_awaited()

    def test_keywords(self, client, product_payload):
        response = client.post("/api/keywords", json={"platform": "amazon", "productData": product_payload})
        data = response.json()["data"]
        assert data["keywords"]["primary"] == ["stainless", "steel", "water"]
        assert len(" ".join(data["backendSearchTerms"])) <= 249
        assert data["competitors"]["keywords"][0] == "stainless steel"


class TestUrlAnalysis:
    """Test URL analysis endpoints with the scraper stubbed."""

    def test_analyze_url(self, client):
        scraped = ScrapedListing(
            url="https://shop.example.com/board",
            title="Handmade Oak Cutting Board",
            description="Solid oak board.",
            price="45.00",
        )
        with patch.object(url_scraper, "scrape", new=AsyncMock(return_value=scraped)):
            response = client.post("/api/analyze-url", json={"url": "https://shop.example.com/board"})
        data = response.json()["data"]
        assert data["title"] == "Handmade Oak Cutting Board"
        assert data["platform"] == "amazon"
        assert isinstance(data["quickScore"], int)

    def test_analyze_url_invalid(self, client):
        response = client.post("/api/analyze-url", json={"url": "ftp://nowhere"})
        assert response.status_code == 400

    def test_analyze_url_deep(self, client, mock_generator):
        scraped = ScrapedListing(
            url="https://www.etsy.com/listing/1",
            title="Oak cutting board",
            description="Solid oak board finished with food safe oil.",
            images=("https://i.etsystatic.com/il_fullxfull.rustic-board.jpg",),
            platform="etsy",
        )
        with patch.object(url_scraper, "scrape_deep", new=AsyncMock(return_value=scraped)):
            response = client.post("/api/analyze-url-deep", json={"url": scraped.url})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["original"]["title"] == "Oak cutting board"
        assert data["imageAnalysis"]["style"] == "rustic"
        assert data["metadata"]["platform"] == "etsy"
        assert data["optimized"]["optimization"]["platform"] == "etsy"
        prompt = mock_generator.generate.await_args.args[0]
        assert prompt.user_prompt.startswith("TASK: ANALYZE COMPETITOR/URL DATA")

    def test_analyze_url_deep_unknown_platform(self, client, mock_generator):
        """An unknown platform is rejected before the page is fetched."""
        scrape = AsyncMock()
        with patch.object(url_scraper, "scrape_deep", new=scrape):
            response = client.post(
                "/api/analyze-url-deep",
                json={"url": "https://www.etsy.com/listing/1", "platform": "woocommerce"},
            )
        assert response.status_code == 400
        assert response.json()["details"] == {"platform": "woocommerce"}
        scrape.assert_not_awaited()
        mock_generator.generate.assert_not_awaited()
