"""
Test Suite for Keyword Research and Integration
"""

import pytest

from listing_optimizer.errors import UnsupportedPlatformError
from listing_optimizer.models import BaseContent, KeywordSet, ProductInfo
from listing_optimizer.services import keywords


class TestResearchKeywords:
    """Test keyword research."""

    def test_primary_from_title(self, sample_product):
        """Primary keywords are the first three significant title words."""
        result = keywords.research_keywords(sample_product, "amazon")
        assert result.primary == ("stainless", "steel", "water")

    def test_platform_keywords_appended(self, sample_product):
        result = keywords.research_keywords(sample_product, "etsy")
        assert result.secondary[-4:] == keywords.PLATFORM_KEYWORDS["etsy"]

    def test_category_long_tail(self, sample_product):
        result = keywords.research_keywords(sample_product, "amazon")
        assert "kitchen for sale" in result.long_tail
        assert len(result.long_tail) <= keywords.MAX_LONG_TAIL

    def test_synonyms_follow_primary(self):
        product = ProductInfo(title="Leather Phone Case", description="Slim fit")
        result = keywords.research_keywords(product, "ebay")
        assert "smartphone" in result.synonyms
        assert "protector" in result.synonyms

    def test_deterministic(self, sample_product):
        """Same input always gives the same keyword set."""
        first = keywords.research_keywords(sample_product, "walmart")
        second = keywords.research_keywords(sample_product, "walmart")
        assert first == second
        assert first.competitors == ()

    def test_groups_deduplicated(self):
        product = ProductInfo(title="Candle Candle Candle Holder", description="")
        result = keywords.research_keywords(product, "shopify")
        assert result.primary == ("candle",)

    def test_unsupported_platform(self, sample_product):
        with pytest.raises(UnsupportedPlatformError):
            keywords.research_keywords(sample_product, "woocommerce")


class TestIntegrateKeywords:
    """Test keyword integration into title and description."""

    def test_missing_keyword_added(self):
        content = BaseContent(title="Water Bottle", description="Keeps drinks cold.")
        result = keywords.integrate_keywords(content, KeywordSet(primary=("insulated",)))
        assert result.optimized_title == "Water Bottle insulated"
        assert "This insulated provides excellent value and performance." in result.optimized_description

    def test_input_untouched(self):
        content = BaseContent(title="Water Bottle", description="Keeps drinks cold.")
        keywords.integrate_keywords(content, KeywordSet(primary=("insulated",)))
        assert content.title == "Water Bottle"
        assert content.description == "Keeps drinks cold."

    def test_integration_is_idempotent(self):
        """Feeding the output back in appends nothing new."""
        keyword_set = KeywordSet(primary=("insulated", "steel"), secondary=("leak proof",))
        first = keywords.integrate_keywords(
            BaseContent(title="Water Bottle", description="Keeps drinks cold."), keyword_set
        )
        second = keywords.integrate_keywords(
            BaseContent(title=first.optimized_title, description=first.optimized_description), keyword_set
        )
        assert second.optimized_title == first.optimized_title
        assert second.optimized_description == first.optimized_description

    def test_title_never_reaches_limit(self):
        """No keyword is appended when the title would reach 200 characters."""
        content = BaseContent(title="x" * 195, description="")
        result = keywords.integrate_keywords(content, KeywordSet(primary=("abc",)))
        assert result.optimized_title == "x" * 195

    def test_description_inserts_capped(self):
        content = BaseContent(title="Lamp", description="")
        keyword_set = KeywordSet(primary=("a1", "b2", "c3"), secondary=("d4", "e5", "f6"), long_tail=("g7",))
        result = keywords.integrate_keywords(content, keyword_set)
        assert result.optimized_description.count("This ") == keywords.MAX_DESCRIPTION_INSERTS

    def test_keyword_density(self):
        density = keywords.calculate_keyword_density(
            "lamp lamp desk light", KeywordSet(primary=("lamp",), secondary=("desk",))
        )
        assert density == {"lamp": 50.0, "desk": 25.0}

    def test_density_empty_text(self):
        assert keywords.calculate_keyword_density("", KeywordSet(primary=("lamp",))) == {"lamp": 0.0}


class TestSearchTermsAndCompetitors:
    """Test backend search terms and competitor keywords."""

    def test_amazon_backend_terms_fit_limit(self):
        keyword_set = KeywordSet(primary=tuple(f"keyword{i}" for i in range(60)))
        terms = keywords.generate_backend_search_terms(keyword_set, "amazon")
        assert len(" ".join(terms)) <= keywords.AMAZON_BACKEND_LIMIT

    def test_plural_variants(self):
        terms = keywords.generate_backend_search_terms(KeywordSet(primary=("mug", "cups")), "etsy")
        assert terms == ["mug", "cups", "mugs", "cup"]

    def test_competitor_keywords_by_category(self):
        result = keywords.analyze_competitor_keywords("Kitchen Gadgets", "etsy")
        assert result.keywords == keywords.CATEGORY_KEYWORDS["kitchen"]
        assert result.frequency["stainless steel"] == 100

    def test_competitor_keywords_default(self):
        result = keywords.analyze_competitor_keywords("", "amazon")
        assert result.keywords == keywords.DEFAULT_CATEGORY_KEYWORDS
