"""
Test Suite for the SEO Scoring Engine and Quick Scorer
"""

import pytest

from listing_optimizer.models import KeywordSet, OptimizedContent
from listing_optimizer.services import quick_scorer, seo_scorer
from listing_optimizer.services.quick_scorer import (
    dominant_keyword_density,
    quick_seo_score,
    readability_factor,
)


def make_content(title: str, description: str, tags=(), keywords=()) -> OptimizedContent:
    return OptimizedContent(
        title=title,
        description=description,
        keywords=tuple(keywords),
        optimized_title=title,
        optimized_description=description,
        integrated_keywords=KeywordSet(),
        tags=tuple(tags),
    )


class TestSubScores:
    """Test the five sub-scores."""

    def test_keyword_relevance(self):
        score = seo_scorer.score_keyword_relevance("Steel Bottle", "Keeps cold", ["steel", "cold", "lid", "mug"])
        assert score == 50

    def test_keyword_relevance_no_keywords(self):
        assert seo_scorer.score_keyword_relevance("Bottle", "", []) == 0

    def test_title_caps_penalty_skipped_on_ebay(self):
        title = "STAINLESS STEEL WATER BOTTLE 32 OZ INSULATED LEAK PROOF"
        assert seo_scorer.score_title_optimization(title, "ebay") == 100
        assert seo_scorer.score_title_optimization(title, "shopify") == 85

    def test_title_without_digits(self):
        assert seo_scorer.score_title_optimization("Handmade Ceramic Mug With Speckled Glaze For Coffee", "shopify") == 90

    def test_short_title_penalty(self):
        assert seo_scorer.score_title_optimization("Mug 12", "amazon") == 80

    def test_tag_effectiveness_empty(self):
        assert seo_scorer.score_tag_effectiveness([]) == 25

    def test_tag_effectiveness_full(self):
        tags = ["ceramic mug", "coffee cup", "gift idea", "tea mug", "handmade", "kitchen", "stoneware"]
        assert seo_scorer.score_tag_effectiveness(tags) == 100

    def test_mobile_optimization(self):
        assert seo_scorer.score_mobile_optimization("Short title", "a\n\nb\n\nc") == 100
        assert seo_scorer.score_mobile_optimization("t" * 81, "one paragraph") == 65

    def test_description_quality_range(self):
        description = "Line one has some words.\n• Bullet with 3 items\n" * 20
        assert 0 <= seo_scorer.score_description_quality(description) <= 100

    def test_description_quality_full_marks(self):
        sentence = "This bottle keeps drinks cold for 24 hours on long hikes and busy office days."
        description = "\n• ".join([sentence] * 11)
        assert len(description) >= 800
        assert seo_scorer.score_description_quality(description) == 100

    def test_description_quality_grows_with_length(self):
        sentence = "This bottle keeps drinks cold for 24 hours on long hikes and busy office days."
        scores = [seo_scorer.score_description_quality(" ".join([sentence] * n)) for n in range(1, 16)]
        assert scores == sorted(scores)

    def test_overlong_amazon_title(self):
        title = ("Insulated Water Bottle 32 oz " * 10)[:250]
        assert seo_scorer.score_title_optimization(title, "amazon") <= 70


class TestCalculateSeoScore:
    """Test the weighted overall score."""

    def test_weights_sum_to_one(self):
        assert sum(seo_scorer.SCORE_WEIGHTS.values()) == pytest.approx(1.0)

    def test_overall_is_weighted_sum(self):
        content = make_content(
            "Stainless Steel Water Bottle 32oz",
            "Keeps drinks cold for 24 hours.\n\nLeak proof lid.\n\nFits cup holders.",
            tags=["water bottle", "steel bottle", "gym bottle"],
            keywords=["steel", "bottle", "lid"],
        )
        score = seo_scorer.calculate_seo_score(content, "shopify")
        expected = round(
            score.keyword_relevance * 0.30
            + score.title_optimization * 0.25
            + score.description_quality * 0.20
            + score.tag_effectiveness * 0.15
            + score.mobile_optimization * 0.10
        )
        assert score.overall == expected

    def test_scores_within_range(self):
        score = seo_scorer.calculate_seo_score(make_content("", ""), "amazon")
        for value in score.model_dump().values():
            assert 0 <= value <= 100

    def test_uses_optimized_fields(self):
        """Scoring looks at what gets published, not the original text."""
        content = make_content("Old", "Old", keywords=["bottle"]).model_copy(
            update={"optimized_title": "Bottle", "optimized_description": "Bottle"}
        )
        assert seo_scorer.calculate_seo_score(content, "etsy").keyword_relevance == 100


class TestQuickScore:
    """Test the quick pre-scan score."""

    def test_empty_listing(self):
        assert quick_seo_score("", "", [], "amazon") == 20

    def test_never_exceeds_100(self):
        title = "Handmade Ceramic Coffee Mug With Speckled Glaze For Tea Lovers And Gifts"
        description = ("This handmade mug holds twelve ounces of coffee or tea for slow mornings at home. " * 12)
        assert 0 <= quick_seo_score(title, description, ["mug"] * 5, "etsy") <= 100

    def test_dominant_density(self):
        assert dominant_keyword_density("lamp lamp", "desk") == pytest.approx(200 / 3)

    def test_shares_sentence_pattern_with_seo_scorer(self):
        assert quick_scorer._SENTENCE_SPLIT is seo_scorer._SENTENCE_SPLIT

    def test_readability_bands(self):
        assert readability_factor("") == 0.0
        assert readability_factor(" ".join(["word"] * 16) + ".") == 1.0
        assert readability_factor(" ".join(["word"] * 12) + ".") == 0.8
        assert readability_factor("Too short.") == 0.5
