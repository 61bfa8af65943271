"""
Test Suite for the Compliance Validator and Platform Rules
"""

import pytest

from listing_optimizer.errors import UnsupportedPlatformError
from listing_optimizer.services import compliance
from listing_optimizer.services.platform_rules import (
    SUPPORTED_PLATFORMS,
    get_algorithm_factors,
    get_rules,
    normalize_platform,
)


class TestPlatformRules:
    """Test the rule table lookups."""

    def test_five_platforms(self):
        """Exactly the five marketplaces are supported."""
        assert set(SUPPORTED_PLATFORMS) == {"amazon", "shopify", "etsy", "ebay", "walmart"}

    def test_title_limits(self):
        """Hard title limits per platform."""
        limits = {p: get_rules(p).title_range.max for p in SUPPORTED_PLATFORMS}
        assert limits == {"amazon": 200, "ebay": 80, "etsy": 140, "shopify": 70, "walmart": 75}

    def test_lookup_is_case_insensitive(self):
        assert normalize_platform(" Etsy ") == "etsy"

    def test_unknown_platform_raises(self):
        """Woocommerce is not part of the closed set."""
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            get_rules("woocommerce")
        assert exc_info.value.status_code == 400

    def test_algorithm_factors_present(self):
        for platform in SUPPORTED_PLATFORMS:
            factors = get_algorithm_factors(platform)
            assert factors.platform == platform
            assert factors.ranking_factors


class TestComplianceChecks:
    """Test individual compliance checks."""

    def test_title_too_long(self):
        violations = compliance.validate_title_length("a" * 201, 200)
        assert len(violations) == 1
        assert violations[0].severity == "error"
        assert violations[0].location == "title"

    def test_title_message_names_limit(self):
        limit = get_rules("amazon").title_range.max
        violations = compliance.validate_title_length("a" * 250, limit)
        assert "200" in violations[0].message

    def test_title_at_limit_passes(self):
        assert compliance.validate_title_length("a" * 200, 200) == []

    def test_short_description_is_warning(self):
        violations = compliance.validate_description_length("short", 800)
        assert violations[0].severity == "warning"

    def test_too_many_tags(self):
        violations = compliance.validate_tag_count(["t"] * 14, 13)
        assert violations[0].location == "tags"

    def test_prohibited_words_substring_match(self):
        """Matching is by substring, so 'laptop' trips 'top'."""
        violations = compliance.check_prohibited_words("Best laptop stand", ["best", "top", "cheap"])
        messages = [v.message for v in violations]
        assert len(violations) == 2
        assert 'Contains prohibited word: "best"' in messages
        assert 'Contains prohibited word: "top"' in messages

    def test_prohibited_words_case_insensitive(self):
        violations = compliance.check_prohibited_words(
            "FREE SHIPPING on every order", get_rules("amazon").prohibited_words
        )
        assert [v.message for v in violations] == ['Contains prohibited word: "free shipping"']

    def test_content_policy_links_and_contacts(self):
        violations = compliance.check_content_policy(
            "Mug &amp; Saucer",
            "Visit www.example.com or call 555-123-4567",
        )
        messages = {v.message for v in violations}
        assert "Title contains HTML entities" in messages
        assert "Description contains external links" in messages
        assert "Description contains contact information" in messages


class TestComplianceResult:
    """Test scoring and recommendations."""

    def test_score_deductions(self):
        """Errors cost 15 points and warnings cost 5."""
        violations = [
            *compliance.validate_title_length("a" * 90, 80),
            *compliance.check_prohibited_words("cheap", ["cheap"]),
            *compliance.validate_description_length("", 100),
        ]
        result = compliance.build_compliance_result(violations)
        assert result.score == 65
        assert result.passed is False
        assert [r.priority for r in result.recommendations] == ["High", "High", "Medium"]

    def test_warnings_only_still_pass(self):
        result = compliance.build_compliance_result(compliance.validate_description_length("", 100))
        assert result.passed is True
        assert result.score == 95

    def test_score_floor(self):
        violations = compliance.check_prohibited_words("a", ["a"]) * 10
        assert compliance.calculate_compliance_score(violations) == 0
