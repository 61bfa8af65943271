"""
Compliance Validator
Turns platform rules into violations and recommendations.
Never raises for malformed content; callers decide what is fatal.
"""
import re
from typing import Iterable, List, Sequence

from ..models import ComplianceRecommendation, ComplianceResult, ComplianceViolation

_HTML_ENTITY = re.compile(r"&[a-z]+;", re.IGNORECASE)
_EXTERNAL_LINK = re.compile(r"https?://|www\.", re.IGNORECASE)
_CONTACT_INFO = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b|@[a-z0-9]+\.[a-z]+", re.IGNORECASE)

_PRIORITY = {"error": "High", "warning": "Medium"}


def validate_title_length(title: str, max_length: int) -> List[ComplianceViolation]:
    if len(title) <= max_length:
        return []
    return [ComplianceViolation(
        type="formatting",
        severity="error",
        message=f"Title exceeds maximum length of {max_length} characters (current: {len(title)})",
        location="title",
        suggestion=f"Shorten title to {max_length} characters or less",
    )]


def validate_description_length(description: str, min_length: int) -> List[ComplianceViolation]:
    # Short descriptions are discouraged, not forbidden
    if len(description) >= min_length:
        return []
    return [ComplianceViolation(
        type="formatting",
        severity="warning",
        message=f"Description is below recommended minimum of {min_length} characters (current: {len(description)})",
        location="description",
        suggestion=f"Add more detailed product information to reach {min_length} characters",
    )]


def validate_tag_count(tags: Sequence[str], max_tags: int) -> List[ComplianceViolation]:
    if len(tags) <= max_tags:
        return []
    return [ComplianceViolation(
        type="formatting",
        severity="error",
        message=f"Too many tags: {len(tags)} (maximum: {max_tags})",
        location="tags",
        suggestion=f"Reduce to {max_tags} most relevant tags",
    )]


def check_prohibited_words(text: str, prohibited_words: Iterable[str]) -> List[ComplianceViolation]:
    """
    Flag every prohibited word found in text
    Args:
        text: Content to scan
        prohibited_words: Platform word list
    Returns:
        One error violation per matched word (case-insensitive substring match)
    """
    lower_text = text.lower()
    violations = []
    for word in prohibited_words:
        if word.lower() in lower_text:
            violations.append(ComplianceViolation(
                type="prohibited_word",
                severity="error",
                message=f'Contains prohibited word: "{word}"',
                location="content",
                suggestion=f'Remove or replace "{word}" with specific product features',
            ))
    return violations


def check_content_policy(title: str, description: str) -> List[ComplianceViolation]:
    """Marketplace-wide policy checks: entities in title, links and contact details in description"""
    violations = []

    if _HTML_ENTITY.search(title):
        violations.append(ComplianceViolation(
            type="structure",
            severity="error",
            message="Title contains HTML entities",
            location="title",
            suggestion="Remove HTML entities like &ndash; and &amp;",
        ))

    if _EXTERNAL_LINK.search(description):
        violations.append(ComplianceViolation(
            type="structure",
            severity="error",
            message="Description contains external links",
            location="description",
            suggestion="Remove all URLs and external links from description",
        ))

    if _CONTACT_INFO.search(description):
        violations.append(ComplianceViolation(
            type="structure",
            severity="error",
            message="Description contains contact information",
            location="description",
            suggestion="Remove phone numbers and email addresses",
        ))

    return violations


def generate_compliance_recommendations(
    violations: Iterable[ComplianceViolation],
) -> List[ComplianceRecommendation]:
    return [
        ComplianceRecommendation(
            category=v.type,
            description=v.message,
            action=v.suggestion or "Review and correct the issue",
            priority=_PRIORITY.get(v.severity, "Low"),
        )
        for v in violations
    ]


def calculate_compliance_score(violations: Iterable[ComplianceViolation]) -> int:
    violations = list(violations)
    errors = sum(1 for v in violations if v.severity == "error")
    warnings = sum(1 for v in violations if v.severity == "warning")
    return max(0, 100 - errors * 15 - warnings * 5)


def build_compliance_result(violations: Iterable[ComplianceViolation]) -> ComplianceResult:
    violations = tuple(violations)
    return ComplianceResult(
        violations=violations,
        recommendations=tuple(generate_compliance_recommendations(violations)),
        passed=not any(v.severity == "error" for v in violations),
        score=calculate_compliance_score(violations),
    )
