"""
Request dependencies shared by the routers
"""
import logging
from typing import Optional

from fastapi import Header, HTTPException

from .config import get_settings
from .errors import QuotaExceededError

logger = logging.getLogger(__name__)


def check_key(x_api_key: Optional[str] = Header(default=None, alias="x-api-key")):
    """Validate API key if configured"""
    api_key = get_settings().listing_api_key
    if api_key and x_api_key != api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


def check_quota(
    x_user_tier: Optional[str] = Header(default=None, alias="x-user-tier"),
    x_usage_count: Optional[int] = Header(default=None, alias="x-usage-count"),
):
    """
    Refuse callers at or over their tier allowance
    Both headers come from the identity layer in front of this service;
    without a usage count there is nothing to enforce.
    """
    if x_usage_count is None:
        return

    limit = get_settings().tier_limit(x_user_tier)
    if x_usage_count >= limit:
        logger.warning(f"⛔ Usage limit reached: tier={x_user_tier or 'default'} usage={x_usage_count}/{limit}")
        raise QuotaExceededError(
            "Usage limit exceeded",
            details={"tier": x_user_tier or "free", "usage": x_usage_count, "limit": limit},
        )
