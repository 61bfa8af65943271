"""
Typed errors for the listing pipeline
Each error carries the HTTP status the API layer responds with
"""
from typing import Any, List, Optional


class ListingOptimizerError(Exception):
    """Base error for everything raised by the listing pipeline"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class InvalidInputError(ListingOptimizerError):
    """Request failed structural validation before any external call"""

    status_code = 400


class UnsupportedPlatformError(InvalidInputError):
    """Unknown platform key"""

    def __init__(self, platform: str):
        super().__init__(f"Unsupported platform: {platform}", details={"platform": platform})
        self.platform = platform


class ValidationFailedError(ListingOptimizerError):
    """Generator responded, but the response is missing required fields"""

    status_code = 422

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message, details={"fields": fields or []})
        self.fields = fields or []


class MalformedResponseError(ListingOptimizerError):
    """Generator output could not be parsed as JSON"""

    status_code = 422


class UpstreamAuthError(ListingOptimizerError):
    """Generator rejected our credentials"""

    status_code = 500


class UpstreamRateLimitError(ListingOptimizerError):
    """Generator throttled the request"""

    status_code = 429


class UpstreamTimeoutError(ListingOptimizerError):
    """Generator call exceeded its deadline"""

    status_code = 504


class UpstreamServerError(ListingOptimizerError):
    """Generator failed or is unavailable"""

    status_code = 503


class ScrapeError(ListingOptimizerError):
    """Product page could not be fetched or parsed"""

    status_code = 400


class QuotaExceededError(ListingOptimizerError):
    """Caller has used up the optimizations allowed for their tier"""

    status_code = 403


# Exceptions the orchestrator retries before giving up
RETRYABLE_ERRORS = (
    UpstreamTimeoutError,
    UpstreamRateLimitError,
    UpstreamServerError,
    MalformedResponseError,
)
