"""
AI Service
Validates generation requests, calls the content generator with retries,
validates the response and runs the deterministic optimizer over it
"""
import asyncio
import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from ..config import IMAGE_CONFIDENCE_THRESHOLD, SUPPORTED_MODES, Settings, get_settings
from ..errors import (
    RETRYABLE_ERRORS,
    InvalidInputError,
    ListingOptimizerError,
    MalformedResponseError,
    ValidationFailedError,
)
from ..models import (
    GeneratedListing,
    GenerateListingRequest,
    GenerationRequest,
    GenerationResult,
    ProductInfo,
)
from ..utils.normalisers import image_analysis_from_input, product_from_input
from ..utils.sanitizers import sanitize_prompt_input
from .content_generator import ContentGenerator, OpenAIContentGenerator
from .image_analysis import is_generic
from .optimizer import optimize_listing
from .platform_rules import is_supported
from .prompt_builder import build_prompt
from .response_validator import coerce_listing, validate_response

logger = logging.getLogger(__name__)


class GenerationOptions(BaseModel):
    max_retries: int = Field(2, ge=0)
    validate_response: bool = True
    sanitize_input: bool = True
    backoff_base: float = Field(1.0, ge=0)
    backoff_cap: float = Field(5.0, ge=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GenerationOptions":
        return cls(
            max_retries=settings.generation_max_retries,
            backoff_base=settings.retry_backoff_base,
            backoff_cap=settings.retry_backoff_cap,
        )


def check_payload_size(payload: BaseModel, settings: Optional[Settings] = None) -> None:
    """Reject request bodies over the configured byte limit"""
    settings = settings or get_settings()
    size = len(payload.model_dump_json().encode("utf-8"))
    if size > settings.max_payload_bytes:
        raise InvalidInputError(
            f"Payload too large: {size} bytes (maximum: {settings.max_payload_bytes})",
            details={"size": size},
        )


def validate_generation_request(
    payload: GenerateListingRequest, settings: Optional[Settings] = None
) -> GenerationRequest:
    """
    Structural checks that run before any external call
    Args:
        payload: Request body
        settings: Source of the payload size limit
    Returns:
        GenerationRequest with normalized product data
    Raises:
        InvalidInputError: For a missing or unknown platform or mode,
            missing product data, blank title and description, or an oversized payload
    """
    check_payload_size(payload, settings)

    if not payload.platform:
        raise InvalidInputError("Missing required field: platform")
    if not is_supported(payload.platform):
        raise InvalidInputError(
            f"Unsupported platform: {payload.platform}", details={"platform": payload.platform}
        )

    if not payload.mode:
        raise InvalidInputError("Missing required field: mode")
    if payload.mode not in SUPPORTED_MODES:
        raise InvalidInputError(
            f"Invalid mode: {payload.mode}. Must be one of: {', '.join(SUPPORTED_MODES)}",
            details={"mode": payload.mode},
        )

    if payload.productData is None:
        raise InvalidInputError("Missing required field: productData")

    product = product_from_input(payload.productData)
    if not product.title and not product.description:
        raise InvalidInputError("Product title or description is required")

    return GenerationRequest(
        platform=payload.platform.strip().lower(),
        mode=payload.mode,
        product_data=product,
        image_analysis=image_analysis_from_input(payload.imageAnalysis),
    )


def sanitize_request(request: GenerationRequest, max_chars: int) -> GenerationRequest:
    """Strip prompt-injection phrases from every free-text product field"""
    product = request.product_data

    def clean(value: str) -> str:
        return sanitize_prompt_input(value, max_chars)

    sanitized = product.model_copy(update={
        "title": clean(product.title),
        "description": clean(product.description),
        "category": clean(product.category) if product.category else product.category,
        "keywords": tuple(k for k in (clean(k) for k in product.keywords) if k),
        "specifications": tuple(
            s.model_copy(update={"name": clean(s.name), "value": clean(s.value)})
            for s in product.specifications
        ),
    })
    return request.model_copy(update={"product_data": sanitized})


class AIService:
    """Generates a platform listing and scores it"""

    def __init__(self, generator: Optional[ContentGenerator] = None, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.generator = generator or OpenAIContentGenerator(self.settings)

    async def generate_listing(
        self, request: GenerationRequest, options: Optional[GenerationOptions] = None
    ) -> GenerationResult:
        """
        Generate, validate and optimize a listing
        Args:
            request: Validated generation request
            options: Retry, validation and sanitization options
        Returns:
            GenerationResult with listing, optimization, quality score and warnings
        Raises:
            ValidationFailedError: If the response is missing required fields
            UpstreamAuthError: If the generator rejects our credentials
            ListingOptimizerError: The last retryable error once attempts run out
        """
        options = options or GenerationOptions.from_settings(self.settings)

        if options.sanitize_input:
            request = sanitize_request(request, self.settings.max_input_chars)

        prompt = build_prompt(request)
        raw = await self._generate_with_retries(prompt, options)

        warnings: List[str] = []
        if options.validate_response:
            outcome = validate_response(raw, request.platform)
            if not outcome.is_valid:
                raise ValidationFailedError(
                    f"Generated listing failed validation: {'; '.join(outcome.errors)}",
                    outcome.fields,
                )
            listing = outcome.listing
            warnings.extend(outcome.warnings)
        else:
            listing, coerce_warnings = coerce_listing(raw)
            warnings.extend(coerce_warnings)

        optimization = optimize_listing(self.product_from_listing(listing, request), request.platform)
        warnings.extend(
            f"{v.severity}: {v.message}" for v in optimization.listing.compliance.violations
        )

        analysis = request.image_analysis
        if analysis is not None and analysis.confidence < IMAGE_CONFIDENCE_THRESHOLD and is_generic(analysis):
            warnings.append("Image analysis had low confidence; generic image details were used")

        logger.info(
            f"✅ Generated {request.platform} listing ({request.mode}): "
            f"quality {optimization.seo_score.overall}, {len(warnings)} warnings"
        )
        return GenerationResult(
            listing=listing,
            optimization=optimization,
            quality_score=optimization.seo_score,
            warnings=tuple(warnings),
        )

    async def _generate_with_retries(self, prompt, options: GenerationOptions) -> dict:
        last_error: Optional[ListingOptimizerError] = None

        for attempt in range(options.max_retries + 1):
            try:
                logger.info(f"🤖 Generation attempt {attempt + 1}/{options.max_retries + 1}")
                return await self.generator.generate(prompt)
            except RETRYABLE_ERRORS as e:
                last_error = e
                logger.warning(f"⚠️ Attempt {attempt + 1} failed: {e.message}")
                if attempt < options.max_retries:
                    await asyncio.sleep(min(options.backoff_base * 2 ** attempt, options.backoff_cap))

        logger.error(f"❌ Generation failed after {options.max_retries + 1} attempts")
        if isinstance(last_error, MalformedResponseError):
            raise ValidationFailedError(last_error.message, ["response"]) from last_error
        raise last_error

    @staticmethod
    def product_from_listing(listing: GeneratedListing, request: GenerationRequest) -> ProductInfo:
        description = listing.description
        if listing.bullets:
            description = "\n".join([description, *(f"• {b}" for b in listing.bullets)])

        return ProductInfo(
            title=listing.title,
            description=description,
            category=request.product_data.category,
            price=request.product_data.price,
            keywords=listing.keywords,
            specifications=request.product_data.specifications,
        )
