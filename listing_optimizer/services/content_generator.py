"""
Content Generator
OpenAI chat completion client that returns the listing JSON as a dict
"""
import json
import logging
import re
from typing import Any, Dict, Optional, Protocol

from openai import (
    APIError,
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
    PermissionDeniedError,
    RateLimitError,
)

from ..config import Settings, get_settings
from ..errors import (
    MalformedResponseError,
    UpstreamAuthError,
    UpstreamRateLimitError,
    UpstreamServerError,
    UpstreamTimeoutError,
)
from .prompt_builder import BuiltPrompt

logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "AI service authentication failed. Please contact support."

_FENCED_JSON = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_OBJECT_SPAN = re.compile(r"\{.*\}", re.DOTALL)


class ContentGenerator(Protocol):
    async def generate(self, prompt: BuiltPrompt) -> Dict[str, Any]:
        ...


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def parse_generator_response(content: str) -> Dict[str, Any]:
    """
    Parse generator JSON, handling markdown fences and surrounding prose
    Args:
        content: Raw completion text
    Returns:
        Parsed JSON object
    Raises:
        MalformedResponseError: If no JSON object can be recovered
    """
    content = (content or "").strip()

    data = _load_object(content)
    if data is not None:
        return data

    fenced = _FENCED_JSON.search(content)
    if fenced:
        data = _load_object(fenced.group(1).strip())
        if data is not None:
            return data

    span = _OBJECT_SPAN.search(content)
    if span:
        data = _load_object(span.group(0))
        if data is not None:
            return data

    logger.error(f"Failed to parse generator JSON: {content[:200]}")
    raise MalformedResponseError("Invalid JSON from AI service", details={"preview": content[:200]})


class OpenAIContentGenerator:
    """ContentGenerator backed by OpenAI chat completions"""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.settings.openai_api_key:
                logger.warning("OPENAI_API_KEY not set - listing generation will fail")
                raise UpstreamAuthError(AUTH_FAILED_MESSAGE)
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.openai_timeout,
                max_retries=0,
            )
        return self._client

    async def generate(self, prompt: BuiltPrompt) -> Dict[str, Any]:
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": prompt.system_instruction},
                    {"role": "user", "content": prompt.user_prompt},
                ],
                temperature=self.settings.openai_temperature,
                max_tokens=self.settings.openai_max_tokens,
                response_format={"type": "json_object"},
            )
        except (AuthenticationError, PermissionDeniedError) as e:
            logger.error(f"❌ OpenAI authentication failed: {e}")
            raise UpstreamAuthError(AUTH_FAILED_MESSAGE) from e
        except RateLimitError as e:
            raise UpstreamRateLimitError("AI service rate limit reached. Please try again shortly.") from e
        except APITimeoutError as e:
            raise UpstreamTimeoutError("AI service timed out") from e
        except APIError as e:
            raise UpstreamServerError(f"AI service error: {e}") from e

        content = response.choices[0].message.content
        if not content:
            raise MalformedResponseError("AI service returned an empty response")

        return parse_generator_response(content)
