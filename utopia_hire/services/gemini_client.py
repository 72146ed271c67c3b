"""
Gemini API Client

Gemini exposes an OpenAI-compatible endpoint, so we use the openai library.

Two generation profiles are used:
- interview generation: creative but controlled (temperature 0.8)
- evaluation / analysis: more deterministic (temperature 0.3)

All calls go through with_retry() (exponential backoff) and responses are
cleaned with extract_json() because the model often wraps JSON in
markdown code fences.
"""
import json
import logging
import re
import time
from typing import Any, Callable, Optional, TypeVar

from openai import OpenAI

from utopia_hire.core.config import get_settings
from utopia_hire.core.errors import AIServiceError

logger = logging.getLogger(__name__)

settings = get_settings()

T = TypeVar("T")

INTERVIEW_PROFILE = {"temperature": 0.8, "top_p": 0.95, "max_tokens": 8192}
EVALUATOR_PROFILE = {"temperature": 0.3, "top_p": 0.85, "max_tokens": 8192}
DEFAULT_PROFILE = {"temperature": 0.7, "max_tokens": 2048}


def with_retry(fn: Callable[[], T], max_retries: int = 3, base_delay: float = 1.0) -> T:
    """
    Call fn() up to max_retries times, sleeping base_delay * 2^attempt
    between failures. The last error is re-raised.
    """
    last_error: Optional[Exception] = None
    for attempt in range(max_retries):
        try:
            return fn()
        except Exception as e:
            last_error = e
            logger.warning("AI call failed (attempt %d/%d): %s", attempt + 1, max_retries, e)
            if attempt < max_retries - 1:
                time.sleep(base_delay * (2 ** attempt))
    raise last_error


def extract_json(text: str) -> Any:
    """
    Extract JSON from an AI response.
    Handles ```json fences and, when the payload got truncated after a
    complete top-level array, falls back to the leading [...] block.
    """
    cleaned = (text or "").strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    cleaned = cleaned.strip()

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error("JSON parse error: %s; attempted to parse: %s...", e, cleaned[:500])
        array_match = re.match(r"^\[[\s\S]*\]", cleaned, re.MULTILINE)
        if array_match:
            try:
                return json.loads(array_match.group(0))
            except json.JSONDecodeError:
                pass
        raise AIServiceError(f"Failed to parse AI JSON response: {e}") from e


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker, keeping the content between them."""
    return re.sub(r"```(?:json)?\n?", "", (text or "").strip())


class GeminiClient:
    """
    Wrapper for the Gemini chat-completions endpoint.
    """

    def __init__(self):
        self.client = OpenAI(
            api_key=settings.gemini_api_key,
            base_url=settings.gemini_base_url
        )
        self.model = settings.gemini_model

    def generate(self, prompt: str, profile: Optional[dict] = None) -> str:
        """
        Single call, no retry. Returns raw text response.
        """
        options = dict(profile or DEFAULT_PROFILE)
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            **options
        )
        content = response.choices[0].message.content
        if not content:
            raise AIServiceError("Empty response from AI model")
        return content

    def generate_with_retry(
        self,
        prompt: str,
        profile: Optional[dict] = None,
        max_retries: Optional[int] = None,
        base_delay: Optional[float] = None
    ) -> str:
        return with_retry(
            lambda: self.generate(prompt, profile=profile),
            max_retries=max_retries or settings.ai_max_retries,
            base_delay=settings.ai_retry_base_delay if base_delay is None else base_delay
        )

    def test_connection(self) -> bool:
        """Test if the Gemini API is reachable"""
        try:
            response = self.generate("Reply with exactly: OK", profile={"max_tokens": 10})
            return "OK" in response.upper()
        except Exception as e:
            logger.error("Gemini connection failed: %s", e)
            return False


# Singleton instance
_gemini_client: GeminiClient = None


def get_gemini_client() -> GeminiClient:
    """Get or create Gemini client (singleton pattern)"""
    global _gemini_client
    if _gemini_client is None:
        _gemini_client = GeminiClient()
    return _gemini_client
