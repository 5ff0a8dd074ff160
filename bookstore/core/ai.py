"""
Text generation client for the dashboard analysis.
Talks to Gemini through its OpenAI-compatible endpoint using the openai SDK.
"""

import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from bookstore.core.config import Config
from bookstore.core.exceptions import AIAnalysisError, ProviderUnavailableError

logger = logging.getLogger(__name__)

# Overload, rate limiting, timeouts and dropped connections. The SDK already
# retried these with exponential backoff before they reach us.
TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class AIClient:
    """Thin async wrapper around a chat completion model."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        temperature: float = 0.5,
        timeout: float = 60.0,
        max_retries: int = 3,
    ):
        client_kwargs = {
            "api_key": api_key,
            "timeout": timeout,
            "max_retries": max_retries,
        }
        if base_url:
            client_kwargs["base_url"] = base_url

        self._client = AsyncOpenAI(**client_kwargs)
        self.model = model
        self.temperature = temperature

    async def generate(self, prompt: str) -> str:
        """
        Generate text for a single user prompt.

        Raises:
            ProviderUnavailableError: Provider overloaded, rate limited or unreachable
            AIAnalysisError: Any other provider-side failure
        """
        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
            )
        except TRANSIENT_ERRORS as exc:
            logger.warning(f"AI provider unavailable ({type(exc).__name__}): {exc}")
            raise ProviderUnavailableError(str(exc)) from exc
        except openai.APIError as exc:
            raise AIAnalysisError(str(exc)) from exc

        text = ""
        if completion.choices and completion.choices[0].message:
            text = completion.choices[0].message.content or ""
        return text.strip()

    async def close(self) -> None:
        await self._client.close()


def build_ai_client(settings: Config) -> Optional[AIClient]:
    """Create the AI client, or None when no API key is configured."""
    if not settings.gemini_api_key:
        return None
    return AIClient(
        api_key=settings.gemini_api_key,
        model=settings.ai_model,
        base_url=settings.ai_base_url,
        temperature=settings.ai_temperature,
        timeout=settings.ai_timeout_seconds,
        max_retries=settings.ai_max_retries,
    )
