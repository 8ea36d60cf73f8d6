"""LLM service - asks DashScope (通义千问) for the result-screen love message.

The SDK call is synchronous, so it runs in a worker thread and is bounded by
``settings.LLM_TIMEOUT``. Every failure is absorbed into a fixed fallback
sentence; callers always get a string back.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import yaml

from lovecalc.config import settings
from lovecalc.core.exceptions import ProviderCallFailed, ProviderUnavailable

logger = logging.getLogger(__name__)

PROMPT_DIR = Path(__file__).parent.parent / "data" / "prompts"

# Returned when no API key is configured
MISSING_CREDENTIAL_MESSAGE = "Your connection is written in the stars, a truly cosmic pairing!"
# Returned when the backend call fails for any reason
CALL_FAILED_MESSAGE = "Love is a beautiful journey, and yours is just beginning!"

DEFAULT_PROMPT = (
    "Generate a very short, playful, and romantic message for a couple named "
    "{name1} and {name2} whose love compatibility score is {percentage}%. "
    "The message should be one or two sentences long, optimistic, and fun. "
    "Do not mention the percentage in your response. Keep it sweet and simple."
)


class MessageProvider(Protocol):
    async def generate(self, name1: str, name2: str, percentage: int) -> str: ...


def _get_generation():
    """Lazy import of dashscope.Generation to avoid import-time crashes in test."""
    import dashscope
    from dashscope import Generation

    dashscope.api_key = settings.DASHSCOPE_API_KEY
    return Generation


def load_prompt_config(name: str = "love_message") -> dict:
    """Load a prompt YAML and return the full config dict."""
    path = PROMPT_DIR / f"{name}.yaml"
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


class LoveMessageService:
    def __init__(self):
        config = load_prompt_config()
        self.prompt_template: str = config.get("prompt") or DEFAULT_PROMPT
        self._model_params: dict = config.get("model_params", {})

    def build_prompt(self, name1: str, name2: str, percentage: int) -> str:
        return self.prompt_template.format(name1=name1, name2=name2, percentage=percentage)

    def _call_backend(self, prompt: str) -> str:
        """Blocking DashScope call. Raises on any unusable outcome."""
        if not settings.has_llm_credentials:
            raise ProviderUnavailable("DASHSCOPE_API_KEY is not set")

        Generation = _get_generation()
        response = Generation.call(
            model=settings.LLM_MODEL,
            messages=[{"role": "user", "content": prompt}],
            result_format="message",
            temperature=self._model_params.get("temperature", 0.9),
            top_p=self._model_params.get("top_p", 0.8),
            max_tokens=self._model_params.get("max_tokens", 120),
        )

        if response.status_code != 200:
            raise ProviderCallFailed(
                f"LLM API error: {response.status_code} - {response.message}"
            )
        try:
            content = response.output.choices[0].message.content
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            raise ProviderCallFailed(f"Malformed LLM response: {e!r}") from e
        if not isinstance(content, str) or not content.strip():
            raise ProviderCallFailed("LLM returned an empty message")
        return content.strip()

    async def generate(self, name1: str, name2: str, percentage: int) -> str:
        """Return a one-to-two sentence message for the couple, or a fallback."""
        try:
            prompt = self.build_prompt(name1, name2, percentage)
            return await asyncio.wait_for(
                asyncio.to_thread(self._call_backend, prompt),
                timeout=settings.LLM_TIMEOUT,
            )
        except ProviderUnavailable:
            logger.error("DASHSCOPE_API_KEY environment variable not set")
            return MISSING_CREDENTIAL_MESSAGE
        except asyncio.TimeoutError:
            logger.warning("Love message request timed out after %ss", settings.LLM_TIMEOUT)
            return CALL_FAILED_MESSAGE
        except Exception:
            logger.exception("Error generating love message")
            return CALL_FAILED_MESSAGE


love_message_service = LoveMessageService()
