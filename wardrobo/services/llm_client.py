"""Chat-completion client for the hosted language model API."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_CHAT_MODEL = "gpt-4.1-nano"
DEFAULT_VISION_MODEL = "gpt-4o-mini"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


class LLMError(Exception):
    """Base class for language model failures surfaced to callers."""


class LLMConfigurationError(LLMError):
    """The model API cannot be called because configuration is missing."""


class LLMAPIError(LLMError):
    """The model API call failed or returned a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class LLMConfig:
    """Connection settings for the chat-completion endpoint."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    chat_model: str = DEFAULT_CHAT_MODEL
    vision_model: str = DEFAULT_VISION_MODEL
    timeout_seconds: float = 30.0
    vision_timeout_seconds: float = 12.0

    @classmethod
    def from_env(cls) -> "LLMConfig":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            base_url=os.getenv("OPENAI_BASE_URL", DEFAULT_BASE_URL),
            chat_model=os.getenv("OPENAI_CHAT_MODEL", DEFAULT_CHAT_MODEL),
            vision_model=os.getenv("OPENAI_VISION_MODEL", DEFAULT_VISION_MODEL),
            timeout_seconds=_env_float("OPENAI_TIMEOUT_SECONDS", 30.0),
            vision_timeout_seconds=_env_float("VISION_TIMEOUT_SECONDS", 12.0),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


class ChatCompletionClient:
    """Thin wrapper over ``POST /chat/completions``."""

    def __init__(self, config: Optional[LLMConfig] = None) -> None:
        self.config = config or LLMConfig.from_env()

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/chat/completions"

    def complete(
        self,
        messages: List[Dict[str, Any]],
        *,
        model: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 200,
        response_format: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Optional[str]:
        """Return the first choice's message content, or None when absent.

        Raises LLMConfigurationError without an API key and LLMAPIError when
        the request fails or the provider answers with a non-2xx status.
        """
        if not self.config.api_key:
            raise LLMConfigurationError("OPENAI_API_KEY is not configured")

        payload: Dict[str, Any] = {
            "model": model or self.config.chat_model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if response_format:
            payload["response_format"] = response_format

        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=timeout or self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.warning("Chat completion request failed: %s", exc)
            raise LLMAPIError(f"OpenAI API request failed: {exc}") from exc

        if not response.ok:
            try:
                error_text = response.text
            except Exception:
                error_text = ""
            logger.warning("Chat completion returned status %s", response.status_code)
            raise LLMAPIError(
                f"OpenAI API error: {response.status_code} {error_text}".rstrip(),
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Chat completion response was not JSON: %s", exc)
            return None

        choices = data.get("choices") if isinstance(data, dict) else None
        if not isinstance(choices, list) or not choices:
            return None
        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        return content if isinstance(content, str) else None
