from __future__ import annotations

from abc import ABC, abstractmethod
import logging
from typing import Any

import requests

from patent_chat.errors import (
    AuthenticationError,
    GenerationError,
    ModelUnavailableError,
    TransientGenerationError,
)

logger = logging.getLogger(__name__)

UNAVAILABLE_HINTS = ("decommissioned", "deprecated", "model_not_found", "does not exist", "no longer supported")
AUTH_HINTS = ("api key", "api_key", "invalid_api_key", "unauthorized")


class GenerationProvider(ABC):
    @abstractmethod
    def generate(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        raise NotImplementedError


def classify_failure(status_code: int | None, message: str, model: str | None = None) -> GenerationError:
    lowered = message.lower()
    if status_code in (401, 403) or any(h in lowered for h in AUTH_HINTS):
        return AuthenticationError(message, model=model, status_code=status_code)
    if status_code == 404 or any(h in lowered for h in UNAVAILABLE_HINTS):
        return ModelUnavailableError(message, model=model, status_code=status_code)
    return TransientGenerationError(message, model=model, status_code=status_code)


def _error_message(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason or f"HTTP {response.status_code}"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return str(error.get("message") or error.get("code") or error)
    return str(error or payload)


class GroqProvider(GenerationProvider):
    """OpenAI-compatible chat completions client (Groq by default)."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.groq.com/openai/v1",
        timeout: float = 30.0,
        top_p: float = 0.9,
    ) -> None:
        self.api_key = api_key
        self.url = base_url.rstrip("/") + "/chat/completions"
        self.timeout = timeout
        self.top_p = top_p

    def generate(
        self,
        messages: list[dict[str, str]],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        if not self.api_key:
            raise AuthenticationError("LLM API key not configured. Set GROQ_API_KEY.", model=model)

        payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": self.top_p,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        try:
            response = requests.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        except requests.Timeout as exc:
            raise TransientGenerationError(f"Request to {model} timed out after {self.timeout}s", model=model) from exc
        except requests.RequestException as exc:
            raise TransientGenerationError(f"Request to {model} failed: {exc}", model=model) from exc

        if not response.ok:
            raise classify_failure(response.status_code, _error_message(response), model=model)

        try:
            choices = response.json().get("choices") or []
            content = (choices[0].get("message") or {}).get("content") if choices else None
        except (ValueError, AttributeError) as exc:
            raise TransientGenerationError(f"Malformed response from {model}", model=model) from exc
        if content is not None and not isinstance(content, str):
            raise TransientGenerationError(f"Malformed response from {model}", model=model)
        if not content or not content.strip():
            raise TransientGenerationError(f"Empty completion from {model}", model=model)
        logger.debug("Completion from %s: %s chars", model, len(content))
        return content
