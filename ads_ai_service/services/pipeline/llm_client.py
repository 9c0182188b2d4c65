from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ...config import Settings
from ..errors import UpstreamCallFailed, UpstreamContentUnusable, UpstreamUnavailable
from .json_recovery import parse_json_object
from .normalize import truncate
from .prompts import FILL_SYSTEM, VARIANT_SYSTEM

logger = logging.getLogger("ads-ai")
LLM_DEBUG_MAX_CHARS = 2000

_QUOTE_PAIRS = (('"', '"'), ("'", "'"), ("“", "”"), ("‘", "’"), ("«", "»"))


def _provider_error(response: requests.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        if message:
            return str(message)
    return response.text


def _message_content(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def strip_wrapping_quotes(text: str) -> str:
    value = text.strip()
    for opening, closing in _QUOTE_PAIRS:
        if len(value) >= 2 and value.startswith(opening) and value.endswith(closing):
            return value[1:-1].strip()
    return value


class ChatCompletionsClient:
    """OpenAI-compatible chat completions over plain HTTP.

    One instance per process; it holds no per-request state. The API key is
    only ever sent in the Authorization header.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.base_url = settings.OPENAI_BASE_URL.rstrip("/")

    @property
    def configured(self) -> bool:
        return self.settings.upstream_configured

    def _chat(
        self,
        *,
        model: str,
        temperature: float,
        system: str,
        prompt: str,
        response_format: Optional[dict[str, str]] = None,
    ) -> str:
        if not self.configured:
            raise UpstreamUnavailable("OPENAI_API_KEY is not set.")

        body: dict[str, Any] = {
            "model": model,
            "temperature": temperature,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        }
        if response_format:
            body["response_format"] = response_format

        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers={"Authorization": f"Bearer {self.settings.OPENAI_API_KEY}"},
                json=body,
                timeout=self.settings.UPSTREAM_TIMEOUT_SEC,
            )
        except requests.RequestException as exc:
            raise UpstreamCallFailed(f"{type(exc).__name__}: {exc}") from exc

        if not response.ok:
            raise UpstreamCallFailed(_provider_error(response), status=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamContentUnusable("Provider response body is not JSON.") from exc

        content = _message_content(data)
        if not content or not content.strip():
            raise UpstreamContentUnusable("Provider returned no content.")
        logger.debug(
            "LLM raw output model=%s (truncated): %s",
            model,
            truncate(content, LLM_DEBUG_MAX_CHARS),
        )
        return content

    def complete_json(self, prompt: str) -> dict[str, Any]:
        content = self._chat(
            model=self.settings.OPENAI_MODEL_JSON,
            temperature=self.settings.LLM_TEMPERATURE_JSON,
            system=FILL_SYSTEM,
            prompt=prompt,
            response_format={"type": "json_object"},
        )
        try:
            return parse_json_object(content)
        except ValueError as exc:
            raise UpstreamContentUnusable(str(exc)) from exc

    def complete_text(self, prompt: str) -> str:
        content = self._chat(
            model=self.settings.OPENAI_MODEL_TEXT,
            temperature=self.settings.LLM_TEMPERATURE_TEXT,
            system=VARIANT_SYSTEM,
            prompt=prompt,
        )
        text = strip_wrapping_quotes(content)
        if not text:
            raise UpstreamContentUnusable("Provider returned no content.")
        return text
