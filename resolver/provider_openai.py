"""OpenAI chat completions translator."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Optional, cast

import openai
from openai import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    PermissionDeniedError,
    RateLimitError,
)

from resolver.config import OpenAISettings, load_language_names
from resolver.errors import ProviderMalformedResponse, ProviderUnauthorized, ProviderUnreachable
from resolver.interfaces import Message

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You translate short culinary texts such as ingredient and dish names. "
    "Return a JSON object with a single key `text` holding the translation. "
    "Do not add explanations, quantities or punctuation that are not in the source. "
    "If the text is already in the target language, return it unchanged."
)


class OpenAITranslator:
    """Thin wrapper around the OpenAI chat completions API."""

    def __init__(self, settings: OpenAISettings, client: Optional[Any] = None) -> None:
        if client is None and not settings.api_key:
            raise ValueError("OpenAITranslator requires an API key")
        self._settings = settings
        self._client = client if client is not None else openai.OpenAI(api_key=settings.api_key)
        self._language_names = load_language_names()

    @property
    def name(self) -> str:
        return f"openai:{self._settings.model}"

    def close(self) -> None:
        self._client.close()

    def translate(
        self,
        text: str,
        source_language: Optional[str],
        target_language: str,
    ) -> Dict[str, Any]:
        payload = self._complete(self._make_messages(text, source_language, target_language))
        translated = payload.get("text")
        if not isinstance(translated, str):
            raise ProviderMalformedResponse("OpenAI response has no string `text` field")
        return {"text": translated}

    def _language_name(self, code: str) -> str:
        return self._language_names.get(code.lower(), code)

    def _make_messages(
        self,
        text: str,
        source_language: Optional[str],
        target_language: str,
    ) -> List[Message]:
        if source_language:
            instruction = (
                f"Translate from {self._language_name(source_language)} "
                f"to {self._language_name(target_language)}."
            )
        else:
            instruction = (
                f"Detect the language and translate to {self._language_name(target_language)}."
            )
        context = {"instructions": instruction, "text": text}
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": json.dumps(context, ensure_ascii=False)},
        ]

    def _complete(self, messages: List[Message]) -> Dict[str, Any]:  # noqa: PLR0912
        """Execute completion, retrying only transient failures."""
        delay = 1.0
        last_attempt = self._settings.max_retries - 1
        for attempt in range(self._settings.max_retries):
            try:
                client = cast(Any, self._client.chat.completions)
                request = {
                    "model": self._settings.model,
                    "messages": messages,
                    "response_format": {"type": "json_object"},
                    "timeout": self._settings.timeout_seconds,
                }
                if self._settings.temperature is not None:
                    request["temperature"] = self._settings.temperature
                response = client.create(**request)
                content = response.choices[0].message.content or "{}"
                try:
                    parsed = json.loads(content)
                except json.JSONDecodeError as exc:
                    raise ProviderMalformedResponse("OpenAI returned invalid JSON") from exc
                if not isinstance(parsed, dict):
                    raise ProviderMalformedResponse("OpenAI response is not a JSON object")
                return parsed
            except AuthenticationError as exc:
                raise ProviderUnauthorized(
                    "OpenAI authentication failed. Verify API key and organization."
                ) from exc
            except PermissionDeniedError as exc:
                raise ProviderUnauthorized(
                    "OpenAI permission denied. Ensure the key has access to the project."
                ) from exc
            except RateLimitError as exc:
                raise ProviderUnreachable(
                    "OpenAI rate limit or quota exceeded. "
                    "Check billing settings or slow down requests."
                ) from exc
            except BadRequestError as exc:
                raise ProviderUnreachable(f"OpenAI rejected the request: {exc}") from exc
            except (APIConnectionError, APITimeoutError) as exc:
                if attempt == last_attempt:
                    raise ProviderUnreachable(
                        "Failed to connect to OpenAI after multiple retries."
                    ) from exc
                logger.warning(f"OpenAI connection problem, retrying ({attempt + 1})")
            except APIError as exc:
                if attempt == last_attempt:
                    raise ProviderUnreachable("OpenAI API error persisted after retries.") from exc
                logger.warning(f"OpenAI API error, retrying ({attempt + 1}): {exc}")
            time.sleep(delay)
            delay *= 1.8
        raise ProviderUnreachable("OpenAI client exceeded maximum retries")


def create_translator(settings: OpenAISettings) -> OpenAITranslator:
    return OpenAITranslator(settings)


__all__ = ["OpenAITranslator", "create_translator"]
