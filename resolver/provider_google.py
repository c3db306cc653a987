"""Google Cloud Translation (v2 REST) client."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from resolver.config import GoogleTranslateSettings
from resolver.errors import ProviderMalformedResponse, ProviderUnauthorized, ProviderUnreachable

logger = logging.getLogger(__name__)

UNAUTHORIZED_STATUSES = {401, 403}
UNAUTHORIZED_REASONS = {"keyInvalid", "keyExpired", "forbidden", "accessNotConfigured"}
# Quota and rate limits are also reported as 403
RATE_LIMIT_REASONS = {
    "dailyLimitExceeded",
    "userRateLimitExceeded",
    "rateLimitExceeded",
    "quotaExceeded",
    "RATE_LIMIT_EXCEEDED",
}


class GoogleTranslator:
    """Calls the v2 ``translate`` endpoint with an API key."""

    def __init__(
        self,
        settings: GoogleTranslateSettings,
        client: Optional[httpx.Client] = None,
    ) -> None:
        if not settings.api_key:
            raise ValueError("GoogleTranslator requires an API key")
        self._settings = settings
        self._client = client or httpx.Client(timeout=settings.timeout_seconds)

    @property
    def name(self) -> str:
        return "google"

    def close(self) -> None:
        self._client.close()

    def translate(
        self,
        text: str,
        source_language: Optional[str],
        target_language: str,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"q": text, "target": target_language, "format": "text"}
        if source_language:
            body["source"] = source_language
        try:
            response = self._client.post(
                self._settings.endpoint,
                params={"key": self._settings.api_key},
                json=body,
                timeout=self._settings.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            raise ProviderUnreachable("Google Translate request timed out") from exc
        except httpx.HTTPError as exc:
            raise ProviderUnreachable(f"Google Translate request failed: {exc}") from exc

        if response.status_code >= 400:
            self._raise_for_error(response)
        return self._parse(response)

    def _raise_for_error(self, response: httpx.Response) -> None:
        message, reasons = _error_details(response)
        if reasons & RATE_LIMIT_REASONS:
            raise ProviderUnreachable(
                f"Google Translate quota or rate limit exceeded ({response.status_code}): {message}"
            )
        if response.status_code in UNAUTHORIZED_STATUSES or reasons & UNAUTHORIZED_REASONS:
            raise ProviderUnauthorized(
                f"Google Translate rejected the API key ({response.status_code}): {message}"
            )
        raise ProviderUnreachable(f"Google Translate error ({response.status_code}): {message}")

    @staticmethod
    def _parse(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
            translation = data["data"]["translations"][0]
            translated = translation["translatedText"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ProviderMalformedResponse("Unexpected Google Translate response") from exc
        if not isinstance(translated, str):
            raise ProviderMalformedResponse("Google Translate returned a non-string translation")
        return {
            "text": translated,
            "detected_language": translation.get("detectedSourceLanguage"),
        }


def _error_details(response: httpx.Response) -> tuple[str, set[str]]:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200], set()
    error = data.get("error", data) if isinstance(data, dict) else data
    if not isinstance(error, dict):
        return str(error), set()
    reasons = {
        str(item.get("reason"))
        for item in error.get("errors", [])
        if isinstance(item, dict) and item.get("reason")
    }
    for detail in error.get("details", []):
        if isinstance(detail, dict) and detail.get("reason"):
            reasons.add(str(detail["reason"]))
    # v2 reports a bad key as HTTP 400 with reason API_KEY_INVALID in details
    if "API_KEY_INVALID" in reasons:
        reasons.add("keyInvalid")
    return str(error.get("message", "")), reasons


def create_translator(settings: GoogleTranslateSettings) -> GoogleTranslator:
    return GoogleTranslator(settings)


__all__ = ["GoogleTranslator", "create_translator"]
