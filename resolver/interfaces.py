"""Core interfaces for dependency inversion."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Protocol

Message = Mapping[str, str]


class TranslationProvider(Protocol):
    """Protocol for remote translators used by the resolution engine.

    Implementations wrap one managed translation service (Google Cloud
    Translation, an OpenAI model, ...) so the engine can swap providers
    without changing its resolution rules.
    """

    @property
    def name(self) -> str:
        """Return a short provider identifier (e.g., 'google', 'openai:gpt-4.1-mini')."""
        ...

    def close(self) -> None:
        """Release network resources held by the provider."""
        ...

    def translate(
        self,
        text: str,
        source_language: Optional[str],
        target_language: str,
    ) -> Dict[str, Any]:
        """Translate ``text`` and return a payload with at least a ``text`` key.

        Args:
            text: Raw text to translate
            source_language: Two-letter tag, or None to let the provider detect it
            target_language: Two-letter tag of the desired output language

        Returns:
            Dictionary with the translated ``text`` and optional provider metadata

        Raises:
            ProviderUnauthorized: If the credentials are rejected
            ProviderUnreachable: On network, timeout, or malformed-response failures
        """
        ...


__all__ = ["Message", "TranslationProvider"]
