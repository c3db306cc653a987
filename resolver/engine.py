"""Dictionary-first text resolution with a passthrough fallback."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from resolver.charsets import script_for_language, scripts_in
from resolver.config import PROVIDER_OPENAI, AppSettings
from resolver.dictionary import Dictionary, normalize
from resolver.errors import ProviderMalformedResponse, ProviderUnauthorized
from resolver.health import HealthState, ProviderHealth
from resolver.interfaces import TranslationProvider
from resolver.provider_google import create_translator as create_google_translator
from resolver.provider_openai import create_translator as create_openai_translator

logger = logging.getLogger(__name__)

VERIFY_TEXT = "water"

CacheKey = Tuple[str, str, str]


@dataclass(frozen=True)
class TranslationResult:
    original_text: str
    translated_text: str
    detected_language: str
    target_language: str
    skipped: bool = False


@dataclass(frozen=True)
class EngineStatus:
    configured: bool
    working: bool
    state: HealthState
    provider: Optional[str]
    dictionary_size: int
    cache_size: int


class TextResolutionEngine:
    """Resolves short texts between a source and a target language.

    Resolution order is the static dictionary, then the remote provider, then
    the input unchanged. Public operations never raise provider failures;
    they are logged and turned into the original text. Authorization failures
    disable the provider according to the health policy.

    One instance is meant to be built at startup and shared by every caller.
    The cache and health state are guarded by a lock that is never held
    during a provider call.
    """

    def __init__(
        self,
        provider: Optional[TranslationProvider],
        dictionary: Optional[Dictionary] = None,
        source_language: str = "uk",
        target_language: str = "en",
        reprobe_after_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if source_language == target_language:
            raise ValueError("source_language and target_language must differ")
        self._provider = provider
        self._dictionary = dictionary if dictionary is not None else Dictionary.load()
        self.source_language = source_language
        self.target_language = target_language
        self._health = ProviderHealth(
            configured=provider is not None,
            reprobe_after_seconds=reprobe_after_seconds,
            clock=clock,
        )
        self._cache: Dict[CacheKey, str] = {}
        self._lock = threading.RLock()
        if provider is None:
            logger.warning("Translation provider not configured, using dictionary only")

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    @property
    def health(self) -> HealthState:
        with self._lock:
            return self._health.state

    def resolve_to_target(self, text: str, source_language: Optional[str] = None) -> str:
        """Resolve ``text`` into the target language."""
        source = source_language or self.source_language
        return self._resolve(text, source, self.target_language, self._dictionary.to_target)

    def resolve_to_source(self, text: str, target_language: Optional[str] = None) -> str:
        """Resolve ``text`` written in the target language back into the source language."""
        origin = target_language or self.target_language
        return self._resolve(text, origin, self.source_language, self._dictionary.to_source)

    def detect_language(self, text: str) -> str:
        """Classify ``text`` as the source or the target language.

        Unambiguous scripts are decided locally. Mixed or script-less text is
        translated into the target language: an unchanged result means the
        text already was in the target language. Without a usable provider the
        source language is assumed.
        """
        if not normalize(text):
            return self.source_language

        source_script = script_for_language(self.source_language)
        target_script = script_for_language(self.target_language)
        if source_script != target_script:
            found = scripts_in(text)
            if source_script in found and target_script not in found:
                return self.source_language
            if target_script in found and source_script not in found:
                return self.target_language

        translated = self._call_provider(text, None, self.target_language)
        if translated is None:
            return self.source_language
        if normalize(translated) == normalize(text):
            return self.target_language
        return self.source_language

    def translate(
        self,
        text: str,
        target_language: str,
        source_language: Optional[str] = None,
    ) -> TranslationResult:
        """Translate towards either known language, detecting the origin when needed.

        Raises:
            ValueError: If ``target_language`` is neither of the engine's languages
        """
        target = target_language.lower()
        if target not in (self.source_language, self.target_language):
            raise ValueError(
                f"Unsupported target language '{target_language}', expected "
                f"'{self.source_language}' or '{self.target_language}'"
            )
        detected = source_language.lower() if source_language else self.detect_language(text)
        if detected == target:
            return TranslationResult(text, text, detected, target, skipped=True)
        if target == self.target_language:
            translated = self.resolve_to_target(text, detected)
        else:
            translated = self.resolve_to_source(text, detected)
        return TranslationResult(text, translated, detected, target)

    def verify(self) -> bool:
        """Probe the provider once; any failure marks it unhealthy."""
        if self._provider is None:
            return False
        try:
            payload = self._provider.translate(
                VERIFY_TEXT, self.target_language, self.source_language
            )
            if not isinstance(payload.get("text"), str):
                raise ProviderMalformedResponse("Verification response has no `text` field")
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Translation provider verification failed: {exc}")
            with self._lock:
                self._health.mark_probe_failed()
            return False
        logger.info(f"Translation provider '{self._provider.name}' verified")
        with self._lock:
            self._health.mark_success()
        return True

    def status(self) -> EngineStatus:
        with self._lock:
            return EngineStatus(
                configured=self._health.is_configured,
                working=self._health.is_healthy,
                state=self._health.state,
                provider=self._provider.name if self._provider is not None else None,
                dictionary_size=len(self._dictionary),
                cache_size=len(self._cache),
            )

    def close(self) -> None:
        """Release the provider's network resources."""
        if self._provider is not None:
            self._provider.close()

    def _resolve(
        self,
        text: str,
        source: str,
        target: str,
        lookup: Callable[[str], Optional[str]],
    ) -> str:
        known = lookup(text)
        if known is not None:
            logger.debug(f"Dictionary hit for '{text}' ({source}->{target})")
            return known

        normalized = normalize(text)
        if not normalized:
            return text

        key: CacheKey = (source, target, normalized)
        with self._lock:
            if not self._health.allows_call():
                return text
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        translated = self._call_provider(text, source, target)
        if translated is None:
            return text
        with self._lock:
            self._cache[key] = translated
        return translated

    def _call_provider(
        self,
        text: str,
        source: Optional[str],
        target: str,
    ) -> Optional[str]:
        """Call the provider, absorbing every failure. Returns None on failure."""
        with self._lock:
            if self._provider is None or not self._health.allows_call():
                return None
            probing = not self._health.is_healthy
        provider = self._provider

        logger.info(f"Translating from {source or 'auto'} to {target}: '{text}'")
        try:
            payload = provider.translate(text, source, target)
            translated = payload.get("text") if isinstance(payload, dict) else None
            if not isinstance(translated, str):
                raise ProviderMalformedResponse(f"{provider.name} response has no `text` field")
        except ProviderUnauthorized as exc:
            logger.error(f"Translation provider rejected credentials: {exc}")
            with self._lock:
                self._health.mark_unauthorized()
            return None
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"Translation failed for '{text}': {exc}")
            if probing:
                with self._lock:
                    self._health.mark_probe_failed()
            return None

        logger.info(f"Translation result: '{translated}'")
        with self._lock:
            self._health.mark_success()
        return translated


def _build_provider(settings: AppSettings) -> Optional[TranslationProvider]:
    if settings.provider == PROVIDER_OPENAI:
        if not settings.openai.is_configured:
            logger.warning("OpenAI translator not configured - OPENAI_API_KEY is missing")
            return None
        return create_openai_translator(settings.openai)

    if not settings.google.is_configured:
        logger.warning(
            "Google Translate API not configured - GOOGLE_TRANSLATE_API_KEY is missing"
        )
        return None
    return create_google_translator(settings.google)


def create_engine(settings: Optional[AppSettings] = None) -> TextResolutionEngine:
    """Build the process-wide engine from configuration."""
    settings = settings or AppSettings.load()
    engine_settings = settings.engine
    engine = TextResolutionEngine(
        provider=_build_provider(settings),
        dictionary=Dictionary.load(engine_settings.dictionary_path),
        source_language=engine_settings.source_language,
        target_language=engine_settings.target_language,
        reprobe_after_seconds=engine_settings.reprobe_after_seconds,
    )
    if engine.status().configured and engine_settings.verify_on_startup:
        engine.verify()
    return engine


__all__ = ["EngineStatus", "TextResolutionEngine", "TranslationResult", "create_engine"]
