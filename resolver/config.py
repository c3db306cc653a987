"""Configuration helpers for the text resolution engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

try:
    from dotenv import load_dotenv
except ImportError as exc:  # pragma: no cover - import guard
    raise RuntimeError(
        "python-dotenv is required. Install dependencies via 'pip install -e .'."
    ) from exc

PROVIDER_GOOGLE = "google"
PROVIDER_OPENAI = "openai"
SUPPORTED_PROVIDERS = (PROVIDER_GOOGLE, PROVIDER_OPENAI)

DEFAULT_PROVIDER = PROVIDER_GOOGLE
DEFAULT_SOURCE_LANGUAGE = "uk"
DEFAULT_TARGET_LANGUAGE = "en"
DEFAULT_GOOGLE_ENDPOINT = "https://translation.googleapis.com/language/translate/v2"
DEFAULT_GOOGLE_TIMEOUT_SECONDS = 10.0
DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_MAX_RETRIES = 3

LANGUAGES_FILE = Path(__file__).with_name("languages.yml")

TRUTHY = {"1", "true", "yes", "on"}
FALSY = {"0", "false", "no", "off"}


load_dotenv()


@dataclass(frozen=True)
class GoogleTranslateSettings:
    """Settings for the Cloud Translation v2 REST client."""

    api_key: Optional[str] = None
    endpoint: str = DEFAULT_GOOGLE_ENDPOINT
    timeout_seconds: float = DEFAULT_GOOGLE_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "GoogleTranslateSettings":
        return cls(
            api_key=os.getenv("GOOGLE_TRANSLATE_API_KEY") or None,
            endpoint=os.getenv("GOOGLE_TRANSLATE_ENDPOINT", DEFAULT_GOOGLE_ENDPOINT),
            timeout_seconds=_get_float(
                "GOOGLE_TRANSLATE_TIMEOUT_SECONDS", DEFAULT_GOOGLE_TIMEOUT_SECONDS
            ),
        )


@dataclass(frozen=True)
class OpenAISettings:
    """Settings container for the OpenAI client."""

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_retries: int = DEFAULT_MAX_RETRIES
    timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    temperature: Optional[float] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "OpenAISettings":
        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            model=os.getenv("OPENAI_MODEL", DEFAULT_MODEL),
            max_retries=_get_int("OPENAI_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            timeout_seconds=_get_int("OPENAI_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            temperature=_get_optional_float("OPENAI_TEMPERATURE"),
        )


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer, got: {raw}") from exc


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float, got: {raw}") from exc


def _get_optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be a float, got: {raw}") from exc


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got: {raw}")


def _get_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if not raw:
        return None
    return Path(raw)


@dataclass(frozen=True)
class EngineSettings:
    """Runtime knobs for the text resolution engine.

    ``reprobe_after_seconds`` selects the recovery policy of the provider
    health flag: ``None`` keeps an unhealthy provider disabled for the life of
    the process, a number allows one real call once that many seconds have
    passed since the last failure.
    """

    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE
    reprobe_after_seconds: Optional[float] = None
    verify_on_startup: bool = True
    dictionary_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "EngineSettings":
        source = os.getenv("TRANSLATION_SOURCE_LANGUAGE", DEFAULT_SOURCE_LANGUAGE).lower()
        target = os.getenv("TRANSLATION_TARGET_LANGUAGE", DEFAULT_TARGET_LANGUAGE).lower()
        if source == target:
            raise ValueError(
                f"Source and target languages must differ, both are configured as: {source}"
            )
        reprobe = _get_optional_float("TRANSLATION_REPROBE_AFTER_SECONDS")
        if reprobe is not None and reprobe < 0:
            raise ValueError(
                f"TRANSLATION_REPROBE_AFTER_SECONDS must not be negative, got: {reprobe}"
            )
        return cls(
            source_language=source,
            target_language=target,
            reprobe_after_seconds=reprobe,
            verify_on_startup=_get_bool("TRANSLATION_VERIFY_ON_STARTUP", True),
            dictionary_path=_get_path("TRANSLATION_DICTIONARY_PATH"),
        )


@dataclass(frozen=True)
class AppSettings:
    """Aggregates configuration needed to build an engine."""

    provider: str = DEFAULT_PROVIDER
    google: GoogleTranslateSettings = field(default_factory=GoogleTranslateSettings)
    openai: OpenAISettings = field(default_factory=OpenAISettings)
    engine: EngineSettings = field(default_factory=EngineSettings)

    @classmethod
    def load(cls) -> "AppSettings":
        provider = os.getenv("TRANSLATION_PROVIDER", DEFAULT_PROVIDER).strip().lower()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"TRANSLATION_PROVIDER must be one of {', '.join(SUPPORTED_PROVIDERS)}, "
                f"got: {provider}"
            )
        return cls(
            provider=provider,
            google=GoogleTranslateSettings.from_env(),
            openai=OpenAISettings.from_env(),
            engine=EngineSettings.from_env(),
        )


def load_language_names(languages_file: Optional[Path] = None) -> Dict[str, str]:
    """Load language code to name mapping, by default from the packaged languages.yml."""
    languages_file = languages_file or LANGUAGES_FILE
    if not languages_file.exists():
        return {
            "uk": "Ukrainian",
            "en": "English",
            "ru": "Russian",
            "pl": "Polish",
            "de": "German",
        }

    try:
        data = yaml.safe_load(languages_file.read_text(encoding="utf-8"))
        if not isinstance(data, dict) or "languages" not in data:
            raise ValueError("languages.yml must contain a 'languages' mapping")
        return {str(k).lower(): str(v) for k, v in data["languages"].items()}
    except Exception as e:
        raise RuntimeError(f"Failed to load language configuration: {e}") from e


__all__ = [
    "AppSettings",
    "EngineSettings",
    "GoogleTranslateSettings",
    "OpenAISettings",
    "PROVIDER_GOOGLE",
    "PROVIDER_OPENAI",
    "load_language_names",
]
