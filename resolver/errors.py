"""Failure taxonomy raised by translation providers."""

from __future__ import annotations


class ProviderError(RuntimeError):
    """Base class for provider call failures."""


class ProviderUnreachable(ProviderError):
    """Network error, timeout, or a non-authorization HTTP failure."""


class ProviderUnauthorized(ProviderError):
    """The provider rejected the credentials or denied permission."""


class ProviderMalformedResponse(ProviderUnreachable):
    """The provider answered, but without the fields we need."""


__all__ = [
    "ProviderError",
    "ProviderMalformedResponse",
    "ProviderUnauthorized",
    "ProviderUnreachable",
]
