"""Model provider implementations for commit message generation."""

from __future__ import annotations

import os

import httpx

from ..errors import UnknownProviderError
from .base import HTTPProvider, ModelInfo, Provider
from .ollama import OllamaProvider
from .openai import OpenAIProvider
from .siliconflow import SiliconFlowProvider

PROVIDERS: dict[str, type[HTTPProvider]] = {
    "ollama": OllamaProvider,
    "siliconflow": SiliconFlowProvider,
    "openai": OpenAIProvider,
}

__all__ = [
    "ModelInfo",
    "Provider",
    "HTTPProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "SiliconFlowProvider",
    "PROVIDERS",
    "api_key_env_var",
    "create_provider",
    "get_api_key",
    "normalize_provider_name",
]


def normalize_provider_name(provider: str) -> str:
    """Trim and lower-case a provider identifier.

    Raises:
        UnknownProviderError: If the identifier is not a supported provider
    """
    name = provider.strip().lower()
    if name not in PROVIDERS:
        raise UnknownProviderError(
            f"Unknown provider type: {name} (supported: {', '.join(PROVIDERS)})"
        )
    return name


def api_key_env_var(provider: str) -> str:
    """Get the environment variable holding the API key for ``provider``."""
    return PROVIDERS[normalize_provider_name(provider)].ENV_VAR_NAME


def get_api_key(provider: str) -> str:
    """Read the API key for ``provider`` from the environment ("" if unset)."""
    return os.environ.get(api_key_env_var(provider), "").strip()


def create_provider(
    provider: str,
    endpoint: str | None = None,
    api_key: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Provider:
    """Factory function to create a provider instance.

    Args:
        provider: Provider name - 'ollama', 'siliconflow' or 'openai'
        endpoint: Base URL override (provider default if empty)
        api_key: API key (read from the provider's environment variable if empty)
        transport: Custom httpx transport, mainly for tests

    Returns:
        A Provider instance

    Raises:
        UnknownProviderError: If provider is unknown
    """
    provider_cls = PROVIDERS[normalize_provider_name(provider)]
    return provider_cls(base_url=endpoint or None, api_key=api_key, transport=transport)
