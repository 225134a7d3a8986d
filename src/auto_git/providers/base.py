"""Base protocol and types for model providers."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from ..errors import (
    ConnectionFailedError,
    EmptyReplyError,
    GenerationError,
    ModelListError,
    ProviderError,
)

DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class ModelInfo:
    """A model offered by a provider."""

    name: str
    size: int | None = None
    modified_at: str | None = None

    def describe(self) -> str:
        """Short human-readable detail line, empty if nothing is known."""
        if self.size:
            return f"Size: {self.size} bytes"
        if self.modified_at:
            return f"Modified: {self.modified_at}"
        return ""


class Provider(ABC):
    """Abstract base class for model providers."""

    @abstractmethod
    def list_models(self) -> list[ModelInfo]:
        """Get the models available from this provider.

        Raises:
            ModelListError: If the list cannot be fetched or decoded
        """
        ...

    @abstractmethod
    def check_connection(self) -> None:
        """Verify that the provider is reachable.

        Raises:
            ConnectionFailedError: If the provider cannot be reached
        """
        ...

    @abstractmethod
    def generate_commit_message(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        """Generate a commit message.

        Args:
            model: Model name to use
            system_prompt: The system prompt defining behavior
            user_prompt: The user prompt containing the summary and diff

        Returns:
            The raw reply text

        Raises:
            GenerationError: If the request fails
            EmptyReplyError: If the model answered with no text
        """
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Get the display name for this provider."""
        ...


class HTTPProvider(Provider):
    """Shared HTTP plumbing for providers.

    Subclasses define:
        - PROVIDER_NAME: Display name for the provider
        - DEFAULT_BASE_URL: Base URL used when no endpoint is configured
        - ENV_VAR_NAME: Environment variable holding the API key
    """

    PROVIDER_NAME: str
    DEFAULT_BASE_URL: str
    ENV_VAR_NAME: str

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: Endpoint override (defaults to DEFAULT_BASE_URL)
            api_key: API key (defaults to the ENV_VAR_NAME environment variable)
            timeout: Request timeout in seconds
            transport: Custom httpx transport, mainly for tests
        """
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.api_key = (api_key or os.environ.get(self.ENV_VAR_NAME, "")).strip()

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        self._client = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def _request(
        self,
        method: str,
        path: str,
        error: type[ProviderError],
        action: str,
        **kwargs: Any,
    ) -> Any:
        """Send a request and decode the JSON body.

        Transport failures, non-200 answers and undecodable bodies are all
        raised as ``error``.
        """
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise error(f"Failed to {action} at {self.base_url}: {e}") from e

        if response.status_code != httpx.codes.OK:
            raise error(f"Unexpected status code {response.status_code}: {response.text}")

        try:
            return response.json()
        except ValueError as e:
            raise error(f"Failed to decode response from {self.PROVIDER_NAME}: {e}") from e

    def _chat_messages(self, system_prompt: str, user_prompt: str) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def get_name(self) -> str:
        """Get the display name for this provider."""
        return f"{self.PROVIDER_NAME} ({self.base_url})"

    def __del__(self) -> None:
        """Clean up HTTP client on deletion."""
        if hasattr(self, "_client"):
            self._client.close()


class OpenAICompatibleProvider(HTTPProvider):
    """Base class for providers speaking the OpenAI chat completions API."""

    def list_models(self) -> list[ModelInfo]:
        data = self._request("GET", "/models", ModelListError, "fetch models")
        try:
            return [ModelInfo(name=m["id"]) for m in data.get("data") or []]
        except (AttributeError, KeyError, TypeError) as e:
            raise ModelListError(f"Malformed model list from {self.PROVIDER_NAME}") from e

    def check_connection(self) -> None:
        self._request("GET", "/models", ConnectionFailedError, "connect to API server")

    def generate_commit_message(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        data = self._request(
            "POST",
            "/chat/completions",
            GenerationError,
            "send request",
            json={
                "model": model,
                "messages": self._chat_messages(system_prompt, user_prompt),
                "stream": False,
            },
        )

        try:
            choices = data.get("choices") or []
            message = choices[0]["message"]["content"] if choices else ""
        except (AttributeError, KeyError, TypeError) as e:
            raise GenerationError(f"Malformed response from {self.PROVIDER_NAME}") from e

        if not message:
            raise EmptyReplyError("Empty response from model")

        return message


__all__ = [
    "DEFAULT_TIMEOUT",
    "HTTPProvider",
    "ModelInfo",
    "OpenAICompatibleProvider",
    "Provider",
]
