"""Ollama provider for commit message generation."""

from ..errors import (
    ConnectionFailedError,
    EmptyReplyError,
    GenerationError,
    ModelListError,
)
from .base import HTTPProvider, ModelInfo


class OllamaProvider(HTTPProvider):
    """Ollama server provider, local or remote."""

    PROVIDER_NAME = "Ollama"
    DEFAULT_BASE_URL = "http://localhost:11434"
    ENV_VAR_NAME = "OLLAMA_API_KEY"

    def list_models(self) -> list[ModelInfo]:
        data = self._request("GET", "/api/tags", ModelListError, "fetch models")
        try:
            return [
                ModelInfo(
                    name=m["name"],
                    size=m.get("size") or None,
                    modified_at=m.get("modified_at") or None,
                )
                for m in data.get("models") or []
            ]
        except (AttributeError, KeyError, TypeError) as e:
            raise ModelListError("Malformed model list from Ollama") from e

    def check_connection(self) -> None:
        self._request("GET", "/api/tags", ConnectionFailedError, "connect to Ollama server")

    def generate_commit_message(
        self,
        model: str,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        data = self._request(
            "POST",
            "/api/chat",
            GenerationError,
            "send request",
            json={
                "model": model,
                "messages": self._chat_messages(system_prompt, user_prompt),
                "stream": False,
            },
        )

        try:
            message = (data.get("message") or {}).get("content") or ""
        except AttributeError as e:
            raise GenerationError("Malformed response from Ollama") from e

        if not message:
            raise EmptyReplyError("Empty response from model")

        return message
