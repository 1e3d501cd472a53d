# src/embeddings/openai_provider.py - v1
"""OpenAI embeddings provider.

Uses the openai SDK as transport (SDK-level retries disabled; retries are
owned by EmbeddingClient) and validates the raw JSON payload itself so that
malformed responses surface as MalformedResponseError.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from originality_guard.embeddings.base_provider import (
    BaseEmbeddingProvider,
    parse_embedding_payload,
)
from originality_guard.embeddings.errors import (
    MalformedResponseError,
    ProviderAuthError,
    ProviderTransientError,
    classify_provider_error,
)
from originality_guard.embeddings.models import ProviderResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIEmbeddingProvider(BaseEmbeddingProvider):
    """Embeddings via the OpenAI ``/embeddings`` endpoint."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 30.0,
        http_client: Any = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout_s = timeout_s
        self._http_client = http_client
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            self.__client = openai.AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout_s,
                max_retries=0,
                http_client=self._http_client,
            )
        return self.__client

    @property
    def provider_name(self) -> str:
        return "openai"

    async def embed(self, texts: list[str], model: str) -> ProviderResponse:
        if not self._api_key:
            raise ProviderAuthError("Embedding provider API key is not configured")

        import openai

        payload_input: str | list[str] = texts[0] if len(texts) == 1 else texts
        try:
            raw = await self._client.embeddings.with_raw_response.create(
                model=model,
                input=payload_input,
                encoding_format="float",
            )
        except openai.APIStatusError as e:
            raise classify_provider_error(
                _status_message(e), status_code=e.status_code
            ) from e
        except openai.APIConnectionError as e:
            # Includes APITimeoutError
            raise ProviderTransientError(f"Embedding provider unreachable: {e}") from e

        try:
            payload = json.loads(raw.text)
        except ValueError as e:
            raise MalformedResponseError(
                "Embedding provider returned a non-JSON body"
            ) from e
        return parse_embedding_payload(payload, expected=len(texts))


def _status_message(error: Any) -> str:
    """Build an error message surfacing the provider's ``error.message``."""
    body = getattr(error, "body", None)
    detail = body.get("message") if isinstance(body, dict) else None
    reason = getattr(getattr(error, "response", None), "reason_phrase", "") or ""
    text = f"Embedding provider error: {error.status_code} {reason}".rstrip()
    return f"{text}. {detail or error.message}"
