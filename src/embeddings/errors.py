# src/embeddings/errors.py - v1
"""Embedding error taxonomy.

Every error exposes ``is_retryable``; the retry helper consults it instead of
matching messages. classify_provider_error keeps the message-based fallback
for providers that only report auth/quota/billing problems in prose.
"""

from __future__ import annotations

_NON_RETRYABLE_MARKERS = ("api key", "quota", "billing")


class EmbeddingError(Exception):
    """Base class for all embedding acquisition failures."""

    @property
    def is_retryable(self) -> bool:
        return False


class EmbeddingValidationError(EmbeddingError, ValueError):
    """Input text is empty or too long."""


class ProviderAuthError(EmbeddingError):
    """Bad API key, exhausted quota or billing problem."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ProviderTransientError(EmbeddingError):
    """Timeout, connection failure or server-side error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def is_retryable(self) -> bool:
        return True


class MalformedResponseError(EmbeddingError):
    """Provider answered but the payload has no usable embeddings."""

    @property
    def is_retryable(self) -> bool:
        return True


class ExhaustedRetriesError(EmbeddingError):
    """All attempts failed with retryable errors."""

    def __init__(self, operation: str, attempts: int, last_error: Exception) -> None:
        self.operation = operation
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{operation} failed after {attempts} attempts: {last_error}"
        )


def classify_provider_error(
    message: str, status_code: int | None = None
) -> EmbeddingError:
    """Map a provider failure to an auth or transient error."""
    lowered = message.lower()
    if status_code in (401, 403) or any(m in lowered for m in _NON_RETRYABLE_MARKERS):
        return ProviderAuthError(message, status_code=status_code)
    return ProviderTransientError(message, status_code=status_code)
