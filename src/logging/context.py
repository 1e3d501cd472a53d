# src/logging/context.py - v2
"""Contextual logging support: attach check_id and operation to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_check_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "check_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    check_id: str | None = None
    operation: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(check_id=_check_id.get(), operation=_operation.get())


def set_check_context(check_id: str, operation: str | None = None) -> None:
    """Set context for one originality check or generation run."""
    _check_id.set(check_id)
    _operation.set(operation)


def set_operation(operation: str | None) -> None:
    _operation.set(operation)


def clear_context() -> None:
    """Reset all context variables."""
    _check_id.set(None)
    _operation.set(None)
