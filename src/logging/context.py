# src/logging/context.py — v1
"""Contextual logging support: attach run_id, phase and cache key to records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set once per phase invocation.
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)
_key: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "key", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    run_id: str | None = None
    phase: str | None = None
    key: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        run_id=_run_id.get(),
        phase=_phase.get(),
        key=_key.get(),
    )


def set_run_context(run_id: str, phase: str) -> None:
    """Set run-level context (called once per invocation)."""
    _run_id.set(run_id)
    _phase.set(phase)


def set_key_context(key: str | None) -> None:
    """Attach the primary key once it is known."""
    _key.set(key)


def clear_context() -> None:
    """Reset all context variables."""
    _run_id.set(None)
    _phase.set(None)
    _key.set(None)
