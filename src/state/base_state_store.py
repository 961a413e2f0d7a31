# src/state/base_state_store.py — v1
"""Abstract run-state store interface.

Holds the string values the restore phase hands to the save phase of the
same run. The save phase only reads.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseStateStore(ABC):
    """Key-value state scoped to one run."""

    @abstractmethod
    async def get(self, name: str) -> str | None:
        """Return the stored value, or None when never set."""

    @abstractmethod
    async def set(self, name: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    async def clear(self) -> None:
        """Discard all state for the run."""
