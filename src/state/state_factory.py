# src/state/state_factory.py — v1
"""Factory for the run-state store."""

from __future__ import annotations

from actcache.config.settings import Settings
from actcache.state.base_state_store import BaseStateStore
from actcache.state.json_state_store import JsonStateStore


def create_state_store(settings: Settings) -> BaseStateStore:
    """Return the state store for the current run (GITHUB_RUN_ID)."""
    return JsonStateStore(state_root=settings.state_root, run_id=settings.github_run_id)
