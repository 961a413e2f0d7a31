# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides settings bound to temp directories, a mocked cache backend, and a
file-backed run-state store. No network access.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from actcache.config.settings import Settings
from actcache.core.models import CacheInputs
from actcache.state.json_state_store import JsonStateStore


# === FIXTURES: Directories ===


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Workspace with a small dependency tree to cache."""
    ws = tmp_path / "workspace"
    deps = ws / "deps"
    deps.mkdir(parents=True)
    (deps / "lib.txt").write_text("lib v1", encoding="utf-8")
    (deps / "nested").mkdir()
    (deps / "nested" / "data.bin").write_bytes(b"\x00\x01\x02")
    return ws


@pytest.fixture
def settings(tmp_path: Path, workspace: Path) -> Settings:
    """Settings for a supported push run, isolated from the real environment."""
    return Settings(
        _env_file=None,
        github_event_name="push",
        github_ref="refs/heads/main",
        github_server_url="https://github.com",
        github_run_id="1234",
        github_workspace=workspace,
        cache_root=tmp_path / "cache",
        state_root=tmp_path / "state",
    )


# === FIXTURES: Collaborators ===


@pytest.fixture
def mock_backend() -> AsyncMock:
    """Backend that matches nothing and saves successfully."""
    backend = AsyncMock()
    backend.restore = AsyncMock(return_value=None)
    backend.save = AsyncMock(return_value=None)
    return backend


@pytest.fixture
def state_store(tmp_path: Path) -> JsonStateStore:
    return JsonStateStore(state_root=tmp_path / "state", run_id="1234")


@pytest.fixture
def restore_inputs() -> CacheInputs:
    return CacheInputs(
        key="linux-deps-v1",
        paths=["deps"],
        restore_keys=["linux-deps-", "linux-"],
    )


@pytest.fixture
def save_inputs() -> CacheInputs:
    return CacheInputs(paths=["deps"])
