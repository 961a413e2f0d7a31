# tests/unit/state/test_unit_json_state_store.py — v1
"""Tests for state/json_state_store.py."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from actcache.state.json_state_store import JsonStateStore
from actcache.state.state_factory import create_state_store


class TestJsonStateStore:
    @pytest.mark.asyncio
    async def test_get_missing(self, state_store: JsonStateStore):
        assert await state_store.get("CACHE_KEY") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, state_store: JsonStateStore):
        await state_store.set("CACHE_KEY", "linux-deps-v1")
        await state_store.set("CACHE_RESULT", "linux-deps-v0")
        assert await state_store.get("CACHE_KEY") == "linux-deps-v1"
        assert await state_store.get("CACHE_RESULT") == "linux-deps-v0"

    @pytest.mark.asyncio
    async def test_visible_to_new_instance(self, tmp_path: Path):
        first = JsonStateStore(tmp_path, run_id="42")
        await first.set("CACHE_KEY", "k")
        second = JsonStateStore(tmp_path, run_id="42")
        assert await second.get("CACHE_KEY") == "k"

    @pytest.mark.asyncio
    async def test_runs_are_isolated(self, tmp_path: Path):
        await JsonStateStore(tmp_path, run_id="1").set("CACHE_KEY", "a")
        assert await JsonStateStore(tmp_path, run_id="2").get("CACHE_KEY") is None

    @pytest.mark.asyncio
    async def test_run_id_sanitized(self, tmp_path: Path):
        store = JsonStateStore(tmp_path, run_id="a/b")
        await store.set("CACHE_KEY", "k")
        assert store.path.parent == tmp_path
        assert store.path.name == "a_b.json"

    @pytest.mark.asyncio
    async def test_corrupt_file_reads_empty(self, state_store: JsonStateStore):
        state_store.path.write_text("{not json")
        assert await state_store.get("CACHE_KEY") is None

    @pytest.mark.asyncio
    async def test_non_object_reads_empty(self, state_store: JsonStateStore):
        state_store.path.write_text(json.dumps(["CACHE_KEY"]))
        assert await state_store.get("CACHE_KEY") is None

    @pytest.mark.asyncio
    async def test_clear(self, state_store: JsonStateStore):
        await state_store.set("CACHE_KEY", "k")
        await state_store.clear()
        assert not state_store.path.exists()
        assert await state_store.get("CACHE_KEY") is None


class TestCreateStateStore:
    def test_uses_run_id(self, settings):
        store = create_state_store(settings)
        assert isinstance(store, JsonStateStore)
        assert store.path == settings.state_root / "1234.json"
