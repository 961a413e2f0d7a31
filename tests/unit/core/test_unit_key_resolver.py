# tests/unit/core/test_unit_key_resolver.py — v1
"""Tests for core/key_resolver.py — classification of backend answers."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock

import pytest

from actcache.core.errors import (
    CacheServiceError,
    CacheValidationError,
    ReserveCacheError,
)
from actcache.core.key_resolver import KeyResolver

PRIMARY = "linux-deps-v1"
RESTORE_KEYS = ["linux-deps-", "linux-"]


class TestKeyResolver:
    @pytest.mark.asyncio
    async def test_no_key_is_no_match(self, mock_backend):
        result = await KeyResolver(mock_backend).resolve(["deps"], PRIMARY, RESTORE_KEYS)
        assert result.kind == "none"
        mock_backend.restore.assert_awaited_once_with(["deps"], PRIMARY, RESTORE_KEYS)

    @pytest.mark.asyncio
    async def test_empty_key_is_no_match(self, mock_backend):
        mock_backend.restore = AsyncMock(return_value="")
        result = await KeyResolver(mock_backend).resolve(["deps"], PRIMARY, RESTORE_KEYS)
        assert result.kind == "none"

    @pytest.mark.asyncio
    async def test_primary_key_is_exact(self, mock_backend):
        mock_backend.restore = AsyncMock(return_value=PRIMARY)
        result = await KeyResolver(mock_backend).resolve(["deps"], PRIMARY, RESTORE_KEYS)
        assert result.kind == "exact"
        assert result.matched_key == PRIMARY

    @pytest.mark.asyncio
    async def test_other_key_is_fallback(self, mock_backend):
        mock_backend.restore = AsyncMock(return_value="linux-deps-v0")
        result = await KeyResolver(mock_backend).resolve(["deps"], PRIMARY, RESTORE_KEYS)
        assert result.kind == "fallback"
        assert result.matched_key == "linux-deps-v0"

    @pytest.mark.asyncio
    async def test_validation_error_propagates(self, mock_backend):
        mock_backend.restore = AsyncMock(side_effect=CacheValidationError("bad key"))
        with pytest.raises(CacheValidationError, match="bad key"):
            await KeyResolver(mock_backend).resolve(["deps"], PRIMARY, RESTORE_KEYS)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        CacheServiceError("503 Service Unavailable"),
        ReserveCacheError("odd"),
        ConnectionError("reset by peer"),
    ])
    async def test_other_errors_are_no_match(self, mock_backend, error, caplog):
        mock_backend.restore = AsyncMock(side_effect=error)
        with caplog.at_level(logging.ERROR):
            result = await KeyResolver(mock_backend).resolve(
                ["deps"], PRIMARY, RESTORE_KEYS
            )
        assert result.kind == "none"
        assert str(error) in caplog.text
