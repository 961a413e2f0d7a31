# tests/unit/backend/test_unit_base_cache_backend.py — v1
"""Tests for backend/base_cache_backend.py — shared input validation."""

from __future__ import annotations

import pytest

from actcache.backend.base_cache_backend import (
    validate_key,
    validate_paths,
    validate_restore_request,
)
from actcache.core.errors import CacheValidationError


class TestValidation:
    def test_empty_paths(self):
        with pytest.raises(CacheValidationError, match="At least one directory"):
            validate_paths([])

    def test_key_with_comma(self):
        with pytest.raises(CacheValidationError, match="cannot contain commas"):
            validate_key("linux,deps")

    def test_key_too_long(self):
        with pytest.raises(CacheValidationError, match="512 characters"):
            validate_key("k" * 513)

    def test_key_at_limit(self):
        validate_key("k" * 512)

    def test_too_many_keys(self):
        with pytest.raises(CacheValidationError, match="maximum of 10"):
            validate_restore_request(["deps"], "p", [f"r{i}" for i in range(10)])

    def test_restore_keys_validated(self):
        with pytest.raises(CacheValidationError, match="commas"):
            validate_restore_request(["deps"], "p", ["ok", "bad,key"])

    def test_valid_request(self):
        validate_restore_request(["deps"], "p", [f"r{i}" for i in range(9)])
