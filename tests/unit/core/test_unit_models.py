# tests/unit/core/test_unit_models.py — v1
"""Tests for core/models.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from actcache.core.models import (
    CacheInputs,
    ResolutionResult,
    SaveOutcome,
    UploadDecision,
)


class TestCacheInputs:
    def test_defaults(self):
        inputs = CacheInputs(paths=["deps"])
        assert inputs.key == ""
        assert inputs.restore_keys == []
        assert inputs.upload_chunk_size is None
        assert inputs.force_save is False

    def test_paths_required(self):
        with pytest.raises(ValidationError, match="path"):
            CacheInputs(key="k", paths=[])

    def test_chunk_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            CacheInputs(paths=["deps"], upload_chunk_size=0)

    def test_frozen(self):
        inputs = CacheInputs(paths=["deps"])
        with pytest.raises(ValidationError):
            inputs.key = "other"  # type: ignore[misc]


class TestResolutionResult:
    def test_no_match(self):
        result = ResolutionResult.no_match()
        assert result.kind == "none"
        assert result.matched_key is None
        assert not result.is_match
        assert not result.is_exact

    def test_exact(self):
        result = ResolutionResult.exact("k")
        assert result.is_match and result.is_exact
        assert result.matched_key == "k"

    def test_fallback(self):
        result = ResolutionResult.fallback("linux-deps-v0")
        assert result.is_match
        assert not result.is_exact


class TestSaveOutcome:
    def test_success_without_fatal_error(self):
        assert SaveOutcome(decision=UploadDecision.SKIP).success is True

    def test_failure_with_fatal_error(self):
        assert SaveOutcome(fatal_error="bad key").success is False
