# tests/unit/backend/test_unit_backend_factory.py — v1
"""Tests for backend/backend_factory.py."""

from __future__ import annotations

import pytest

from actcache.backend.backend_factory import create_backend
from actcache.backend.local_backend import LocalCacheBackend
from actcache.config.settings import ConfigurationError, Settings


class TestCreateBackend:
    def test_default_local(self, settings):
        backend = create_backend(settings)
        assert isinstance(backend, LocalCacheBackend)
        assert settings.cache_root.is_dir()

    def test_s3_backend(self, settings):
        pytest.importorskip("boto3")
        from actcache.backend.s3_backend import S3CacheBackend
        s = settings.model_copy(update={
            "cache_backend": "s3",
            "cache_s3_bucket": "ci-cache",
            "cache_s3_region": "us-east-1",
        })
        backend = create_backend(s)
        assert isinstance(backend, S3CacheBackend)

    def test_chunk_size_default_passed_to_local(self, settings):
        s = settings.model_copy(update={"upload_chunk_size_default": 4096})
        assert create_backend(s)._default_chunk_size == 4096

    def test_chunk_size_default_passed_to_s3(self, settings):
        pytest.importorskip("boto3")
        s = settings.model_copy(update={
            "cache_backend": "s3",
            "cache_s3_bucket": "ci-cache",
            "cache_s3_region": "us-east-1",
            "upload_chunk_size_default": 8 * 1024 * 1024,
        })
        assert create_backend(s)._default_chunk_size == 8 * 1024 * 1024

    def test_s3_missing_bucket_rejected_by_settings(self, tmp_path):
        with pytest.raises(ConfigurationError, match="CACHE_S3_BUCKET"):
            Settings(_env_file=None, cache_backend="s3", cache_s3_bucket="")

    def test_s3_missing_bucket_rejected_by_factory(self, settings):
        s = settings.model_copy(update={"cache_backend": "s3", "cache_s3_bucket": ""})
        with pytest.raises(ValueError, match="CACHE_S3_BUCKET"):
            create_backend(s)

    def test_unsupported_backend(self, settings):
        s = settings.model_copy(update={"cache_backend": "gcs"})
        with pytest.raises(ValueError, match="Unsupported cache backend"):
            create_backend(s)
