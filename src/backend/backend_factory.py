# src/backend/backend_factory.py — v1
"""Factory for cache backend instantiation."""

from __future__ import annotations

from actcache.backend.base_cache_backend import BaseCacheBackend
from actcache.config.settings import Settings


def create_backend(settings: Settings) -> BaseCacheBackend:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings (CACHE_BACKEND env var).

    Returns:
        Configured BaseCacheBackend implementation.

    Raises:
        ValueError: If the backend is unsupported or incompletely configured.
    """
    if settings.cache_backend == "local":
        from actcache.backend.local_backend import LocalCacheBackend
        return LocalCacheBackend(
            cache_root=settings.cache_root,
            workspace=settings.github_workspace,
            default_chunk_size=settings.upload_chunk_size_default,
        )

    if settings.cache_backend == "s3":
        from actcache.backend.s3_backend import S3CacheBackend
        if not settings.cache_s3_bucket:
            raise ValueError("CACHE_S3_BUCKET must be set when CACHE_BACKEND=s3")
        return S3CacheBackend(
            bucket=settings.cache_s3_bucket,
            workspace=settings.github_workspace,
            prefix=settings.cache_s3_prefix,
            region=settings.cache_s3_region or None,
            endpoint_url=settings.cache_s3_endpoint_url or None,
            default_chunk_size=settings.upload_chunk_size_default,
        )

    raise ValueError(f"Unsupported cache backend: {settings.cache_backend!r}")
