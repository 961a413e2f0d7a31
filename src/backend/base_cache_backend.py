# src/backend/base_cache_backend.py — v1
"""Abstract cache backend interface plus the input checks every backend shares."""

from __future__ import annotations

from abc import ABC, abstractmethod

from actcache.constants import MAX_KEY_COUNT, MAX_KEY_LENGTH
from actcache.core.errors import CacheValidationError


class BaseCacheBackend(ABC):
    """Storage service holding one archive per cache key.

    Implementations report every failure synchronously through the
    CacheBackendError hierarchy.
    """

    @abstractmethod
    async def restore(
        self, paths: list[str], primary_key: str, restore_keys: list[str]
    ) -> str | None:
        """Restore the best entry into the workspace and return its key.

        The primary key is tried exactly first, then each restore key in
        order as a prefix. Returns None when nothing matches.
        """

    @abstractmethod
    async def save(
        self, paths: list[str], key: str, upload_chunk_size: int | None = None
    ) -> None:
        """Archive paths and store them under key.

        Raises:
            ReserveCacheError: If an entry for key exists or is being created.
        """


def validate_paths(paths: list[str]) -> None:
    if not paths:
        raise CacheValidationError(
            "Path Validation Error: At least one directory or file path is required"
        )


def validate_key(key: str) -> None:
    if len(key) > MAX_KEY_LENGTH:
        raise CacheValidationError(
            f"Key Validation Error: {key} cannot be larger than "
            f"{MAX_KEY_LENGTH} characters."
        )
    if "," in key:
        raise CacheValidationError(
            f"Key Validation Error: {key} cannot contain commas."
        )


def validate_restore_request(
    paths: list[str], primary_key: str, restore_keys: list[str]
) -> None:
    """Raise CacheValidationError for inputs no backend should accept."""
    validate_paths(paths)
    keys = [primary_key, *restore_keys]
    if len(keys) > MAX_KEY_COUNT:
        raise CacheValidationError(
            f"Key Validation Error: Keys are limited to a maximum of {MAX_KEY_COUNT}."
        )
    for key in keys:
        validate_key(key)
