# src/core/key_resolver.py — v1
"""Key Resolver: ask the backend for the best entry and classify the answer."""

from __future__ import annotations

import logging

from actcache.backend.base_cache_backend import BaseCacheBackend
from actcache.core.errors import classify_backend_error
from actcache.core.keys import is_exact_key_match
from actcache.core.models import ResolutionResult

logger = logging.getLogger(__name__)


class KeyResolver:
    """Turns the backend's raw matched key into a ResolutionResult."""

    def __init__(self, backend: BaseCacheBackend) -> None:
        self._backend = backend

    async def resolve(
        self, paths: list[str], primary_key: str, restore_keys: list[str]
    ) -> ResolutionResult:
        """Resolve primary_key against the backend, falling back to restore_keys.

        Returns NoMatch when the backend is unavailable; the failure is only
        logged.

        Raises:
            CacheValidationError: If the backend rejects the inputs.
        """
        try:
            matched_key = await self._backend.restore(paths, primary_key, restore_keys)
        except Exception as e:
            if classify_backend_error(e) == "validation":
                raise
            logger.error("Cache restore failed: %s", e)
            return ResolutionResult.no_match()

        if not matched_key:
            return ResolutionResult.no_match()
        if is_exact_key_match(primary_key, matched_key):
            return ResolutionResult.exact(matched_key)
        return ResolutionResult.fallback(matched_key)
