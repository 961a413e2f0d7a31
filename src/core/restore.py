# src/core/restore.py — v1
"""Restore Orchestrator: resolve the cache key and record it for the save phase.

Sequence:
  1. Run Gate; a rejected run is skipped with a warning.
  2. Commit the primary key to run state before any lookup, so the save
     phase always knows the key this run asked for.
  3. With force-save set, skip restoration entirely (hit=false).
  4. Resolve; on a match record the matched key. hit is true only for an
     exact match.
Validation errors fail the run; everything else degrades to a cache miss.
"""

from __future__ import annotations

import logging

from actcache.backend.base_cache_backend import BaseCacheBackend
from actcache.config.settings import Settings
from actcache.constants import Inputs, State
from actcache.core.errors import CacheValidationError, classify_backend_error
from actcache.core.key_resolver import KeyResolver
from actcache.core.models import CacheInputs, RestoreOutcome
from actcache.core.run_gate import RunGate
from actcache.logging.context import set_key_context
from actcache.state.base_state_store import BaseStateStore

logger = logging.getLogger(__name__)


class RestoreOrchestrator:
    """Drives one restore-phase invocation."""

    def __init__(
        self,
        settings: Settings,
        backend: BaseCacheBackend,
        state: BaseStateStore,
        gate: RunGate | None = None,
    ) -> None:
        self._state = state
        self._resolver = KeyResolver(backend)
        self._gate = gate or RunGate(settings)

    async def run(self, inputs: CacheInputs) -> RestoreOutcome:
        """Run the restore phase. Never raises; failures are in the outcome."""
        try:
            return await self._run(inputs)
        except Exception as e:
            if classify_backend_error(e) == "validation":
                logger.error("%s", e)
                return RestoreOutcome(hit=False, success=False, fatal_error=str(e))
            logger.warning("Cache restore aborted: %s", e)
            return RestoreOutcome(hit=False, success=False)

    async def _run(self, inputs: CacheInputs) -> RestoreOutcome:
        decision = self._gate.check()
        if not decision.allowed:
            logger.warning("%s", decision.reason)
            return RestoreOutcome(hit=False, success=decision.environment_supported)

        primary_key = inputs.key
        if not primary_key:
            raise CacheValidationError(
                f"Input required and not supplied: {Inputs.KEY.value}"
            )
        set_key_context(primary_key)
        await self._state.set(State.CACHE_PRIMARY_KEY.value, primary_key)

        if inputs.force_save:
            logger.info("force-save is set, skipping cache restore")
            return RestoreOutcome(hit=False)

        try:
            result = await self._resolver.resolve(
                inputs.paths, primary_key, inputs.restore_keys
            )
        except CacheValidationError:
            raise
        except Exception as e:
            logger.error("Cache lookup failed: %s", e)
            return RestoreOutcome(hit=False)

        if not result.is_match:
            logger.info(
                "Cache not found for input keys: %s",
                ", ".join([primary_key, *inputs.restore_keys]),
            )
            return RestoreOutcome(hit=False)

        await self._state.set(State.CACHE_MATCHED_KEY.value, result.matched_key)
        logger.info("Cache restored from key: %s", result.matched_key)
        return RestoreOutcome(hit=result.is_exact, matched_key=result.matched_key)
