# src/core/save.py — v1
"""Save Orchestrator: decide whether to upload and perform at most one upload.

The key uploaded is always the primary key committed during restore, not
one recomputed from this invocation's inputs.
"""

from __future__ import annotations

import logging

from actcache.backend.base_cache_backend import BaseCacheBackend
from actcache.config.settings import Settings
from actcache.constants import State
from actcache.core.errors import classify_backend_error
from actcache.core.keys import decide_upload
from actcache.core.models import CacheInputs, SaveOutcome, UploadDecision
from actcache.core.run_gate import RunGate
from actcache.logging.context import set_key_context
from actcache.state.base_state_store import BaseStateStore

logger = logging.getLogger(__name__)


class SaveOrchestrator:
    """Drives one save-phase invocation."""

    def __init__(
        self,
        settings: Settings,
        backend: BaseCacheBackend,
        state: BaseStateStore,
        gate: RunGate | None = None,
    ) -> None:
        self._backend = backend
        self._state = state
        self._gate = gate or RunGate(settings)

    async def run(self, inputs: CacheInputs) -> SaveOutcome:
        """Run the save phase. Never raises; only validation errors fail it."""
        try:
            return await self._run(inputs)
        except Exception as e:
            if classify_backend_error(e) == "validation":
                logger.error("%s", e)
                return SaveOutcome(decision=UploadDecision.SAVE, fatal_error=str(e))
            logger.warning("%s", e)
            return SaveOutcome()

    async def _run(self, inputs: CacheInputs) -> SaveOutcome:
        decision = self._gate.check()
        if not decision.allowed:
            logger.warning("%s", decision.reason)
            return SaveOutcome()

        primary_key = await self._state.get(State.CACHE_PRIMARY_KEY.value)
        if not primary_key:
            logger.warning("Error retrieving key from state.")
            return SaveOutcome()
        set_key_context(primary_key)

        matched_key = await self._state.get(State.CACHE_MATCHED_KEY.value)
        upload = decide_upload(primary_key, matched_key, inputs.force_save)
        if upload is UploadDecision.SKIP:
            logger.info(
                "Cache hit occurred on the primary key %s, not saving cache.",
                primary_key,
            )
            return SaveOutcome(decision=upload)

        try:
            await self._backend.save(
                inputs.paths, primary_key, upload_chunk_size=inputs.upload_chunk_size
            )
        except Exception as e:
            match classify_backend_error(e):
                case "validation":
                    raise
                case "reservation":
                    logger.info("%s", e)
                case _:
                    logger.warning("%s", e)
            return SaveOutcome(decision=upload)

        message = "Cache force save enabled" if inputs.force_save else "Cache saved"
        logger.info("%s with key: %s", message, primary_key)
        return SaveOutcome(decision=upload, saved=True)
