# src/state/json_state_store.py — v1
"""JSON file-based run state (one file per run id under STATE_ROOT)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from actcache.state.base_state_store import BaseStateStore

logger = logging.getLogger(__name__)


class JsonStateStore(BaseStateStore):
    """Run state persisted as a flat JSON object."""

    def __init__(self, state_root: Path, run_id: str) -> None:
        self._root = Path(state_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        safe_id = run_id.replace("/", "_").replace("\\", "_")
        self._path = self._root / f"{safe_id}.json"

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, name: str) -> str | None:
        """Retrieve a state value."""
        return self._load().get(name)

    async def set(self, name: str, value: str) -> None:
        """Store a state value; the file is replaced atomically."""
        data = self._load()
        data[name] = value
        tmp = self._path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)

    async def clear(self) -> None:
        """Remove the run's state file."""
        self._path.unlink(missing_ok=True)

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to read run state %s: %s", self._path.name, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed run state %s", self._path.name)
            return {}
        return {str(k): str(v) for k, v in data.items()}
