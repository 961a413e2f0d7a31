# src/backend/local_backend.py — v1
"""Filesystem cache backend (default CACHE_BACKEND=local).

Each entry is a tar.gz archive plus a JSON index record under CACHE_ROOT.
Keys are case-insensitive: the file name is derived from the casefolded key.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from actcache.backend.archive import copy_in_chunks, create_archive, extract_archive
from actcache.backend.base_cache_backend import (
    BaseCacheBackend,
    validate_key,
    validate_paths,
    validate_restore_request,
)
from actcache.backend.models import CacheEntryRecord
from actcache.constants import DEFAULT_UPLOAD_CHUNK_SIZE
from actcache.core.errors import CacheServiceError, ReserveCacheError

logger = logging.getLogger(__name__)


class LocalCacheBackend(BaseCacheBackend):
    """Cache entries stored in a local (or shared-mount) directory."""

    def __init__(
        self,
        cache_root: Path,
        workspace: Path,
        default_chunk_size: int = DEFAULT_UPLOAD_CHUNK_SIZE,
    ) -> None:
        self._root = Path(cache_root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._workspace = Path(workspace)
        self._default_chunk_size = default_chunk_size

    async def restore(
        self, paths: list[str], primary_key: str, restore_keys: list[str]
    ) -> str | None:
        """Restore the primary key, else the newest entry per restore-key prefix."""
        validate_restore_request(paths, primary_key, restore_keys)

        record = self._find(primary_key, restore_keys)
        if record is None:
            return None

        logger.debug("Extracting %s for key %s", record.archive, record.key)
        extract_archive(self._root / record.archive, self._workspace)
        return record.key

    async def save(
        self, paths: list[str], key: str, upload_chunk_size: int | None = None
    ) -> None:
        """Reserve key, archive paths and commit the entry."""
        validate_paths(paths)
        validate_key(key)

        record_path = self._record_path(key)
        record = CacheEntryRecord(
            key=key,
            archive=f"{self._entry_name(key)}.tar.gz",
            created_at=datetime.now(timezone.utc),
        )
        self._reserve(record_path, record)

        archive = None
        try:
            archive = create_archive(paths, self._workspace)
            chunk_size = upload_chunk_size or self._default_chunk_size
            with archive.open("rb") as src, (self._root / record.archive).open("wb") as dst:
                record.size_bytes = copy_in_chunks(src, dst, chunk_size)
            record.status = "committed"
            record_path.write_text(record.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            self._release(record_path, record)
            raise CacheServiceError(f"Failed to store cache entry {key}: {e}") from e
        except BaseException:
            self._release(record_path, record)
            raise
        finally:
            if archive is not None:
                archive.unlink(missing_ok=True)

        logger.debug("Committed %s (%d bytes)", key, record.size_bytes)

    def list_entries(self) -> list[CacheEntryRecord]:
        """List committed entries; unreadable records are skipped."""
        entries: list[CacheEntryRecord] = []
        for path in self._root.glob("*.json"):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                entry = CacheEntryRecord(**data)
            except Exception as e:
                logger.warning("Skipping unreadable cache record %s: %s", path.name, e)
                continue
            if entry.status == "committed":
                entries.append(entry)
        return entries

    def _find(
        self, primary_key: str, restore_keys: list[str]
    ) -> CacheEntryRecord | None:
        try:
            entries = self.list_entries()
        except OSError as e:
            raise CacheServiceError(f"Cache root unreadable: {e}") from e

        wanted = primary_key.casefold()
        for entry in entries:
            if entry.key.casefold() == wanted:
                return entry

        for restore_key in restore_keys:
            prefix = restore_key.casefold()
            candidates = [e for e in entries if e.key.casefold().startswith(prefix)]
            if candidates:
                return max(candidates, key=lambda e: e.created_at)
        return None

    def _reserve(self, record_path: Path, record: CacheEntryRecord) -> None:
        try:
            fd = os.open(record_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError as e:
            raise ReserveCacheError(
                f"Unable to reserve cache with key {record.key}, another job "
                "may be creating this cache."
            ) from e
        except OSError as e:
            raise CacheServiceError(f"Failed to reserve cache entry: {e}") from e
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(record.model_dump_json(indent=2))

    def _release(self, record_path: Path, record: CacheEntryRecord) -> None:
        """Drop a reservation so a later run can retry the key."""
        record_path.unlink(missing_ok=True)
        (self._root / record.archive).unlink(missing_ok=True)

    @staticmethod
    def _entry_name(key: str) -> str:
        return hashlib.sha256(key.casefold().encode("utf-8")).hexdigest()

    def _record_path(self, key: str) -> Path:
        return self._root / f"{self._entry_name(key)}.json"
