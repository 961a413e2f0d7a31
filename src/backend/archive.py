# src/backend/archive.py — v1
"""tar.gz packing of cache path sets, relative to the workspace."""

from __future__ import annotations

import glob
import logging
import os
import tarfile
import tempfile
from pathlib import Path
from typing import BinaryIO

from actcache.core.errors import CacheServiceError, CacheValidationError

logger = logging.getLogger(__name__)

_GLOB_CHARS = ("*", "?", "[")


def resolve_paths(patterns: list[str], workspace: Path) -> list[Path]:
    """Expand path patterns into existing paths inside the workspace.

    Patterns starting with '!' exclude what they match. Order follows the
    patterns; duplicates are dropped.
    """
    root = workspace.resolve()
    included: dict[Path, None] = {}
    excluded: set[Path] = set()

    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue
        negate = pattern.startswith("!")
        if negate:
            pattern = pattern[1:]
        for match in _expand(pattern, root):
            resolved = match.resolve()
            if not resolved.is_relative_to(root):
                raise CacheValidationError(
                    f"Path Validation Error: {raw} resolves outside the "
                    f"workspace {root}"
                )
            if negate:
                excluded.add(resolved)
            else:
                included.setdefault(resolved, None)

    return [p for p in included if not _is_excluded(p, excluded)]


def _expand(pattern: str, root: Path) -> list[Path]:
    expanded = os.path.expanduser(pattern)
    if not os.path.isabs(expanded):
        expanded = str(root / expanded)
    if any(c in expanded for c in _GLOB_CHARS):
        return [Path(p) for p in sorted(glob.glob(expanded, recursive=True))]
    path = Path(expanded)
    return [path] if path.exists() else []


def _is_excluded(path: Path, excluded: set[Path]) -> bool:
    return any(path == e or path.is_relative_to(e) for e in excluded)


def create_archive(patterns: list[str], workspace: Path) -> Path:
    """Pack the matched paths into a temporary tar.gz and return its path.

    The caller owns the returned file and must delete it.

    Raises:
        CacheServiceError: If no path matches or the archive cannot be written.
    """
    root = workspace.resolve()
    paths = resolve_paths(patterns, root)
    if not paths:
        raise CacheServiceError(
            "Path Validation Error: Path(s) specified in the action for caching "
            "do(es) not exist, hence no cache is being saved."
        )

    fd, name = tempfile.mkstemp(prefix="actcache-", suffix=".tar.gz")
    os.close(fd)
    archive = Path(name)
    try:
        with tarfile.open(archive, "w:gz") as tar:
            for path in paths:
                tar.add(path, arcname=str(path.relative_to(root)))
    except (OSError, tarfile.TarError) as e:
        archive.unlink(missing_ok=True)
        raise CacheServiceError(f"Failed to create cache archive: {e}") from e

    logger.debug(
        "Archived %d path(s) into %s (%d bytes)",
        len(paths), archive, archive.stat().st_size,
    )
    return archive


def extract_archive(archive: Path, workspace: Path) -> None:
    """Unpack an archive into the workspace, refusing unsafe members."""
    try:
        with tarfile.open(archive, "r:gz") as tar:
            tar.extractall(workspace, filter="data")
    except (OSError, tarfile.TarError) as e:
        raise CacheServiceError(f"Failed to extract cache archive: {e}") from e


def copy_in_chunks(src: BinaryIO, dst: BinaryIO, chunk_size: int) -> int:
    """Copy src to dst chunk_size bytes at a time; return bytes copied."""
    total = 0
    while True:
        chunk = src.read(chunk_size)
        if not chunk:
            return total
        dst.write(chunk)
        total += len(chunk)
