# src/backend/s3_backend.py — v1
"""S3-compatible cache backend (CACHE_BACKEND=s3).

Supports AWS S3, MinIO, and other S3-compatible storage.
Requires 'boto3' package: pip install boto3.
Object names are built from the casefolded, URL-quoted key so that
restore-key prefixes map onto S3 listing prefixes; the original key is kept
in the object metadata.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from urllib.parse import quote, unquote

from actcache.backend.archive import create_archive, extract_archive
from actcache.backend.base_cache_backend import (
    BaseCacheBackend,
    validate_key,
    validate_paths,
    validate_restore_request,
)
from actcache.constants import DEFAULT_UPLOAD_CHUNK_SIZE
from actcache.core.errors import CacheBackendError, CacheServiceError, ReserveCacheError

logger = logging.getLogger(__name__)

_ARCHIVE_SUFFIX = ".tar.gz"
_KEY_METADATA = "cache-key"
_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3CacheBackend(BaseCacheBackend):
    """Cache entries stored as objects in an S3 bucket."""

    def __init__(
        self,
        bucket: str,
        workspace: Path,
        prefix: str = "actcache/",
        region: str | None = None,
        endpoint_url: str | None = None,
        default_chunk_size: int = DEFAULT_UPLOAD_CHUNK_SIZE,
    ) -> None:
        """Initialize S3 backend.

        Args:
            bucket: S3 bucket name.
            workspace: Directory archives are packed from and restored into.
            prefix: Key prefix for all objects (e.g. "actcache/").
            region: AWS region (optional, uses boto3 default if not set).
            endpoint_url: Custom endpoint for MinIO/compatible storage.
            default_chunk_size: Multipart chunk size when a save names none.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 package required for S3 backend: pip install boto3"
            ) from e

        kwargs: dict = {}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._s3 = boto3.client("s3", **kwargs)
        self._bucket = bucket
        self._prefix = prefix.rstrip("/") + "/" if prefix else ""
        self._workspace = Path(workspace)
        self._default_chunk_size = default_chunk_size

    def _object_prefix(self, key: str) -> str:
        return f"{self._prefix}{quote(key.casefold(), safe='')}"

    def _object_key(self, key: str) -> str:
        return self._object_prefix(key) + _ARCHIVE_SUFFIX

    def _key_from_object(self, object_key: str) -> str:
        """Recover the (casefolded) cache key from an object name."""
        name = object_key[len(self._prefix):]
        return unquote(name.removesuffix(_ARCHIVE_SUFFIX))

    async def restore(
        self, paths: list[str], primary_key: str, restore_keys: list[str]
    ) -> str | None:
        """Restore the primary key, else the newest object per restore-key prefix."""
        validate_restore_request(paths, primary_key, restore_keys)

        try:
            object_key = self._find(primary_key, restore_keys)
            if object_key is None:
                return None
            head = self._s3.head_object(Bucket=self._bucket, Key=object_key)
            matched = head.get("Metadata", {}).get(_KEY_METADATA) or self._key_from_object(
                object_key
            )

            with tempfile.TemporaryDirectory(prefix="actcache-") as tmp:
                local = Path(tmp) / "cache.tar.gz"
                self._s3.download_file(self._bucket, object_key, str(local))
                extract_archive(local, self._workspace)
        except CacheBackendError:
            raise
        except Exception as e:
            raise CacheServiceError(f"S3 restore failed: {e}") from e

        logger.debug("S3 restore: s3://%s/%s", self._bucket, object_key)
        return matched

    async def save(
        self, paths: list[str], key: str, upload_chunk_size: int | None = None
    ) -> None:
        """Upload the archive unless an object for key already exists."""
        validate_paths(paths)
        validate_key(key)

        object_key = self._object_key(key)
        if self._exists(object_key):
            raise ReserveCacheError(
                f"Unable to reserve cache with key {key}, another job may be "
                "creating this cache."
            )

        from boto3.s3.transfer import TransferConfig

        chunk_size = upload_chunk_size or self._default_chunk_size
        archive = create_archive(paths, self._workspace)
        try:
            self._s3.upload_file(
                str(archive),
                self._bucket,
                object_key,
                ExtraArgs={"Metadata": {_KEY_METADATA: key}},
                Config=TransferConfig(
                    multipart_threshold=chunk_size, multipart_chunksize=chunk_size
                ),
            )
        except Exception as e:
            raise CacheServiceError(f"S3 upload failed for {key}: {e}") from e
        finally:
            archive.unlink(missing_ok=True)

        logger.debug("S3 save: s3://%s/%s", self._bucket, object_key)

    def _find(self, primary_key: str, restore_keys: list[str]) -> str | None:
        exact = self._object_key(primary_key)
        if self._exists(exact):
            return exact

        for restore_key in restore_keys:
            newest = None
            for obj in self._list(self._object_prefix(restore_key)):
                if not obj["Key"].endswith(_ARCHIVE_SUFFIX):
                    continue
                if newest is None or obj["LastModified"] > newest["LastModified"]:
                    newest = obj
            if newest is not None:
                return newest["Key"]
        return None

    def _list(self, prefix: str) -> list[dict]:
        objects: list[dict] = []
        kwargs: dict = {"Bucket": self._bucket, "Prefix": prefix}
        while True:
            response = self._s3.list_objects_v2(**kwargs)
            objects.extend(response.get("Contents", []))
            if not response.get("IsTruncated"):
                return objects
            kwargs["ContinuationToken"] = response["NextContinuationToken"]

    def _exists(self, object_key: str) -> bool:
        try:
            self._s3.head_object(Bucket=self._bucket, Key=object_key)
            return True
        except self._s3.exceptions.ClientError as e:
            code = str(getattr(e, "response", {}).get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                return False
            raise CacheServiceError(f"S3 head_object failed: {e}") from e
