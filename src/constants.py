# src/constants.py — v1
"""Names shared with the host automation environment.

Input and output names are the public contract of the action; state names
are the keys written by the restore phase and read back by the save phase.
"""

from __future__ import annotations

from enum import Enum


class Inputs(str, Enum):
    KEY = "key"
    PATH = "path"
    RESTORE_KEYS = "restore-keys"
    UPLOAD_CHUNK_SIZE = "upload-chunk-size"
    FORCE_SAVE = "force-save"


class Outputs(str, Enum):
    CACHE_HIT = "cache-hit"
    SUCCESS = "success"


class State(str, Enum):
    CACHE_PRIMARY_KEY = "CACHE_KEY"
    CACHE_MATCHED_KEY = "CACHE_RESULT"


# Hosts of the managed service; any other server URL is a self-hosted
# installation without the remote cache service.
SUPPORTED_SERVER_HOSTS = ("github.com",)
SUPPORTED_SERVER_SUFFIXES = (".ghe.com", ".ghe.localhost")

UNSUPPORTED_ENVIRONMENT_MESSAGE = (
    "Cache action is not supported on GHES. "
    "See https://github.com/actions/cache/issues/505 for more details"
)

MAX_KEY_LENGTH = 512
MAX_KEY_COUNT = 10
DEFAULT_UPLOAD_CHUNK_SIZE = 32 * 1024 * 1024
