# src/core/models.py — v1
"""Domain models shared by the restore and save phases."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CacheInputs(BaseModel):
    """Caller-supplied options for one phase invocation."""

    model_config = ConfigDict(frozen=True)

    key: str = ""
    paths: list[str] = Field(default_factory=list)
    restore_keys: list[str] = Field(default_factory=list)
    upload_chunk_size: int | None = None
    force_save: bool = False

    @field_validator("paths")
    @classmethod
    def validate_paths(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("Input required and not supplied: path")
        return v

    @field_validator("upload_chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError("upload-chunk-size must be > 0")
        return v


class ResolutionResult(BaseModel):
    """Outcome of one key resolution: no match, exact match, or fallback."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none", "exact", "fallback"] = "none"
    matched_key: str | None = None

    @classmethod
    def no_match(cls) -> ResolutionResult:
        return cls()

    @classmethod
    def exact(cls, key: str) -> ResolutionResult:
        return cls(kind="exact", matched_key=key)

    @classmethod
    def fallback(cls, key: str) -> ResolutionResult:
        return cls(kind="fallback", matched_key=key)

    @property
    def is_exact(self) -> bool:
        return self.kind == "exact"

    @property
    def is_match(self) -> bool:
        return self.kind != "none"


class UploadDecision(str, Enum):
    """Whether the save phase uploads."""

    SKIP = "skip"
    SAVE = "save"


class GateDecision(BaseModel):
    """Run Gate verdict with the message logged on rejection."""

    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: str | None = None
    # Unsupported environments also mark the run as unsuccessful.
    environment_supported: bool = True


class RestoreOutcome(BaseModel):
    """Reported status of the restore phase."""

    hit: bool = False
    success: bool = True
    matched_key: str | None = None
    fatal_error: str | None = None


class SaveOutcome(BaseModel):
    """Reported status of the save phase."""

    decision: UploadDecision | None = None
    saved: bool = False
    fatal_error: str | None = None

    @property
    def success(self) -> bool:
        return self.fatal_error is None
