# src/core/keys.py — v1
"""Key comparison and the upload decision.

Both phases call is_exact_key_match() with the same two strings, so the
restore-time hit flag and the save-time skip decision can never disagree.
"""

from __future__ import annotations

from actcache.core.models import UploadDecision


def is_exact_key_match(primary_key: str, matched_key: str | None) -> bool:
    """Return True when matched_key names the same entry as primary_key.

    Keys compare case-insensitively, as the storage service does. A missing
    and an empty matched key are both "no match".
    """
    if not matched_key:
        return False
    return matched_key.casefold() == primary_key.casefold()


def decide_upload(
    primary_key: str, matched_key: str | None, force_save: bool = False
) -> UploadDecision:
    """Skip only on an exact hit without force; everything else saves."""
    if not force_save and is_exact_key_match(primary_key, matched_key):
        return UploadDecision.SKIP
    return UploadDecision.SAVE
