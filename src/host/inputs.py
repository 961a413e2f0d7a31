# src/host/inputs.py — v1
"""Parsing of caller-supplied inputs into CacheInputs."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from actcache.constants import Inputs
from actcache.core.models import CacheInputs

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off", ""}


def get_input_as_array(values: Iterable[str] | str | None) -> list[str]:
    """Split multi-line input values into trimmed, non-empty entries.

    Accepts a single string or repeated values; order is preserved.
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    entries: list[str] = []
    for value in values:
        entries.extend(line.strip() for line in value.split("\n"))
    return [e for e in entries if e]


def get_input_as_int(value: str | int | None) -> int | None:
    """Parse an integer input; unparsable values count as not supplied."""
    if value is None or isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        logger.debug("Ignoring non-integer input value %r", value)
        return None


def get_input_is_true(value: str | bool | None) -> bool:
    """Strict flag: only a literal "true" (or True) is set; anything else is not."""
    if isinstance(value, bool):
        return value
    return value is not None and value.strip() == "true"


def get_input_as_bool(value: str | bool | None) -> bool:
    """Parse a boolean input (true/false, yes/no, 1/0, on/off).

    Raises:
        ValueError: For any other value.
    """
    if value is None or isinstance(value, bool):
        return bool(value)
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(
        f"Input does not meet boolean spec: {value!r}. "
        "Support boolean input list: true | false"
    )


def build_inputs(
    key: str | None,
    paths: Iterable[str] | str | None,
    restore_keys: Iterable[str] | str | None = None,
    upload_chunk_size: str | int | None = None,
    force_save: str | bool | None = None,
) -> CacheInputs:
    """Assemble validated inputs from raw host values.

    Raises:
        ValueError: If a required input is missing or malformed.
    """
    path_list = get_input_as_array(paths)
    if not path_list:
        raise ValueError(f"Input required and not supplied: {Inputs.PATH.value}")
    return CacheInputs(
        key=(key or "").strip(),
        paths=path_list,
        restore_keys=get_input_as_array(restore_keys),
        upload_chunk_size=get_input_as_int(upload_chunk_size),
        force_save=get_input_as_bool(force_save),
    )
