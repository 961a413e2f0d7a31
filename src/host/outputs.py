# src/host/outputs.py — v1
"""Publishing of step outputs to the runner's output file."""

from __future__ import annotations

import logging
from pathlib import Path

from actcache.constants import Outputs

logger = logging.getLogger(__name__)


def format_output_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def publish_outputs(outputs: dict[Outputs, object], output_file: Path | None) -> None:
    """Append name=value lines to output_file (when set) and log them."""
    lines = [f"{name.value}={format_output_value(v)}" for name, v in outputs.items()]
    for line in lines:
        logger.info("Output %s", line)
    if output_file is None:
        return
    path = Path(output_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
