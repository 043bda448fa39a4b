"""
Output Storage
==============
Writes parse results as JSON files for downstream tools.

Directory Layout:
    output/
    └── {packet_name}.json   # ParseResult.to_output()
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Union

from .models import ParseResult

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"


def save_result(
    result: ParseResult, output_dir: Union[str, Path] = DEFAULT_OUTPUT_DIR
) -> Path:
    """
    Save a parse result as ``{packet_name}.json`` in ``output_dir``.

    Returns the path written. The directory is created if missing.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    filepath = output_dir / f"{_sanitize_name(result.packet_name) or 'packet'}.json"
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(result.to_output(), f, indent=2, ensure_ascii=False)

    logger.info(f"Saved JSON output: {filepath}")
    return filepath


# ─── Helpers ──────────────────────────────────────────────────────────────────


def _sanitize_name(name: str) -> str:
    """Sanitize a packet name for filesystem use."""
    stem = Path(name).stem if name else ""
    return "".join(
        c if c.isalnum() or c in "-_ " else "_"
        for c in stem
    ).strip().replace(" ", "_")[:100]
