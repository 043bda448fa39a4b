"""
DOCX Converter
==============
Reads a Word packet with python-docx and emits canonical packet text.

Every paragraph becomes one line (empty paragraphs included, since blank
lines separate questions in unnumbered packets). Bold, underlined and
italic runs are wrapped in {b}, {u} and {i} markers; adjacent runs with
the same formatting leave "{/b}{b}" seams that the normalizer removes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Union

from docx import Document

logger = logging.getLogger(__name__)

# Opening order; markers close in reverse
_RUN_STYLES = (("bold", "b"), ("underline", "u"), ("italic", "i"))


def _resolve_format(run, paragraph, attr: str) -> bool:
    """
    Direct run formatting, else the run's character style, else the
    paragraph style, each followed up its base-style chain.
    """
    value = getattr(run, attr)
    if value is not None:
        return bool(value)

    for style in (run.style, paragraph.style):
        while style is not None:
            value = getattr(style.font, attr)
            if value is not None:
                return bool(value)
            style = style.base_style
    return False


def _run_to_text(run, paragraph) -> str:
    text = run.text
    if not text:
        return ""

    tags = [
        tag for attr, tag in _RUN_STYLES
        if _resolve_format(run, paragraph, attr)
    ]
    opening = "".join(f"{{{tag}}}" for tag in tags)
    closing = "".join(f"{{/{tag}}}" for tag in reversed(tags))
    return f"{opening}{text}{closing}"


def paragraph_to_text(paragraph) -> str:
    """One paragraph as a line of marked-up text."""
    return "".join(_run_to_text(run, paragraph) for run in paragraph.runs)


def docx_to_canonical_text(path: Union[str, Path]) -> str:
    """
    Convert a .docx packet into packet text.

    Args:
        path: Path to the .docx file.

    Returns:
        Text with one line per paragraph and {b}/{i}/{u} run markers.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = os.path.abspath(path)
    if not os.path.exists(path):
        raise FileNotFoundError(f"DOCX not found: {path}")

    document = Document(path)
    lines = [paragraph_to_text(p) for p in document.paragraphs]

    logger.debug(f"Converted {len(lines)} paragraphs from {Path(path).name}")
    return "\n".join(lines)
