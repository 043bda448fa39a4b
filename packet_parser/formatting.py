"""
Formatting
==========
Converts the internal {b}/{i}/{u} markers into HTML-style tags, and
produces the marker-free ("sanitized") counterpart of a text field.
"""

from __future__ import annotations

# (internal marker, standard tag, modaq tag)
_MARKERS = [
    ("{b}", "<b>", "<b>"),
    ("{/b}", "</b>", "</b>"),
    ("{u}", "<u>", "<u>"),
    ("{/u}", "</u>", "</u>"),
    ("{i}", "<i>", "<em>"),
    ("{/i}", "</i>", "</em>"),
]

_ITALIC_MARKERS = ("{i}", "{/i}")


def format_text(text: str, modaq: bool = False) -> str:
    """Render internal markers as tags; MODAQ expects <em> for italics."""
    for marker, tag, modaq_tag in _MARKERS:
        text = text.replace(marker, modaq_tag if modaq else tag)
    return text.strip()


def remove_formatting(text: str, include_italics: bool = False) -> str:
    """
    Strip internal markers from text.

    Args:
        text: Text carrying {b}, {i} and {u} markers.
        include_italics: Keep the italic markers in the output.
    """
    for marker, _, _ in _MARKERS:
        if include_italics and marker in _ITALIC_MARKERS:
            continue
        text = text.replace(marker, "")
    return text.strip()
