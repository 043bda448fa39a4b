"""
Category Tag Resolver
=====================
Finds the <...> category tag of a question block and maps its words onto
the canonical taxonomy.

Matching is set containment: a table key matches when every one of its
words is a token of the tag. Keys are tried in table order and the first
match wins.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Optional

from .formatting import remove_formatting
from .models import CategoryResult
from .patterns import CATEGORY_TAG
from .taxonomy import (
    STANDARDIZE_ALTERNATE_SUBCATEGORIES,
    STANDARDIZE_SUBCATEGORIES,
    category_for,
)

# Unicode hyphens and dashes (U+2010 to U+2015) and the ASCII hyphen
_DASHES = re.compile(r"[\u2010-\u2015\-]")

_SUBCATEGORY_SEPARATORS = re.compile(r"[/,;:. ]")
_ALTERNATE_SEPARATORS = re.compile(r"[/,; ]")


def _tokenize(text: str, separators: re.Pattern) -> set[str]:
    if text.startswith("<") and text.endswith(">"):
        text = text[1:-1]
    text = _DASHES.sub(" ", text.lower())
    return set(separators.split(text))


def _first_match(tokens: set[str], table: Mapping[str, str]) -> str:
    for key, value in table.items():
        if all(word in tokens for word in key.split(" ")):
            return value
    return ""


def get_subcategory(tag: str) -> str:
    """Canonical subcategory named by a tag, or ""."""
    return _first_match(
        _tokenize(tag, _SUBCATEGORY_SEPARATORS), STANDARDIZE_SUBCATEGORIES
    )


def get_alternate_subcategory(tag: str) -> str:
    """Canonical alternate subcategory or sub-subcategory named by a tag, or ""."""
    return _first_match(
        _tokenize(tag, _ALTERNATE_SEPARATORS),
        STANDARDIZE_ALTERNATE_SUBCATEGORIES,
    )


def find_category_tag(text: str) -> Optional[str]:
    """The first <...> tag of the formatting-free text, on one line."""
    match = CATEGORY_TAG.search(remove_formatting(text))
    if not match:
        return None
    return match.group(0).strip().replace("\n", " ")


def parse_category_tag(text: str) -> Optional[CategoryResult]:
    """
    Resolve the category tag of a question block.

    Returns:
        CategoryResult whose metadata is the tag text without brackets
        (subcategory may be empty when no table entry matched), or None
        when the block has no tag at all.
    """
    tag = find_category_tag(text)
    if tag is None:
        return None

    subcategory = get_subcategory(tag)
    return CategoryResult(
        category=category_for(subcategory) if subcategory else "",
        subcategory=subcategory,
        alternate_subcategory=get_alternate_subcategory(tag),
        metadata=tag[1:-1],
    )
