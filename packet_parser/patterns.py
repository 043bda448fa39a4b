"""
Anchor Patterns
===============
Regular expressions that locate the structural anchors of a packet:
question numbers, the ANSWER line, bonus value tags and <category> tags.

Extraction patterns capture the field in group 1 and stop at a lookahead
anchor, so consecutive matches never overlap the anchor that ends them.
"""

from __future__ import annotations

import re

FLAGS = re.IGNORECASE | re.MULTILINE

# "<Literature - American>"
CATEGORY_TAG = re.compile(r"<[^>]*>", FLAGS)

# Content of a bonus value tag: "[10]", "[10e]", "[h]", "[]"
BONUS_TAG = re.compile(r"\[(\d{0,2}?[EMH]?)\]", FLAGS)

# Boundary between bonus parts
VALUE_TAG = r"\[(?:\d{1,2})?[EMH]?\]"

# Leading question number: "12."
LEADING_NUMBER = re.compile(r"^\d{1,2}\.")

ANSWER_MARKER = r"(?:ANSWER:|^ ?ANSWER)"
ANSWER_LOOKAHEAD = r"(?=^ ?ANSWER|ANSWER:)"

TOSSUP_TEXT = re.compile(r"\d{1,2}\.([\s\S]*?)" + ANSWER_LOOKAHEAD, FLAGS)
TOSSUP_ANSWER_TAGGED = re.compile(
    ANSWER_MARKER + r"([\s\S]*)(?=<[^>]*>)", FLAGS
)
TOSSUP_ANSWER_UNTAGGED = re.compile(ANSWER_MARKER + r"([\s\S]*)", FLAGS)

BONUS_LEADIN = re.compile(
    r"^ *\d{1,2}\.([\s\S]*?)(?=" + VALUE_TAG + r")", FLAGS
)
BONUS_PARTS = re.compile(
    VALUE_TAG + r"([\s\S]*?)" + ANSWER_LOOKAHEAD, FLAGS
)
BONUS_ANSWERS = re.compile(
    ANSWER_MARKER + r"([\s\S]*?)(?=" + VALUE_TAG + r"|<[^>]*>)", FLAGS
)

# Segmentation anchors. Blocks are found by searching forward from one
# anchor to the next, never by matching a whole block in one pattern.
QUESTION_START = re.compile(r"^ *\d{1,2}\.", re.MULTILINE)
ANSWER_WORD = re.compile(r"ANSWER", re.IGNORECASE)

# Per line: an answer line, optionally after a question number
ANSWER_LINE_START = re.compile(r"^\d{0,2}[ \t]*ANSWER", re.IGNORECASE)

# Per line: starts a new question in numbered packets
NUMBERED_LINE = re.compile(r"^\s*\d")


def tossup_answer_pattern(has_category_tags: bool) -> re.Pattern:
    """With category tags the answer stops at the tag, else at block end."""
    if has_category_tags:
        return TOSSUP_ANSWER_TAGGED
    return TOSSUP_ANSWER_UNTAGGED


def captures(pattern: re.Pattern, text: str) -> list[str]:
    """All group-1 captures of ``pattern`` in ``text``, in order."""
    return [match.group(1) for match in pattern.finditer(text)]
