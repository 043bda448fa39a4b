"""
Structural Segmenter
====================
Splits canonical packet text into ordered question blocks and tells
tossups from bonuses.

Numbered, tagged packets: a block runs from a question number through the
first ANSWER to the first <category> tag after it. Otherwise non-blank
lines are grouped (numbered packets also open a group at every numbered
line) and each group holding an answer line is a block.

A block is a bonus when it carries at least one bracketed value tag
("[10]", "[10e]", "[h]"); otherwise it is a tossup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .models import QuestionKind
from .patterns import (
    ANSWER_LINE_START,
    ANSWER_WORD,
    BONUS_TAG,
    CATEGORY_TAG,
    LEADING_NUMBER,
    NUMBERED_LINE,
    QUESTION_START,
)

logger = logging.getLogger(__name__)

# Prepended to blocks without a number so extraction anchors match
DEFAULT_NUMBER = "1. "


@dataclass(frozen=True)
class QuestionBlock:
    """Raw text of one question, in packet order."""
    kind: QuestionKind
    text: str


def classify_block(text: str) -> QuestionKind:
    if BONUS_TAG.search(text):
        return QuestionKind.BONUS
    return QuestionKind.TOSSUP


def _tagged_blocks(text: str) -> list[str]:
    """Number, then the first ANSWER after it, then the first tag after that."""
    blocks = []
    last_close = text.rfind(">")
    pos = 0
    while True:
        start = QUESTION_START.search(text, pos)
        if start is None:
            break
        answer = ANSWER_WORD.search(text, start.end())
        if answer is None or last_close < answer.end():
            break
        tag = CATEGORY_TAG.search(text, answer.end(), last_close + 1)
        if tag is None:
            break
        blocks.append(text[start.start():tag.end()])
        pos = tag.end()
    return blocks


def _line_groups(text: str, break_on_numbers: bool) -> list[list[str]]:
    """Runs of non-blank lines; numbered lines also open a new run."""
    groups = []
    current: list[str] = []
    for line in text.split("\n"):
        if not line.strip():
            if current:
                groups.append(current)
                current = []
            continue
        if break_on_numbers and current and NUMBERED_LINE.match(line):
            groups.append(current)
            current = []
        current.append(line)
    if current:
        groups.append(current)
    return groups


def _untagged_blocks(text: str, has_question_numbers: bool) -> list[str]:
    """Every line group containing an answer line is one question."""
    return [
        "\n".join(group)
        for group in _line_groups(text, break_on_numbers=has_question_numbers)
        if any(ANSWER_LINE_START.match(line) for line in group)
    ]


def segment_packet(
    text: str,
    has_category_tags: bool = True,
    has_question_numbers: bool = True,
) -> list[QuestionBlock]:
    """
    Split normalized packet text into question blocks.

    Args:
        text: Output of ``normalize_packet``.
        has_category_tags: Blocks end with a <category> tag.
        has_question_numbers: Blocks start with "N.".

    Returns:
        Blocks in packet order, each starting with a question number.
    """
    if has_question_numbers and has_category_tags:
        raw_blocks = _tagged_blocks(text)
    else:
        raw_blocks = _untagged_blocks(text, has_question_numbers)

    blocks = []
    for raw in raw_blocks:
        kind = classify_block(raw)

        if not LEADING_NUMBER.match(raw.lstrip(" ")):
            raw = DEFAULT_NUMBER + raw

        blocks.append(QuestionBlock(kind=kind, text=raw))

    logger.debug(f"Segmented {len(blocks)} question blocks")
    return blocks


def split_by_kind(
    blocks: list[QuestionBlock],
) -> tuple[list[str], list[str]]:
    """Tossup texts and bonus texts, each in packet order."""
    tossups = [b.text for b in blocks if b.kind == QuestionKind.TOSSUP]
    bonuses = [b.text for b in blocks if b.kind == QuestionKind.BONUS]
    return tossups, bonuses
