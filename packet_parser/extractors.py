"""
Field Extractors
================
Pull the fields of a single question block: question text and answer for
tossups; leadin, parts, answers, values and difficulty modifiers for
bonuses.

Each field is found by its own anchor pass (see ``patterns``), so a
failure names exactly which field was missing.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from .diagnostics import ParseSession
from .formatting import format_text, remove_formatting
from .models import (
    CategoryResult,
    ErrorType,
    MultiPartQuestion,
    QuestionKind,
    ShortAnswerQuestion,
    WarningType,
)
from .patterns import (
    BONUS_ANSWERS,
    BONUS_LEADIN,
    BONUS_PARTS,
    BONUS_TAG,
    CATEGORY_TAG,
    TOSSUP_TEXT,
    captures,
    tossup_answer_pattern,
)

if TYPE_CHECKING:
    from .engine import ParserConfig

logger = logging.getLogger(__name__)

POWERMARK = "(*)"
CLOSING_BOLD = "{/b}"
ANSWER_PREFIX = "answer:"

# Value tag variants seen in bonuses, all meaning a ten-point part
TEN_TYPOS = [
    "[10 pts]",
    "[10pts]",
    "[10 pts.]",
    "[10 points]",
    "[ 10]",
    "[10 ]",
    "(10)",
    "[10pt]",
    "[ten]",
    "{10}",
]

DIFFICULTY_MODIFIERS = ("e", "m", "h")
# "10" before "5" so "[15]" is not read as five points
VALUES = ("10", "15", "20", "5")

# Opening markers followed by a stray space
_LEADING_MARKERS = ("{b}{i}", "{b}", "{i}")

_LEADING_NUMBER = re.compile(r"^\d{1,2}\.")
_POWERMARK_SPACING = re.compile(r" *\(\*\) *")


def _flatten(text: str) -> str:
    return text.replace("\n", " ").strip()


def _strip_number(text: str) -> str:
    return _LEADING_NUMBER.sub("", _flatten(text), count=1).strip()


def _strip_colon(text: str) -> str:
    if text.startswith(":"):
        return text[1:].strip()
    return text


def tighten_leading_markers(text: str) -> str:
    """Drop the space after leading "{b}{i}", "{b}" or "{i}" markers."""
    for marker in _LEADING_MARKERS:
        if text.startswith(marker + " "):
            return marker + text[len(marker) + 1:]
    return text


def insert_powermark(
    text: str, session: ParseSession, kind: QuestionKind = QuestionKind.TOSSUP
) -> str:
    """Insert "(*)" right before the last closing bold marker."""
    index = text.rfind(CLOSING_BOLD)
    if index < 0:
        session.warn(
            WarningType.POWERMARK_NOT_INSERTED,
            f"Can't insert (*) for tossup {session.index_for(kind)} - {text}",
            kind,
        )
        return text
    return text[:index] + POWERMARK + text[index:]


def parse_bonus_tags(
    text: str, default_values: bool = False
) -> tuple[list[str], list[int]]:
    """
    Read difficulty modifiers and point values from a bonus' value tags.

    Args:
        text: Bonus block text.
        default_values: When no tag carries a value, give every part 10.

    Returns:
        (difficulty_modifiers, values) in part order.
    """
    tags = [match.group(1) for match in BONUS_TAG.finditer(text)]
    difficulty_modifiers: list[str] = []
    values: list[int] = []

    for tag in tags:
        for modifier in DIFFICULTY_MODIFIERS:
            if modifier in tag.lower():
                difficulty_modifiers.append(modifier)
                break

        for value in VALUES:
            if value in tag:
                values.append(int(value))
                break

    if not values and default_values:
        values = [10] * len(tags)

    return difficulty_modifiers, values


def fix_value_typos(text: str) -> str:
    """Canonicalize ten-point tag variants to "[10]", ignoring case."""
    for typo in TEN_TYPOS:
        text = re.sub(re.escape(typo), "[10]", text, flags=re.IGNORECASE)
    return text


# ─── Tossups ──────────────────────────────────────────────────────────────────


def extract_short_answer(
    text: str,
    category: CategoryResult,
    config: "ParserConfig",
    session: ParseSession,
) -> ShortAnswerQuestion:
    """
    Extract a tossup from its block.

    Raises:
        PacketParseError: No question text, empty question text, or no
            answer line.
    """
    kind = QuestionKind.TOSSUP
    modaq = config.compact_output_mode

    if not config.has_category_tags:
        text = CATEGORY_TAG.sub("", text)

    question_match = TOSSUP_TEXT.search(text)
    if not question_match:
        session.fail(
            ErrorType.NO_QUESTION_TEXT,
            f"No question text for tossup {session.short_answer_index}",
            kind,
            text,
        )

    question_raw = _strip_number(question_match.group(0))
    if not question_raw:
        session.fail(
            ErrorType.EMPTY_QUESTION_TEXT,
            f"Tossup {session.short_answer_index} question text is empty",
            kind,
            text,
        )

    if question_raw.count(POWERMARK) >= 2:
        session.warn(
            WarningType.MULTIPLE_POWERMARKS,
            f"Tossup {session.short_answer_index} has multiple powermarks (*)",
            kind,
        )

    if config.auto_insert_powermark and POWERMARK not in question_raw:
        question_raw = insert_powermark(question_raw, session, kind)

    question_raw = tighten_leading_markers(question_raw)

    question = format_text(question_raw, modaq)
    question_sanitized = remove_formatting(question_raw)

    if POWERMARK in question_sanitized and f" {POWERMARK} " not in question_sanitized:
        if config.normalize_powermark_spacing:
            question_sanitized = _POWERMARK_SPACING.sub(" (*) ", question_sanitized)
            question = _POWERMARK_SPACING.sub(" (*) ", question)
        else:
            session.warn(
                WarningType.POWERMARK_SPACING,
                f"Tossup {session.short_answer_index} powermark (*) "
                f"is not surrounded by spaces",
                kind,
            )

    if ANSWER_PREFIX in question_sanitized.lower():
        session.warn(
            WarningType.QUESTION_CONTAINS_ANSWER,
            f"Tossup {session.short_answer_index} question text may contain the answer",
            kind,
        )
        session.advance(kind)

    answer_match = tossup_answer_pattern(config.has_category_tags).search(text)
    if not answer_match:
        session.fail(
            ErrorType.NO_ANSWER,
            f"Cannot find answer for tossup {session.short_answer_index}",
            kind,
            text,
        )

    answer_raw = _strip_colon(_flatten(answer_match.group(1)))

    if ANSWER_PREFIX in answer_raw.lower():
        session.warn(
            WarningType.ANSWER_CONTAINS_NEXT_QUESTION,
            f"Tossup {session.short_answer_index} answer may contain the next question",
            kind,
        )
        session.advance(kind)
        if config.verbose_logging:
            logger.debug(f"\n{answer_raw}\n")

    return ShortAnswerQuestion(
        question=question,
        question_sanitized=question_sanitized,
        answer=format_text(answer_raw, modaq),
        answer_sanitized=remove_formatting(answer_raw),
        category=category.category,
        subcategory=category.subcategory,
        alternate_subcategory=category.alternate_subcategory,
        metadata=category.metadata,
    )


# ─── Bonuses ──────────────────────────────────────────────────────────────────


def extract_multi_part(
    text: str,
    category: CategoryResult,
    config: "ParserConfig",
    session: ParseSession,
) -> MultiPartQuestion:
    """
    Extract a bonus from its block.

    Raises:
        PacketParseError: No leadin, no parts, or no answers.
    """
    kind = QuestionKind.BONUS
    modaq = config.compact_output_mode
    index = session.multi_part_index

    if not config.has_category_tags:
        text = CATEGORY_TAG.sub("", text)

    difficulty_modifiers, values = parse_bonus_tags(
        text, default_values=modaq or config.buzzpoints_mode
    )

    text = fix_value_typos(text)

    leadin_match = BONUS_LEADIN.search(text)
    if not leadin_match:
        session.fail(
            ErrorType.NO_LEADIN,
            f"Cannot find leadin for bonus {index}",
            kind,
            text,
        )

    leadin_raw = tighten_leading_markers(_strip_number(leadin_match.group(1)))
    leadin = format_text(leadin_raw, modaq)
    leadin_sanitized = remove_formatting(leadin_raw)

    if ANSWER_PREFIX in leadin_sanitized.lower():
        session.warn(
            WarningType.LEADIN_CONTAINS_ANSWER,
            f"Bonus {index} leadin may contain the answer to the first part",
            kind,
        )
        session.advance(kind)
        index = session.multi_part_index
        if config.verbose_logging:
            logger.debug(f"\n{leadin_raw}\n")

    parts_raw = [_flatten(part) for part in captures(BONUS_PARTS, text)]
    if not parts_raw:
        session.fail(
            ErrorType.NO_PARTS,
            f"No parts found for bonus {index}",
            kind,
            text,
        )

    answers_raw = [
        _strip_colon(_flatten(answer))
        for answer in captures(BONUS_ANSWERS, text + "\n[10]")
    ]
    if not answers_raw:
        session.fail(
            ErrorType.NO_ANSWERS,
            f"No answers found for bonus {index}",
            kind,
            text,
        )

    answers_sanitized = [remove_formatting(a) for a in answers_raw]

    if len(parts_raw) != len(answers_raw):
        session.warn(
            WarningType.PART_ANSWER_MISMATCH,
            f"Bonus {index} has {len(parts_raw)} parts but "
            f"{len(answers_raw)} answers",
            kind,
        )

    question = MultiPartQuestion(
        leadin=leadin,
        leadin_sanitized=leadin_sanitized,
        parts=[format_text(p, modaq) for p in parts_raw],
        parts_sanitized=[remove_formatting(p) for p in parts_raw],
        answers=[format_text(a, modaq) for a in answers_raw],
        answers_sanitized=answers_sanitized,
        values=values,
        difficulty_modifiers=difficulty_modifiers,
        category=category.category,
        subcategory=category.subcategory,
        alternate_subcategory=category.alternate_subcategory,
        metadata=category.metadata,
    )

    # A 30-point bonus is complete whatever its part count
    expected = config.expected_part_count
    if len(parts_raw) != expected and question.total_value != 30:
        relation = "fewer" if len(parts_raw) < expected else "more"
        session.warn(
            WarningType.PART_COUNT,
            f"Bonus {index} has {relation} than {expected} parts",
            kind,
        )
        if config.verbose_logging:
            logger.debug(f"\n{text}\n")

    if ANSWER_PREFIX in answers_sanitized[-1].lower():
        session.warn(
            WarningType.ANSWER_CONTAINS_NEXT_QUESTION,
            f"Bonus {index} answer may contain the next tossup",
            kind,
        )
        if config.verbose_logging:
            logger.debug(f"\n{answers_sanitized[-1]}\n")

    return question
