"""
Text Normalizer
===============
Cleans raw packet text into the canonical form the segmenter expects.

Rules run in a fixed order; later rules assume the earlier ones already
ran (e.g. question-number fixes rely on tabs and double spaces being gone,
and the ANSWER-line split relies on answer typos being canonical).
Running the normalizer on its own output changes nothing.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .diagnostics import ParseSession
from .models import WarningType

logger = logging.getLogger(__name__)

# Appended so the last question ends on the same anchor as every other one:
# a blank line for unnumbered packets, a question number for numbered ones
SENTINEL = "\n\n0."

ANSWER_LINE = "ANSWER:"

# ─── Rule tables ──────────────────────────────────────────────────────────────

INVISIBLE_CHARACTERS = [
    ("\f", ""),
    ("\u200b", ""),     # zero-width space
    ("\xad", "-"),      # soft hyphen
    ("\u037e", ";"),    # Greek question mark
    ("\u00a0", " "),    # non-breaking space
]

MARKUP_SPACING = [
    (" {/bu}", "{/bu} "),
    (" {/u}", "{/u} "),
    (" {/i}", "{/i} "),
    ("{i}\n{/i}", "\n"),
    ("{i} {/i}", " "),
]

VALUE_GROUPINGS = [
    ("\n10]", "[10]"),
    ("[5,5]", "[10]"),
    ("[5/5]", "[10]"),
    ("[5, 5]", "[10]"),
    ("[5,5,5,5]", "[20]"),
    ("[5/5/5/5]", "[20]"),
    ("[10/10]", "[20]"),
    ("[2x10]", "[20]"),
    ("[2x5]", "[10]"),
    ("[10 ", "[10] "),
]

QUESTION_LABELS = [
    ("AUDIO RELATED BONUS: ", "\n"),
    ("HANDOUT RELATED BONUS: ", "\n"),
    ("RELATED BONUS: ", "\n"),
    ("RELATED BONUS. ", "\n"),
    ("RELATED BONUS\n", "\n\n"),
    ("HANDOUT BONUS: ", "\n"),
    ("BONUS: ", "\n"),
    ("Bonus: ", "\n"),
    ("BONUS. ", "\n"),
    ("TOSSUP. ", ""),
]

# Misspelled answer lines seen in real packets. Each entry is applied as
# written and with everything after its first letter lowercased.
ANSWER_TYPOS = [
    "ANSWER:",
    "ANSWER :",
    "ANSWER;",
    "ANSWERS:",
    "ANWSER:",
    "ANSWR:",
    "ANSER:",
    "ANWER:",
    "ASNWER:",
    "ANSEWR:",
    "ANSWRE:",
    "ANSWWER:",
    "ANNSWER:",
    "ANSWE:",
]

# Irregular question and bonus-part numbering, applied per line
NUMBERING = [
    (re.compile(r"^\{(\w+)\}(\d{1,2}|TB|X)\.", re.I | re.M), r"1. {\1}"),
    (re.compile(r"^\{(\w+)\}ANSWER(:?)", re.I | re.M), r"ANSWER\2{\1}"),
    (re.compile(r"^\(?(\d{1,2}|TB)\) *", re.M), "1. "),
    (re.compile(r"^(?:TB|X|Tiebreaker|Extra)[.:]", re.M), "21."),
    (re.compile(r"^(?:TU|T|S)\d{1,2}[.:]?", re.M), "21."),
    (re.compile(r"^BS\d{1,2}[.:]?", re.M), "21."),
]

_LEADING_SPACES = re.compile(r"^ +")
_SPACE_RUNS = re.compile(r" {2,}")
_EMPTY_PAIR = re.compile(r"\{(\w+)\}\{/\1\}")
_CLOSE_OPEN_PAIR = re.compile(r"\{/(\w+)\}\{\1\}")
_DANGLING_NUMBER = re.compile(r"^( *\d{1,2}\.)\s*\n", re.M)
_BLANK_LINE = re.compile(r"^[ \t]+$", re.M)
_ANSWER_SPLIT = re.compile(r"(?<=.)(?=ANSWER:)")
_PAGE_FOOTER = re.compile(r"^ *Page \d+(?: of \d+)? *$", re.M)
_PART_LETTER = re.compile(r"^[ABC][.:] *")
_QUESTION_START = re.compile(r"^\d{1,2}\.")


def _replace_all(text: str, table: list[tuple[str, str]]) -> str:
    for old, new in table:
        text = text.replace(old, new)
    return text


def fix_answer_typos(text: str) -> str:
    """Canonicalize misspelled answer lines to "ANSWER:"."""
    for typo in ANSWER_TYPOS:
        text = text.replace(typo, ANSWER_LINE)
        text = text.replace(typo[0] + typo[1:].lower(), ANSWER_LINE)
    return text


def remove_redundant_markup(text: str) -> str:
    """Drop empty marker pairs and close/reopen seams, then extra spaces."""
    # Removing one pair can expose another
    previous = None
    while previous != text:
        previous = text
        text = _EMPTY_PAIR.sub("", text)
        text = _CLOSE_OPEN_PAIR.sub("", text)
    return _SPACE_RUNS.sub(" ", text)


def rewrite_part_letters(text: str) -> str:
    """
    Turn "A." / "B:" / "C." bonus part labels into "[10]" value tags.

    A lettered line counts as a part only when an answer line follows it
    before the next question starts. A lettered line directly after an
    empty "ANSWER:" is the answer itself and is left alone.
    """
    lines = text.split("\n")

    # answer_ahead[i]: an answer line comes after line i, before a new question
    answer_ahead = [False] * len(lines)
    seen_answer = False
    for i in range(len(lines) - 1, -1, -1):
        answer_ahead[i] = seen_answer
        if ANSWER_LINE in lines[i]:
            seen_answer = True
        elif _QUESTION_START.match(lines[i]):
            seen_answer = False

    previous = ""
    for i, line in enumerate(lines):
        if (
            _PART_LETTER.match(line)
            and not previous.rstrip().endswith(ANSWER_LINE)
            and (answer_ahead[i] or ANSWER_LINE in line)
        ):
            lines[i] = _PART_LETTER.sub("[10] ", line, count=1)
        if line.strip():
            previous = line

    return "\n".join(lines)


def remove_duplicate_lines(text: str) -> tuple[str, int]:
    """Collapse immediately repeated non-empty lines; return the count removed."""
    kept: list[str] = []
    removed = 0
    for line in text.split("\n"):
        if kept and line and line == kept[-1]:
            removed += 1
            continue
        kept.append(line)
    return "\n".join(kept), removed


def normalize_packet(text: str, session: Optional[ParseSession] = None) -> str:
    """
    Normalize raw packet text.

    Args:
        text: Raw text using the {b}/{i}/{u} markup conventions.
        session: Receives the duplicate-line warning, if given.

    Returns:
        Canonical text ending with the sentinel trailer.
    """
    text = _LEADING_SPACES.sub("", text)

    if not text.endswith(SENTINEL):
        text = text + SENTINEL

    text = _replace_all(text, INVISIBLE_CHARACTERS)
    text = _replace_all(text, MARKUP_SPACING)
    text = _replace_all(text, VALUE_GROUPINGS)
    text = _replace_all(text, QUESTION_LABELS)
    text = fix_answer_typos(text)

    text = text.replace("\t", " ")
    text = remove_redundant_markup(text)

    for pattern, replacement in NUMBERING:
        text = pattern.sub(replacement, text)
    text = rewrite_part_letters(text)

    # Moving a marker past the number can leave "1. {b}{/b}"
    text = remove_redundant_markup(text)

    text = _DANGLING_NUMBER.sub(r"\1 ", text)
    text = _BLANK_LINE.sub("", text)

    text = _ANSWER_SPLIT.sub("\n", text)

    text, removed = remove_duplicate_lines(text)
    if removed > 0:
        message = f"Removed {removed} duplicate lines"
        if session is not None:
            session.warn(WarningType.DUPLICATE_LINES_REMOVED, message)
        else:
            logger.warning(message)

    text = _PAGE_FOOTER.sub("", text)

    return text
