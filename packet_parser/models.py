"""
Data Models
===========
Pydantic models for structured packet parsing output.
All models are serializable to JSON for downstream archival tools.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, computed_field


# ─── Enums ────────────────────────────────────────────────────────────────────


class QuestionKind(str, Enum):
    """Kind of question block found in a packet."""
    TOSSUP = "tossup"
    BONUS = "bonus"


class OutputMode(str, Enum):
    """Output shape expected by the downstream consumer."""
    STANDARD = "standard"
    MODAQ = "modaq"
    BUZZPOINTS = "buzzpoints"


class WarningType(str, Enum):
    """Non-fatal irregularities detected while parsing a packet."""
    DUPLICATE_LINES_REMOVED = "duplicate_lines_removed"
    CONSTANT_OVERRIDE = "constant_override"
    CLASSIFIED = "classified"
    MULTIPLE_POWERMARKS = "multiple_powermarks"
    POWERMARK_NOT_INSERTED = "powermark_not_inserted"
    POWERMARK_SPACING = "powermark_spacing"
    QUESTION_CONTAINS_ANSWER = "question_contains_answer"
    LEADIN_CONTAINS_ANSWER = "leadin_contains_answer"
    ANSWER_CONTAINS_NEXT_QUESTION = "answer_contains_next_question"
    PART_ANSWER_MISMATCH = "part_answer_mismatch"
    PART_COUNT = "part_count"
    MISSING_DIRECTIVES = "missing_directives"


class ErrorType(str, Enum):
    """Fatal conditions that abort parsing of the current packet."""
    MISSING_CATEGORY_TAG = "missing_category_tag"
    UNRECOGNIZED_SUBCATEGORY = "unrecognized_subcategory"
    NO_QUESTION_TEXT = "no_question_text"
    EMPTY_QUESTION_TEXT = "empty_question_text"
    NO_ANSWER = "no_answer"
    NO_LEADIN = "no_leadin"
    NO_PARTS = "no_parts"
    NO_ANSWERS = "no_answers"


# ─── Diagnostics ──────────────────────────────────────────────────────────────


class ParseWarning(BaseModel):
    """A non-fatal issue found while parsing a packet."""
    type: WarningType
    message: str
    kind: Optional[QuestionKind] = None
    index: Optional[int] = Field(
        default=None,
        description="1-indexed ordinal of the tossup or bonus, if any"
    )


# ─── Category ─────────────────────────────────────────────────────────────────


class CategoryResult(BaseModel):
    """Resolved category metadata for a single question."""
    category: str = ""
    subcategory: str = ""
    alternate_subcategory: str = ""
    metadata: str = ""

    def compose_metadata(self) -> str:
        """Build the default "Category - Subcategory[ - Alternate]" line."""
        if self.alternate_subcategory:
            return (
                f"{self.category} - {self.subcategory} - "
                f"{self.alternate_subcategory}"
            )
        return f"{self.category} - {self.subcategory}"


# ─── Question Models ─────────────────────────────────────────────────────────


class ShortAnswerQuestion(BaseModel):
    """
    A tossup: a single prompt with one answer line.
    """
    question: str
    question_sanitized: str
    answer: str
    answer_sanitized: str
    category: str = ""
    subcategory: str = ""
    alternate_subcategory: str = ""
    metadata: str = ""

    def to_output(self, mode: OutputMode = OutputMode.STANDARD) -> dict:
        """Render the record in the shape the consumer of ``mode`` expects."""
        if mode == OutputMode.BUZZPOINTS:
            return {
                "question": self.question,
                "answer": self.answer,
                "answer_sanitized": self.answer_sanitized,
                "metadata": self.metadata,
            }

        if mode == OutputMode.MODAQ:
            return {
                "question": self.question,
                "answer": self.answer,
                "metadata": self.metadata,
            }

        data = {
            "question": self.question,
            "question_sanitized": self.question_sanitized,
            "answer": self.answer,
            "answer_sanitized": self.answer_sanitized,
            "category": self.category,
            "subcategory": self.subcategory,
        }
        if self.alternate_subcategory:
            data["alternate_subcategory"] = self.alternate_subcategory
        return data


class MultiPartQuestion(BaseModel):
    """
    A bonus: a shared leadin followed by independently scored parts.
    """
    leadin: str
    leadin_sanitized: str
    parts: list[str] = Field(default_factory=list)
    parts_sanitized: list[str] = Field(default_factory=list)
    answers: list[str] = Field(default_factory=list)
    answers_sanitized: list[str] = Field(default_factory=list)
    values: list[int] = Field(default_factory=list)
    difficulty_modifiers: list[str] = Field(default_factory=list)
    category: str = ""
    subcategory: str = ""
    alternate_subcategory: str = ""
    metadata: str = ""

    @computed_field
    @property
    def total_value(self) -> int:
        return sum(self.values)

    def to_output(self, mode: OutputMode = OutputMode.STANDARD) -> dict:
        """Render the record in the shape the consumer of ``mode`` expects."""
        if mode == OutputMode.BUZZPOINTS:
            data = {
                "values": self.values,
                "leadin": self.leadin,
                "leadin_sanitized": self.leadin_sanitized,
                "parts": self.parts,
                "parts_sanitized": self.parts_sanitized,
                "answers": self.answers,
                "answers_sanitized": self.answers_sanitized,
                "metadata": self.metadata,
            }
        elif mode == OutputMode.MODAQ:
            data = {
                "values": self.values,
                "leadin": self.leadin,
                "parts": self.parts,
                "answers": self.answers,
                "metadata": self.metadata,
            }
        else:
            data = {
                "leadin": self.leadin,
                "leadin_sanitized": self.leadin_sanitized,
                "parts": self.parts,
                "parts_sanitized": self.parts_sanitized,
                "answers": self.answers,
                "answers_sanitized": self.answers_sanitized,
                "category": self.category,
                "subcategory": self.subcategory,
            }
            if self.alternate_subcategory:
                data["alternate_subcategory"] = self.alternate_subcategory
            if self.values:
                data["values"] = self.values

        if self.difficulty_modifiers:
            data["difficultyModifiers"] = self.difficulty_modifiers
        return data


# ─── Packet Result Models ────────────────────────────────────────────────────


class PacketReport(BaseModel):
    """Post-parse summary of a packet."""
    total_short_answer: int = 0
    total_multi_part: int = 0
    warning_breakdown: dict[str, int] = Field(default_factory=dict)
    unparsed_directives: int = 0

    @computed_field
    @property
    def warning_count(self) -> int:
        return sum(self.warning_breakdown.values())


class ParseResult(BaseModel):
    """
    Complete output of parsing one packet.
    """
    packet_name: str = ""
    mode: OutputMode = OutputMode.STANDARD
    short_answer_questions: list[ShortAnswerQuestion] = Field(
        default_factory=list
    )
    multi_part_questions: list[MultiPartQuestion] = Field(
        default_factory=list
    )
    warnings: list[ParseWarning] = Field(default_factory=list)
    report: PacketReport = Field(default_factory=PacketReport)

    def to_output(self) -> dict:
        """The JSON document written for downstream tools."""
        return {
            "tossups": [q.to_output(self.mode) for q in self.short_answer_questions],
            "bonuses": [q.to_output(self.mode) for q in self.multi_part_questions],
        }
