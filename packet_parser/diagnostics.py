"""
Diagnostics
===========
Per-packet parse session: question counters plus the warning side-channel,
and the fatal error raised when a packet cannot be parsed.

Warnings are batched on the session and returned with the result.
Fatal errors abort the current packet only; the next packet gets a fresh
session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NoReturn, Optional

from .models import ErrorType, ParseWarning, QuestionKind, WarningType

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200


class PacketParseError(Exception):
    """A fatal condition that aborts parsing of the current packet."""

    def __init__(
        self,
        error_type: ErrorType,
        message: str,
        kind: Optional[QuestionKind] = None,
        index: Optional[int] = None,
        snippet: str = "",
    ):
        self.error_type = error_type
        self.kind = kind
        self.index = index
        self.snippet = snippet
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.snippet:
            return f"{message} - {self.snippet}"
        return message


@dataclass
class ParseSession:
    """Mutable state for a single packet; never shared between packets."""

    short_answer_index: int = 1
    multi_part_index: int = 1
    warnings: list[ParseWarning] = field(default_factory=list)

    def index_for(self, kind: QuestionKind) -> int:
        if kind == QuestionKind.TOSSUP:
            return self.short_answer_index
        return self.multi_part_index

    def advance(self, kind: QuestionKind) -> None:
        if kind == QuestionKind.TOSSUP:
            self.short_answer_index += 1
        else:
            self.multi_part_index += 1

    def warn(
        self,
        warning_type: WarningType,
        message: str,
        kind: Optional[QuestionKind] = None,
    ) -> ParseWarning:
        """Record a non-fatal warning against the current question."""
        warning = ParseWarning(
            type=warning_type,
            message=message,
            kind=kind,
            index=self.index_for(kind) if kind else None,
        )
        self.warnings.append(warning)
        logger.warning(message)
        return warning

    def fail(
        self,
        error_type: ErrorType,
        message: str,
        kind: Optional[QuestionKind] = None,
        text: str = "",
    ) -> NoReturn:
        """Raise a fatal error for the current question."""
        error = PacketParseError(
            error_type,
            message,
            kind=kind,
            index=self.index_for(kind) if kind else None,
            snippet=text.strip()[:SNIPPET_LENGTH],
        )
        logger.error(str(error))
        raise error
