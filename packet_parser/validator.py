"""
Packet Report
=============
Post-parse validation and reporting.

After parsing each packet, summarizes:
    - Tossups and bonuses extracted
    - Warning breakdown by type
    - "description acceptable" directives that did not survive into a
      question, leadin or part (usually a sign of a mangled block)

Never silently ignores failures: a missing directive becomes a warning on
the session as well as a line in the report.
"""

from __future__ import annotations

import logging
from collections import Counter

from .diagnostics import ParseSession
from .models import (
    MultiPartQuestion,
    PacketReport,
    ShortAnswerQuestion,
    WarningType,
)

logger = logging.getLogger(__name__)

DIRECTIVE = "description acceptable"


def _has_directive(text: str) -> bool:
    return DIRECTIVE in text.lower()


class PacketReportBuilder:
    """
    Builds the summary report for one parsed packet.
    """

    def __init__(self, unsanitized: bool = False):
        # Compact and buzzpoints output keep formatted text only
        self.unsanitized = unsanitized

    def count_parsed_directives(
        self,
        short_answer_questions: list[ShortAnswerQuestion],
        multi_part_questions: list[MultiPartQuestion],
    ) -> int:
        """Directives found in prompts, leadins and parts."""
        count = 0
        for q in short_answer_questions:
            text = q.question if self.unsanitized else q.question_sanitized
            count += _has_directive(text)

        for q in multi_part_questions:
            leadin = q.leadin if self.unsanitized else q.leadin_sanitized
            parts = q.parts if self.unsanitized else q.parts_sanitized
            count += _has_directive(leadin)
            count += sum(_has_directive(part) for part in parts)
        return count

    def build(
        self,
        text: str,
        short_answer_questions: list[ShortAnswerQuestion],
        multi_part_questions: list[MultiPartQuestion],
        session: ParseSession,
    ) -> PacketReport:
        """
        Build the report for a packet.

        Args:
            text: Normalized packet text.
            short_answer_questions: Extracted tossups.
            multi_part_questions: Extracted bonuses.
            session: The packet's session; receives the missing-directive
                warning.

        Returns:
            PacketReport with counts and the warning breakdown.
        """
        report = PacketReport(
            total_short_answer=len(short_answer_questions),
            total_multi_part=len(multi_part_questions),
        )

        missing = text.count(DIRECTIVE) - self.count_parsed_directives(
            short_answer_questions, multi_part_questions
        )
        if missing > 0:
            report.unparsed_directives = missing
            session.warn(
                WarningType.MISSING_DIRECTIVES,
                f"{missing} '{DIRECTIVE}' directive(s) may not have parsed "
                f"in this packet",
            )

        breakdown = Counter(w.type.value for w in session.warnings)
        report.warning_breakdown = dict(breakdown)

        # Log summary
        logger.info("=" * 60)
        logger.info("PACKET REPORT")
        logger.info("=" * 60)
        logger.info(f"Tossups: {report.total_short_answer}")
        logger.info(f"Bonuses: {report.total_multi_part}")
        logger.info(f"Unparsed Directives: {report.unparsed_directives}")

        if report.warning_breakdown:
            logger.info("Warning Breakdown:")
            for warning_type, count in sorted(report.warning_breakdown.items()):
                logger.info(f"  • {warning_type}: {count}")

        logger.info("=" * 60)

        return report
