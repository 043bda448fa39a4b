"""
Packet Parser Engine
====================
Main orchestrator that combines normalization, segmentation, category
resolution, field extraction and reporting into a complete packet
parsing pipeline.

Usage:
    parser = PacketParser(config)
    result = parser.parse_packet(text, name="round-01.txt")
    # result is a ParseResult; result.to_output() is the JSON document

Architecture:
    text → normalize_packet → segment_packet → QuestionBlocks →
    parse_category + extract_short_answer / extract_multi_part →
    PacketReportBuilder → ParseResult
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .categories import parse_category_tag
from .classifier import (
    MODE_ALTERNATE_SUBCATEGORY,
    MODE_SUBSUBCATEGORY,
    Classifier,
)
from .converters import docx_to_canonical_text
from .diagnostics import ParseSession
from .extractors import extract_multi_part, extract_short_answer
from .models import (
    CategoryResult,
    ErrorType,
    MultiPartQuestion,
    OutputMode,
    ParseResult,
    QuestionKind,
    ShortAnswerQuestion,
    WarningType,
)
from .normalizer import normalize_packet
from .segmenter import segment_packet, split_by_kind
from .taxonomy import (
    ALTERNATE_SUBCATEGORIES,
    SUBCATEGORY_TO_CATEGORY,
    SUBSUBCATEGORIES,
)
from .validator import PacketReportBuilder

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SUPPORTED_EXTENSIONS = (".txt", ".docx")


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for the packet parser."""

    # Packet layout
    has_category_tags: bool = True
    has_question_numbers: bool = True
    expected_part_count: int = 3

    # Classification
    always_classify: bool = False
    classify_unknown_allowed: bool = False
    constant_subcategory: str = ""
    constant_alternate_subcategory: str = ""

    # Powermarks
    auto_insert_powermark: bool = False
    normalize_powermark_spacing: bool = False

    # Output shape
    buzzpoints_mode: bool = False
    compact_output_mode: bool = False

    # Logging
    verbose_logging: bool = False
    log_file: Optional[str] = None

    # Derived from constant_subcategory
    constant_category: str = field(default="", init=False)

    def __post_init__(self):
        if self.constant_subcategory:
            if self.constant_subcategory not in SUBCATEGORY_TO_CATEGORY:
                raise ValueError(
                    f"Unknown constant subcategory: {self.constant_subcategory}"
                )
            object.__setattr__(
                self,
                "constant_category",
                SUBCATEGORY_TO_CATEGORY[self.constant_subcategory],
            )

    @property
    def output_mode(self) -> OutputMode:
        if self.buzzpoints_mode:
            return OutputMode.BUZZPOINTS
        if self.compact_output_mode:
            return OutputMode.MODAQ
        return OutputMode.STANDARD


class PacketParser:
    """
    Main packet parsing engine.

    Orchestrates the full pipeline:
        1. Normalization
        2. Segmentation into tossup and bonus blocks
        3. Category resolution (tag, constant override, classifier)
        4. Field extraction
        5. Reporting

    Holds only configuration and the shared read-only classifier model, so
    one instance can parse any number of packets. Per-packet state lives in
    a ParseSession created for each call.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        classifier: Optional[Classifier] = None,
    ):
        self.config = config or ParserConfig()
        self.classifier = classifier or Classifier()
        self._setup_logging()

        if not self.config.has_category_tags and self.config.constant_subcategory:
            logger.warning(self._constant_category_message())
        if self.config.constant_alternate_subcategory:
            logger.warning(self._constant_alternate_message())

    def _setup_logging(self):
        """Configure logging based on config."""
        log_level = logging.DEBUG if self.config.verbose_logging else logging.INFO

        # Configure root logger for the package
        package_logger = logging.getLogger("packet_parser")
        package_logger.setLevel(log_level)

        # Console handler
        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(console)

        # File handler, once per file
        if self.config.log_file:
            log_path = os.path.abspath(self.config.log_file)
            for handler in package_logger.handlers:
                if isinstance(handler, logging.FileHandler) and (
                    handler.baseFilename == log_path
                ):
                    return

            Path(log_path).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(
                logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
            )
            package_logger.addHandler(file_handler)

    def _constant_category_message(self) -> str:
        return (
            f"Using fixed category {self.config.constant_category} "
            f"and subcategory {self.config.constant_subcategory}"
        )

    def _constant_alternate_message(self) -> str:
        return (
            f"Using fixed alternate subcategory "
            f"{self.config.constant_alternate_subcategory}"
        )

    # ─── Category resolution ─────────────────────────────────────────────────

    def parse_category(
        self,
        text: str,
        kind: QuestionKind,
        session: ParseSession,
    ) -> CategoryResult:
        """
        Resolve category, subcategory, alternate subcategory and metadata.

        Precedence: constant override, then category tag, then classifier.

        Raises:
            PacketParseError: Tag missing or unrecognized while tags are
                mandatory and unknown classification is not allowed.
        """
        config = self.config
        index = session.index_for(kind)
        strict = config.has_category_tags and not config.classify_unknown_allowed

        result = parse_category_tag(text)
        if result is None:
            if strict:
                session.fail(
                    ErrorType.MISSING_CATEGORY_TAG,
                    f"No category tag for {kind.value} {index}",
                    kind,
                    text,
                )
            result = CategoryResult()

        category = result.category
        subcategory = result.subcategory
        alternate_subcategory = result.alternate_subcategory
        metadata = result.metadata

        if config.constant_category and config.constant_subcategory:
            category = config.constant_category
            subcategory = config.constant_subcategory

        if config.constant_alternate_subcategory:
            alternate_subcategory = config.constant_alternate_subcategory

        if not subcategory and strict:
            session.fail(
                ErrorType.UNRECOGNIZED_SUBCATEGORY,
                f"{kind.value} {index} has unrecognized subcategory <{metadata}>",
                kind,
                text,
            )

        if not subcategory or (
            not config.has_category_tags and config.always_classify
        ):
            category, subcategory, classified_alternate = (
                self.classifier.classify_question(text)
            )

            if config.has_category_tags and not alternate_subcategory:
                session.warn(
                    WarningType.CLASSIFIED,
                    f"{kind.value} {index} classified as "
                    f"{category} - {subcategory}",
                    kind,
                )

            if not alternate_subcategory:
                alternate_subcategory = classified_alternate

        if not alternate_subcategory and not config.compact_output_mode:
            if category in ALTERNATE_SUBCATEGORIES:
                alternate_subcategory = self.classifier.classify(
                    text, MODE_ALTERNATE_SUBCATEGORY, category=category
                )
            elif subcategory in SUBSUBCATEGORIES:
                alternate_subcategory = self.classifier.classify(
                    text, MODE_SUBSUBCATEGORY, subcategory=subcategory
                )

        # buzzpoint-migrator expects generated metadata
        if config.buzzpoints_mode:
            metadata = ""

        resolved = CategoryResult(
            category=category,
            subcategory=subcategory,
            alternate_subcategory=alternate_subcategory,
            metadata=metadata,
        )
        if not resolved.metadata:
            resolved.metadata = resolved.compose_metadata()
        return resolved

    # ─── Questions ───────────────────────────────────────────────────────────

    def parse_short_answer(
        self, text: str, session: Optional[ParseSession] = None
    ) -> ShortAnswerQuestion:
        """Parse one tossup block."""
        session = session or ParseSession()
        category = self.parse_category(text, QuestionKind.TOSSUP, session)
        return extract_short_answer(text, category, self.config, session)

    def parse_multi_part(
        self, text: str, session: Optional[ParseSession] = None
    ) -> MultiPartQuestion:
        """Parse one bonus block."""
        session = session or ParseSession()
        category = self.parse_category(text, QuestionKind.BONUS, session)
        return extract_multi_part(text, category, self.config, session)

    # ─── Packets ─────────────────────────────────────────────────────────────

    def parse_packet(self, text: str, name: str = "") -> ParseResult:
        """
        Parse a packet into structured question records.

        Args:
            text: Raw packet text using the {b}/{i}/{u} markup conventions.
            name: Packet name, used for logging and the output file name.

        Returns:
            ParseResult with tossups, bonuses, warnings and the report.

        Raises:
            PacketParseError: On the first fatal condition; nothing of the
                packet is returned.
        """
        start_time = time.time()
        logger.info(f"Starting parse of: {name or '<text>'}")

        session = ParseSession()
        config = self.config

        if not config.has_category_tags and config.constant_subcategory:
            session.warn(
                WarningType.CONSTANT_OVERRIDE, self._constant_category_message()
            )
        if config.constant_alternate_subcategory:
            session.warn(
                WarningType.CONSTANT_OVERRIDE, self._constant_alternate_message()
            )

        text = normalize_packet(text, session)
        blocks = segment_packet(
            text,
            has_category_tags=config.has_category_tags,
            has_question_numbers=config.has_question_numbers,
        )
        tossups, bonuses = split_by_kind(blocks)

        if name:
            logger.info(
                f"Found {len(tossups):>2} tossups and "
                f"{len(bonuses):>2} bonuses in {name}"
            )

        short_answer_questions = []
        for block in tossups:
            short_answer_questions.append(self.parse_short_answer(block, session))
            session.advance(QuestionKind.TOSSUP)

        multi_part_questions = []
        for block in bonuses:
            multi_part_questions.append(self.parse_multi_part(block, session))
            session.advance(QuestionKind.BONUS)

        mode = config.output_mode
        report = PacketReportBuilder(
            unsanitized=mode != OutputMode.STANDARD
        ).build(text, short_answer_questions, multi_part_questions, session)

        result = ParseResult(
            packet_name=name,
            mode=mode,
            short_answer_questions=short_answer_questions,
            multi_part_questions=multi_part_questions,
            warnings=session.warnings,
            report=report,
        )

        elapsed = time.time() - start_time
        logger.info(
            f"Parse complete in {elapsed:.2f}s: "
            f"{len(short_answer_questions)} tossups, "
            f"{len(multi_part_questions)} bonuses, "
            f"{len(session.warnings)} warnings"
        )
        return result

    def parse_docx_packet(
        self, path: Union[str, Path], name: str = ""
    ) -> ParseResult:
        """Convert a .docx packet to text and parse it."""
        text = docx_to_canonical_text(path)
        return self.parse_packet(text, name or Path(path).name)

    def parse_file(self, path: Union[str, Path]) -> ParseResult:
        """
        Parse a .txt or .docx packet file.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the extension is not supported.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Packet not found: {path}")

        suffix = path.suffix.lower()
        if suffix == ".docx":
            return self.parse_docx_packet(path)
        if suffix == ".txt":
            text = path.read_text(encoding="utf-8")
            return self.parse_packet(text, path.name)

        raise ValueError(
            f"Unsupported packet file type '{path.suffix}' "
            f"(expected one of {', '.join(SUPPORTED_EXTENSIONS)})"
        )
