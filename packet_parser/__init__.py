"""
Packet Parser Engine
====================
Structured extraction of competition-trivia packets into question records.

Architecture:
    - Normalizer: Cleans raw packet text into a canonical form
    - Segmenter: Splits canonical text into tossup and bonus blocks
    - Category Resolver: Maps <...> category tags onto the taxonomy
    - Classifier: Naive-Bayes fallback when category tags are missing
    - Field Extractors: Pull question, leadin, parts and answers from blocks
    - Diagnostics: Collects per-packet warnings, raises fatal parse errors

Version: 1.0.0
"""

__version__ = "1.0.0"

from .diagnostics import PacketParseError, ParseSession  # noqa: E402
from .engine import PacketParser, ParserConfig  # noqa: E402

__all__ = [
    "PacketParseError",
    "PacketParser",
    "ParseSession",
    "ParserConfig",
    "__version__",
]
