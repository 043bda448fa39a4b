"""
Shared fixtures for the packet parser test suite.
"""

from __future__ import annotations

import logging

import pytest

from packet_parser.diagnostics import ParseSession
from packet_parser.engine import PacketParser, ParserConfig


TOSSUP_PACKET = (
    "1. Name this author of a novel about a raft trip down a river.\n"
    "ANSWER: Mark {b}Twain{/b}\n"
    "<Literature - American>\n"
    "2. This philosopher wrote the {i}Critique of Pure Reason{/i}.\n"
    "ANSWER: Immanuel {b}Kant{/b}\n"
    "<Philosophy>\n"
)

BONUS_PACKET = (
    "1. This author wrote about a jumping frog. For 10 points each:\n"
    "[10] Name this author of {i}Huckleberry Finn{/i}.\n"
    "ANSWER: Mark {b}Twain{/b}\n"
    "[10] Twain's novel follows this boy and the escaped slave Jim.\n"
    "ANSWER: {b}Huck{/b}leberry Finn\n"
    "[10] Huck fakes his own death to escape this abusive father.\n"
    "ANSWER: {b}Pap{/b} Finn\n"
    "<Literature - American>\n"
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers PacketParser attaches so tests don't share streams."""
    yield
    package_logger = logging.getLogger("packet_parser")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def config():
    return ParserConfig()


@pytest.fixture
def parser():
    return PacketParser()


@pytest.fixture
def session():
    return ParseSession()


@pytest.fixture
def tossup_packet():
    return TOSSUP_PACKET


@pytest.fixture
def bonus_packet():
    return BONUS_PACKET


@pytest.fixture
def packet_text():
    return TOSSUP_PACKET + BONUS_PACKET.replace("1. This", "3. This", 1)
