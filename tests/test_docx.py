"""
DOCX Converter Tests
====================
Word packets are built on the fly with python-docx.
"""

from __future__ import annotations

import pytest
from docx import Document
from docx.enum.style import WD_STYLE_TYPE

from packet_parser.converters import docx_to_canonical_text


@pytest.fixture
def docx_packet(tmp_path):
    document = Document()

    question = document.add_paragraph()
    question.add_run("1. Name this ")
    question.add_run("author").bold = True
    question.add_run(" of ")
    question.add_run("Huckleberry Finn").italic = True
    question.add_run(".")

    answer = document.add_paragraph()
    answer.add_run("ANSWER: Mark ")
    answer.add_run("Twain").bold = True
    answer.add_run(" <Literature - American>")

    path = tmp_path / "round1.docx"
    document.save(str(path))
    return path


class TestDocxConverter:
    """Test run formatting to markup."""

    def test_runs_become_markers(self, docx_packet):
        text = docx_to_canonical_text(docx_packet)
        assert "1. Name this {b}author{/b} of {i}Huckleberry Finn{/i}." in text
        assert "ANSWER: Mark {b}Twain{/b} <Literature - American>" in text

    def test_paragraphs_become_lines(self, docx_packet):
        lines = docx_to_canonical_text(docx_packet).split("\n")
        question = lines.index(
            "1. Name this {b}author{/b} of {i}Huckleberry Finn{/i}."
        )
        assert lines[question + 1].startswith("ANSWER:")

    def test_combined_formatting(self, tmp_path):
        document = Document()
        run = document.add_paragraph().add_run("Twain")
        run.bold = True
        run.underline = True
        path = tmp_path / "combined.docx"
        document.save(str(path))

        assert "{b}{u}Twain{/u}{/b}" in docx_to_canonical_text(path)

    def test_character_style_formatting(self, tmp_path):
        document = Document()
        style = document.styles.add_style("Answer Line", WD_STYLE_TYPE.CHARACTER)
        style.font.bold = True
        paragraph = document.add_paragraph()
        paragraph.add_run("ANSWER: Mark ")
        paragraph.add_run("Twain", style="Answer Line")
        path = tmp_path / "styled.docx"
        document.save(str(path))

        assert "ANSWER: Mark {b}Twain{/b}" in docx_to_canonical_text(path)

    def test_paragraph_style_formatting(self, tmp_path):
        document = Document()
        style = document.styles.add_style("Title Line", WD_STYLE_TYPE.PARAGRAPH)
        style.font.italic = True
        document.add_paragraph("Hamlet", style="Title Line")
        path = tmp_path / "styled.docx"
        document.save(str(path))

        assert "{i}Hamlet{/i}" in docx_to_canonical_text(path)

    def test_direct_formatting_overrides_style(self, tmp_path):
        document = Document()
        style = document.styles.add_style("Answer Line", WD_STYLE_TYPE.CHARACTER)
        style.font.bold = True
        run = document.add_paragraph().add_run("Twain", style="Answer Line")
        run.bold = False
        path = tmp_path / "styled.docx"
        document.save(str(path))

        text = docx_to_canonical_text(path)
        assert "Twain" in text
        assert "{b}" not in text

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            docx_to_canonical_text(tmp_path / "missing.docx")


class TestDocxPacket:
    """Test parsing a Word packet end to end."""

    def test_parse_docx_packet(self, parser, docx_packet):
        result = parser.parse_docx_packet(docx_packet)

        assert result.packet_name == "round1.docx"
        question = result.short_answer_questions[0]
        assert question.question == (
            "Name this <b>author</b> of <i>Huckleberry Finn</i>."
        )
        assert question.answer == "Mark <b>Twain</b>"
        assert question.subcategory == "American Literature"

    def test_parse_file_dispatches_docx(self, parser, docx_packet):
        result = parser.parse_file(docx_packet)
        assert len(result.short_answer_questions) == 1
