"""
Orchestrator Tests
"""
from unittest.mock import patch

import pytest

from helpers import PDF_MIME, PPTX_MIME, TEXT_MIME, build_pdf
from upload_parser import (
    DocumentHandler,
    FailureKind,
    FormatClassifier,
    HeuristicExtractor,
    ParserConfig,
)
from upload_parser.exceptions import InternalParserError
from upload_parser.models import RawDocument


class TestSizeCeiling:
    """Oversized input is rejected before any extractor runs"""

    def test_one_byte_over_default_ceiling(self, handler, config):
        """Should fail on size even with a valid PDF header"""
        header = b"%PDF-1.4\n"
        data = header + bytes(config.max_file_size_bytes + 1 - len(header))

        with patch.object(FormatClassifier, "classify") as classify, patch.object(
            HeuristicExtractor, "extract"
        ) as extract:
            outcome = handler.handle(data, PDF_MIME, "huge.pdf")

        assert outcome.failure.kind is FailureKind.TOO_LARGE
        assert outcome.failure.message == "File size exceeds 100MB limit"
        classify.assert_not_called()
        extract.assert_not_called()

    def test_exactly_at_ceiling_passes(self, small_config):
        """Should accept a file of exactly the ceiling size"""
        data = (b"Mitosis produces two identical daughter cells. " * 30)[:1024]
        handler = DocumentHandler(config=small_config)

        outcome = handler.handle(data, TEXT_MIME, "notes.txt")

        assert outcome.ok
        assert outcome.document.metadata.file_size == 1024

    def test_one_byte_over_small_ceiling(self, small_config):
        """Should reject ceiling + 1 bytes"""
        handler = DocumentHandler(config=small_config)

        outcome = handler.handle(b"a" * 1025, TEXT_MIME, "notes.txt")

        assert outcome.failure.kind is FailureKind.TOO_LARGE
        assert outcome.failure.message == "File size exceeds 1024 bytes limit"


class TestClassification:
    """Unsupported formats"""

    def test_unknown_type_and_name(self, handler):
        """Should name the accepted formats"""
        outcome = handler.handle(b"\x89PNG....", "image/png", "diagram.png")

        assert outcome.failure.kind is FailureKind.UNSUPPORTED_FORMAT
        assert "PDF, PPT, PPTX, DOCX, or TXT" in outcome.failure.message

    def test_suffix_fallback(self, handler, lecture_pdf):
        """Should use the suffix when the MIME type is missing"""
        outcome = handler.handle(lecture_pdf, "", "lecture.pdf")

        assert outcome.ok
        assert outcome.document.metadata.page_count == 3
        assert outcome.document.metadata.file_type == ""


class TestFloors:
    """Extractor floors and the pipeline floor"""

    def test_extractor_failure_propagates_unchanged(self, handler):
        """Should surface the plain text extractor's own message"""
        outcome = handler.handle(b"0123456789", TEXT_MIME, "short.txt")

        assert outcome.failure.kind is FailureKind.INSUFFICIENT_TEXT
        assert outcome.failure.message == "Text file appears to be empty or too short."

    def test_pipeline_floor_is_stricter(self, handler):
        """Should reject text accepted by the extractor but under 50 characters"""
        slide = b"<a:t>Cell biology lecture notes</a:t>"

        outcome = handler.handle(slide, PPTX_MIME, "deck.pptx")

        assert outcome.failure.kind is FailureKind.INSUFFICIENT_TEXT
        assert "try a different file" in outcome.failure.message
        assert "paste the text directly" in outcome.failure.message

    def test_twenty_five_characters_with_relaxed_floor(self):
        """Should round-trip short text when the pipeline floor allows it"""
        handler = DocumentHandler(config=ParserConfig(min_text_chars=20))

        outcome = handler.handle(b"  Exactly twenty-five chars\n", TEXT_MIME, "a.txt")

        assert outcome.document.text == "Exactly twenty-five chars"
        assert outcome.document.metadata.language == "en"

    def test_twenty_five_characters_with_default_floor(self, handler):
        """Should reject the same text under the default 50 character floor"""
        outcome = handler.handle(b"Exactly twenty-five chars", TEXT_MIME, "a.txt")

        assert outcome.failure.kind is FailureKind.INSUFFICIENT_TEXT


class TestAssembly:
    """Successful results"""

    def test_pdf_result(self, handler, lecture_pdf):
        """Should carry text, page count and metadata"""
        outcome = handler.handle(lecture_pdf, PDF_MIME, "lecture.pdf")
        document = outcome.document

        assert document.text.startswith("Photosynthesis")
        assert document.metadata.page_count == 3
        assert document.metadata.language == "en"
        assert document.metadata.file_name == "lecture.pdf"
        assert document.metadata.file_size == len(lecture_pdf)
        assert document.metadata.file_type == PDF_MIME

    def test_non_pdf_has_no_page_count(self, handler):
        """Should leave page count empty for other formats"""
        data = "Кинетическая энергия зависит от массы и скорости движения тела".encode()

        outcome = handler.handle(data, TEXT_MIME, "physics.txt")

        assert outcome.document.metadata.page_count is None
        assert outcome.document.metadata.language == "ru"

    def test_page_count_with_count_entry(self, handler):
        """Should prefer /Count from the page tree"""
        data = build_pdf(
            b"2 0 obj << /Type /Pages /Count 42 >> endobj",
            b"(Forty two pages of lecture notes on thermodynamics and entropy)Tj",
        )

        outcome = handler.handle(data, PDF_MIME, "thermo.pdf")

        assert outcome.document.metadata.page_count == 42


class TestInternalFaults:
    """Unexpected exceptions never escape"""

    def test_classifier_crash_becomes_internal(self, handler):
        """Should map unknown exceptions to a generic internal failure"""
        with patch.object(
            FormatClassifier, "classify", side_effect=KeyError("secret detail")
        ):
            outcome = handler.handle(b"anything", TEXT_MIME, "notes.txt")

        assert outcome.failure.kind is FailureKind.INTERNAL
        assert "secret detail" not in outcome.failure.message
        assert "paste the text directly" in outcome.failure.message

    def test_extract_raises_typed_error(self, handler):
        """Should raise InternalParserError from the exception-based API"""
        document = RawDocument(data=b"x" * 100, mime_type=TEXT_MIME, file_name="a.txt")

        with patch("upload_parser.handler.detect_language", side_effect=ValueError("bad")):
            with pytest.raises(InternalParserError):
                handler.extract(document)
