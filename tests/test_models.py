"""
Data Model Tests
"""
import pytest

from upload_parser import (
    DocumentMetadata,
    ExtractionOutcome,
    FailureKind,
    FileTooLargeError,
    ParsedDocument,
    ParseFailure,
    RawDocument,
)


@pytest.fixture
def document():
    return ParsedDocument(
        text="Some extracted text",
        metadata=DocumentMetadata(
            file_name="notes.txt", file_size=19, file_type="text/plain", language="en"
        ),
    )


class TestExtractionOutcome:
    """Success-or-failure container"""

    def test_requires_exactly_one_side(self, document):
        """Should reject both or neither"""
        failure = ParseFailure(kind=FailureKind.INTERNAL, message="x")

        with pytest.raises(ValueError):
            ExtractionOutcome()
        with pytest.raises(ValueError):
            ExtractionOutcome(document=document, failure=failure)

    def test_success(self, document):
        """Should expose the document"""
        outcome = ExtractionOutcome.success(document)

        assert outcome.ok
        assert outcome.unwrap() is document

    def test_failed(self):
        """Should convert back into the typed exception"""
        outcome = ExtractionOutcome.failed(FailureKind.TOO_LARGE, "File size exceeds 100MB limit")

        assert not outcome.ok
        with pytest.raises(FileTooLargeError) as exc_info:
            outcome.unwrap()
        assert exc_info.value.kind is FailureKind.TOO_LARGE
        assert exc_info.value.message == "File size exceeds 100MB limit"


class TestPayloads:
    """Serialized shapes"""

    def test_success_payload_without_page_count(self, document):
        """Should omit pageCount when absent"""
        assert document.to_payload() == {
            "text": "Some extracted text",
            "fileName": "notes.txt",
            "fileSize": 19,
            "fileType": "text/plain",
            "language": "en",
        }

    def test_failure_payload(self):
        """Should expose kind and message"""
        failure = ParseFailure(kind=FailureKind.READ_FAILURE, message="Failed to read file")
        assert failure.to_payload() == {"kind": "read_failure", "message": "Failed to read file"}


class TestRawDocument:
    def test_size_and_repr(self):
        """Should report byte length and keep bytes out of repr"""
        raw = RawDocument(data=b"%PDF-1.4 secret", mime_type="application/pdf", file_name="a.pdf")

        assert raw.size == 15
        assert "secret" not in repr(raw)
