"""Data models for upload parser."""

from dataclasses import dataclass, field
from typing import Any, Optional

from upload_parser.exceptions import ERRORS_BY_KIND, FailureKind


@dataclass(frozen=True)
class RawDocument:
    """Uploaded file as loaded into memory."""

    data: bytes = field(repr=False)
    mime_type: str
    file_name: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ExtractedText:
    """Output of a single format extractor before pipeline checks."""

    text: str
    page_count: Optional[int] = None


@dataclass(frozen=True)
class DocumentMetadata:
    file_name: str
    file_size: int
    file_type: str
    language: str
    page_count: Optional[int] = None  # PDF only


@dataclass(frozen=True)
class ParsedDocument:
    """Result of a successful extraction."""

    text: str  # Trimmed, never shorter than the pipeline floor
    metadata: DocumentMetadata

    def to_payload(self) -> dict[str, Any]:
        """Return the success payload in the shape expected by the upload UI."""
        payload: dict[str, Any] = {
            "text": self.text,
            "fileName": self.metadata.file_name,
            "fileSize": self.metadata.file_size,
            "fileType": self.metadata.file_type,
            "language": self.metadata.language,
        }
        if self.metadata.page_count is not None:
            payload["pageCount"] = self.metadata.page_count
        return payload


@dataclass(frozen=True)
class ParseFailure:
    """Typed failure with a user-facing remediation message."""

    kind: FailureKind
    message: str

    def to_payload(self) -> dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message}

    def to_exception(self) -> Exception:
        return ERRORS_BY_KIND[self.kind](self.message)


@dataclass(frozen=True)
class ExtractionOutcome:
    """Either a parsed document or a failure, never both."""

    document: Optional[ParsedDocument] = None
    failure: Optional[ParseFailure] = None

    def __post_init__(self) -> None:
        if (self.document is None) == (self.failure is None):
            raise ValueError("ExtractionOutcome needs exactly one of document or failure")

    @classmethod
    def success(cls, document: ParsedDocument) -> "ExtractionOutcome":
        return cls(document=document)

    @classmethod
    def failed(cls, kind: FailureKind, message: str) -> "ExtractionOutcome":
        return cls(failure=ParseFailure(kind=kind, message=message))

    @property
    def ok(self) -> bool:
        return self.document is not None

    def unwrap(self) -> ParsedDocument:
        """Return the parsed document or raise the matching typed exception.

        Raises:
            DocumentParserError: Subclass matching ``failure.kind``
        """
        if self.failure is not None:
            raise self.failure.to_exception()
        assert self.document is not None
        return self.document
