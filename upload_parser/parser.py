"""High-level API for upload parsing."""

from pathlib import Path
from typing import BinaryIO, Optional, Union

from upload_parser.config import ParserConfig
from upload_parser.exceptions import DocumentParserError
from upload_parser.handler import DocumentHandler
from upload_parser.loader import load_file, load_stream
from upload_parser.logger import extraction_context
from upload_parser.models import ExtractionOutcome, RawDocument


def parse(
    raw_bytes: bytes,
    mime_type: str,
    file_name: str,
    config: Optional[ParserConfig] = None,
) -> ExtractionOutcome:
    """Extract text and metadata from an uploaded document.

    Never raises for problems with the document itself; inspect
    ``outcome.ok`` or call ``outcome.unwrap()``.

    Args:
        raw_bytes: Complete file contents as bytes; other types fail with READ_FAILURE
        mime_type: MIME type declared by the uploader (may be empty)
        file_name: Original file name, used when the MIME type is unknown
        config: Parser limits (optional, uses defaults if not provided)

    Returns:
        ExtractionOutcome holding either a ParsedDocument or a ParseFailure

    Examples:
        >>> with open("lecture.pdf", "rb") as f:
        ...     outcome = parse(f.read(), "application/pdf", "lecture.pdf")
        >>> if outcome.ok:
        ...     print(outcome.document.metadata.page_count)
        ... else:
        ...     print(outcome.failure.message)
    """
    with extraction_context():
        return DocumentHandler(config=config).handle(raw_bytes, mime_type, file_name)


def parse_file(
    path: Union[str, Path],
    mime_type: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> ExtractionOutcome:
    """Parse a document stored on disk.

    Without a MIME type the file name suffix selects the extractor.
    Read errors are reported as ``READ_FAILURE``.
    """
    with extraction_context():
        try:
            document = load_file(path, mime_type=mime_type, config=config)
        except DocumentParserError as exc:
            return ExtractionOutcome.failed(exc.kind, exc.message)
        return _handle_loaded(document, config)


def parse_stream(
    stream: BinaryIO,
    file_name: str,
    mime_type: str = "",
    config: Optional[ParserConfig] = None,
) -> ExtractionOutcome:
    """Parse an upload from a binary file-like object (e.g. a multipart upload)."""
    with extraction_context():
        try:
            document = load_stream(stream, file_name, mime_type=mime_type, config=config)
        except DocumentParserError as exc:
            return ExtractionOutcome.failed(exc.kind, exc.message)
        return _handle_loaded(document, config)


def _handle_loaded(
    document: RawDocument, config: Optional[ParserConfig]
) -> ExtractionOutcome:
    handler = DocumentHandler(config=config)
    return handler.handle(document.data, document.mime_type, document.file_name)
