"""Document handler orchestration."""

from typing import Optional

from upload_parser.config import ParserConfig
from upload_parser.detector import FormatClassifier, FormatKind
from upload_parser.exceptions import (
    DocumentParserError,
    InsufficientTextError,
    InternalParserError,
    UnsupportedFormatError,
)
from upload_parser.extractor import HeuristicExtractor
from upload_parser.language import detect_language
from upload_parser.loader import load_bytes
from upload_parser.logger import Timer, get_logger
from upload_parser.models import (
    DocumentMetadata,
    ExtractionOutcome,
    ParsedDocument,
    RawDocument,
)

logger = get_logger(__name__)


UNSUPPORTED_FORMAT_MESSAGE = (
    "Unsupported file type. Please upload PDF, PPT, PPTX, DOCX, or TXT files."
)
PIPELINE_INSUFFICIENT_TEXT = (
    "Could not extract sufficient text from the file. Please check the file content, "
    "try a different file, or paste the text directly."
)
GENERIC_FAILURE_MESSAGE = (
    "Failed to parse file. Please try a different file or paste the text directly."
)


class DocumentHandler:
    def __init__(
        self,
        classifier: Optional[FormatClassifier] = None,
        extractor: Optional[HeuristicExtractor] = None,
        config: Optional[ParserConfig] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            classifier: Format classifier. If None, creates default.
            extractor: Text extractor. If None, creates default with config.
            config: Parser limits. If None, uses the extractor's config or defaults.
        """
        self.config = config or (extractor.config if extractor else ParserConfig())
        self.classifier = classifier or FormatClassifier()
        self.extractor = extractor or HeuristicExtractor(config=self.config)

    def handle(self, data: bytes, mime_type: str, file_name: str) -> ExtractionOutcome:
        """Parse raw upload bytes, reporting every failure as a value.

        Never raises for document problems: typed failures are returned
        unchanged and unexpected faults are normalized to ``INTERNAL``.
        """
        try:
            document = load_bytes(data, mime_type, file_name, self.config)
            return ExtractionOutcome.success(self.extract(document))
        except DocumentParserError as exc:
            logger.warning(
                "Document could not be parsed",
                extra_data={
                    "file_name": file_name,
                    "mime_type": mime_type,
                    "failure": exc.kind.value,
                },
            )
            return ExtractionOutcome.failed(exc.kind, exc.message)

    def extract(self, document: RawDocument) -> ParsedDocument:
        """Extract text and metadata from a loaded document.

        Args:
            document: Upload already checked against the size ceiling

        Returns:
            ParsedDocument with trimmed text and metadata

        Raises:
            UnsupportedFormatError: If the format is not recognized
            InsufficientTextError: If too little text is recovered
            InternalParserError: If anything else goes wrong
        """
        try:
            return self._extract(document)
        except DocumentParserError:
            raise
        except Exception as exc:
            logger.error(
                "Unexpected failure while parsing document",
                extra_data={
                    "file_name": document.file_name,
                    "mime_type": document.mime_type,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise InternalParserError(GENERIC_FAILURE_MESSAGE) from exc

    def _extract(self, document: RawDocument) -> ParsedDocument:
        with Timer("parse") as timer:
            kind = self.classifier.classify(
                document.mime_type, document.file_name, document.data
            )
            if kind is FormatKind.UNSUPPORTED:
                raise UnsupportedFormatError(UNSUPPORTED_FORMAT_MESSAGE)

            extracted = self.extractor.extract(document, kind)

            # Stricter than the floors inside the individual extractors
            text = extracted.text.strip()
            if len(text) < self.config.min_text_chars:
                logger.warning(
                    "Extracted text below pipeline minimum",
                    extra_data={
                        "file_name": document.file_name,
                        "format": kind.value,
                        "characters_extracted": len(text),
                        "min_text_chars": self.config.min_text_chars,
                    },
                )
                raise InsufficientTextError(PIPELINE_INSUFFICIENT_TEXT)

            language = detect_language(text, self.config.default_language)

        logger.info(
            "Successfully extracted text from document",
            extra_data={
                "file_name": document.file_name,
                "format": kind.value,
                "character_count": len(text),
                "page_count": extracted.page_count,
                "language": language,
                "parse_time_ms": timer.get_elapsed_ms(),
            },
        )

        return ParsedDocument(
            text=text,
            metadata=DocumentMetadata(
                file_name=document.file_name,
                file_size=document.size,
                file_type=document.mime_type,
                language=language,
                page_count=extracted.page_count if kind is FormatKind.PDF else None,
            ),
        )
