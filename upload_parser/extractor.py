"""Heuristic extractors dispatched by format.

None of the extractors rely on a format library: each one scans a lenient
text decoding of the raw bytes. They either return text that meets their
own floor or raise a single typed ``DocumentParserError``.
"""

import re
from typing import Optional

from upload_parser.config import ParserConfig
from upload_parser.detector import FormatKind
from upload_parser.exceptions import (
    DocumentParserError,
    InsufficientTextError,
    InternalParserError,
)
from upload_parser.logger import Timer, get_logger
from upload_parser.models import ExtractedText, RawDocument
from upload_parser.ooxml import extract_presentation_text, extract_word_text
from upload_parser.pdf import estimate_page_count, extract_pdf_text
from upload_parser.textview import decode_lenient, permissive_text

logger = get_logger(__name__)


# ASCII letters, or anything from U+00A0 upward
LEADING_LETTER = re.compile(r"[a-zA-Z\u00A0-\U0010FFFF]")
DIGITS_ONLY = re.compile(r"[0-9]+")

LEGACY_POWERPOINT_INSUFFICIENT_TEXT = (
    "Could not extract sufficient text from legacy PowerPoint file. "
    "Please convert to PPTX or PDF format."
)
PLAIN_TEXT_TOO_SHORT = "Text file appears to be empty or too short."

# Shown when an extractor fails unexpectedly; internal details are only logged
INTERNAL_FAILURE_MESSAGES = {
    FormatKind.PDF: (
        "Failed to parse PDF file. Please try converting it to text first "
        "or use a different file."
    ),
    FormatKind.POWERPOINT_MODERN: (
        "Failed to parse PowerPoint file. Please save as PDF or copy the text manually."
    ),
    FormatKind.POWERPOINT_LEGACY: (
        "Failed to parse legacy PowerPoint file. Please convert to a newer format."
    ),
    FormatKind.WORD_MODERN: (
        "Failed to parse Word document. Please save as PDF or copy the text manually."
    ),
    FormatKind.PLAIN_TEXT: "Failed to read text file.",
}


class HeuristicExtractor:
    """Best-effort text extractor for uploads.

    Stateless apart from its configuration, so one instance can serve any
    number of concurrent calls.
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """Initialize extractor with configuration.

        Args:
            config: Parser limits. If None, uses defaults.
        """
        self.config = config or ParserConfig()

    def extract(self, document: RawDocument, kind: FormatKind) -> ExtractedText:
        """Extract text from a classified document.

        Args:
            document: Loaded upload
            kind: Format chosen by the classifier

        Returns:
            Extracted text, with a page count for PDFs

        Raises:
            InsufficientTextError: If the format's floor is not met
            InternalParserError: If scanning fails unexpectedly
        """
        handlers = {
            FormatKind.PDF: self._extract_pdf,
            FormatKind.POWERPOINT_MODERN: self._extract_pptx,
            FormatKind.POWERPOINT_LEGACY: self._extract_ppt,
            FormatKind.WORD_MODERN: self._extract_docx,
            FormatKind.PLAIN_TEXT: self._extract_text,
        }
        if kind not in handlers:
            raise InternalParserError(f"No extractor registered for format {kind.value}")

        try:
            with Timer(f"{kind.value}_extraction") as timer:
                result = handlers[kind](document.data)
        except DocumentParserError as exc:
            logger.info(
                "Extractor rejected document",
                extra_data={
                    "file_name": document.file_name,
                    "format": kind.value,
                    "failure": exc.kind.value,
                },
            )
            raise
        except Exception as exc:
            logger.error(
                "Extractor failed unexpectedly",
                extra_data={
                    "file_name": document.file_name,
                    "format": kind.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            raise InternalParserError(INTERNAL_FAILURE_MESSAGES[kind]) from exc

        logger.debug(
            "Extractor completed",
            extra_data={
                "file_name": document.file_name,
                "format": kind.value,
                "characters_extracted": len(result.text),
                "page_count": result.page_count,
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return result

    def _extract_pdf(self, data: bytes) -> ExtractedText:
        view = permissive_text(data)
        text = extract_pdf_text(view, self.config.min_pdf_chars)
        return ExtractedText(text=text, page_count=estimate_page_count(view))

    def _extract_pptx(self, data: bytes) -> ExtractedText:
        text = extract_presentation_text(decode_lenient(data), self.config.min_extractor_chars)
        return ExtractedText(text=text)

    def _extract_docx(self, data: bytes) -> ExtractedText:
        text = extract_word_text(decode_lenient(data), self.config.min_extractor_chars)
        return ExtractedText(text=text)

    def _extract_ppt(self, data: bytes) -> ExtractedText:
        """Keep word-like tokens from the binary slide stream.

        The legacy format has no text markers, so any run of printable
        characters of plausible word length that starts with a letter is kept.
        """
        tokens = [
            token
            for token in permissive_text(data).split()
            if self._is_legacy_word(token)
        ]
        text = " ".join(tokens).strip()
        if len(text) < self.config.min_extractor_chars:
            raise InsufficientTextError(LEGACY_POWERPOINT_INSUFFICIENT_TEXT)
        return ExtractedText(text=text)

    def _is_legacy_word(self, token: str) -> bool:
        return (
            self.config.legacy_token_min_length
            < len(token)
            < self.config.legacy_token_max_length
            and LEADING_LETTER.match(token) is not None
            and DIGITS_ONLY.fullmatch(token) is None
        )

    def _extract_text(self, data: bytes) -> ExtractedText:
        # utf-8-sig drops a leading byte order mark
        text = data.decode("utf-8-sig", errors="replace").strip()
        if len(text) < self.config.min_extractor_chars:
            raise InsufficientTextError(PLAIN_TEXT_TOO_SHORT)
        return ExtractedText(text=text)
