"""Format classification from declared MIME type and file name."""

from enum import Enum
from typing import Optional

from upload_parser.logger import get_logger

logger = get_logger(__name__)


PDF_SIGNATURE = b"%PDF"
ZIP_SIGNATURE = b"PK\x03\x04"
OLE_SIGNATURE = b"\xd0\xcf\x11\xe0"  # Legacy Office container


class FormatKind(str, Enum):
    PDF = "pdf"
    POWERPOINT_MODERN = "pptx"
    POWERPOINT_LEGACY = "ppt"
    WORD_MODERN = "docx"
    PLAIN_TEXT = "txt"
    UNSUPPORTED = "unsupported"


SUPPORTED_FORMATS: tuple[tuple[FormatKind, str, str], ...] = (
    (FormatKind.PDF, "application/pdf", ".pdf"),
    (
        FormatKind.POWERPOINT_MODERN,
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        ".pptx",
    ),
    (FormatKind.POWERPOINT_LEGACY, "application/vnd.ms-powerpoint", ".ppt"),
    (
        FormatKind.WORD_MODERN,
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ".docx",
    ),
    (FormatKind.PLAIN_TEXT, "text/plain", ".txt"),
)

SUPPORTED_MIME_TYPES = {mime: kind for kind, mime, _ in SUPPORTED_FORMATS}

# Formats each container signature is consistent with
SIGNATURE_FORMATS = {
    "pdf": {FormatKind.PDF},
    "zip": {FormatKind.POWERPOINT_MODERN, FormatKind.WORD_MODERN},
    "ole": {FormatKind.POWERPOINT_LEGACY},
}


class FormatClassifier:
    """Picks the extraction strategy for an upload.

    The declared MIME type wins; the file name suffix is only consulted when
    the MIME type is unknown. Magic bytes are checked for diagnostics but
    never override the declared type.
    """

    def classify(
        self, mime_type: str, file_name: str, file_bytes: bytes = b""
    ) -> FormatKind:
        kind = SUPPORTED_MIME_TYPES.get(mime_type)
        source = "mime_type"

        if kind is None:
            kind = self._match_suffix(file_name)
            source = "file_name"

        if kind is FormatKind.UNSUPPORTED:
            logger.warning(
                "Unsupported document format",
                extra_data={"file_name": file_name, "mime_type": mime_type},
            )
            return kind

        logger.debug(
            "Document format classified",
            extra_data={
                "file_name": file_name,
                "mime_type": mime_type,
                "format": kind.value,
                "matched_on": source,
            },
        )

        signature = self._sniff_signature(file_bytes)
        if signature and kind not in SIGNATURE_FORMATS[signature]:
            logger.warning(
                "File signature does not match declared format",
                extra_data={
                    "file_name": file_name,
                    "format": kind.value,
                    "signature": signature,
                },
            )

        return kind

    @staticmethod
    def _match_suffix(file_name: str) -> FormatKind:
        # Case-sensitive: "REPORT.PDF" does not match
        for kind, _, suffix in SUPPORTED_FORMATS:
            if file_name.endswith(suffix):
                return kind
        return FormatKind.UNSUPPORTED

    @staticmethod
    def _sniff_signature(file_bytes: bytes) -> Optional[str]:
        head = file_bytes[:4]
        if head.startswith(PDF_SIGNATURE):
            return "pdf"
        if head.startswith(ZIP_SIGNATURE):
            return "zip"
        if head.startswith(OLE_SIGNATURE):
            return "ole"
        return None
