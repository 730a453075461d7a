"""Custom exceptions for upload parser.

Every failure the engine can report belongs to exactly one ``FailureKind``.
Each kind has a dedicated exception class so internal code can raise and
catch precisely, while callers of ``parse`` receive the same information as
a plain ``ParseFailure`` value.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Closed set of failure categories."""

    TOO_LARGE = "too_large"
    UNSUPPORTED_FORMAT = "unsupported_format"
    INSUFFICIENT_TEXT = "insufficient_text"
    READ_FAILURE = "read_failure"
    INTERNAL = "internal"


class DocumentParserError(Exception):
    """Base exception for upload parser errors.

    The message is meant for end users and always carries a remediation hint.
    """

    kind: FailureKind = FailureKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FileTooLargeError(DocumentParserError):
    """Raised when the input exceeds the configured size ceiling."""

    kind = FailureKind.TOO_LARGE


class UnsupportedFormatError(DocumentParserError):
    """Raised when neither MIME type nor file name match a known format."""

    kind = FailureKind.UNSUPPORTED_FORMAT


class InsufficientTextError(DocumentParserError):
    """Raised when an extractor recovers less text than its floor."""

    kind = FailureKind.INSUFFICIENT_TEXT


class FileReadError(DocumentParserError):
    """Raised when the source file cannot be read."""

    kind = FailureKind.READ_FAILURE


class InternalParserError(DocumentParserError):
    """Raised when an unexpected fault is normalized during extraction."""

    kind = FailureKind.INTERNAL


ERRORS_BY_KIND = {
    FailureKind.TOO_LARGE: FileTooLargeError,
    FailureKind.UNSUPPORTED_FORMAT: UnsupportedFormatError,
    FailureKind.INSUFFICIENT_TEXT: InsufficientTextError,
    FailureKind.READ_FAILURE: FileReadError,
    FailureKind.INTERNAL: InternalParserError,
}
