"""Heuristic text extraction for uploaded documents."""

from upload_parser.config import ParserConfig
from upload_parser.detector import FormatClassifier, FormatKind
from upload_parser.exceptions import (
    DocumentParserError,
    FailureKind,
    FileReadError,
    FileTooLargeError,
    InsufficientTextError,
    InternalParserError,
    UnsupportedFormatError,
)
from upload_parser.extractor import HeuristicExtractor
from upload_parser.handler import DocumentHandler
from upload_parser.language import detect_language
from upload_parser.models import (
    DocumentMetadata,
    ExtractionOutcome,
    ParsedDocument,
    ParseFailure,
    RawDocument,
)
from upload_parser.parser import parse, parse_file, parse_stream

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "parse",
    "parse_file",
    "parse_stream",
    # Core classes
    "DocumentHandler",
    "FormatClassifier",
    "HeuristicExtractor",
    "detect_language",
    # Data models
    "RawDocument",
    "ParsedDocument",
    "DocumentMetadata",
    "ParseFailure",
    "ExtractionOutcome",
    "FormatKind",
    # Configuration
    "ParserConfig",
    # Exceptions
    "FailureKind",
    "DocumentParserError",
    "FileTooLargeError",
    "UnsupportedFormatError",
    "InsufficientTextError",
    "FileReadError",
    "InternalParserError",
]
