"""Configuration classes for upload parser."""

from dataclasses import dataclass

MIB = 1024 * 1024


@dataclass(frozen=True)
class ParserConfig:
    """Limits and thresholds for heuristic text extraction.

    Every extraction call receives its own config value, so different callers
    can tune limits without affecting each other.

    Examples:
        >>> # Defaults matching the upload form (100 MiB, 50 characters)
        >>> config = ParserConfig()

        >>> # Smaller ceiling for a memory constrained worker
        >>> config = ParserConfig(max_file_size_bytes=10 * MIB)
    """

    max_file_size_bytes: int = 100 * MIB
    """Largest accepted input. Exactly this many bytes is accepted, one more is rejected."""

    min_text_chars: int = 50
    """Pipeline-wide floor applied to every extractor's output."""

    min_extractor_chars: int = 20
    """Floor applied inside the OOXML, legacy PowerPoint and plain text extractors."""

    min_pdf_chars: int = 50
    """Floor applied inside the PDF extractor after clean-up."""

    legacy_token_min_length: int = 3
    """Legacy PowerPoint tokens must be strictly longer than this."""

    legacy_token_max_length: int = 100
    """Legacy PowerPoint tokens must be strictly shorter than this.

    Long unbroken runs in a binary file are almost always encoded data.
    """

    default_language: str = "en"
    """Language code reported when no script range matches."""

    read_chunk_size: int = 1 * MIB
    """Chunk size used when reading uploads from a stream."""
