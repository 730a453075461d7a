"""Loading uploads into memory with a size ceiling."""

from pathlib import Path
from typing import BinaryIO, Optional, Union

from upload_parser.config import MIB, ParserConfig
from upload_parser.exceptions import FileReadError, FileTooLargeError
from upload_parser.logger import Timer, get_logger
from upload_parser.models import RawDocument

logger = get_logger(__name__)


def too_large_error(size: int, file_name: str, config: ParserConfig) -> FileTooLargeError:
    logger.warning(
        "Rejected oversized document",
        extra_data={
            "file_name": file_name,
            "file_size_bytes": size,
            "max_file_size_bytes": config.max_file_size_bytes,
        },
    )
    limit = config.max_file_size_bytes
    label = f"{limit // MIB}MB" if limit % MIB == 0 else f"{limit} bytes"
    return FileTooLargeError(f"File size exceeds {label} limit")


def read_failure_error(file_name: str, exc: Exception) -> FileReadError:
    logger.error(
        "Failed to read document",
        extra_data={
            "file_name": file_name,
            "error_type": type(exc).__name__,
            "error": str(exc),
        },
    )
    return FileReadError(
        f"Failed to read file {file_name!r}. Please try uploading it again."
    )


def load_bytes(
    data: bytes, mime_type: str, file_name: str, config: Optional[ParserConfig] = None
) -> RawDocument:
    """Wrap an in-memory upload, enforcing the size ceiling.

    Raises:
        FileTooLargeError: If ``data`` is larger than the ceiling
        FileReadError: If ``data`` is not bytes-like
    """
    config = config or ParserConfig()
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise read_failure_error(
            file_name, TypeError(f"expected bytes, got {type(data).__name__}")
        )
    if len(data) > config.max_file_size_bytes:
        raise too_large_error(len(data), file_name, config)
    return RawDocument(data=bytes(data), mime_type=mime_type, file_name=file_name)


def load_file(
    path: Union[str, Path],
    mime_type: Optional[str] = None,
    config: Optional[ParserConfig] = None,
) -> RawDocument:
    """Read a document from disk.

    The size is checked with ``stat`` before reading, so oversized files are
    never pulled into memory.

    Args:
        path: Path to the document
        mime_type: Declared MIME type. If None, the file name suffix decides.
        config: Parser limits. If None, uses defaults.

    Raises:
        FileTooLargeError: If the file is larger than the ceiling
        FileReadError: If the file cannot be read
    """
    config = config or ParserConfig()
    path = Path(path)
    file_name = path.name

    try:
        size = path.stat().st_size
        if size > config.max_file_size_bytes:
            raise too_large_error(size, file_name, config)

        with Timer("file_read") as timer:
            data = path.read_bytes()
    except (OSError, ValueError) as exc:
        raise read_failure_error(file_name, exc) from exc

    logger.debug(
        "Loaded document from disk",
        extra_data={
            "file_name": file_name,
            "file_size_bytes": len(data),
            "read_time_ms": timer.get_elapsed_ms(),
        },
    )
    # The file may have grown between stat and read
    return load_bytes(data, mime_type or "", file_name, config)


def load_stream(
    stream: BinaryIO,
    file_name: str,
    mime_type: str = "",
    config: Optional[ParserConfig] = None,
) -> RawDocument:
    """Read an upload from a binary file-like object.

    At most one byte past the ceiling is read before the upload is rejected.

    Raises:
        FileTooLargeError: If the stream holds more bytes than the ceiling
        FileReadError: If reading the stream fails
    """
    config = config or ParserConfig()
    budget = config.max_file_size_bytes + 1
    chunks = []
    total = 0

    try:
        while total < budget:
            chunk = stream.read(min(config.read_chunk_size, budget - total))
            if chunk is None:
                raise BlockingIOError("stream has no data available")
            if not chunk:
                break
            chunks.append(chunk)
            total += len(chunk)
        data = b"".join(chunks)
    except (OSError, ValueError, TypeError) as exc:
        raise read_failure_error(file_name, exc) from exc

    if total > config.max_file_size_bytes:
        raise too_large_error(total, file_name, config)
    return load_bytes(data, mime_type, file_name, config)
