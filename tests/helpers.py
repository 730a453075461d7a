"""Builders for synthetic upload buffers used across the test suite."""
import io
import zipfile

PDF_MIME = "application/pdf"
PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
PPT_MIME = "application/vnd.ms-powerpoint"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME = "text/plain"

SENTENCES = (
    "Photosynthesis converts light energy into chemical energy",
    "Chlorophyll absorbs mostly blue and red light",
    "Oxygen is released as a by-product of the reaction",
)


def build_pdf(*chunks: bytes) -> bytes:
    """Assemble a minimal PDF-looking buffer around the given body chunks."""
    return b"%PDF-1.4\n" + b"\n".join(chunks) + b"\n%%EOF\n"


def show_text(*lines: str) -> bytes:
    """A content stream that draws each line with the Tj operator."""
    body = " ".join(f"({line})Tj" for line in lines)
    return f"BT /F1 12 Tf 72 712 Td {body} ET".encode()


def build_ooxml_zip(part_name: str, xml: str, compression: int) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compression) as archive:
        archive.writestr("[Content_Types].xml", '<?xml version="1.0"?><Types/>')
        archive.writestr(part_name, xml)
    return buffer.getvalue()
