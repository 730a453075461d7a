"""Heuristic PDF text recovery.

PDF content streams are usually compressed and text is often drawn glyph
by glyph, so nothing here attempts to interpret the object model. Instead
the permissive text view is mined for string literals, which is enough
for simple, uncompressed, text-based PDFs and fails loudly otherwise.
"""

import re

from upload_parser.exceptions import InsufficientTextError
from upload_parser.logger import get_logger
from upload_parser.textview import collapse_whitespace, printable_only

logger = get_logger(__name__)


STRING_LITERAL = re.compile(r"\(([^)]+)\)")
NUMERIC_LITERAL = re.compile(r"[0-9\s]*")
STREAM_BLOCK = re.compile(r"stream\s*(.*?)\s*endstream", re.DOTALL)
TEXT_OBJECT = re.compile(r"BT\s*(.*?)\s*ET", re.DOTALL)
SHOW_TEXT = re.compile(r"\(([^)]+)\)\s*Tj")

# Letters, digits, whitespace, anything from U+00A0 up, and basic punctuation
DISALLOWED_CHARS = re.compile(r"[^A-Za-z0-9_\s\u00A0-\U0010FFFF.,!?;:()\-\"']")
OBJECT_HEADER = re.compile(r"\b[0-9]+\s+[0-9]+\s+obj\b")
OBJECT_REFERENCE = re.compile(r"\b[0-9]+\s+[0-9]+\s+R\b")

PAGE_TREE_COUNT = re.compile(r"/Count\s+([0-9]+)")
PAGE_NODE = re.compile(r"/Type\s*/Page[^s]")

MIN_LITERAL_LENGTH = 3

INSUFFICIENT_TEXT_MESSAGE = (
    "Could not extract sufficient text from PDF. The file might be image-based, "
    "encrypted, or have complex formatting."
)


def literal_text(view: str) -> str:
    """Join every parenthesized string literal that looks like prose.

    Short literals and purely numeric ones are mostly coordinates and ids.
    """
    literals = (match.group(1) for match in STRING_LITERAL.finditer(view))
    return " ".join(
        literal
        for literal in literals
        if len(literal) >= MIN_LITERAL_LENGTH and not NUMERIC_LITERAL.fullmatch(literal)
    )


def stream_text(view: str) -> str:
    bodies = (printable_only(match.group(1)) for match in STREAM_BLOCK.finditer(view))
    return collapse_whitespace(" ".join(bodies))


def text_object_text(view: str) -> str:
    """Join ``(...) Tj`` operands found inside ``BT ... ET`` text objects."""
    shown = []
    for block in TEXT_OBJECT.finditer(view):
        operands = [match.group(1) for match in SHOW_TEXT.finditer(block.group(1))]
        shown.append(" ".join(operands))
    return " ".join(shown)


def clean_text(text: str) -> str:
    text = collapse_whitespace(text)
    text = DISALLOWED_CHARS.sub(" ", text)
    text = OBJECT_HEADER.sub("", text)
    text = OBJECT_REFERENCE.sub("", text)
    return collapse_whitespace(text)


def extract_pdf_text(view: str, min_chars: int) -> str:
    """Recover text from a PDF text view.

    Candidates are tried in order (string literals, stream bodies, text
    objects) and the first non-empty one is cleaned and returned.

    Args:
        view: Permissive text view of the PDF bytes
        min_chars: Minimum length of the cleaned text

    Returns:
        Cleaned text of at least ``min_chars`` characters

    Raises:
        InsufficientTextError: If the cleaned text is shorter than ``min_chars``
    """
    candidates = (
        ("string_literals", literal_text),
        ("stream_blocks", stream_text),
        ("text_objects", text_object_text),
    )

    source, text = "none", ""
    for name, scan in candidates:
        text = scan(view)
        if text:
            source = name
            break

    text = clean_text(text)

    logger.debug(
        "PDF text scan completed",
        extra_data={"candidate": source, "characters_extracted": len(text)},
    )

    if len(text) < min_chars:
        raise InsufficientTextError(INSUFFICIENT_TEXT_MESSAGE)
    return text


def estimate_page_count(view: str) -> int:
    """Estimate the number of pages, defaulting to 1.

    A ``/Count n`` entry from the page tree wins. Otherwise page objects are
    counted, skipping ``/Type /Pages`` tree nodes.
    """
    try:
        count = PAGE_TREE_COUNT.search(view)
        if count and int(count.group(1)) >= 1:
            return int(count.group(1))

        pages = sum(1 for _ in PAGE_NODE.finditer(view))
        return pages or 1
    except Exception as exc:
        logger.warning(
            "PDF page count estimation failed, assuming a single page",
            extra_data={"error_type": type(exc).__name__, "error": str(exc)},
        )
        return 1
