"""Tag-pull text recovery for OOXML documents (.pptx, .docx).

The ZIP container is never opened. The raw buffer is scanned as text for
DrawingML and WordprocessingML element patterns, which only succeeds when
the XML parts are stored uncompressed inside the archive. Deflated parts
(the default for Office) defeat the scan: the result is usually a failure,
and occasionally garbled text that happens to match. A correct
implementation would inflate the archive and parse the XML; the heuristic
is kept for parity with the upload tool it replaces.
"""

import re
from typing import Callable, Sequence

from upload_parser.exceptions import InsufficientTextError
from upload_parser.logger import get_logger
from upload_parser.textview import collapse_whitespace, strip_tags

logger = get_logger(__name__)


# DrawingML (slides)
SLIDE_TEXT_RUN = re.compile(r"<a:t[^>]*>([^<]+)</a:t>")
SLIDE_PARAGRAPH = re.compile(r"<a:p[^>]*>(.*?)</a:p>", re.DOTALL)
SLIDE_RUN = re.compile(r"<a:r[^>]*>(.*?)</a:r>", re.DOTALL)
SLIDE_TEXT_BODY = re.compile(r"<p:txBody[^>]*>(.*?)</p:txBody>", re.DOTALL)

# WordprocessingML
WORD_TEXT = re.compile(r"<w:t[^>]*>([^<]+)</w:t>")
WORD_TEXT_OR_EMPTY = re.compile(r"<w:t[^>]*>([^<]*)</w:t>")
WORD_RUN = re.compile(r"<w:r[^>]*>(.*?)</w:r>", re.DOTALL)
WORD_PARAGRAPH = re.compile(r"<w:p[^>]*>(.*?)</w:p>", re.DOTALL)

POWERPOINT_INSUFFICIENT_TEXT = (
    "Could not extract sufficient text from PowerPoint file. The slides might contain "
    "mostly images or complex formatting. Please save as PDF or copy the text manually."
)
WORD_INSUFFICIENT_TEXT = (
    "Could not extract sufficient text from Word document. The document might be mostly "
    "images or have complex formatting. Please save as PDF or copy the text manually."
)

Strategy = tuple[str, Callable[[str], str]]


def _element_text(pattern: re.Pattern[str], content: str) -> str:
    """Bodies of simple text elements, tags stripped, blanks dropped."""
    bodies = (strip_tags(match.group(0)) for match in pattern.finditer(content))
    return " ".join(body for body in bodies if body.strip())


def _container_text(pattern: re.Pattern[str], content: str) -> str:
    """Bodies of container elements with every inner tag turned into a space."""
    bodies = (strip_tags(match.group(0), " ") for match in pattern.finditer(content))
    return collapse_whitespace(" ".join(bodies))


def _slide_paragraph_text(content: str) -> str:
    paragraphs = (
        collapse_whitespace(strip_tags(match.group(0), " "))
        for match in SLIDE_PARAGRAPH.finditer(content)
    )
    return " ".join(paragraph for paragraph in paragraphs if paragraph)


def _word_run_text(content: str) -> str:
    """Text nodes nested in each run, ignoring run formatting markup."""
    runs = []
    for run in WORD_RUN.finditer(content):
        nodes = [strip_tags(node.group(0)) for node in WORD_TEXT_OR_EMPTY.finditer(run.group(0))]
        joined = " ".join(nodes)
        if joined.strip():
            runs.append(joined)
    return collapse_whitespace(" ".join(runs))


POWERPOINT_STRATEGIES: Sequence[Strategy] = (
    ("text_runs", lambda content: _element_text(SLIDE_TEXT_RUN, content)),
    ("paragraphs", _slide_paragraph_text),
    ("runs", lambda content: _container_text(SLIDE_RUN, content)),
    ("text_bodies", lambda content: _container_text(SLIDE_TEXT_BODY, content)),
)

WORD_STRATEGIES: Sequence[Strategy] = (
    ("text_nodes", lambda content: _element_text(WORD_TEXT, content)),
    ("runs", _word_run_text),
    ("paragraphs", lambda content: _container_text(WORD_PARAGRAPH, content)),
)


def _first_match(
    content: str, strategies: Sequence[Strategy], document_type: str
) -> str:
    for name, scan in strategies:
        text = scan(content).strip()
        if text:
            logger.debug(
                "OOXML tag scan matched",
                extra_data={
                    "document_type": document_type,
                    "strategy": name,
                    "characters_extracted": len(text),
                },
            )
            return text

    logger.debug(
        "OOXML tag scan found no text",
        extra_data={"document_type": document_type, "content_length": len(content)},
    )
    return ""


def extract_presentation_text(content: str, min_chars: int) -> str:
    """Recover slide text from a decoded .pptx buffer.

    Raises:
        InsufficientTextError: If less than ``min_chars`` characters are found
    """
    text = _first_match(content, POWERPOINT_STRATEGIES, "presentation")
    if len(text) < min_chars:
        raise InsufficientTextError(POWERPOINT_INSUFFICIENT_TEXT)
    return text


def extract_word_text(content: str, min_chars: int) -> str:
    """Recover body text from a decoded .docx buffer.

    Raises:
        InsufficientTextError: If less than ``min_chars`` characters are found
    """
    text = _first_match(content, WORD_STRATEGIES, "word")
    if len(text) < min_chars:
        raise InsufficientTextError(WORD_INSUFFICIENT_TEXT)
    return text
