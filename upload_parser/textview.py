"""Permissive text views over binary documents.

All heuristic extractors scan the same representation: the buffer decoded
as UTF-8 with invalid sequences replaced, and every character outside the
printable ranges blanked to a space. The view always has one entry per
decoded character, so blanking never merges neighbouring tokens.
"""

import re

# Printable ASCII, common whitespace, and everything from U+00A0 upward
NON_TEXT_CHARS = re.compile(r"[^\x20-\x7E\u00A0-\U0010FFFF\n\r\t]")
WHITESPACE_RUN = re.compile(r"\s+")
XML_TAG = re.compile(r"<[^>]+>")


def decode_lenient(data: bytes) -> str:
    """Decode UTF-8, substituting U+FFFD for invalid byte sequences."""
    return data.decode("utf-8", errors="replace")


def printable_only(text: str) -> str:
    return NON_TEXT_CHARS.sub(" ", text)


def permissive_text(data: bytes) -> str:
    """Build the scan view of a raw buffer."""
    return printable_only(decode_lenient(data))


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return WHITESPACE_RUN.sub(" ", text).strip()


def strip_tags(markup: str, replacement: str = "") -> str:
    return XML_TAG.sub(replacement, markup)
