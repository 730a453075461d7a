"""Coarse language tagging by Unicode script presence.

This is not a statistical classifier: a single code point from a listed
script decides the tag for the whole document, and scripts are tested in
table order, not by how much of the text they cover.
"""

import re

from upload_parser.config import ParserConfig

# (pattern, language code), first match wins
SCRIPT_RANGES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[\u0B80-\u0BFF]"), "ta"),  # Tamil
    (re.compile(r"[\u0900-\u097F]"), "hi"),  # Devanagari
    (re.compile(r"[\u0600-\u06FF]"), "ar"),  # Arabic
    (re.compile(r"[\u4E00-\u9FFF]"), "zh"),  # CJK Unified Ideographs
    (re.compile(r"[\u3040-\u309F\u30A0-\u30FF]"), "ja"),  # Hiragana, Katakana
    (re.compile(r"[\uAC00-\uD7AF]"), "ko"),  # Hangul syllables
    (re.compile(r"[\u0400-\u04FF]"), "ru"),  # Cyrillic
    (re.compile(r"[\u0370-\u03FF]"), "el"),  # Greek
    (re.compile(r"[\u0E00-\u0E7F]"), "th"),  # Thai
    (re.compile(r"[\u1EA0-\u1EF9]"), "vi"),  # Vietnamese letters with diacritics
)


def detect_language(text: str, default: str = ParserConfig.default_language) -> str:
    """Return the 2-letter code of the first script found in ``text``.

    Args:
        text: Extracted document text
        default: Code returned when no listed script occurs

    Returns:
        Language code such as "hi" or "ru", or ``default``
    """
    for pattern, code in SCRIPT_RANGES:
        if pattern.search(text):
            return code
    return default
