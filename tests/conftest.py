"""
Test Configuration and Fixtures
"""
import pytest

from helpers import SENTENCES, build_pdf, show_text
from upload_parser import DocumentHandler, HeuristicExtractor, ParserConfig


@pytest.fixture
def config():
    """Default limits"""
    return ParserConfig()


@pytest.fixture
def small_config():
    """Limits with a tiny size ceiling for boundary tests"""
    return ParserConfig(max_file_size_bytes=1024)


@pytest.fixture
def extractor(config):
    return HeuristicExtractor(config=config)


@pytest.fixture
def handler(config):
    return DocumentHandler(config=config)


@pytest.fixture
def lecture_pdf():
    """Text-based PDF with object noise, three pages and readable literals"""
    return build_pdf(
        b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj",
        b"2 0 obj << /Type /Pages /Kids [3 0 R 4 0 R 5 0 R] >> endobj",
        b"3 0 obj << /Type /Page /Parent 2 0 R >> endobj",
        b"4 0 obj << /Type /Page /Parent 2 0 R >> endobj",
        b"5 0 obj << /Type /Page /Parent 2 0 R >> endobj",
        show_text(*SENTENCES),
    )


@pytest.fixture
def word_xml():
    paragraphs = "".join(
        f'<w:p><w:pPr><w:pStyle w:val="Body"/></w:pPr><w:r><w:rPr><w:b/></w:rPr>'
        f"<w:t>{sentence}</w:t></w:r></w:p>"
        for sentence in SENTENCES
    )
    return f'<?xml version="1.0"?><w:document><w:body>{paragraphs}</w:body></w:document>'


@pytest.fixture
def slide_xml():
    paragraphs = "".join(
        f'<a:p><a:r><a:rPr lang="en-US"/><a:t>{sentence}</a:t></a:r></a:p>'
        for sentence in SENTENCES
    )
    return f'<?xml version="1.0"?><p:sld><p:txBody>{paragraphs}</p:txBody></p:sld>'
