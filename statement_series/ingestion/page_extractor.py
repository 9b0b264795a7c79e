"""
Per-page record extraction.

Walks a page object graph, decodes every stream that can carry page text,
and parses the resulting lines into records.
"""

import io
from typing import Any, BinaryIO, Iterator, List, Optional

import structlog
from pdfminer.pdfdocument import PDFDocument
from pdfminer.pdfpage import PDFPage
from pdfminer.pdfparser import PDFParser
from pdfminer.pdftypes import PDFStream
from pdfminer.psparser import literal_name

from ..config import Settings, get_settings
from ..errors import TokenizeError
from ..models import Record
from .graph import resolve, walk
from .lines import extract_lines
from .record_parser import RecordParser
from .streams import decode_stream
from .tokenizer import tokenize

logger = structlog.get_logger()

# Keys marking embedded font programs
FONT_PROGRAM_KEYS = ("Length1", "Length2", "Length3")
NON_TEXT_TYPES = ("XRef", "ObjStm", "Metadata", "CMap")
# FontFile3 programs and XMP metadata
NON_TEXT_SUBTYPES = ("Image", "Type1C", "CIDFontType0C", "OpenType", "XML")
# ICC profiles, functions and shadings
BINARY_STREAM_KEYS = ("N", "FunctionType", "ShadingType")


def stream_filters(stream: PDFStream) -> List[str]:
    """Return the declared filter names of a stream, in application order."""
    filters = resolve(stream.attrs.get("Filter"))
    if filters is None:
        return []
    if not isinstance(filters, list):
        filters = [filters]
    return [literal_name(resolve(f)) for f in filters]


def is_text_stream(stream: PDFStream) -> bool:
    """Tell whether a stream may hold page text instructions."""
    attrs = stream.attrs
    if any(key in attrs for key in FONT_PROGRAM_KEYS + BINARY_STREAM_KEYS):
        return False
    subtype = resolve(attrs.get("Subtype"))
    if subtype is not None and literal_name(subtype) in NON_TEXT_SUBTYPES:
        return False
    stream_type = resolve(attrs.get("Type"))
    if stream_type is not None and literal_name(stream_type) in NON_TEXT_TYPES:
        return False
    return True


def iter_page_roots(fp: BinaryIO) -> Iterator[dict]:
    """Yield the object graph root of every page of an open PDF file."""
    document = PDFDocument(PDFParser(fp))
    for page in PDFPage.create_pages(document):
        yield page.attrs


class PageExtractor:
    """Extracts raw, unfiltered records from page object graphs."""

    # Back-link to the page tree: following it would reach sibling pages
    SKIP_KEYS = ("Parent",)

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.record_parser = RecordParser(self.settings)

    def extract_stream_records(self, stream: PDFStream) -> List[Record]:
        """Decode, tokenize and parse a single content stream."""
        raw = io.BytesIO(stream.get_rawdata() or b"")
        with decode_stream(raw, stream_filters(stream)) as decoded:
            data = decoded.read()
        try:
            lines = extract_lines(tokenize(io.BytesIO(data), self.settings))
        except TokenizeError as e:
            if not e.data:
                e.data = data
            logger.error(
                "Could not parse stream",
                objid=stream.objid,
                attrs={k: repr(v) for k, v in stream.attrs.items()},
            )
            raise
        return self.record_parser.parse(lines)

    def extract_page(self, root: Any) -> List[Record]:
        """Return every record found in the text streams of a page."""
        records: List[Record] = []

        def visit(node: Any) -> None:
            if isinstance(node, PDFStream) and is_text_stream(node):
                records.extend(self.extract_stream_records(node))

        walk(root, visit, skip_keys=self.SKIP_KEYS)
        return records
