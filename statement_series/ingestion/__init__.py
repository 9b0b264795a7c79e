"""Ingestion module for turning PDF page content into statement records."""

from .streams import decode_stream
from .graph import walk
from .tokenizer import Instruction, tokenize
from .lines import extract_lines
from .record_parser import RecordParser
from .page_extractor import PageExtractor, iter_page_roots

__all__ = [
    "decode_stream",
    "walk",
    "Instruction",
    "tokenize",
    "extract_lines",
    "RecordParser",
    "PageExtractor",
    "iter_page_roots",
]
