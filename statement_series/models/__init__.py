"""Data models for statement extraction."""

from .text import Fragment, Line, join_fragments
from .records import Record, Value

__all__ = [
    # Text geometry
    "Fragment",
    "Line",
    "join_fragments",
    # Records
    "Record",
    "Value",
]
