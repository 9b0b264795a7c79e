"""Positioned text pieces recovered from a page content stream."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Fragment:
    """A shown string and the horizontal column it was emitted at."""
    column: float
    text: str


@dataclass
class Line:
    """
    Fragments sharing one vertical offset, in column order.

    value is the fragments' text joined by single spaces.
    """
    fragments: List[Fragment] = field(default_factory=list)
    value: str = ""

    @classmethod
    def from_fragments(cls, fragments: List[Fragment]) -> "Line":
        return cls(
            fragments=list(fragments),
            value=join_fragments(fragments),
        )


def join_fragments(fragments: List[Fragment]) -> str:
    return " ".join(f.text for f in fragments)
