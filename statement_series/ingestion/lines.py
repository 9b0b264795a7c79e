"""
Line reconstruction from content stream instructions.

Text fragments are grouped by the vertical offset of the text matrix in
effect when they were shown, then returned top to bottom.
"""

from collections import defaultdict
from typing import Dict, Iterable, List

from pdfminer.utils import decode_text

from ..errors import TokenizeError
from ..models import Fragment, Line
from .tokenizer import Instruction


def _number(value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TokenizeError(f"expected a number, got {value!r}")
    return float(value)


def _text(value) -> str:
    if isinstance(value, bytes):
        return decode_text(value)
    if isinstance(value, str):
        return value
    raise TokenizeError(f"expected a string, got {value!r}")


def extract_lines(instructions: Iterable[Instruction]) -> List[Line]:
    """
    Group shown text into lines ordered from the top of the page.

    Only Tm (text matrix) and Tj (show text) matter: BT/ET merely bracket
    text objects. Fragments within a line are sorted by column.
    """
    lines: Dict[float, List[Fragment]] = defaultdict(list)
    x, y = 0.0, 0.0
    for instruction in instructions:
        operands = instruction.operands
        if instruction.keyword == "Tm":
            if len(operands) < 6:
                raise TokenizeError(f"Tm expects 6 operands, got {len(operands)}")
            x = _number(operands[4])
            y = _number(operands[5])
        elif instruction.keyword == "Tj":
            if not operands:
                raise TokenizeError("Tj without a string operand")
            lines[y].append(Fragment(column=x, text=_text(operands[0])))

    return [
        Line.from_fragments(sorted(lines[offset], key=lambda f: f.column))
        for offset in sorted(lines, reverse=True)
    ]
