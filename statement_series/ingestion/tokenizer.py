"""
Content stream tokenizer.

Turns decoded content stream bytes into (keyword, operands) instructions
using pdfminer's PostScript lexer.
"""

import io
import re
from dataclasses import dataclass, field
from typing import Any, BinaryIO, List, Optional

import structlog
from pdfminer.psparser import (
    KEYWORD_ARRAY_BEGIN,
    KEYWORD_ARRAY_END,
    KEYWORD_DICT_BEGIN,
    KEYWORD_DICT_END,
    KWD,
    PSBaseParser,
    PSEOF,
    PSException,
    PSKeyword,
    keyword_name,
    literal_name,
)

from ..config import Settings, get_settings
from ..errors import TokenizeError

logger = structlog.get_logger()

KEYWORD_INLINE_DATA = KWD(b"ID")
KEYWORD_NULL = KWD(b"null")

# Inline image data runs up to the first whitespace-delimited EI
INLINE_IMAGE_END = re.compile(rb"\sEI(?=\s|$)")


@dataclass
class Instruction:
    """A content stream operator and the operands preceding it."""
    keyword: str
    operands: List[Any] = field(default_factory=list)


def read_tokens(data: bytes) -> List[Any]:
    """Lex data into a flat list of operands and PSKeyword markers."""
    # Trailing newline flushes a token pending at end of data
    parser = PSBaseParser(io.BytesIO(data + b"\n"))
    tokens: List[Any] = []
    while True:
        try:
            pos, token = parser.nexttoken()
        except PSEOF:
            break
        except PSException as e:
            raise TokenizeError(str(e), data) from e
        tokens.append(token)
        if token is KEYWORD_INLINE_DATA:
            start = pos + len(b"ID ")
            m = INLINE_IMAGE_END.search(data, start)
            if m is None:
                raise TokenizeError("unterminated inline image", data)
            tokens.append(data[start:m.start()])
            parser.seek(m.start() + 1)
    return tokens


def _close_container(marker, items: List[Any], data: bytes) -> Any:
    if marker is KEYWORD_ARRAY_BEGIN:
        return items
    if len(items) % 2:
        raise TokenizeError("odd number of dictionary items", data)
    return {
        literal_name(items[i]): items[i + 1]
        for i in range(0, len(items), 2)
    }


def group_instructions(tokens: List[Any], data: bytes = b"") -> List[Instruction]:
    """
    Accumulate operands until a keyword is seen, then emit an instruction.

    Array and dictionary operands are rebuilt as lists and dicts.
    """
    instructions: List[Instruction] = []
    operands: List[Any] = []
    # Open containers as (begin marker, items) pairs
    stack: List[Any] = []

    for token in tokens:
        target = stack[-1][1] if stack else operands
        if not isinstance(token, PSKeyword):
            target.append(token)
            continue
        if token is KEYWORD_ARRAY_BEGIN or token is KEYWORD_DICT_BEGIN:
            stack.append((token, []))
        elif token is KEYWORD_ARRAY_END or token is KEYWORD_DICT_END:
            expected = (
                KEYWORD_ARRAY_BEGIN if token is KEYWORD_ARRAY_END
                else KEYWORD_DICT_BEGIN
            )
            if not stack or stack[-1][0] is not expected:
                raise TokenizeError(
                    f"unbalanced {keyword_name(token)!r}", data)
            marker, items = stack.pop()
            value = _close_container(marker, items, data)
            (stack[-1][1] if stack else operands).append(value)
        elif token is KEYWORD_NULL:
            target.append(None)
        elif stack:
            raise TokenizeError(
                f"operator {keyword_name(token)!r} inside operand", data)
        else:
            instructions.append(Instruction(keyword_name(token), operands))
            operands = []

    if stack:
        raise TokenizeError("unterminated array or dictionary", data)
    if operands:
        logger.debug("Dropping trailing operands", count=len(operands))
    return instructions


def tokenize(
    stream: BinaryIO,
    settings: Optional[Settings] = None,
) -> List[Instruction]:
    """
    Read a decoded content stream fully and return its instructions.

    On failure the raw bytes stay on the TokenizeError, and are also written
    to settings.dump_path when it is configured.
    """
    settings = settings or get_settings()
    data = stream.read()
    try:
        return group_instructions(read_tokens(data), data)
    except TokenizeError:
        if settings.dump_path is not None:
            settings.dump_path.write_bytes(data)
            logger.warning(
                "Dumped untokenizable stream",
                path=str(settings.dump_path),
                size=len(data),
            )
        raise
