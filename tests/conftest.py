"""
Shared fixtures: statement content streams and minimal PDF documents.
"""

import zlib
from typing import List, Sequence, Tuple

import pytest
import structlog

from statement_series.config import Settings
from statement_series.models import Fragment, Line


def make_line(*pairs: Tuple[float, str]) -> Line:
    """Build a Line from (column, text) pairs."""
    return Line.from_fragments([Fragment(column=c, text=t) for c, t in pairs])


def text_line(y: float, pairs: Sequence[Tuple[float, str]]) -> bytes:
    """Content stream instructions showing each (column, text) pair on row y."""
    parts = []
    for x, text in pairs:
        parts.append(f"BT 1 0 0 1 {x} {y} Tm ({text}) Tj ET")
    return "\n".join(parts).encode("latin-1") + b"\n"


def amount(column: float, cents: int) -> List[Tuple[float, str]]:
    """Fragments of an amount as printed on statements: "1 . 234 , 56"."""
    units, minor = divmod(cents, 100)
    if units >= 1000:
        thousands, units = divmod(units, 1000)
        return [
            (column, str(thousands)),
            (column + 6, "."),
            (column + 10, f"{units:03d}"),
            (column + 30, ","),
            (column + 34, f"{minor:02d}"),
        ]
    return [
        (column, str(units)),
        (column + 20, ","),
        (column + 24, f"{minor:02d}"),
    ]


def total_line(y: float, date: str, cents: int) -> bytes:
    return text_line(
        y,
        [(50, "SOLDE"), (90, "CREDITEUR"), (150, "AU"), (170, date)]
        + amount(600, cents),
    )


def change_line(y: float, date: str, source: str, column: float, cents: int) -> bytes:
    day, month = date.split(".")
    return text_line(
        y,
        [(20, day), (32, "."), (36, month), (100, source)] + amount(column, cents),
    )


def build_pdf(contents: List[bytes], compress: bool = True) -> bytes:
    """
    Assemble a minimal PDF with one page per content stream.
    """
    objects = [b"<< /Type /Catalog /Pages 2 0 R >>"]
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(len(contents)))
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {len(contents)} >>".encode())
    for i, content in enumerate(contents):
        page_id = 3 + 2 * i
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 595 842] "
            f"/Contents {page_id + 1} 0 R >>".encode()
        )
        data = zlib.compress(content) if compress else content
        filters = b" /Filter /FlateDecode" if compress else b""
        objects.append(
            b"<< /Length %d%s >>\nstream\n" % (len(data), filters)
            + data
            + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref
    return bytes(out)


# Opening 1.234,56 - 45,10 + 2.000,00 = closing 3.189,46
OPENING = 123456
CLOSING = OPENING - 4510 + 200000


def statement_page() -> bytes:
    return b"".join([
        total_line(700, "31.12.2020", OPENING),
        change_line(680, "02.01", "PRLV SEPA EDF", 400, 4510),
        text_line(670, [(100, "REF 123")]),
        change_line(660, "05.01", "VIR SALAIRE", 600, 200000),
        total_line(640, "31.01.2021", CLOSING),
        text_line(100, [(50, "BNP PARIBAS SA : capital de 2 499 597 122 euros")]),
        change_line(90, "06.01", "AFTER FOOTER", 400, 100),
    ])


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def statement_pdf(tmp_path):
    path = tmp_path / "statement.pdf"
    path.write_bytes(build_pdf([statement_page()]))
    return path
