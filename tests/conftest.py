"""
Shared test fixtures.
"""

import pytest

from app.engines.base import EngineError, FragmentSource
from app.schemas.contracts import PageFragments, PositionedFragment


def frag(text: str, x: float, y: float, width: float = None) -> PositionedFragment:
    """Fragment with a rough 5 units per glyph width unless given."""
    return PositionedFragment(text=text, x=x, y=y, width=len(text) * 5.0 if width is None else width)


class FakeEngine(FragmentSource):
    """Serves canned pages keyed by the document bytes."""

    engine_name = "fake"
    engine_version = "0"

    def __init__(self, documents: dict[bytes, list[PageFragments]]):
        self.documents = documents

    def load_pages(self, data: bytes) -> list[PageFragments]:
        if data not in self.documents:
            raise EngineError(self.engine_name, "ERR_PDF_LOAD", "unreadable document")
        return self.documents[data]


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[list[tuple[float, float, str]]]) -> bytes:
    """
    Minimal PDF with Helvetica text runs.
    Each page is a list of (x, y, text) drawn at 10pt, y measured from the bottom.
    """
    objects: list[bytes] = []
    page_count = len(pages)
    font_obj = 3 + 2 * page_count

    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(page_count))
    objects.append(b"<< /Type /Catalog /Pages 2 0 R >>")
    objects.append(f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode())

    for i, runs in enumerate(pages):
        content = "".join(
            f"BT /F1 10 Tf {x} {y} Td ({_pdf_escape(text)}) Tj ET\n" for x, y, text in runs
        ).encode("latin-1")
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 595 842] "
            f"/Resources << /Font << /F1 {font_obj} 0 R >> >> /Contents {4 + 2 * i} 0 R >>".encode()
        )
        objects.append(
            f"<< /Length {len(content)} >>\nstream\n".encode() + content + b"endstream"
        )

    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def darf_pdf() -> bytes:
    """Two-page DARF-like document with two withholding lines."""
    return build_pdf([
        [
            (50, 780, "DOCUMENTO DE ARRECADACAO DE RECEITAS FEDERAIS"),
            (50, 700, "1162"),
            (100, 700, "RETENCAO IRRF PJ"),
            (420, 700, "9.952,00"),
        ],
        [
            (50, 700, "5952"),
            (100, 700, "CSLL PIS COFINS ref 10,00"),
            (420, 700, "2.500,00"),
        ],
    ])


@pytest.fixture
def plain_pdf() -> bytes:
    return build_pdf([[(50, 700, "Nothing to see here"), (50, 680, "Total 1.000,00")]])


@pytest.fixture
def sample_amounts():
    """Brazilian amount strings and their float values."""
    return [
        ("1.234,56", 1234.56),
        ("100,00", 100.0),
        ("9.952,00", 9952.0),
        ("1.234.567,89", 1234567.89),
        ("0,01", 0.01),
        ("", 0.0),
    ]


@pytest.fixture
def make_fragment():
    return frag


@pytest.fixture
def make_engine():
    return FakeEngine
