"""
pdfplumber fragment source.
Only reads the embedded text layer; scanned pages yield no fragments.
"""

import io

import pdfplumber
import structlog

from app.config import settings
from app.engines.base import FragmentSource, EngineError
from app.schemas.contracts import PageFragments, PositionedFragment

logger = structlog.get_logger(__name__)


def _word_to_fragment(word: dict, page_height: float) -> PositionedFragment:
    """pdfplumber measures from the page top; fragments measure y upward."""
    x0 = float(word["x0"])
    x1 = float(word["x1"])
    return PositionedFragment(
        text=word["text"],
        x=x0,
        y=round(page_height - float(word["bottom"]), 3),
        width=max(x1 - x0, 0.0),
    )


class PdfPlumberEngine(FragmentSource):
    """
    Fragment source built on pdfplumber.

    Glyphs are grouped into short runs using a tight x tolerance, which keeps
    explicit space characters inside the run and leaves positional gaps
    between runs for the line reconstructor to judge.
    """

    engine_name = "pdfplumber"
    engine_version = pdfplumber.__version__

    def __init__(self, x_tolerance: float = 1.5, y_tolerance: float = 1.0):
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance

    def load_pages(self, data: bytes) -> list[PageFragments]:
        """Open the PDF from memory and collect fragments page by page."""
        if not data:
            raise EngineError(self.engine_name, "ERR_EMPTY_DOCUMENT", "document has no content")

        pages: list[PageFragments] = []
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                for page_number, page in enumerate(pdf.pages, start=1):
                    page_height = float(page.height)
                    words = page.extract_words(
                        x_tolerance=self.x_tolerance,
                        y_tolerance=self.y_tolerance,
                        keep_blank_chars=True,
                        use_text_flow=True,
                    )
                    fragments = [
                        _word_to_fragment(w, page_height)
                        for w in words
                        if w.get("text")
                    ]
                    pages.append(PageFragments(page_number=page_number, fragments=fragments))
        except EngineError:
            raise
        except Exception as e:
            raise EngineError(self.engine_name, "ERR_PDF_LOAD", str(e) or type(e).__name__) from e

        logger.debug(
            "pdfplumber_fragments_loaded",
            page_count=len(pages),
            fragment_count=sum(len(p.fragments) for p in pages),
        )
        return pages


def default_engine() -> PdfPlumberEngine:
    return PdfPlumberEngine(x_tolerance=settings.FRAGMENT_X_TOLERANCE)
