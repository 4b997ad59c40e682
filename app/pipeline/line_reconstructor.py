"""
Line reconstruction: positioned fragments -> ordered visual lines.

PDF text layers store glyph runs in drawing order with no notion of lines or
spaces. Lines are rebuilt from baseline proximity and words from horizontal
gaps.
"""

from dataclasses import dataclass
from functools import cmp_to_key, reduce
from typing import Iterable, Optional

from app.schemas.contracts import PageFragments, PositionedFragment


DEFAULT_LINE_TOLERANCE = 4.0
DEFAULT_GAP_THRESHOLD = 4.0


def sort_fragments(
    fragments: Iterable[PositionedFragment],
    line_tolerance: float = DEFAULT_LINE_TOLERANCE,
) -> list[PositionedFragment]:
    """
    Order fragments top-to-bottom, then left-to-right.

    Two fragments whose y differ by at most line_tolerance compare as being on
    the same row and are ordered by x.
    """
    def compare(a: PositionedFragment, b: PositionedFragment) -> int:
        y_diff = b.y - a.y
        if abs(y_diff) <= line_tolerance:
            x_diff = a.x - b.x
            return (x_diff > 0) - (x_diff < 0)
        return (y_diff > 0) - (y_diff < 0)

    return sorted(fragments, key=cmp_to_key(compare))


@dataclass(frozen=True)
class _LineState:
    """Running accumulator of the fold over one page."""
    lines: tuple[str, ...] = ()
    text: str = ""
    line_y: Optional[float] = None
    prev_end: Optional[float] = None

    def flushed(self) -> tuple[str, ...]:
        text = self.text.strip()
        return self.lines + (text,) if text else self.lines


def _step(
    state: _LineState,
    fragment: PositionedFragment,
    line_tolerance: float,
    gap_threshold: float,
) -> _LineState:
    if state.line_y is not None and abs(fragment.y - state.line_y) > line_tolerance:
        state = _LineState(lines=state.flushed())

    text = state.text
    if state.prev_end is not None and fragment.x - state.prev_end > gap_threshold:
        text += " "

    return _LineState(
        lines=state.lines,
        text=text + fragment.text,
        line_y=fragment.y if state.line_y is None else state.line_y,
        prev_end=fragment.x + fragment.width,
    )


def reconstruct_page_lines(
    fragments: Iterable[PositionedFragment],
    line_tolerance: float = DEFAULT_LINE_TOLERANCE,
    gap_threshold: float = DEFAULT_GAP_THRESHOLD,
) -> list[str]:
    """
    Rebuild the text lines of a single page.

    A fragment more than line_tolerance away (vertically) from the first
    fragment of the current line starts a new line. Inside a line, a gap wider
    than gap_threshold between the end of one fragment and the start of the
    next becomes a single space; narrower gaps join the fragments directly.
    Blank lines are dropped and every line is trimmed.
    """
    ordered = sort_fragments(fragments, line_tolerance)
    final = reduce(
        lambda state, frag: _step(state, frag, line_tolerance, gap_threshold),
        ordered,
        _LineState(),
    )
    return list(final.flushed())


def reconstruct_document_lines(
    pages: Iterable[PageFragments],
    line_tolerance: float = DEFAULT_LINE_TOLERANCE,
    gap_threshold: float = DEFAULT_GAP_THRESHOLD,
) -> list[str]:
    """Lines of every page in page order. Lines never span a page break."""
    lines: list[str] = []
    for page in sorted(pages, key=lambda p: p.page_number):
        lines.extend(reconstruct_page_lines(page.fragments, line_tolerance, gap_threshold))
    return lines
