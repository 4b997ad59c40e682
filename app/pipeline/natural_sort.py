"""
Numeric-aware ordering for file names: doc1, doc2, doc10.
"""

import re
from typing import Iterable

from app.schemas.contracts import ResultRecord

_DIGIT_RUNS = re.compile(r"(\d+)")


def natural_key(text: str) -> tuple:
    """
    Split into text and number chunks; numbers compare by value, text
    case-insensitively.
    """
    # split() with a capture group puts the digit runs at odd indices
    parts = _DIGIT_RUNS.split(text.casefold())
    return tuple(
        (1, int(part), part) if i % 2 else (0, 0, part)
        for i, part in enumerate(parts)
        if part != ""
    )


def natural_sorted(items: Iterable[str]) -> list[str]:
    return sorted(items, key=natural_key)


def sort_records(records: Iterable[ResultRecord]) -> list[ResultRecord]:
    """Records by file name. Stable, so per-document order is kept."""
    return sorted(records, key=lambda r: natural_key(r.filename))
