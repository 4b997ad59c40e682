"""
Brazilian amount parser.

DARF amounts use '.' to group thousands and ',' before the cents:
- 9.952,00      -> 9952.00
- 1.234.567,89  -> 1234567.89
- 100,00        -> 100.00
Anything without exactly two decimal digits after a comma is not an amount
(reference numbers, CNPJs and dates never match).
"""

import re
from typing import Optional

from pydantic import BaseModel


AMOUNT_PATTERN = re.compile(r"\d{1,3}(?:\.\d{3})*,\d{2}")

_NON_AMOUNT_CHARS = re.compile(r"[^\d,]")


class AmountMatch(BaseModel):
    amount: float
    raw_text: str
    start: int
    end: int


def parse_amount_br(raw: Optional[str]) -> float:
    """
    Parse a Brazilian formatted amount.

    Everything except digits and commas is dropped, the first comma becomes
    the decimal point. Empty input parses as 0.
    """
    if not raw:
        return 0.0

    cleaned = _NON_AMOUNT_CHARS.sub("", raw).replace(",", ".", 1)
    if not cleaned:
        return 0.0

    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def find_amounts(line: str) -> list[AmountMatch]:
    """All amount-shaped substrings of a line, left to right."""
    return [
        AmountMatch(
            amount=parse_amount_br(m.group()),
            raw_text=m.group(),
            start=m.start(),
            end=m.end(),
        )
        for m in AMOUNT_PATTERN.finditer(line)
    ]


def last_amount(line: str) -> Optional[AmountMatch]:
    """
    The rightmost amount on a line.
    DARF composition lines print reference values before the line total.
    """
    matches = find_amounts(line)
    return matches[-1] if matches else None


def is_amount_like(text: str) -> bool:
    """Quick check that the whole text is a single Brazilian amount."""
    return bool(AMOUNT_PATTERN.fullmatch(text.strip()))
