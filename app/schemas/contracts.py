"""
Core extraction contracts.
PageFragments is what every fragment source produces.
ResultRecord is what every processed document turns into, failures included.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from app.models.enums import RecordStatus


class PositionedFragment(BaseModel):
    """
    A run of glyphs with its baseline origin in page space.
    y grows upward, so the top of the page has the largest y.
    """
    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    width: float = 0.0


class PageFragments(BaseModel):
    """All fragments of one page, in whatever order the PDF stores them."""
    page_number: int = Field(ge=1)
    fragments: list[PositionedFragment] = []


class ResultRecord(BaseModel):
    """
    One extraction outcome.

    Invariants:
    - success: a target code matched and a value was parsed
    - warning: a target code matched, value is 0 and message explains why
    - error: one per document, either no code matched or the document failed
    - debug_text carries the reconstructed lines whenever status != success
      (empty for documents that failed before reconstruction finished)
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    filename: str
    code: str
    value: float = 0.0
    raw_line: str = Field(default="", alias="rawLine")
    status: RecordStatus
    message: Optional[str] = None
    debug_text: Optional[list[str]] = Field(default=None, alias="debugText")


class ProcessingStats(BaseModel):
    """Progress of a multi-document run, updated at batch boundaries."""
    total: int = 0
    processed: int = 0
    success: int = 0
    errors: int = 0
