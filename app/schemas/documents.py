"""
Pydantic request/response schemas for the /api/v1/darfs endpoints.
"""

from pydantic import BaseModel

from app.review.summary import ResultsSummary
from app.schemas.contracts import ProcessingStats, ResultRecord


class ProcessResponse(BaseModel):
    """Records of every accepted file, sorted by file name."""
    results: list[ResultRecord]
    stats: ProcessingStats
    summary: ResultsSummary
    accepted_files: list[str]
    skipped_files: list[str] = []


class ExportRequest(BaseModel):
    """Records a client already holds, to be written to a spreadsheet."""
    results: list[ResultRecord]
