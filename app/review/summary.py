"""
Review helpers over a run's records.
Anything that is not a success needs a human to look at its debug lines.
"""

from typing import Iterable

from pydantic import BaseModel

from app.models.enums import RecordStatus
from app.pipeline.natural_sort import sort_records
from app.schemas.contracts import ResultRecord


class ResultsSummary(BaseModel):
    total_records: int = 0
    success_count: int = 0
    attention_count: int = 0
    total_value: float = 0.0


def summarize(records: Iterable[ResultRecord]) -> ResultsSummary:
    """Totals over success records only; warnings carry a zero value anyway."""
    summary = ResultsSummary()
    total = 0.0
    for record in records:
        summary.total_records += 1
        if record.status == RecordStatus.SUCCESS:
            summary.success_count += 1
            total += record.value
        else:
            summary.attention_count += 1
    summary.total_value = round(total, 2)
    return summary


def records_needing_review(records: Iterable[ResultRecord]) -> list[ResultRecord]:
    """Warnings and errors, in presentation order."""
    return sort_records(r for r in records if r.status != RecordStatus.SUCCESS)
