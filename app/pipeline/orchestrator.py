"""
Pipeline orchestrator: one document in, ResultRecords out.

Per document: LOAD -> RECONSTRUCT -> SCAN -> DONE, or LOAD -> FAILED -> DONE.
Documents run in fixed-size concurrent batches; results and progress are only
published once a whole batch has resolved.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import structlog

from app.config import settings
from app.engines.base import EngineError, FragmentSource
from app.engines.pdfplumber_engine import default_engine
from app.models.enums import DocumentOutcome, RecordStatus, SentinelCode
from app.observability import metrics
from app.pipeline.field_extractor import extract_records, fatal_record
from app.pipeline.line_reconstructor import reconstruct_document_lines
from app.pipeline.natural_sort import sort_records
from app.schemas.contracts import ProcessingStats, ResultRecord

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DocumentInput:
    filename: str
    data: bytes


ProgressCallback = Callable[[ProcessingStats, list[ResultRecord]], None]


def _outcome(records: list[ResultRecord]) -> DocumentOutcome:
    if any(r.status != RecordStatus.ERROR for r in records):
        return DocumentOutcome.EXTRACTED
    if any(r.code == SentinelCode.FATAL.value for r in records):
        return DocumentOutcome.FAILED
    return DocumentOutcome.NO_CODES


class DocumentPipeline:
    """
    Runs documents through the fragment source, the line reconstructor and
    the field extractor.

    process() never raises: a document that cannot be read becomes a single
    error record and the run moves on.
    """

    def __init__(
        self,
        engine: Optional[FragmentSource] = None,
        target_codes: Optional[Sequence[str]] = None,
        line_tolerance: Optional[float] = None,
        gap_threshold: Optional[float] = None,
    ):
        self.engine = engine or default_engine()
        self.target_codes = list(target_codes) if target_codes is not None else settings.target_codes
        self.line_tolerance = settings.LINE_Y_TOLERANCE if line_tolerance is None else line_tolerance
        self.gap_threshold = settings.WORD_GAP_THRESHOLD if gap_threshold is None else gap_threshold

    def read_lines(self, data: bytes) -> list[str]:
        pages = self.engine.load_pages(data)
        return reconstruct_document_lines(pages, self.line_tolerance, self.gap_threshold)

    def process_sync(self, filename: str, data: bytes) -> list[ResultRecord]:
        started = time.perf_counter()
        log = logger.bind(filename=filename, engine=self.engine.engine_name)

        try:
            lines = self.read_lines(data)
        except Exception as e:
            log.warning("document_failed", error=str(e), error_type=type(e).__name__)
            detail = e.message if isinstance(e, EngineError) else str(e)
            records = [fatal_record(filename, detail)]
        else:
            records = extract_records(filename, lines, self.target_codes)
            log.info(
                "document_processed",
                line_count=len(lines),
                record_count=len(records),
                statuses=sorted({r.status.value for r in records}),
            )

        metrics.document_processing_duration_seconds.observe(time.perf_counter() - started)
        metrics.documents_processed_total.labels(outcome=_outcome(records).value).inc()
        for record in records:
            metrics.records_emitted_total.labels(status=record.status.value).inc()

        return records

    async def process(self, filename: str, data: bytes) -> list[ResultRecord]:
        """Parsing is CPU bound; run it off the event loop."""
        return await asyncio.to_thread(self.process_sync, filename, data)

    async def process_batches(
        self,
        documents: Sequence[DocumentInput],
        batch_size: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> list[ResultRecord]:
        """
        Process documents batch_size at a time.

        Each batch is awaited as a whole before the next one starts; there is
        no per-document timeout. on_progress receives the running stats and the
        records of the batch that just completed. Returns all records sorted by
        file name.
        """
        batch_size = settings.BATCH_SIZE if batch_size is None else batch_size
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        stats = ProcessingStats(total=len(documents))
        all_records: list[ResultRecord] = []

        for start in range(0, len(documents), batch_size):
            batch = documents[start:start + batch_size]
            batch_started = time.perf_counter()

            batch_results = await asyncio.gather(
                *(self.process(doc.filename, doc.data) for doc in batch)
            )
            batch_records = [r for records in batch_results for r in records]
            all_records.extend(batch_records)

            stats.processed = min(start + batch_size, len(documents))
            stats.success += sum(1 for r in batch_records if r.status == RecordStatus.SUCCESS)
            stats.errors += sum(1 for r in batch_records if r.status != RecordStatus.SUCCESS)

            metrics.batches_processed_total.inc()
            metrics.batch_duration_seconds.observe(time.perf_counter() - batch_started)
            logger.info(
                "batch_completed",
                batch_index=start // batch_size,
                batch_documents=len(batch),
                processed=stats.processed,
                total=stats.total,
            )

            if on_progress is not None:
                on_progress(stats.model_copy(), batch_records)

        return sort_records(all_records)
