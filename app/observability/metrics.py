"""
Prometheus metrics for the DARF extraction service.
"""

from prometheus_client import Counter, Histogram


# ── Documents ────────────────────────────────────────────────
documents_processed_total = Counter(
    "darf_documents_processed_total",
    "Total documents run through the extraction pipeline",
    ["outcome"],  # extracted, no_codes, failed
)

document_processing_duration_seconds = Histogram(
    "darf_document_processing_duration_seconds",
    "Time to load, reconstruct and scan one document",
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30],
)

# ── Records ──────────────────────────────────────────────────
records_emitted_total = Counter(
    "darf_records_emitted_total",
    "Result records emitted by the field extractor",
    ["status"],
)

# ── Batches ──────────────────────────────────────────────────
batches_processed_total = Counter(
    "darf_batches_processed_total",
    "Document batches completed",
)

batch_duration_seconds = Histogram(
    "darf_batch_duration_seconds",
    "Wall time per batch, bounded by its slowest document",
    buckets=[0.1, 0.5, 1, 5, 10, 30, 60, 120],
)
