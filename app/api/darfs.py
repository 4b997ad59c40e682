"""
/api/v1/darfs endpoints.
Upload DARF PDFs and get extraction records back, as JSON or as a spreadsheet.
"""

import structlog
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import StreamingResponse

from app.config import settings
from app.dependencies import get_pipeline, verify_api_key
from app.export.spreadsheet import export_filename, export_xlsx_bytes
from app.pipeline.orchestrator import DocumentInput, DocumentPipeline
from app.review.summary import summarize
from app.schemas.contracts import ProcessingStats
from app.schemas.documents import ExportRequest, ProcessResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/darfs", tags=["darfs"], dependencies=[Depends(verify_api_key)])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def _accept_uploads(files: list[UploadFile]) -> tuple[list[DocumentInput], list[str]]:
    """
    Keep PDFs within the size limit. Anything else is dropped without
    producing a record.
    """
    allowed = settings.allowed_mime_types
    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    accepted: list[DocumentInput] = []
    skipped: list[str] = []
    for upload in files:
        name = upload.filename or "document.pdf"
        if upload.content_type not in allowed:
            logger.debug("upload_skipped", file_name=name, reason="mime_type", content_type=upload.content_type)
            skipped.append(name)
            continue

        data = await upload.read()
        if len(data) > max_bytes:
            logger.warning("upload_skipped", file_name=name, reason="too_large", file_size_bytes=len(data))
            skipped.append(name)
            continue

        accepted.append(DocumentInput(filename=name, data=data))

    if not accepted:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"No processable files uploaded. Allowed: {settings.ALLOWED_MIME_TYPES}",
        )
    return accepted, skipped


def _xlsx_response(content: bytes) -> StreamingResponse:
    return StreamingResponse(
        iter([content]),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.post("/process", response_model=ProcessResponse)
async def process_darfs(
    files: list[UploadFile] = File(...),
    pipeline: DocumentPipeline = Depends(get_pipeline),
):
    """Extract withholding records from every uploaded PDF."""
    documents, skipped = await _accept_uploads(files)

    progress: list[ProcessingStats] = []
    results = await pipeline.process_batches(
        documents,
        on_progress=lambda stats, _records: progress.append(stats),
    )

    logger.info(
        "darfs_processed",
        document_count=len(documents),
        record_count=len(results),
        skipped_count=len(skipped),
    )

    return ProcessResponse(
        results=results,
        stats=progress[-1],
        summary=summarize(results),
        accepted_files=[d.filename for d in documents],
        skipped_files=skipped,
    )


@router.post("/export")
async def export_darfs(
    files: list[UploadFile] = File(...),
    pipeline: DocumentPipeline = Depends(get_pipeline),
):
    """Process the uploaded PDFs and return the spreadsheet report."""
    documents, _ = await _accept_uploads(files)
    results = await pipeline.process_batches(documents)
    return _xlsx_response(export_xlsx_bytes(results))


@router.post("/export/records")
async def export_records(body: ExportRequest):
    """Write already extracted records to the spreadsheet report."""
    if not body.results:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No records to export")
    return _xlsx_response(export_xlsx_bytes(body.results))
