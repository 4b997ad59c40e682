"""
FastAPI dependency injection.
Provides the document pipeline and API key validation.
"""

from typing import Optional

from fastapi import Header, HTTPException, status

from app.config import settings
from app.pipeline.orchestrator import DocumentPipeline


# ── Singleton instances ──────────────────────────────────────
_pipeline: Optional[DocumentPipeline] = None


def get_pipeline() -> DocumentPipeline:
    """Get or create the pipeline singleton."""
    global _pipeline
    if _pipeline is None:
        _pipeline = DocumentPipeline()
    return _pipeline


async def verify_api_key(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> Optional[str]:
    """
    Verify API key if configured.
    If API_KEY is not set, all requests are allowed (dev mode).
    """
    if settings.API_KEY is None:
        return None

    if x_api_key is None or x_api_key != settings.API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )
    return x_api_key
