"""
Health check endpoint.
The service holds no external connections, so liveness is enough.
"""

from fastapi import APIRouter

from app.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "target_codes": settings.target_codes,
    }
