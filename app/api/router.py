"""
Top-level API router.
Combines all sub-routers into a single router.
"""

from fastapi import APIRouter

from app.api.health import router as health_router
from app.api.darfs import router as darfs_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(darfs_router)
