"""API router aggregator."""
from fastapi import APIRouter

from app.api.routes import auth, settings, uploads

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(settings.router)

uploads_router = uploads.router

__all__ = ["api_router", "uploads_router"]
