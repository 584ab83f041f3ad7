"""FastAPI application entrypoint."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api import api_router, uploads_router
from app.core.config import get_settings
from app.db.base import Base
from app.db.session import get_engine, get_session
from app.services.app_settings import ensure_default_settings

from app import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    current = get_settings()
    configure_logging(current.log_level)

    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_session() as session:
        await ensure_default_settings(session, current.default_allow_signups)

    current.upload_root.mkdir(parents=True, exist_ok=True)
    logger.info("Serving uploads from %s", current.upload_root.resolve())

    try:
        yield
    finally:
        await engine.dispose()


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s - %s", request.method, request.url.path, response.status_code)
    return response


app.include_router(api_router)
app.include_router(uploads_router)
