"""
FastAPI application for Exquisite Corpse.
"""

from __future__ import annotations

import importlib.metadata
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import get_settings
from .db.base import get_db, init_database
from .logging_config import configure_logging
from .poems.errors import InvalidInput
from .poems.routes import router as poems_router

logger = structlog.get_logger()

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    configure_logging(settings)
    logger.info("Starting application", app=settings.app_name, environment=settings.environment)

    try:
        await init_database()
    except Exception as e:
        logger.error("Failed to start application", error=str(e))
        raise

    yield

    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.app_name,
    description="Collaborative poem writing, one hidden line at a time",
    version=importlib.metadata.version("exquisite-corpse"),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(poems_router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed payloads in the same error envelope as PoemError."""
    error = InvalidInput(
        "Malformed request payload", {"errors": jsonable_encoder(exc.errors())}
    )
    logger.info("Rejected malformed request", path=request.url.path)
    return JSONResponse(status_code=error.http_status, content={"detail": error.to_dict()})


@app.get("/healthz", tags=["system"])
def healthz(db: Session = Depends(get_db)) -> dict[str, bool]:
    """Health check endpoint, including a database round trip."""
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as e:
        logger.warning("Health check database probe failed", error=str(e))
        db_ok = False
    return {"ok": db_ok, "db": db_ok}


@app.get("/version", tags=["system"])
def version() -> dict[str, str]:
    """Return the version of the application."""
    return {"version": importlib.metadata.version("exquisite-corpse")}
