"""
FastAPI application for QuizPulse.

Provides REST API for:
- Quiz CRUD
- Submission recording and listing
- Live scoring and server-side submission
- Per-quiz analytics
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from ..config import Settings, get_settings
from ..exceptions import AccessDeniedError, QuizNotFoundError, QuizValidationError, StorageError
from ..service import QuizService
from .dependencies import get_service
from .routers import quizzes, submissions


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings: Settings = app.state.settings
    logger.info(f"Starting QuizPulse API ({settings.storage_backend} storage)...")

    yield

    service = getattr(app.state, "service", None)
    if service is not None:
        service.repository.close()
    logger.info("Shutting down QuizPulse API...")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


def create_app(settings: Settings | None = None, service: QuizService | None = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings override (defaults to environment settings)
        service: Prebuilt service; otherwise one is created on first request
    """
    app = FastAPI(
        title="QuizPulse",
        description="Quiz authoring, rubric scoring and response analytics.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.service = service

    # CORS middleware for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(QuizNotFoundError)
    async def _not_found(request: Request, exc: QuizNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(QuizValidationError)
    async def _invalid(request: Request, exc: QuizValidationError):
        return _error(422, str(exc))

    @app.exception_handler(AccessDeniedError)
    async def _denied(request: Request, exc: AccessDeniedError):
        return _error(403, str(exc))

    @app.exception_handler(StorageError)
    async def _storage(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
        return _error(503, "Storage unavailable")

    @app.get("/health")
    def health(request: Request):
        """Check the configured storage backend responds."""
        try:
            get_service(request).repository.list_quizzes()
            return {"status": "ok", "storage": app.state.settings.storage_backend}
        except StorageError as e:
            return {"status": "error", "storage": app.state.settings.storage_backend, "error": str(e)}

    app.include_router(quizzes.router, prefix="/api", tags=["quizzes"])
    app.include_router(submissions.router, prefix="/api", tags=["submissions"])

    return app


app = create_app()
