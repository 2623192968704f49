"""
Learnyst — Study Engine
========================
FastAPI entry point.
  • Syllabus → mind map, topic → roadmap / notes / flashcards / cheatsheet / quiz
  • Multi-key AI failover with deterministic fallback content
  • Global exception handler, always returns JSON
  • Malformed request bodies → 400 (500 on /generate-feedback)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from learnyst.api.v1.endpoints.study import get_generation_service, router as study_router
from learnyst.core.config import settings
from learnyst.schemas.common import ErrorResponse
from learnyst.services.generation_service import GenerationService

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.generation_service = GenerationService.from_settings(settings)
    yield


# ── App ──────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="Learnyst — Study Engine",
    description=(
        "AI study-material service.\n"
        "Paste a syllabus → receive a mind map, then roadmaps, notes, flashcards and quizzes per topic."
    ),
    version=VERSION,
    lifespan=lifespan,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


# ── Exception Handlers ──────────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all: every unhandled exception returns a clean JSON envelope."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    body = ErrorResponse(error="An internal server error occurred.", detail=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Unreadable bodies are the caller's fault, except on feedback where the UI expects a 500."""
    logger.warning(f"Invalid request body on {request.url.path}: {len(exc.errors())} errors")
    if request.url.path.endswith("/generate-feedback"):
        body = ErrorResponse(error="Failed to generate feedback")
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
    body = ErrorResponse(error="Invalid request body")
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health Check ─────────────────────────────────────────────────────────────
@app.get("/", tags=["System"])
async def health_check(service: GenerationService = Depends(get_generation_service)):
    return {
        "status": "operational",
        "service": "Learnyst Study Engine",
        "version": VERSION,
        "provider": settings.AI_PROVIDER,
        "configured_credentials": service.engine.configured_count,
    }


app.include_router(study_router)
