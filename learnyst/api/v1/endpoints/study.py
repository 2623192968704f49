import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse

from learnyst.core.exceptions import InvalidContentKind, SyllabusFileRejected, SyllabusTextNotFound
from learnyst.schemas.common import ErrorResponse
from learnyst.schemas.content import (
    ContentRequest,
    ContentResponse,
    FeedbackRequest,
    FeedbackResponse,
    SyllabusTextResponse,
)
from learnyst.schemas.mindmap import (
    MindMapRequest,
    MindMapResponse,
    ProgressResponse,
    ToggleCompletionRequest,
)
from learnyst.services.file_service import extract_syllabus_text
from learnyst.services.generation_service import GenerationService
from learnyst.services.outline import count_topics
from learnyst.services.progress import summarize_progress, toggle_completion

logger = logging.getLogger(__name__)

router = APIRouter()


def get_generation_service(request: Request) -> GenerationService:
    """The service built once in the app lifespan."""
    return request.app.state.generation_service


def _error(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=error, detail=detail)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. MIND MAP
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/generate-mindmap",
    response_model=MindMapResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    tags=["Study"],
)
async def generate_mindmap(
    body: MindMapRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Syllabus → hierarchical topic tree. Degrades to an outline, never errors."""
    result = await service.compute_mind_map(body.subject_name, body.syllabus)
    return MindMapResponse(
        mind_map=result.content,
        total_topics=count_topics(result.content),
        fallback=True if result.used_fallback else None,
        message=result.advisory_message,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. STUDY CONTENT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/generate-content",
    response_model=ContentResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    tags=["Study"],
)
async def generate_content(
    body: ContentRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Roadmap, notes, flashcards, cheatsheet, quiz, mind map or feedback for one topic."""
    try:
        result = await service.generate_content(body)
    except InvalidContentKind as e:
        logger.warning(f"[CONTENT] Rejected: {e}")
        return _error(400, "Invalid content type")

    return ContentResponse(
        content=result.content,
        content_type=body.content_type,
        topic_name=body.topic_name,
        fallback=True if result.used_fallback else None,
        message=result.advisory_message,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 3. ANSWER FEEDBACK
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post("/generate-feedback", response_model=FeedbackResponse, tags=["Study"])
async def generate_feedback(
    body: FeedbackRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Tutor feedback on one answer. No fallback content: failures are a 500."""
    if not service.has_credentials:
        logger.error("[FEEDBACK] No API keys configured")
        return _error(500, "No API key configured")

    try:
        text = await service.generate_feedback(body)
    except Exception as e:
        logger.error(f"[FEEDBACK] Generation failed: {e}")
        return _error(500, "Failed to generate feedback", str(e))

    return FeedbackResponse(content=text)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 4. PROGRESS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/toggle-completion",
    response_model=ProgressResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    tags=["Progress"],
)
async def toggle_topic_completion(body: ToggleCompletionRequest):
    """Flip one topic and return the updated tree with progress counters."""
    mind_map = toggle_completion(body.mind_map, body.topic_id)
    summary = summarize_progress(mind_map)
    return ProgressResponse(
        mind_map=mind_map,
        completed_topics=summary.completed,
        total_topics=summary.total,
        progress=summary.progress,
        all_completed=summary.all_completed,
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 5. SYLLABUS UPLOAD
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post(
    "/extract-syllabus",
    response_model=SyllabusTextResponse,
    response_model_by_alias=True,
    tags=["Syllabus"],
)
async def extract_syllabus(file: UploadFile = File(...)):
    """Upload a PDF / TXT / MD syllabus and get its plain text back."""
    if not file.filename:
        return _error(400, "No filename provided.")

    content = await file.read()
    try:
        text = await extract_syllabus_text(content, file.filename)
    except SyllabusFileRejected as e:
        return _error(400, str(e))
    except SyllabusTextNotFound as e:
        return _error(422, str(e))

    return SyllabusTextResponse(text=text, characters=len(text))
