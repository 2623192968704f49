from __future__ import annotations

from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, Field, field_validator

from learnyst.schemas.mindmap import CamelModel, RequestModel


class ContentKind(str, Enum):
    roadmap = "roadmap"
    detailed_notes = "detailedNotes"
    short_notes = "shortNotes"
    flashcards = "flashcards"
    cheatsheet = "cheatsheet"
    quiz = "quiz"
    mind_map = "mindMap"
    feedback = "feedback"


MIN_QUESTIONS = 5
MAX_QUESTIONS = 50
DEFAULT_QUESTIONS = 15


def clamp_question_count(count: int) -> int:
    return max(MIN_QUESTIONS, min(MAX_QUESTIONS, count))


# ── Request ──────────────────────────────────────────────────────────────────

class TestConfig(CamelModel):
    """Quiz shape. Older clients send ``type`` instead of ``questionType``."""
    question_type: Literal["mixed", "mcq", "short", "long"] = Field(
        default="mixed",
        validation_alias=AliasChoices("questionType", "type", "question_type"),
    )
    question_count: int = DEFAULT_QUESTIONS

    @field_validator("question_count")
    @classmethod
    def clamp_count(cls, v: int) -> int:
        return clamp_question_count(v)


class ContentRequest(RequestModel):
    """Request body for /generate-content."""
    content_type: str = "roadmap"
    topic_name: str = "Topic"
    subject_name: str = "Subject"
    syllabus: Optional[str] = None
    test_config: Optional[TestConfig] = None

    # feedback only
    question: Optional[str] = None
    user_answer: Optional[str] = None
    correct_answer: Optional[str] = None


class FeedbackRequest(RequestModel):
    """Request body for /generate-feedback."""
    question: str = ""
    user_answer: str = ""
    correct_answer: str = ""
    topic_name: str = "Topic"
    subject_name: str = "Subject"


# ── Structured content ──────────────────────────────────────────────────────

class Flashcard(CamelModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class QuizItem(CamelModel):
    question: str = Field(..., min_length=1)
    type: Literal["mcq", "short", "long"] = "mcq"
    options: Optional[List[str]] = None
    correct_answer: str = ""
    explanation: Optional[str] = None


# ── Response ─────────────────────────────────────────────────────────────────

class ContentResponse(CamelModel):
    """``content`` is text, or a list of flashcards / quiz items / topics."""
    success: bool = True
    content: Any
    content_type: str
    topic_name: str
    fallback: Optional[bool] = None
    message: Optional[str] = None


class FeedbackResponse(CamelModel):
    success: bool = True
    content: str


class SyllabusTextResponse(CamelModel):
    success: bool = True
    text: str
    characters: int
