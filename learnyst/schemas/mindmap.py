from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Request body where an explicit null means "use the default"."""

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, v, info: ValidationInfo):
        field = cls.model_fields[info.field_name]
        if v is None and not field.is_required():
            return field.get_default(call_default_factory=True)
        return v


# ── Tree ─────────────────────────────────────────────────────────────────────

class TopicNode(CamelModel):
    """A single node in the mind map tree (recursive)."""
    id: str
    name: str
    is_completed: bool = False
    children: Optional[List[TopicNode]] = None


# ── Request ──────────────────────────────────────────────────────────────────

class MindMapRequest(RequestModel):
    """Request body for mind map generation."""
    subject_name: str = "Subject"
    syllabus: str = ""


class ToggleCompletionRequest(CamelModel):
    """Flip one topic's completion state inside a caller-owned mind map."""
    mind_map: List[TopicNode]
    topic_id: str = Field(..., min_length=1)


# ── Response ─────────────────────────────────────────────────────────────────

class MindMapResponse(CamelModel):
    """Full mind map response returned to the client."""
    success: bool = True
    mind_map: List[TopicNode]
    total_topics: int
    fallback: Optional[bool] = None
    message: Optional[str] = None


class ProgressResponse(CamelModel):
    """Updated mind map plus the derived progress counters."""
    success: bool = True
    mind_map: List[TopicNode]
    completed_topics: int
    total_topics: int
    progress: int = Field(..., ge=0, le=100, description="Rounded completion percentage")
    all_completed: bool
