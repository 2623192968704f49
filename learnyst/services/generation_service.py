"""
Learnyst — Generation Service
==============================
Glue between the HTTP layer and the failover engine.

Flow for every content request:
  1. Build the prompt for the requested kind (unknown kinds are rejected)
  2. Run it through the FailoverEngine under a hard timeout
  3. Parse structured kinds (flashcards, quiz, mindMap)
  4. On any failure, swap in deterministic fallback content + an advisory message
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from learnyst.ai_engine import FailoverEngine, GenerationOutcome, OutcomeStatus
from learnyst.core.exceptions import MalformedStructuredResponse
from learnyst.prompts import build_prompt
from learnyst.schemas.content import ContentRequest, FeedbackRequest
from learnyst.schemas.mindmap import TopicNode
from learnyst.services.extraction import parse_flashcards, parse_mind_map, parse_quiz
from learnyst.services.fallback import fallback_content
from learnyst.services.outline import fallback_mind_map

logger = logging.getLogger(__name__)


# ── Advisory messages ────────────────────────────────────────────────────────

MALFORMED = "malformed"

CONTENT_MESSAGES: Dict[str, str] = {
    OutcomeStatus.NO_CREDENTIALS: "Using high-quality educational content. AI enhancement available with API key.",
    OutcomeStatus.EXHAUSTED: (
        "All AI services are currently overloaded. Using comprehensive educational content. "
        "Please try again in a few minutes."
    ),
    OutcomeStatus.FAILED: "AI service temporarily unavailable. Using high-quality educational content.",
    MALFORMED: "AI response could not be read. Using high-quality educational content.",
}

MIND_MAP_MESSAGES: Dict[str, str] = {
    OutcomeStatus.NO_CREDENTIALS: "Using structured learning path. AI enhancement available with API key.",
    OutcomeStatus.EXHAUSTED: (
        "All AI quotas exceeded. Using comprehensive learning structure. Quotas reset in 24 hours."
    ),
    OutcomeStatus.FAILED: "AI service temporarily unavailable. Using structured learning path.",
    MALFORMED: "AI response could not be read. Using structured learning path.",
}

_STRUCTURED_PARSERS = {
    "flashcards": parse_flashcards,
    "quiz": parse_quiz,
}


@dataclass
class GenerationResult:
    content: Any
    used_fallback: bool = False
    advisory_message: Optional[str] = None


class GenerationService:
    """Stateless apart from its engine; one instance serves every request."""

    def __init__(self, engine: FailoverEngine, timeout_seconds: Optional[float] = None):
        self.engine = engine
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings, backends=None) -> "GenerationService":
        return cls(
            engine=FailoverEngine.from_settings(settings, backends=backends),
            timeout_seconds=settings.AI_TIMEOUT_SECONDS,
        )

    @property
    def has_credentials(self) -> bool:
        return self.engine.has_credentials

    async def _run(self, prompt: str) -> GenerationOutcome:
        if not self.timeout_seconds:
            return await self.engine.run(prompt)
        try:
            return await asyncio.wait_for(self.engine.run(prompt), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error(f"[AI‑ENGINE] Generation timed out after {self.timeout_seconds}s")
            return GenerationOutcome(OutcomeStatus.FAILED, error=e)

    # ── Mind map ─────────────────────────────────────────────────────────────

    async def compute_mind_map(
        self,
        subject_name: str,
        syllabus: Optional[str],
        topic_name: Optional[str] = None,
    ) -> GenerationResult:
        """Topic tree for a syllabus. Never raises for well-formed input."""
        if not self.has_credentials:
            logger.info("[MINDMAP] No API keys configured, using outline fallback")
            return self._mind_map_fallback(syllabus, OutcomeStatus.NO_CREDENTIALS)

        prompt = build_prompt("mindMap", subject_name, topic_name, syllabus)
        outcome = await self._run(prompt)
        if not outcome.ok:
            return self._mind_map_fallback(syllabus, outcome.status)

        try:
            mind_map = parse_mind_map(outcome.text)
        except MalformedStructuredResponse as e:
            logger.warning(f"[MINDMAP] {e}, using outline fallback")
            return self._mind_map_fallback(syllabus, MALFORMED)

        logger.info(f"[MINDMAP] ✓ Generated {len(mind_map)} main topics for '{subject_name}'")
        return GenerationResult(content=mind_map)

    def _mind_map_fallback(self, syllabus: Optional[str], reason: str) -> GenerationResult:
        return GenerationResult(
            content=fallback_mind_map(syllabus),
            used_fallback=True,
            advisory_message=MIND_MAP_MESSAGES[reason],
        )

    # ── Study content ────────────────────────────────────────────────────────

    async def generate_content(self, request: ContentRequest) -> GenerationResult:
        """
        Study material for one topic. Raises InvalidContentKind for an unknown
        ``contentType``; every other failure degrades to fallback content.
        """
        kind = request.content_type
        prompt = build_prompt(
            kind,
            request.subject_name,
            request.topic_name,
            request.syllabus,
            request.test_config,
            question=request.question,
            user_answer=request.user_answer,
            correct_answer=request.correct_answer,
        )

        if kind == "mindMap":
            result = await self.compute_mind_map(request.subject_name, request.syllabus, request.topic_name)
            result.content = dump_topics(result.content)
            return result

        if not self.has_credentials:
            logger.info(f"[CONTENT] No API keys configured, using fallback {kind}")
            return self._content_fallback(request, OutcomeStatus.NO_CREDENTIALS)

        logger.info(f"[CONTENT] Generating {kind} for '{request.topic_name}'")
        outcome = await self._run(prompt)
        if not outcome.ok:
            return self._content_fallback(request, outcome.status)

        parser = _STRUCTURED_PARSERS.get(kind)
        if parser is None:
            return GenerationResult(content=outcome.text)

        try:
            return GenerationResult(content=parser(outcome.text))
        except MalformedStructuredResponse as e:
            logger.warning(f"[CONTENT] {e}, using fallback {kind}")
            return self._content_fallback(request, MALFORMED)

    def _content_fallback(self, request: ContentRequest, reason: str) -> GenerationResult:
        content = fallback_content(
            request.content_type,
            request.topic_name,
            request.subject_name,
            request.syllabus,
            request.test_config,
            correct_answer=request.correct_answer,
        )
        return GenerationResult(
            content=content,
            used_fallback=True,
            advisory_message=CONTENT_MESSAGES[reason],
        )

    # ── Answer feedback ──────────────────────────────────────────────────────

    async def generate_feedback(self, request: FeedbackRequest) -> str:
        """Tutor feedback text. No fallback: every failure propagates."""
        prompt = build_prompt(
            "feedback",
            request.subject_name,
            request.topic_name,
            question=request.question,
            user_answer=request.user_answer,
            correct_answer=request.correct_answer,
        )
        if self.timeout_seconds:
            return await asyncio.wait_for(self.engine.generate(prompt), timeout=self.timeout_seconds)
        return await self.engine.generate(prompt)


def dump_topics(mind_map: List[TopicNode]) -> List[Dict[str, Any]]:
    return [node.model_dump(by_alias=True, exclude_none=True) for node in mind_map]
