import json
import re
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from learnyst.core.exceptions import MalformedStructuredResponse
from learnyst.schemas.content import Flashcard, QuizItem
from learnyst.schemas.mindmap import TopicNode

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)
_SPANS = {
    "array": re.compile(r"\[.*\]", re.DOTALL),
    "object": re.compile(r"\{.*\}", re.DOTALL),
}


def extract_json(raw_text: str, shape: str = "array") -> Any:
    """
    Recover the JSON payload from an AI reply that may be wrapped in prose:
    1. Strip markdown code fences (```json ... ```)
    2. Take the greedy span from the first opening bracket to the last closing one
    3. Parse with json.loads
    Raises MalformedStructuredResponse when any step comes up empty.
    """
    if not raw_text or not raw_text.strip():
        raise MalformedStructuredResponse("Empty AI response received")

    cleaned = raw_text.strip()

    fence_match = _FENCE.search(cleaned)
    if fence_match:
        cleaned = fence_match.group(1).strip()

    span = _SPANS[shape].search(cleaned)
    if not span:
        raise MalformedStructuredResponse(f"No JSON {shape} found in AI response")

    try:
        return json.loads(span.group(0))
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse failed. Raw (first 500 chars): {raw_text[:500]}")
        raise MalformedStructuredResponse(f"AI returned invalid JSON: {e}")


# ── Per-kind parsers ─────────────────────────────────────────────────────────

def _non_empty_list(data: Any, what: str) -> List[Any]:
    if not isinstance(data, list) or not data:
        raise MalformedStructuredResponse(f"Expected a non-empty list of {what}")
    return data


def parse_flashcards(raw_text: str) -> List[Dict[str, Any]]:
    items = _non_empty_list(extract_json(raw_text, "array"), "flashcards")
    try:
        cards = [Flashcard.model_validate(item) for item in items]
    except ValidationError as e:
        raise MalformedStructuredResponse(f"Flashcards failed validation: {e.error_count()} errors")
    return [card.model_dump(by_alias=True) for card in cards]


def parse_quiz(raw_text: str) -> List[Dict[str, Any]]:
    items = _non_empty_list(extract_json(raw_text, "array"), "quiz questions")
    try:
        questions = [QuizItem.model_validate(item) for item in items]
    except ValidationError as e:
        raise MalformedStructuredResponse(f"Quiz failed validation: {e.error_count()} errors")
    return [q.model_dump(by_alias=True, exclude_none=True) for q in questions]


def _collect_ids(nodes: List[TopicNode], seen: set) -> None:
    for node in nodes:
        if node.id in seen:
            raise MalformedStructuredResponse(f"Duplicate topic id '{node.id}' in mind map")
        seen.add(node.id)
        if node.children:
            _collect_ids(node.children, seen)


def _reset_completion(node: TopicNode) -> TopicNode:
    children = [_reset_completion(c) for c in node.children] if node.children else node.children
    return node.model_copy(update={"is_completed": False, "children": children})


def parse_mind_map(raw_text: str) -> List[TopicNode]:
    """Accepts ``{"mindMap": [...]}`` or a bare topic array."""
    try:
        data = extract_json(raw_text, "object")
    except MalformedStructuredResponse:
        data = extract_json(raw_text, "array")

    if isinstance(data, dict):
        data = data["mindMap"] if "mindMap" in data else [data]
    items = _non_empty_list(data, "topics")

    try:
        topics = [TopicNode.model_validate(item) for item in items]
    except ValidationError as e:
        raise MalformedStructuredResponse(f"Mind map failed validation: {e.error_count()} errors")

    _collect_ids(topics, set())
    return [_reset_completion(t) for t in topics]
