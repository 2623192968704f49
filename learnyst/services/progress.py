"""
Learnyst — Topic Progress
==========================
Pure helpers over a caller-owned mind map. Nothing here is persisted.

Completion rules:
  • Toggling a topic flips it and pushes the new state to every descendant.
  • A parent with children is complete iff all of its children are complete.
  • A leaf (or a parent with an empty children list) keeps its own flag.
"""

from dataclasses import dataclass
from typing import List, Sequence

from learnyst.schemas.mindmap import TopicNode
from learnyst.services.outline import count_topics


@dataclass(frozen=True)
class ProgressSummary:
    completed: int
    total: int
    progress: int
    all_completed: bool


def _set_all(node: TopicNode, completed: bool) -> TopicNode:
    children = [_set_all(c, completed) for c in node.children] if node.children else node.children
    return node.model_copy(update={"is_completed": completed, "children": children})


def _toggle(node: TopicNode, topic_id: str) -> TopicNode:
    if node.id == topic_id:
        return _set_all(node, not node.is_completed)
    if not node.children:
        return node

    children = [_toggle(c, topic_id) for c in node.children]
    return node.model_copy(
        update={"children": children, "is_completed": all(c.is_completed for c in children)}
    )


def toggle_completion(mind_map: Sequence[TopicNode], topic_id: str) -> List[TopicNode]:
    """
    Return a new mind map with ``topic_id`` flipped and every parent re-derived.
    Unknown ids leave completion flags as they were, apart from re-derivation.
    The input is never mutated.
    """
    return [_toggle(node, topic_id) for node in mind_map]


def count_completed(mind_map: Sequence[TopicNode]) -> int:
    return sum(int(t.is_completed) + count_completed(t.children or []) for t in mind_map)


def summarize_progress(mind_map: Sequence[TopicNode]) -> ProgressSummary:
    completed = count_completed(mind_map)
    total = count_topics(mind_map)
    # half-up, so 1 of 8 reads 13%
    progress = int(completed * 100 / total + 0.5) if total else 0
    return ProgressSummary(
        completed=completed,
        total=total,
        progress=progress,
        all_completed=total > 0 and completed == total,
    )
