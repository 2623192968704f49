"""
Learnyst — Syllabus Outline
============================
Network-free mind map for when AI generation is unavailable.

  1. Pull headings + subtopics straight out of the pasted syllabus.
  2. Failing that, pick a canned outline by subject keywords
     (math, programming, or a generic five-section plan).
"""

import re
from typing import List, Optional, Sequence, Tuple

from learnyst.schemas.mindmap import TopicNode

MIN_SYLLABUS_LENGTH = 50
MAX_TOPICS = 6
MIN_SUBTOPIC_LENGTH = 11

_HEADING_PATTERNS = (
    re.compile(r"^\d+\."),                       # 1. Topic
    re.compile(r"^[A-Z][A-Z\s]+$"),              # ALL CAPS
    re.compile(r"^[A-Z][a-z]+(\s[A-Z][a-z]+)*:?$"),  # Title Case, optional colon
)
_NUMBER_PREFIX = re.compile(r"^\d+\.\s*")
_BULLET_PREFIX = re.compile(r"^[-•]\s*")


def is_heading(line: str) -> bool:
    return any(p.search(line) for p in _HEADING_PATTERNS)


def extract_outline(syllabus: Optional[str]) -> List[TopicNode]:
    """Topic tree read from the syllabus text, or [] if it has no usable structure."""
    if not syllabus or len(syllabus) < MIN_SYLLABUS_LENGTH:
        return []

    topics: List[TopicNode] = []
    current: Optional[TopicNode] = None

    for line in (raw.strip() for raw in syllabus.splitlines()):
        if len(line) < 3:
            continue

        if is_heading(line):
            current = TopicNode(
                id=f"topic{len(topics) + 1}",
                name=_NUMBER_PREFIX.sub("", line).removesuffix(":"),
                children=[],
            )
            topics.append(current)
        elif current is not None and len(line) >= MIN_SUBTOPIC_LENGTH:
            current.children.append(
                TopicNode(
                    id=f"{current.id}-{len(current.children) + 1}",
                    name=_BULLET_PREFIX.sub("", line),
                )
            )

    return topics[:MAX_TOPICS]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CANNED OUTLINES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

Section = Tuple[str, str, Sequence[str]]

MATH_OUTLINE: List[Section] = [
    ("fundamentals", "Mathematical Fundamentals", [
        "Basic Concepts and Definitions",
        "Number Systems and Operations",
        "Algebraic Expressions",
        "Equations and Inequalities",
    ]),
    ("functions", "Functions and Graphs", [
        "Function Concepts",
        "Linear and Quadratic Functions",
        "Polynomial Functions",
        "Exponential and Logarithmic Functions",
    ]),
    ("calculus", "Calculus Concepts", [
        "Limits and Continuity",
        "Derivatives and Applications",
        "Integration Techniques",
        "Applications of Integration",
    ]),
    ("applications", "Real-World Applications", [
        "Problem-Solving Strategies",
        "Mathematical Modeling",
        "Optimization Problems",
    ]),
]

PROGRAMMING_OUTLINE: List[Section] = [
    ("fundamentals", "Programming Fundamentals", [
        "Introduction to Programming",
        "Variables and Data Types",
        "Control Structures",
        "Functions and Procedures",
    ]),
    ("datastructures", "Data Structures", [
        "Arrays and Lists",
        "Stacks and Queues",
        "Trees and Graphs",
        "Hash Tables",
    ]),
    ("algorithms", "Algorithms", [
        "Sorting Algorithms",
        "Search Algorithms",
        "Graph Algorithms",
        "Dynamic Programming",
    ]),
    ("applications", "Software Development", [
        "Software Design Principles",
        "Testing and Debugging",
        "Project Development",
    ]),
]

GENERIC_OUTLINE: List[Section] = [
    ("introduction", "Introduction and Fundamentals", [
        "Basic Concepts and Definitions",
        "Historical Context and Development",
        "Key Terminology and Vocabulary",
        "Foundational Principles",
    ]),
    ("core", "Core Concepts and Theory", [
        "Theoretical Framework",
        "Main Principles and Laws",
        "Key Models and Systems",
        "Important Relationships",
    ]),
    ("intermediate", "Intermediate Topics", [
        "Advanced Theoretical Concepts",
        "Practical Applications",
        "Problem-Solving Techniques",
        "Case Studies and Examples",
    ]),
    ("advanced", "Advanced Applications", [
        "Complex Problem Solving",
        "Real-World Implementation",
        "Current Research and Trends",
        "Future Developments",
    ]),
    ("synthesis", "Integration and Mastery", [
        "Comprehensive Review",
        "Interdisciplinary Connections",
        "Professional Applications",
    ]),
]

_KEYWORD_OUTLINES = (
    (("math", "calculus", "algebra"), MATH_OUTLINE),
    (("computer", "programming", "software"), PROGRAMMING_OUTLINE),
)


def _build(sections: Sequence[Section]) -> List[TopicNode]:
    return [
        TopicNode(
            id=key,
            name=name,
            children=[
                TopicNode(id=f"{key}-{index}", name=child)
                for index, child in enumerate(children, start=1)
            ],
        )
        for key, name, children in sections
    ]


def generic_outline(syllabus: Optional[str]) -> List[TopicNode]:
    """Canned outline chosen by case-insensitive keyword match on the syllabus."""
    text = (syllabus or "").lower()
    for keywords, sections in _KEYWORD_OUTLINES:
        if any(k in text for k in keywords):
            return _build(sections)
    return _build(GENERIC_OUTLINE)


def fallback_mind_map(syllabus: Optional[str]) -> List[TopicNode]:
    return extract_outline(syllabus) or generic_outline(syllabus)


def count_topics(mind_map: Sequence[TopicNode]) -> int:
    """Every node in the tree, parents and children alike."""
    return sum(1 + count_topics(t.children or []) for t in mind_map)
