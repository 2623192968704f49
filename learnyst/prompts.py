"""
Learnyst — Prompt Catalog
==========================
One fixed template per content kind. Fields are embedded verbatim.
Kinds whose output is parsed (flashcards, quiz, mindMap) demand bare JSON
and show the exact shape expected back.
"""

from typing import Callable, Dict, Optional

from learnyst.core.exceptions import InvalidContentKind
from learnyst.schemas.content import DEFAULT_QUESTIONS, TestConfig

STANDARD_CURRICULUM = "Standard curriculum"

_JSON_ARRAY_ONLY = "Return ONLY a valid JSON array in this exact format:\n"
_JSON_OBJECT_ONLY = "Return ONLY a valid JSON object in this exact format:\n"


def _syllabus_line(syllabus: Optional[str]) -> str:
    return f"Base your content EXACTLY on this syllabus: {syllabus or STANDARD_CURRICULUM}\n\n"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# FREE-TEXT KINDS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def roadmap_prompt(subject_name: str, topic_name: str, syllabus: Optional[str] = None, **_) -> str:
    return (
        f'You are an expert educational content creator. Create a comprehensive, detailed learning '
        f'roadmap for "{topic_name}" in the subject "{subject_name}".\n\n'
        f"Context: a student is learning {topic_name} as part of their {subject_name} studies.\n\n"
        "Use exactly this structure:\n\n"
        f"# Learning Roadmap: {topic_name}\n\n"
        "## Phase 1: Foundation Building (Week 1-2)\n"
        "### Prerequisites and Preparation\n"
        "- 3-4 specific prerequisite concepts to review\n"
        "- Key terminology to learn first\n"
        "- Initial study materials and setup\n"
        "### Foundation Goals\n"
        "- 3-4 specific learning objectives and the milestones that prove them\n\n"
        "## Phase 2: Core Learning (Week 3-4)\n"
        "### Main Concepts\n"
        f"- Break the core of {topic_name} into digestible parts, in logical order, with examples\n"
        "### Skill Development\n"
        "- Key skills, practice exercises and ways to assess understanding\n\n"
        "## Phase 3: Advanced Application (Week 5-6)\n"
        "### Complex Topics\n"
        f"- Advanced aspects, real-world case studies, links to the rest of {subject_name}\n"
        "### Integration\n"
        f"- How {topic_name} connects to other topics, project ideas\n\n"
        "## Phase 4: Mastery & Assessment (Week 7-8)\n"
        "### Comprehensive Review\n"
        "- Review strategy, key concepts for mastery, self-assessment methods\n"
        "### Next Steps\n"
        "- Advanced topics to explore next, further resources, career or academic uses\n\n"
        "## Study Tips and Resources\n"
        "- 5-6 specific study strategies, practice problem types, extra resources\n\n"
        "Generate this roadmap now without asking for additional information. "
        f"Base the content on standard educational approaches for {topic_name} in {subject_name}."
    )


def detailed_notes_prompt(subject_name: str, topic_name: str, syllabus: Optional[str] = None, **_) -> str:
    return (
        f'Generate extremely comprehensive, in-depth educational notes for "{topic_name}" '
        f'in "{subject_name}".\n\n'
        + _syllabus_line(syllabus)
        + "Cover EVERY aspect mentioned in the syllabus using this structure:\n\n"
        f"# {topic_name} - Comprehensive Detailed Notes\n\n"
        "## 1. Introduction and Overview\n"
        "- Definition and scope, historical background, importance, learning objectives\n\n"
        "## 2. Fundamental Concepts\n"
        "- Each core concept explained, mathematical formulations where applicable, key terminology\n\n"
        "## 3. Detailed Theory and Principles\n"
        "- Derivations and proofs, assumptions and limitations, related theories\n\n"
        "## 4. Practical Applications and Examples\n"
        "- Worked examples with full solutions, real-world case studies\n\n"
        "## 5. Advanced Topics and Extensions\n"
        "- Edge cases, advanced treatments, current research\n\n"
        "## 6. Common Challenges and Solutions\n"
        "- Typical misconceptions, problem-solving strategies, common exam questions\n\n"
        "## 7. Summary and Key Takeaways\n"
        "- Essential points, critical formulas, connections to other topics\n\n"
        "Make these notes university-level in depth, covering every subtopic."
    )


def short_notes_prompt(subject_name: str, topic_name: str, syllabus: Optional[str] = None, **_) -> str:
    return (
        f'Create concise but comprehensive bullet-point notes for "{topic_name}" in "{subject_name}".\n\n'
        + _syllabus_line(syllabus)
        + "Format as:\n"
        f"# {topic_name} - Quick Reference Notes\n\n"
        "## 🎯 Key Concepts\n"
        "• [Concept with a one-line explanation] (4 bullets)\n\n"
        "## 📐 Essential Formulas & Rules\n"
        "• [Formula or rule]: [when to use it]\n\n"
        "## 💡 Quick Tips & Tricks\n"
        "• [Memory technique, problem-solving tip, common mistake, study strategy]\n\n"
        "## 🔗 Key Relationships\n"
        "• [Connections, prerequisites and dependencies]\n\n"
        "## ⚡ Must Remember\n"
        "• [Three critical takeaways]\n\n"
        "Keep it concise but ensure complete coverage of the syllabus content."
    )


def cheatsheet_prompt(subject_name: str, topic_name: str, syllabus: Optional[str] = None, **_) -> str:
    return (
        f'Create a visually appealing, comprehensive cheat sheet for "{topic_name}" in "{subject_name}".\n\n'
        + _syllabus_line(syllabus)
        + "Format as an organized, easy-to-scan reference:\n\n"
        f"# 📋 {topic_name} - Ultimate Cheat Sheet\n\n"
        "## 🎯 Quick Definitions\n"
        "**Term**: concise but complete definition\n\n"
        "## 📐 Essential Formulas\n"
        "| Formula | Use Case | Key Points |\n"
        "|---------|----------|------------|\n\n"
        "## 🔄 Step-by-Step Procedures\n"
        "### Process 1:\n1. [Step with explanation]\n\n"
        "## ✅ Best Practices\n"
        "• **DO**: [recommended approach]\n"
        "• **DON'T**: [common mistake]\n\n"
        "## 🧠 Memory Aids\n"
        "• **Mnemonic**, **Visualization**, **Pattern**\n\n"
        "## ⚡ Quick Reference\n"
        "• [Key facts, relationships and exceptions]\n\n"
        "Make it visually organized and perfect for last-minute review."
    )


def feedback_prompt(
    subject_name: str,
    topic_name: str,
    syllabus: Optional[str] = None,
    question: Optional[str] = None,
    user_answer: Optional[str] = None,
    correct_answer: Optional[str] = None,
    **_,
) -> str:
    return (
        "You are an expert tutor providing constructive feedback to a student.\n\n"
        f"Subject: {subject_name}\n"
        f"Topic: {topic_name}\n"
        f"Question: {question or ''}\n"
        f"Student's Answer: {user_answer or ''}\n"
        f"Correct Answer: {correct_answer or ''}\n\n"
        "Analyze the student's answer and give helpful, encouraging feedback that:\n"
        "1. Explains what they got right (if anything)\n"
        "2. Clearly explains what was incorrect and why\n"
        "3. Shows how to improve their understanding\n"
        "4. Offers a study tip or memory aid if relevant\n"
        "5. Keeps an encouraging and supportive tone\n\n"
        "Keep the feedback concise but comprehensive (2-3 sentences)."
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# STRUCTURED KINDS: STRICT JSON
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def flashcards_prompt(subject_name: str, topic_name: str, syllabus: Optional[str] = None, **_) -> str:
    return (
        f'Create 25-30 comprehensive flashcards covering the ENTIRE syllabus for "{topic_name}" '
        f'in "{subject_name}".\n\n'
        + _syllabus_line(syllabus)
        + "Mix of cards:\n"
        "- 40% definition and concept questions\n"
        "- 30% application and problem-solving questions\n"
        "- 20% analysis and comparison questions\n"
        "- 10% synthesis and evaluation questions\n\n"
        + _JSON_ARRAY_ONLY
        + "[\n"
        "  {\n"
        '    "question": "Clear, specific question testing understanding",\n'
        '    "answer": "Comprehensive answer with detailed explanation"\n'
        "  }\n"
        "]\n\n"
        "Test deep understanding rather than memorization, cover every major topic, "
        "and vary difficulty from basic to advanced."
    )


_QUIZ_TYPE_RULES = {
    "mixed": (
        "Include:\n"
        '- 60% multiple choice questions (type: "mcq") with 4 options each\n'
        '- 30% short answer questions (type: "short")\n'
        '- 10% long answer questions (type: "long")\n'
    ),
    "mcq": 'Create ONLY multiple choice questions (type: "mcq") with 4 options each.\n',
    "short": 'Create ONLY short answer questions (type: "short").\n',
    "long": 'Create ONLY long answer questions (type: "long").\n',
}

_QUIZ_TYPE_LABELS = {
    "mixed": "Mixed (MCQ, Short, Long)",
    "mcq": "MCQ",
    "short": "SHORT",
    "long": "LONG",
}


def quiz_prompt(
    subject_name: str,
    topic_name: str,
    syllabus: Optional[str] = None,
    test_config: Optional[TestConfig] = None,
    **_,
) -> str:
    count = test_config.question_count if test_config else DEFAULT_QUESTIONS

    config_block = ""
    type_rules = ""
    if test_config:
        config_block = (
            "Test Configuration:\n"
            f"- Question Type: {_QUIZ_TYPE_LABELS[test_config.question_type]}\n"
            f"- Number of Questions: {test_config.question_count}\n\n"
        )
        type_rules = _QUIZ_TYPE_RULES[test_config.question_type] + "\n"

    return (
        f'Create a comprehensive quiz with {count} questions for "{topic_name}" in "{subject_name}".\n\n'
        + config_block
        + _syllabus_line(syllabus)
        + _JSON_ARRAY_ONLY
        + "[\n"
        "  {\n"
        '    "question": "Question text",\n'
        '    "type": "mcq",\n'
        '    "options": ["Option A", "Option B", "Option C", "Option D"],\n'
        '    "correctAnswer": "Option A",\n'
        '    "explanation": "Detailed explanation of why this answer is correct"\n'
        "  },\n"
        "  {\n"
        '    "question": "Question text",\n'
        '    "type": "short",\n'
        '    "correctAnswer": "Expected answer",\n'
        '    "explanation": "What makes a good answer and key points to include"\n'
        "  }\n"
        "]\n\n"
        + type_rules
        + "Questions should cover all major syllabus topics, range from recall to application, "
        "include practical scenarios and be challenging but fair.\n\n"
        f"Ensure comprehensive coverage with exactly {count} high-quality questions."
    )


def mind_map_prompt(subject_name: str, topic_name: Optional[str] = None, syllabus: Optional[str] = None, **_) -> str:
    focus = f"Focus area: {topic_name}\n\n" if topic_name else ""
    return (
        "You are an expert educational content analyzer. Analyze the following syllabus for "
        f'"{subject_name}" and create a comprehensive, hierarchical mind map structure.\n\n'
        + focus
        + "IMPORTANT INSTRUCTIONS:\n"
        "1. Break the syllabus down into detailed topics and subtopics\n"
        "2. If only main topics are given, expand them into meaningful subtopics\n"
        "3. Create 4-6 main topics, each with 3-5 subtopics\n"
        "4. Use clear, educational names that students can understand\n"
        "5. Cover the entire syllabus\n"
        "6. Order topics from basic to advanced\n\n"
        f"Syllabus Content:\n{syllabus or STANDARD_CURRICULUM}\n\n"
        + _JSON_OBJECT_ONLY
        + "{\n"
        '  "mindMap": [\n'
        "    {\n"
        '      "id": "topic1",\n'
        '      "name": "Fundamentals and Introduction",\n'
        '      "isCompleted": false,\n'
        '      "children": [\n'
        '        {"id": "topic1-1", "name": "Basic Concepts and Definitions", "isCompleted": false},\n'
        '        {"id": "topic1-2", "name": "Historical Background", "isCompleted": false}\n'
        "      ]\n"
        "    }\n"
        "  ]\n"
        "}\n\n"
        "Every topic and subtopic needs a unique id, a descriptive name and isCompleted: false. "
        "Main topics carry a children array."
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# DISPATCH
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

PROMPT_BUILDERS: Dict[str, Callable[..., str]] = {
    "roadmap": roadmap_prompt,
    "detailedNotes": detailed_notes_prompt,
    "shortNotes": short_notes_prompt,
    "flashcards": flashcards_prompt,
    "cheatsheet": cheatsheet_prompt,
    "quiz": quiz_prompt,
    "mindMap": mind_map_prompt,
    "feedback": feedback_prompt,
}


def build_prompt(
    kind: str,
    subject_name: str,
    topic_name: str,
    syllabus: Optional[str] = None,
    test_config: Optional[TestConfig] = None,
    *,
    question: Optional[str] = None,
    user_answer: Optional[str] = None,
    correct_answer: Optional[str] = None,
) -> str:
    """Complete instruction prompt for ``kind``. Raises InvalidContentKind."""
    builder = PROMPT_BUILDERS.get(kind)
    if builder is None:
        raise InvalidContentKind(kind)
    return builder(
        subject_name=subject_name,
        topic_name=topic_name,
        syllabus=syllabus,
        test_config=test_config,
        question=question,
        user_answer=user_answer,
        correct_answer=correct_answer,
    )
