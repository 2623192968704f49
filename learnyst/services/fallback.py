"""
Learnyst — Fallback Content
============================
Deterministic study material for every content kind, built only from the
request fields. Used whenever no live AI credential produced usable output.

``fallback_content`` never raises and never returns empty content.
"""

import logging
from typing import Any, Dict, List, Optional

from learnyst.schemas.content import DEFAULT_QUESTIONS, TestConfig, clamp_question_count
from learnyst.services.outline import fallback_mind_map

logger = logging.getLogger(__name__)

DEFAULT_FLASHCARD_COUNT = 25


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TEXT KINDS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def roadmap(topic: str, subject: str) -> str:
    return "\n".join([
        f"# Learning Roadmap: {topic}",
        "",
        "## Phase 1: Foundation Building (Week 1-2)",
        "### Prerequisites and Preparation",
        f"- Review fundamental concepts related to {topic}",
        "- Understand basic terminology and definitions",
        "- Gather study materials and resources",
        "- Set up an organized study environment",
        "- Sketch an initial concept map of the topic",
        "",
        "### Key Learning Objectives",
        f"- Master the foundational principles of {topic}",
        f"- Understand how this topic fits within {subject}",
        "- Identify connections to previously learned concepts",
        "- Establish strong theoretical groundwork",
        "",
        "## Phase 2: Core Learning (Week 3-4)",
        "### Main Concepts and Theories",
        f"- Deep dive into the core principles of {topic}",
        "- Study the theoretical frameworks and models",
        "- Work through fundamental examples and applications",
        "- Practice basic problem-solving techniques",
        "- Write detailed notes and summaries",
        "",
        "### Skill Development",
        "- Develop analytical thinking around the topic",
        "- Apply concepts to simple scenarios",
        "- Build confidence with basic calculations and procedures",
        "- Start connecting theory to practical applications",
        "",
        "## Phase 3: Advanced Application (Week 5-6)",
        "### Complex Scenarios and Integration",
        f"- Explore advanced aspects of {topic}",
        "- Study real-world applications and case studies",
        "- Work on challenging problems and projects",
        f"- Integrate this knowledge with other topics in {subject}",
        "- Look into current research and developments",
        "",
        "### Practical Implementation",
        "- Apply knowledge to practical situations",
        "- Develop problem-solving strategies",
        "- Build a project that demonstrates understanding",
        "- Connect learning to industry applications",
        "",
        "## Phase 4: Mastery & Assessment (Week 7-8)",
        "### Comprehensive Review",
        "- Synthesize all learned material",
        "- Review and strengthen weak areas",
        "- Practice with mock tests and assessments",
        "- Create final review materials and summaries",
        "- Prepare for examinations or evaluations",
        "",
        "### Advanced Preparation",
        "- Explore connections to future learning",
        "- Identify areas for continued study",
        "- Develop long-term retention strategies",
        "- Plan practical use of the knowledge",
        "",
        "## Study Tips and Strategies",
        "- **Active Learning**: Engage with the material through practice and application",
        "- **Regular Review**: Schedule consistent review sessions",
        "- **Concept Mapping**: Draw visual representations of relationships",
        "- **Practice Problems**: Work through varied examples and exercises",
        "- **Discussion**: Talk the topic through with peers and instructors",
        "",
        "## Resources and Materials",
        f"- Textbooks and academic resources on {subject}",
        "- Online courses and educational videos",
        "- Practice problems and exercise sets",
        "- Research papers and case studies",
        "- Study groups and discussion forums",
        "",
        f"*This roadmap provides a structured approach to mastering {topic}. "
        "Adjust the timing to your own pace and prior knowledge.*",
    ])


def detailed_notes(topic: str, subject: str) -> str:
    return "\n".join([
        f"# {topic} - Comprehensive Study Notes",
        "",
        "## 1. Introduction and Overview",
        "",
        "### Definition and Scope",
        f"{topic} is a fundamental concept within {subject} that brings together key principles, "
        "theories and applications needed to understand the wider subject. It is a building block "
        "for advanced learning and practical work in the field.",
        "",
        "### Historical Context and Development",
        f"The study of {topic} has grown through contributions from researchers, practitioners and "
        "theorists. Knowing how it developed gives context for current applications and future directions.",
        "",
        "### Importance and Relevance",
        "- **Foundational Knowledge**: Needed for advanced concepts",
        "- **Practical Applications**: Directly relevant to real-world problems",
        f"- **Interdisciplinary Connections**: Links to other areas within {subject} and beyond",
        "- **Professional Development**: Useful for career growth and practical skills",
        "",
        "### Learning Objectives",
        "By the end of this topic you should be able to:",
        "- Explain the core concepts and principles",
        "- Apply theoretical knowledge to practical situations",
        "- Analyze complex scenarios using the frameworks learned",
        "- Synthesize information from multiple sources",
        "- Evaluate different approaches and solutions",
        "",
        "## 2. Fundamental Concepts and Principles",
        "",
        "### Core Definitions",
        f"**Primary Concept**: The central idea that defines {topic}",
        "**Key Terms**: Essential vocabulary used in the field",
        "**Fundamental Principles**: Basic rules that govern the topic",
        "**Theoretical Framework**: The organized system of concepts and relationships",
        "",
        "### Basic Principles",
        "1. **Principle 1**: A fundamental rule, with explanation and examples",
        "2. **Principle 2**: A core concept and its practical applications",
        "3. **Principle 3**: An essential idea with real-world relevance",
        "4. **Principle 4**: A key relationship with other concepts",
        "",
        "### Mathematical Foundations (where applicable)",
        "- Basic equations and formulas",
        "- Mathematical relationships and derivations",
        "- Quantitative analysis methods",
        "",
        "## 3. Theoretical Framework and Analysis",
        "",
        "### Major Theories and Models",
        "**Theory A**: Background, core assumptions, applications and limitations",
        "**Theory B**: An alternative or complementary approach and how it compares",
        "",
        "### Analytical Methods and Approaches",
        "- Systematic analysis techniques",
        "- Problem-solving methodologies",
        "- Critical thinking frameworks",
        "- Evaluation criteria and standards",
        "",
        "## 4. Practical Applications and Examples",
        "",
        "### Real-World Applications",
        "**Application 1**: Context, implementation process, benefits and challenges",
        "**Application 2**: A different context with its own requirements and lessons learned",
        "",
        "### Worked Examples",
        "**Example 1**: A typical problem, solved step by step",
        "1. Identify and analyze the problem",
        "2. Select an appropriate method",
        "3. Carry out the solution",
        "4. Verify and interpret the result",
        "",
        "**Example 2**: A scenario that needs several concepts at once",
        "1. Break the problem into parts",
        "2. Combine the relevant principles",
        "3. Develop the solution systematically",
        "4. Evaluate the outcome critically",
        "",
        "## 5. Advanced Topics and Current Developments",
        "- Current research directions and findings",
        "- Technological advances and innovations",
        "- Future implications and possibilities",
        "- Interdisciplinary collaborations",
        "",
        "## 6. Common Challenges and Problem-Solving Strategies",
        "",
        "### Typical Difficulties and Misconceptions",
        "**Common Mistake 1**: A frequent error and its correction",
        "**Common Mistake 2**: A typical misunderstanding and its clarification",
        "**Common Mistake 3**: A procedural error and the proper method",
        "",
        "### Effective Study Strategies",
        "- **Active Learning**: Engage directly with problems",
        "- **Memory Aids**: Use mnemonics for recall",
        "- **Spaced Practice**: Revisit material at increasing intervals",
        "- **Self-Assessment**: Test yourself regularly",
        "",
        "## 7. Integration and Connections",
        "- **Prerequisite Knowledge**: What you need to know first",
        f"- **Related Concepts**: Connected ideas within {subject}",
        "- **Advanced Applications**: Where this knowledge leads",
        "- **Interdisciplinary Connections**: Links to other fields",
        "",
        "## 8. Summary and Key Takeaways",
        "- **Core Concepts**: The most important ideas to remember",
        "- **Key Principles**: Fundamental rules and relationships",
        "- **Critical Applications**: Essential practical uses",
        "- **Next Steps**: Where to go after mastering this topic",
        "",
        f"*These notes give a thorough foundation for {topic}. Regular review and practice "
        "will consolidate the knowledge.*",
    ])


def short_notes(topic: str, subject: str) -> str:
    return "\n".join([
        f"# {topic} - Quick Reference Notes",
        "",
        "## 🎯 Key Concepts",
        f"• **Core Definition**: {topic} is a fundamental concept in {subject}",
        "• **Primary Purpose**: Its main function within the subject",
        "• **Essential Components**: The key elements that make up the topic",
        "• **Basic Principles**: The rules and relationships that govern it",
        "• **Practical Significance**: Why it matters in real-world applications",
        "",
        "## 📐 Essential Formulas & Rules",
        "• **Basic Formula**: The key equation and where it applies",
        "• **Important Rule**: The fundamental principle and when to use it",
        "• **Calculation Method**: The step-by-step process for standard problems",
        "",
        "## 💡 Quick Tips & Tricks",
        "• **Memory Aid**: Build a mnemonic for the key steps",
        "• **Problem-Solving Tip**: Always start by identifying what is given and what is asked",
        "• **Study Strategy**: Master the basics before the edge cases",
        "• **Verification**: Check every answer against a quick estimate",
        "",
        "## 🔗 Key Relationships",
        "• **Builds Upon**: Prerequisite concepts",
        f"• **Connects To**: Related topics in {subject}",
        "• **Leads To**: Advanced concepts that rely on it",
        "• **Practical Applications**: Real-world contexts where it is used",
        "",
        "## ⚡ Must Remember",
        "• **Critical Point 1**: The single most important concept",
        "• **Critical Point 2**: The key relationship to other ideas",
        "• **Critical Point 3**: The principle to consider every time",
        "• **Common Mistake**: The typical error and how to avoid it",
        "",
        "## 🎯 Quick Self-Check",
        f"• Can you explain {topic} in your own words?",
        f"• Do you understand how it connects to other topics in {subject}?",
        "• Can you apply the key principles to basic problems?",
        "• Do you know the common mistakes to avoid?",
        "",
        "## 📚 Study Priorities",
        "• **High Priority**: Core definitions and principles",
        "• **Medium Priority**: Supporting concepts",
        "• **Low Priority**: Advanced details, when time permits",
        "",
        f"*Use these notes for rapid review of {topic}.*",
    ])


def cheatsheet(topic: str, subject: str) -> str:
    return "\n".join([
        f"# 📋 {topic} - Ultimate Cheat Sheet",
        "",
        "## 🎯 Quick Definitions",
        f"**{topic}**: Fundamental concept in {subject} involving key principles and applications",
        "**Core Principle**: The basic rule that governs the topic",
        "**Key Application**: The primary practical use case",
        "**Important Relationship**: How it connects to other concepts in the field",
        "",
        "## 📐 Essential Formulas",
        "| Formula | Use Case | Key Points |",
        "|---------|----------|------------|",
        "| Basic Equation | General calculations | Remember to check units |",
        "| Advanced Formula | Complex scenarios | Consider all variables |",
        "| Conversion Rule | Unit transformations | Maintain precision |",
        "",
        "## 🔄 Step-by-Step Procedures",
        "### Basic Problem-Solving Process:",
        "1. **Identify**: Determine the problem type and relevant information",
        "2. **Analyze**: Break it into manageable components",
        "3. **Apply**: Use the appropriate methods and principles",
        "4. **Calculate**: Work through the computation carefully",
        "5. **Verify**: Check the result for reasonableness",
        "",
        "### Advanced Analysis Method:",
        "1. **Gather Information**: Collect all relevant data and context",
        "2. **Establish Framework**: Choose the theoretical approach",
        "3. **Systematic Analysis**: Apply the method step by step",
        "4. **Integrate Results**: Combine findings into one conclusion",
        "5. **Evaluate Outcomes**: Assess implications and significance",
        "",
        "## ✅ Best Practices",
        "• **DO**: Start from fundamental principles and build up",
        "• **DO**: Check your work with more than one method",
        "• **DO**: Consider real-world constraints",
        "• **DON'T**: Skip prerequisite knowledge",
        "• **DON'T**: Apply formulas without understanding them",
        "• **DON'T**: Ignore units and precision",
        "",
        "## 🧠 Memory Aids",
        "• **Mnemonic**: A memorable acronym for the key steps",
        "• **Visualization**: A visual analogy for the relationships",
        "• **Connection**: Link to a familiar concept",
        "",
        "## ⚡ Quick Reference",
        "• **Key Fact 1**: The most important principle",
        "• **Key Fact 2**: The critical relationship between concepts",
        "• **Common Error**: The typical mistake and how to avoid it",
        "",
        "## 🎯 Exam Focus Areas",
        "• **High Priority**: Core definitions and fundamental principles",
        "• **Medium Priority**: Practical applications and problem-solving",
        "• **Review**: Common mistakes and how to avoid them",
        "",
        "## 📊 Quick Self-Assessment",
        f"□ Can explain {topic} clearly and accurately",
        "□ Understand the key principles and their applications",
        "□ Can solve basic problems using the methods learned",
        f"□ Know how this connects to other topics in {subject}",
        "",
        "*Keep this cheat sheet handy for quick reference during review sessions.*",
    ])


def feedback(topic: str, subject: str, correct_answer: Optional[str] = None) -> str:
    expected = f' The expected answer was: "{correct_answer}".' if correct_answer else ""
    return (
        f"Good effort on this {topic} question.{expected} Compare your answer with it point by point, "
        f"revisit the core principles of {topic} in {subject}, and try a similar question again to "
        "lock in the idea."
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# STRUCTURED KINDS: CANNED ROTATIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def flashcards(topic: str, subject: str, count: int = DEFAULT_FLASHCARD_COUNT) -> List[Dict[str, str]]:
    """Exactly ``count`` cards, cycling through ten question/answer templates."""
    pairs = [
        (f"What is the fundamental definition of {topic}?",
         f"{topic} is a fundamental concept in {subject} covering the key principles and "
         "applications needed to understand the wider subject."),
        (f"How does {topic} relate to other concepts in {subject}?",
         f"{topic} is a foundation that connects to several areas of {subject} and underpins "
         "more advanced concepts and applications."),
        (f"What are the key principles governing {topic}?",
         "Systematic analysis, practical application, theoretical understanding and integration "
         "with related concepts."),
        (f"Describe a practical application of {topic}.",
         "It is used in real-world problem-solving, industry implementations, research and "
         "professional practice."),
        (f"What are the main components of {topic}?",
         "Theoretical foundations, practical applications, analytical methods and its connections "
         "to related concepts."),
        (f"How would you solve a problem involving {topic}?",
         "Analyze the problem, apply the relevant principles step by step, then verify the result "
         "against established criteria."),
        (f"What are common mistakes when working with {topic}?",
         "Oversimplifying, skipping prerequisites, misapplying principles and ignoring practical "
         "constraints."),
        (f"Why is {topic} important in {subject}?",
         "It provides essential knowledge for advanced study, practical work and understanding "
         "related concepts."),
        (f"What are the prerequisites for understanding {topic}?",
         f"Basic concepts in {subject}, fundamental mathematical skills, analytical thinking and "
         "the core terminology."),
        (f"How has {topic} evolved in the field of {subject}?",
         "Through research contributions, technological advances, practical applications and "
         "cross-disciplinary work."),
    ]
    return [
        {"question": pairs[i % len(pairs)][0], "answer": pairs[i % len(pairs)][1]}
        for i in range(max(1, count))
    ]


def _mcq_templates(topic: str, subject: str) -> List[Dict[str, Any]]:
    return [
        {
            "question": f"What is the primary focus of {topic} in {subject}?",
            "options": [
                "Understanding fundamental principles and applications",
                "Memorizing complex formulas and equations",
                "Learning historical facts and dates",
                "Practicing advanced mathematical calculations",
            ],
            "correctAnswer": "Understanding fundamental principles and applications",
            "explanation": "The focus is on the core principles and how they apply to real situations.",
        },
        {
            "question": f"Which best describes the relationship between {topic} and other concepts in {subject}?",
            "options": [
                "It is completely independent of other topics",
                "It serves as a foundation for advanced concepts",
                "It is only relevant for theoretical study",
                "It has no practical applications",
            ],
            "correctAnswer": "It serves as a foundation for advanced concepts",
            "explanation": "The topic supplies knowledge that more advanced concepts in the field build on.",
        },
        {
            "question": f"What is the most effective approach to learning {topic}?",
            "options": [
                "Memorizing all formulas without understanding",
                "Focusing only on theoretical aspects",
                "Combining theory with practical application",
                "Studying in isolation from other topics",
            ],
            "correctAnswer": "Combining theory with practical application",
            "explanation": "Understanding sticks best when theory is paired with practice and problem-solving.",
        },
    ]


def _written_templates(topic: str, subject: str) -> List[Dict[str, Any]]:
    return [
        {
            "question": f"Explain the importance of {topic} in the context of {subject}.",
            "correctAnswer": f"{topic} provides foundational knowledge for advanced concepts, has practical "
                             f"real-world applications and connects to several areas within {subject}.",
            "explanation": "A good answer covers its role as a foundation, its practical relevance and its connections.",
        },
        {
            "question": f"Describe the key principles that govern {topic}.",
            "correctAnswer": "Systematic analysis, practical application, theoretical understanding, "
                             "integration with related concepts and evidence-based reasoning.",
            "explanation": "The answer should name the fundamental principles and show how they are applied.",
        },
        {
            "question": f"How would you apply knowledge of {topic} to solve a practical problem?",
            "correctAnswer": "Identify the problem type, analyze the relevant factors, apply the right "
                             "principles, implement the solution systematically and verify the result.",
            "explanation": "A strong answer shows a clear problem-solving method and practical skill.",
        },
    ]


def quiz(topic: str, subject: str, test_config: Optional[TestConfig] = None) -> List[Dict[str, Any]]:
    """
    ``questionCount`` items (clamped to 5..50, default 15). Types follow
    ``questionType``; ``mixed`` cycles mcq → short → long.
    """
    if test_config:
        count = clamp_question_count(test_config.question_count)
        question_type = test_config.question_type
    else:
        count, question_type = DEFAULT_QUESTIONS, "mcq"

    types = ["mcq", "short", "long"] if question_type == "mixed" else [question_type]
    mcq = _mcq_templates(topic, subject)
    written = _written_templates(topic, subject)

    items = []
    for i in range(count):
        item_type = types[i % len(types)]
        templates = mcq if item_type == "mcq" else written
        items.append({**templates[i % len(templates)], "type": item_type})
    return items


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# DISPATCH
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def generic(topic: str, subject: str) -> str:
    return (
        f"High-quality educational content for {topic} in {subject}, covering the essential "
        "aspects of the topic with explanations, practical examples and learning strategies."
    )


def fallback_content(
    kind: str,
    topic_name: Optional[str],
    subject_name: Optional[str],
    syllabus: Optional[str] = None,
    test_config: Optional[TestConfig] = None,
    *,
    correct_answer: Optional[str] = None,
    flashcard_count: int = DEFAULT_FLASHCARD_COUNT,
) -> Any:
    """Template content for ``kind``. Unknown kinds get one generic sentence."""
    topic = topic_name or "Topic"
    subject = subject_name or "Subject"

    if kind == "roadmap":
        return roadmap(topic, subject)
    if kind == "detailedNotes":
        return detailed_notes(topic, subject)
    if kind == "shortNotes":
        return short_notes(topic, subject)
    if kind == "cheatsheet":
        return cheatsheet(topic, subject)
    if kind == "flashcards":
        return flashcards(topic, subject, flashcard_count)
    if kind == "quiz":
        return quiz(topic, subject, test_config)
    if kind == "mindMap":
        return [node.model_dump(by_alias=True, exclude_none=True) for node in fallback_mind_map(syllabus)]
    if kind == "feedback":
        return feedback(topic, subject, correct_answer)

    logger.warning(f"[FALLBACK] No template for content type '{kind}', using generic text")
    return generic(topic, subject)
