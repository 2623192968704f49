import pytest

from learnyst.schemas.content import TestConfig as QuizConfig
from learnyst.services.fallback import DEFAULT_FLASHCARD_COUNT, fallback_content


@pytest.mark.parametrize("kind", ["roadmap", "detailedNotes", "shortNotes", "cheatsheet"])
def test_text_kinds_mention_topic_and_subject(kind):
    content = fallback_content(kind, "Thermodynamics", "Physics")

    assert isinstance(content, str)
    assert "Thermodynamics" in content
    assert "Physics" in content


def test_roadmap_has_four_phases():
    content = fallback_content("roadmap", "Recursion", "Computer Science")

    for phase in range(1, 5):
        assert f"## Phase {phase}:" in content
    assert "## Study Tips and Strategies" in content


def test_detailed_notes_have_eight_sections():
    content = fallback_content("detailedNotes", "Recursion", "Computer Science")

    for section in range(1, 9):
        assert f"## {section}. " in content


@pytest.mark.parametrize(
    "kind", ["roadmap", "detailedNotes", "shortNotes", "flashcards", "cheatsheet", "quiz", "mindMap", "feedback"]
)
def test_missing_names_never_raise(kind):
    assert fallback_content(kind, None, None)


def test_flashcards_default_count():
    cards = fallback_content("flashcards", "Cells", "Biology")

    assert len(cards) == DEFAULT_FLASHCARD_COUNT == 25
    assert all(card["question"] and card["answer"] for card in cards)


def test_flashcards_requested_count_and_rotation():
    cards = fallback_content("flashcards", "Cells", "Biology", flashcard_count=12)

    assert len(cards) == 12
    assert cards[10] == cards[0]
    assert cards[1] != cards[0]


def test_quiz_without_config_is_fifteen_mcq():
    quiz = fallback_content("quiz", "Cells", "Biology")

    assert len(quiz) == 15
    assert {q["type"] for q in quiz} == {"mcq"}
    for q in quiz:
        assert len(q["options"]) == 4
        assert q["correctAnswer"] in q["options"]


@pytest.mark.parametrize("requested,expected", [(5, 5), (50, 50), (3, 5), (0, 5), (80, 50), (23, 23)])
def test_quiz_count_is_clamped(requested, expected):
    config = QuizConfig.model_validate({"questionType": "mcq", "questionCount": requested})

    assert len(fallback_content("quiz", "Cells", "Biology", test_config=config)) == expected


def test_quiz_count_clamped_even_when_config_built_without_validation():
    config = QuizConfig.model_construct(question_type="mcq", question_count=500)

    assert len(fallback_content("quiz", "Cells", "Biology", test_config=config)) == 50


def test_mixed_quiz_cycles_question_types():
    config = QuizConfig(question_type="mixed", question_count=6)
    quiz = fallback_content("quiz", "Cells", "Biology", test_config=config)

    assert [q["type"] for q in quiz] == ["mcq", "short", "long", "mcq", "short", "long"]
    assert "options" in quiz[0]
    assert "options" not in quiz[1]


def test_long_quiz_reuses_written_templates():
    config = QuizConfig(question_type="long", question_count=5)
    quiz = fallback_content("quiz", "Cells", "Biology", test_config=config)

    assert {q["type"] for q in quiz} == {"long"}
    assert all(q["correctAnswer"] for q in quiz)


def test_mind_map_fallback_uses_syllabus_outline():
    syllabus = "ALGEBRA\nSolving linear equations carefully\nGEOMETRY\nTriangle congruence theorems"
    topics = fallback_content("mindMap", "Topic", "Math", syllabus)

    assert [t["name"] for t in topics] == ["ALGEBRA", "GEOMETRY"]
    assert topics[0]["isCompleted"] is False


def test_feedback_includes_correct_answer():
    content = fallback_content("feedback", "Fractions", "Math", correct_answer="3/4")

    assert "3/4" in content


def test_unknown_kind_gets_generic_sentence():
    content = fallback_content("poem", "Fractions", "Math")

    assert isinstance(content, str)
    assert "Fractions" in content
