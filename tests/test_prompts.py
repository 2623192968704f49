import pytest

from learnyst.core.exceptions import InvalidContentKind
from learnyst.prompts import STANDARD_CURRICULUM, build_prompt
from learnyst.schemas.content import ContentKind
from learnyst.schemas.content import TestConfig as QuizConfig


@pytest.mark.parametrize("kind", [k.value for k in ContentKind])
def test_every_kind_embeds_topic_and_subject(kind):
    prompt = build_prompt(kind, "Physics", "Projectile Motion")

    assert prompt.strip()
    assert "Physics" in prompt
    assert "Projectile Motion" in prompt


@pytest.mark.parametrize("kind", ["flashcards", "quiz"])
def test_list_kinds_demand_a_json_array(kind):
    assert "Return ONLY a valid JSON array in this exact format" in build_prompt(kind, "S", "T")


def test_mind_map_demands_a_json_object():
    prompt = build_prompt("mindMap", "Biology", None, "Cells and tissues")

    assert "Return ONLY a valid JSON object in this exact format" in prompt
    assert '"mindMap"' in prompt
    assert "Focus area" not in prompt
    assert "Cells and tissues" in prompt


def test_missing_syllabus_uses_standard_curriculum():
    assert STANDARD_CURRICULUM in build_prompt("flashcards", "Chemistry", "Bonding")
    assert STANDARD_CURRICULUM not in build_prompt("flashcards", "Chemistry", "Bonding", "Ionic bonds")


def test_quiz_defaults_to_fifteen_questions():
    assert "15 questions" in build_prompt("quiz", "History", "World War I")


def test_quiz_follows_test_config():
    config = QuizConfig(question_type="short", question_count=7)
    prompt = build_prompt("quiz", "History", "World War I", test_config=config)

    assert "7 questions" in prompt
    assert "Question Type: SHORT" in prompt
    assert 'Create ONLY short answer questions (type: "short")' in prompt


def test_feedback_prompt_embeds_answers():
    prompt = build_prompt(
        "feedback", "Math", "Fractions",
        question="What is 1/2 + 1/4?", user_answer="2/6", correct_answer="3/4",
    )

    assert "Student's Answer: 2/6" in prompt
    assert "Correct Answer: 3/4" in prompt


def test_fields_are_embedded_verbatim():
    prompt = build_prompt("roadmap", 'Art "History"', "{Baroque}")

    assert 'Art "History"' in prompt
    assert "{Baroque}" in prompt


def test_unknown_kind_is_rejected():
    with pytest.raises(InvalidContentKind) as info:
        build_prompt("poem", "S", "T")

    assert isinstance(info.value, ValueError)
    assert info.value.kind == "poem"


def test_test_config_accepts_legacy_type_key_and_clamps():
    config = QuizConfig.model_validate({"type": "long", "questionCount": 80})

    assert config.question_type == "long"
    assert config.question_count == 50
    assert QuizConfig.model_validate({"questionCount": 1}).question_count == 5
