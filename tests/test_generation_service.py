import asyncio
import json

import pytest

from conftest import ScriptedBackend
from learnyst.ai_engine import OutcomeStatus
from learnyst.core.exceptions import InvalidContentKind, NoCredentialsAvailable, QuotaOrOverloadError
from learnyst.schemas.content import ContentRequest, FeedbackRequest
from learnyst.services.generation_service import (
    CONTENT_MESSAGES,
    MALFORMED,
    MIND_MAP_MESSAGES,
    GenerationService,
)

SYLLABUS = (
    "ALGEBRA\nSolving linear equations carefully\nQuadratic formula applications\n"
    "GEOMETRY\nTriangle congruence theorems in detail\nCircle properties and tangents"
)

MIND_MAP_REPLY = json.dumps({
    "mindMap": [
        {"id": "topic1", "name": "Foundations", "isCompleted": False,
         "children": [{"id": "topic1-1", "name": "Sets", "isCompleted": False}]},
    ]
})


def _request(kind, **extra):
    return ContentRequest(content_type=kind, topic_name="Vectors", subject_name="Physics", **extra)


def test_mind_map_from_ai(make_service):
    backend = ScriptedBackend("Here you go:\n" + MIND_MAP_REPLY)
    result = asyncio.run(make_service(backend).compute_mind_map("Math", SYLLABUS))

    assert result.used_fallback is False
    assert result.advisory_message is None
    assert [t.name for t in result.content] == ["Foundations"]
    assert SYLLABUS in backend.prompts[0]


def test_mind_map_without_keys_uses_syllabus_outline(make_service):
    backend = ScriptedBackend("unused")
    result = asyncio.run(make_service(backend, keys=(None,)).compute_mind_map("Math", SYLLABUS))

    assert result.used_fallback is True
    assert result.advisory_message == MIND_MAP_MESSAGES[OutcomeStatus.NO_CREDENTIALS]
    assert [t.name for t in result.content] == ["ALGEBRA", "GEOMETRY"]
    assert backend.calls == []


def test_mind_map_quota_exhaustion_message(make_service):
    backend = ScriptedBackend(QuotaOrOverloadError("429"))
    result = asyncio.run(make_service(backend, keys=("a", "b")).compute_mind_map("Math", SYLLABUS))

    assert result.used_fallback is True
    assert result.advisory_message == (
        "All AI quotas exceeded. Using comprehensive learning structure. Quotas reset in 24 hours."
    )


def test_mind_map_malformed_reply_falls_back(make_service):
    result = asyncio.run(make_service(ScriptedBackend("I cannot help with that.")).compute_mind_map("Math", SYLLABUS))

    assert result.used_fallback is True
    assert result.advisory_message == MIND_MAP_MESSAGES[MALFORMED]
    assert result.content[0].id == "topic1"


def test_text_content_returned_verbatim(make_service):
    reply = "# Learning Roadmap: Vectors\n\n```python\nprint('keep me')\n```"
    result = asyncio.run(make_service(ScriptedBackend(reply)).generate_content(_request("roadmap")))

    assert result.content == reply
    assert result.used_fallback is False


def test_flashcards_parsed(make_service):
    reply = '```json\n[{"question": "What is a vector?", "answer": "Magnitude and direction."}]\n```'
    result = asyncio.run(make_service(ScriptedBackend(reply)).generate_content(_request("flashcards")))

    assert result.content == [{"question": "What is a vector?", "answer": "Magnitude and direction."}]


def test_malformed_quiz_uses_fallback(make_service):
    request = _request("quiz", test_config={"type": "mcq", "questionCount": 8})
    result = asyncio.run(make_service(ScriptedBackend("[{not json}]")).generate_content(request))

    assert result.used_fallback is True
    assert result.advisory_message == CONTENT_MESSAGES[MALFORMED]
    assert len(result.content) == 8


def test_no_keys_message(make_service):
    result = asyncio.run(make_service(ScriptedBackend("x"), keys=()).generate_content(_request("cheatsheet")))

    assert result.used_fallback is True
    assert result.advisory_message == (
        "Using high-quality educational content. AI enhancement available with API key."
    )
    assert "Vectors" in result.content


def test_exhausted_message(make_service):
    backend = ScriptedBackend(QuotaOrOverloadError("quota exceeded"))
    result = asyncio.run(make_service(backend).generate_content(_request("shortNotes")))

    assert result.advisory_message == (
        "All AI services are currently overloaded. Using comprehensive educational content. "
        "Please try again in a few minutes."
    )


def test_transient_failure_message(make_service):
    backend = ScriptedBackend(RuntimeError("connection reset"))
    result = asyncio.run(make_service(backend, max_retries=1).generate_content(_request("detailedNotes")))

    assert result.used_fallback is True
    assert result.advisory_message == (
        "AI service temporarily unavailable. Using high-quality educational content."
    )
    assert len(backend.calls) == 2


def test_timeout_falls_back(make_engine):
    async def slow(credential, prompt, config):
        await asyncio.sleep(5)
        return "too late"

    service = GenerationService(make_engine(slow), timeout_seconds=0.01)
    result = asyncio.run(service.generate_content(_request("roadmap")))

    assert result.used_fallback is True
    assert result.advisory_message == CONTENT_MESSAGES[OutcomeStatus.FAILED]


def test_invalid_kind_rejected_even_without_keys(make_service):
    with pytest.raises(InvalidContentKind):
        asyncio.run(make_service(ScriptedBackend("x"), keys=()).generate_content(_request("essay")))


def test_mind_map_kind_delegates(make_service):
    backend = ScriptedBackend(MIND_MAP_REPLY)
    result = asyncio.run(make_service(backend).generate_content(_request("mindMap", syllabus=SYLLABUS)))

    assert result.content[0]["children"][0] == {"id": "topic1-1", "name": "Sets", "isCompleted": False}
    assert "Focus area: Vectors" in backend.prompts[0]


def test_feedback_kind_falls_back_with_correct_answer(make_service):
    request = _request("feedback", correct_answer="F = ma")
    result = asyncio.run(make_service(ScriptedBackend("x"), keys=()).generate_content(request))

    assert "F = ma" in result.content


def test_generate_feedback(make_service):
    backend = ScriptedBackend("Nice try, revisit Newton's second law.")
    request = FeedbackRequest(question="State F", user_answer="F = mv", correct_answer="F = ma")

    assert asyncio.run(make_service(backend).generate_feedback(request)).startswith("Nice try")
    assert "Student's Answer: F = mv" in backend.prompts[0]


def test_generate_feedback_has_no_fallback(make_service):
    with pytest.raises(NoCredentialsAvailable):
        asyncio.run(make_service(ScriptedBackend("x"), keys=()).generate_feedback(FeedbackRequest()))
