import pytest
from fastapi.testclient import TestClient

from learnyst.ai_engine import Credential, FailoverEngine
from learnyst.api.v1.endpoints.study import get_generation_service
from learnyst.main import app
from learnyst.services.generation_service import GenerationService


class ScriptedBackend:
    """Fake provider call. Replays ``replies`` in order; the last one repeats.
    Exception instances in the script are raised instead of returned."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []
        self.prompts = []

    async def __call__(self, credential, prompt, config):
        self.calls.append(credential.identifier)
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def sleeps():
    return RecordingSleep()


@pytest.fixture
def make_engine(sleeps):
    """Engine over gemini-style credentials KEY_1..KEY_n. ``None``/"" keys are unconfigured."""

    def _make(backend, keys=("key-1",), max_retries=2, backends=None):
        credentials = [
            Credential(identifier=f"KEY_{index}", api_key=key)
            for index, key in enumerate(keys, start=1)
        ]
        return FailoverEngine(
            credentials,
            backends=backends or {"gemini": backend},
            max_retries=max_retries,
            retry_delay=1.0,
            sleep=sleeps,
        )

    return _make


@pytest.fixture
def make_service(make_engine):
    def _make(backend, keys=("key-1",), **kwargs):
        return GenerationService(make_engine(backend, keys=keys, **kwargs))

    return _make


@pytest.fixture
def make_client():
    """TestClient whose routes use the given GenerationService."""

    def _make(service):
        app.dependency_overrides[get_generation_service] = lambda: service
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def offline_client(make_client, make_service):
    """No API keys configured: every content route serves fallback content."""
    return make_client(make_service(ScriptedBackend("unused"), keys=(None,)))
