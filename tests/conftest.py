"""
Shared fixtures: a seeded in-memory store, a moderation client backed by
httpx.MockTransport, and a TestClient wired to both.
"""

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from core.dependencies import get_moderation, get_store
from core.moderation import ModerationClient
from main import app
from questions.schemas import Question
from storage import MemoryStore

BAD_WORDS = {"damn": "****", "heck": "****"}

Handler = Callable[[httpx.Request], httpx.Response]


def censoring_handler(request: httpx.Request) -> httpx.Response:
    """Mimic the moderation API: replace every known bad word."""
    text = request.content.decode("utf-8")
    censored = text
    found = []
    for word, mask in BAD_WORDS.items():
        if word in censored:
            found.append({"word": word})
            censored = censored.replace(word, mask)
    return httpx.Response(
        200,
        json={
            "content": text,
            "bad_words_total": len(found),
            "bad_words_list": found,
            "censored_content": censored,
        },
    )


def make_moderation(handler: Handler) -> ModerationClient:
    return ModerationClient(
        base_url="https://moderation.test",
        api_key="test-key",
        transport=httpx.MockTransport(handler),
    )


def seeded_questions(count: int = 5) -> list[Question]:
    return [
        Question(id=i, title=f"Question {i}", content=f"Content {i}", tags=["seed"])
        for i in range(1, count + 1)
    ]


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore(seeded_questions())


@pytest.fixture
def moderation_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def moderation_handler() -> Handler:
    return censoring_handler


@pytest.fixture
def moderation(moderation_handler: Handler, moderation_requests: list[httpx.Request]) -> ModerationClient:
    def recording_handler(request: httpx.Request) -> httpx.Response:
        moderation_requests.append(request)
        return moderation_handler(request)

    return make_moderation(recording_handler)


@pytest.fixture
def client(store: MemoryStore, moderation: ModerationClient) -> Iterator[TestClient]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_moderation] = lambda: moderation
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
