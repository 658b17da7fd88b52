"""Pytest configuration and shared fixtures."""
import os
from typing import Any

import pytest

from wanderlust.conversation import ConversationClient, SessionController
from wanderlust.llm import ChatMessage, LLMProvider, LLMResponse
from wanderlust.memory import MessageStore, Session, WebChunk, WebSource
from wanderlust.memory.in_memory import InMemoryBackend


class FakeProvider(LLMProvider):
    """LLMProvider double that records requests and replays canned replies."""

    def __init__(self, content: str = "Here is your plan.", grounding_chunks=None, error: Exception | None = None):
        self.content = content
        self.grounding_chunks = grounding_chunks
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        maps_grounding: bool = False,
        **kwargs: Any
    ) -> LLMResponse:
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "maps_grounding": maps_grounding,
        })
        if self.error is not None:
            raise self.error
        return LLMResponse(
            content=self.content,
            model=model or self.model,
            grounding_chunks=self.grounding_chunks,
        )

    async def close(self) -> None:
        self.closed = True


class StepClock:
    """Deterministic millisecond clock advancing by ``step`` per call."""

    def __init__(self, start: int = 1_700_000_000_000, step: int = 1000):
        self.now = start
        self.step = step

    def __call__(self) -> int:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY"),
    }


@pytest.fixture
def web_chunk():
    return WebChunk(web=WebSource(uri="https://en.parisinfo.com", title="Paris Tourist Office"))


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def store(backend, session):
    return MessageStore(backend, session)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def controller(store, provider, clock):
    return SessionController(store, ConversationClient(provider), clock=clock)
