"""Shared test fixtures for pytest.

ENVIRONMENT is pinned to ``test`` before anything imports settings so no
.env file is read, and a placeholder generator key is set so the generate
route gets past its configuration check. Generator traffic never leaves the
process: API tests override the orchestrator dependency with one wired to a
scripted generator.
"""

import os
from collections.abc import AsyncGenerator, Callable, Generator, Iterable
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient


os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("GEMINI_API_KEY", "test-placeholder-key")

from dependencies.generation import get_generation_orchestrator, get_history_store
from main import app
from services.generation.orchestrator import GenerationOrchestrator
from services.generation.retry import RetryPolicy
from services.history import HistoryStore


class ScriptedGenerator:
    """Generator double that replays canned outputs in order.

    An item that is an exception instance is raised instead of returned. The
    last item repeats once the script runs out.
    """

    def __init__(self, outputs: Iterable[str | BaseException]) -> None:
        self._outputs = list(outputs)
        if not self._outputs:
            raise ValueError("ScriptedGenerator needs at least one output")
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        index = min(len(self.prompts), len(self._outputs) - 1)
        self.prompts.append(prompt)
        output = self._outputs[index]
        if isinstance(output, BaseException):
            raise output
        return output


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def history_store() -> HistoryStore:
    return HistoryStore()


@pytest.fixture
def make_orchestrator(
    recording_sleep: RecordingSleep, history_store: HistoryStore
) -> Callable[..., tuple[GenerationOrchestrator, ScriptedGenerator]]:
    """Build an orchestrator around a scripted generator with instant retries."""

    def _make(
        outputs: Iterable[str | BaseException], **kwargs: Any
    ) -> tuple[GenerationOrchestrator, ScriptedGenerator]:
        generator = ScriptedGenerator(outputs)
        kwargs.setdefault("retry_policy", RetryPolicy(sleep=recording_sleep))
        kwargs.setdefault("sink", history_store)
        return GenerationOrchestrator(generator=generator, **kwargs), generator

    return _make


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """
    Create a test client for the FastAPI application.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def override_generator(
    make_orchestrator: Callable[..., tuple[GenerationOrchestrator, ScriptedGenerator]],
    history_store: HistoryStore,
) -> Generator[Callable[[Iterable[str | BaseException]], ScriptedGenerator], None, None]:
    """Route the app's generation and history dependencies to test doubles."""

    def _install(outputs: Iterable[str | BaseException]) -> ScriptedGenerator:
        orchestrator, generator = make_orchestrator(outputs)
        app.dependency_overrides[get_generation_orchestrator] = lambda: orchestrator
        return generator

    app.dependency_overrides[get_history_store] = lambda: history_store
    yield _install
    app.dependency_overrides.pop(get_generation_orchestrator, None)
    app.dependency_overrides.pop(get_history_store, None)


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
