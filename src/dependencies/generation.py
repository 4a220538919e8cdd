"""FastAPI providers for the generation pipeline and the history store."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from core.config import Settings, get_settings
from services.generation.client import ChatCompletionsClient
from services.generation.orchestrator import GenerationOrchestrator
from services.generation.parser import ResponseRecoveryParser
from services.generation.retry import RetryPolicy
from services.history import HistoryStore


def get_history_store(request: Request) -> HistoryStore:
    """Return the app's history store, creating it on first use."""
    store: HistoryStore | None = getattr(request.app.state, "history_store", None)
    if store is None:
        store = HistoryStore(limit=get_settings().HISTORY_LIMIT)
        request.app.state.history_store = store
    return store


def get_generation_orchestrator(
    settings: Annotated[Settings, Depends(get_settings)],
    history: Annotated[HistoryStore, Depends(get_history_store)],
) -> GenerationOrchestrator:
    return GenerationOrchestrator(
        generator=ChatCompletionsClient.from_settings(settings),
        parser=ResponseRecoveryParser(),
        retry_policy=RetryPolicy.from_settings(settings),
        sink=history,
    )
