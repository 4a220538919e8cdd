"""Interfaces the orchestrator depends on.

Tests swap in scripted generators and in-memory sinks; production wires the
chat-completions client and the history store.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GeneratorProtocol(Protocol):
    """Something that turns a prompt into raw text.

    Implementations raise `GenerationError` subclasses for failures they can
    classify; anything else is treated as a bug and propagates.
    """

    async def generate(self, prompt: str) -> str: ...


@runtime_checkable
class ResultSinkProtocol(Protocol):
    """Receives successful results (history persistence)."""

    def record(
        self, *, type: str, category: str, data: Any, preview: str
    ) -> Any: ...
