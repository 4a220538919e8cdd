"""Value types passed between the parser, the retry loop and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, ClassVar, Generic, TypeVar


ResultT = TypeVar("ResultT")


class FailureReason(StrEnum):
    EMPTY_OUTPUT = "empty_output"
    UNPARSEABLE_OUTPUT = "unparseable_output"
    VALIDATION_FAILED = "validation_failed"


@dataclass(frozen=True, slots=True)
class ParseSuccess(Generic[ResultT]):  # noqa: UP046
    """A validated result and the recovery strategy that produced it."""

    result: ResultT
    strategy: str

    ok: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class ParseFailure:
    """No strategy produced a result that passed validation.

    ``raw_text`` is kept so the orchestrator can log what the generator
    actually returned; ``detail`` holds the last strategy's error.
    """

    reason: FailureReason
    raw_text: str
    detail: str | None = None

    ok: ClassVar[bool] = False


ParseOutcome = ParseSuccess[Any] | ParseFailure


@dataclass(frozen=True, slots=True)
class GenerationResult(Generic[ResultT]):  # noqa: UP046
    """Outcome of one orchestrated job.

    ``attempts`` counts generator calls. ``strategy`` is ``None`` when the
    result is the canned fallback rather than parsed generator output.
    """

    result: ResultT
    attempts: int
    strategy: str | None = None
    used_fallback: bool = False
