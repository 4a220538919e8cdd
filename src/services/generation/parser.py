"""Turn raw generator text into a validated result, or a typed failure.

Strategies run cheapest first and the first one whose output validates
wins. The parser has no side effects and never raises for bad input: the
caller gets a `ParseSuccess` or a `ParseFailure` and decides what to do.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from services.generation.models import (
    FailureReason,
    ParseFailure,
    ParseOutcome,
    ParseSuccess,
)
from services.generation.recovery import (
    escape_all_newlines,
    escape_newlines_in_strings,
    extract_object,
)
from services.generation.shapes import ExpectedShape


@dataclass(frozen=True, slots=True)
class RecoveryStrategy:
    """A named way of getting a candidate payload out of raw text.

    ``extract`` raises ``ValueError`` (JSON decode errors included) when it
    cannot produce a candidate.
    """

    name: str
    extract: Callable[[str, ExpectedShape], Any]


def _direct(raw_text: str, shape: ExpectedShape) -> Any:
    return json.loads(raw_text)


def _fence_stripped(raw_text: str, shape: ExpectedShape) -> Any:
    return json.loads(extract_object(raw_text))


def _blanket_newline_escape(raw_text: str, shape: ExpectedShape) -> Any:
    return json.loads(escape_all_newlines(extract_object(raw_text)))


def _scoped_newline_escape(raw_text: str, shape: ExpectedShape) -> Any:
    return json.loads(escape_newlines_in_strings(extract_object(raw_text)))


def _field_regex(raw_text: str, shape: ExpectedShape) -> Any:
    return shape.recover_fields(raw_text)


DEFAULT_STRATEGIES: tuple[RecoveryStrategy, ...] = (
    RecoveryStrategy("direct", _direct),
    RecoveryStrategy("fence_stripped", _fence_stripped),
    RecoveryStrategy("blanket_newline_escape", _blanket_newline_escape),
    RecoveryStrategy("scoped_newline_escape", _scoped_newline_escape),
    RecoveryStrategy("field_regex", _field_regex),
)


class ResponseRecoveryParser:
    """Apply recovery strategies in order until one validates."""

    def __init__(self, strategies: Sequence[RecoveryStrategy] = DEFAULT_STRATEGIES):
        if not strategies:
            raise ValueError("at least one recovery strategy is required")
        self._strategies = tuple(strategies)

    @property
    def strategy_names(self) -> tuple[str, ...]:
        return tuple(strategy.name for strategy in self._strategies)

    def parse(self, raw_text: str | None, shape: ExpectedShape) -> ParseOutcome:
        if raw_text is None or not raw_text.strip():
            return ParseFailure(FailureReason.EMPTY_OUTPUT, raw_text or "")

        produced_structure = False
        last_error: str | None = None
        for strategy in self._strategies:
            try:
                candidate = strategy.extract(raw_text, shape)
            except (ValueError, RecursionError) as exc:
                last_error = f"{strategy.name}: {exc}"
                continue

            produced_structure = True
            try:
                result = shape.validate(candidate)
            except ValueError as exc:
                last_error = f"{strategy.name}: {exc}"
                continue
            return ParseSuccess(result=result, strategy=strategy.name)

        reason = (
            FailureReason.VALIDATION_FAILED
            if produced_structure
            else FailureReason.UNPARSEABLE_OUTPUT
        )
        return ParseFailure(reason, raw_text, last_error)
