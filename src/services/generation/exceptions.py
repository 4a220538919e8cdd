"""Domain exceptions for the copy generation pipeline.

Parser failures are *not* represented here: the recovery parser returns
`ParseFailure` values so the orchestrator can pick retry or fallback without
exception control flow. These exceptions cover what the orchestrator and the
generator client surface to the HTTP layer. Each carries a stable
`error_code` for log tagging and the HTTP `status_code` the API maps it to.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from services.generation.models import ParseFailure


@dataclass(slots=True)
class GenerationError(Exception):
    """Base class for generation domain errors."""

    message: str
    error_code: str
    status_code: int = 500

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.error_code}: {self.message}"


class InvalidGenerationRequest(GenerationError):
    def __init__(self, message: str = "Invalid generation request") -> None:
        super().__init__(message=message, error_code="invalid_request", status_code=400)


class InvalidDateError(GenerationError):
    def __init__(self, message: str = "Invalid date, expected YYYY-MM-DD") -> None:
        super().__init__(message=message, error_code="invalid_date", status_code=400)


class GeneratorNotConfigured(GenerationError):
    def __init__(self, message: str = "Generator API key is not configured") -> None:
        super().__init__(
            message=message, error_code="generator_not_configured", status_code=500
        )


class GeneratorUnavailable(GenerationError):
    """Transport failure or non-2xx status from the generator endpoint."""

    def __init__(self, message: str = "Generator request failed") -> None:
        super().__init__(
            message=message, error_code="generator_unavailable", status_code=502
        )


class GeneratorResponseError(GenerationError):
    """The generator answered, but without a usable first choice."""

    def __init__(self, message: str = "Generator returned a malformed response") -> None:
        super().__init__(
            message=message, error_code="generator_bad_response", status_code=502
        )


class GenerationFailed(GenerationError):
    """A single attempt failed to parse and the kind has no fallback."""

    def __init__(
        self,
        message: str = "Generated text could not be parsed",
        failure: ParseFailure | None = None,
    ) -> None:
        super().__init__(message=message, error_code="generation_failed", status_code=502)
        self.failure = failure


class ExhaustedRetries(GenerationError):
    """Every attempt allowed by the retry policy failed."""

    def __init__(
        self,
        message: str = "Generation failed after all retry attempts",
        attempts: int = 0,
        last_raw_text: str | None = None,
    ) -> None:
        super().__init__(message=message, error_code="exhausted_retries", status_code=502)
        self.attempts = attempts
        self.last_raw_text = last_raw_text


@dataclass(slots=True)
class BatchItemFailure:
    """Why one item of a batch was dropped."""

    item: str
    error_code: str
    message: str


class AllBatchItemsFailed(GenerationError):
    def __init__(
        self,
        message: str = "Every requested date failed to generate",
        failures: list[BatchItemFailure] | None = None,
    ) -> None:
        super().__init__(message=message, error_code="all_items_failed", status_code=500)
        self.failures = failures or []


__all__ = [
    "AllBatchItemsFailed",
    "BatchItemFailure",
    "ExhaustedRetries",
    "GenerationError",
    "GenerationFailed",
    "GeneratorNotConfigured",
    "GeneratorResponseError",
    "GeneratorUnavailable",
    "InvalidDateError",
    "InvalidGenerationRequest",
]
