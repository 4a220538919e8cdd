"""Generation orchestrator: generator call, recovery parse, retry or fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from tenacity import RetryError, retry_if_exception_type, retry_if_result

from core.error_handler import structured_logger
from schemas.generate import CopiesContent, DateItem, MorningContent
from services.generation.catalog import GenerationKind, resolve_kind
from services.generation.date_context import get_date_context
from services.generation.exceptions import (
    AllBatchItemsFailed,
    BatchItemFailure,
    ExhaustedRetries,
    GenerationError,
    GenerationFailed,
    GeneratorResponseError,
    GeneratorUnavailable,
    InvalidGenerationRequest,
)
from services.generation.fallbacks import morning_fallback
from services.generation.images import build_image_options, keywords_for_context
from services.generation.interfaces import GeneratorProtocol, ResultSinkProtocol
from services.generation.models import (
    GenerationResult,
    ParseFailure,
    ParseOutcome,
    ParseSuccess,
)
from services.generation.parser import ResponseRecoveryParser
from services.generation.prompts import build_copies_prompt, build_morning_prompt
from services.generation.retry import RetryPolicy
from services.generation.shapes import ExpectedShape


logger = logging.getLogger(__name__)

RAW_PREVIEW_CHARS = 300

# Generator failures worth another attempt; a missing API key is not.
RETRYABLE_GENERATOR_ERRORS = (GeneratorUnavailable, GeneratorResponseError)


def _preview(text: str | None) -> str:
    if not text:
        return ""
    return text if len(text) <= RAW_PREVIEW_CHARS else text[:RAW_PREVIEW_CHARS] + "..."


def _is_parse_failure(outcome: ParseOutcome) -> bool:
    return isinstance(outcome, ParseFailure)


@dataclass(frozen=True, slots=True)
class GenerationJob:
    """One prompt and what to do with its output."""

    label: str
    prompt: str
    shape: ExpectedShape
    retry: bool = False
    fallback: Callable[[], Any] | None = None


@dataclass(slots=True)
class DateBatch:
    items: list[DateItem]
    failures: list[BatchItemFailure] = field(default_factory=list)


@dataclass(slots=True)
class CopiesBatch:
    kind: GenerationKind
    content: CopiesContent
    attempts: int


class GenerationOrchestrator:
    """Runs generation jobs through the parser with retry or fallback.

    Kinds with ``retry`` set are retried on parse failures and on retryable
    generator errors until the policy gives up, then `ExhaustedRetries` is
    raised. Kinds without it get one attempt; a parse failure returns the
    job's fallback, while generator errors propagate to the caller.
    """

    def __init__(
        self,
        generator: GeneratorProtocol,
        parser: ResponseRecoveryParser | None = None,
        retry_policy: RetryPolicy | None = None,
        sink: ResultSinkProtocol | None = None,
    ) -> None:
        self._generator = generator
        self._parser = parser or ResponseRecoveryParser()
        self._retry_policy = retry_policy or RetryPolicy()
        self._sink = sink

    async def _attempt(self, job: GenerationJob) -> ParseOutcome:
        raw_text = await self._generator.generate(job.prompt)
        outcome = self._parser.parse(raw_text, job.shape)
        if isinstance(outcome, ParseFailure):
            structured_logger.warning(
                "Generated text rejected",
                job=job.label,
                reason=outcome.reason.value,
                detail=outcome.detail,
                raw_preview=_preview(outcome.raw_text),
            )
        else:
            logger.debug("Recovered %s output via %s", job.label, outcome.strategy)
        return outcome

    async def run(self, job: GenerationJob) -> GenerationResult[Any]:
        if job.retry:
            return await self._run_with_retry(job)

        outcome = await self._attempt(job)
        if isinstance(outcome, ParseSuccess):
            return GenerationResult(outcome.result, attempts=1, strategy=outcome.strategy)
        if job.fallback is not None:
            logger.info("Serving fallback copy for %s", job.label)
            return GenerationResult(job.fallback(), attempts=1, used_fallback=True)
        raise GenerationFailed(failure=outcome)

    async def _run_with_retry(self, job: GenerationJob) -> GenerationResult[Any]:
        attempts = 0

        async def attempt() -> ParseOutcome:
            nonlocal attempts
            attempts += 1
            return await self._attempt(job)

        retrying = self._retry_policy.retrying(
            retry_if_result(_is_parse_failure)
            | retry_if_exception_type(RETRYABLE_GENERATOR_ERRORS)
        )
        try:
            outcome = await retrying(attempt)
        except RetryError as exc:
            raise self._exhausted(job, attempts, exc) from exc

        return GenerationResult(
            outcome.result, attempts=attempts, strategy=outcome.strategy
        )

    def _exhausted(
        self, job: GenerationJob, attempts: int, error: RetryError
    ) -> ExhaustedRetries:
        last = error.last_attempt
        last_raw_text: str | None = None
        if last.failed:
            cause = last.exception()
            last_error = getattr(cause, "error_code", cause.__class__.__name__)
        else:
            failure = last.result()
            last_raw_text = failure.raw_text
            last_error = failure.reason.value

        structured_logger.error(
            "Generation retries exhausted",
            job=job.label,
            attempts=attempts,
            last_error=last_error,
            raw_preview=_preview(last_raw_text),
        )
        return ExhaustedRetries(attempts=attempts, last_raw_text=last_raw_text)

    async def generate_for_dates(self, dates: Sequence[str]) -> DateBatch:
        """Generate morning copy for each date, in order, one at a time.

        A failing date is logged and left out; the batch only fails when no
        date produced anything.
        """
        if not dates:
            raise InvalidGenerationRequest("Provide at least one date")

        kind = resolve_kind("morning")
        items: list[DateItem] = []
        failures: list[BatchItemFailure] = []
        for date_string in dates:
            try:
                items.append(await self._generate_date(kind, date_string))
            except GenerationError as exc:
                structured_logger.warning(
                    "Dropping date from batch",
                    date=date_string,
                    error_code=exc.error_code,
                    error=exc.message,
                )
                failures.append(
                    BatchItemFailure(
                        item=date_string, error_code=exc.error_code, message=exc.message
                    )
                )

        if not items:
            raise AllBatchItemsFailed(failures=failures)

        self._record(
            kind,
            data=[item.model_dump(mode="json") for item in items],
            preview=_dates_preview(kind, items),
        )
        structured_logger.info(
            "Morning batch generated",
            requested=len(dates),
            generated=len(items),
            failed=len(failures),
        )
        return DateBatch(items=items, failures=failures)

    async def _generate_date(self, kind: GenerationKind, date_string: str) -> DateItem:
        context = get_date_context(date_string)
        shape = kind.shape
        job = GenerationJob(
            label=f"{kind.category}:{date_string}",
            prompt=build_morning_prompt(context),
            shape=shape,
            retry=kind.retry,
            fallback=lambda: morning_fallback(shape),
        )
        generated = await self.run(job)
        return DateItem(
            date=date_string,
            context=context,
            content=MorningContent(morning_copies=list(generated.result.entries)),
            image_options=build_image_options(keywords_for_context(context)),
            used_fallback=generated.used_fallback,
        )

    async def generate_copies(
        self, type_: str, sub_type: str | None = None, count: int | None = None
    ) -> CopiesBatch:
        kind = resolve_kind(type_, sub_type)
        if kind.date_scoped:
            raise InvalidGenerationRequest(f"{kind.type} is generated per date")
        count = kind.resolve_count(count)

        generated = await self.run(
            GenerationJob(
                label=kind.category,
                prompt=build_copies_prompt(kind, count),
                shape=kind.shape,
                retry=kind.retry,
            )
        )
        content = CopiesContent(
            copies=list(generated.result.copies),
            quote_index=generated.result.quote_index,
        )
        self._record(
            kind,
            data={
                "type": kind.type,
                "sub_type": kind.sub_type,
                "content": content.model_dump(),
            },
            preview=f"生成了 {len(content.copies)} 条{kind.label}",
        )
        structured_logger.info(
            "Copies generated",
            category=kind.category,
            copies=len(content.copies),
            attempts=generated.attempts,
            strategy=generated.strategy,
        )
        return CopiesBatch(kind=kind, content=content, attempts=generated.attempts)

    def _record(self, kind: GenerationKind, *, data: Any, preview: str) -> None:
        if self._sink is None:
            return
        self._sink.record(
            type=kind.type, category=kind.category, data=data, preview=preview
        )


def _dates_preview(kind: GenerationKind, items: Sequence[DateItem]) -> str:
    first = items[0].date
    suffix = f" 等 {len(items)} 个日期" if len(items) > 1 else ""
    return f"生成了 {len(items)} 条{kind.label}（{first}{suffix}）"
