from typing import Annotated

from fastapi import APIRouter, Depends

from core.config import Settings, get_settings
from dependencies.generation import get_generation_orchestrator
from schemas.generate import GenerateRequest, GenerateResponse, GenerationErrorResponse
from services.generation.catalog import resolve_kind
from services.generation.exceptions import (
    GeneratorNotConfigured,
    InvalidGenerationRequest,
)
from services.generation.orchestrator import GenerationOrchestrator


router = APIRouter(tags=["generate"])

_error_responses: dict[int | str, dict] = {
    status: {"model": GenerationErrorResponse} for status in (400, 500, 502)
}


@router.post(
    "/generate",
    response_model=GenerateResponse,
    response_model_exclude_none=True,
    responses=_error_responses,
)
async def generate(
    payload: GenerateRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    orchestrator: Annotated[
        GenerationOrchestrator, Depends(get_generation_orchestrator)
    ],
) -> GenerateResponse:
    """Generate morning copy for a list of dates, or a set of copies for a kind.

    Request problems are reported before the generator configuration is
    checked, so a misconfigured server still answers 400 for bad input.
    """
    kind = resolve_kind(payload.type, payload.sub_type)
    if kind.date_scoped:
        if not payload.dates:
            raise InvalidGenerationRequest("Provide at least one date")
    else:
        kind.resolve_count(payload.count)

    if not settings.generator_configured:
        raise GeneratorNotConfigured()

    if kind.date_scoped:
        batch = await orchestrator.generate_for_dates(payload.dates or [])
        return GenerateResponse(type=kind.type, data=batch.items)

    copies = await orchestrator.generate_copies(kind.type, kind.sub_type, payload.count)
    return GenerateResponse(
        type=kind.type, sub_type=kind.sub_type, content=copies.content
    )
