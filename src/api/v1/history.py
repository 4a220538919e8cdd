from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dependencies.generation import get_history_store
from schemas.api import ApiResponse
from schemas.history import HistoryItem, HistoryType, LatestResult
from services.generation.catalog import categories
from services.history import HistoryStore


router = APIRouter(prefix="/history", tags=["history"])

HistoryDep = Annotated[HistoryStore, Depends(get_history_store)]


@router.get("", response_model=ApiResponse[list[HistoryItem]])
def list_history(
    history: HistoryDep,
    type: Annotated[HistoryType | None, Query()] = None,
) -> ApiResponse[list[HistoryItem]]:
    """List recorded generations, newest first, optionally for one type."""
    items = history.list(type)
    return ApiResponse(
        success=True, data=items, message=f"Found {len(items)} history items"
    )


@router.get("/latest/{category}", response_model=ApiResponse[LatestResult])
def latest_result(category: str, history: HistoryDep) -> ApiResponse[LatestResult]:
    """Most recent result for a category; ``data`` is null when none exists."""
    if category not in categories():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown history category {category!r}",
        )
    return ApiResponse(
        success=True,
        data=LatestResult(category=category, data=history.latest(category)),
        message="Latest result retrieved",
    )


@router.delete("/{item_id}", response_model=ApiResponse[None])
def delete_history_item(item_id: str, history: HistoryDep) -> ApiResponse[None]:
    history.delete(item_id)
    return ApiResponse(success=True, message="History item deleted")


@router.delete("", response_model=ApiResponse[None])
def clear_history(history: HistoryDep) -> ApiResponse[None]:
    history.clear()
    return ApiResponse(success=True, message="History cleared")
