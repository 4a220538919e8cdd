"""Schemas for generation history entries."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


HistoryType = Literal["morning", "toddler", "primary", "quote", "picturebook"]


class HistoryItem(BaseModel):
    """One recorded generation, newest first in listings.

    ``timestamp`` is epoch milliseconds so the console can sort and format it
    the same way as its own clock.
    """

    id: str
    timestamp: int = Field(ge=0)
    type: HistoryType
    category: str
    data: Any
    preview: str


class LatestResult(BaseModel):
    category: str
    data: Any | None = None
