"""Schemas for the generate endpoint and the values it returns."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class DateContext(BaseModel):
    """Calendar facts used to flavour a day's morning copy."""

    model_config = ConfigDict(frozen=True)

    season: str
    solar_term: str | None = None
    festival: str | None = None
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    weekday: str
    formatted_date: str

    @property
    def keywords(self) -> list[str]:
        """Season, solar term and festival, in that order, when present."""
        return [
            value
            for value in (self.season, self.solar_term, self.festival)
            if value
        ]


class ImageOption(BaseModel):
    id: str
    url: str
    title: str | None = None
    description: str | None = None


class MorningContent(BaseModel):
    morning_copies: list[str]


class DateItem(BaseModel):
    """One generated day in a morning batch."""

    date: str
    context: DateContext
    content: MorningContent
    image_options: list[ImageOption] = Field(default_factory=list)
    used_fallback: bool = False


class CopiesContent(BaseModel):
    copies: list[str]
    quote_index: int = -1


class GenerateRequest(BaseModel):
    """Body of ``POST /generate``.

    ``dates`` is required for ``morning``; ``count`` and ``sub_type`` apply to
    the copies kinds. The console's camelCase ``subType`` is accepted too.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: str = "morning"
    dates: list[str] | None = None
    count: int | None = None
    sub_type: str | None = Field(
        default=None, validation_alias=AliasChoices("sub_type", "subType")
    )


class GenerateResponse(BaseModel):
    """Successful generation. Routes serialize it with ``exclude_none``."""

    success: bool = True
    type: str
    sub_type: str | None = None
    data: list[DateItem] | None = None
    content: CopiesContent | None = None


class GenerationErrorResponse(BaseModel):
    success: bool = False
    error: str
    error_code: str
    correlation_id: str | None = None
