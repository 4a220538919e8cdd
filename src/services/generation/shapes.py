"""Expected response shapes and the validated results they produce.

A shape knows two things: how to validate a decoded JSON payload into an
immutable result model, and how to pull its fields straight out of raw text
when no JSON decoding strategy worked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from services.generation.recovery import (
    QUOTE_INDEX_KEYS,
    RecoveryMiss,
    find_int_field,
    read_array_entries,
)


# quote_index value meaning "none of the copies is a quotation"
NO_QUOTE_INDEX = -1


class ShapeMismatch(ValueError):
    """Decoded JSON that is not the object a shape expects."""


class FixedArrayResult(BaseModel):
    """Exactly ``length`` strings read from one named array field."""

    model_config = ConfigDict(frozen=True)

    field_name: str
    entries: tuple[StrictStr, ...]

    @field_validator("entries")
    @classmethod
    def _check_length(
        cls, value: tuple[str, ...], info: ValidationInfo
    ) -> tuple[str, ...]:
        expected = (info.context or {}).get("expected_length")
        if expected is not None and len(value) != expected:
            raise ValueError(f"expected exactly {expected} entries, got {len(value)}")
        return value


class CopiesWithIndexResult(BaseModel):
    """Generated copies plus the position of the quotation among them."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    copies: tuple[StrictStr, ...] = Field(min_length=1)
    quote_index: StrictInt = Field(
        validation_alias=AliasChoices("quote_index", "quoteIndex")
    )

    @model_validator(mode="after")
    def _check_quote_index(self) -> CopiesWithIndexResult:
        if self.quote_index == NO_QUOTE_INDEX:
            return self
        if not 0 <= self.quote_index < len(self.copies):
            raise ValueError(
                f"quote_index {self.quote_index} outside 0..{len(self.copies) - 1}"
            )
        return self


@dataclass(frozen=True, slots=True)
class FixedArrayOfN:
    """An object whose ``field`` holds exactly ``length`` strings."""

    field: str
    length: int

    name: ClassVar[str] = "fixed_array"

    def validate(self, payload: Any) -> FixedArrayResult:
        if not isinstance(payload, dict):
            raise ShapeMismatch(f"expected an object, got {type(payload).__name__}")
        if self.field not in payload:
            raise ShapeMismatch(f"missing field {self.field!r}")
        return FixedArrayResult.model_validate(
            {"field_name": self.field, "entries": payload[self.field]},
            context={"expected_length": self.length},
        )

    def recover_fields(self, raw_text: str) -> dict[str, Any]:
        entries = read_array_entries(raw_text, self.field)
        if not entries:
            raise RecoveryMiss(f"no complete {self.field!r} entries")
        return {self.field: entries}


@dataclass(frozen=True, slots=True)
class CopiesWithIndex:
    """An object with a non-empty ``copies`` list and a ``quote_index``."""

    name: ClassVar[str] = "copies_with_index"

    def validate(self, payload: Any) -> CopiesWithIndexResult:
        if not isinstance(payload, dict):
            raise ShapeMismatch(f"expected an object, got {type(payload).__name__}")
        return CopiesWithIndexResult.model_validate(payload)

    def recover_fields(self, raw_text: str) -> dict[str, Any]:
        copies = read_array_entries(raw_text, "copies")
        if not copies:
            raise RecoveryMiss("no complete 'copies' entries")
        quote_index = find_int_field(raw_text, QUOTE_INDEX_KEYS)
        if quote_index is None:
            quote_index = NO_QUOTE_INDEX
        return {"copies": copies, "quote_index": quote_index}


ExpectedShape = FixedArrayOfN | CopiesWithIndex
