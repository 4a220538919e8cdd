"""The content kinds the console can generate, and how each is handled."""

from __future__ import annotations

from dataclasses import dataclass

from services.generation.exceptions import InvalidGenerationRequest
from services.generation.shapes import CopiesWithIndex, ExpectedShape, FixedArrayOfN


MORNING_COPY_COUNT = 5
DEFAULT_COUNT = 5


@dataclass(frozen=True, slots=True)
class GenerationKind:
    """Shape, retry policy and count bounds for one type/sub-type pair.

    ``retry`` kinds go through the retry policy; the others get a single
    attempt and fall back to canned copy on a parse failure.
    """

    type: str
    sub_type: str | None
    shape: ExpectedShape
    retry: bool
    label: str
    min_count: int = 3
    max_count: int = 10
    date_scoped: bool = False

    @property
    def category(self) -> str:
        """History key, e.g. ``quote_toddler`` or ``toddler``."""
        return self.type if self.sub_type is None else f"{self.type}_{self.sub_type}"

    def resolve_count(self, count: int | None) -> int:
        if count is None:
            return DEFAULT_COUNT
        if isinstance(count, bool) or not self.min_count <= count <= self.max_count:
            raise InvalidGenerationRequest(
                f"count for {self.category} must be between "
                f"{self.min_count} and {self.max_count}"
            )
        return count


_COPIES = CopiesWithIndex()

KINDS: dict[tuple[str, str | None], GenerationKind] = {
    (kind.type, kind.sub_type): kind
    for kind in (
        GenerationKind(
            "morning",
            None,
            FixedArrayOfN("morning_copies", MORNING_COPY_COUNT),
            retry=False,
            label="早安语",
            date_scoped=True,
        ),
        GenerationKind("toddler", None, _COPIES, True, "幼儿段文案", max_count=20),
        GenerationKind("primary", None, _COPIES, True, "小学段文案", max_count=20),
        GenerationKind("quote", "morning", _COPIES, True, "名人名言（早安语场景）"),
        GenerationKind("quote", "toddler", _COPIES, True, "名人名言（幼儿段场景）"),
        GenerationKind("quote", "primary", _COPIES, True, "名人名言（小学段场景）"),
        GenerationKind("picturebook", "minimalist", _COPIES, True, "绘本语言（极简主义）"),
        GenerationKind("picturebook", "childview", _COPIES, True, "绘本语言（儿童视角）"),
        GenerationKind("picturebook", "philosophy", _COPIES, True, "绘本语言（哲理留白）"),
        GenerationKind("picturebook", "nature", _COPIES, True, "绘本语言（自然隐喻）"),
    )
}

DEFAULT_SUB_TYPES = {"quote": "morning", "picturebook": "minimalist"}

GENERATION_TYPES = tuple(dict.fromkeys(type_ for type_, _ in KINDS))


def resolve_kind(type_: str, sub_type: str | None = None) -> GenerationKind:
    """Look up a kind, applying the default sub-type where one exists."""
    if type_ not in GENERATION_TYPES:
        raise InvalidGenerationRequest(
            f"Unknown generation type {type_!r}; "
            f"expected one of {', '.join(GENERATION_TYPES)}"
        )
    if type_ in DEFAULT_SUB_TYPES:
        key = (type_, sub_type or DEFAULT_SUB_TYPES[type_])
    elif sub_type:
        raise InvalidGenerationRequest(f"{type_} does not take a sub_type")
    else:
        key = (type_, None)

    kind = KINDS.get(key)
    if kind is None:
        raise InvalidGenerationRequest(f"Unknown sub_type {sub_type!r} for {type_}")
    return kind


def categories() -> list[str]:
    return [kind.category for kind in KINDS.values()]
