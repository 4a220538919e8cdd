"""Season, solar term and festival lookup for a calendar date."""

from __future__ import annotations

from datetime import date

from schemas.generate import DateContext
from services.generation.exceptions import InvalidDateError


WEEKDAYS = ("周一", "周二", "周三", "周四", "周五", "周六", "周日")

# (month, first_day, last_day, name); fixed windows, not astronomical dates
SOLAR_TERMS = (
    (1, 5, 7, "小寒"),
    (1, 20, 22, "大寒"),
    (2, 3, 5, "立春"),
    (3, 20, 22, "春分"),
    (6, 21, 22, "夏至"),
    (9, 22, 24, "秋分"),
    (12, 21, 23, "冬至"),
)

FESTIVALS = {
    (1, 1): "元旦",
    (2, 14): "情人节",
    (3, 8): "妇女节",
    (5, 1): "劳动节",
    (6, 1): "儿童节",
    (10, 1): "国庆节",
    (12, 25): "圣诞节",
}


def parse_date(date_string: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a calendar date."""
    parts = date_string.strip().split("-") if isinstance(date_string, str) else []
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise InvalidDateError(f"Invalid date format: {date_string!r}")
    try:
        return date(int(parts[0]), int(parts[1]), int(parts[2]))
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date value: {date_string!r}") from exc


def season_for_month(month: int) -> str:
    if 3 <= month <= 5:
        return "春季"
    if 6 <= month <= 8:
        return "夏季"
    if 9 <= month <= 11:
        return "秋季"
    return "冬季"


def solar_term_for(month: int, day: int) -> str | None:
    for term_month, first, last, name in SOLAR_TERMS:
        if month == term_month and first <= day <= last:
            return name
    return None


def get_date_context(date_string: str) -> DateContext:
    parsed = parse_date(date_string)
    return DateContext(
        season=season_for_month(parsed.month),
        solar_term=solar_term_for(parsed.month, parsed.day),
        festival=FESTIVALS.get((parsed.month, parsed.day)),
        month=parsed.month,
        day=parsed.day,
        weekday=WEEKDAYS[parsed.weekday()],
        formatted_date=f"{parsed.year}年{parsed.month}月{parsed.day}日",
    )
