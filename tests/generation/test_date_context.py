"""Tests for date context lookup."""

from __future__ import annotations

import pytest

from services.generation.date_context import get_date_context, season_for_month
from services.generation.exceptions import InvalidDateError


class TestDateContext:
    def test_plain_day(self) -> None:
        ctx = get_date_context("2024-01-15")

        assert ctx.season == "冬季"
        assert ctx.solar_term is None
        assert ctx.festival is None
        assert (ctx.month, ctx.day) == (1, 15)
        assert ctx.weekday == "周一"
        assert ctx.formatted_date == "2024年1月15日"

    def test_festival_and_weekday(self) -> None:
        ctx = get_date_context("2024-10-01")

        assert ctx.festival == "国庆节"
        assert ctx.season == "秋季"
        assert ctx.weekday == "周二"

    def test_sunday(self) -> None:
        assert get_date_context("2024-06-02").weekday == "周日"

    @pytest.mark.parametrize(
        ("date_string", "term"),
        [
            ("2024-01-05", "小寒"),
            ("2024-01-22", "大寒"),
            ("2024-02-04", "立春"),
            ("2024-03-20", "春分"),
            ("2024-06-22", "夏至"),
            ("2024-09-24", "秋分"),
            ("2024-12-21", "冬至"),
            ("2024-12-24", None),
        ],
    )
    def test_solar_term_windows(self, date_string: str, term: str | None) -> None:
        assert get_date_context(date_string).solar_term == term

    def test_keywords_in_order(self) -> None:
        ctx = get_date_context("2024-01-01")
        assert ctx.keywords == ["冬季", "元旦"]

    @pytest.mark.parametrize(
        ("month", "season"), [(2, "冬季"), (3, "春季"), (8, "夏季"), (11, "秋季"), (12, "冬季")]
    )
    def test_season_for_month(self, month: int, season: str) -> None:
        assert season_for_month(month) == season

    @pytest.mark.parametrize(
        "date_string", ["", "2024/01/01", "2024-13-01", "2023-02-29", "tomorrow", "2024-1"]
    )
    def test_invalid_dates(self, date_string: str) -> None:
        with pytest.raises(InvalidDateError):
            get_date_context(date_string)
