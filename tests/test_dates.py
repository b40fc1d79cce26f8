"""Tests for partial date parsing and arithmetic."""

from datetime import date

import pytest

from lineage.dates import PartialDate, age_at, compare_dates, months_between, parse_partial_date, parse_year


class TestParsePartialDate:
    """Stored ISO dates and imported genealogical strings."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("1254", PartialDate(1254)),
            ("1254-03", PartialDate(1254, 3)),
            ("1254-03-15", PartialDate(1254, 3, 15)),
            ("1254-00-00", PartialDate(1254)),
            ("25 NOV 1254", PartialDate(1254, 11, 25)),
            ("NOV 1254", PartialDate(1254, 11)),
            ("ABT 1254", PartialDate(1254)),
            ("circa 1254", PartialDate(1254)),
            ("(1254?)", PartialDate(1254)),
            ("November 17, 1254", PartialDate(1254, 11, 17)),
            ("1256-02-29", PartialDate(1256, 2, 29)),
            ("Nov.17,1254", PartialDate(1254, 11, 17)),
            (1254, PartialDate(1254)),
            (date(1254, 3, 1), PartialDate(1254, 3, 1)),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert parse_partial_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "sometime", "1254-13", "32 JAN 1254", "1254-02-31", "31 APR 1254", "FOO 1254", True, 12.5])
    def test_unparseable_gives_none(self, value):
        assert parse_partial_date(value) is None

    def test_partial_date_passes_through(self):
        d = PartialDate(1254, 6)
        assert parse_partial_date(d) is d

    def test_parse_year(self):
        assert parse_year("25 NOV 1254") == 1254
        assert parse_year("unknown") is None


class TestPartialDate:
    def test_iso_text(self):
        assert str(PartialDate(1254)) == "1254"
        assert str(PartialDate(1254, 3)) == "1254-03"
        assert str(PartialDate(987, 3, 5)) == "0987-03-05"

    def test_precision(self):
        assert PartialDate(1254).precision == "year"
        assert PartialDate(1254, 3).precision == "month"
        assert PartialDate(1254, 3, 5).precision == "day"


class TestDateArithmetic:
    """Comparisons only use the precision both dates carry."""

    def test_compare_at_common_precision(self):
        assert compare_dates(PartialDate(1254), PartialDate(1254, 6, 1)) == 0
        assert compare_dates(PartialDate(1254, 3), PartialDate(1254, 4)) == -1
        assert compare_dates(PartialDate(1255), PartialDate(1254, 12, 31)) == 1
        assert compare_dates(PartialDate(1254, 3, 2), PartialDate(1254, 3, 1)) == 1

    def test_months_between(self):
        assert months_between(PartialDate(1250, 11), PartialDate(1251, 2)) == 3
        assert months_between(PartialDate(1250), PartialDate(1251)) == 12
        assert months_between(PartialDate(1251, 2), PartialDate(1250, 11)) == -3

    def test_age_at(self):
        birth = PartialDate(1240, 5, 10)
        assert age_at(birth, PartialDate(1253, 5, 9)) == 12
        assert age_at(birth, PartialDate(1253, 5, 10)) == 13
        assert age_at(birth, PartialDate(1253, 4)) == 12
        assert age_at(PartialDate(1240), PartialDate(1253, 1, 1)) == 13
