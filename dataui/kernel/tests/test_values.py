"""
DataUI Values -- Classification, Stringification and Ordering Tests
"""

import enum
import math
from datetime import date, datetime

import pytest

from dataui.kernel.values import (
    DATE,
    MISSING,
    NUMBER,
    STRING,
    classify,
    coerce,
    get_field,
    matches,
    record_values,
    sort_key,
    to_text,
)


class Level(enum.Enum):
    BEGINNER = "beginner"
    ADVANCED = "advanced"


class TestClassify:
    @pytest.mark.parametrize(
        "value,kind",
        [
            (None, MISSING),
            (math.nan, MISSING),
            (3, NUMBER),
            (2.5, NUMBER),
            (True, STRING),
            ("x", STRING),
            (date(2024, 1, 1), DATE),
            (datetime(2024, 1, 1, 9, 30), DATE),
            (Level.ADVANCED, STRING),
        ],
    )
    def test_variants(self, value, kind):
        assert classify(value) == kind


class TestToText:
    def test_missing_is_empty(self):
        assert to_text(None) == ""

    def test_integral_float_drops_fraction(self):
        assert to_text(3.0) == "3"
        assert to_text(3.25) == "3.25"

    def test_bools(self):
        assert to_text(True) == "true"
        assert to_text(False) == "false"

    def test_dates_iso(self):
        assert to_text(date(2024, 3, 2)) == "2024-03-02"

    def test_enum_uses_value(self):
        assert to_text(Level.BEGINNER) == "beginner"


class TestMatches:
    def test_case_insensitive(self):
        assert matches("Alice", "ALI")

    def test_empty_needle_matches_missing(self):
        assert matches(None, "")

    def test_missing_never_matches_nonempty(self):
        assert not matches(None, "n")
        assert not matches(None, "none")

    def test_number_against_text(self):
        assert matches(1024, "02")
        assert not matches(1024, "abc")


class TestSortKey:
    def test_rank_order(self):
        keys = [sort_key(None), sort_key("a"), sort_key(date(2020, 1, 1)), sort_key(1)]
        assert sorted(keys) == [sort_key(1), sort_key(date(2020, 1, 1)), sort_key("a"), sort_key(None)]

    def test_int_and_float_compare(self):
        assert sort_key(2) < sort_key(2.5) < sort_key(3)

    def test_enum_sorts_by_value(self):
        assert sort_key(Level.ADVANCED) < sort_key(Level.BEGINNER)


class TestCoerce:
    @pytest.mark.parametrize(
        "value, kind, expected",
        [
            ("10", "number", 10),
            (" 2.5 ", "number", 2.5),
            ("2.0", "number", 2),
            ("ten", "number", "ten"),
            ("10", "text", "10"),
            (7, "number", 7),
            (None, "date", None),
            ("2024-09-02", "date", datetime(2024, 9, 2)),
            ("soon", "date", "soon"),
        ],
    )
    def test_coerce(self, value, kind, expected):
        assert coerce(value, kind) == expected


class TestFieldAccess:
    def test_absent_field_is_missing(self):
        assert get_field({"a": 1}, "b") is None

    def test_non_mapping_record(self):
        assert get_field(42, "a") is None
        assert record_values(42) == []

    def test_record_values(self):
        assert record_values({"a": 1, "b": "x"}) == [1, "x"]
