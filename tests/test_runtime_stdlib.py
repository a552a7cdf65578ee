"""Tests for the function scripts shipped in bucl_runtime/functions/."""

import pytest

from bucl.parser import parse_source
from bucl_runtime.config import DEFAULTS
from bucl_runtime.evaluator import Evaluator
from bucl_runtime.registry import build_registry


def execute(source: str) -> Evaluator:
    ev = Evaluator(build_registry(config=DEFAULTS), config=DEFAULTS)
    ev.run(parse_source(source))
    return ev


def var(source: str, name: str) -> str:
    return execute(source).variables.lookup(name)


# ---------------------------------------------------------------------------
# reverse
# ---------------------------------------------------------------------------

class TestReverse:
    def test_single_string(self):
        assert var('{r} reverse "stressed"', "r") == "desserts"

    def test_joins_arguments_first(self):
        assert var('{r} reverse "abc" "de"', "r") == "edcba"

    def test_empty(self):
        assert var('{r} reverse ""', "r") == ""

    def test_caller_loop_variable_survives(self):
        ev = execute('{r} repeat 2\n\t{x} reverse "ab"')
        assert ev.variables.get("r/index") == "2"
        assert ev.variables.get("x") == "ba"


# ---------------------------------------------------------------------------
# explode / implode
# ---------------------------------------------------------------------------

class TestExplode:
    def test_splits(self):
        ev = execute('{parts} explode "," "a,b,c"')
        store = ev.variables
        assert store.get("parts/count") == "3"
        assert store.elements("parts") == ["a", "b", "c"]
        assert store.get("parts") == "abc"

    def test_multi_character_separator(self):
        ev = execute('{parts} explode ", " "red, green"')
        assert ev.variables.elements("parts") == ["red", "green"]

    def test_no_separator_present(self):
        ev = execute('{parts} explode "," "alone"')
        assert ev.variables.get("parts/count") == "1"
        assert ev.variables.get("parts/0") == "alone"

    def test_empty_pieces_are_kept(self):
        ev = execute('{parts} explode "," "a,,b,"')
        assert ev.variables.elements("parts") == ["a", "", "b", ""]

    def test_result_expands_as_array(self):
        ev = execute('{parts} explode "." "www.example.com"\n{n} count {parts}')
        assert ev.variables.get("n") == "3"


class TestImplode:
    def test_joins_array(self):
        source = '{colors} = "red" "green" "blue"\n{s} implode ", " {colors}'
        assert var(source, "s") == "red, green, blue"

    def test_single_item(self):
        assert var('{s} implode "-" "only"', "s") == "only"

    def test_no_items(self):
        assert var('{s} implode "-"', "s") == ""

    def test_round_trip_with_explode(self):
        source = '{p} explode "/" "usr/local/bin"\n{s} implode "/" {p}'
        assert var(source, "s") == "usr/local/bin"


# ---------------------------------------------------------------------------
# maxlength / slice
# ---------------------------------------------------------------------------

class TestMaxLength:
    def test_longest(self):
        assert var('{m} maxlength "Alice" "Bob" "Charlie"', "m") == "7"

    def test_numeric_comparison(self):
        assert var('{m} maxlength "abcdefghij" "abc"', "m") == "10"

    def test_no_arguments(self):
        assert var("{m} maxlength", "m") == "0"


class TestSlice:
    @pytest.mark.parametrize("start,end,expected", [
        ("1", "3", "b c"),
        ("0", "4", "a b c d"),
        ("1", "-1", "b c"),
        ("-2", "4", "c d"),
        ("3", "1", ""),
    ])
    def test_bounds(self, start, end, expected):
        source = f'{{s}} slice {start} {end} "a" "b" "c" "d"'
        assert var(source, "s") == expected

    def test_array_argument(self):
        source = '{p} explode "." "www.example.com"\n{s} slice 1 3 {p}'
        assert var(source, "s") == "example com"
