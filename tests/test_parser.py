"""Tests for BUCL parser — statements, blocks and if chains."""

import pytest

from bucl.lexer import Lexer
from bucl.parser import Parser, parse_source
from bucl.errors import ParseError
from bucl.ast_nodes import (
    Program,
    Statement,
    QuotedParam,
    VariableParam,
    BareParam,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse(source: str) -> Program:
    return Parser(Lexer(source).tokenize()).parse()


def first(source: str) -> Statement:
    return parse(source).body[0]


# ---------------------------------------------------------------------------
# Single statements
# ---------------------------------------------------------------------------

class TestStatements:
    def test_empty_program(self):
        assert parse("").body == []

    def test_comment_only_program(self):
        assert parse("# nothing here\n\n").body == []

    def test_function_without_target(self):
        stmt = first("echo hi")
        assert stmt.target is None
        assert stmt.function == "echo"
        assert stmt.args == [BareParam(text="hi", line=1, col=6)]

    def test_target_function_and_params(self):
        stmt = first('{x} foo "a" {y} 42')
        assert stmt.target == "x"
        assert stmt.function == "foo"
        assert [type(p) for p in stmt.args] == [QuotedParam, VariableParam, BareParam]
        assert stmt.args[0].text == "a"
        assert stmt.args[1].name == "y"
        assert stmt.args[2].text == "42"

    def test_nested_target_kept_raw(self):
        stmt = first('{return/{i}} = "x"')
        assert stmt.target == "return/{i}"
        assert stmt.function == "="

    def test_function_only(self):
        stmt = first("echo")
        assert stmt.function == "echo"
        assert stmt.args == []

    def test_statement_location(self):
        stmt = first("\n\n{x}  =  \"1\"")
        assert (stmt.line, stmt.col) == (3, 1)
        assert (stmt.args[0].line, stmt.args[0].col) == (3, 9)

    def test_no_block_and_no_continuation(self):
        stmt = first("echo hi")
        assert stmt.block is None
        assert stmt.continuation is None


# ---------------------------------------------------------------------------
# Line errors
# ---------------------------------------------------------------------------

class TestLineErrors:
    def test_target_without_function(self):
        with pytest.raises(ParseError, match="expected function name after '{x}'"):
            parse("{x}")

    def test_target_followed_by_string(self):
        with pytest.raises(ParseError, match="expected function name after '{x}'"):
            parse('{x} "value"')

    def test_target_followed_by_variable(self):
        with pytest.raises(ParseError, match="expected function name"):
            parse("{x} {y}")

    def test_line_starting_with_string(self):
        with pytest.raises(ParseError, match="cannot start with a string literal"):
            parse('"hello" echo')

    def test_error_carries_location(self):
        with pytest.raises(ParseError) as exc_info:
            parse('echo ok\n  "bad"')
        assert exc_info.value.line == 2


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

class TestBlocks:
    def test_block_attached_to_previous_statement(self):
        program = parse("{r} repeat 3\n    echo a\n    echo b\necho c")
        assert len(program.body) == 2
        repeat = program.body[0]
        assert [s.function for s in repeat.block] == ["echo", "echo"]
        assert program.body[1].block is None

    def test_tab_indented_block(self):
        stmt = first("{r} repeat 2\n\techo a")
        assert stmt.block[0].function == "echo"

    def test_nested_blocks(self):
        stmt = first("{r} repeat 2\n  {e} each a b\n    echo {e/value}\n  echo done")
        assert [s.function for s in stmt.block] == ["each", "echo"]
        assert stmt.block[0].block[0].function == "echo"

    def test_block_indent_is_set_by_first_line(self):
        stmt = first("{r} repeat 2\n      echo a\n      echo b")
        assert len(stmt.block) == 2

    def test_dedent_closes_several_blocks(self):
        program = parse("{r} repeat 2\n  {e} each a\n    echo x\necho y")
        assert len(program.body) == 2
        assert program.body[1].function == "echo"

    def test_deeper_line_opens_nested_block(self):
        stmt = first("{r} repeat 2\n    echo a\n        echo b\n")
        assert stmt.block[0].block[0].args[0].text == "b"

    def test_unexpected_indentation_between_levels(self):
        with pytest.raises(ParseError, match="expected 0 spaces/tabs, got 2"):
            parse("{r} repeat 2\n    echo a\n  echo b")

    def test_indented_first_line(self):
        with pytest.raises(ParseError, match="unexpected indentation"):
            parse("    echo hi")

    def test_comments_inside_block_are_ignored(self):
        stmt = first("{r} repeat 2\n    # note\n    echo a\n\n    echo b")
        assert len(stmt.block) == 2


# ---------------------------------------------------------------------------
# if / elseif / else
# ---------------------------------------------------------------------------

class TestConditionals:
    def test_if_with_else(self):
        program = parse('if {a} = "1"\n    echo one\nelse\n    echo other')
        assert len(program.body) == 1
        stmt = program.body[0]
        assert stmt.function == "if"
        assert stmt.continuation.function == "else"
        assert stmt.continuation.block[0].args[0].text == "other"

    def test_elseif_chain(self):
        source = (
            'if {a} = "1"\n'
            "    echo one\n"
            'elseif {a} = "2"\n'
            "    echo two\n"
            "else\n"
            "    echo other\n"
            "echo after"
        )
        program = parse(source)
        assert [s.function for s in program.body] == ["if", "echo"]
        chain = program.body[0]
        assert chain.continuation.function == "elseif"
        assert chain.continuation.continuation.function == "else"
        assert chain.continuation.continuation.continuation is None

    def test_if_without_else(self):
        program = parse('if {a} = "1"\n    echo one\necho after')
        assert program.body[0].continuation is None
        assert program.body[1].function == "echo"

    def test_nested_if_else_binds_to_inner_if(self):
        source = (
            "{r} repeat 1\n"
            '    if {a} = "1"\n'
            "        echo inner\n"
            "    else\n"
            "        echo inner-else\n"
            "echo outer"
        )
        program = parse(source)
        inner_if = program.body[0].block[0]
        assert inner_if.continuation.function == "else"
        assert len(program.body[0].block) == 1

    def test_else_at_other_indent_is_not_a_continuation(self):
        source = (
            'if {a} = "1"\n'
            '    if {b} = "2"\n'
            "        echo both\n"
            "else\n"
            "    echo outer-else"
        )
        stmt = first(source)
        assert stmt.block[0].continuation is None
        assert stmt.continuation.function == "else"

    def test_orphan_else_is_error(self):
        with pytest.raises(ParseError, match="'else' without a matching 'if'"):
            parse("echo a\nelse\n    echo b")

    def test_orphan_elseif_is_error(self):
        with pytest.raises(ParseError, match="'elseif' without a matching 'if'"):
            parse('elseif {a} = "1"')

    def test_repeat_does_not_take_continuation(self):
        with pytest.raises(ParseError):
            parse("{r} repeat 1\n    echo a\nelse\n    echo b")


# ---------------------------------------------------------------------------
# parse_source
# ---------------------------------------------------------------------------

def test_parse_source_matches_parser():
    source = '{x} = "1"\necho {x}'
    assert parse_source(source) == parse(source)
