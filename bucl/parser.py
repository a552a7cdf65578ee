"""BUCL parser — builds a statement tree from indented token lines."""

from __future__ import annotations

from bucl.lexer import Lexer, Line, Token, TokenType
from bucl.errors import ParseError
from bucl.ast_nodes import (
    Program,
    Statement,
    QuotedParam,
    VariableParam,
    BareParam,
)

CONTINUATION_KEYWORDS = ("elseif", "else")
CHAINING_FUNCTIONS = ("if", "elseif")


class Parser:
    """Indentation-driven parser for BUCL.

    Consumes the Line objects produced by the Lexer and produces a
    ``Program`` whose body is the list of top-level statements.  The
    only block signal is indentation: a line indented deeper than the
    statement before it opens that statement's block.
    """

    def __init__(self, lines: list[Line]) -> None:
        self.lines = lines
        self.pos: int = 0

    # -- Navigation helpers ------------------------------------------------

    def current(self) -> Line | None:
        if self.pos < len(self.lines):
            return self.lines[self.pos]
        return None

    def current_indent(self) -> int | None:
        line = self.current()
        return line.indent if line is not None else None

    def advance(self) -> Line:
        line = self.lines[self.pos]
        self.pos += 1
        return line

    def at_continuation(self) -> bool:
        """True when the current line starts with ``elseif`` or ``else``."""
        line = self.current()
        if line is None or not line.tokens:
            return False
        first = line.tokens[0]
        return first.type == TokenType.BARE and first.value in CONTINUATION_KEYWORDS

    # -- Top-level ---------------------------------------------------------

    def parse(self) -> Program:
        body = self.parse_block(0)
        line = self.current()
        if line is not None:
            first = line.tokens[0]
            raise ParseError(
                f"'{first.value}' without a matching 'if'", first.line, first.column
            )
        return Program(body=body)

    # -- Blocks and statements ---------------------------------------------

    def parse_block(self, expected_indent: int) -> list[Statement]:
        """Parse consecutive statements at exactly ``expected_indent``.

        Stops without consuming on end of input, on a shallower line, or
        on an ``elseif``/``else`` line (the enclosing ``if`` owns it).
        """
        statements: list[Statement] = []
        while True:
            indent = self.current_indent()
            if indent is None or indent < expected_indent:
                break
            if indent > expected_indent:
                line = self.current()
                raise ParseError(
                    f"unexpected indentation: expected {expected_indent} "
                    f"spaces/tabs, got {indent}",
                    line.number,
                    indent + 1,
                )
            if self.at_continuation():
                break
            statements.append(self.parse_statement(expected_indent))
        return statements

    def parse_statement(self, current_indent: int) -> Statement:
        line = self.advance()
        stmt = self.extract_parts(line)

        indent = self.current_indent()
        if indent is not None and indent > current_indent:
            stmt.block = self.parse_block(indent)

        if (
            stmt.function in CHAINING_FUNCTIONS
            and self.at_continuation()
            and self.current_indent() == current_indent
        ):
            stmt.continuation = self.parse_statement(current_indent)

        return stmt

    # -- Line decomposition ------------------------------------------------

    def extract_parts(self, line: Line) -> Statement:
        """Split a line into ``[{target}] function param*``."""
        tokens = line.tokens
        first = tokens[0]
        rest = tokens[1:]
        target: str | None = None

        if first.type == TokenType.VARIABLE:
            if not rest:
                raise ParseError(
                    f"expected function name after '{{{first.value}}}'",
                    first.line,
                    first.column,
                )
            func_tok = rest[0]
            if func_tok.type != TokenType.BARE:
                raise ParseError(
                    f"expected function name after '{{{first.value}}}', "
                    f"got {func_tok.type.name.lower()} {func_tok.value!r}",
                    func_tok.line,
                    func_tok.column,
                )
            target = first.value
            function = func_tok.value
            rest = rest[1:]
        elif first.type == TokenType.QUOTED:
            raise ParseError(
                f'a line cannot start with a string literal: "{first.value}"',
                first.line,
                first.column,
            )
        else:
            function = first.value

        return Statement(
            target=target,
            function=function,
            args=[self._param(tok) for tok in rest],
            line=first.line,
            col=first.column,
        )

    @staticmethod
    def _param(tok: Token):
        if tok.type == TokenType.QUOTED:
            return QuotedParam(text=tok.value, line=tok.line, col=tok.column)
        if tok.type == TokenType.VARIABLE:
            return VariableParam(name=tok.value, line=tok.line, col=tok.column)
        return BareParam(text=tok.value, line=tok.line, col=tok.column)


def parse_source(source: str) -> Program:
    """Tokenize and parse BUCL source text in one step."""
    return Parser(Lexer(source).tokenize()).parse()
