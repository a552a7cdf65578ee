"""Arithmetic for the ``math`` built-in.

Recursive-descent evaluation of ``+ - * / %`` with unary sign and
parentheses.  Numbers are runs of digits and dots; there are no
variables, functions or exponents.
"""

from __future__ import annotations

import math
from decimal import Decimal


class ExpressionError(ValueError):
    """Raised for malformed expressions; the message has no prefix."""


class ExpressionParser:
    """Evaluates one expression string to a float."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos: int = 0

    # -- Character-level helpers -------------------------------------------

    def _current(self) -> str:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def advance(self) -> str:
        ch = self._current()
        self.pos += 1
        return ch

    def skip_whitespace(self) -> None:
        while self._current() and self._current().isspace():
            self.pos += 1

    # -- Grammar -----------------------------------------------------------

    def evaluate(self) -> float:
        value = self.parse_additive()
        self.skip_whitespace()
        if self._current():
            raise ExpressionError(f"unexpected character '{self._current()}'")
        return value

    def parse_additive(self) -> float:
        left = self.parse_multiplicative()
        while True:
            self.skip_whitespace()
            op = self._current()
            if op == "+":
                self.advance()
                left += self.parse_multiplicative()
            elif op == "-":
                self.advance()
                left -= self.parse_multiplicative()
            else:
                return left

    def parse_multiplicative(self) -> float:
        left = self.parse_unary()
        while True:
            self.skip_whitespace()
            op = self._current()
            if op == "*":
                self.advance()
                left *= self.parse_unary()
            elif op == "/":
                self.advance()
                right = self.parse_unary()
                if right == 0.0:
                    raise ExpressionError("division by zero")
                left /= right
            elif op == "%":
                self.advance()
                right = self.parse_unary()
                if right == 0.0:
                    raise ExpressionError("modulo by zero")
                left = math.fmod(left, right) if math.isfinite(left) else math.nan
            else:
                return left

    def parse_unary(self) -> float:
        self.skip_whitespace()
        if self._current() == "-":
            self.advance()
            return -self.parse_primary()
        if self._current() == "+":
            self.advance()
        return self.parse_primary()

    def parse_primary(self) -> float:
        self.skip_whitespace()
        if self._current() == "(":
            self.advance()
            value = self.parse_additive()
            self.skip_whitespace()
            closing = self.advance()
            if closing != ")":
                got = f"'{closing}'" if closing else "end of expression"
                raise ExpressionError(f"expected ')', got {got}")
            return value

        start = self.pos
        while self._current() and (self._current() in "0123456789."):
            self.pos += 1
        literal = self.text[start:self.pos]

        if not literal:
            got = f"'{self._current()}'" if self._current() else "end of expression"
            raise ExpressionError(f"expected number, got {got}")
        if literal.count(".") > 1 or literal == ".":
            raise ExpressionError(f"invalid number literal '{literal}'")
        return float(literal)


def format_number(value: float) -> str:
    """Render a result in plain decimal notation, integers without a fraction."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def evaluate(expression: str) -> float:
    return ExpressionParser(expression).evaluate()
