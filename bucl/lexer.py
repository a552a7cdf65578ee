"""BUCL lexer — scans source text into indented lines of tokens."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------

class TokenType(Enum):
    VARIABLE = auto()   # {name}, may contain nested {..}
    QUOTED = auto()     # "text", escapes already resolved
    BARE = auto()       # any other word, number or operator


ESCAPES: dict[str, str] = {
    '"': '"',
    "n": "\n",
    "t": "\t",
    "\\": "\\",
}


# ---------------------------------------------------------------------------
# Token / Line dataclasses
# ---------------------------------------------------------------------------

@dataclass
class Token:
    type: TokenType
    value: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


@dataclass
class Line:
    """One non-blank, non-comment source line."""
    indent: int
    tokens: list[Token] = field(default_factory=list)
    number: int = 0


def scan_braced(text: str, pos: int) -> tuple[str, int, bool]:
    """Read a ``{...}`` span starting just after the opening brace.

    Nested braces are kept in the returned name. Returns
    ``(name, next_pos, closed)``; ``closed`` is False when the text ran
    out before the matching ``}``.
    """
    depth = 1
    chars: list[str] = []
    while pos < len(text):
        ch = text[pos]
        pos += 1
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return "".join(chars), pos, True
        chars.append(ch)
    return "".join(chars), pos, False


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

class Lexer:
    """Splits BUCL source into Line objects. Never raises."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.text: str = ""
        self.pos: int = 0
        self.end: int = 0
        self.line: int = 1

    # -- Character-level helpers -------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of line."""
        if self.pos < self.end:
            return self.text[self.pos]
        return ""

    def advance(self) -> str:
        ch = self._current()
        self.pos += 1
        return ch

    # -- Main entry points -------------------------------------------------

    def tokenize(self) -> list[Line]:
        """Scan the entire source, skipping blank and comment lines."""
        lines: list[Line] = []
        for number, raw in enumerate(self.source.split("\n"), start=1):
            if raw.endswith("\r"):
                raw = raw[:-1]
            line = self.tokenize_line(raw, number)
            if line is not None:
                lines.append(line)
        return lines

    def tokenize_line(self, raw: str, number: int = 1) -> Line | None:
        """Tokenize one raw line; None for blank and ``#`` comment lines."""
        indent = len(raw) - len(raw.lstrip(" \t"))
        content = raw.strip()
        if not content or content.startswith("#"):
            return None

        self.text = raw
        self.line = number
        self.pos = len(raw) - len(raw.lstrip())
        self.end = self.pos + len(content)

        tokens: list[Token] = []
        while self.pos < self.end:
            ch = self._current()

            if ch.isspace():
                self.advance()
                continue

            if ch == "{":
                tokens.append(self._read_variable())
                continue

            if ch == '"':
                tokens.append(self._read_quoted())
                continue

            tokens.append(self._read_bare())

        return Line(indent, tokens, number)

    # -- Token readers -----------------------------------------------------

    def _read_variable(self) -> Token:
        column = self.pos + 1
        name, self.pos, closed = scan_braced(self.text[:self.end], self.pos + 1)
        if not closed:
            # Dangling brace at end of line: literal text, not an error.
            return Token(TokenType.BARE, "{" + name, self.line, column)
        return Token(TokenType.VARIABLE, name, self.line, column)

    def _read_quoted(self) -> Token:
        column = self.pos + 1
        self.advance()  # consume opening "

        chars: list[str] = []
        while self.pos < self.end:
            ch = self.advance()
            if ch == '"':
                break
            if ch == "\\":
                if self.pos >= self.end:
                    break
                nxt = self.advance()
                if nxt in ESCAPES:
                    chars.append(ESCAPES[nxt])
                else:
                    chars.append("\\" + nxt)
                continue
            chars.append(ch)

        return Token(TokenType.QUOTED, "".join(chars), self.line, column)

    def _read_bare(self) -> Token:
        column = self.pos + 1
        start = self.pos
        while self.pos < self.end and not self._current().isspace():
            self.advance()
        return Token(TokenType.BARE, self.text[start:self.pos], self.line, column)
