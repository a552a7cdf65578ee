"""BUCL AST node definitions.

Every node is a Python dataclass carrying ``line`` and ``col`` for
source-location tracking.  A statement owns its parameters, its
indented block and its ``elseif``/``else`` continuation, so the tree
never shares nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass
class Node:
    """Base class for every AST node."""
    line: int = 0
    col: int = 0


# ── Program ─────────────────────────────────────────────────────────────────

@dataclass
class Program(Node):
    body: list[Statement] = field(default_factory=list)


# ── Parameters ──────────────────────────────────────────────────────────────

@dataclass
class QuotedParam(Node):
    """``"text"``; interpolated each time the statement runs."""
    text: str = ""


@dataclass
class VariableParam(Node):
    """``{name}``; the name may itself contain ``{..}`` references."""
    name: str = ""


@dataclass
class BareParam(Node):
    text: str = ""


Param = QuotedParam | VariableParam | BareParam


# ── Statements ──────────────────────────────────────────────────────────────

@dataclass
class Statement(Node):
    target: str | None = None
    function: str = ""
    args: list[Param] = field(default_factory=list)
    block: list[Statement] | None = None
    continuation: Statement | None = None
