"""Block-taking built-ins: if / elseif / else, each, repeat."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bucl_runtime.exceptions import BuclRuntimeError
from bucl_runtime.types import parse_float, parse_index

if TYPE_CHECKING:
    from bucl_runtime.evaluator import Evaluator

ORDERING_OPERATORS = (">", "<", ">=", "<=")


def evaluate_condition(lhs: str, op: str, rhs: str) -> bool:
    """``lhs op rhs``; ordering is numeric when both sides are numbers."""
    if op == "=":
        return lhs == rhs
    if op == "!=":
        return lhs != rhs
    if op not in ORDERING_OPERATORS:
        return False

    left, right = parse_float(lhs), parse_float(rhs)
    if left is None or right is None:
        left, right = lhs, rhs
    if op == ">":
        return left > right
    if op == "<":
        return left < right
    if op == ">=":
        return left >= right
    return left <= right


def handle_if(ev: "Evaluator", target, args, block, continuation):
    """Shared by ``if`` and ``elseif``; a false condition falls through
    to the chained ``elseif``/``else`` statement."""
    condition = len(args) == 3 and evaluate_condition(*args)
    if condition:
        if block:
            ev.evaluate_statements(block)
    elif continuation is not None:
        ev.evaluate_statement(continuation)
    return None


def handle_else(ev: "Evaluator", target, args, block, continuation):
    if block:
        ev.evaluate_statements(block)
    return None


def handle_each(ev: "Evaluator", target, args, block, continuation):
    """Run the block once per argument.

    ``{e}`` holds the item count, ``{e/0}``.. the items; each pass sets
    ``{e/index}`` (from 0) and ``{e/value}``.  ``e`` is the default
    prefix when no target is written.
    """
    prefix = target if target is not None else "e"
    store = ev.variables
    count = str(len(args))

    store.set(prefix, count)
    store.put(f"{prefix}/count", count)
    store.put(f"{prefix}/length", str(sum(len(item) for item in args)))
    for i, item in enumerate(args):
        store.put(f"{prefix}/{i}", item)

    if block:
        for i, item in enumerate(args):
            store.put(f"{prefix}/index", str(i))
            store.put(f"{prefix}/value", item)
            ev.evaluate_statements(block)
    return None


def handle_repeat(ev: "Evaluator", target, args, block, continuation):
    """Run the block ``count`` times with ``{r/index}`` counting from 1."""
    prefix = target if target is not None else "r"
    text = ev.named_arg("count")
    if text is None:
        if not args:
            raise BuclRuntimeError("repeat: missing count argument")
        text = args[0]
    count = parse_index(text)
    if count is None:
        raise BuclRuntimeError(f"repeat: '{text}' is not a valid count")

    store = ev.variables
    store.set(prefix, str(count))
    store.put(f"{prefix}/count", str(count))

    if block:
        for i in range(1, count + 1):
            store.put(f"{prefix}/index", str(i))
            ev.evaluate_statements(block)
    return None
