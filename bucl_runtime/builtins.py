"""Built-in operations.

Every handler takes ``(ev, target, args, block, continuation)`` where
``ev`` is the running Evaluator and ``args`` the resolved argument
values.  A returned string is stored at the target by the dispatcher;
None means the handler stored what it needed itself (or has no result).

Higher-level helpers (reverse, explode, implode, maxlength, slice) are
function scripts in ``bucl_runtime/functions/`` rather than handlers.
"""

from __future__ import annotations

import math
import random
import time
from typing import TYPE_CHECKING

from bucl_runtime.arith import ExpressionError, evaluate, format_number
from bucl_runtime.control import handle_each, handle_else, handle_if, handle_repeat
from bucl_runtime.exceptions import BuclIOError, BuclRuntimeError
from bucl_runtime.interpolation import resolve
from bucl_runtime.types import INT64_MAX, parse_float, parse_index, parse_int

if TYPE_CHECKING:
    from bucl_runtime.evaluator import Evaluator


# ── Assignment and output ───────────────────────────────────────────────────

def handle_assign(ev: "Evaluator", target, args, block, continuation):
    """``{t} = a b c`` stores ``abc``; with several values ``t/0..`` too."""
    joined = "".join(args)
    if target is None:
        return joined
    ev.variables.set(target, joined)
    if len(args) > 1:
        ev.variables.put(f"{target}/count", str(len(args)))
        for i, value in enumerate(args):
            ev.variables.put(f"{target}/{i}", value)
    return None


def handle_echo(ev: "Evaluator", target, args, block, continuation):
    ev.output.append(" ".join(args))
    return None


# ── Inspection ──────────────────────────────────────────────────────────────

def handle_count(ev, target, args, block, continuation):
    return str(len(args))


def handle_length(ev, target, args, block, continuation):
    return str(sum(len(arg) for arg in args))


def handle_cmp(ev, target, args, block, continuation):
    """Numeric three-way compare; unparseable operands count as 0."""
    if len(args) < 2:
        raise BuclRuntimeError("cmp: requires two arguments")
    a = parse_float(args[0]) or 0.0
    b = parse_float(args[1]) or 0.0
    if a > b:
        return "1"
    if a < b:
        return "-1"
    return "0"


def handle_getvar(ev: "Evaluator", target, args, block, continuation):
    if not args:
        raise BuclRuntimeError("getvar: requires a variable name")
    return resolve(ev.variables, args[0])


def handle_setvar(ev: "Evaluator", target, args, block, continuation):
    if len(args) < 2:
        raise BuclRuntimeError("setvar: requires a variable name and a value")
    ev.variables.set(args[0], args[1])
    return None


# ── Strings ─────────────────────────────────────────────────────────────────

def handle_strpos(ev, target, args, block, continuation):
    if len(args) < 2:
        raise BuclRuntimeError("strpos: requires text and needle arguments")
    return str(args[0].find(args[1]))


def handle_substr(ev, target, args, block, continuation):
    """``substr start length text`` by character position, clamped to the text."""
    if len(args) < 3:
        raise BuclRuntimeError("substr: requires start, length, and string arguments")
    start = parse_index(args[0])
    if start is None:
        raise BuclRuntimeError(f"substr: '{args[0]}' is not a valid start index")
    length = parse_index(args[1])
    if length is None:
        raise BuclRuntimeError(f"substr: '{args[1]}' is not a valid length")
    text = args[2]
    start = min(start, len(text))
    return text[start:min(start + length, len(text))]


# ── Numbers ─────────────────────────────────────────────────────────────────

def handle_math(ev, target, args, block, continuation):
    try:
        value = evaluate("".join(args))
    except ExpressionError as e:
        raise BuclRuntimeError(f"math: {e}") from e
    return format_number(value)


def _random_int(text):
    value = parse_int(text)
    if value is None:
        raise BuclRuntimeError(f"random: '{text}' is not a valid integer")
    return value


def handle_random(ev: "Evaluator", target, args, block, continuation):
    """Inclusive random integer.

    Named ``{min}``/``{max}`` arguments win over positional ones:
    ``random`` is 0..2**63-1, ``random max`` is 0..max and
    ``random min max`` is min..max.
    """
    named_min = ev.named_arg("min")
    named_max = ev.named_arg("max")
    if named_max is not None:
        low = _random_int(named_min) if named_min is not None else 0
        high = _random_int(named_max)
    elif not args:
        low, high = 0, INT64_MAX
    elif len(args) == 1:
        low, high = 0, _random_int(args[0])
    else:
        low, high = _random_int(args[0]), _random_int(args[1])

    if low > high:
        raise BuclRuntimeError(f"random: min ({low}) is greater than max ({high})")
    return str(random.randint(low, high))


def handle_sleep(ev, target, args, block, continuation):
    if not args:
        raise BuclRuntimeError("sleep: expected a number of seconds")
    seconds = parse_float(args[0])
    if seconds is None or math.isnan(seconds):
        raise BuclRuntimeError(f"sleep: '{args[0]}' is not a valid number of seconds")
    if seconds < 0:
        raise BuclRuntimeError(f"sleep: duration must not be negative, got {args[0]}")
    if math.isinf(seconds):
        raise BuclRuntimeError(f"sleep: '{args[0]}' is not a valid number of seconds")
    time.sleep(seconds)
    return None


# ── Files ───────────────────────────────────────────────────────────────────

def handle_readfile(ev: "Evaluator", target, args, block, continuation):
    path = ev.named_arg("path")
    if path is None:
        if not args:
            raise BuclRuntimeError("readfile: missing path argument")
        path = args[0]
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError, ValueError) as e:
        raise BuclIOError(f"readfile: cannot read '{path}': {e}") from e


def handle_writefile(ev: "Evaluator", target, args, block, continuation):
    """Write ``content`` (or the remaining args joined) to ``path``; returns the content."""
    path = ev.named_arg("path")
    if path is None:
        if not args:
            raise BuclRuntimeError("writefile: requires a path and content")
        path = args[0]
    content = ev.named_arg("content")
    if content is None:
        content = "".join(args[1:])
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except (OSError, ValueError) as e:
        raise BuclIOError(f"writefile: cannot write '{path}': {e}") from e
    return content


BUILTINS = {
    "=": handle_assign,
    "echo": handle_echo,
    "count": handle_count,
    "length": handle_length,
    "cmp": handle_cmp,
    "getvar": handle_getvar,
    "setvar": handle_setvar,
    "strpos": handle_strpos,
    "substr": handle_substr,
    "math": handle_math,
    "random": handle_random,
    "sleep": handle_sleep,
    "readfile": handle_readfile,
    "writefile": handle_writefile,
    "if": handle_if,
    "elseif": handle_if,
    "else": handle_else,
    "each": handle_each,
    "repeat": handle_repeat,
}
