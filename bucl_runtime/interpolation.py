"""String interpolation and name resolution for BUCL.

``{name}`` inside a quoted string is replaced by the variable's value.
Names may nest (``{parts/{i}}``).  A multi-value root variable
(``count > 1``) renders as its elements joined with a single space.
"""

from __future__ import annotations

from bucl.lexer import scan_braced
from bucl_runtime.store import VariableStore


def interpolate(store: VariableStore, template: str) -> str:
    """Expand every ``{...}`` span in ``template``.

    An unterminated span is kept as literal text.
    """
    out: list[str] = []
    pos = 0
    while pos < len(template):
        ch = template[pos]
        if ch != "{":
            out.append(ch)
            pos += 1
            continue
        name, pos, closed = scan_braced(template, pos + 1)
        if closed:
            out.append(_resolve_in_string(store, name))
        else:
            out.append("{" + name)
    return "".join(out)


def resolve_name(store: VariableStore, name: str) -> str:
    """Interpolate nested references inside a variable name, once."""
    if "{" in name:
        return interpolate(store, name)
    return name


def resolve(store: VariableStore, name: str) -> str:
    """Value of the variable ``name`` (nested references expanded first)."""
    return store.lookup(resolve_name(store, name))


def _resolve_in_string(store: VariableStore, name: str) -> str:
    resolved = resolve_name(store, name)
    if "/" not in resolved and store.count_of(resolved) > 1:
        return " ".join(store.elements(resolved))
    return store.lookup(resolved)
