"""Argument resolution: statement parameters -> call arguments.

A ``{var}`` parameter may expand to several arguments:

* a record (``db/host``, ``db/port``) expands to one named argument per
  field, sorted by field name;
* an array (``count > 1``) expands to one unnamed argument per element;
* anything else is one argument named after the variable's last path
  segment.
"""

from __future__ import annotations

from bucl.ast_nodes import BareParam, QuotedParam, VariableParam
from bucl_runtime.exceptions import BuclRuntimeError
from bucl_runtime.interpolation import interpolate, resolve_name
from bucl_runtime.store import VariableStore
from bucl_runtime.types import RESERVED_NAMES, ResolvedArg, is_index


def derive_name(var_name: str) -> str | None:
    """Parameter name for a variable path: its last segment.

    Empty, numeric and reserved segments give None.
    """
    base = var_name.rsplit("/", 1)[-1]
    if not base or is_index(base) or base in RESERVED_NAMES:
        return None
    return base


def resolve_arguments(store: VariableStore, params: list) -> list[ResolvedArg]:
    args: list[ResolvedArg] = []
    for param in params:
        if isinstance(param, QuotedParam):
            args.append(ResolvedArg(interpolate(store, param.text)))
        elif isinstance(param, VariableParam):
            args.extend(_expand_variable(store, param.name))
        elif isinstance(param, BareParam):
            args.append(ResolvedArg(param.text))
        else:
            raise BuclRuntimeError(f"Unknown parameter type: {type(param).__name__}")
    return args


def _expand_variable(store: VariableStore, name: str) -> list[ResolvedArg]:
    resolved = resolve_name(store, name)

    if "/" not in resolved:
        fields = store.named_fields(resolved)
        if fields:
            return [ResolvedArg(value, suffix) for suffix, value in fields]
        if store.count_of(resolved) > 1:
            return [ResolvedArg(value) for value in store.elements(resolved)]

    return [ResolvedArg(store.lookup(resolved), derive_name(resolved))]


def check_duplicate_names(args: list[ResolvedArg]) -> None:
    """Reject two arguments that would bind the same parameter name."""
    seen: dict[str, int] = {}
    for i, arg in enumerate(args):
        if arg.name is None:
            continue
        if arg.name in seen:
            raise BuclRuntimeError(
                f"duplicate named parameter '{arg.name}' "
                f"(args {seen[arg.name]} and {i})"
            )
        seen[arg.name] = i


def named_values(args: list[ResolvedArg]) -> dict[str, str]:
    return {arg.name: arg.value for arg in args if arg.name is not None}
