"""BUCL evaluator — executes statement trees.

One Evaluator owns one variable scope.  Calling a function script
creates a child Evaluator with a fresh scope that shares only the
operation registry and the output listener with its caller.
"""

from __future__ import annotations

from bucl.ast_nodes import Program, Statement
from bucl_runtime.arguments import check_duplicate_names, named_values, resolve_arguments
from bucl_runtime.config import call_depth_limit, get_config
from bucl_runtime.exceptions import BuclRuntimeError
from bucl_runtime.interpolation import resolve, resolve_name
from bucl_runtime.output import OutputCollector, log
from bucl_runtime.registry import Call, OperationRegistry, ScriptedOperation, build_registry
from bucl_runtime.store import VariableStore


class Evaluator:
    """Runs statements against its own VariableStore."""

    def __init__(self, registry: OperationRegistry | None = None, on_output=None,
                 config: dict | None = None, depth: int = 0) -> None:
        self.config = config if config is not None else get_config()
        self.registry = registry if registry is not None else build_registry(config=self.config)
        self.variables = VariableStore()
        self.output = OutputCollector(on_output)
        self.named_args: dict[str, str] = {}
        self.depth = depth
        self.trace: bool = bool(self.config.get("trace", False))
        self.max_depth: int = call_depth_limit(self.config)

    # -- Accessors used by built-ins ----------------------------------------

    def named_arg(self, name: str) -> str | None:
        """Value of the argument named ``name`` in the current dispatch."""
        return self.named_args.get(name)

    def resolve(self, name: str) -> str:
        return resolve(self.variables, name)

    # -- Execution -----------------------------------------------------------

    def run(self, program: Program) -> None:
        try:
            self.evaluate_statements(program.body)
        except RecursionError as e:
            # nesting ran out of interpreter stack before max_call_depth
            raise BuclRuntimeError(
                f"call nesting too deep (limits.max_call_depth is {self.max_depth})"
            ) from e

    def evaluate_statements(self, statements: list[Statement]) -> None:
        for stmt in statements:
            self.evaluate_statement(stmt)

    def evaluate_statement(self, stmt: Statement) -> None:
        args = resolve_arguments(self.variables, stmt.args)
        check_duplicate_names(args)

        target = None
        if stmt.target is not None:
            target = resolve_name(self.variables, stmt.target)

        if self.trace:
            log(f"line {stmt.line}: {stmt.function}")

        operation = self.registry.lookup(stmt.function)
        call = Call(target, args, stmt.block, stmt.continuation)

        self.named_args = named_values(args)
        try:
            result = operation.invoke(self, call)
        finally:
            self.named_args = {}

        if target is not None and result is not None:
            self.variables.set(target, result)

    # -- Function scripts ----------------------------------------------------

    def call_script(self, operation: ScriptedOperation, call: Call) -> str | None:
        """Run a function script in a child scope and harvest ``{return}``.

        With a target, ``return`` and every ``return/<suffix>`` are copied
        to the caller's target and None is returned; otherwise the value
        of ``return`` (None when unset) is handed back.
        """
        if self.depth >= self.max_depth:
            raise BuclRuntimeError(
                f"maximum call depth ({self.max_depth}) exceeded calling '{operation.name}'"
            )

        child = Evaluator(
            self.registry,
            self.output.listener,
            config=self.config,
            depth=self.depth + 1,
        )
        _bind_arguments(child.variables, call)

        try:
            child.evaluate_statements(operation.statements)
        finally:
            self.output.extend(child.output.lines)

        returned = child.variables.get("return")
        if call.target is None:
            return returned

        if returned is not None:
            self.variables.set(call.target, returned)
        for suffix, value in child.variables.subkeys("return"):
            self.variables.put(f"{call.target}/{suffix}", value)
        return None


def _bind_arguments(scope: VariableStore, call: Call) -> None:
    values = call.values
    scope.put("argc", str(len(values)))
    for i, value in enumerate(values):
        scope.put(str(i), value)

    scope.put("args", "".join(values))
    scope.put("args/count", str(len(values)))
    scope.put("args/length", str(sum(len(value) for value in values)))
    for i, value in enumerate(values):
        scope.put(f"args/{i}", value)

    for arg in call.args:
        if arg.name is not None:
            scope.put(arg.name, arg.value)

    if call.target is not None:
        scope.put("target", call.target)
