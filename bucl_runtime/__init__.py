"""BUCL Runtime — executes parsed BUCL programs."""

from bucl.errors import BuclError
from bucl.parser import parse_source
from bucl_runtime.config import get_config
from bucl_runtime.evaluator import Evaluator
from bucl_runtime.output import OutputCollector, log
from bucl_runtime.registry import (
    DirectoryScripts,
    MemoryScripts,
    OperationRegistry,
    build_registry,
)
from bucl_runtime.store import VariableStore
from bucl_runtime.types import Array, Record, ResolvedArg, RunResult, Scalar
from bucl_runtime.exceptions import (
    BuclRuntimeError,
    UnknownFunctionError,
    BuclIOError,
    BuclConfigError,
)


def run(source, *, base_dir=None, scripts=None, on_output=None, config=None):
    """Parse and run BUCL source, returning a RunResult.

    ``base_dir`` is where ``functions/<name>.bucl`` lookups start,
    ``scripts`` maps function names to in-memory sources and
    ``on_output`` is called with every line as it is emitted.  Failures
    are reported in the result, together with the output produced
    before them.
    """
    evaluator = None
    try:
        if config is None:
            config = get_config()
        program = parse_source(source)
        registry = build_registry(base_dir, scripts, config)
        evaluator = Evaluator(registry, on_output, config=config)
        evaluator.run(program)
    except BuclError as e:
        if evaluator is None:
            return RunResult("error", [], e)
        return RunResult("error", list(evaluator.output.lines), e, evaluator.variables.views())
    return RunResult("success", list(evaluator.output.lines), None, evaluator.variables.views())


__all__ = [
    "run", "log", "get_config", "parse_source",
    "Evaluator", "VariableStore", "OutputCollector",
    "OperationRegistry", "MemoryScripts", "DirectoryScripts", "build_registry",
    "ResolvedArg", "RunResult", "Scalar", "Array", "Record",
    "BuclError", "BuclRuntimeError", "UnknownFunctionError",
    "BuclIOError", "BuclConfigError",
]
