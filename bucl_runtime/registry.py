"""Operation registry: built-ins first, then function scripts.

A function script is a ``<name>.bucl`` file (or an in-memory source)
run in its own child scope.  Sources are searched in order:

1. the in-memory table given by the host,
2. ``<base_dir>/functions/``  (the running script's directory),
3. ``./functions/``           (the working directory),
4. the standard library shipped with this package.

Scripts are parsed on first use and cached for the registry's lifetime.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from bucl.parser import parse_source
from bucl_runtime.builtins import BUILTINS
from bucl_runtime.config import get_config
from bucl_runtime.exceptions import BuclIOError, UnknownFunctionError
from bucl_runtime.types import ResolvedArg

if TYPE_CHECKING:
    from bucl.ast_nodes import Statement
    from bucl_runtime.evaluator import Evaluator

STDLIB_DIR = os.path.dirname(os.path.abspath(__file__))


@dataclass
class Call:
    """One dispatch: resolved target, arguments and attached blocks."""
    target: str | None = None
    args: list[ResolvedArg] = field(default_factory=list)
    block: list[Statement] | None = None
    continuation: Statement | None = None

    @property
    def values(self) -> list[str]:
        return [arg.value for arg in self.args]


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

class Operation(ABC):
    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def invoke(self, evaluator: Evaluator, call: Call) -> str | None:
        """Run the operation; a returned value is stored at the target."""


class NativeOperation(Operation):
    """A built-in implemented in Python.

    ``func(evaluator, target, values, block, continuation)``
    """

    def __init__(self, name: str, func: Callable):
        super().__init__(name)
        self.func = func

    def invoke(self, evaluator, call):
        return self.func(evaluator, call.target, call.values, call.block, call.continuation)


class ScriptedOperation(Operation):
    """A function script, parsed lazily on first call."""

    def __init__(self, name: str, source: str):
        super().__init__(name)
        self.source = source
        self._statements: list[Statement] | None = None

    @property
    def statements(self) -> list[Statement]:
        if self._statements is None:
            self._statements = parse_source(self.source).body
        return self._statements

    def invoke(self, evaluator, call):
        return evaluator.call_script(self, call)


# ---------------------------------------------------------------------------
# Script sources
# ---------------------------------------------------------------------------

class MemoryScripts:
    """Function sources held in memory, keyed by function name."""

    def __init__(self, scripts: dict[str, str] | None = None):
        self.scripts = dict(scripts or {})

    def find(self, name: str) -> str | None:
        return self.scripts.get(name)


class DirectoryScripts:
    """``<base_dir>/<subfolder>/<name><extension>`` on disk."""

    def __init__(self, base_dir: str, subfolder: str = "functions",
                 extension: str = ".bucl"):
        self.base_dir = base_dir
        self.subfolder = subfolder
        self.extension = extension

    def path_for(self, name: str) -> str:
        return os.path.join(self.base_dir, self.subfolder, name + self.extension)

    def find(self, name: str) -> str | None:
        path = self.path_for(name)
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise BuclIOError(f"Cannot read function script {path}: {e}") from e
        except ValueError:
            # a name with a NUL byte cannot exist on disk
            return None

    def __repr__(self):
        return f"DirectoryScripts({os.path.join(self.base_dir, self.subfolder)!r})"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class OperationRegistry:
    def __init__(self, natives: dict[str, Callable] | None = None,
                 sources: list | None = None):
        self.natives: dict[str, NativeOperation] = {}
        for name, func in (natives or {}).items():
            self.register(name, func)
        self.sources = list(sources or [])
        self._scripts: dict[str, ScriptedOperation] = {}

    def register(self, name: str, func: Callable) -> None:
        self.natives[name] = NativeOperation(name, func)

    def lookup(self, name: str) -> Operation:
        """Built-in named ``name``, else the first script source that has it."""
        if name in self.natives:
            return self.natives[name]
        if name in self._scripts:
            return self._scripts[name]
        for source in self.sources:
            text = source.find(name)
            if text is not None:
                op = ScriptedOperation(name, text)
                self._scripts[name] = op
                return op
        raise UnknownFunctionError(name)


def build_registry(base_dir: str | None = None,
                   scripts: dict[str, str] | None = None,
                   config: dict | None = None) -> OperationRegistry:
    """Registry with every built-in and the default script search order."""
    if config is None:
        config = get_config()
    functions = config["functions"]
    subfolder = functions["subfolder"]
    extension = functions["extension"]

    sources: list = [MemoryScripts(scripts)]
    if base_dir is not None:
        sources.append(DirectoryScripts(base_dir, subfolder, extension))
    if functions.get("search_cwd", True):
        sources.append(DirectoryScripts(".", subfolder, extension))
    if functions.get("stdlib", True):
        sources.append(DirectoryScripts(STDLIB_DIR, "functions", ".bucl"))

    return OperationRegistry(BUILTINS, sources)
