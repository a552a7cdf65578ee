"""BUCL runtime types.

ResolvedArg — one call argument plus its derived parameter name.
Scalar / Array / Record — tagged views of a root variable.
RunResult — outcome of a top-level run as seen by a host.
parse_index / parse_int / parse_float — strict numeric parsing used
by the store and the built-ins.
"""

import dataclasses
import re

# Names that never become derived parameter names.
RESERVED_NAMES = frozenset({"argc", "args", "target", "return", "count", "length"})

# Sub-keys written automatically when a root variable is set.
METADATA_SUFFIXES = frozenset({"count", "length"})

_INDEX_RE = re.compile(r"\+?[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def parse_index(text):
    """Parse a non-negative integer (digits, optional leading '+'), else None."""
    if _INDEX_RE.fullmatch(text):
        return int(text)
    return None


def is_index(text) -> bool:
    return _INDEX_RE.fullmatch(text) is not None


def parse_int(text):
    """Parse a signed 64-bit integer, else None."""
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def parse_float(text):
    """Parse an ASCII float without surrounding whitespace or underscores."""
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


@dataclasses.dataclass
class ResolvedArg:
    """A call argument after interpolation and expansion."""
    value: str
    name: str | None = None


# ── Tagged views ────────────────────────────────────────────────────────────

@dataclasses.dataclass
class Scalar:
    text: str


@dataclasses.dataclass
class Array:
    items: list
    text: str = ""

    def __len__(self):
        return len(self.items)


@dataclasses.dataclass
class Record:
    fields: dict
    text: str = ""

    def __getitem__(self, key):
        return self.fields[key]


# ── Host results ────────────────────────────────────────────────────────────

@dataclasses.dataclass
class RunResult:
    """Result of running a script: emitted lines plus an optional failure."""
    status: str
    output: list = dataclasses.field(default_factory=list)
    error: Exception | None = None
    variables: dict = dataclasses.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def text(self) -> str:
        return "\n".join(self.output)

    def format_error(self) -> str:
        if self.error is None:
            return ""
        return f"{type(self.error).__name__}: {self.error}"
