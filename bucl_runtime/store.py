"""BUCL variable store.

Variables live in one flat namespace of slash-path names (``colors``,
``colors/count``, ``colors/0``, ``db/host``).  Internally every name is
split at its first ``/`` and filed under its root variable, so the
metadata and elements of one variable stay together; the flat
slash-path form is what callers read and write.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bucl_runtime.types import (
    METADATA_SUFFIXES,
    Array,
    Record,
    Scalar,
    is_index,
    parse_index,
)


def split_name(name: str) -> tuple[str, str | None]:
    """``"db/host/x"`` -> ``("db", "host/x")``; ``"db"`` -> ``("db", None)``."""
    root, sep, suffix = name.partition("/")
    if not sep:
        return name, None
    return root, suffix


@dataclass
class _Slot:
    """Everything stored under one root variable."""
    value: str | None = None
    sub: dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.value is not None or bool(self.sub)


class VariableStore:
    """Flat string-keyed variables with array/record conventions."""

    def __init__(self):
        self._roots: dict[str, _Slot] = {}

    # -- Writing -----------------------------------------------------------

    def set(self, name: str, value: str) -> None:
        """Assign a variable.

        Setting a root name also rewrites ``name/count`` to ``"1"`` and
        ``name/length`` to the value's character count; existing
        elements are left alone.  Path names are stored as given.
        """
        root, suffix = split_name(name)
        if suffix is not None:
            self.put(name, value)
            return
        slot = self._roots.setdefault(root, _Slot())
        slot.value = value
        slot.sub["length"] = str(len(value))
        slot.sub["count"] = "1"

    def put(self, name: str, value: str) -> None:
        """Store a value under ``name`` with no derived metadata."""
        root, suffix = split_name(name)
        slot = self._roots.setdefault(root, _Slot())
        if suffix is None:
            slot.value = value
        else:
            slot.sub[suffix] = value

    # -- Reading -----------------------------------------------------------

    def get(self, name: str) -> str | None:
        """Direct lookup only; None when ``name`` was never written."""
        root, suffix = split_name(name)
        slot = self._roots.get(root)
        if slot is None:
            return None
        if suffix is None:
            return slot.value
        return slot.sub.get(suffix)

    def lookup(self, name: str) -> str:
        """Resolve ``name`` to a value, ``""`` when unset.

        A numeric suffix on a single-value variable (``count == 1``)
        indexes the characters of its value, so ``word/0`` is the first
        character of ``word``.
        """
        value = self.get(name)
        if value is not None:
            return value

        root, suffix = split_name(name)
        if suffix is None:
            return ""
        index = parse_index(suffix)
        if index is None or self.count_of(root) != 1:
            return ""
        text = self.get(root) or ""
        if index < len(text):
            return text[index]
        return ""

    def count_of(self, root: str) -> int:
        """``root/count`` as an integer; 0 when missing or malformed."""
        index = parse_index(self.get(f"{root}/count") or "")
        return index if index is not None else 0

    def elements(self, root: str) -> list[str]:
        """``root/0 .. root/(count-1)``, missing entries as ``""``."""
        return [
            self.get(f"{root}/{i}") or ""
            for i in range(self.count_of(root))
        ]

    def named_fields(self, root: str) -> list[tuple[str, str]]:
        """Named sub-variables of ``root``, sorted by name.

        Numeric indices, ``count``/``length`` and deeper paths are not
        fields.
        """
        slot = self._roots.get(root)
        if slot is None:
            return []
        fields = [
            (suffix, value)
            for suffix, value in slot.sub.items()
            if "/" not in suffix
            and suffix not in METADATA_SUFFIXES
            and not is_index(suffix)
        ]
        fields.sort(key=lambda item: item[0])
        return fields

    def subkeys(self, root: str) -> list[tuple[str, str]]:
        """Every ``root/<suffix>`` entry as ``(suffix, value)``."""
        slot = self._roots.get(root)
        if slot is None:
            return []
        return list(slot.sub.items())

    def value_of(self, root: str):
        """Tagged view of a root variable, or None if it was never written."""
        slot = self._roots.get(root)
        if not slot:
            return None
        text = slot.value or ""
        fields = self.named_fields(root)
        if fields:
            return Record(dict(fields), text)
        if self.count_of(root) > 1:
            return Array(self.elements(root), text)
        return Scalar(text)

    def views(self) -> dict:
        """Tagged view of every root variable, keyed by root name."""
        return {root: self.value_of(root) for root, slot in self._roots.items() if slot}

    # -- Introspection -----------------------------------------------------

    def as_dict(self) -> dict[str, str]:
        """The flat slash-path view of every stored variable."""
        flat: dict[str, str] = {}
        for root, slot in self._roots.items():
            if slot.value is not None:
                flat[root] = slot.value
            for suffix, value in slot.sub.items():
                flat[f"{root}/{suffix}"] = value
        return flat

    def keys(self) -> list[str]:
        return list(self.as_dict())

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self.as_dict())

    def __repr__(self) -> str:
        return f"VariableStore({self.as_dict()!r})"
