"""Hierarchical, dot-separated code action kinds."""

from __future__ import annotations

from dataclasses import dataclass

_SEP = "."


@dataclass(frozen=True, slots=True)
class CodeActionKind:
    value: str

    def is_empty(self) -> bool:
        return not self.value

    def contains(self, other: "CodeActionKind") -> bool:
        # Ancestor-or-self: equal, or other continues past a segment boundary.
        return self.value == other.value or other.value.startswith(self.value + _SEP)

    def intersects(self, other: "CodeActionKind") -> bool:
        return self.contains(other) or other.contains(self)

    def append(self, part: str) -> "CodeActionKind":
        return CodeActionKind(self.value + _SEP + part)

    def __str__(self) -> str:
        return self.value


EMPTY = CodeActionKind("")
QUICKFIX = CodeActionKind("quickfix")
REFACTOR = CodeActionKind("refactor")
REFACTOR_EXTRACT = REFACTOR.append("extract")
REFACTOR_INLINE = REFACTOR.append("inline")
REFACTOR_MOVE = REFACTOR.append("move")
REFACTOR_REWRITE = REFACTOR.append("rewrite")
NOTEBOOK = CodeActionKind("notebook")
SOURCE = CodeActionKind("source")
SOURCE_ORGANIZE_IMPORTS = SOURCE.append("organizeImports")
SOURCE_FIX_ALL = SOURCE.append("fixAll")


__all__ = [
    "CodeActionKind",
    "EMPTY",
    "QUICKFIX",
    "REFACTOR",
    "REFACTOR_EXTRACT",
    "REFACTOR_INLINE",
    "REFACTOR_MOVE",
    "REFACTOR_REWRITE",
    "NOTEBOOK",
    "SOURCE",
    "SOURCE_ORGANIZE_IMPORTS",
    "SOURCE_FIX_ALL",
]
