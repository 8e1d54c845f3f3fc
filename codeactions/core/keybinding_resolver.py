"""Picks the keyboard shortcut shown next to a code action in the menu.

Keybindings for the code action commands carry a ``kind`` argument. A binding
applies to an action when its kind contains the action's kind; among the
applicable bindings the most specific kind wins, and among equally specific
ones the binding registered first wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from codeactions.core.code_action_types import (
    CODE_ACTION_COMMAND_ID,
    FIX_ALL_COMMAND_ID,
    ORGANIZE_IMPORTS_COMMAND_ID,
    REFACTOR_COMMAND_ID,
    SOURCE_ACTION_COMMAND_ID,
    CodeAction,
    CodeActionAutoApply,
    CodeActionCommandArgs,
)
from codeactions.core.keybindings import ResolvedKeybinding, ResolvedKeybindingItem
from codeactions.core.kinds import EMPTY, SOURCE_FIX_ALL, SOURCE_ORGANIZE_IMPORTS, CodeActionKind
from codeactions.core.lazy import Lazy

logger = logging.getLogger(__name__)

CODE_ACTION_COMMANDS: tuple[str, ...] = (
    REFACTOR_COMMAND_ID,
    CODE_ACTION_COMMAND_ID,
    SOURCE_ACTION_COMMAND_ID,
    ORGANIZE_IMPORTS_COMMAND_ID,
    FIX_ALL_COMMAND_ID,
)

# These commands ship without a 'kind' argument; their kind is fixed.
_FIXED_KIND_COMMANDS: dict[str, CodeActionKind] = {
    ORGANIZE_IMPORTS_COMMAND_ID: SOURCE_ORGANIZE_IMPORTS,
    FIX_ALL_COMMAND_ID: SOURCE_FIX_ALL,
}


class KeybindingProvider(Protocol):
    def get_keybindings(self) -> Sequence[ResolvedKeybindingItem]: ...


@dataclass(frozen=True, slots=True)
class CodeActionKeybinding:
    kind: CodeActionKind
    preferred: bool
    resolved_keybinding: ResolvedKeybinding


class CodeActionKeybindingResolver:
    def __init__(self, keybinding_provider: KeybindingProvider) -> None:
        self._keybinding_provider = keybinding_provider

    def get_resolver(self) -> Callable[[CodeAction], ResolvedKeybinding | None]:
        """Start a resolution session.

        The keybinding table is read on the first lookup, not here, and the
        resulting candidates are reused for every later lookup of the session.
        """
        # Lazy since the menu may never ask for a shortcut.
        candidates = Lazy(self._code_action_keybindings)

        def resolve(action: CodeAction) -> ResolvedKeybinding | None:
            if action.kind is None:
                return None
            binding = self.best_keybinding_for_code_action(action, candidates.value)
            return binding.resolved_keybinding if binding is not None else None

        return resolve

    def _code_action_keybindings(self) -> tuple[CodeActionKeybinding, ...]:
        candidates: list[CodeActionKeybinding] = []
        for item in self._keybinding_provider.get_keybindings():
            if item.command not in CODE_ACTION_COMMANDS:
                continue
            if item.resolved_keybinding is None:
                continue
            fixed_kind = _FIXED_KIND_COMMANDS.get(item.command)
            if fixed_kind is not None:
                args = CodeActionCommandArgs(fixed_kind, CodeActionAutoApply.NEVER, False)
            else:
                args = CodeActionCommandArgs.from_user(
                    item.command_args,
                    kind=EMPTY,
                    apply=CodeActionAutoApply.NEVER,
                )
            candidates.append(CodeActionKeybinding(args.kind, args.preferred, item.resolved_keybinding))
        logger.debug("Built %d code action keybinding candidates", len(candidates))
        return tuple(candidates)

    @staticmethod
    def best_keybinding_for_code_action(
        action: CodeAction,
        candidates: Sequence[CodeActionKeybinding],
    ) -> CodeActionKeybinding | None:
        if action.kind is None:
            return None
        kind = CodeActionKind(action.kind)

        matching = [
            candidate
            for candidate in candidates
            if candidate.kind.contains(kind)
            # Preferred-only bindings apply to preferred actions alone.
            and (action.is_preferred or not candidate.preferred)
        ]

        # Walk back to front, moving to any candidate at least as specific as
        # the current best: the most specific wins, ties go to the earliest.
        best: CodeActionKeybinding | None = None
        for candidate in reversed(matching):
            if best is None or best.kind.contains(candidate.kind):
                best = candidate
        return best


__all__ = [
    "CODE_ACTION_COMMANDS",
    "CodeActionKeybinding",
    "CodeActionKeybindingResolver",
    "KeybindingProvider",
]
