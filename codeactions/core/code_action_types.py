"""Code action commands, command arguments and action containers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from codeactions.core.kinds import CodeActionKind

logger = logging.getLogger(__name__)

REFACTOR_COMMAND_ID = "editor.action.refactor"
CODE_ACTION_COMMAND_ID = "editor.action.codeAction"
SOURCE_ACTION_COMMAND_ID = "editor.action.sourceAction"
ORGANIZE_IMPORTS_COMMAND_ID = "editor.action.organizeImports"
FIX_ALL_COMMAND_ID = "editor.action.fixAll"
QUICK_FIX_COMMAND_ID = "editor.action.quickFix"


class CodeActionAutoApply(Enum):
    IF_SINGLE = "ifSingle"
    FIRST = "first"
    NEVER = "never"


_AUTO_APPLY_BY_TEXT: dict[str, CodeActionAutoApply] = {
    "first": CodeActionAutoApply.FIRST,
    "never": CodeActionAutoApply.NEVER,
    "ifsingle": CodeActionAutoApply.IF_SINGLE,
}


class CodeActionTriggerSource(Enum):
    REFACTOR = "refactor"
    REFACTOR_PREVIEW = "refactor preview"
    LIGHTBULB = "lightbulb"
    DEFAULT = "other (default)"
    SOURCE_ACTION = "source action"
    QUICK_FIX = "quick fix action"
    FIX_ALL = "fix all"
    ORGANIZE_IMPORTS = "organize imports"
    AUTO_FIX = "auto fix"
    QUICK_FIX_HOVER = "quick fix hover window"
    ON_SAVE = "save participants"
    PROBLEMS_VIEW = "problems view"


class CodeActionTriggerType(Enum):
    INVOKE = 1
    AUTO = 2


@dataclass(frozen=True, slots=True)
class CodeActionTrigger:
    type: CodeActionTriggerType
    trigger_action: CodeActionTriggerSource = CodeActionTriggerSource.DEFAULT


@dataclass(frozen=True, slots=True)
class CodeActionCommandArgs:
    """Arguments of the code action commands as configured on a keybinding."""

    kind: CodeActionKind
    apply: CodeActionAutoApply
    preferred: bool

    @staticmethod
    def from_user(
        arg: Any,
        *,
        kind: CodeActionKind,
        apply: CodeActionAutoApply,
    ) -> "CodeActionCommandArgs":
        """Parse a user-supplied argument object, falling back field by field.

        Anything that is not a mapping yields the defaults. Never raises.
        """
        if not isinstance(arg, Mapping):
            if arg is not None:
                logger.debug("Ignoring non-object code action args: %r", arg)
            return CodeActionCommandArgs(kind, apply, False)
        return CodeActionCommandArgs(
            _kind_from_user(arg, kind),
            _apply_from_user(arg, apply),
            _preferred_from_user(arg),
        )


def _kind_from_user(arg: Mapping[str, Any], default: CodeActionKind) -> CodeActionKind:
    raw = arg.get("kind")
    if isinstance(raw, str):
        return CodeActionKind(raw)
    if raw is not None:
        logger.debug("Code action 'kind' must be a string, got %r", raw)
    return default


def _apply_from_user(arg: Mapping[str, Any], default: CodeActionAutoApply) -> CodeActionAutoApply:
    raw = arg.get("apply")
    text = raw.lower() if isinstance(raw, str) else ""
    return _AUTO_APPLY_BY_TEXT.get(text, default)


def _preferred_from_user(arg: Mapping[str, Any]) -> bool:
    raw = arg.get("preferred")
    return raw if isinstance(raw, bool) else False


@dataclass(frozen=True, slots=True)
class Command:
    id: str
    title: str
    arguments: tuple[Any, ...] = ()
    tooltip: str = ""


@dataclass(frozen=True, slots=True)
class CodeAction:
    title: str
    kind: str | None = None
    is_preferred: bool = False
    disabled: str | None = None
    command: Command | None = None
    edit: Mapping[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class CodeActionItem:
    action: CodeAction
    provider: object | None = None


@dataclass(frozen=True, slots=True)
class CodeActionSet:
    valid_actions: tuple[CodeActionItem, ...] = ()
    all_actions: tuple[CodeActionItem, ...] = ()
    documentation: tuple[Command, ...] = field(default_factory=tuple)

    @staticmethod
    def from_items(
        items: list[CodeActionItem] | tuple[CodeActionItem, ...],
        documentation: list[Command] | tuple[Command, ...] = (),
    ) -> "CodeActionSet":
        all_actions = tuple(items)
        valid = tuple(item for item in all_actions if not item.action.disabled)
        return CodeActionSet(valid, all_actions, tuple(documentation))


__all__ = [
    "REFACTOR_COMMAND_ID",
    "CODE_ACTION_COMMAND_ID",
    "SOURCE_ACTION_COMMAND_ID",
    "ORGANIZE_IMPORTS_COMMAND_ID",
    "FIX_ALL_COMMAND_ID",
    "QUICK_FIX_COMMAND_ID",
    "CodeActionAutoApply",
    "CodeActionTriggerSource",
    "CodeActionTriggerType",
    "CodeActionTrigger",
    "CodeActionCommandArgs",
    "Command",
    "CodeAction",
    "CodeActionItem",
    "CodeActionSet",
]
