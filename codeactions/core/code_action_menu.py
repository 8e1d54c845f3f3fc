"""Menu model for the code action context menu."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from codeactions.core.code_action_types import (
    CodeAction,
    CodeActionItem,
    CodeActionSet,
    CodeActionTrigger,
    CodeActionTriggerSource,
    Command,
)
from codeactions.core.keybinding_resolver import CodeActionKeybindingResolver, KeybindingProvider
from codeactions.core.keybindings import ResolvedKeybinding

logger = logging.getLogger(__name__)

_NEWLINES_RE = re.compile(r"\r\n|\r|\n")


class CodeActionMenuCanceled(RuntimeError):
    """Raised when the menu is asked to show for an editor that is no longer attached."""


class CodeActionMenuDelegate(Protocol):
    def on_select_code_action(self, item: CodeActionItem, trigger: CodeActionTrigger) -> object: ...


AdditionalMenuItems = Callable[[CodeActionTrigger, Sequence[CodeAction]], Sequence[Command]]


def strip_newlines(text: str) -> str:
    return _NEWLINES_RE.sub(" ", str(text or ""))


@dataclass(frozen=True, slots=True)
class CodeActionShowOptions:
    include_disabled_actions: bool = False
    from_lightbulb: bool = False


@dataclass(frozen=True, slots=True)
class CodeActionMenuEntry:
    title: str
    item: CodeActionItem | None = None
    enabled: bool = True
    keybinding: ResolvedKeybinding | None = None
    is_separator: bool = False

    @property
    def keybinding_label(self) -> str:
        return self.keybinding.label if self.keybinding is not None else ""


SEPARATOR = CodeActionMenuEntry(title="", enabled=False, is_separator=True)


class CodeActionMenu:
    def __init__(
        self,
        delegate: CodeActionMenuDelegate,
        keybinding_provider: KeybindingProvider,
        *,
        is_attached: Callable[[], bool] | None = None,
        additional_items: AdditionalMenuItems | None = None,
    ) -> None:
        self._delegate = delegate
        self._keybinding_resolver = CodeActionKeybindingResolver(keybinding_provider)
        self._is_attached = is_attached or (lambda: True)
        self._additional_items = additional_items
        self._visible = False
        self._trigger: CodeActionTrigger | None = None
        self._showing_actions: CodeActionSet | None = None

    @property
    def is_visible(self) -> bool:
        return self._visible

    @property
    def showing_actions(self) -> CodeActionSet | None:
        return self._showing_actions

    def show(
        self,
        trigger: CodeActionTrigger,
        code_actions: CodeActionSet,
        options: CodeActionShowOptions,
    ) -> list[CodeActionMenuEntry]:
        actions_to_show = code_actions.all_actions if options.include_disabled_actions else code_actions.valid_actions
        if not actions_to_show:
            self._visible = False
            return []

        if not self._is_attached():
            self._visible = False
            raise CodeActionMenuCanceled("Editor is no longer attached; code action menu canceled.")

        self._visible = True
        self._trigger = trigger
        self._showing_actions = code_actions

        resolver = self._keybinding_resolver.get_resolver()
        entries = [
            CodeActionMenuEntry(
                title=strip_newlines(item.action.title),
                item=item,
                enabled=not item.action.disabled,
                keybinding=resolver(item.action),
            )
            for item in actions_to_show
        ]

        documentation = list(code_actions.documentation)
        if self._additional_items is not None:
            documentation.extend(self._additional_items(trigger, [item.action for item in actions_to_show]))
        if documentation:
            entries.append(SEPARATOR)
            for command in documentation:
                item = CodeActionItem(CodeAction(title=command.title, command=command))
                entries.append(CodeActionMenuEntry(title=strip_newlines(command.title), item=item))

        logger.debug(
            "Showing code action menu: %d actions (%d valid), trigger=%s",
            len(actions_to_show),
            len(code_actions.valid_actions),
            trigger.trigger_action.value,
        )
        return entries

    def select(self, entry: CodeActionMenuEntry) -> object:
        if not self._visible or self._trigger is None:
            return None
        if entry.is_separator or not entry.enabled or entry.item is None:
            return None
        trigger = self._trigger
        self.hide(did_cancel=False)
        return self._delegate.on_select_code_action(entry.item, trigger)

    def hide(self, *, did_cancel: bool, from_lightbulb: bool = False) -> None:
        if self._visible and self._trigger is not None:
            opened_from = CodeActionTriggerSource.LIGHTBULB if from_lightbulb else self._trigger.trigger_action
            valid = len(self._showing_actions.valid_actions) if self._showing_actions is not None else 0
            logger.debug(
                "Code action menu closed: from=%s valid=%d cancelled=%s",
                opened_from.value,
                valid,
                did_cancel,
            )
        self._visible = False
        self._trigger = None
        self._showing_actions = None


__all__ = [
    "CodeActionMenuCanceled",
    "CodeActionMenuDelegate",
    "CodeActionShowOptions",
    "CodeActionMenuEntry",
    "CodeActionMenu",
    "SEPARATOR",
    "strip_newlines",
]
