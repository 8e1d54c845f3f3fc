"""Builds the ordered keybinding table from default and user rules."""

from __future__ import annotations

import logging
from typing import Iterable

from codeactions.core.keybindings import (
    DEFAULT_CODE_ACTION_KEYBINDINGS,
    KeybindingRule,
    ResolvedKeybindingItem,
    normalize_keybinding_rules,
    resolve_keybinding,
)
from codeactions.settings_store import JsonSettingsStore

logger = logging.getLogger(__name__)


class KeybindingService:
    def __init__(
        self,
        rules: Iterable[KeybindingRule] | None = None,
        *,
        store: JsonSettingsStore | None = None,
        include_defaults: bool = True,
    ) -> None:
        self._rules = tuple(rules) if rules is not None else None
        self._store = store
        self._include_defaults = bool(include_defaults)

    def user_rules(self) -> list[KeybindingRule]:
        if self._rules is not None:
            return list(self._rules)
        if self._store is None:
            return []
        return normalize_keybinding_rules(self._store.get("keybindings", default=[]))

    def get_keybindings(self) -> list[ResolvedKeybindingItem]:
        rules: list[KeybindingRule] = []
        if self._include_defaults:
            rules.extend(DEFAULT_CODE_ACTION_KEYBINDINGS)
        for rule in self.user_rules():
            if rule.is_removal:
                kept = [existing for existing in rules if not rule.removes(existing)]
                logger.debug("Removal rule %s dropped %d binding(s)", rule.command, len(rules) - len(kept))
                rules = kept
                continue
            rules.append(rule)

        items: list[ResolvedKeybindingItem] = []
        for rule in rules:
            resolved = resolve_keybinding(list(rule.key))
            if resolved is None:
                logger.debug("No shortcut resolved for %s (key=%r)", rule.command, rule.key)
            items.append(ResolvedKeybindingItem(rule.command, rule.args, resolved))
        return items


__all__ = ["KeybindingService"]
