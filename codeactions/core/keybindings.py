"""Keybinding rules for the code action commands, chord normalization and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from PySide6.QtGui import QKeySequence

from codeactions.core.code_action_types import (
    ORGANIZE_IMPORTS_COMMAND_ID,
    QUICK_FIX_COMMAND_ID,
    REFACTOR_COMMAND_ID,
)

_REMOVAL_PREFIX = "-"

_MODIFIER_ALIASES: dict[str, str] = {
    "ctrl": "Ctrl",
    "control": "Ctrl",
    "alt": "Alt",
    "option": "Alt",
    "shift": "Shift",
    "meta": "Meta",
    "cmd": "Meta",
    "command": "Meta",
    "super": "Meta",
    "win": "Meta",
}
_MODIFIER_ORDER = ("Ctrl", "Alt", "Shift", "Meta")
_KEY_ALIASES: dict[str, str] = {
    "slash": "/",
    "?": "/",
    "period": ".",
    "dot": ".",
}


def _chord_tokens(text: str) -> list[str]:
    return [part.strip() for part in str(text or "").split("+") if part.strip()]


@dataclass(frozen=True, slots=True)
class KeyChord:
    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    @property
    def modifiers(self) -> tuple[str, ...]:
        flags = (self.ctrl, self.alt, self.shift, self.meta)
        return tuple(name for name, on in zip(_MODIFIER_ORDER, flags) if on)

    def to_portable_text(self) -> str:
        key = str(self.key or "").strip()
        return "+".join((*self.modifiers, key) if key else self.modifiers)

    @staticmethod
    def from_portable_text(chord_text: str) -> "KeyChord | None":
        tokens = _chord_tokens(chord_text)
        if not tokens:
            return None
        mods = {_MODIFIER_ALIASES.get(tok.lower(), "") for tok in tokens[:-1]}
        return KeyChord(
            key=tokens[-1],
            ctrl="Ctrl" in mods,
            alt="Alt" in mods,
            shift="Shift" in mods,
            meta="Meta" in mods,
        )


@dataclass(frozen=True, slots=True)
class KeySequenceSpec:
    chords: tuple[KeyChord, ...]

    def to_portable_text(self) -> str:
        return ", ".join(chord.to_portable_text() for chord in self.chords)

    @staticmethod
    def from_chord_texts(chords: list[str]) -> "KeySequenceSpec":
        parsed = (KeyChord.from_portable_text(raw) for raw in chords)
        return KeySequenceSpec(tuple(chord for chord in parsed if chord is not None))


@dataclass(frozen=True, slots=True)
class KeybindingRule:
    """One configured binding: a key sequence that runs ``command`` with ``args``.

    A command prefixed with ``-`` removes earlier rules for that command
    instead; with a key it only removes the rules bound to that key.
    """

    command: str
    key: tuple[str, ...]
    args: Any = None

    @property
    def is_removal(self) -> bool:
        return self.command.startswith(_REMOVAL_PREFIX)

    @property
    def target_command(self) -> str:
        return self.command[len(_REMOVAL_PREFIX):] if self.is_removal else self.command

    def removes(self, other: "KeybindingRule") -> bool:
        if not self.is_removal or other.is_removal or other.command != self.target_command:
            return False
        if not self.key:
            return True
        return normalize_sequence(list(self.key)) == normalize_sequence(list(other.key))


@dataclass(frozen=True, slots=True)
class ResolvedKeybinding:
    sequence: KeySequenceSpec

    @property
    def chords(self) -> tuple[KeyChord, ...]:
        return self.sequence.chords

    @property
    def label(self) -> str:
        return self.sequence.to_portable_text()


@dataclass(frozen=True, slots=True)
class ResolvedKeybindingItem:
    """An entry of the keybinding table as handed to the code action resolver."""

    command: str
    command_args: Any = None
    resolved_keybinding: ResolvedKeybinding | None = field(default=None)


DEFAULT_CODE_ACTION_KEYBINDINGS: tuple[KeybindingRule, ...] = (
    KeybindingRule(QUICK_FIX_COMMAND_ID, ("Ctrl+.",)),
    KeybindingRule(REFACTOR_COMMAND_ID, ("Ctrl+Shift+R",), {"kind": "refactor"}),
    KeybindingRule(ORGANIZE_IMPORTS_COMMAND_ID, ("Shift+Alt+O",)),
)


def _manual_canonical_chord(text: str) -> str:
    modifiers: set[str] = set()
    key_token = ""
    for part in _chord_tokens(text):
        alias = _MODIFIER_ALIASES.get(part.lower())
        if alias:
            modifiers.add(alias)
        else:
            key_token = part
    if not key_token:
        return ""

    key_token = _KEY_ALIASES.get(key_token.lower(), key_token)
    if len(key_token) == 1 and key_token.isalpha():
        key_token = key_token.upper()
    return "+".join([*(mod for mod in _MODIFIER_ORDER if mod in modifiers), key_token])


def _has_modifiers(chord: str) -> bool:
    return len(_chord_tokens(chord)) > 1


def canonicalize_chord_text(text: str) -> str:
    chord_text = str(text or "").strip()
    if not chord_text:
        return ""
    manual = _manual_canonical_chord(chord_text)
    from_qt = QKeySequence(chord_text).toString(QKeySequence.PortableText).strip()
    if not from_qt:
        return manual
    # Qt drops modifiers on some punctuation chords; keep what the user typed.
    if _has_modifiers(manual) and not _has_modifiers(_manual_canonical_chord(from_qt)):
        return manual
    first = from_qt.split(",")[0].strip() or from_qt
    return _manual_canonical_chord(first) or first


def normalize_sequence(value: Any) -> list[str]:
    if isinstance(value, str):
        raw_items: list[Any] = [value]
    elif isinstance(value, (list, tuple)):
        raw_items = list(value)
    else:
        return []
    chords = (
        canonicalize_chord_text(token)
        for raw in raw_items
        if isinstance(raw, str)
        for token in raw.split(",")
    )
    return [chord for chord in chords if chord]


def resolve_keybinding(key: Any) -> ResolvedKeybinding | None:
    """Resolve configured key text to a physical shortcut, or ``None`` when unassignable."""
    sequence = KeySequenceSpec.from_chord_texts(normalize_sequence(key))
    if not sequence.chords:
        return None
    return ResolvedKeybinding(sequence)


def normalize_keybinding_rules(raw: Any) -> list[KeybindingRule]:
    """Parse user rules, skipping entries without a command and keeping order."""
    if not isinstance(raw, (list, tuple)):
        return []
    rules: list[KeybindingRule] = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        command = str(entry.get("command") or "").strip()
        if not command or command == _REMOVAL_PREFIX:
            continue
        key_value = entry.get("key")
        if isinstance(key_value, str):
            key = (key_value,)
        elif isinstance(key_value, (list, tuple)):
            key = tuple(str(item) for item in key_value if isinstance(item, str))
        else:
            key = ()
        rules.append(KeybindingRule(command, key, entry.get("args")))
    return rules


__all__ = [
    "KeyChord",
    "KeySequenceSpec",
    "KeybindingRule",
    "ResolvedKeybinding",
    "ResolvedKeybindingItem",
    "DEFAULT_CODE_ACTION_KEYBINDINGS",
    "canonicalize_chord_text",
    "normalize_sequence",
    "resolve_keybinding",
    "normalize_keybinding_rules",
]
