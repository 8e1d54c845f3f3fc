# tests/test_core/test_keybindings.py
"""Chord canonicalization, rule parsing and shortcut resolution."""

from codeactions.core.code_action_types import REFACTOR_COMMAND_ID
from codeactions.core.keybindings import (
    KeyChord,
    KeybindingRule,
    KeySequenceSpec,
    canonicalize_chord_text,
    normalize_keybinding_rules,
    normalize_sequence,
    resolve_keybinding,
)


def test_canonical_modifier_order():
    assert canonicalize_chord_text("shift+alt+o") == "Alt+Shift+O"
    assert canonicalize_chord_text("Ctrl+Shift+R") == "Ctrl+Shift+R"
    assert canonicalize_chord_text("control+r") == "Ctrl+R"


def test_blank_chords_are_dropped():
    assert canonicalize_chord_text("   ") == ""
    assert normalize_sequence(["", "  ", None]) == []
    assert normalize_sequence(42) == []


def test_sequence_splits_on_commas():
    assert normalize_sequence("ctrl+k, ctrl+r") == ["Ctrl+K", "Ctrl+R"]


def test_key_chord_portable_text():
    chord = KeyChord.from_portable_text("Ctrl+Alt+Shift+Meta+F")
    assert chord == KeyChord("F", ctrl=True, alt=True, shift=True, meta=True)
    assert chord.to_portable_text() == "Ctrl+Alt+Shift+Meta+F"
    assert KeyChord.from_portable_text("") is None

    sequence = KeySequenceSpec.from_chord_texts(["Ctrl+K", "", "Ctrl+R"])
    assert sequence.to_portable_text() == "Ctrl+K, Ctrl+R"


def test_resolve_keybinding():
    resolved = resolve_keybinding(["Ctrl+Shift+R"])
    assert resolved is not None
    assert resolved.label == "Ctrl+Shift+R"
    assert resolved.chords == (KeyChord("R", ctrl=True, shift=True),)

    chorded = resolve_keybinding("ctrl+k, ctrl+o")
    assert chorded is not None
    assert chorded.label == "Ctrl+K, Ctrl+O"


def test_unassigned_key_does_not_resolve():
    assert resolve_keybinding([]) is None
    assert resolve_keybinding("") is None
    assert resolve_keybinding(None) is None


def test_normalize_keybinding_rules():
    raw = [
        {"command": REFACTOR_COMMAND_ID, "key": "ctrl+1", "args": {"kind": "refactor"}},
        {"command": "  ", "key": "ctrl+2"},
        "garbage",
        {"command": REFACTOR_COMMAND_ID, "key": ["ctrl+k", 5, "ctrl+e"]},
        {"command": REFACTOR_COMMAND_ID},
    ]
    assert normalize_keybinding_rules(raw) == [
        KeybindingRule(REFACTOR_COMMAND_ID, ("ctrl+1",), {"kind": "refactor"}),
        KeybindingRule(REFACTOR_COMMAND_ID, ("ctrl+k", "ctrl+e")),
        KeybindingRule(REFACTOR_COMMAND_ID, ()),
    ]
    assert normalize_keybinding_rules({"command": REFACTOR_COMMAND_ID}) == []


def test_removal_rules():
    default = KeybindingRule(REFACTOR_COMMAND_ID, ("Ctrl+Shift+R",), {"kind": "refactor"})
    other_key = KeybindingRule(REFACTOR_COMMAND_ID, ("Ctrl+Alt+R",))
    remove_all = KeybindingRule("-" + REFACTOR_COMMAND_ID, ())
    remove_one = KeybindingRule("-" + REFACTOR_COMMAND_ID, ("ctrl+shift+r",))

    assert remove_all.is_removal and remove_all.target_command == REFACTOR_COMMAND_ID
    assert not default.is_removal and default.target_command == REFACTOR_COMMAND_ID
    assert remove_all.removes(default) and remove_all.removes(other_key)
    assert remove_one.removes(default)
    assert not remove_one.removes(other_key)
    assert not default.removes(other_key)
    assert not remove_all.removes(KeybindingRule("editor.action.fixAll", ("Ctrl+R",)))

    parsed = normalize_keybinding_rules([{"command": "-"}, {"command": "-" + REFACTOR_COMMAND_ID}])
    assert parsed == [remove_all]
