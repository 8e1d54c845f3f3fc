from .code_action_menu import CodeActionMenu, CodeActionMenuCanceled, CodeActionShowOptions
from .keybinding_resolver import CodeActionKeybindingResolver
from .keybinding_service import KeybindingService
from .kinds import CodeActionKind

__all__ = [
    "CodeActionKind",
    "CodeActionKeybindingResolver",
    "CodeActionMenu",
    "CodeActionMenuCanceled",
    "CodeActionShowOptions",
    "KeybindingService",
]
