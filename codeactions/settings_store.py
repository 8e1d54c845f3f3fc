from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: dict[str, Any] = {
    "keybindings": [],
}


class SettingsStoreError(RuntimeError):
    """Raised when a settings file cannot be loaded."""


def deep_merge_defaults(data: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Merge defaults into data without overwriting explicitly provided values."""
    merged = deepcopy(dict(data))
    for key, default_value in defaults.items():
        if key not in merged:
            merged[key] = deepcopy(default_value)
            continue
        current = merged[key]
        if isinstance(current, dict) and isinstance(default_value, dict):
            merged[key] = deep_merge_defaults(current, default_value)
    return merged


def dot_get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    if not key:
        return data
    current: Any = data
    for part in key.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return default
        current = current[part]
    return current


class JsonSettingsStore:
    """Read-only JSON settings file layered over defaults."""

    def __init__(self, path: Path | str, defaults: Mapping[str, Any] | None = None) -> None:
        self.path = Path(path)
        self.defaults: dict[str, Any] = deepcopy(dict(DEFAULT_SETTINGS if defaults is None else defaults))
        self.data: dict[str, Any] = deep_merge_defaults({}, self.defaults)
        self.last_error: str | None = None

    def load(self, *, strict: bool = False) -> dict[str, Any]:
        previous_data = deepcopy(self.data)
        self.last_error = None
        if not self.path.exists():
            self.data = deep_merge_defaults({}, self.defaults)
            return self.data

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            self.last_error = f"Could not read settings file '{self.path}': {exc}"
        else:
            if isinstance(raw, dict):
                self.data = deep_merge_defaults(raw, self.defaults)
                return self.data
            self.last_error = (
                f"Settings root in '{self.path}' must be a JSON object, "
                f"found {type(raw).__name__}."
            )

        if strict:
            raise SettingsStoreError(self.last_error)
        # Keep the last good data so a broken edit does not drop every binding.
        logger.warning("%s", self.last_error)
        self.data = deep_merge_defaults(previous_data, self.defaults)
        return self.data

    def get(self, key: str, default: Any = None) -> Any:
        return dot_get(self.data, key, default)

    def has(self, key: str) -> bool:
        marker = object()
        return self.get(key, marker) is not marker

    def snapshot(self) -> dict[str, Any]:
        return deepcopy(self.data)


__all__ = [
    "DEFAULT_SETTINGS",
    "SettingsStoreError",
    "deep_merge_defaults",
    "dot_get",
    "JsonSettingsStore",
]
