# tests/conftest.py
"""Shared fixtures for the code action tests.

Qt is forced onto the ``offscreen`` platform so chord canonicalization through
``QKeySequence`` works on machines without a display.
"""

from __future__ import annotations

import os
from typing import Callable, Iterator

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtGui import QGuiApplication  # noqa: E402

from codeactions.core.keybindings import ResolvedKeybindingItem  # noqa: E402
from tests.stubs import FakeKeybindingProvider  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def qt_app() -> Iterator[QGuiApplication]:
    """Provide one GUI application for the whole session."""
    app = QGuiApplication.instance() or QGuiApplication([])
    yield app


@pytest.fixture
def make_provider() -> Callable[..., FakeKeybindingProvider]:
    def _make(*items: ResolvedKeybindingItem) -> FakeKeybindingProvider:
        return FakeKeybindingProvider(items)

    return _make
