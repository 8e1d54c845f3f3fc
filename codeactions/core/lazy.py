"""Deferred, single-assignment values."""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    """Computes ``factory()`` on first access of ``value`` and keeps it.

    There is no invalidation: once computed, the value is fixed for the
    lifetime of the instance.
    """

    __slots__ = ("_factory", "_has_value", "_value")

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._has_value = False
        self._value: T | None = None

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def value(self) -> T:
        if not self._has_value:
            self._value = self._factory()
            self._has_value = True
        return self._value  # type: ignore[return-value]


__all__ = ["Lazy"]
