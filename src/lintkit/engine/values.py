from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Static(Generic[T]):
    value: T

    def evaluate(self, args: Sequence[Any] = ()) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Computed(Generic[T]):
    fn: Callable[..., T]

    def evaluate(self, args: Sequence[Any] = ()) -> T:
        return self.fn(*args)


Dynamic = Static[T] | Computed[T]


def dynamic(value: Any) -> Dynamic[Any] | None:
    """
    Wrap a configured value so callers can evaluate it without type checks.

    Already-wrapped values pass through unchanged; `None` stays `None`.
    """

    if value is None or isinstance(value, (Static, Computed)):
        return value
    if callable(value):
        return Computed(value)
    return Static(value)
