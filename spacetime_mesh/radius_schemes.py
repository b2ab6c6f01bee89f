"""Schemes giving the target element radius at a point."""

from __future__ import annotations

from numpy.typing import ArrayLike


class Constant:
    """The same radius everywhere."""

    __slots__ = ("_value",)

    def __init__(self, value: float) -> None:
        self._value = float(value)

    def __call__(self, point: ArrayLike) -> float:
        return self._value