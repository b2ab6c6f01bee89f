"""Schemes estimating the local feature size at a point."""

from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import ArrayLike

from .geometry import AlignedBox


class ThinnedDistanceSource(Protocol):
    """Something that knows the distance to a thinned medial structure."""

    def distance_to_thinned_at(self, point: ArrayLike) -> float: ...

    def bounding_box(self) -> AlignedBox: ...


class Constant:
    """The same local feature size everywhere."""

    __slots__ = ("_value",)

    def __init__(self, value: float) -> None:
        self._value = float(value)

    def __call__(self, point: ArrayLike) -> float:
        return self._value

    def max(self) -> float:
        return self._value


class BinaryImageApproximation:
    """Local feature size as a multiple of the distance to the thinned image."""

    __slots__ = ("_value", "_edt_reader")

    def __init__(self, value: float, edt_reader: ThinnedDistanceSource) -> None:
        self._value = float(value)
        self._edt_reader = edt_reader

    def __call__(self, point: ArrayLike) -> float:
        return self._value * float(self._edt_reader.distance_to_thinned_at(point))

    def max(self) -> float:
        """Upper bound: the factor times half the largest extent of the image."""
        sizes = self._edt_reader.bounding_box().sizes()
        return self._value * float(np.max(sizes)) / 2.0