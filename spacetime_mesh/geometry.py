"""Basic geometric primitives in arbitrary dimension: spheres, boxes, planes and lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

Vector = NDArray[np.float64]


def _as_vector(value: ArrayLike) -> Vector:
    vector = np.asarray(value, dtype=np.float64)
    if vector.ndim != 1:
        raise ValueError(f"expected a one-dimensional vector, got shape {vector.shape}")
    return vector


@dataclass(frozen=True, eq=False)
class HyperSphere:
    """A sphere given by its radius and centre."""

    radius: float
    center: Vector

    def __post_init__(self) -> None:
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "center", _as_vector(self.center))

    @property
    def dimension(self) -> int:
        return int(self.center.shape[0])

    def signed_distance(self, point: ArrayLike) -> float:
        """Distance to the sphere surface, negative inside."""
        return float(np.linalg.norm(_as_vector(point) - self.center) - self.radius)

    def distance(self, point: ArrayLike) -> float:
        """Unsigned distance from the point to the sphere surface."""
        return abs(self.signed_distance(point))


@dataclass(frozen=True, eq=False)
class AlignedBox:
    """An axis-aligned box spanned by a minimum and a maximum corner."""

    min: Vector
    max: Vector

    def __post_init__(self) -> None:
        low = _as_vector(self.min)
        high = _as_vector(self.max)
        if low.shape != high.shape:
            raise ValueError("box corners must have the same dimension")
        object.__setattr__(self, "min", low)
        object.__setattr__(self, "max", high)

    @classmethod
    def from_points(cls, points: Iterable[ArrayLike]) -> AlignedBox:
        """The smallest box containing all the given points."""
        stacked = np.array([_as_vector(p) for p in points], dtype=np.float64)
        if stacked.size == 0:
            raise ValueError("cannot build a bounding box from no points")
        return cls(stacked.min(axis=0), stacked.max(axis=0))

    def sizes(self) -> Vector:
        """Edge lengths of the box along each axis."""
        return self.max - self.min

    def intersects(self, other: AlignedBox) -> bool:
        """Whether the two closed boxes share at least one point."""
        return bool(np.all(self.min <= other.max) and np.all(other.min <= self.max))


@dataclass(frozen=True, eq=False)
class Hyperplane:
    """The set of points p with normal . p + offset == 0."""

    normal: Vector
    offset: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "normal", _as_vector(self.normal))
        object.__setattr__(self, "offset", float(self.offset))

    @classmethod
    def from_point(cls, normal: ArrayLike, point: ArrayLike) -> Hyperplane:
        """The plane with the given normal passing through the given point."""
        n = _as_vector(normal)
        return cls(n, -float(n @ _as_vector(point)))

    def signed_distance(self, point: ArrayLike) -> float:
        return float(self.normal @ _as_vector(point) + self.offset)


@dataclass(frozen=True, eq=False)
class ParametrizedLine:
    """A line origin + t * direction."""

    origin: Vector
    direction: Vector

    def __post_init__(self) -> None:
        origin = _as_vector(self.origin)
        direction = _as_vector(self.direction)
        if origin.shape != direction.shape:
            raise ValueError("origin and direction must have the same dimension")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)

    @classmethod
    def through(cls, start: ArrayLike, end: ArrayLike) -> ParametrizedLine:
        """The line starting at start with unit direction towards end."""
        a = _as_vector(start)
        delta = _as_vector(end) - a
        length = np.linalg.norm(delta)
        direction = delta / length if length > 0 else delta
        return cls(a, direction)

    def point_at(self, t: float) -> Vector:
        return self.origin + t * self.direction

    def intersection_parameter(self, plane: Hyperplane) -> float:
        """Parameter at which the line meets the plane; not finite if parallel."""
        numerator = -(plane.offset + float(plane.normal @ self.origin))
        denominator = float(plane.normal @ self.direction)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(np.float64(numerator) / np.float64(denominator))