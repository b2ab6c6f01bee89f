"""Surface adapters that answer geometric queries about a signed distance field."""

from __future__ import annotations

import copy
from typing import Optional, Protocol, runtime_checkable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .geometry import AlignedBox, HyperSphere, ParametrizedLine

Vector = NDArray[np.float64]


@runtime_checkable
class ExactSignedDistance(Protocol):
    """A signed distance field that gives the exact distance to its surface."""

    def signed_distance(self, point: Vector) -> float: ...

    def distance(self, point: Vector) -> float: ...

    def normal(self, point: Vector) -> Vector: ...

    def bounding_box(self) -> AlignedBox: ...


class SDFSurfaceAdapter:
    """Surface queries on top of an exact signed distance field.

    Raycasts are answered by sphere tracing along the ray.
    """

    DISTANCE_THRESHOLD = 1e-3

    __slots__ = ("_surface",)

    def __init__(self, surface: ExactSignedDistance) -> None:
        self._surface = surface

    @property
    def surface(self) -> ExactSignedDistance:
        return self._surface

    def closest_point(self, point: ArrayLike) -> Vector:
        """The point on the surface closest to the given point."""
        p = np.asarray(point, dtype=np.float64)
        normal = np.asarray(self._surface.normal(p), dtype=np.float64)
        return p - float(self._surface.signed_distance(p)) * normal

    def intersected_by_sphere(self, sphere: HyperSphere) -> bool:
        """Whether the sphere reaches past the surface by more than the threshold."""
        return sphere.radius - float(self._surface.distance(sphere.center)) > self.DISTANCE_THRESHOLD

    def bounding_box(self) -> AlignedBox:
        return self._surface.bounding_box()

    def inside(self, point: ArrayLike) -> bool:
        return float(self._surface.signed_distance(np.asarray(point, dtype=np.float64))) < 0

    def raycast(self, start: ArrayLike, direction: ArrayLike, max_distance: float) -> Optional[Vector]:
        """First point along the ray within the threshold of the surface, or None."""
        origin = np.asarray(start, dtype=np.float64)
        step = np.asarray(direction, dtype=np.float64)
        total = 0.0
        while total < max_distance:
            point = origin + total * step
            distance = float(self._surface.distance(point))
            if distance < self.DISTANCE_THRESHOLD:
                return point
            total += distance
        return None

    def raycast_line(self, ray: ParametrizedLine, max_distance: float) -> Optional[Vector]:
        """Raycast along a parametrized line."""
        return self.raycast(ray.origin, ray.direction, max_distance)

    def signed_distance_type(self) -> ExactSignedDistance:
        """An independent copy of the underlying distance field."""
        return copy.deepcopy(self._surface)