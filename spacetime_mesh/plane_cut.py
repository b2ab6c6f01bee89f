"""Cutting 4D simplices by hyperplanes into 3D polyhedra."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import ConvexHull

from .geometric_simplex import GeometricSimplex
from .geometry import Hyperplane

_DUPLICATE_EPS = 1e-9
_HULL_EPS = 1e-12


@dataclass(frozen=True, eq=False)
class Polyhedron:
    """A polyhedral surface in 3D: vertex coordinates and facets as index tuples."""

    vertices: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 3)))
    facets: tuple[tuple[int, ...], ...] = ()

    def __post_init__(self) -> None:
        coords = np.asarray(self.vertices, dtype=np.float64).reshape(-1, 3)
        object.__setattr__(self, "vertices", coords)
        object.__setattr__(self, "facets", tuple(tuple(int(i) for i in f) for f in self.facets))
        for facet in self.facets:
            if any(not 0 <= i < len(coords) for i in facet):
                raise ValueError("facet refers to a vertex that does not exist")

    def size_of_vertices(self) -> int:
        return int(self.vertices.shape[0])

    def size_of_facets(self) -> int:
        return len(self.facets)

    def facet_degrees(self) -> list[int]:
        """Number of vertices of every facet, in facet order."""
        return [len(facet) for facet in self.facets]

    def is_empty(self) -> bool:
        return self.size_of_vertices() == 0


def _unique_points(points: list[NDArray[np.float64]], threshold: float) -> list[NDArray[np.float64]]:
    kept: list[NDArray[np.float64]] = []
    for point in points:
        if all(float(np.sum((point - other) ** 2)) >= threshold for other in kept):
            kept.append(point)
    return kept


def _sorted_polygon(points: list[NDArray[np.float64]]) -> NDArray[np.float64]:
    """Order coplanar points by angle around their centroid in their common plane."""
    matrix = np.array(points)
    differences = (matrix[1:] - matrix[0]).T
    u, _, _ = np.linalg.svd(differences, full_matrices=True)
    projection = u[:, :2]
    projected = matrix @ projection
    center = projected.mean(axis=0)
    centered = projected - center
    order = sorted(range(len(points)), key=lambda i: math.atan2(centered[i, 1], centered[i, 0]))
    return matrix[order]


def _convex_hull(points: list[NDArray[np.float64]]) -> Polyhedron:
    if not points:
        return Polyhedron()
    scale = max(1.0, max(float(np.max(np.abs(p))) for p in points))
    unique = _unique_points(points, (_HULL_EPS * scale) ** 2)
    if len(unique) < 3:
        return Polyhedron(np.array(unique), ())
    if len(unique) == 3:
        return Polyhedron(np.array(unique), ((0, 1, 2),))
    matrix = np.array(unique)
    centered = matrix - matrix.mean(axis=0)
    singular = np.linalg.svd(centered, compute_uv=False)
    if singular[2] <= _HULL_EPS * max(singular[0], 1.0):
        polygon = _sorted_polygon(unique)
        return Polyhedron(polygon, (tuple(range(len(polygon))),))

    hull = ConvexHull(matrix)
    used = sorted(int(i) for i in hull.vertices)
    remap = {old: new for new, old in enumerate(used)}
    facets = []
    for simplex, equation in zip(hull.simplices, hull.equations):
        a, b, c = (int(i) for i in simplex)
        normal = np.cross(matrix[b] - matrix[a], matrix[c] - matrix[a])
        if float(normal @ equation[:3]) < 0:
            b, c = c, b
        facets.append((remap[a], remap[b], remap[c]))
    return Polyhedron(matrix[used], tuple(facets))


def _cut_facet(points: list[NDArray[np.float64]], shortest_edge: float) -> Polyhedron:
    if len(points) >= 4:
        points = _unique_points(points, _DUPLICATE_EPS * shortest_edge**2)
    if len(points) == 4:
        polygon = _sorted_polygon(points)
        return Polyhedron(polygon, ((0, 1, 2, 3),))
    if len(points) == 3:
        return Polyhedron(np.array(points), ((0, 1, 2),))
    return Polyhedron()


def plane_cut(simplex: GeometricSimplex, plane: Hyperplane) -> Polyhedron:
    """Intersect a simplex in 4D with a hyperplane normal to the fourth axis.

    The cut is projected onto the first three coordinates. A pentatope yields the
    convex hull of the cut points; a tetrahedron yields a triangle or quadrilateral.
    """
    if simplex.dimension != 4 or simplex.n_vertices < 4:
        raise ValueError("plane cuts need a simplex of at least 4 vertices in 4D")
    points: list[NDArray[np.float64]] = []
    for edge in simplex.sub_simplices(2):
        line, length = edge.to_parameterized_line()
        parameter = line.intersection_parameter(plane)
        if 0.0 <= parameter <= length:
            points.append(line.point_at(parameter)[:3].copy())
    if simplex.n_vertices == 5:
        return _convex_hull(points)
    return _cut_facet(points, simplex.shortest_edge_length())