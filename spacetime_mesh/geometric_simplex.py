"""Simplices embedded in Euclidean space and their quality measures."""

from __future__ import annotations

import math
from itertools import combinations
from typing import Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .geometry import AlignedBox, HyperSphere, ParametrizedLine

Vector = NDArray[np.float64]


class GeometricSimplex:
    """A simplex of N vertices embedded in D-dimensional space.

    The constructor takes the vertices as a sequence of points; ``vertices()``
    returns them as the columns of a D x N matrix.
    """

    __slots__ = ("_vertices",)

    def __init__(self, vertices: Iterable[ArrayLike]) -> None:
        points = np.array([np.asarray(v, dtype=np.float64) for v in vertices], dtype=np.float64)
        if points.ndim != 2 or points.shape[0] == 0:
            raise ValueError("a simplex needs at least one vertex of a common dimension")
        self._vertices = points.T.copy()

    @classmethod
    def from_columns(cls, matrix: ArrayLike) -> GeometricSimplex:
        """Build a simplex from a D x N matrix whose columns are the vertices."""
        return cls(np.asarray(matrix, dtype=np.float64).T)

    @property
    def dimension(self) -> int:
        return int(self._vertices.shape[0])

    @property
    def n_vertices(self) -> int:
        return int(self._vertices.shape[1])

    def _points(self) -> list[Vector]:
        return list(self._vertices.T)

    def vertices(self) -> Vector:
        """The vertices as columns of a D x N matrix."""
        return self._vertices.copy()

    def cayley_menger_matrix(self) -> Vector:
        n = self.n_vertices
        result = np.ones((n + 1, n + 1))
        np.fill_diagonal(result, 0.0)
        points = self._points()
        for i, j in combinations(range(n), 2):
            d = float(np.sum((points[i] - points[j]) ** 2))
            result[i + 1, j + 1] = result[j + 1, i + 1] = d
        return result

    def cayley_menger_determinant(self) -> float:
        return float(np.linalg.det(self.cayley_menger_matrix()))

    def all_squared_edge_lengths(self) -> list[float]:
        """Squared lengths of all edges, in vertex-pair order (0,1), (0,2), ..."""
        return [float(np.sum((a - b) ** 2)) for a, b in combinations(self._points(), 2)]

    def shortest_edge_length(self) -> float:
        lengths = self.all_squared_edge_lengths()
        if not lengths:
            raise ValueError("a simplex with a single vertex has no edges")
        return math.sqrt(min(lengths))

    def content(self) -> float:
        """Volume measure of the simplex in its own dimension N - 1."""
        n = self.n_vertices
        sign = 1.0 if n % 2 == 0 else -1.0
        value = sign * self.cayley_menger_determinant() / (math.factorial(n - 1) ** 2 * 2.0 ** (n - 1))
        return math.sqrt(value) if value >= 0 else math.nan

    def circumsphere(self) -> HyperSphere:
        """The smallest sphere through all vertices, centred in their affine hull."""
        points = self._points()
        origin = points[0]
        if len(points) == 1:
            return HyperSphere(0.0, origin)
        rows = np.array([p - origin for p in points[1:]])
        rhs = 0.5 * np.sum(rows**2, axis=1)
        coefficients = np.linalg.solve(rows @ rows.T, rhs)
        center = origin + rows.T @ coefficients
        return HyperSphere(float(np.linalg.norm(center - origin)), center)

    def radius_edge_ratio(self) -> float:
        return self.circumsphere().radius / self.shortest_edge_length()

    def quality(self) -> float:
        return self.content() / self.shortest_edge_length() ** (self.n_vertices - 1)

    def normal_ray(self) -> ParametrizedLine:
        """Unit normal through the circumcentre; only for hypersurface simplices (D == N)."""
        d = self.dimension
        if self.n_vertices != d:
            raise ValueError("normal ray is only defined when the vertex count equals the dimension")
        edges = self._vertices[:, 1:] - self._vertices[:, [0]]
        normal = np.array(
            [(-1.0) ** (i + d - 1) * np.linalg.det(np.delete(edges, i, axis=0)) for i in range(d)]
        )
        length = np.linalg.norm(normal)
        if length > 0:
            normal = normal / length
        return ParametrizedLine(self.circumsphere().center, normal)

    def sub_simplices(self, m: int) -> list[GeometricSimplex]:
        """All faces with m vertices, in lexicographic order of vertex indices."""
        if not 1 <= m <= self.n_vertices:
            raise ValueError(f"face size must lie between 1 and {self.n_vertices}")
        points = self._points()
        return [GeometricSimplex([points[i] for i in idx]) for idx in combinations(range(len(points)), m)]

    def all_sub_simplices(self, m: int | None = None, l: int = 1) -> tuple[list[GeometricSimplex], ...]:
        """Faces of every size from l to m vertices, smallest first."""
        top = self.n_vertices if m is None else m
        if l > top:
            raise ValueError("the lower face size must not exceed the upper one")
        return tuple(self.sub_simplices(k) for k in range(l, top + 1))

    def to_parameterized_line(self) -> tuple[ParametrizedLine, float]:
        """The line through an edge and the edge's length."""
        if self.n_vertices != 2:
            raise ValueError("only an edge can be converted to a line")
        a, b = self._points()
        return ParametrizedLine.through(a, b), float(np.linalg.norm(a - b))

    def bounding_box(self) -> AlignedBox:
        return AlignedBox.from_points(self._points())

    def _require_pentatope(self) -> None:
        if self.dimension != 4 or self.n_vertices != 5:
            raise ValueError("this measure is only defined for pentatopes in 4D")

    def omega(self) -> float:
        self._require_pentatope()
        l = self.all_squared_edge_lengths()

        def sq(x: float) -> float:
            return x * x

        return (
            600.0 * sq(l[0] - l[1])
            + 900.0 * sq(l[4])
            + 100.0 * sq(-2.0 * (l[0] + l[1]) + l[4])
            + 75.0 * sq(l[0] - l[1] - 3.0 * (l[5] + l[7]))
            + 25.0 * sq(l[0] + l[1] + l[4] - 3.0 * (l[2] + l[5] + l[7]))
            + 25.0 * sq(l[0] + l[1] - 6.0 * l[2] - 2.0 * l[4] + 3.0 * (l[5] + l[7]))
            + 45.0 * sq(l[0] - l[1] + l[5] - 4.0 * l[6] - l[7] + 4.0 * l[8])
            + 15.0 * sq(l[0] + l[1] + 2.0 * l[2] - 8.0 * l[3] - 2.0 * l[4] - l[5] + 4.0 * l[6] - l[7] + 4.0 * l[8])
            + 30.0 * sq(-l[0] - l[1] + l[2] + 2.0 * l[3] - l[4] + l[5] + 2.0 * l[6] + l[7] + 2.0 * l[8] - 6.0 * l[9])
            + 9.0 * sq(l[0] + l[1] + l[2] - 4.0 * l[3] + l[4] + l[5] - 4.0 * l[6] + l[7] - 4.0 * (l[8] + l[9]))
        )

    def metric1(self) -> float:
        self._require_pentatope()
        total = sum(self.all_squared_edge_lengths())
        return 5.0 ** (3.0 / 4.0) * math.sqrt(384.0 * self.content()) / total

    def metric2(self) -> float:
        self._require_pentatope()
        total = sum(self.all_squared_edge_lengths())
        return 6.0 * total / math.sqrt(self.omega())

    def metric3(self) -> float:
        return self.metric1() * self.metric2()

    def well_shaped(self, rho_bar: float, tau_bar: float) -> bool:
        return self.radius_edge_ratio() < rho_bar and self.quality() >= tau_bar

    def sliver(self, rho_bar: float, tau_bar: float) -> bool:
        """Small radius-edge ratio but poor quality, with all lower faces of size >= 4 well shaped."""
        n = self.n_vertices
        if n < 4:
            return False
        if self.radius_edge_ratio() >= rho_bar or self.quality() >= tau_bar:
            return False
        if n > 4:
            return all(
                face.well_shaped(rho_bar, tau_bar)
                for faces in self.all_sub_simplices(n - 1, 4)
                for face in faces
            )
        return True

    def sliver_simplex(self, rho_bar: float, tau_bar: float) -> int:
        """Dimension of the smallest face that is a sliver, or 0 if there is none."""
        n = self.n_vertices
        if n < 4:
            return 0
        for size, faces in zip(range(4, n + 1), self.all_sub_simplices(n, 4)):
            if any(face.sliver(rho_bar, tau_bar) for face in faces):
                return size - 1
        return 0

    def small_sliver_simplex(self, rho_bar: float, tau_bar: float, max_radius: float) -> bool:
        return self.circumsphere().radius < max_radius and self.sliver_simplex(rho_bar, tau_bar) != 0

    def transformed(self, linear: ArrayLike, translation: ArrayLike) -> GeometricSimplex:
        """A new simplex with every vertex v mapped to linear @ v + translation."""
        matrix = np.asarray(linear, dtype=np.float64)
        shift = np.asarray(translation, dtype=np.float64).reshape(-1, 1)
        return GeometricSimplex.from_columns(matrix @ self._vertices + shift)

    def barycentric_coordinates(self, point: ArrayLike) -> Vector:
        """Weights of the vertices reproducing the point; they sum to one."""
        d = self.dimension
        if self.n_vertices != d + 1:
            raise ValueError("barycentric coordinates need a full-dimensional simplex")
        last = self._vertices[:, d]
        basis = self._vertices[:, :d] - last[:, None]
        head = np.linalg.solve(basis, np.asarray(point, dtype=np.float64) - last)
        return np.append(head, 1.0 - head.sum())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeometricSimplex):
            return NotImplemented
        return self._vertices.shape == other._vertices.shape and bool(np.array_equal(self._vertices, other._vertices))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GeometricSimplex({self._vertices.T.tolist()!r})"