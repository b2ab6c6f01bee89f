"""Per-cell quality statistics for writable triangulations."""

from __future__ import annotations

import os
from typing import Iterable, Protocol, Union, runtime_checkable

from .geometric_simplex import GeometricSimplex
from .geometry import AlignedBox

PathLike = Union[str, "os.PathLike[str]"]

HEADER = (
    "full_cell_id,content,shortest_edge_length,circumsphere_radius,"
    "radius_edge_ratio,quality,metric1,metric2,metric3"
)


@runtime_checkable
class WritableCell(Protocol):
    """A cell that exposes its pentatope and which of its sides lie on the surface."""

    def geometric_simplex(self) -> GeometricSimplex: ...

    def is_surface_side(self, i: int) -> bool: ...


@runtime_checkable
class WritableTriangulation(Protocol):
    """An iterable of writable cells with a bounding box."""

    def bounding_box(self) -> AlignedBox: ...

    def __iter__(self): ...


def _format_number(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def write_statistics(file: PathLike, triangulation: Iterable[WritableCell]) -> None:
    """Write one CSV row of quality measures for every cell of the triangulation."""
    with open(file, "w", encoding="utf-8", newline="") as out:
        out.write(HEADER + "\n")
        for full_cell_id, cell in enumerate(triangulation):
            simplex = cell.geometric_simplex()
            values = (
                simplex.content(),
                simplex.shortest_edge_length(),
                simplex.circumsphere().radius,
                simplex.radius_edge_ratio(),
                simplex.quality(),
                simplex.metric1(),
                simplex.metric2(),
                simplex.metric3(),
            )
            out.write(",".join([str(full_cell_id), *map(_format_number, values)]) + "\n")