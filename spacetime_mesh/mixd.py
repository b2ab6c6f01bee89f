"""Reading and writing of MIXD mesh files (big-endian binary plus a text index)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray

PathLike = Union[str, "os.PathLike[str]"]

_FLOAT = np.dtype(">f8")
_INT = np.dtype(">i4")


class MixdFormatError(ValueError):
    """Raised when a MIXD file is truncated or malformed."""


@dataclass
class MinfData:
    """File references found in a .minf file."""

    mxyz_file: Path | None = None
    mien_file: Path | None = None
    mrng_file: Path | None = None


def write_minf(
    minf_file: PathLike,
    mxyz_file: PathLike,
    mien_file: PathLike,
    mrng_file: PathLike,
    number_elements: int,
    number_nodes: int,
) -> None:
    """Write the text index describing a space-time pentatope mesh."""
    lines = [
        f"ne {number_elements}",
        f"nn {number_nodes}",
        "nen 5",
        "nmd 4",
        f"mxyz {os.fspath(mxyz_file)}",
        f"mien {os.fspath(mien_file)}",
        f"mrng {os.fspath(mrng_file)}",
    ]
    Path(minf_file).write_text("".join(line + "\n" for line in lines))


def write_neim(neim_file: PathLike, neim: Sequence[Sequence[int]]) -> None:
    """Write the node-element index mapping, zero-padding rows to equal length."""
    if not neim:
        raise ValueError("node element mapping must have at least one row")
    width = max(len(row) for row in neim)
    table = np.zeros((len(neim), width), dtype=_INT)
    for index, row in enumerate(neim):
        table[index, : len(row)] = row
    Path(neim_file).write_bytes(table.tobytes())


def write_mxyz(
    file: PathLike, vertices: ArrayLike, scale: float = 1.0, min_time: float = 0.0
) -> Path:
    """Write vertex coordinates, shifting time by min_time then scaling; return the path used."""
    path = Path(file).with_suffix(".mxyz")
    coords = np.array(vertices, dtype=np.float64).reshape(-1, 4)
    coords[:, 3] -= min_time
    coords *= scale
    path.write_bytes(coords.astype(_FLOAT).tobytes())
    return path


def write_int_mixd(file: PathLike, extension: str, rows: ArrayLike) -> Path:
    """Write rows of five integers with the given extension; return the path used."""
    path = Path(file).with_suffix(extension)
    table = np.asarray(rows, dtype=np.int64).reshape(-1, 5)
    path.write_bytes(table.astype(_INT).tobytes())
    return path


def positive_pentatope_element_det(vertex_ids: Sequence[int], vertices: ArrayLike) -> bool:
    """Whether the pentatope with these vertex indices is positively oriented."""
    coords = np.asarray(vertices, dtype=np.float64)
    last = coords[vertex_ids[4]]
    xr1, xr2, xr3, xr4 = (coords[vertex_ids[k]] - last for k in range(4))

    cf11 = (
        +xr4[3] * (xr2[1] * xr3[2] - xr3[1] * xr2[2])
        - xr4[2] * (xr2[1] * xr3[3] - xr3[1] * xr2[3])
        + xr4[1] * (xr2[2] * xr3[3] - xr3[2] * xr2[3])
    )
    cf12 = (
        -xr4[3] * (xr1[1] * xr3[2] - xr3[1] * xr1[2])
        + xr4[2] * (xr1[1] * xr3[3] - xr3[1] * xr1[3])
        - xr4[1] * (xr1[2] * xr3[3] - xr3[2] * xr1[3])
    )
    cf13 = (
        +xr4[3] * (xr1[1] * xr2[2] - xr2[1] * xr1[2])
        - xr4[2] * (xr1[1] * xr2[3] - xr2[1] * xr1[3])
        + xr4[1] * (xr1[2] * xr2[3] - xr2[2] * xr1[3])
    )
    cf14 = (
        -xr3[3] * (xr1[1] * xr2[2] - xr2[1] * xr1[2])
        + xr3[2] * (xr1[1] * xr2[3] - xr2[1] * xr1[3])
        - xr3[1] * (xr1[2] * xr2[3] - xr2[2] * xr1[3])
    )
    determinant = xr1[0] * cf11 + xr2[0] * cf12 + xr3[0] * cf13 + xr4[0] * cf14
    return bool(determinant > 0.0)


def _read_records(path: PathLike, dtype: np.dtype, width: int) -> NDArray:
    data = Path(path).read_bytes()
    if len(data) % (dtype.itemsize * width):
        raise MixdFormatError("Unexpected end of file")
    return np.frombuffer(data, dtype=dtype).reshape(-1, width)


def read_mxyz(mxyz_file: PathLike) -> NDArray[np.float64]:
    """Read vertex coordinates as an array of shape (n, 4)."""
    return _read_records(mxyz_file, _FLOAT, 4).astype(np.float64)


def read_data(data_file: PathLike, n: int) -> NDArray[np.float64]:
    """Read per-node data with n values per node as an array of shape (k, n)."""
    if n < 1:
        raise ValueError("each record must hold at least one value")
    return _read_records(data_file, _FLOAT, n).astype(np.float64)


def read_int_mixd(file: PathLike) -> NDArray[np.int64]:
    """Read rows of five integers as an array of shape (n, 5)."""
    return _read_records(file, _INT, 5).astype(np.int64)


def read_minf(minf_file: PathLike) -> MinfData:
    """Collect the mxyz, mien and mrng file references from a .minf file."""
    data = MinfData()
    with open(minf_file, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n")
            if line.startswith("mxyz "):
                data.mxyz_file = Path(line[5:])
            elif line.startswith("mien "):
                data.mien_file = Path(line[5:])
            elif line.startswith("mrng "):
                data.mrng_file = Path(line[5:])
    return data