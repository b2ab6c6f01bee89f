# spacetime-mesh

This package works with simplex meshes in four-dimensional space-time.
It is a library. It has no command-line tool.

## Modules

- **`spacetime_mesh.geometry`** holds the primitives `HyperSphere`, `AlignedBox`,
  `Hyperplane` and `ParametrizedLine`:
  - `HyperSphere` has a `radius`, a `center` and a `distance` to a point.
  - `AlignedBox` has `from_points`, `sizes` and `intersects`.
  - `Hyperplane` has `from_point` and `signed_distance`.
  - `ParametrizedLine` has `through`, `point_at` and `intersection_parameter`.
- **`spacetime_mesh.geometric_simplex`** holds `GeometricSimplex`, a simplex with N
  vertices in D dimensions. You build it from a sequence of points, or with
  `GeometricSimplex.from_columns` from a D x N matrix. It computes:
  - the Cayley–Menger matrix and determinant;
  - content, the shortest edge, the circumsphere, the radius-edge ratio and quality;
  - the normal ray of a hypersurface simplex;
  - sub-simplices, in lexicographic order;
  - the bounding box;
  - the pentatope measures `omega` and `metric1` to `metric3`;
  - barycentric coordinates;
  - the sliver tests `well_shaped`, `sliver`, `sliver_simplex` and `small_sliver_simplex`;
  - an affine map through `transformed`.
- **`spacetime_mesh.plane_cut`** has `plane_cut(simplex, plane)`. It cuts a simplex in 4D
  with a plane of constant time and returns a 3D `Polyhedron`:
  - a pentatope gives the convex hull of the cut points;
  - a tetrahedron gives a triangle or a quadrilateral.
- **`spacetime_mesh.mixd`** reads and writes MIXD files:
  - the big-endian binary files `.mxyz`, `.mien`, `.mrng` and `.neim`;
  - the `.minf` text index, which is read into `MinfData`;
  - `positive_pentatope_element_det`, which checks the orientation of an element.

  A truncated binary file raises `MixdFormatError`.
- **`spacetime_mesh.statistics`** has `write_statistics(file, triangulation)`. It writes
  one CSV row of quality measures for each cell. Any iterable of cells that match the
  `WritableCell` protocol works: each cell needs `geometric_simplex()` and
  `is_surface_side(i)`.
- **`spacetime_mesh.surface_adapters`** holds `SDFSurfaceAdapter`. It wraps an exact
  signed distance field and answers these queries:
  - `closest_point` and `inside`;
  - `intersected_by_sphere`;
  - `raycast` and `raycast_line`, which trace spheres along the ray;
  - `bounding_box`.

  The field is any object with `signed_distance`, `distance`, `normal` and
  `bounding_box`.
- **`spacetime_mesh.lfs_schemes`** gives the local feature size with `Constant` or
  `BinaryImageApproximation`. `BinaryImageApproximation` takes a factor and an object
  that provides `distance_to_thinned_at` and `bounding_box`.
- **`spacetime_mesh.radius_schemes`** has `Constant`, which gives the same target
  radius everywhere.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import numpy as np
from spacetime_mesh.geometric_simplex import GeometricSimplex
from spacetime_mesh.geometry import Hyperplane
from spacetime_mesh.plane_cut import plane_cut

points = np.vstack([np.zeros(4), np.eye(4)])   # five points in 4D, one per row
simplex = GeometricSimplex(points)

print(simplex.content())             # 1/24
print(simplex.radius_edge_ratio())   # 1.0
print(simplex.sliver_simplex(2.0, 0.1))

plane = Hyperplane.from_point([0, 0, 0, 1], [0, 0, 0, 0.5])
polyhedron = plane_cut(simplex, plane)
print(polyhedron.size_of_facets())   # 4
```

This example writes a MIXD coordinate file and reads it back:

```python
from spacetime_mesh import mixd

path = mixd.write_mxyz("mesh.minf", [np.zeros(4), np.ones(4)])   # writes mesh.mxyz
print(mixd.read_mxyz(path))
```

## What is not included

The package measures and stores meshes but does not create them. It does not cover:

- a Delaunay triangulation or a mesh refinement algorithm;
- reading images or building distance transforms from them;
- a surface adapter for image data;
- a writer that turns a triangulation into a full set of MIXD files.

The MIXD functions work on vertex arrays and index rows that you supply.
`BinaryImageApproximation` needs a source of thinned distances that you supply.