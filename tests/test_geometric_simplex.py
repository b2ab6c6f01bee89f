import math

import numpy as np
import pytest

from spacetime_mesh.geometric_simplex import GeometricSimplex

EPS = np.finfo(float).eps

UNIT4 = [
    [0.0, 0.0, 0.0, 0.0],
    [1.0, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
]

SLIVER4 = [
    [0.0, 0.0, 0.0, 0.0],
    [0.9, 0.0, 0.0, 0.0],
    [0.0, 1.0, 0.0, 0.0],
    [0.0, 0.0, 1.0, 0.0],
    [0.0, 0.0, 0.0, 1.0],
]


@pytest.fixture
def simplex4():
    return GeometricSimplex(UNIT4)


@pytest.fixture
def simplex3():
    return GeometricSimplex(UNIT4[:4])


@pytest.fixture
def sliver():
    return GeometricSimplex(SLIVER4)


def _faces(simplex, m):
    return sorted(tuple(map(tuple, face.vertices().T)) for face in simplex.sub_simplices(m))


def _expected_faces(m):
    from itertools import combinations

    return sorted(tuple(tuple(p) for p in c) for c in combinations(UNIT4, m))


def test_4simplex_bounding_box(simplex4):
    box = simplex4.bounding_box()
    assert np.array_equal(box.min, [0.0, 0.0, 0.0, 0.0])
    assert np.array_equal(box.max, [1.0, 1.0, 1.0, 1.0])


def test_4simplex_shortest_edge(simplex4):
    assert simplex4.shortest_edge_length() == 1.0


def test_4simplex_cayley_menger(simplex4):
    expected = np.ones((6, 6))
    expected[2:, 2:] += 1.0
    np.fill_diagonal(expected, 0.0)
    assert np.array_equal(simplex4.cayley_menger_matrix(), expected)
    assert simplex4.cayley_menger_determinant() == pytest.approx(-16.0)
    assert simplex4.content() == pytest.approx(1.0 / 24.0)


def test_4simplex_circumsphere(simplex4):
    sphere = simplex4.circumsphere()
    for vertex in simplex4.vertices().T:
        assert sphere.distance(vertex) < math.sqrt(EPS)


def test_4simplex_quality_metrics(simplex4):
    assert simplex4.radius_edge_ratio() == pytest.approx(1.0)
    assert simplex4.quality() == pytest.approx(1.0 / 24.0)


@pytest.mark.parametrize("m,count", [(4, 5), (3, 10), (2, 10)])
def test_4simplex_sub_simplices(simplex4, m, count):
    faces = simplex4.sub_simplices(m)
    assert len(faces) == count
    assert _faces(simplex4, m) == _expected_faces(m)


def test_4simplex_all_sub_simplices(simplex4):
    edges, triangles, tets = simplex4.all_sub_simplices(4, 2)
    assert (len(edges), len(triangles), len(tets)) == (10, 10, 5)
    assert sorted(tuple(map(tuple, f.vertices().T)) for f in tets) == _expected_faces(4)
    assert sorted(tuple(map(tuple, f.vertices().T)) for f in triangles) == _expected_faces(3)
    assert sorted(tuple(map(tuple, f.vertices().T)) for f in edges) == _expected_faces(2)


def test_sliver_count_well_shaped(sliver):
    faces = sliver.sub_simplices(4)
    assert sum(f.well_shaped(1.0, 0.2) for f in faces) == 3
    assert sum(f.well_shaped(0.5, 0.2) for f in faces) == 0
    assert sum(f.well_shaped(1.0, 0.1) for f in faces) == 5


def test_sliver_4d(sliver):
    assert sliver.sliver(2.0, 0.1)
    assert not sliver.sliver(1.0, 0.2)
    assert not sliver.sliver(2.0, 0.01)
    assert not sliver.sliver(1.0, 0.1)


def test_sliver_3d(sliver):
    face = sliver.sub_simplices(4)[4]
    assert face.sliver(1.0, 0.3)
    assert not face.sliver(1.0, 0.1)
    assert not face.sliver(0.5, 0.2)


def test_sliver_simplex(sliver):
    assert sliver.sliver_simplex(2.0, 0.1) == 4
    assert sliver.sliver_simplex(1.0, 0.3) == 3
    assert sliver.sliver_simplex(1.0, 0.01) == 0
    assert sliver.sliver_simplex(1.0, 0.1) == 0


def test_small_sliver_simplex(sliver):
    assert sliver.small_sliver_simplex(2.0, 0.1, 2.0)
    assert sliver.small_sliver_simplex(1.0, 0.3, 2.0)
    assert not sliver.small_sliver_simplex(1.0, 0.01, 2.0)
    assert not sliver.small_sliver_simplex(1.0, 0.1, 2.0)
    assert not sliver.small_sliver_simplex(2.0, 0.1, 0.5)
    assert not sliver.small_sliver_simplex(1.0, 0.2, 0.5)
    assert not sliver.small_sliver_simplex(1.0, 0.01, 0.5)
    assert not sliver.small_sliver_simplex(1.0, 0.1, 0.5)


def test_3simplex_bounding_box(simplex3):
    box = simplex3.bounding_box()
    assert np.array_equal(box.min, [0.0, 0.0, 0.0, 0.0])
    assert np.array_equal(box.max, [1.0, 1.0, 1.0, 0.0])


def test_3simplex_cayley_menger(simplex3):
    expected = np.ones((5, 5))
    expected[2:, 2:] += 1.0
    np.fill_diagonal(expected, 0.0)
    assert simplex3.shortest_edge_length() == 1.0
    assert np.array_equal(simplex3.cayley_menger_matrix(), expected)
    assert simplex3.cayley_menger_determinant() == pytest.approx(8.0)
    assert simplex3.content() == pytest.approx(1.0 / 6.0)


def test_3simplex_circumsphere(simplex3):
    sphere = simplex3.circumsphere()
    for vertex in simplex3.vertices().T:
        assert sphere.distance(vertex) < math.sqrt(EPS)


def test_3simplex_quality_metrics(simplex3):
    assert simplex3.radius_edge_ratio() == pytest.approx(math.sqrt(0.75))
    assert simplex3.quality() == pytest.approx(1.0 / 6.0)


def test_3simplex_normal_ray(simplex3):
    ray = simplex3.normal_ray()
    assert np.max(np.abs(ray.origin - [0.5, 0.5, 0.5, 0.0])) < math.sqrt(EPS)
    assert np.array_equal(ray.direction, [0.0, 0.0, 0.0, 1.0])


def test_normal_ray_requires_hypersurface(simplex4):
    with pytest.raises(ValueError):
        simplex4.normal_ray()


def test_barycentric_coordinates_reproduce_point():
    rng = np.random.default_rng(11)
    for _ in range(10):
        simplex = GeometricSimplex.from_columns(rng.uniform(-1, 1, size=(4, 5)))
        for _ in range(10):
            point = rng.uniform(-1, 1, size=4)
            bary = simplex.barycentric_coordinates(point)
            assert np.allclose(simplex.vertices() @ bary, point)
            assert bary.sum() == pytest.approx(1.0)


def test_to_parameterized_line_of_edge(simplex4):
    edge = simplex4.sub_simplices(2)[0]
    line, length = edge.to_parameterized_line()
    assert length == pytest.approx(1.0)
    assert np.allclose(line.point_at(length), UNIT4[1])
    with pytest.raises(ValueError):
        simplex4.to_parameterized_line()


def test_equality_and_transform(simplex4):
    assert simplex4 == GeometricSimplex(UNIT4)
    assert not simplex4 == GeometricSimplex(SLIVER4)
    shift = np.array([1.0, 2.0, 3.0, 4.0])
    moved = simplex4.transformed(np.eye(4), shift)
    assert np.array_equal(moved.vertices(), simplex4.vertices() + shift[:, None])
    assert moved.content() == pytest.approx(simplex4.content())


def test_pentatope_metrics_invariant_under_scaling(simplex4):
    scaled = simplex4.transformed(3.0 * np.eye(4), np.zeros(4))
    assert scaled.metric1() == pytest.approx(simplex4.metric1())
    assert scaled.metric2() == pytest.approx(simplex4.metric2())
    assert simplex4.metric3() == pytest.approx(simplex4.metric1() * simplex4.metric2())
    assert simplex4.omega() > 0


def test_pentatope_metrics_require_pentatope(simplex3):
    with pytest.raises(ValueError):
        simplex3.metric1()


def test_edge_lengths_count(simplex4):
    lengths = simplex4.all_squared_edge_lengths()
    assert len(lengths) == 10
    assert lengths[:4] == [1.0, 1.0, 1.0, 1.0]
    assert lengths[4:] == [2.0] * 6