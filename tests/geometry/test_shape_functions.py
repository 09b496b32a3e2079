"""Tests of the reference elements and their shape functions."""
import numpy as np
import pytest

import boxflux as bf

ELEMENTS = ["line", "triangle", "quadrilateral"]


def _sample_points(dim: int) -> list[np.ndarray]:
    if dim == 1:
        return [np.array([x]) for x in (0.0, 0.25, 0.5, 1.0)]
    return [np.array(p) for p in ((0.0, 0.0), (0.2, 0.3), (1 / 3, 1 / 3), (0.5, 0.0))]


@pytest.mark.parametrize("name", ELEMENTS)
def test_partition_of_unity(name):
    ref = bf.reference_element(name)
    for xi in _sample_points(ref.dim):
        assert np.isclose(ref.values(xi).sum(), 1.0)
        # The gradients of a partition of unity sum to zero.
        assert np.allclose(ref.gradients(xi).sum(axis=0), 0.0)


@pytest.mark.parametrize("name", ELEMENTS)
def test_nodal_interpolation(name):
    # Shape function v is one at vertex v and zero at all others.
    ref = bf.reference_element(name)
    for v, xi in enumerate(ref.vertices):
        known = np.zeros(ref.num_vertices)
        known[v] = 1.0
        assert np.allclose(ref.values(xi), known)


@pytest.mark.parametrize("name", ELEMENTS)
def test_gradients_match_finite_differences(name):
    ref = bf.reference_element(name)
    xi = np.full(ref.dim, 0.3)
    h = 1e-6
    for d in range(ref.dim):
        step = np.zeros(ref.dim)
        step[d] = h
        fd = (ref.values(xi + step) - ref.values(xi - step)) / (2 * h)
        assert np.allclose(ref.gradients(xi)[:, d], fd)


def test_quadrilateral_is_counter_clockwise():
    ref = bf.reference_element("quadrilateral")
    x, y = ref.vertices[:, 0], ref.vertices[:, 1]
    signed_area = 0.5 * (np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))
    assert signed_area > 0


@pytest.mark.parametrize("name", ELEMENTS)
def test_edges_are_facets_in_2d(name):
    ref = bf.reference_element(name)
    if ref.dim == 2:
        assert ref.edges == ref.facets
    else:
        assert ref.facets == ((0,), (1,))


@pytest.mark.parametrize("name", ["tetrahedron", "hexahedron"])
def test_unsupported_elements(name):
    with pytest.raises(NotImplementedError):
        bf.reference_element(name)


def test_unknown_element():
    with pytest.raises(ValueError):
        bf.reference_element("heptagon")
