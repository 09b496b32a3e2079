"""Shape functions of the reference elements supported by the box method.

All reference elements are of first order: Lagrange P1 on the unit interval and the unit
triangle, and bilinear Q1 on the unit square. Linear (P1) and bilinear (Q1) fields are
thus reproduced exactly, which is the property the gradient reconstruction of the face
fluxes relies on.

Vertex numbering on the reference elements:

    line:           0 --- 1

    triangle:       2
                    | \\
                    0 - 1

    quadrilateral:  3 --- 2
                    |     |
                    0 --- 1

Note that quadrilaterals are numbered counter-clockwise.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

__all__ = ["ReferenceElement", "reference_element", "REFERENCE_ELEMENTS"]


def _line_values(xi: np.ndarray) -> np.ndarray:
    return np.array([1 - xi[0], xi[0]])


def _line_gradients(xi: np.ndarray) -> np.ndarray:
    return np.array([[-1.0], [1.0]])


def _triangle_values(xi: np.ndarray) -> np.ndarray:
    return np.array([1 - xi[0] - xi[1], xi[0], xi[1]])


def _triangle_gradients(xi: np.ndarray) -> np.ndarray:
    return np.array([[-1.0, -1.0], [1.0, 0.0], [0.0, 1.0]])


def _quadrilateral_values(xi: np.ndarray) -> np.ndarray:
    x, y = xi
    return np.array([(1 - x) * (1 - y), x * (1 - y), x * y, (1 - x) * y])


def _quadrilateral_gradients(xi: np.ndarray) -> np.ndarray:
    x, y = xi
    return np.array(
        [
            [-(1 - y), -(1 - x)],
            [1 - y, -x],
            [y, x],
            [-y, 1 - x],
        ]
    )


@dataclass(frozen=True, eq=False)
class ReferenceElement:
    """Geometric and shape-function data of a reference element."""

    name: str
    """Name of the element type."""
    dim: int
    """Dimension of the reference element."""
    vertices: np.ndarray
    """Reference coordinates of the vertices, shape ``(num_vertices, dim)``."""
    center: np.ndarray
    """Reference coordinates of the barycenter."""
    edges: tuple[tuple[int, int], ...]
    """Pairs of local vertices connected by an edge. Each edge defines one interior
    sub-control volume face of the box method."""
    facets: tuple[tuple[int, ...], ...]
    """Local vertices of each facet (codimension one entity) of the element."""
    _values: Callable[[np.ndarray], np.ndarray]
    _gradients: Callable[[np.ndarray], np.ndarray]

    @property
    def num_vertices(self) -> int:
        return self.vertices.shape[0]

    def values(self, xi: np.ndarray) -> np.ndarray:
        """Values of all shape functions at a reference point.

        Parameters:
            xi: Reference coordinates of the evaluation point.

        Returns:
            Array of length ``num_vertices``.

        """
        return self._values(np.asarray(xi, dtype=float))

    def gradients(self, xi: np.ndarray) -> np.ndarray:
        """Gradients of all shape functions with respect to the reference coordinates.

        Parameters:
            xi: Reference coordinates of the evaluation point.

        Returns:
            Array of shape ``(num_vertices, dim)``.

        """
        return self._gradients(np.asarray(xi, dtype=float))


REFERENCE_ELEMENTS: dict[str, ReferenceElement] = {
    "line": ReferenceElement(
        name="line",
        dim=1,
        vertices=np.array([[0.0], [1.0]]),
        center=np.array([0.5]),
        edges=((0, 1),),
        facets=((0,), (1,)),
        _values=_line_values,
        _gradients=_line_gradients,
    ),
    "triangle": ReferenceElement(
        name="triangle",
        dim=2,
        vertices=np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]),
        center=np.array([1 / 3, 1 / 3]),
        edges=((0, 1), (1, 2), (2, 0)),
        facets=((0, 1), (1, 2), (2, 0)),
        _values=_triangle_values,
        _gradients=_triangle_gradients,
    ),
    "quadrilateral": ReferenceElement(
        name="quadrilateral",
        dim=2,
        vertices=np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]]),
        center=np.array([0.5, 0.5]),
        edges=((0, 1), (1, 2), (2, 3), (3, 0)),
        facets=((0, 1), (1, 2), (2, 3), (3, 0)),
        _values=_quadrilateral_values,
        _gradients=_quadrilateral_gradients,
    ),
}
"""Supported reference elements, by name."""


def reference_element(name: str) -> ReferenceElement:
    """Look up a reference element by name.

    Parameters:
        name: One of ``"line"``, ``"triangle"``, ``"quadrilateral"``.

    Raises:
        NotImplementedError if the element is a known, but unsupported, type.
        ValueError if the name is unknown.

    Returns:
        The reference element.

    """
    if name in REFERENCE_ELEMENTS:
        return REFERENCE_ELEMENTS[name]
    if name in ("tetrahedron", "hexahedron", "prism", "pyramid"):
        raise NotImplementedError(f"Box geometry of {name} elements is not supported")
    raise ValueError(f"Unknown element type {name}")
