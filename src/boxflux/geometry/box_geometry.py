"""Finite-volume geometry of a single element in the box method.

In the box method, the control volumes are centered around the mesh vertices. Every
element is split into one sub-control volume (SCV) per vertex. Inside the element, the
SCVs of two vertices ``i`` and ``j`` connected by an edge are separated by a
sub-control volume face (SCV face), which runs from the edge midpoint to the element
barycenter. Element facets on the domain boundary are split into one boundary face per
adjacent vertex.

For every face, the geometry provides the integration point (midpoint of the face), the
values and the global gradients of all shape functions at the integration point, the
unit normal and the area. These are the quantities consumed by the flux reconstruction
in :mod:`boxflux.fluxes`.

Example:
    A unit square with the bottom edge on the domain boundary:

    >>> nodes = np.array([[0, 0], [1, 0], [1, 1], [0, 1]])
    >>> geometry = bf.BoxElementGeometry(nodes, boundary_facets=[0])
    >>> geometry.num_scv_faces, geometry.num_boundary_faces
    (4, 2)

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

import boxflux as bf
from boxflux.geometry.shape_functions import ReferenceElement, reference_element

__all__ = [
    "SubControlVolume",
    "SubControlVolumeFace",
    "BoundaryFace",
    "BoxElementGeometry",
]

module_sections = ["geometry"]
logger = logging.getLogger(__name__)

_ELEMENT_BY_NUM_VERTICES = {2: "line", 3: "triangle", 4: "quadrilateral"}


@dataclass(frozen=True, eq=False)
class SubControlVolume:
    """Part of an element belonging to the control volume of one vertex."""

    local_vertex: int
    """Local index of the vertex the sub-control volume belongs to."""
    global_position: np.ndarray
    """Global coordinates of the vertex."""
    volume: float
    """Volume of the sub-control volume (length in 1d, area in 2d)."""


@dataclass(frozen=True, eq=False)
class SubControlVolumeFace:
    """Face separating the sub-control volumes of the vertices ``i`` and ``j``."""

    i: int
    """Local vertex on the inside of the face, the normal points away from it."""
    j: int
    """Local vertex on the outside of the face."""
    ip_local: np.ndarray
    """Reference coordinates of the integration point."""
    ip_global: np.ndarray
    """Global coordinates of the integration point."""
    normal: np.ndarray
    """Unit normal, oriented from ``i`` towards ``j``."""
    area: float
    """Area of the face (length in 2d, unity in 1d)."""
    grad: np.ndarray
    """Global gradients of the shape functions at the integration point, shape
    ``(num_vertices, dim)``."""
    shape_value: np.ndarray
    """Values of the shape functions at the integration point."""


@dataclass(frozen=True, eq=False)
class BoundaryFace:
    """Part of an element facet on the domain boundary, adjacent to one vertex."""

    scv_index: int
    """Local index of the own-side vertex, i.e. the sub-control volume the face
    belongs to."""
    facet: int
    """Local index of the element facet the face is part of."""
    ip_local: np.ndarray
    """Reference coordinates of the integration point."""
    ip_global: np.ndarray
    """Global coordinates of the integration point."""
    normal: np.ndarray
    """Unit normal, pointing out of the domain."""
    area: float
    """Area of the face (length in 2d, unity in 1d)."""
    grad: np.ndarray
    """Global gradients of the shape functions at the integration point, shape
    ``(num_vertices, dim)``."""
    shape_value: np.ndarray
    """Values of the shape functions at the integration point."""


def _unit(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v)


def _perpendicular(t: np.ndarray) -> np.ndarray:
    """Rotate a 2d vector by -90 degrees."""
    return np.array([t[1], -t[0]])


def _polygon_area(points: Sequence[np.ndarray]) -> float:
    """Area of a planar polygon by the shoelace formula."""
    x = np.array([p[0] for p in points])
    y = np.array([p[1] for p in points])
    return 0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


class BoxElementGeometry:
    """Box-method geometry of one element.

    The element is given by the global coordinates of its vertices, ordered as on the
    reference element (see :mod:`~boxflux.geometry.shape_functions`). Lines may be
    embedded in a world of any dimension, triangles and quadrilaterals are planar
    elements in a 2d world.

    Parameters:
        nodes: ``shape=(num_vertices, dim)``

            Global vertex coordinates.
        element_type: ``default=None``

            Name of the reference element. Inferred from the number of vertices if not
            given.
        boundary_facets: ``default=()``

            Local indices of the element facets on the domain boundary. For lines the
            facets are the two end vertices, for 2d elements the edges, numbered as
            :attr:`~boxflux.geometry.shape_functions.ReferenceElement.facets`.

    Raises:
        ValueError if the nodes do not match the element type, the element is
        degenerate, or a boundary facet index is out of range.

    """

    @bf.time_logger(sections=module_sections)
    def __init__(
        self,
        nodes: np.ndarray,
        element_type: Optional[str] = None,
        boundary_facets: Sequence[int] = (),
    ) -> None:
        nodes = np.atleast_2d(np.asarray(nodes, dtype=float))
        if element_type is None:
            if nodes.shape[0] not in _ELEMENT_BY_NUM_VERTICES:
                raise ValueError(f"Cannot infer element type of {nodes.shape[0]} nodes")
            element_type = _ELEMENT_BY_NUM_VERTICES[nodes.shape[0]]

        self.reference: ReferenceElement = reference_element(element_type)
        """Reference element the geometry is mapped from."""

        if nodes.shape[0] != self.reference.num_vertices:
            raise ValueError(
                f"A {element_type} has {self.reference.num_vertices} vertices, "
                f"got {nodes.shape[0]}"
            )
        if self.reference.dim == 2 and nodes.shape[1] != 2:
            raise ValueError(f"A {element_type} must be given in a 2d world")

        self.element_type: str = element_type
        """Name of the element type."""
        self.nodes: np.ndarray = nodes
        """Global vertex coordinates, ``shape=(num_vertices, dim)``."""
        self.dim: int = nodes.shape[1]
        """World dimension."""
        self.num_vertices: int = self.reference.num_vertices
        """Number of vertices, and thereby sub-control volumes, of the element."""

        self._check_not_degenerate()

        self.sub_control_volumes: tuple[SubControlVolume, ...] = (
            self._compute_sub_control_volumes()
        )
        """One sub-control volume per vertex."""
        self.sub_control_volume_faces: tuple[SubControlVolumeFace, ...] = tuple(
            self._compute_scv_face(i, j) for i, j in self.reference.edges
        )
        """One interior face per element edge."""

        faces: list[BoundaryFace] = []
        for facet in boundary_facets:
            if facet < 0 or facet >= len(self.reference.facets):
                raise ValueError(
                    f"Facet {facet} out of range for a {element_type} element"
                )
            faces.extend(self._compute_boundary_faces(facet))
        self.boundary_face: tuple[BoundaryFace, ...] = tuple(faces)
        """Boundary faces, two per boundary facet of a 2d element and one per end
        vertex of a line."""

        logger.debug(
            f"Computed box geometry of a {element_type} with "
            f"{self.num_scv_faces} interior and "
            f"{self.num_boundary_faces} boundary faces"
        )

    @property
    def num_scv_faces(self) -> int:
        """Number of interior sub-control volume faces."""
        return len(self.sub_control_volume_faces)

    @property
    def num_boundary_faces(self) -> int:
        """Number of boundary faces."""
        return len(self.boundary_face)

    def global_coordinates(self, xi: np.ndarray) -> np.ndarray:
        """Map reference coordinates to global coordinates."""
        return self.reference.values(xi) @ self.nodes

    def jacobian(self, xi: np.ndarray) -> np.ndarray:
        """Jacobian of the reference mapping, ``shape=(dim, reference dim)``."""
        return self.nodes.T @ self.reference.gradients(xi)

    def shape_gradients(self, xi: np.ndarray) -> np.ndarray:
        """Global gradients of all shape functions at a reference point.

        The reference gradients are mapped with the (pseudo-)inverse of the Jacobian,
        which for lines embedded in a higher dimensional world yields gradients tangent
        to the line.

        Parameters:
            xi: Reference coordinates.

        Returns:
            Array of shape ``(num_vertices, dim)``.

        """
        J_inv = np.linalg.pinv(self.jacobian(xi))
        return self.reference.gradients(xi) @ J_inv

    def _check_not_degenerate(self) -> None:
        if self.reference.dim == 1:
            measure = np.linalg.norm(self.nodes[1] - self.nodes[0])
        else:
            measure = abs(np.linalg.det(self.jacobian(self.reference.center)))
        if measure <= np.finfo(float).eps * max(1.0, np.abs(self.nodes).max()):
            raise ValueError(f"Degenerate {self.element_type} element")

    def _compute_sub_control_volumes(self) -> tuple[SubControlVolume, ...]:
        ref = self.reference
        if ref.dim == 1:
            half = 0.5 * np.linalg.norm(self.nodes[1] - self.nodes[0])
            return tuple(
                SubControlVolume(v, self.nodes[v].copy(), half) for v in range(2)
            )

        center = self.global_coordinates(ref.center)
        scvs = []
        for v in range(ref.num_vertices):
            # The two edges adjacent to v, the first one leaving v
            (outgoing,) = [e for e in ref.edges if e[0] == v]
            (incoming,) = [e for e in ref.edges if e[1] == v]
            m_out = self.global_coordinates(ref.vertices[list(outgoing)].mean(axis=0))
            m_in = self.global_coordinates(ref.vertices[list(incoming)].mean(axis=0))
            area = _polygon_area([self.nodes[v], m_out, center, m_in])
            scvs.append(SubControlVolume(v, self.nodes[v].copy(), area))
        return tuple(scvs)

    def _compute_scv_face(self, i: int, j: int) -> SubControlVolumeFace:
        ref = self.reference
        if ref.dim == 1:
            ip_local = ref.center.copy()
            normal = _unit(self.nodes[j] - self.nodes[i])
            area = 1.0
        else:
            edge_mid = ref.vertices[[i, j]].mean(axis=0)
            ip_local = 0.5 * (edge_mid + ref.center)
            # The face is straight also for bilinear maps, since it follows a
            # coordinate line of the reference element.
            t = self.global_coordinates(ref.center) - self.global_coordinates(edge_mid)
            area = float(np.linalg.norm(t))
            normal = _unit(_perpendicular(t))
            if np.dot(normal, self.nodes[j] - self.nodes[i]) < 0:
                normal = -normal

        return SubControlVolumeFace(
            i=i,
            j=j,
            ip_local=ip_local,
            ip_global=self.global_coordinates(ip_local),
            normal=normal,
            area=area,
            grad=self.shape_gradients(ip_local),
            shape_value=ref.values(ip_local),
        )

    def _compute_boundary_faces(self, facet: int) -> list[BoundaryFace]:
        ref = self.reference
        facet_vertices = ref.facets[facet]

        if ref.dim == 1:
            (v,) = facet_vertices
            ip_local = ref.vertices[v].copy()
            normal = _unit(self.nodes[v] - self.nodes[1 - v])
            return [
                BoundaryFace(
                    scv_index=v,
                    facet=facet,
                    ip_local=ip_local,
                    ip_global=self.nodes[v].copy(),
                    normal=normal,
                    area=1.0,
                    grad=self.shape_gradients(ip_local),
                    shape_value=ref.values(ip_local),
                )
            ]

        a, b = facet_vertices
        normal = _unit(_perpendicular(self.nodes[b] - self.nodes[a]))
        center = self.global_coordinates(ref.center)
        if np.dot(normal, center - self.nodes[a]) > 0:
            normal = -normal

        edge_mid = ref.vertices[[a, b]].mean(axis=0)
        faces = []
        for v in (a, b):
            ip_local = 0.5 * (ref.vertices[v] + edge_mid)
            area = float(
                np.linalg.norm(self.global_coordinates(edge_mid) - self.nodes[v])
            )
            faces.append(
                BoundaryFace(
                    scv_index=v,
                    facet=facet,
                    ip_local=ip_local,
                    ip_global=self.global_coordinates(ip_local),
                    normal=normal,
                    area=area,
                    grad=self.shape_gradients(ip_local),
                    shape_value=ref.values(ip_local),
                )
            )
        return faces

    def __repr__(self) -> str:
        return (
            f"Box geometry of a {self.element_type} in {self.dim}d with "
            f"{self.num_scv_faces} interior and "
            f"{self.num_boundary_faces} boundary faces"
        )
