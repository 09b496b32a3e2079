"""Contains the protocols that declare the methods and attributes the flux
reconstruction requires from its collaborators: the element geometry, the volume
variables and the spatial parameters. BoxFlux ships implementations of all three
(:class:`~boxflux.geometry.box_geometry.BoxElementGeometry`,
:class:`~boxflux.models.volume_variables.ElementVolumeVariables`,
:class:`~boxflux.models.spatial_parameters.SpatialParameters`), but any object
satisfying the protocols can be used.

Note that the protocol framework is accessed by static type checkers only!

Warning:
    For developers:

    Do not bring the ``typing.Protocol`` class in any form into the class hierarchy
    of BoxFlux! Use it exclusively in ``if``-sections for ``typing.TYPE_CHECKING``.

"""

from typing import TYPE_CHECKING, Any, Protocol, Sequence

import numpy as np

# Conditional importing ensures that the protocols do not mess with the runtime
# definitions.
if not TYPE_CHECKING:
    # This branch is accessed in python runtime.

    class FaceGeometryProtocol:
        """This is an empty placeholder of the protocol, used mainly for type hints."""

    class ElementGeometryProtocol:
        """This is an empty placeholder of the protocol, used mainly for type hints."""

    class VolumeVariablesProtocol:
        """This is an empty placeholder of the protocol, used mainly for type hints."""

    class SpatialParametersProtocol:
        """This is an empty placeholder of the protocol, used mainly for type hints."""

else:
    # This branch is accessed by mypy and linters.

    from boxflux.fluxes.flux_data import FaceFluxData

    class FaceGeometryProtocol(Protocol):
        """Geometry of an interior or boundary face."""

        normal: np.ndarray
        """Unit normal of the face. For boundary faces it points out of the domain."""

        grad: np.ndarray
        """Gradients of the shape functions of all vertices at the integration point,
        ``shape=(num_vertices, dim)``."""

        shape_value: np.ndarray
        """Values of the shape functions of all vertices at the integration point."""

    class ElementGeometryProtocol(Protocol):
        """Box-method geometry of an element."""

        dim: int
        """World dimension."""

        num_vertices: int
        """Number of vertices influencing the faces of the element."""

        sub_control_volume_faces: Sequence[Any]
        """Interior faces. Each has the attributes of :class:`FaceGeometryProtocol`
        and the local indices ``i`` and ``j`` of the two adjacent vertices."""

        boundary_face: Sequence[Any]
        """Boundary faces. Each has the attributes of :class:`FaceGeometryProtocol`
        and the local index ``scv_index`` of the own-side vertex."""

    class VolumeVariablesProtocol(Protocol):
        """Volume variables of a single vertex."""

        def pressure(self, phase: int) -> float: ...

        def density(self, phase: int) -> float: ...

        def molar_density(self, phase: int) -> float: ...

        def saturation(self, phase: int) -> float: ...

        def porosity(self) -> float: ...

        def diffusion_coefficient(self, phase: int) -> float: ...

        def temperature(self) -> float: ...

        def mass_fraction(self, phase: int, component: int) -> float: ...

        def mole_fraction(self, phase: int, component: int) -> float: ...

    class SpatialParametersProtocol(Protocol):
        """Properties of the porous medium."""

        gravity_enabled: bool
        """Whether gravity acts on the fluids."""

        def gravity(self) -> np.ndarray:
            """Gravity vector."""

        def intrinsic_permeability(
            self, element: Any, element_geometry: Any, scv_index: int
        ) -> Any:
            """Scalar or tensor permeability of a sub-control volume."""

        def matrix_heat_flux(
            self,
            flux_data: FaceFluxData,
            volume_variables: Sequence[VolumeVariablesProtocol],
            temperature_gradient: np.ndarray,
            element: Any,
            element_geometry: Any,
            face_index: int,
        ) -> np.ndarray:
            """Conductive heat flux vector at a face."""
