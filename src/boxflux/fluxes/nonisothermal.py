"""Non-isothermal extension of the flux reconstruction.

On top of the isothermal flux data of a face, the conductive heat flux through the
rock matrix is reconstructed: the temperature gradient at the integration point is
computed from the vertex temperatures, and the spatial parameters turn it into the
heat flux vector, which is projected on the face normal.

The extension wraps an already constructed interior or boundary flux object, so both
face kinds share the same code path.

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

import numpy as np

import boxflux as bf
from boxflux.fluxes import gradients
from boxflux.fluxes.boundary_variables import BoundaryVariables
from boxflux.fluxes.flux_data import NonIsothermalFaceFluxData
from boxflux.fluxes.flux_variables import FluxVariables, vertex_temperatures

__all__ = ["NonIsothermalFluxVariables"]

logger = logging.getLogger(__name__)


class NonIsothermalFluxVariables:
    """Flux data of a face including the conductive heat flux.

    All accessors of the isothermal flux object are available on this object as well.

    Parameters:
        base: Isothermal flux object of an interior or boundary face.
        spatial_parameters: Properties of the porous medium. Provides the heat flux
            law via ``matrix_heat_flux``.
        element: The element, passed on to the spatial parameters.
        element_geometry: Box-method geometry of the element.
        volume_variables: Volume variables of the element's vertices. Each must
            provide ``temperature()``.

    """

    def __init__(
        self,
        base: Union[FluxVariables, BoundaryVariables],
        spatial_parameters: bf.protocol.SpatialParametersProtocol,
        element: Any,
        element_geometry: bf.protocol.ElementGeometryProtocol,
        volume_variables: Sequence[bf.protocol.VolumeVariablesProtocol],
    ) -> None:
        self.base = base
        """The isothermal flux object."""

        face = (
            base.boundary_face
            if isinstance(base, BoundaryVariables)
            else element_geometry.sub_control_volume_faces[base.face_index]
        )
        temperature_gradient = gradients.reconstruct_gradient(
            face.grad, vertex_temperatures(volume_variables)
        )
        heat_flux = np.asarray(
            spatial_parameters.matrix_heat_flux(
                base.data,
                volume_variables,
                temperature_gradient,
                element,
                element_geometry,
                base.face_index,
            ),
            dtype=float,
        )

        self.data = NonIsothermalFaceFluxData(
            base=base.data,
            temperature_gradient=temperature_gradient,
            normal_heat_flux=gradients.project_on_normal(heat_flux, base.normal),
        )
        """The isothermal flux data of the face extended by the heat flux."""

    @classmethod
    def from_interior_face(
        cls,
        spatial_parameters: bf.protocol.SpatialParametersProtocol,
        element: Any,
        element_geometry: bf.protocol.ElementGeometryProtocol,
        face_index: int,
        volume_variables: Sequence[bf.protocol.VolumeVariablesProtocol],
        config: Optional[bf.FluxModelConfig] = None,
    ) -> NonIsothermalFluxVariables:
        """Reconstruct the isothermal and thermal flux data of an interior face."""
        base = FluxVariables(
            spatial_parameters,
            element,
            element_geometry,
            face_index,
            volume_variables,
            config,
        )
        return cls(
            base, spatial_parameters, element, element_geometry, volume_variables
        )

    @classmethod
    def from_boundary_face(
        cls,
        spatial_parameters: bf.protocol.SpatialParametersProtocol,
        element: Any,
        element_geometry: bf.protocol.ElementGeometryProtocol,
        boundary_face_index: int,
        volume_variables: Sequence[bf.protocol.VolumeVariablesProtocol],
        config: Optional[bf.FluxModelConfig] = None,
    ) -> NonIsothermalFluxVariables:
        """Reconstruct the isothermal and thermal flux data of a boundary face."""
        base = BoundaryVariables(
            spatial_parameters,
            element,
            element_geometry,
            boundary_face_index,
            volume_variables,
            config,
        )
        return cls(
            base, spatial_parameters, element, element_geometry, volume_variables
        )

    def normal_heat_flux(self) -> float:
        """Conductive heat flux in the direction of the face normal [W m^-2]."""
        return self.data.normal_heat_flux

    def temperature_gradient(self) -> np.ndarray:
        return self.data.temperature_gradient

    def __getattr__(self, name: str):
        # Only called for attributes not found on this object.
        if name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}: {self.data!r}"
