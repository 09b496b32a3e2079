"""Flux reconstruction on boundary faces.

The reconstruction on a boundary face follows the one on interior faces (see
:mod:`~boxflux.fluxes.flux_variables`), with the shape function gradients and values
evaluated at the integration point of the boundary face. Since there is no neighbor
across the domain boundary, the permeability, porosity and saturations are always those
of the sub-control volume the boundary face belongs to, and the normal points out of
the domain.

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import boxflux as bf
from boxflux.fluxes.flux_variables import (
    FaceFluxVariables,
    active_gravity,
    compute_face_flux_data,
)

__all__ = ["BoundaryVariables"]

logger = logging.getLogger(__name__)


class BoundaryVariables(FaceFluxVariables):
    """Flux data of a boundary face.

    Parameters:
        spatial_parameters: Properties of the porous medium.
        element: The element, passed on to the spatial parameters.
        element_geometry: Box-method geometry of the element.
        boundary_face_index: Index of the boundary face in the element.
        volume_variables: Volume variables of the element's vertices, indexed by the
            local vertex index.
        config: ``default=None``

            Model configuration. Defaults to the two-phase two-component setup of
            :class:`~boxflux.models.config.FluxModelConfig`.

    """

    def __init__(
        self,
        spatial_parameters: bf.protocol.SpatialParametersProtocol,
        element: Any,
        element_geometry: bf.protocol.ElementGeometryProtocol,
        boundary_face_index: int,
        volume_variables: Sequence[bf.protocol.VolumeVariablesProtocol],
        config: Optional[bf.FluxModelConfig] = None,
    ) -> None:
        if config is None:
            config = bf.FluxModelConfig()
        self.config: bf.FluxModelConfig = config
        """The model configuration."""
        self.element_geometry = element_geometry
        self.boundary_face = element_geometry.boundary_face[boundary_face_index]
        """Geometry of the boundary face. Not owned by the flux variables."""
        self.scv_index: int = self.boundary_face.scv_index
        """Local index of the sub-control volume on the inside of the boundary."""

        K = bf.as_tensor(
            spatial_parameters.intrinsic_permeability(
                element, element_geometry, self.scv_index
            ),
            element_geometry.dim,
        )

        self.data = compute_face_flux_data(
            self.boundary_face,
            boundary_face_index,
            True,
            self.scv_index,
            K,
            volume_variables,
            active_gravity(spatial_parameters, config),
            config,
        )
