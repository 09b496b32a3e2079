"""Reconstruction of the flux data of all faces of an element."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Union

import boxflux as bf
from boxflux.fluxes.boundary_variables import BoundaryVariables
from boxflux.fluxes.flux_variables import FluxVariables
from boxflux.fluxes.nonisothermal import NonIsothermalFluxVariables

__all__ = ["element_flux_variables"]

module_sections = ["fluxes"]
logger = logging.getLogger(__name__)

InteriorFluxes = tuple[Union[FluxVariables, NonIsothermalFluxVariables], ...]
BoundaryFluxes = tuple[Union[BoundaryVariables, NonIsothermalFluxVariables], ...]


@bf.time_logger(sections=module_sections)
def element_flux_variables(
    spatial_parameters: bf.protocol.SpatialParametersProtocol,
    element: Any,
    element_geometry: bf.protocol.ElementGeometryProtocol,
    volume_variables: Sequence[bf.protocol.VolumeVariablesProtocol],
    config: Optional[bf.FluxModelConfig] = None,
    nonisothermal: bool = False,
) -> tuple[InteriorFluxes, BoundaryFluxes]:
    """Reconstruct the flux data of all interior and boundary faces of an element.

    Parameters:
        spatial_parameters: Properties of the porous medium.
        element: The element, passed on to the spatial parameters.
        element_geometry: Box-method geometry of the element.
        volume_variables: Volume variables of the element's vertices.
        config: ``default=None``

            Model configuration, see :class:`~boxflux.models.config.FluxModelConfig`.
        nonisothermal: ``default=False``

            If True, the conductive heat flux is reconstructed as well.

    Returns:
        The flux objects of the interior faces, ordered by face index, and those of the
        boundary faces, ordered by boundary face index.

    """
    if config is None:
        config = bf.FluxModelConfig()

    num_faces = len(element_geometry.sub_control_volume_faces)
    num_boundary_faces = len(element_geometry.boundary_face)
    logger.debug(
        f"Reconstructing fluxes on {num_faces} interior and {num_boundary_faces} "
        "boundary faces"
    )

    args = (spatial_parameters, element, element_geometry)
    if nonisothermal:
        interior: InteriorFluxes = tuple(
            NonIsothermalFluxVariables.from_interior_face(
                *args, face_index, volume_variables, config
            )
            for face_index in range(num_faces)
        )
        boundary: BoundaryFluxes = tuple(
            NonIsothermalFluxVariables.from_boundary_face(
                *args, face_index, volume_variables, config
            )
            for face_index in range(num_boundary_faces)
        )
    else:
        interior = tuple(
            FluxVariables(*args, face_index, volume_variables, config)
            for face_index in range(num_faces)
        )
        boundary = tuple(
            BoundaryVariables(*args, face_index, volume_variables, config)
            for face_index in range(num_boundary_faces)
        )
    return interior, boundary
