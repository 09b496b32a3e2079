"""Spatial parameters: the properties of the porous medium seen by the flux
reconstruction.

A spatial parameter object provides the intrinsic permeability of a sub-control volume,
the gravity vector, and the law for the conductive heat flux through the rock matrix.
The flux reconstruction only reads from it.

Two media are provided:

- :class:`HomogeneousSpatialParameters`: constant permeability and porosity.
- :class:`RegionSpatialParameters`: a fine and a coarse material, the fine material
  occupying the region where a user-given predicate holds.

and two heat conduction laws:

- :class:`FourierHeatConduction`: constant effective conductivity.
- :class:`SomertonHeatConduction`: effective conductivity interpolated between the dry
  and the fully liquid saturated medium with the square root of the liquid saturation.

"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

import numpy as np

import boxflux as bf

if TYPE_CHECKING:
    from boxflux.fluxes.flux_data import FaceFluxData

__all__ = [
    "HeatConductionLaw",
    "FourierHeatConduction",
    "SomertonHeatConduction",
    "SpatialParameters",
    "HomogeneousSpatialParameters",
    "RegionSpatialParameters",
]

logger = logging.getLogger(__name__)


def _adjacent_vertices(
    flux_data: FaceFluxData, element_geometry: bf.BoxElementGeometry
) -> tuple[int, ...]:
    """Local vertices on both sides of an interior face, or the own-side vertex of a
    boundary face."""
    if flux_data.is_boundary:
        return (element_geometry.boundary_face[flux_data.face_index].scv_index,)
    face = element_geometry.sub_control_volume_faces[flux_data.face_index]
    return (face.i, face.j)


class HeatConductionLaw(abc.ABC):
    """Law for the effective conductive heat flux through the porous medium."""

    @abc.abstractmethod
    def effective_conductivity(
        self,
        flux_data: FaceFluxData,
        volume_variables: bf.ElementVolumeVariables,
        element_geometry: bf.BoxElementGeometry,
    ) -> float:
        """Effective thermal conductivity at a face [W m^-1 K^-1].

        Parameters:
            flux_data: Isothermal flux data of the face.
            volume_variables: Volume variables of the element's vertices.
            element_geometry: Geometry of the element.

        Returns:
            The conductivity.

        """

    def heat_flux(
        self,
        flux_data: FaceFluxData,
        volume_variables: bf.ElementVolumeVariables,
        temperature_gradient: np.ndarray,
        element_geometry: bf.BoxElementGeometry,
    ) -> np.ndarray:
        """Fourier heat flux vector ``-lambda grad T`` [W m^-2]."""
        conductivity = self.effective_conductivity(
            flux_data, volume_variables, element_geometry
        )
        return -conductivity * temperature_gradient


class FourierHeatConduction(HeatConductionLaw):
    """Constant effective thermal conductivity.

    Parameters:
        conductivity: Effective conductivity of the porous medium [W m^-1 K^-1].

    """

    def __init__(self, conductivity: float) -> None:
        if conductivity < 0:
            raise ValueError("Thermal conductivity must be non-negative")
        self.conductivity = float(conductivity)

    def effective_conductivity(self, flux_data, volume_variables, element_geometry):
        return self.conductivity

    def __repr__(self) -> str:
        return f"Fourier heat conduction with conductivity {self.conductivity}"


class SomertonHeatConduction(HeatConductionLaw):
    """Saturation-dependent effective conductivity after Somerton.

    The conductivities of the dry and the liquid saturated medium are geometric means of
    the solid and the pore filling conductivities (the gas conductivity is neglected),

    .. math::
        \\lambda_{dry} = \\lambda_s^{1 - \\phi}, \\quad
        \\lambda_{sat} = \\lambda_s^{1 - \\phi} \\lambda_l^{\\phi},

    and the effective conductivity interpolates between them,

    .. math::
        \\lambda = \\lambda_{dry} + \\sqrt{S_l} (\\lambda_{sat} - \\lambda_{dry}).

    On interior faces, the liquid saturation and porosity are the arithmetic means of
    the two adjacent vertices, on boundary faces those of the own-side vertex. Negative
    saturations are cut off at zero.

    Parameters:
        lambda_solid: Conductivity of the grains [W m^-1 K^-1].
        lambda_liquid: Conductivity of the liquid phase [W m^-1 K^-1].
        liquid_phase: Index of the liquid phase.

    """

    def __init__(
        self,
        lambda_solid: float = bf.material_values.granite["thermal_conductivity"],
        lambda_liquid: float = bf.material_values.water["thermal_conductivity"],
        liquid_phase: int = bf.LIQUID_PHASE_INDEX,
    ) -> None:
        self.lambda_solid = float(lambda_solid)
        self.lambda_liquid = float(lambda_liquid)
        self.liquid_phase = liquid_phase

    def effective_conductivity(self, flux_data, volume_variables, element_geometry):
        vertices = _adjacent_vertices(flux_data, element_geometry)
        saturation = np.mean(
            [volume_variables[v].saturation(self.liquid_phase) for v in vertices]
        )
        porosity = np.mean([volume_variables[v].porosity() for v in vertices])
        saturation = max(0.0, saturation)

        lambda_dry = self.lambda_solid ** (1 - porosity)
        lambda_sat = lambda_dry * self.lambda_liquid**porosity
        return lambda_dry + np.sqrt(saturation) * (lambda_sat - lambda_dry)

    def __repr__(self) -> str:
        return (
            f"Somerton heat conduction with solid conductivity {self.lambda_solid} "
            f"and liquid conductivity {self.lambda_liquid}"
        )


class SpatialParameters(abc.ABC):
    """Base class for spatial parameters.

    Parameters:
        dim: World dimension.
        enable_gravity: ``default=True``

            Whether gravity acts on the fluids. Should agree with
            :attr:`~boxflux.models.config.FluxModelConfig.enable_gravity`.
        gravity: ``default=None``

            Gravity vector [m s^-2]. Defaults to :data:`~boxflux.GRAVITY_ACCELERATION`
            along the negative last coordinate direction (z in 3d, y in 2d).
        heat_conduction: ``default=None``

            Law for the conductive heat flux. Defaults to
            :class:`SomertonHeatConduction` with granite and water.

    """

    def __init__(
        self,
        dim: int,
        enable_gravity: bool = True,
        gravity: Optional[np.ndarray] = None,
        heat_conduction: Optional[HeatConductionLaw] = None,
    ) -> None:
        self.dim = dim
        """World dimension."""
        self.gravity_enabled: bool = enable_gravity
        """Whether gravity acts on the fluids."""
        if gravity is None:
            gravity = np.zeros(dim)
            gravity[-1] = -bf.GRAVITY_ACCELERATION
        gravity = np.array(gravity, dtype=float)
        if gravity.shape != (dim,):
            raise ValueError(f"Gravity vector must have {dim} components")
        gravity.setflags(write=False)
        self._gravity = gravity
        self.heat_conduction: HeatConductionLaw = (
            SomertonHeatConduction() if heat_conduction is None else heat_conduction
        )
        """Law for the conductive heat flux."""

    def gravity(self) -> np.ndarray:
        """The gravity vector [m s^-2]."""
        return self._gravity

    @abc.abstractmethod
    def intrinsic_permeability(
        self, element: Any, element_geometry: bf.BoxElementGeometry, scv_index: int
    ) -> bf.PermeabilityLike:
        """Intrinsic permeability of a sub-control volume [m^2].

        Parameters:
            element: The element, as understood by the caller.
            element_geometry: Geometry of the element.
            scv_index: Local index of the sub-control volume.

        Returns:
            A scalar for isotropic media, otherwise a tensor (see
            :func:`~boxflux.params.tensor.as_tensor`).

        """

    @abc.abstractmethod
    def porosity(
        self, element: Any, element_geometry: bf.BoxElementGeometry, scv_index: int
    ) -> float:
        """Porosity of a sub-control volume [-].

        The value is meant for whoever builds the volume variables. The flux
        reconstruction itself reads the porosity from the volume variables, see
        :meth:`~boxflux.models.volume_variables.VolumeVariables.porosity`.

        """

    def matrix_heat_flux(
        self,
        flux_data: FaceFluxData,
        volume_variables: bf.ElementVolumeVariables,
        temperature_gradient: np.ndarray,
        element: Any,
        element_geometry: bf.BoxElementGeometry,
        face_index: int,
    ) -> np.ndarray:
        """Conductive heat flux vector through the porous medium at a face [W m^-2].

        Parameters:
            flux_data: Isothermal flux data of the face.
            volume_variables: Volume variables of the element's vertices.
            temperature_gradient: Temperature gradient at the integration point.
            element: The element, as understood by the caller.
            element_geometry: Geometry of the element.
            face_index: Index of the interior or boundary face.

        Returns:
            The heat flux vector.

        """
        return self.heat_conduction.heat_flux(
            flux_data, volume_variables, temperature_gradient, element_geometry
        )


class HomogeneousSpatialParameters(SpatialParameters):
    """Medium with constant permeability and porosity.

    Parameters:
        permeability: Intrinsic permeability [m^2], see
            :data:`~boxflux.utils.boxflux_types.PermeabilityLike`.
        porosity: Porosity [-].
        dim: World dimension.
        **kwargs: Passed on to :class:`SpatialParameters`.

    """

    def __init__(
        self,
        permeability: bf.PermeabilityLike = bf.material_values.granite["permeability"],
        porosity: float = bf.material_values.granite["porosity"],
        dim: int = 2,
        **kwargs,
    ) -> None:
        super().__init__(dim, **kwargs)
        self._permeability = permeability
        self._porosity = porosity

    def intrinsic_permeability(self, element, element_geometry, scv_index):
        return self._permeability

    def porosity(self, element, element_geometry, scv_index):
        return self._porosity


class RegionSpatialParameters(SpatialParameters):
    """Medium composed of a fine and a coarse material.

    Parameters:
        is_fine: Function of a global position deciding whether it lies in the fine
            material.
        fine_permeability: Intrinsic permeability of the fine material [m^2].
        coarse_permeability: Intrinsic permeability of the coarse material [m^2].
        porosity: Porosity of both materials [-].
        dim: World dimension.
        **kwargs: Passed on to :class:`SpatialParameters`.

    Example:
        A low permeable obstacle in a 2d domain:

        >>> params = bf.RegionSpatialParameters(
        ...     lambda x: 10 <= x[0] <= 20 and x[1] <= 35,
        ...     fine_permeability=1e-15,
        ...     coarse_permeability=1e-12,
        ... )

    """

    def __init__(
        self,
        is_fine: Callable[[np.ndarray], bool],
        fine_permeability: bf.PermeabilityLike = 1e-15,
        coarse_permeability: bf.PermeabilityLike = 1e-12,
        porosity: float = 0.3,
        dim: int = 2,
        **kwargs,
    ) -> None:
        super().__init__(dim, **kwargs)
        self.is_fine = is_fine
        self.fine_permeability = fine_permeability
        self.coarse_permeability = coarse_permeability
        self._porosity = porosity

    def intrinsic_permeability(self, element, element_geometry, scv_index):
        position = element_geometry.sub_control_volumes[scv_index].global_position
        if self.is_fine(position):
            return self.fine_permeability
        return self.coarse_permeability

    def porosity(self, element, element_geometry, scv_index):
        return self._porosity
