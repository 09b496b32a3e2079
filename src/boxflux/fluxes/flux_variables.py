"""Flux reconstruction on interior sub-control volume faces.

For a face of the box method, the reconstruction combines the shape function gradients
of the element geometry, the volume variables of the element's vertices and the spatial
parameters into the data needed to evaluate the mass fluxes over the face:

1. Gradients of the phase pressures and of the minor component fractions, as sums of
   the vertex values weighted by the shape function gradients at the integration
   point. Pressures, densities and molar densities are interpolated with the shape
   function values.
2. If gravity is active, the pressure gradient is corrected by ``rho g`` to the
   gradient of the flow potential.
3. The potential gradient is multiplied by the intrinsic permeability and projected on
   the face normal, ``-(K grad psi) . n``. A positive value means flow in the
   direction of the normal.
4. The effective diffusion coefficient of the porous medium follows from the porosity,
   the saturation and the molecular diffusion coefficient by the Millington-Quirk
   tortuosity model. It vanishes for phases that are not present.

The reconstruction is a pure function of its input, and flux objects of different faces
can be computed in any order or in parallel.

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

import boxflux as bf
from boxflux.fluxes import gradients
from boxflux.fluxes.flux_data import FaceFluxData

__all__ = [
    "FaceFluxVariables",
    "FluxVariables",
    "compute_face_flux_data",
    "active_gravity",
    "vertex_temperatures",
]

module_sections = ["fluxes"]
logger = logging.getLogger(__name__)


def _vertex_arrays(
    volume_variables: Sequence[Any], config: bf.FluxModelConfig
) -> dict[str, np.ndarray]:
    """Stack the vertex values needed by the reconstruction.

    All arrays have the vertices along the first axis and the phases along the second.

    """
    phases = np.arange(config.num_phases)
    minor = np.array([config.minor_component(p) for p in phases], dtype=int)

    if isinstance(volume_variables, bf.ElementVolumeVariables):
        return {
            "pressure": volume_variables.pressures[:, phases],
            "density": volume_variables.densities[:, phases],
            "molar_density": volume_variables.molar_densities[:, phases],
            "mass_fraction": volume_variables.mass_fractions[:, phases, minor],
            "mole_fraction": volume_variables.mole_fractions[:, phases, minor],
        }

    # Any other collection is only required to provide the accessors of the volume
    # variables protocol.
    def collect(accessor: str, with_component: bool = False) -> np.ndarray:
        return np.array(
            [
                [
                    (
                        getattr(vv, accessor)(p, minor[p])
                        if with_component
                        else getattr(vv, accessor)(p)
                    )
                    for p in phases
                ]
                for vv in volume_variables
            ],
            dtype=float,
        )

    return {
        "pressure": collect("pressure"),
        "density": collect("density"),
        "molar_density": collect("molar_density"),
        "mass_fraction": collect("mass_fraction", True),
        "mole_fraction": collect("mole_fraction", True),
    }


def vertex_temperatures(volume_variables: Sequence[Any]) -> np.ndarray:
    """Temperatures of all vertices of an element."""
    if isinstance(volume_variables, bf.ElementVolumeVariables):
        return volume_variables.temperatures
    return np.array([vv.temperature() for vv in volume_variables], dtype=float)


@bf.time_logger(sections=module_sections)
def compute_face_flux_data(
    face: Any,
    face_index: int,
    is_boundary: bool,
    scv_index: int,
    permeability: np.ndarray,
    volume_variables: Sequence[Any],
    gravity: Optional[np.ndarray],
    config: bf.FluxModelConfig,
) -> FaceFluxData:
    """Reconstruct the flux data of an interior or boundary face.

    Parameters:
        face: Geometry of the face, providing ``grad``, ``shape_value`` and
            ``normal``.
        face_index: Index of the face.
        is_boundary: Whether the face is a boundary face.
        scv_index: Local index of the sub-control volume whose porosity and
            saturations enter the effective diffusion coefficient.
        permeability: Permeability tensor of the face, ``shape=(dim, dim)``.
        volume_variables: Volume variables of all vertices of the element.
        gravity: Gravity vector. ``None`` disables the buoyancy correction.
        config: Configuration of the model.

    Returns:
        The flux data of the face.

    """
    grad = face.grad
    shape_value = face.shape_value
    normal = face.normal
    values = _vertex_arrays(volume_variables, config)

    pressure_gradient = gradients.reconstruct_gradient(grad, values["pressure"])
    concentration_gradient = gradients.reconstruct_gradient(
        grad, values["mass_fraction"]
    )
    molar_concentration_gradient = gradients.reconstruct_gradient(
        grad, values["mole_fraction"]
    )

    pressure_at_ip = gradients.interpolate(shape_value, values["pressure"])
    density_at_ip = gradients.interpolate(shape_value, values["density"])
    molar_density_at_ip = gradients.interpolate(shape_value, values["molar_density"])

    potential_gradient = gradients.potential_gradient(
        pressure_gradient,
        density_at_ip,
        gravity if gravity is not None else np.zeros(normal.size),
        enable_gravity=gravity is not None,
    )
    darcy_flux_intensity = gradients.darcy_flux_intensity(
        permeability, potential_gradient, normal
    )

    own = volume_variables[scv_index]
    effective_diffusion_coefficient = gradients.effective_diffusion_coefficient(
        own.porosity(),
        np.array([own.saturation(p) for p in config.phases], dtype=float),
        np.array([own.diffusion_coefficient(p) for p in config.phases], dtype=float),
    )

    return FaceFluxData(
        face_index=face_index,
        is_boundary=is_boundary,
        scv_index=scv_index,
        normal=normal,
        potential_gradient=potential_gradient,
        concentration_gradient=concentration_gradient,
        molar_concentration_gradient=molar_concentration_gradient,
        pressure_at_ip=pressure_at_ip,
        density_at_ip=density_at_ip,
        molar_density_at_ip=molar_density_at_ip,
        darcy_flux_intensity=darcy_flux_intensity,
        effective_diffusion_coefficient=effective_diffusion_coefficient,
    )


def active_gravity(
    spatial_parameters: Any, config: bf.FluxModelConfig
) -> Optional[np.ndarray]:
    """The gravity vector if gravity is enabled by both the configuration and the
    spatial parameters, otherwise ``None``."""
    if config.enable_gravity and spatial_parameters.gravity_enabled:
        return np.asarray(spatial_parameters.gravity(), dtype=float)
    return None


class FaceFluxVariables:
    """Per-phase accessors to the flux data of a face.

    Base class of the interior and boundary flux reconstructors; the subclasses set
    :attr:`data` on construction.

    """

    data: FaceFluxData
    """The reconstructed flux data of the face."""

    element_geometry: Any
    """The geometry of the element the face belongs to."""

    def potential_gradient(self, phase: int) -> np.ndarray:
        """Gradient of the flow potential of a phase at the integration point."""
        return self.data.potential_gradient[phase]

    def concentration_gradient(self, phase: int) -> np.ndarray:
        """Gradient of the mass fraction of the minor component in a phase."""
        return self.data.concentration_gradient[phase]

    def molar_concentration_gradient(self, phase: int) -> np.ndarray:
        """Gradient of the mole fraction of the minor component in a phase."""
        return self.data.molar_concentration_gradient[phase]

    def pressure_at_ip(self, phase: int) -> float:
        return self.data.pressure_at_ip[phase]

    def density_at_ip(self, phase: int) -> float:
        return self.data.density_at_ip[phase]

    def molar_density_at_ip(self, phase: int) -> float:
        return self.data.molar_density_at_ip[phase]

    def darcy_flux_intensity(self, phase: int) -> float:
        """Intrinsic permeability times potential gradient, projected on the negative
        face normal."""
        return self.data.darcy_flux_intensity[phase]

    def effective_diffusion_coefficient(self, phase: int) -> float:
        """Diffusion coefficient of a phase in the porous medium."""
        return self.data.effective_diffusion_coefficient[phase]

    @property
    def face_index(self) -> int:
        return self.data.face_index

    @property
    def normal(self) -> np.ndarray:
        return self.data.normal

    def __repr__(self) -> str:
        return f"{type(self).__name__}: {self.data!r}"


class FluxVariables(FaceFluxVariables):
    """Flux data of an interior sub-control volume face.

    The designated sub-control volume of the face, whose permeability, porosity and
    saturations are used, is the one of the face's inside vertex ``i``. If the
    configuration asks for harmonic averaging, the permeability is instead the
    harmonic mean of the sub-control volumes of ``i`` and ``j``.

    Parameters:
        spatial_parameters: Properties of the porous medium.
        element: The element, passed on to the spatial parameters.
        element_geometry: Box-method geometry of the element.
        face_index: Index of the sub-control volume face in the element.
        volume_variables: Volume variables of the element's vertices, indexed by the
            local vertex index.
        config: ``default=None``

            Model configuration. Defaults to the two-phase two-component setup of
            :class:`~boxflux.models.config.FluxModelConfig`.

    Example:
        Single-phase, single-component flow along a line of length 10 m, with
        pressures 2e5 and 1e5 Pa at the two vertices.

        >>> import numpy as np
        >>> import boxflux as bf
        >>> geometry = bf.BoxElementGeometry(np.array([[0.0, 0.0], [10.0, 0.0]]))
        >>> volume_variables = [
        ...     bf.VolumeVariables(
        ...         pressures=np.array([p]),
        ...         densities=np.array([1000.0]),
        ...         molar_densities=np.array([55.5]),
        ...         saturations=np.array([1.0]),
        ...         diffusion_coefficients=np.array([1e-9]),
        ...         mass_fractions=np.array([[1.0]]),
        ...         mole_fractions=np.array([[1.0]]),
        ...         porosity_value=0.3,
        ...         temperature_value=283.15,
        ...     )
        ...     for p in (2e5, 1e5)
        ... ]
        >>> params = bf.HomogeneousSpatialParameters(
        ...     permeability=1e-12, enable_gravity=False
        ... )
        >>> config = bf.FluxModelConfig(num_phases=1, num_components=1)
        >>> fluxes = bf.FluxVariables(
        ...     params, None, geometry, 0, volume_variables, config
        ... )
        >>> bool(np.isclose(fluxes.darcy_flux_intensity(0), 1e-8))
        True

    """

    def __init__(
        self,
        spatial_parameters: bf.protocol.SpatialParametersProtocol,
        element: Any,
        element_geometry: bf.protocol.ElementGeometryProtocol,
        face_index: int,
        volume_variables: Sequence[bf.protocol.VolumeVariablesProtocol],
        config: Optional[bf.FluxModelConfig] = None,
    ) -> None:
        if config is None:
            config = bf.FluxModelConfig()
        self.config: bf.FluxModelConfig = config
        """The model configuration."""
        self.element_geometry = element_geometry
        self.face = element_geometry.sub_control_volume_faces[face_index]
        """Geometry of the sub-control volume face."""

        i, j = self.face.i, self.face.j
        dim = element_geometry.dim
        K = bf.as_tensor(
            spatial_parameters.intrinsic_permeability(element, element_geometry, i),
            dim,
        )
        if config.permeability_averaging == bf.HARMONIC:
            K_j = bf.as_tensor(
                spatial_parameters.intrinsic_permeability(element, element_geometry, j),
                dim,
            )
            K = bf.harmonic_mean(K, K_j)

        self.data = compute_face_flux_data(
            self.face,
            face_index,
            False,
            i,
            K,
            volume_variables,
            active_gravity(spatial_parameters, config),
            config,
        )
