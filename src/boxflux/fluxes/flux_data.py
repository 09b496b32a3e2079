"""Value objects holding the reconstructed quantities of one face.

A :class:`FaceFluxData` is created once per face and nonlinear iterate, by
:class:`~boxflux.fluxes.flux_variables.FluxVariables` on interior faces or by
:class:`~boxflux.fluxes.boundary_variables.BoundaryVariables` on boundary faces. It is
never modified after construction: the dataclass is frozen and all arrays are
read-only.

The non-isothermal data does not derive from the isothermal data, it contains it:
:class:`NonIsothermalFaceFluxData` holds a :class:`FaceFluxData` and adds the
temperature related fields. All other attributes are forwarded to the contained object.

"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

__all__ = ["FaceFluxData", "NonIsothermalFaceFluxData"]


def _read_only(arr: np.ndarray) -> np.ndarray:
    arr = np.array(arr, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class FaceFluxData:
    """Reconstructed gradients, integration point values and flux intensities of a
    face.

    All per-phase arrays are indexed by the phase index along the first axis.

    """

    face_index: int
    """Index of the interior face, or of the boundary face if :attr:`is_boundary`."""
    is_boundary: bool
    """Whether the face lies on the domain boundary."""
    scv_index: int
    """Local index of the sub-control volume whose permeability, porosity and
    saturation were used."""
    normal: np.ndarray
    """Unit normal of the face."""
    potential_gradient: np.ndarray
    """Pressure gradients corrected for buoyancy, ``shape=(num_phases, dim)``."""
    concentration_gradient: np.ndarray
    """Gradients of the mass fraction of the minor component in each phase,
    ``shape=(num_phases, dim)``."""
    molar_concentration_gradient: np.ndarray
    """Gradients of the mole fraction of the minor component in each phase,
    ``shape=(num_phases, dim)``."""
    pressure_at_ip: np.ndarray
    """Phase pressures at the integration point."""
    density_at_ip: np.ndarray
    """Phase densities at the integration point."""
    molar_density_at_ip: np.ndarray
    """Phase molar densities at the integration point."""
    darcy_flux_intensity: np.ndarray
    """Intrinsic permeability times potential gradient, projected on the face normal
    and negated (``KmvpNormal``). Positive for flow in the direction of the normal."""
    effective_diffusion_coefficient: np.ndarray
    """Tortuosity corrected diffusion coefficients of the porous medium. Zero for
    phases with non-positive saturation."""

    def __post_init__(self) -> None:
        # Frozen dataclass, bypass the immutability once during initialization.
        for name in (
            "normal",
            "potential_gradient",
            "concentration_gradient",
            "molar_concentration_gradient",
            "pressure_at_ip",
            "density_at_ip",
            "molar_density_at_ip",
            "darcy_flux_intensity",
            "effective_diffusion_coefficient",
        ):
            object.__setattr__(self, name, _read_only(getattr(self, name)))

    @property
    def num_phases(self) -> int:
        return self.darcy_flux_intensity.size

    @property
    def dim(self) -> int:
        return self.normal.size

    def __repr__(self) -> str:
        kind = "boundary" if self.is_boundary else "interior"
        return (
            f"Flux data of {kind} face {self.face_index} with Darcy flux intensities "
            f"{self.darcy_flux_intensity}"
        )


@dataclass(frozen=True, eq=False)
class NonIsothermalFaceFluxData:
    """Flux data of a face extended by the conductive heat flux."""

    base: FaceFluxData
    """The isothermal flux data of the face."""
    temperature_gradient: np.ndarray
    """Temperature gradient at the integration point."""
    normal_heat_flux: float
    """Conductive heat flux through the rock matrix in the direction of the face
    normal [W m^-2]."""

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "temperature_gradient", _read_only(self.temperature_gradient)
        )
        object.__setattr__(self, "normal_heat_flux", float(self.normal_heat_flux))

    def __getattr__(self, name: str):
        # Only called for attributes not found on this object.
        if name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)

    def __repr__(self) -> str:
        return f"{self.base!r}, normal heat flux {self.normal_heat_flux}"
