"""Secondary variables at the vertices of an element.

The volume variables of a vertex hold everything the flux reconstruction reads from the
current nonlinear iterate: phase pressures, densities, saturations, composition,
porosity, diffusion coefficients and temperature. They are computed by the model from
the primary variables before any flux of the iterate is reconstructed, including the
decision on which phases are present (the phase presence).

The flux reconstruction does not look at the phase presence. It requires every quantity
to be well defined for every phase, also for phases which are absent (saturation zero);
the values used for absent phases are the choice of the code constructing the volume
variables.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence

import numpy as np

__all__ = ["PhasePresence", "VolumeVariables", "ElementVolumeVariables"]


class PhasePresence(Enum):
    """Which fluid phases are present at a vertex."""

    LIQUID_ONLY = 1
    """Only the liquid phase is present. Primary variables are the pressure and the
    mass fraction of the gas component in the liquid."""
    GAS_ONLY = 2
    """Only the gas phase is present. Primary variables are the pressure and the mass
    fraction of the liquid component in the gas."""
    BOTH_PHASES = 3
    """Both phases are present. Primary variables are the pressure and a saturation."""

    def is_present(self, phase: int, liquid_phase: int = 0, gas_phase: int = 1) -> bool:
        """Whether a phase is present in this state.

        Parameters:
            phase: Index of the phase.
            liquid_phase: Index of the liquid phase.
            gas_phase: Index of the gas phase.

        Returns:
            True if the phase is present.

        """
        if self is PhasePresence.BOTH_PHASES:
            return phase in (liquid_phase, gas_phase)
        if self is PhasePresence.LIQUID_ONLY:
            return phase == liquid_phase
        return phase == gas_phase


def _frozen_array(values, name: str, shape: tuple[int, ...]) -> np.ndarray:
    arr = np.array(values, dtype=float)
    if arr.shape != shape:
        raise ValueError(f"{name} has shape {arr.shape}, expected {shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class VolumeVariables:
    """Volume variables of one vertex.

    Per-phase quantities are arrays of length ``num_phases``, compositions arrays of
    shape ``(num_phases, num_components)``. The arrays are copied and made read-only on
    construction.

    Raises:
        ValueError if the shapes of the arrays are inconsistent.

    """

    pressures: np.ndarray
    """Phase pressures [Pa]."""
    densities: np.ndarray
    """Phase mass densities [kg m^-3]."""
    molar_densities: np.ndarray
    """Phase molar densities [mol m^-3]."""
    saturations: np.ndarray
    """Phase saturations [-]."""
    diffusion_coefficients: np.ndarray
    """Binary molecular diffusion coefficients of the phases [m^2 s^-1]."""
    mass_fractions: np.ndarray
    """Mass fraction of each component in each phase [-]."""
    mole_fractions: np.ndarray
    """Mole fraction of each component in each phase [-]."""
    porosity_value: float
    """Porosity of the rock [-]."""
    temperature_value: float = 283.15
    """Temperature [K]."""
    phase_presence: PhasePresence = PhasePresence.BOTH_PHASES
    """Phase state, set by the primary variable switch."""

    def __post_init__(self) -> None:
        pressures = np.array(self.pressures, dtype=float)
        if pressures.ndim != 1:
            raise ValueError("Pressures must be given as a 1d array over phases")
        num_phases = pressures.size
        mass_fractions = np.array(self.mass_fractions, dtype=float)
        if mass_fractions.ndim != 2:
            raise ValueError("Mass fractions must be given per phase and component")
        shape = (num_phases, mass_fractions.shape[1])

        # Frozen dataclass, bypass the immutability once during initialization.
        for name in (
            "pressures",
            "densities",
            "molar_densities",
            "saturations",
            "diffusion_coefficients",
        ):
            object.__setattr__(
                self, name, _frozen_array(getattr(self, name), name, (num_phases,))
            )
        for name in ("mass_fractions", "mole_fractions"):
            object.__setattr__(
                self, name, _frozen_array(getattr(self, name), name, shape)
            )
        object.__setattr__(self, "porosity_value", float(self.porosity_value))
        object.__setattr__(self, "temperature_value", float(self.temperature_value))

    @property
    def num_phases(self) -> int:
        return self.pressures.size

    @property
    def num_components(self) -> int:
        return self.mass_fractions.shape[1]

    def pressure(self, phase: int) -> float:
        return self.pressures[phase]

    def density(self, phase: int) -> float:
        return self.densities[phase]

    def molar_density(self, phase: int) -> float:
        return self.molar_densities[phase]

    def saturation(self, phase: int) -> float:
        return self.saturations[phase]

    def porosity(self) -> float:
        return self.porosity_value

    def diffusion_coefficient(self, phase: int) -> float:
        return self.diffusion_coefficients[phase]

    def temperature(self) -> float:
        return self.temperature_value

    def mass_fraction(self, phase: int, component: int) -> float:
        return self.mass_fractions[phase, component]

    def mole_fraction(self, phase: int, component: int) -> float:
        return self.mole_fractions[phase, component]


class ElementVolumeVariables(Sequence[VolumeVariables]):
    """The volume variables of all vertices of an element, indexed by local vertex.

    The per-vertex values are additionally stacked into arrays, which lets the flux
    reconstruction evaluate sums over the vertices as matrix products.

    Parameters:
        volume_variables: Volume variables ordered by the local vertex index.

    Raises:
        ValueError if the vertices disagree on the number of phases or components.

    """

    def __init__(self, volume_variables: Sequence[VolumeVariables]) -> None:
        self._vars: tuple[VolumeVariables, ...] = tuple(volume_variables)
        if len(self._vars) == 0:
            raise ValueError("An element has at least one vertex")
        shapes = {v.mass_fractions.shape for v in self._vars}
        if len(shapes) != 1:
            raise ValueError(f"Inconsistent number of phases or components: {shapes}")

        def stack(name: str) -> np.ndarray:
            arr = np.array([getattr(v, name) for v in self._vars])
            arr.setflags(write=False)
            return arr

        self.pressures = stack("pressures")
        """Phase pressures, ``shape=(num_vertices, num_phases)``."""
        self.densities = stack("densities")
        """Phase densities, ``shape=(num_vertices, num_phases)``."""
        self.molar_densities = stack("molar_densities")
        """Phase molar densities, ``shape=(num_vertices, num_phases)``."""
        self.mass_fractions = stack("mass_fractions")
        """``shape=(num_vertices, num_phases, num_components)``."""
        self.mole_fractions = stack("mole_fractions")
        """``shape=(num_vertices, num_phases, num_components)``."""
        self.temperatures = stack("temperature_value")
        """Temperatures, ``shape=(num_vertices,)``."""

    @property
    def num_phases(self) -> int:
        return self._vars[0].num_phases

    @property
    def num_components(self) -> int:
        return self._vars[0].num_components

    def __getitem__(self, index):
        return self._vars[index]

    def __len__(self) -> int:
        return len(self._vars)

    def __iter__(self) -> Iterator[VolumeVariables]:
        return iter(self._vars)

    def __repr__(self) -> str:
        return (
            f"Volume variables of {len(self)} vertices with {self.num_phases} phases "
            f"and {self.num_components} components"
        )
