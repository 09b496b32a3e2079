"""Configuration of the flux reconstruction.

The configuration bundles what is fixed for a given model: the number of phases and
components, whether gravity is active, which phase is the liquid and which the gas
phase, and which component is the minor (dissolved) component of each phase. It is
passed explicitly to every flux reconstructor.

The configuration can be read from the ``[fluxes]`` section of the file boxflux.cfg,
located in the directory where the python process is launched. Example section:

    [fluxes]
    num_phases: 2
    num_components: 2
    enable_gravity: True
    # Use the harmonic mean of the two adjacent permeabilities on interior faces
    permeability_averaging: harmonic

"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

import boxflux as bf

__all__ = ["FluxModelConfig"]

logger = logging.getLogger(__name__)


# The dataclass is frozen, since the configuration is fixed for a model. Keyword-only
# construction forces the user to name the settings.
@dataclass(frozen=True, kw_only=True)
class FluxModelConfig:
    """Settings of the flux reconstruction.

    Raises:
        ValueError if the phase or component indices are inconsistent.

    """

    num_phases: int = 2
    """Number of fluid phases."""
    num_components: int = 2
    """Number of components."""
    enable_gravity: bool = True
    """Whether the buoyancy correction of the potential gradient is active."""
    liquid_phase_index: int = bf.LIQUID_PHASE_INDEX
    """Index of the liquid (wetting) phase."""
    gas_phase_index: int = bf.GAS_PHASE_INDEX
    """Index of the gas (non-wetting) phase."""
    liquid_component_index: int = bf.LIQUID_COMPONENT_INDEX
    """Index of the main component of the liquid phase."""
    gas_component_index: int = bf.GAS_COMPONENT_INDEX
    """Index of the main component of the gas phase."""
    minor_components: Optional[tuple[int, ...]] = None
    """The component whose concentration gradient is reconstructed, per phase.

    If not given, the gas component is the minor component of the liquid phase and the
    liquid component the minor component of all other phases.

    """
    permeability_averaging: str = bf.DESIGNATED
    """How the permeability of an interior face is found.

    ``"designated"`` uses the permeability of the sub-control volume of the face's
    inside vertex, ``"harmonic"`` the harmonic mean of the two adjacent sub-control
    volumes. Boundary faces always use their own-side sub-control volume.

    """
    _minor: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.num_phases < 1:
            raise ValueError("At least one phase is required")
        if self.num_components < 1:
            raise ValueError("At least one component is required")
        # The gas indices are only meaningful in models with more than one phase or
        # component, respectively.
        phase_indices = ["liquid_phase_index"]
        if self.num_phases > 1:
            phase_indices.append("gas_phase_index")
        for name in phase_indices:
            idx = getattr(self, name)
            if not 0 <= idx < self.num_phases:
                raise ValueError(f"{name}={idx} out of range for {self.num_phases}")
        component_indices = ["liquid_component_index"]
        if self.num_components > 1:
            component_indices.append("gas_component_index")
        for name in component_indices:
            idx = getattr(self, name)
            if not 0 <= idx < self.num_components:
                raise ValueError(
                    f"{name}={idx} out of range for {self.num_components} components"
                )
        if self.num_phases > 1 and self.liquid_phase_index == self.gas_phase_index:
            raise ValueError("The liquid and gas phase must be distinct")
        if self.permeability_averaging not in (bf.DESIGNATED, bf.HARMONIC):
            raise ValueError(
                f"Unknown permeability averaging {self.permeability_averaging}"
            )

        if self.minor_components is None and self.num_components == 1:
            minor = (self.liquid_component_index,) * self.num_phases
        elif self.minor_components is None:
            minor = tuple(
                (
                    self.gas_component_index
                    if p == self.liquid_phase_index
                    else self.liquid_component_index
                )
                for p in range(self.num_phases)
            )
        else:
            minor = tuple(int(c) for c in self.minor_components)
            if len(minor) != self.num_phases:
                raise ValueError(
                    f"Expected {self.num_phases} minor components, got {len(minor)}"
                )
            if any(not 0 <= c < self.num_components for c in minor):
                raise ValueError(f"Minor components {minor} out of range")
        # Frozen dataclass, bypass the immutability once during initialization.
        object.__setattr__(self, "_minor", minor)

    def minor_component(self, phase: int) -> int:
        """The component whose fraction gradients are reconstructed in a phase."""
        return self._minor[phase]

    @property
    def phases(self) -> range:
        """Range of all phase indices."""
        return range(self.num_phases)

    def with_gravity(self, enable_gravity: bool) -> FluxModelConfig:
        """A copy of the configuration with gravity switched on or off."""
        return replace(self, enable_gravity=enable_gravity)

    @classmethod
    def from_config(
        cls, config: Optional[Mapping[str, Mapping[str, Any]]] = None
    ) -> FluxModelConfig:
        """Construct the configuration from a parsed cfg file.

        Parameters:
            config: ``default=None``

                Mapping from section names to sections, as obtained from
                ``dict(configparser.ConfigParser())``. Defaults to ``bf.config``, the
                contents of boxflux.cfg in the working directory. Settings missing in
                the ``[fluxes]`` section take their default values.

        Raises:
            ValueError if a value cannot be interpreted.

        Returns:
            The configuration.

        """
        if config is None:
            config = bf.config
        section = config.get(bf.FLUX_CONFIG_SECTION, {})

        kwargs: dict[str, Any] = {}
        try:
            for key in (
                "num_phases",
                "num_components",
                "liquid_phase_index",
                "gas_phase_index",
                "liquid_component_index",
                "gas_component_index",
            ):
                if key in section:
                    kwargs[key] = int(section[key])
            if "minor_components" in section:
                kwargs["minor_components"] = tuple(
                    int(c) for c in str(section["minor_components"]).split(",")
                )
        except ValueError as e:
            raise ValueError(f"Invalid integer in section [fluxes]: {e}") from e
        if "enable_gravity" in section:
            # Same spellings as configparser.ConfigParser.getboolean.
            value = str(section["enable_gravity"]).strip().lower()
            if value not in configparser.ConfigParser.BOOLEAN_STATES:
                raise ValueError(f"Cannot interpret {value} as a boolean")
            kwargs["enable_gravity"] = configparser.ConfigParser.BOOLEAN_STATES[value]
        if "permeability_averaging" in section:
            kwargs["permeability_averaging"] = (
                str(section["permeability_averaging"]).strip().lower()
            )

        logger.info(f"Flux model configuration from file: {kwargs}")
        return cls(**kwargs)
