"""This file contains representative values for fluid and solid parameters.

For now we provide parameter values for the following materials:

- Water (at 20 degrees Celsius)
- Air (at 20 degrees Celsius and atmospheric pressure)
- Granite

They are used by the spatial parameters, e.g. ``bf.SomertonHeatConduction(
lambda_solid=bf.material_values.granite["thermal_conductivity"], ...)``.

"""

from typing import TypedDict

__all__ = ["FluidDict", "SolidDict", "water", "air", "granite"]


class FluidDict(TypedDict):
    """Type hint for dictionaries with constants of a fluid phase."""

    name: str
    """A string denoting the name."""
    density: float
    """Mass density in [kg m^-3]."""
    molar_mass: float
    """Molar mass in [kg mol^-1]."""
    thermal_conductivity: float
    """Thermal conductivity in [W m^-1 K^-1]."""
    viscosity: float
    """Absolute viscosity in [Pa s]."""
    diffusion_coefficient: float
    """Binary molecular diffusion coefficient of the dissolved minor component in
    [m^2 s^-1]."""


class SolidDict(TypedDict):
    """Type hint for dictionaries with constants of the rock matrix."""

    name: str
    """A string denoting the name."""
    density: float
    """Mass density of the grains in [kg m^-3]."""
    permeability: float
    """Intrinsic permeability in [m^2]."""
    porosity: float
    """Porosity [-]."""
    specific_heat_capacity: float
    """Specific heat capacity in [J kg^-1 K^-1]."""
    thermal_conductivity: float
    """Thermal conductivity of the grains in [W m^-1 K^-1]."""


water: FluidDict = {
    "name": "water",
    "density": 998.2,
    "molar_mass": 18.015e-3,
    "thermal_conductivity": 0.5975,
    "viscosity": 1.002e-3,
    "diffusion_coefficient": 2.0e-9,
}
"""Density and viscosity are gathered from:

- Kell, G. S. Density, thermal expansivity, and compressibility of liquid water from
  0.deg. to 150.deg.. https://doi.org/10.1021/je60064a005

Thermal conductivity is gathered from:

- Ramires et al. Standard Reference Data for the Thermal Conductivity of Water.
  https://doi.org/10.1063/1.555963

The diffusion coefficient is the one of dissolved nitrogen in water at 20 degrees.

"""

air: FluidDict = {
    "name": "air",
    "density": 1.204,
    "molar_mass": 28.96e-3,
    "thermal_conductivity": 0.0257,
    "viscosity": 1.81e-5,
    "diffusion_coefficient": 2.6e-5,
}
"""Dry air at atmospheric pressure. The diffusion coefficient is the one of water
vapor in air."""

granite: SolidDict = {
    "name": "granite",
    "density": 2700.0,
    "permeability": 1.0e-12,
    "porosity": 0.3,
    "specific_heat_capacity": 790.0,
    "thermal_conductivity": 2.8,
}
"""Weathered granite as a porous medium with a high permeability. The grain density,
heat capacity and conductivity are those of intact granite."""
