"""Utilities shared by the flux reconstructors.

All functions operate on the data of a single face: the shape function gradients
``grad`` of shape ``(num_vertices, dim)`` and values ``shape_value`` of shape
``(num_vertices,)`` at the integration point, and vertex values stacked along the first
axis.

"""

from __future__ import annotations

import numpy as np

__all__ = [
    "reconstruct_gradient",
    "interpolate",
    "potential_gradient",
    "darcy_flux_intensity",
    "project_on_normal",
    "millington_quirk_tortuosity",
    "effective_diffusion_coefficient",
]


def reconstruct_gradient(grad: np.ndarray, vertex_values: np.ndarray) -> np.ndarray:
    """Finite element gradient of a field at the integration point of a face.

    Computes ``sum_v grad[v] * vertex_values[v]``.

    Parameters:
        grad: Shape function gradients at the integration point,
            ``shape=(num_vertices, dim)``.
        vertex_values: Field values at the vertices, ``shape=(num_vertices,)`` for a
            single field or ``(num_vertices, num_fields)`` for several fields (e.g. one
            per phase).

    Returns:
        The gradient, ``shape=(dim,)`` for a single field and ``(num_fields, dim)``
        otherwise.

    """
    return np.asarray(vertex_values, dtype=float).T @ grad


def interpolate(shape_value: np.ndarray, vertex_values: np.ndarray) -> np.ndarray:
    """Interpolate vertex values to the integration point of a face.

    Parameters:
        shape_value: Shape function values at the integration point.
        vertex_values: ``shape=(num_vertices,)`` or ``(num_vertices, num_fields)``.

    Returns:
        Scalar, or array of length ``num_fields``.

    """
    return shape_value @ np.asarray(vertex_values, dtype=float)


def potential_gradient(
    pressure_gradient: np.ndarray,
    density: np.ndarray,
    gravity: np.ndarray,
    enable_gravity: bool,
) -> np.ndarray:
    """Pressure gradient corrected for buoyancy, ``grad p - rho g``.

    Parameters:
        pressure_gradient: Pressure gradients of the phases, ``shape=(num_phases,
            dim)``.
        density: Phase densities at the integration point.
        gravity: Gravity vector.
        enable_gravity: If False, the pressure gradient is returned unaltered.

    Returns:
        The potential gradients, ``shape=(num_phases, dim)``.

    """
    if not enable_gravity:
        return pressure_gradient
    return pressure_gradient - np.outer(density, gravity)


def project_on_normal(vectors: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """Scalar product of one or several vectors with a face normal."""
    return vectors @ normal


def darcy_flux_intensity(
    permeability: np.ndarray, potential_gradients: np.ndarray, normal: np.ndarray
) -> np.ndarray:
    """Permeability-weighted potential gradient projected on the face normal.

    The sign is chosen such that flow in the direction of the normal, i.e. towards
    decreasing potential, is positive: ``-(K grad(psi)) . n``.

    Parameters:
        permeability: Permeability tensor, ``shape=(dim, dim)``.
        potential_gradients: ``shape=(num_phases, dim)``.
        normal: Face normal.

    Returns:
        Flux intensity per phase [m^2 Pa m^-1].

    """
    Kmvp = potential_gradients @ permeability.T
    return -project_on_normal(Kmvp, normal)


def millington_quirk_tortuosity(porosity: float, saturation: np.ndarray) -> np.ndarray:
    """Tortuosity ``phi^-2 (phi S)^(7/3)`` of a phase.

    Only meaningful for positive saturations. A vanishing porosity yields non-finite
    values, which are returned as such.

    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return (porosity * saturation) ** (7.0 / 3.0) / porosity**2


def effective_diffusion_coefficient(
    porosity: float, saturation: np.ndarray, diffusion_coefficient: np.ndarray
) -> np.ndarray:
    """Diffusion coefficient of the porous medium, ``phi S tau D``.

    Phases with non-positive saturation have a vanishing coefficient, independent of
    the porosity and the molecular diffusion coefficient.

    Parameters:
        porosity: Porosity [-].
        saturation: Phase saturations [-].
        diffusion_coefficient: Molecular diffusion coefficients of the phases
            [m^2 s^-1].

    Returns:
        The effective coefficients, one per phase.

    """
    saturation = np.atleast_1d(np.asarray(saturation, dtype=float))
    diffusion_coefficient = np.broadcast_to(
        np.asarray(diffusion_coefficient, dtype=float), saturation.shape
    )
    coefficient = np.zeros(saturation.shape)
    present = saturation > 0
    S = saturation[present]
    with np.errstate(divide="ignore", invalid="ignore"):
        tau = millington_quirk_tortuosity(porosity, S)
        coefficient[present] = porosity * S * tau * diffusion_coefficient[present]
    return coefficient
