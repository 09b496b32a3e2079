"""Tests of the shared reconstruction utilities."""
import numpy as np
import pytest

from boxflux.fluxes import gradients

# Shape function gradients and values at the integration point of the first face of
# the unit triangle.
GRAD = np.array([[-1.0, -1.0], [1.0, 0.0], [0.0, 1.0]])
SHAPE_VALUE = np.array([5 / 12, 5 / 12, 1 / 6])


def test_reconstruct_gradient_single_field():
    values = np.array([1.0, 3.0, -2.0])
    assert np.allclose(gradients.reconstruct_gradient(GRAD, values), [2.0, -3.0])


def test_reconstruct_gradient_several_fields():
    values = np.array([[1.0, 0.0], [3.0, 0.0], [-2.0, 0.0]])
    result = gradients.reconstruct_gradient(GRAD, values)
    assert result.shape == (2, 2)
    assert np.allclose(result, [[2.0, -3.0], [0.0, 0.0]])


def test_uniform_field_has_zero_gradient():
    values = np.full(3, 7.5)
    assert np.allclose(gradients.reconstruct_gradient(GRAD, values), 0.0)


def test_interpolate():
    values = np.array([[12.0, 1.0], [24.0, 1.0], [6.0, 1.0]])
    assert np.allclose(gradients.interpolate(SHAPE_VALUE, values), [16.0, 1.0])


def test_potential_gradient():
    pressure_gradient = np.array([[0.0, -9810.0], [0.0, -10.0]])
    gravity = np.array([0.0, -9.81])
    density = np.array([1000.0, 1.0])

    # Hydrostatic liquid pressure gives zero potential gradient.
    result = gradients.potential_gradient(pressure_gradient, density, gravity, True)
    assert np.allclose(result, [[0.0, 0.0], [0.0, -0.19]])

    # Without gravity, the pressure gradient is returned unaltered.
    result = gradients.potential_gradient(pressure_gradient, density, gravity, False)
    assert np.allclose(result, pressure_gradient)


def test_darcy_flux_intensity_sign():
    K = 1e-12 * np.eye(2)
    potential_gradient = np.array([[-1e4, 0.0]])
    flux = gradients.darcy_flux_intensity(K, potential_gradient, np.array([1.0, 0.0]))
    # Potential decreasing along the normal, positive flux.
    assert np.allclose(flux, [1e-8])
    flux = gradients.darcy_flux_intensity(K, potential_gradient, np.array([-1.0, 0.0]))
    assert np.allclose(flux, [-1e-8])


def test_darcy_flux_intensity_anisotropic():
    K = np.array([[2.0, 1.0], [1.0, 3.0]])
    potential_gradient = np.array([[1.0, 0.0]])
    flux = gradients.darcy_flux_intensity(K, potential_gradient, np.array([0.0, 1.0]))
    # The cross term drives a flux normal to the potential gradient.
    assert np.allclose(flux, [-1.0])


class TestEffectiveDiffusion:
    def test_millington_quirk(self):
        porosity = 0.3
        saturation = np.array([0.5])
        tau = gradients.millington_quirk_tortuosity(porosity, saturation)
        assert np.allclose(tau, (0.15 ** (7 / 3)) / 0.09)

        D = gradients.effective_diffusion_coefficient(porosity, saturation, [2e-9])
        assert np.allclose(D, 0.15 * tau * 2e-9)

    def test_fully_saturated_open_medium(self):
        # Porosity and saturation one give no tortuosity reduction.
        D = gradients.effective_diffusion_coefficient(1.0, [1.0, 1.0], [2e-9, 2e-5])
        assert np.allclose(D, [2e-9, 2e-5])

    @pytest.mark.parametrize("saturation", [0.0, -0.05])
    def test_absent_phase(self, saturation):
        D = gradients.effective_diffusion_coefficient(
            0.3, [1.0 - saturation, saturation], [2e-9, 2e-5]
        )
        assert D[1] == 0.0
        assert D[0] > 0

    def test_absent_phase_with_zero_porosity(self):
        D = gradients.effective_diffusion_coefficient(0.0, [0.0], [2e-9])
        assert D[0] == 0.0

    def test_zero_porosity_is_not_finite(self):
        # An invalid porosity is not masked for present phases.
        D = gradients.effective_diffusion_coefficient(0.0, [0.5], [2e-9])
        assert not np.isfinite(D[0])
