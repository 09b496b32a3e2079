"""Tests of the spatial parameters and the heat conduction laws."""
import numpy as np
import pytest

import boxflux as bf
from tests.common.flux_setups import (
    element_volume_variables,
    vertex_volume_variables,
)

NODES = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])


def _face_data(geometry, volume_variables, face_index=0, boundary=False):
    params = bf.HomogeneousSpatialParameters(enable_gravity=False)
    if boundary:
        return bf.BoundaryVariables(
            params, None, geometry, face_index, volume_variables
        ).data
    return bf.FluxVariables(params, None, geometry, face_index, volume_variables).data


class TestGravity:
    def test_default_gravity(self):
        params = bf.HomogeneousSpatialParameters(dim=2)
        assert np.allclose(params.gravity(), [0.0, -bf.GRAVITY_ACCELERATION])
        params_3d = bf.HomogeneousSpatialParameters(dim=3)
        assert np.allclose(params_3d.gravity(), [0.0, 0.0, -9.81])
        assert params.gravity_enabled

    def test_custom_gravity(self):
        params = bf.HomogeneousSpatialParameters(dim=2, gravity=[1.0, 0.0])
        assert np.allclose(params.gravity(), [1.0, 0.0])
        with pytest.raises(ValueError):
            params.gravity()[0] = 2.0

    def test_gravity_shape_mismatch(self):
        with pytest.raises(ValueError):
            bf.HomogeneousSpatialParameters(dim=2, gravity=[0.0, 0.0, -9.81])


def test_homogeneous_parameters():
    geometry = bf.BoxElementGeometry(NODES)
    params = bf.HomogeneousSpatialParameters(permeability=1e-13, porosity=0.2)
    assert params.intrinsic_permeability(None, geometry, 2) == 1e-13
    assert params.porosity(None, geometry, 0) == 0.2


def test_region_parameters():
    # Obstacle of fine material in 10 <= x <= 20, y <= 35.
    params = bf.RegionSpatialParameters(lambda x: 10 <= x[0] <= 20 and x[1] <= 35)
    geometry = bf.BoxElementGeometry(np.array([[9.0, 0.0], [11.0, 0.0], [9.0, 2.0]]))
    assert params.intrinsic_permeability(None, geometry, 0) == 1e-12
    assert params.intrinsic_permeability(None, geometry, 1) == 1e-15
    assert params.porosity(None, geometry, 1) == 0.3


class TestSomertonHeatConduction:
    def _conductivity(self, saturation, porosity=0.3):
        geometry = bf.BoxElementGeometry(NODES)
        vvs = element_volume_variables(
            NODES,
            lambda x: 1e5,
            saturation=(saturation, 1 - saturation),
            porosity=porosity,
        )
        data = _face_data(geometry, vvs)
        return bf.SomertonHeatConduction(2.8, 0.5975).effective_conductivity(
            data, vvs, geometry
        )

    def test_dry_medium(self):
        assert np.isclose(self._conductivity(0.0), 2.8**0.7)

    def test_saturated_medium(self):
        assert np.isclose(self._conductivity(1.0), 2.8**0.7 * 0.5975**0.3)

    def test_negative_saturation_is_cut_off(self):
        assert np.isclose(self._conductivity(-0.1), self._conductivity(0.0))

    def test_partial_saturation(self):
        lambda_dry = 2.8**0.7
        lambda_sat = lambda_dry * 0.5975**0.3
        known = lambda_dry + 0.5 * (lambda_sat - lambda_dry)
        assert np.isclose(self._conductivity(0.25), known)

    def test_interior_face_averages_adjacent_vertices(self):
        geometry = bf.BoxElementGeometry(NODES, boundary_facets=[0])
        vvs = bf.ElementVolumeVariables(
            [
                vertex_volume_variables((1e5, 1e5), saturation=(s, 1 - s))
                for s in (1.0, 0.0, 0.5)
            ]
        )
        law = bf.SomertonHeatConduction(2.8, 0.5975)
        lambda_dry = 2.8**0.7
        lambda_sat = lambda_dry * 0.5975**0.3

        # Interior face 0 between vertices 0 and 1: mean saturation 0.5.
        interior = law.effective_conductivity(_face_data(geometry, vvs), vvs, geometry)
        known = lambda_dry + np.sqrt(0.5) * (lambda_sat - lambda_dry)
        assert np.isclose(interior, known)

        # Boundary face 1 belongs to vertex 1 only: dry.
        boundary_data = _face_data(geometry, vvs, face_index=1, boundary=True)
        assert boundary_data.scv_index == 1
        boundary = law.effective_conductivity(boundary_data, vvs, geometry)
        assert np.isclose(boundary, lambda_dry)


def test_fourier_heat_flux():
    geometry = bf.BoxElementGeometry(NODES)
    vvs = element_volume_variables(NODES, lambda x: 1e5)
    data = _face_data(geometry, vvs)
    law = bf.FourierHeatConduction(2.0)
    flux = law.heat_flux(data, vvs, np.array([1.0, -3.0]), geometry)
    assert np.allclose(flux, [-2.0, 6.0])


def test_fourier_negative_conductivity():
    with pytest.raises(ValueError):
        bf.FourierHeatConduction(-1.0)


def test_matrix_heat_flux_delegates_to_law():
    geometry = bf.BoxElementGeometry(NODES)
    vvs = element_volume_variables(NODES, lambda x: 1e5)
    params = bf.HomogeneousSpatialParameters(
        heat_conduction=bf.FourierHeatConduction(0.5)
    )
    data = _face_data(geometry, vvs)
    flux = params.matrix_heat_flux(data, vvs, np.array([2.0, 0.0]), None, geometry, 0)
    assert np.allclose(flux, [-1.0, 0.0])
