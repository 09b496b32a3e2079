"""Tests of the reconstruction of all faces of an element."""
import numpy as np
import pytest

import boxflux as bf
from tests.common.flux_setups import element_volume_variables

QUADRILATERAL = np.array([[0.0, 0.0], [2.0, 0.2], [2.4, 1.8], [-0.3, 1.2]])


@pytest.fixture
def setup():
    geometry = bf.BoxElementGeometry(QUADRILATERAL, boundary_facets=[0, 3])
    vvs = element_volume_variables(
        QUADRILATERAL,
        lambda x: 1e5 + 100 * x[0],
        temperature=lambda x: 290.0 + x[1],
    )
    return bf.HomogeneousSpatialParameters(), geometry, vvs


def test_isothermal(setup):
    params, geometry, vvs = setup
    interior, boundary = bf.element_flux_variables(params, None, geometry, vvs)
    assert len(interior) == 4
    assert len(boundary) == 4
    assert all(isinstance(f, bf.FluxVariables) for f in interior)
    assert all(isinstance(f, bf.BoundaryVariables) for f in boundary)
    assert [f.face_index for f in interior] == [0, 1, 2, 3]
    assert [f.face_index for f in boundary] == [0, 1, 2, 3]

    # Same result as the reconstruction of a single face.
    single = bf.FluxVariables(params, None, geometry, 1, vvs)
    assert np.allclose(
        interior[1].data.darcy_flux_intensity, single.data.darcy_flux_intensity
    )


def test_nonisothermal(setup):
    params, geometry, vvs = setup
    config = bf.FluxModelConfig(enable_gravity=False)
    interior, boundary = bf.element_flux_variables(
        params, None, geometry, vvs, config, nonisothermal=True
    )
    assert all(isinstance(f, bf.NonIsothermalFluxVariables) for f in interior)
    assert all(isinstance(f, bf.NonIsothermalFluxVariables) for f in boundary)
    for flux in interior + boundary:
        assert np.allclose(flux.temperature_gradient(), [0.0, 1.0])
        assert flux.config is config
    assert all(f.data.is_boundary for f in boundary)
    assert not any(f.data.is_boundary for f in interior)


def test_element_without_boundary():
    geometry = bf.BoxElementGeometry(QUADRILATERAL)
    vvs = element_volume_variables(QUADRILATERAL, lambda x: 1e5)
    params = bf.HomogeneousSpatialParameters()
    interior, boundary = bf.element_flux_variables(params, None, geometry, vvs)
    assert len(interior) == 4
    assert boundary == ()
