"""Tests of the flux reconstruction on boundary faces."""
import numpy as np
import pytest

import boxflux as bf
from tests.common.flux_setups import element_volume_variables, vertex_volume_variables

QUADRILATERAL = np.array([[0.0, 0.0], [2.0, 0.2], [2.4, 1.8], [-0.3, 1.2]])
LINE = np.array([[0.0, 0.0], [10.0, 0.0]])
NO_GRAVITY = bf.FluxModelConfig(enable_gravity=False)


def _line_volume_variables(**kwargs):
    return bf.ElementVolumeVariables(
        [
            vertex_volume_variables((2e5, 2e5), **kwargs),
            vertex_volume_variables((1e5, 1e5), **kwargs),
        ]
    )


def test_uniform_field_gives_zero_flux():
    geometry = bf.BoxElementGeometry(QUADRILATERAL, boundary_facets=range(4))
    vvs = element_volume_variables(QUADRILATERAL, lambda x: 1e5)
    params = bf.HomogeneousSpatialParameters()
    for face_index in range(geometry.num_boundary_faces):
        flux = bf.BoundaryVariables(
            params, None, geometry, face_index, vvs, NO_GRAVITY
        )
        assert flux.data.is_boundary
        for phase in range(2):
            assert np.allclose(flux.potential_gradient(phase), 0.0)
            assert np.isclose(flux.darcy_flux_intensity(phase), 0.0)


def test_outflow_is_positive():
    geometry = bf.BoxElementGeometry(LINE, boundary_facets=[0, 1])
    params = bf.HomogeneousSpatialParameters(permeability=1e-12)
    vvs = _line_volume_variables()
    inflow = bf.BoundaryVariables(params, None, geometry, 0, vvs)
    outflow = bf.BoundaryVariables(params, None, geometry, 1, vvs)
    # Flow from x = 0 to x = 10 enters at the left and leaves at the right boundary.
    assert np.isclose(inflow.darcy_flux_intensity(0), -1e-8)
    assert np.isclose(outflow.darcy_flux_intensity(0), 1e-8)
    assert np.allclose(outflow.normal, [1.0, 0.0])
    # The integration point is the boundary vertex itself.
    assert np.isclose(outflow.pressure_at_ip(0), 1e5)


def test_own_side_sub_control_volume():
    # Permeability and saturation are those of the boundary face's own vertex.
    params = bf.RegionSpatialParameters(
        lambda x: x[0] > 5,
        fine_permeability=1e-15,
        coarse_permeability=1e-12,
        enable_gravity=False,
    )
    geometry = bf.BoxElementGeometry(LINE, boundary_facets=[0, 1])
    vvs = bf.ElementVolumeVariables(
        [
            vertex_volume_variables((2e5, 2e5), saturation=(1.0, 0.0)),
            vertex_volume_variables((1e5, 1e5), saturation=(0.5, 0.5)),
        ]
    )
    left = bf.BoundaryVariables(params, None, geometry, 0, vvs)
    right = bf.BoundaryVariables(params, None, geometry, 1, vvs)

    assert left.scv_index == 0 and right.scv_index == 1
    assert np.isclose(left.darcy_flux_intensity(0), -1e-12 * 1e4)
    assert np.isclose(right.darcy_flux_intensity(0), 1e-15 * 1e4)
    assert left.effective_diffusion_coefficient(1) == 0.0
    assert right.effective_diffusion_coefficient(1) > 0.0


def test_harmonic_averaging_does_not_apply():
    params = bf.RegionSpatialParameters(
        lambda x: x[0] > 5,
        fine_permeability=1e-15,
        coarse_permeability=1e-12,
        enable_gravity=False,
    )
    geometry = bf.BoxElementGeometry(LINE, boundary_facets=[1])
    config = bf.FluxModelConfig(permeability_averaging="harmonic")
    vvs = _line_volume_variables()
    flux = bf.BoundaryVariables(params, None, geometry, 0, vvs, config)
    assert np.isclose(flux.darcy_flux_intensity(0), 1e-15 * 1e4)


class TestGravity:
    NODES = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
    RHO = bf.material_values.water["density"]

    def _volume_variables(self):
        return element_volume_variables(
            self.NODES, lambda x: 1e5 - self.RHO * bf.GRAVITY_ACCELERATION * x[1]
        )

    def test_hydrostatic(self):
        # Top boundary of a hydrostatic column: no liquid flux.
        geometry = bf.BoxElementGeometry(self.NODES, boundary_facets=[2])
        params = bf.HomogeneousSpatialParameters()
        for face_index in range(2):
            flux = bf.BoundaryVariables(
                params, None, geometry, face_index, self._volume_variables()
            )
            assert np.allclose(flux.normal, [0.0, 1.0])
            assert np.allclose(flux.potential_gradient(0), 0.0)

    @pytest.mark.parametrize(
        "config, enable_gravity",
        [(NO_GRAVITY, True), (bf.FluxModelConfig(), False)],
    )
    def test_gravity_disabled(self, config, enable_gravity):
        # No buoyancy correction at all if gravity is off.
        geometry = bf.BoxElementGeometry(self.NODES, boundary_facets=[2])
        params = bf.HomogeneousSpatialParameters(enable_gravity=enable_gravity)
        flux = bf.BoundaryVariables(
            params, None, geometry, 0, self._volume_variables(), config
        )
        known = [0.0, -self.RHO * bf.GRAVITY_ACCELERATION]
        assert np.allclose(flux.potential_gradient(0), known)
        assert np.allclose(flux.potential_gradient(1), known)
        assert np.isclose(flux.darcy_flux_intensity(0), -1e-12 * known[1])


def test_matches_interior_reconstruction():
    # For a linear field, boundary and interior faces see the same gradients.
    geometry = bf.BoxElementGeometry(QUADRILATERAL, boundary_facets=[0, 2])
    vvs = element_volume_variables(
        QUADRILATERAL, lambda x: 1e5 + 50 * x[0] + 20 * x[1]
    )
    params = bf.HomogeneousSpatialParameters()
    interior = bf.FluxVariables(params, None, geometry, 0, vvs)
    for face_index in range(geometry.num_boundary_faces):
        boundary = bf.BoundaryVariables(params, None, geometry, face_index, vvs)
        assert np.allclose(
            boundary.data.potential_gradient, interior.data.potential_gradient
        )


def test_invalid_boundary_face_index():
    geometry = bf.BoxElementGeometry(LINE, boundary_facets=[0])
    params = bf.HomogeneousSpatialParameters()
    with pytest.raises(IndexError):
        bf.BoundaryVariables(params, None, geometry, 1, _line_volume_variables())
