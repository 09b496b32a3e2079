"""   BoxFlux.

Root directory for the BoxFlux package: flux and gradient reconstruction for the box
method (vertex-centered finite volumes) applied to multiphase, multicomponent flow in
porous media. Contains the following sub-packages:

fluxes: Reconstruction of face gradients, Darcy flux intensities, effective diffusion
    coefficients and conductive heat fluxes.

geometry: Shape functions and the box-method geometry of single elements.

models: Model configuration, volume variables and spatial parameters.

params: Permeability tensors and material values.

utils: Constants, type aliases and timing.


isort:skip_file

"""

import os
from pathlib import Path
import configparser


__version__ = "0.1.0"

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("boxflux.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = dict(cfg)
except configparser.Error:
    # A malformed file is treated as if no configurations are given
    config = {}

# ------------------------------------
# Simplified namespaces. Classes and functions a user works with have a shortcut here.

from boxflux.utils.common_constants import *
from boxflux.utils.boxflux_types import *
from boxflux.utils.logging import time_logger

# Parameters
from boxflux.params import material_values
from boxflux.params.tensor import SecondOrderTensor, as_tensor, harmonic_mean

# Geometry
from boxflux.geometry import shape_functions
from boxflux.geometry.shape_functions import ReferenceElement, reference_element
from boxflux.geometry.box_geometry import (
    BoxElementGeometry,
    SubControlVolume,
    SubControlVolumeFace,
    BoundaryFace,
)

# Models
from boxflux.models.config import FluxModelConfig
from boxflux.models.volume_variables import (
    PhasePresence,
    VolumeVariables,
    ElementVolumeVariables,
)
from boxflux.models import protocol
from boxflux.models.spatial_parameters import (
    HeatConductionLaw,
    FourierHeatConduction,
    SomertonHeatConduction,
    SpatialParameters,
    HomogeneousSpatialParameters,
    RegionSpatialParameters,
)

# Fluxes
from boxflux.fluxes import gradients
from boxflux.fluxes.flux_data import FaceFluxData, NonIsothermalFaceFluxData
from boxflux.fluxes.flux_variables import FaceFluxVariables, FluxVariables
from boxflux.fluxes.boundary_variables import BoundaryVariables
from boxflux.fluxes.nonisothermal import NonIsothermalFluxVariables
from boxflux.fluxes.element_fluxes import element_flux_variables
