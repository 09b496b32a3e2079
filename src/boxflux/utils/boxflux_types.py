"""
Defines types commonly used in BoxFlux.
"""

from typing import Sequence, Union

import numpy as np

__all__ = [
    "number",
    "Vector",
    "VectorLike",
    "PermeabilityLike",
]

number = Union[float, int]
"""Type for numbers."""

Vector = np.ndarray
"""One-dimensional array of length equal to the world dimension."""

VectorLike = Union[np.ndarray, Sequence[float]]
"""Anything that numpy can turn into a :data:`Vector`."""

PermeabilityLike = Union[number, np.ndarray, "bf.SecondOrderTensor"]
"""Type of the values an intrinsic permeability can be given as.

A scalar denotes an isotropic medium, a 1d array the diagonal of an anisotropic
tensor aligned with the coordinate axes, and a 2d array or a
:class:`~boxflux.params.tensor.SecondOrderTensor` a full tensor.

"""
