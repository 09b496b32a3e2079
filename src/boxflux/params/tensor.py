"""
The tensor module contains the point-wise second order tensor, intended e.g. for
representation of intrinsic permeability and thermal conductivity at a sub-control
volume, together with helpers that turn the values returned by spatial parameters into
dense tensors of the world dimension.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

import boxflux as bf

__all__ = ["SecondOrderTensor", "as_tensor", "harmonic_mean"]


class SecondOrderTensor:
    """Permeability (or conductivity) tensor at a single point.

    The tensor is always 3-dimensional, however, 1D and 2D problems are accommodated by
    assigning unit values to kzz and kyy, and no cross terms, and by restricting the
    tensor to the world dimension with :meth:`restrict`.

    """

    def __init__(
        self,
        kxx: float,
        kyy: Optional[float] = None,
        kzz: Optional[float] = None,
        kxy: Optional[float] = None,
        kxz: Optional[float] = None,
        kyz: Optional[float] = None,
    ):
        """Initialize the tensor.

        Parameters:
            kxx: Value of the xx component.
            kyy: Value of the yy component. Default equal to kxx.
            kzz: Value of the zz component. Default equal to kxx.
            kxy: Value of the xy component. Defaults to zero.
            kxz: Value of the xz component. Defaults to zero.
            kyz: Value of the yz component. Defaults to zero.

        Raises:
            ValueError if the tensor is not positive semi-definite.

        """
        if kxx < 0:
            raise ValueError(
                "Tensor is not positive definite because of components in x-direction"
            )
        if kyy is None:
            kyy = kxx
        if kzz is None:
            kzz = kxx
        if kxy is None:
            kxy = 0.0
        if kxz is None:
            kxz = 0.0
        if kyz is None:
            kyz = 0.0

        # Onsager's principle - tensor should be positive definite. Check the leading
        # principal minors.
        if kxx * kyy - kxy * kxy < 0:
            raise ValueError(
                "Tensor is not positive definite because of components in y-direction"
            )
        if (
            kxx * (kyy * kzz - kyz * kyz)
            - kxy * (kxy * kzz - kxz * kyz)
            + kxz * (kxy * kyz - kxz * kyy)
        ) < 0:
            raise ValueError(
                "Tensor is not positive definite because of components in z-direction"
            )

        self.values = np.array(
            [[kxx, kxy, kxz], [kxy, kyy, kyz], [kxz, kyz, kzz]], dtype=float
        )

    def restrict(self, dim: int) -> np.ndarray:
        """The upper left ``dim x dim`` block of the tensor.

        Parameters:
            dim: World dimension, 1, 2 or 3.

        Returns:
            A copy of the restricted tensor values.

        """
        if dim not in (1, 2, 3):
            raise ValueError(f"Cannot restrict a tensor to dimension {dim}")
        return self.values[:dim, :dim].copy()

    def __str__(self) -> str:
        return f"Second order tensor with diagonal {np.diag(self.values)}"

    def __repr__(self) -> str:
        return self.__str__()


def as_tensor(value: bf.PermeabilityLike, dim: int) -> np.ndarray:
    """Convert a permeability-like value to a dense ``dim x dim`` tensor.

    Parameters:
        value: A scalar (isotropic medium, broadcast onto the diagonal), an array of
            ``dim`` diagonal values, a ``(dim, dim)`` array or a
            :class:`SecondOrderTensor`.
        dim: World dimension.

    Raises:
        ValueError if the value cannot be interpreted as a tensor of dimension dim.

    Returns:
        The tensor as a ``(dim, dim)`` array.

    """
    if isinstance(value, SecondOrderTensor):
        return value.restrict(dim)

    arr = np.asarray(value, dtype=float)
    if arr.ndim == 0:
        return float(arr) * np.eye(dim)
    if arr.shape == (dim,):
        return np.diag(arr)
    if arr.shape == (dim, dim):
        return arr
    raise ValueError(
        f"Permeability of shape {arr.shape} is not compatible with dimension {dim}"
    )


def harmonic_mean(K_i: np.ndarray, K_j: np.ndarray) -> np.ndarray:
    """Entry-wise harmonic mean of two tensors.

    Entries where the two tensors have differing signs, or where one of them vanishes,
    are set to zero.

    Parameters:
        K_i: First tensor.
        K_j: Second tensor, same shape as the first.

    Returns:
        Array of the same shape with ``2 K_i K_j / (K_i + K_j)`` entry-wise.

    """
    prod = K_i * K_j
    mean = np.zeros_like(prod)
    positive = prod > 0
    mean[positive] = 2 * prod[positive] / (K_i[positive] + K_j[positive])
    return mean
