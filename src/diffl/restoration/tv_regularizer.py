"""Smoothed anisotropic total variation regularization term.

For gradient-based reconstruction methods, the regularizer

    R(x) = weight * sum_j huber(|(T x)_j|)

is provided together with its gradient T^H huber'(T x), where T is the stacked left
finite difference :func:`diffl.diffl_map`. The Huber potential is quadratic below the
threshold delta and linear above, such that R approximates anisotropic TV for small
delta while staying differentiable.

"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from diffl.mathematics.operators import DifferenceMap, diffl_map
from diffl.utils.config import EdgeMode

__all__ = ["huber", "huber_weights", "TVRegularizer"]


def huber(t: np.ndarray, delta: float) -> np.ndarray:
    """Huber potential of nonnegative arguments."""
    return np.where(t <= delta, 0.5 * t**2, delta * t - 0.5 * delta**2)


def huber_weights(t: np.ndarray, delta: float) -> np.ndarray:
    """Weights w such that huber'(t) = w * t for nonnegative arguments."""
    return np.where(t <= delta, 1.0, delta / np.maximum(t, delta))


class TVRegularizer:
    """Huber-smoothed anisotropic TV regularizer acting on images of fixed shape.

    Example:
        reg = TVRegularizer(img.shape, weight=0.1, delta=1e-3)
        img = img - step_size * reg.gradient(img)

    """

    def __init__(
        self,
        shape: tuple[int, ...],
        dims: Optional[Sequence[int]] = None,
        weight: float = 1.0,
        delta: float = 1e-2,
        edge: Union[EdgeMode, str] = EdgeMode.ZERO,
        dtype: np.dtype = np.float64,
    ) -> None:
        """Constructor.

        Args:
            shape (tuple of int): image shape
            dims (sequence of int, optional): axes along which to differentiate,
                all axes by default
            weight (float): regularization parameter
            delta (float): threshold of the Huber potential, must be positive
            edge (EdgeMode or str): boundary treatment, "zero" or "circ"
            dtype (np.dtype): element type of the difference operator

        """
        if delta <= 0:
            raise ValueError(f"delta must be positive, got {delta}.")

        self.shape = tuple(shape)
        """Image shape."""
        self.dims = list(range(len(self.shape))) if dims is None else list(dims)
        """Axes along which the differences are taken."""
        self.weight = weight
        """Regularization parameter."""
        self.delta = delta
        """Threshold of the Huber potential."""
        self.operator: DifferenceMap = diffl_map(
            self.shape, self.dims, edge=edge, dtype=dtype
        )
        """Stacked left finite difference operator."""

    def _differences(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        if x.shape != self.shape:
            raise ValueError(f"expected image of shape {self.shape}, got {x.shape}")
        return self.operator.matvec(x.ravel())

    def cost(self, x: np.ndarray) -> float:
        """Value of the regularizer.

        Args:
            x (np.ndarray): image

        Returns:
            float: weight * sum of Huber potentials of all differences

        """
        t = np.abs(self._differences(x))
        return float(self.weight * np.sum(huber(t, self.delta)))

    def gradient(self, x: np.ndarray) -> np.ndarray:
        """Gradient of the regularizer.

        Args:
            x (np.ndarray): image

        Returns:
            np.ndarray: gradient, same shape as x

        """
        d = self._differences(x)
        w = huber_weights(np.abs(d), self.delta)
        return self.weight * self.operator.rmatvec(w * d).reshape(self.shape)
