"""Matrix-free linear operators for left finite differences.

The operators act on flat vectors, as required by the Krylov solvers of
scipy.sparse.linalg, and reshape internally to the image shape before calling
:func:`diffl.diffl_into` and :func:`diffl.diffl_adj_into`.

"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Union

import numpy as np
from scipy.sparse.linalg import LinearOperator

from diffl.mathematics.derivatives import (
    _as_axes,
    _check_axis,
    _is_single_axis,
    diffl_adj_into,
    diffl_into,
)
from diffl.utils.config import DifferenceOptions, EdgeMode
from diffl.utils.exceptions import UnsupportedEdgeError

__all__ = ["DifferenceMap", "diffl_map"]

logger = logging.getLogger(__name__)


class DifferenceMap(LinearOperator):
    """Linear operator defined by a forward and an adjoint closure.

    Both closures map flat vectors to flat vectors. Transposition (and taking the
    adjoint, which coincides for the real-valued difference stencils) swaps the two
    closures without any recomputation.

    """

    def __init__(
        self,
        forward: Callable[[np.ndarray], np.ndarray],
        adjoint: Callable[[np.ndarray], np.ndarray],
        shape: tuple[int, int],
        dtype: np.dtype = np.float32,
        name: str = "diffl_map",
        image_shape: Optional[tuple[int, ...]] = None,
        dims: Optional[Union[int, list[int]]] = None,
        options: Optional[DifferenceOptions] = None,
    ) -> None:
        super().__init__(dtype=np.dtype(dtype), shape=shape)

        self.forward = forward
        """Closure applying the operator to a flat vector."""
        self.backward = adjoint
        """Closure applying the adjoint operator to a flat vector."""
        self.name = name
        """Human readable name."""
        self.image_shape = image_shape
        """Shape of the image the differences are taken of."""
        self.dims = dims
        """Axis or axes along which the differences are taken."""
        self.options = options
        """Edge mode and stencil of the differences."""

    def _matvec(self, x: np.ndarray) -> np.ndarray:
        return self.forward(x)

    def _rmatvec(self, y: np.ndarray) -> np.ndarray:
        return self.backward(y)

    def _adjoint(self) -> "DifferenceMap":
        return DifferenceMap(
            self.backward,
            self.forward,
            (self.shape[1], self.shape[0]),
            dtype=self.dtype,
            name=self.name,
            image_shape=self.image_shape,
            dims=self.dims,
            options=self.options,
        )

    _transpose = _adjoint

    def todense(self) -> np.ndarray:
        """Materialize the operator as dense matrix.

        Returns:
            np.ndarray: matrix of shape self.shape

        """
        return self.matmat(np.eye(self.shape[1], dtype=self.dtype))


def diffl_map(
    shape: tuple[int, ...],
    dims: Union[int, Sequence[int]] = 0,
    *,
    edge: Union[EdgeMode, str] = EdgeMode.ZERO,
    add: bool = False,
    dtype: np.dtype = np.float32,
    options: Optional[DifferenceOptions] = None,
) -> DifferenceMap:
    """Linear operator computing left finite differences of flattened images.

    The operator maps vectors of length prod(shape) to vectors of length
    prod(shape) (single axis) or prod(shape) * len(dims) (sequence of axes) using
    :func:`diffl.diffl_into`; its adjoint uses :func:`diffl.diffl_adj_into`.

    Args:
        shape (tuple of int): image shape
        dims (int or sequence of int): axis or axes along which to differentiate
        edge (EdgeMode or str): treatment of the first entries, "zero" or "circ"
        add (bool): use x[i] + x[i-1] instead of x[i] - x[i-1]
        dtype (np.dtype): element type of the operator
        options (DifferenceOptions, optional): if provided, overrules edge and add

    Returns:
        DifferenceMap: operator T such that T @ x.ravel() is the flattened diffl(x)

    Raises:
        ValueError: if an axis is out of range
        UnsupportedEdgeError: for edge "none", leaving the adjoint undefined

    """
    if options is None:
        options = DifferenceOptions(edge=edge, add=add)
    if options.edge == EdgeMode.NONE:
        raise UnsupportedEdgeError(f"edge={options.edge} unsupported for diffl_map")

    image_shape = tuple(int(n) for n in shape)
    ndim = len(image_shape)
    size = int(np.prod(image_shape))

    if _is_single_axis(dims):
        dims = int(dims)
        _check_axis(dims, ndim)
        range_shape = image_shape
    else:
        dims = _as_axes(dims)
        for d in dims:
            _check_axis(d, ndim)
        range_shape = (*image_shape, len(dims))

    def _forward(x: np.ndarray) -> np.ndarray:
        x = np.reshape(x, image_shape)
        g = np.empty(range_shape, dtype=np.result_type(x.dtype, dtype))
        return diffl_into(g, x, dims, **options.kwargs()).ravel()

    def _adjoint(y: np.ndarray) -> np.ndarray:
        g = np.reshape(y, range_shape)
        z = np.empty(image_shape, dtype=np.result_type(g.dtype, dtype))
        return diffl_adj_into(z, g, dims, **options.kwargs()).ravel()

    logger.debug(
        f"Setup diffl_map for shape {image_shape}, dims {dims} and {options}."
    )

    return DifferenceMap(
        _forward,
        _adjoint,
        (int(np.prod(range_shape)), size),
        dtype=dtype,
        name="diffl_map",
        image_shape=image_shape,
        dims=dims,
        options=options,
    )
