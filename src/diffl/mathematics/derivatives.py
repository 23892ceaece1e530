"""Left finite differences of arrays and their adjoints.

The left finite difference of an array x along an axis is given by x[i] - x[i-1] (or
x[i] + x[i-1] if ``add=True``). The first entries along the axis have no left
neighbour; their treatment is controlled by the edge mode:

- ``"zero"``: set to zero,
- ``"circ"``: use circulant (aka periodic) boundary conditions, i.e., x[0] - x[-1],
- ``"none"``: leave untouched.

In 1d, if ``x = [2, 6, 7]`` then ``diffl(x) = [0, 4, 1]``.

When differences along several axes are requested, the results are stacked along a
new trailing axis, as required by total variation (TV) and related regularizers.

Each operation comes in an in-place form (``diffl_into``, ``diffl_adj_into``) writing
into a caller-provided buffer, and an allocating form (``diffl``, ``diffl_adj``).
Output buffers may share memory with the input; in that case the input is copied
before any entry is written.

"""

from __future__ import annotations

import logging
from typing import Sequence, Union

import numpy as np

from diffl.utils.array_slice import array_slice, array_slice_argument
from diffl.utils.config import DifferenceOptions, EdgeMode
from diffl.utils.exceptions import DimensionMismatchError

__all__ = ["diffl", "diffl_into", "diffl_adj", "diffl_adj_into"]

logger = logging.getLogger(__name__)

Axes = Union[int, Sequence[int]]

# ! ---- Axis handling ----


def _is_single_axis(dims: Axes) -> bool:
    return isinstance(dims, (int, np.integer)) and not isinstance(dims, bool)


def _as_axes(dims: Axes) -> list[int]:
    """Convert a sequence of axes to a list of python integers."""
    try:
        axes = list(dims)
    except TypeError:
        raise TypeError(
            f"dims must be an int or a sequence of ints, not {type(dims).__name__}."
        ) from None
    for d in axes:
        if not _is_single_axis(d):
            raise TypeError(f"dims must contain ints only, found {d!r}.")
    return [int(d) for d in axes]


def _check_axis(dim: int, ndim: int) -> None:
    if not 0 <= dim < ndim:
        raise ValueError(f"dimension {dim} out of range [0, {ndim})")


def _separate(out: np.ndarray, arr: np.ndarray) -> np.ndarray:
    """Return arr, or a copy of it if it shares memory with the output buffer."""
    if np.may_share_memory(out, arr):
        logger.debug("Output buffer shares memory with input - copy input.")
        return arr.copy()
    return arr


# ! ---- Forward difference ----


def _diffl_axis(
    g: np.ndarray, x: np.ndarray, dim: int, options: DifferenceOptions
) -> np.ndarray:
    """Left finite difference along a single, already validated axis."""
    x_cur = array_slice(x, dim, 1, None)
    x_prev = array_slice(x, dim, 0, -1)
    if options.add:
        g[array_slice_argument(g, dim, 1, None)] = x_cur + x_prev
    else:
        g[array_slice_argument(g, dim, 1, None)] = x_cur - x_prev

    # Handle edge conditions
    g_first = array_slice_argument(g, dim, 0, 1)
    if options.edge == EdgeMode.ZERO:
        g[g_first] = 0
    elif options.edge == EdgeMode.CIRC:
        x_first = array_slice(x, dim, 0, 1)
        x_last = array_slice(x, dim, -1, None)
        if options.add:
            g[g_first] = x_first + x_last
        else:
            g[g_first] = x_first - x_last
    # EdgeMode.NONE: the first entries of g remain untouched

    return g


def diffl_into(
    g: np.ndarray,
    x: np.ndarray,
    dims: Axes = 0,
    *,
    edge: Union[EdgeMode, str] = EdgeMode.ZERO,
    add: bool = False,
) -> np.ndarray:
    """Left finite difference of x, stored in-place in g.

    For a single axis ``dims``, g and x must have the same shape. For a sequence of
    axes, g must have the shape ``x.shape + (len(dims),)`` and its i-th slice along
    the last axis holds the difference of x along ``dims[i]``.

    Args:
        g (np.ndarray): output buffer
        x (np.ndarray): input array
        dims (int or sequence of int): axis or axes along which to differentiate
        edge (EdgeMode or str): treatment of the first entries, one of "zero",
            "circ", "none"
        add (bool): use x[i] + x[i-1] instead of x[i] - x[i-1]

    Returns:
        np.ndarray: g

    Raises:
        ValueError: if an axis is out of range or the edge mode is unknown
        DimensionMismatchError: if the shape of g does not fit x and dims

    """
    options = DifferenceOptions(edge=edge, add=add)
    x = np.asarray(x)

    if _is_single_axis(dims):
        dim = int(dims)
        _check_axis(dim, x.ndim)
        if g.shape != x.shape:
            raise DimensionMismatchError(f"sizes g=>{g.shape} vs x=>{x.shape}")
        return _diffl_axis(g, _separate(g, x), dim, options)

    axes = _as_axes(dims)
    if g.ndim != x.ndim + 1:
        raise DimensionMismatchError(f"g.ndim={g.ndim} x.ndim={x.ndim}")
    if g.shape != (*x.shape, len(axes)):
        raise DimensionMismatchError(
            f"sizes g=>{g.shape} vs x=>{x.shape} with {len(axes)} dims"
        )
    for d in axes:
        _check_axis(d, x.ndim)

    x = _separate(g, x)
    for i, d in enumerate(axes):
        _diffl_axis(g[..., i], x, d, options)
    return g


def diffl(
    x: np.ndarray,
    dims: Axes = 0,
    *,
    edge: Union[EdgeMode, str] = EdgeMode.ZERO,
    add: bool = False,
) -> np.ndarray:
    """Allocating version of :func:`diffl_into`.

    The output has the dtype of x. With ``edge="none"`` the untouched first entries
    are zero.

    Args:
        x (np.ndarray): input array
        dims (int or sequence of int): axis or axes along which to differentiate
        edge (EdgeMode or str): treatment of the first entries
        add (bool): use x[i] + x[i-1] instead of x[i] - x[i-1]

    Returns:
        np.ndarray: left finite difference, with an additional trailing axis of
            length len(dims) if dims is a sequence

    """
    x = np.asarray(x)
    if _is_single_axis(dims):
        return diffl_into(np.zeros_like(x), x, dims, edge=edge, add=add)
    axes = _as_axes(dims)
    g = np.zeros((*x.shape, len(axes)), dtype=x.dtype)
    return diffl_into(g, x, axes, edge=edge, add=add)


# ! ---- Adjoint difference ----


def _diffl_adj_axis(
    z: np.ndarray,
    g: np.ndarray,
    dim: int,
    options: DifferenceOptions,
    reset0: bool,
) -> np.ndarray:
    """Adjoint of the left finite difference along a single, already validated axis."""
    if reset0:
        z[...] = 0

    tail = array_slice_argument(z, dim, 1, None)
    if options.edge == EdgeMode.ZERO:
        z[tail] += g[tail]
    elif options.edge == EdgeMode.CIRC:
        z += g
    # EdgeMode.NONE: the first entries of g do not contribute

    head = array_slice_argument(z, dim, 0, -1)
    last = array_slice_argument(z, dim, -1, None)
    first = array_slice_argument(z, dim, 0, 1)
    if options.add:
        z[head] += g[tail]
        if options.edge == EdgeMode.CIRC:
            z[last] += g[first]
    else:
        z[head] -= g[tail]
        if options.edge == EdgeMode.CIRC:
            z[last] -= g[first]

    return z


def diffl_adj_into(
    z: np.ndarray,
    g: np.ndarray,
    dims: Axes = 0,
    *,
    edge: Union[EdgeMode, str] = EdgeMode.ZERO,
    add: bool = False,
    reset0: bool = True,
) -> np.ndarray:
    """Adjoint of the left finite difference :func:`diffl_into`, stored in-place in z.

    For a single axis ``dims``, z and g must have the same shape. For a sequence of
    axes, g must have the shape ``z.shape + (len(dims),)``; the contributions of all
    slices of g are accumulated in z.

    Args:
        z (np.ndarray): output buffer
        g (np.ndarray): array in the range of the forward difference
        dims (int or sequence of int): axis or axes along which the forward
            difference is taken
        edge (EdgeMode or str): treatment of the first entries, one of "zero",
            "circ", "none"
        add (bool): adjoint of x[i] + x[i-1] instead of x[i] - x[i-1]
        reset0 (bool): set z to zero before accumulating; if False, the result is
            added to the current content of z

    Returns:
        np.ndarray: z

    Raises:
        ValueError: if an axis is out of range or the edge mode is unknown
        DimensionMismatchError: if the shape of g does not fit z and dims

    """
    options = DifferenceOptions(edge=edge, add=add)
    g = np.asarray(g)

    if _is_single_axis(dims):
        dim = int(dims)
        _check_axis(dim, g.ndim)
        if z.shape != g.shape:
            raise DimensionMismatchError(f"sizes z=>{z.shape} vs g=>{g.shape}")
        return _diffl_adj_axis(z, _separate(z, g), dim, options, reset0)

    axes = _as_axes(dims)
    if g.ndim != z.ndim + 1:
        raise DimensionMismatchError(f"g.ndim={g.ndim} z.ndim={z.ndim}")
    if g.shape != (*z.shape, len(axes)):
        raise DimensionMismatchError(
            f"sizes g=>{g.shape} vs z=>{z.shape} with {len(axes)} dims"
        )
    for d in axes:
        _check_axis(d, z.ndim)

    g = _separate(z, g)
    if reset0:
        z[...] = 0
    for i, d in enumerate(axes):
        _diffl_adj_axis(z, g[..., i], d, options, reset0=False)
    return z


def diffl_adj(
    g: np.ndarray,
    dims: Axes = 0,
    *,
    edge: Union[EdgeMode, str] = EdgeMode.ZERO,
    add: bool = False,
) -> np.ndarray:
    """Allocating version of :func:`diffl_adj_into`.

    Args:
        g (np.ndarray): array in the range of the forward difference
        dims (int or sequence of int): axis or axes along which the forward
            difference is taken
        edge (EdgeMode or str): treatment of the first entries
        add (bool): adjoint of x[i] + x[i-1] instead of x[i] - x[i-1]

    Returns:
        np.ndarray: adjoint applied to g, with the trailing axis of g removed if dims
            is a sequence

    """
    g = np.asarray(g)
    if _is_single_axis(dims):
        return diffl_adj_into(np.empty_like(g), g, dims, edge=edge, add=add)
    axes = _as_axes(dims)
    if g.ndim == 0 or g.shape[-1] != len(axes):
        raise DimensionMismatchError(f"sizes g=>{g.shape} vs dims={axes}")
    z = np.empty(g.shape[:-1], dtype=g.dtype)
    return diffl_adj_into(z, g, axes, edge=edge, add=add)
