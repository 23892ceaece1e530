"""TV denoising for numpy arrays allowing for heterogeneous weights."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np
import scipy.sparse.linalg as spla
import skimage

from diffl.mathematics.operators import diffl_map
from diffl.utils.config import EdgeMode
from diffl.utils.dtype import convert_dtype

__all__ = ["split_bregman_tvd"]

logger = logging.getLogger(__name__)


def split_bregman_tvd(
    img: np.ndarray,
    mu: Union[float, np.ndarray] = 1.0,
    omega: Union[float, np.ndarray] = 1.0,
    ell: Optional[float] = None,
    dims: Optional[Sequence[int]] = None,
    edge: Union[EdgeMode, str] = EdgeMode.ZERO,
    max_num_iter: int = 100,
    eps: Optional[float] = None,
    isotropic: bool = False,
    cg_maxiter: int = 100,
    cg_tol: float = 1e-5,
    verbose: Union[bool, int] = False,
) -> np.ndarray:
    """Split Bregman algorithm for TV denoising.

    Solves min_u mu * |D u|_1 + 1/2 * ||sqrt(omega) * (u - img)||^2 with D the stacked
    left finite difference along dims. The Bregman iteration introduces a splitting
    variable d = D u, weighted by the parameter ell, resulting in two subproblems. The
    first subproblem is the linear system

        (omega * I + ell * D^T D) u = omega * img + ell * D^T (d - b),

    solved with the conjugate gradient method using the matrix-free operator D, the
    second subproblem is a shrinkage step.

    Args:
        img (array): image
        mu (float or array): TV penalization parameter, arrays must have the shape
            of img
        omega (float or array): mass penalization parameter
        ell (float, optional): regularization parameter; defaults to 2 * omega
            (maximum of omega for arrays)
        dims (sequence of int, optional): axes for the TV term, all axes by default
        edge (EdgeMode or str): boundary treatment of D, "zero" or "circ"
        max_num_iter (int): maximum number of iterations
        eps (float, optional): tolerance for the relative increment
        isotropic (bool): whether to use isotropic TV denoising
        cg_maxiter (int): maximum number of iterations of the inner CG solver
        cg_tol (float): relative tolerance of the inner CG solver
        verbose (bool, int): verbosity (frequency if int)

    Returns:
        array: denoised image, same dtype as img

    """

    # Keep track of input type and convert input image to float for further calculations
    img_dtype = img.dtype
    img_float = skimage.img_as_float(img)
    shape = img_float.shape

    dims = list(range(img_float.ndim)) if dims is None else list(dims)
    num_dims = len(dims)

    # Store input image norm for convergence check
    img_nrm = max(np.linalg.norm(img_float), np.finfo(float).tiny)

    if ell is None:
        ell = 2 * float(np.max(omega))

    # Stacked left finite differences and the associated quantities acting on flat
    # arrays
    diff = diffl_map(shape, dims, edge=edge, dtype=np.float64)
    size = int(np.prod(shape))
    omega_flat = np.ravel(np.broadcast_to(omega, shape))

    def _mv(x: np.ndarray) -> np.ndarray:
        x = np.ravel(x)
        return omega_flat * x + ell * diff.rmatvec(diff.matvec(x))

    lhs_operator = spla.LinearOperator((size, size), matvec=_mv, dtype=np.float64)

    # Thresholds for the shrinkage, broadcast against the trailing axis of d
    mu_over_ell = np.asarray(mu, dtype=float) / ell
    threshold = mu_over_ell[..., None] if mu_over_ell.ndim > 0 else mu_over_ell

    def _grad(x: np.ndarray) -> np.ndarray:
        return diff.matvec(x.ravel()).reshape(*shape, num_dims)

    def _functional(x: np.ndarray) -> float:
        dx = _grad(x)
        if isotropic:
            tv = np.sum(np.asarray(mu) * np.linalg.norm(dx, axis=-1))
        else:
            tv = np.sum(np.asarray(mu)[..., None] * np.abs(dx))
        return 0.5 * np.sum(omega * (x - img_float) ** 2) + tv

    # Define shrinkage operator (shrinks element-wise by k)
    def _shrink(x: np.ndarray, k: Union[float, np.ndarray]) -> np.ndarray:
        return np.maximum(np.abs(x) - k, 0) * np.sign(x)

    def _rhs_function(dt: np.ndarray, bt: np.ndarray) -> np.ndarray:
        return omega_flat * img_float.ravel() + ell * diff.rmatvec((dt - bt).ravel())

    img_iter = img_float.copy()
    d = np.zeros((*shape, num_dims))
    b = np.zeros((*shape, num_dims))

    if verbose if isinstance(verbose, bool) else verbose > 0:
        logger.info(f"The energy functional starts at {_functional(img_float)}")

    # Bregman iterations
    for iter in range(max_num_iter):
        # First step - solve the stabilized diffusion system.
        sol, info = spla.cg(
            lhs_operator,
            _rhs_function(d, b),
            x0=img_iter.ravel(),
            rtol=cg_tol,
            maxiter=cg_maxiter,
        )
        if info > 0:
            logger.debug(f"CG did not converge within {info} iterations.")
        img_new = sol.reshape(shape)

        # Second step - shrinkage.
        dub = _grad(img_new) + b
        if isotropic:
            s = np.linalg.norm(dub, 2, axis=-1)
            shrinkage_factor = np.maximum(s - mu_over_ell, 0) / (s + 1e-18)
            d = dub * shrinkage_factor[..., None]
        else:
            d = _shrink(dub, threshold)
        b = dub - d

        # Monitor performance
        relative_increment = np.linalg.norm(img_new - img_iter) / img_nrm

        # Update of result
        img_iter = img_new

        if verbose if isinstance(verbose, bool) else verbose > 0 and iter % verbose == 0:
            logger.info(
                f"""Split Bregman iteration {iter} - """
                f"""relative increment: {round(relative_increment, 5)}, """
                f"""energy functional: {_functional(img_iter)}"""
            )

        # Convergence check
        if eps is not None:
            if relative_increment < eps:
                break

    return convert_dtype(img_iter, img_dtype)
