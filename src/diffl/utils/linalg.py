"""Diagnostics for linear operators."""

from __future__ import annotations

from typing import Optional

import numpy as np
from scipy.sparse.linalg import LinearOperator

__all__ = ["adjoint_mismatch"]


def adjoint_mismatch(
    op: LinearOperator,
    rng: Optional[np.random.Generator] = None,
    complex_valued: bool = False,
) -> float:
    """Dot test for the adjoint of a linear operator.

    Compares <A x, y> and <x, A^H y> for random vectors x and y.

    Args:
        op (LinearOperator): operator A providing matvec and rmatvec
        rng (np.random.Generator, optional): random number generator
        complex_valued (bool): use complex random vectors

    Returns:
        float: relative mismatch of both inner products

    """
    if rng is None:
        rng = np.random.default_rng()

    m, n = op.shape
    x = rng.standard_normal(n)
    y = rng.standard_normal(m)
    if complex_valued:
        x = x + 1j * rng.standard_normal(n)
        y = y + 1j * rng.standard_normal(m)

    lhs = np.vdot(y, op.matvec(x))
    rhs = np.vdot(op.rmatvec(y), x)
    return float(np.abs(lhs - rhs) / max(np.abs(lhs), np.finfo(float).tiny))
