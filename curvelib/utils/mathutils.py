"""Small numerical helpers used by the interpolation kernel."""

from __future__ import annotations

from typing import Sequence

import numpy as np


def solve_tridiagonal(
    lower: Sequence[float],
    diag: Sequence[float],
    upper: Sequence[float],
    rhs: Sequence[float],
) -> np.ndarray:
    """
    Solve a tridiagonal linear system with the Thomas algorithm.

    Parameters
    ----------
    lower : Sequence[float]
        Sub-diagonal, length n-1.
    diag : Sequence[float]
        Main diagonal, length n.
    upper : Sequence[float]
        Super-diagonal, length n-1.
    rhs : Sequence[float]
        Right-hand side, length n.

    Returns
    -------
    np.ndarray
        Solution vector of length n.

    Raises
    ------
    ValueError
        If the band lengths are inconsistent or a zero pivot is met.
    """
    n = len(diag)
    if len(lower) != n - 1 or len(upper) != n - 1 or len(rhs) != n:
        raise ValueError("Inconsistent tridiagonal system dimensions")

    c_prime = np.zeros(max(n - 1, 0), dtype=float)
    d_prime = np.zeros(n, dtype=float)

    pivot = float(diag[0])
    if pivot == 0.0:
        raise ValueError("Zero pivot in tridiagonal solve")
    if n > 1:
        c_prime[0] = upper[0] / pivot
    d_prime[0] = rhs[0] / pivot

    for i in range(1, n):
        pivot = diag[i] - lower[i - 1] * c_prime[i - 1]
        if pivot == 0.0:
            raise ValueError("Zero pivot in tridiagonal solve")
        if i < n - 1:
            c_prime[i] = upper[i] / pivot
        d_prime[i] = (rhs[i] - lower[i - 1] * d_prime[i - 1]) / pivot

    solution = np.zeros(n, dtype=float)
    solution[-1] = d_prime[-1]
    for i in range(n - 2, -1, -1):
        solution[i] = d_prime[i] - c_prime[i] * solution[i + 1]
    return solution

