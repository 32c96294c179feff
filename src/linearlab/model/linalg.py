"""
Linear Algebra Utilities
========================
Closed-form matrix and vector arithmetic for the fixed 2x2 / 3x3 case.

Every function is pure: inputs are anything numpy can turn into an array,
outputs are fresh arrays or plain floats. NaN and Infinity propagate through
the arithmetic untouched.
"""
from __future__ import annotations

from math import sqrt
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def _as_square(a: npt.ArrayLike) -> npt.NDArray[np.float64]:
    m = np.asarray(a, dtype=np.float64)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {m.shape}.")
    return m


def identity(n: int) -> npt.NDArray[np.float64]:
    """Return the n x n identity matrix."""
    return np.eye(n, dtype=np.float64)


def multiply(a: npt.ArrayLike, b: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Standard matrix product A @ B of two square matrices of the same size.

    Args:
        a: Left factor.
        b: Right factor.

    Returns:
        The (n, n) product matrix.
    """
    m_a = _as_square(a)
    m_b = _as_square(b)
    if m_a.shape != m_b.shape:
        raise ValueError(f"Shape mismatch: {m_a.shape} vs {m_b.shape}.")

    n = m_a.shape[0]
    out = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(n):
            out[i, j] = sum(m_a[i, k] * m_b[k, j] for k in range(n))
    return out


def transpose(a: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Swap entry (i, j) with (j, i)."""
    return _as_square(a).T.copy()


def determinant(a: npt.ArrayLike) -> float:
    """
    Determinant of a 2x2 (ad - bc) or 3x3 (cofactor expansion along the first row) matrix.

    Raises:
        ValueError: If the matrix is neither 2x2 nor 3x3.
    """
    m = _as_square(a)

    if m.shape == (2, 2):
        (a11, a12), (a21, a22) = m
        return float(a11 * a22 - a12 * a21)

    if m.shape == (3, 3):
        (a11, a12, a13), (a21, a22, a23), (a31, a32, a33) = m
        return float(
            a11 * (a22 * a33 - a23 * a32)
            - a12 * (a21 * a33 - a23 * a31)
            + a13 * (a21 * a32 - a22 * a31)
        )

    raise ValueError(f"Determinant is only defined here for 2x2 and 3x3 matrices, got {m.shape}.")


def trace(a: npt.ArrayLike) -> float:
    """Sum of the diagonal entries."""
    m = _as_square(a)
    return float(sum(m[i, i] for i in range(m.shape[0])))


def frobenius_norm(a: npt.ArrayLike) -> float:
    """Square root of the sum of squared entries."""
    m = _as_square(a)
    return sqrt(float(np.sum(m * m)))


def vector_norm(v: npt.ArrayLike) -> float:
    """Euclidean (L2) norm over the given coordinates."""
    arr = np.asarray(v, dtype=np.float64).ravel()
    return sqrt(float(np.sum(arr * arr)))


def apply(a: npt.ArrayLike, v: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Apply the linear map A to the column vector v.

    Args:
        a: An (n, n) matrix.
        v: A length-n vector.

    Returns:
        The transformed vector A v as a length-n array.
    """
    m = _as_square(a)
    x = np.asarray(v, dtype=np.float64).ravel()
    if x.shape[0] != m.shape[0]:
        raise ValueError(f"Vector of length {x.shape[0]} does not match matrix {m.shape}.")
    return np.array([sum(m[i, k] * x[k] for k in range(len(x))) for i in range(len(x))], dtype=np.float64)
