from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numba as nb
import numpy as np

from materialsanalysis.config import PIVOT_TOLERANCE
from materialsanalysis.result import Err, ErrorKind, Ok, Result

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@nb.njit(cache=True)
def _gauss_partial_pivot(
    a: npt.NDArray[np.float64],
    b: npt.NDArray[np.float64],
    tolerance: float
) -> tuple[npt.NDArray[np.float64], bool]:
    """
    Gaussian elimination with partial pivoting followed by back-substitution.

    Works in-place on ``a`` and ``b``; callers pass copies.

    Returns:
        x:        Solution vector, all zeros when a pivot falls below tolerance.
        singular: True if the zero-vector fallback was taken.
    """
    n = b.shape[0]
    for i in range(n):
        max_el = abs(a[i, i])
        max_row = i
        for k in range(i + 1, n):
            if abs(a[k, i]) > max_el:
                max_el = abs(a[k, i])
                max_row = k

        for k in range(i, n):
            tmp = a[max_row, k]
            a[max_row, k] = a[i, k]
            a[i, k] = tmp
        tmp = b[max_row]
        b[max_row] = b[i]
        b[i] = tmp

        if abs(a[i, i]) < tolerance:
            return np.zeros(n, np.float64), True

        for k in range(i + 1, n):
            c = -a[k, i] / a[i, i]
            for j in range(i, n):
                if i == j:
                    a[k, j] = 0.0
                else:
                    a[k, j] += c * a[i, j]
            b[k] += c * b[i]

    x = np.zeros(n, np.float64)
    for i in range(n - 1, -1, -1):
        x[i] = b[i] / a[i, i]
        for k in range(i - 1, -1, -1):
            b[k] -= a[k, i] * x[i]
    return x, False


def _prepare(
    a: npt.ArrayLike,
    b: npt.ArrayLike
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    a_work = np.array(a, dtype=np.float64, copy=True)
    b_work = np.array(b, dtype=np.float64, copy=True)

    if a_work.ndim != 2 or a_work.shape[0] != a_work.shape[1]:
        raise ValueError(f"Matrix must be square, got shape {a_work.shape}.")
    if a_work.shape[0] < 1:
        raise ValueError("Matrix must have at least one row.")
    if b_work.shape != (a_work.shape[0],):
        raise ValueError(
            f"Right-hand side must have shape ({a_work.shape[0]},), got {b_work.shape}."
        )
    return a_work, b_work


def solve(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    tolerance: float = PIVOT_TOLERANCE
) -> tuple[npt.NDArray[np.float64], bool]:
    """
    Solve ``A·x = b`` and report whether the singular fallback was used.

    Args:
        a: Square matrix (n x n). Not modified.
        b: Right-hand side vector (n). Not modified.
        tolerance: Smallest pivot magnitude accepted after the row swap.

    Raises:
        ValueError: If the shapes of `a` and `b` do not describe a square system.

    Returns:
        The solution vector and a flag that is True for a singular system.
    """
    a_work, b_work = _prepare(a, b)
    x, singular = _gauss_partial_pivot(a_work, b_work, tolerance)
    if singular:
        logger.warning(
            f"Pivot below {tolerance:g} in {a_work.shape[0]}x{a_work.shape[0]} system; "
            f"returning zero vector."
        )
    return x, bool(singular)


def solve_linear_system(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    tolerance: float = PIVOT_TOLERANCE
) -> npt.NDArray[np.float64]:
    """
    Solve a small dense system ``A·x = b``.

    Singular or badly ill-conditioned systems do not raise: when a pivot
    falls below `tolerance` the result is an all-zero vector. This is a
    known precision limitation; use `solve_linear_system_checked` to tell
    the two cases apart.
    """
    x, _ = solve(a, b, tolerance)
    return x


def solve_linear_system_checked(
    a: npt.ArrayLike,
    b: npt.ArrayLike,
    tolerance: float = PIVOT_TOLERANCE
) -> Result[npt.NDArray[np.float64]]:
    """Like `solve_linear_system`, but a singular pivot yields ``Err(SINGULAR_SYSTEM)``."""
    x, singular = solve(a, b, tolerance)
    if singular:
        return Err(ErrorKind.SINGULAR_SYSTEM, "Pivot below tolerance")
    return Ok(x)
