"""
Polynomial Regression
=====================
Least-squares polynomial fits through a set of points, the diagnostics shown
next to them (R², RMSE) and the sampled curve used for plotting.
"""
from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

import numpy as np

from materialsanalysis.config import CURVE_SAMPLES
from materialsanalysis.result import Err, ErrorKind, Ok, Result
from materialsanalysis.solvers.solver import solve

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


class InterpolationMethod(StrEnum):
    LINEAR = "linear"
    POLY2 = "poly2"
    POLY3 = "poly3"
    POLY4 = "poly4"

    @property
    def degree(self) -> int:
        return {
            InterpolationMethod.LINEAR: 1,
            InterpolationMethod.POLY2: 2,
            InterpolationMethod.POLY3: 3,
            InterpolationMethod.POLY4: 4,
        }[self]


@dataclass(frozen=True)
class PolynomialFit:
    """
    Fitted polynomial ``c0 + c1·x + c2·x² + ...``.

    Attributes:
        coefficients: Coefficients ordered ascending by power.
        degree: Degree actually used (after clamping to the data).
        requested_degree: Degree asked for by the caller.
        singular: True if the normal equations were singular and the
            coefficients are the solver's all-zero fallback.
    """
    coefficients: npt.NDArray[np.float64]
    degree: int
    requested_degree: int
    singular: bool = False

    def predict(self, x: float | npt.NDArray[np.float64]) -> float | npt.NDArray[np.float64]:
        """Evaluate ``Σ coeff[i]·x^i``."""
        # np.polyval expects the highest power first
        values = np.polyval(self.coefficients[::-1], x)
        if np.isscalar(x):
            return float(values)
        return values


@dataclass(frozen=True)
class InterpolationResult:
    fit: PolynomialFit
    r_squared: float
    rmse: float
    curve: List[Point2D] = field(default_factory=list)
    query_y: Optional[float] = None

    @property
    def coefficients(self) -> npt.NDArray[np.float64]:
        return self.fit.coefficients


def _as_arrays(points: Iterable[Point2D]) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    ordered = sorted(points, key=lambda p: p.x)
    x = np.array([p.x for p in ordered], dtype=np.float64)
    y = np.array([p.y for p in ordered], dtype=np.float64)
    return x, y


def normal_equations(
    x: npt.ArrayLike,
    y: npt.ArrayLike,
    degree: int
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Build the least-squares normal equations for a polynomial of `degree`.

    Args:
        x: Abscissae.
        y: Ordinates, same length as `x`.
        degree: Polynomial degree d.

    Returns:
        The (d+1)x(d+1) matrix with entries ``Σ x^(i+j)`` and the vector
        with entries ``Σ y·x^i``.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    # power_sums[k] = Σ x^k for k = 0..2d
    powers = np.arange(2 * degree + 1)
    power_sums = np.sum(x[:, np.newaxis] ** powers, axis=0)

    idx = np.arange(degree + 1)
    matrix = power_sums[idx[:, np.newaxis] + idx[np.newaxis, :]]
    rhs = np.sum(y[:, np.newaxis] * x[:, np.newaxis] ** idx, axis=0)
    return matrix, rhs


def polyfit(points: Sequence[Point2D], degree: int) -> Result[PolynomialFit]:
    """
    Least-squares polynomial fit.

    The degree is clamped to ``len(points) - 1`` so the system is never
    under-determined. The abscissa is scaled by ``max|x|`` before the normal
    equations are built and the coefficients are rescaled afterward; this
    gives the same least-squares polynomial with a far better conditioned
    matrix.

    Returns:
        ``Ok(PolynomialFit)``, ``Err(INSUFFICIENT_DATA)`` for fewer than two
        points, or ``Err(DOMAIN)`` for a negative degree.
    """
    if len(points) < 2:
        return Err(ErrorKind.INSUFFICIENT_DATA, "At least two points are required")
    if degree < 0:
        return Err(ErrorKind.DOMAIN, f"Polynomial degree must be non-negative, got {degree}")

    used_degree = min(degree, len(points) - 1)
    if used_degree != degree:
        logger.debug(f"Clamped polynomial degree {degree} -> {used_degree} for {len(points)} points.")

    x, y = _as_arrays(points)
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
        return Err(ErrorKind.DOMAIN, "Points must have finite coordinates")

    scale = float(np.max(np.abs(x)))
    if scale == 0.0:
        scale = 1.0

    matrix, rhs = normal_equations(x / scale, y, used_degree)
    scaled_coefficients, singular = solve(matrix, rhs)
    coefficients = scaled_coefficients / scale ** np.arange(used_degree + 1)

    return Ok(PolynomialFit(
        coefficients=coefficients,
        degree=used_degree,
        requested_degree=degree,
        singular=singular
    ))


def _sums_of_squares(fit: PolynomialFit, points: Sequence[Point2D]) -> tuple[float, float]:
    x, y = _as_arrays(points)
    predicted = fit.predict(x)
    ss_res = float(np.sum((y - predicted) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    return ss_res, ss_tot


def r_squared(fit: PolynomialFit, points: Sequence[Point2D]) -> float:
    """
    Coefficient of determination ``1 - SS_res/SS_tot``.

    Defined as 1 when all y are identical and ``nan`` for no points. Not
    clamped: a fit worse than the mean gives a negative value.
    """
    if not points:
        return math.nan
    ss_res, ss_tot = _sums_of_squares(fit, points)
    if ss_tot == 0:
        return 1.0
    return 1.0 - ss_res / ss_tot


def rmse(fit: PolynomialFit, points: Sequence[Point2D]) -> float:
    """Root mean squared residual ``sqrt(SS_res / n)``, ``nan`` for no points."""
    if not points:
        return math.nan
    ss_res, _ = _sums_of_squares(fit, points)
    return float(np.sqrt(ss_res / len(points)))


def sample_curve(
    fit: PolynomialFit,
    min_x: float,
    max_x: float,
    samples: int = CURVE_SAMPLES
) -> List[Point2D]:
    """Evaluate the fit at `samples` equal steps from `min_x` to `max_x` inclusive."""
    xs = np.linspace(min_x, max_x, samples + 1)
    ys = fit.predict(xs)
    return [Point2D(float(x), float(y)) for x, y in zip(xs, ys)]


def interpolate(
    points: Sequence[Point2D],
    method: InterpolationMethod = InterpolationMethod.POLY2,
    query_x: Optional[float] = None
) -> Result[InterpolationResult]:
    """
    Fit `points` with the polynomial selected by `method` and collect the
    diagnostics and plotting curve.
    """
    fitted = polyfit(points, method.degree)
    if not fitted.ok:
        return fitted
    fit = fitted.value

    x, _ = _as_arrays(points)
    return Ok(InterpolationResult(
        fit=fit,
        r_squared=r_squared(fit, points),
        rmse=rmse(fit, points),
        curve=sample_curve(fit, float(x[0]), float(x[-1])),
        query_y=fit.predict(float(query_x)) if query_x is not None else None
    ))


def load_points_csv(filepath: str) -> List[Point2D]:
    """
    Read ``x, y`` pairs from a CSV file.

    The delimiter is ``;`` if the first line contains one, otherwise ``,``.
    Decimal commas are accepted; rows that do not start with a number
    (headers, comments) are skipped.
    """
    points: List[Point2D] = []
    try:
        with open(filepath, mode='r', encoding='utf-8-sig') as f:
            line = f.readline()
            delimiter = ';' if ';' in line else ','
            f.seek(0)
            reader = csv.reader(f, delimiter=delimiter)
            for row in reader:
                if len(row) < 2:
                    continue
                try:
                    x, y = map(lambda v: float(v.strip().replace(',', '.')), row[:2])
                except ValueError:
                    continue
                points.append(Point2D(x, y))
    except OSError as e:
        logger.error(f"CSV import failed: {e}")
        raise IOError(f"Failed to read CSV: {e}")

    logger.info(f"Loaded {len(points)} points from {filepath}")
    return points
