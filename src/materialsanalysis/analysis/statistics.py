"""
Descriptive Statistics
======================
Summary statistics, histogram with a normal-curve overlay, and a Weibull
shape estimate for a sample of test results (e.g. repeated strength
measurements).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

import numba as nb
import numpy as np
from scipy import stats

from materialsanalysis.utils import clamp

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

MIN_BINS = 5
MAX_BINS = 15


@dataclass(frozen=True)
class HistogramBin:
    x0: float
    x1: float
    mid: float
    count: int
    normal: float = 0.0  # normal pdf at mid, scaled to frequency

    @property
    def label(self) -> str:
        return f"{self.x0:.1f}-{self.x1:.1f}"


@dataclass(frozen=True)
class StatsSummary:
    """
    Statistics of a sample. An empty sample has ``n == 0`` and every derived
    field set to None.

    Quartiles use the nearest rank ``sorted[floor(n·p)]`` without
    interpolation; they approximate rather than match the textbook methods.
    """
    n: int
    mean: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = None
    cov: Optional[float] = None  # coefficient of variation in %
    min: Optional[float] = None
    max: Optional[float] = None
    range: Optional[float] = None
    q1: Optional[float] = None
    q3: Optional[float] = None
    weibull_shape: Optional[float] = None
    histogram: Tuple[HistogramBin, ...] = field(default_factory=tuple)
    outliers: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def has_data(self) -> bool:
        return self.n > 0

    @property
    def variance(self) -> Optional[float]:
        return None if self.std_dev is None else self.std_dev ** 2

    @staticmethod
    def empty() -> StatsSummary:
        return StatsSummary(n=0)


def parse_sample(text: str) -> List[float]:
    """Split comma separated text into numbers, dropping entries that are not numeric."""
    values: List[float] = []
    for token in text.split(","):
        try:
            value = float(token.strip())
        except ValueError:
            continue
        if not math.isnan(value):
            values.append(value)
    return values


def bin_count(n: int) -> int:
    """Number of histogram bins: ``ceil(sqrt(n))`` clamped to [5, 15]."""
    return int(clamp(math.ceil(math.sqrt(n)), MIN_BINS, MAX_BINS))


@nb.njit(cache=True)
def _bin_counts(
    values: npt.NDArray[np.float64],
    minimum: float,
    width: float,
    n_bins: int
) -> npt.NDArray[np.int64]:
    counts = np.zeros(n_bins, np.int64)
    for i in range(values.size):
        idx = int(math.floor((values[i] - minimum) / width))
        if idx > n_bins - 1:
            idx = n_bins - 1
        if idx < 0:
            idx = 0
        counts[idx] += 1
    return counts


def histogram(values: Iterable[float]) -> Tuple[HistogramBin, ...]:
    """
    Uniform-width histogram of `values` with a scaled normal-pdf overlay.

    Every value lands in exactly one bin; the maximum is folded into the
    last bin.
    """
    data = np.sort(np.asarray(list(values), dtype=np.float64))
    n = data.size
    if n == 0:
        return ()

    minimum, maximum = float(data[0]), float(data[-1])
    n_bins = bin_count(n)
    width = (maximum - minimum) / n_bins
    if width == 0:
        width = 1.0

    counts = _bin_counts(data, minimum, width, n_bins)

    mids = minimum + (np.arange(n_bins) + 0.5) * width
    std_dev = float(np.std(data, ddof=1)) if n > 1 else 0.0
    if std_dev > 0:
        overlay = stats.norm.pdf(mids, loc=float(np.mean(data)), scale=std_dev) * n * width
    else:
        overlay = np.zeros(n_bins)

    return tuple(
        HistogramBin(
            x0=minimum + i * width,
            x1=minimum + (i + 1) * width,
            mid=float(mids[i]),
            count=int(counts[i]),
            normal=float(overlay[i])
        )
        for i in range(n_bins)
    )


def median_ranks(n: int) -> npt.NDArray[np.float64]:
    """Bernard's approximation ``(i + 1 - 0.3) / (n + 0.4)`` for i = 0..n-1."""
    return (np.arange(n) + 1 - 0.3) / (n + 0.4)


def weibull_shape(values: Iterable[float]) -> float:
    """
    Weibull modulus m by median-rank regression.

    Each sorted value is mapped to ``(ln x, ln(-ln(1 - F)))`` and m is the
    slope of the least-squares line through those points. Returns 0 when the
    sample has non-positive values, fewer than three values, or no spread.
    """
    data = np.sort(np.asarray(list(values), dtype=np.float64))
    n = data.size
    if n <= 2 or data[0] <= 0:
        logger.debug(f"Weibull estimate skipped (n={n}, min={data[0] if n else None}).")
        return 0.0

    ln_x = np.log(data)
    if np.ptp(ln_x) == 0:
        return 0.0
    ln_y = np.log(-np.log(1.0 - median_ranks(n)))
    return float(stats.linregress(ln_x, ln_y).slope)


def describe(values: Iterable[float]) -> StatsSummary:
    """
    Compute the summary statistics of a sample.

    Non-finite entries are dropped first. The variance uses the ``n - 1``
    denominator when there is more than one value, otherwise it is 0.
    """
    data = np.asarray([v for v in values if math.isfinite(v)], dtype=np.float64)
    if data.size == 0:
        return StatsSummary.empty()

    data = np.sort(data)
    n = int(data.size)
    mean = float(np.mean(data))
    median = float(np.median(data))
    std_dev = float(np.std(data, ddof=1)) if n > 1 else 0.0
    minimum, maximum = float(data[0]), float(data[-1])

    outliers = tuple(float(v) for v in data if abs(v - mean) > 2 * std_dev) if std_dev > 0 else ()

    return StatsSummary(
        n=n,
        mean=mean,
        median=median,
        std_dev=std_dev,
        cov=std_dev / mean * 100 if mean != 0 else None,
        min=minimum,
        max=maximum,
        range=maximum - minimum,
        q1=float(data[int(math.floor(n * 0.25))]),
        q3=float(data[int(math.floor(n * 0.75))]),
        weibull_shape=weibull_shape(data),
        histogram=histogram(data),
        outliers=outliers
    )
