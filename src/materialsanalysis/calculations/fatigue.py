"""
Fatigue
=======
Mean-stress correction of the stress amplitude and a Basquin S-N estimate.

Stresses are in MPa. The Basquin coefficient is the rough estimate
``a = (0.9·UTS)² / Se`` and the exponent ``b`` is supplied by the caller
(typically -0.05 to -0.12).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Optional

import numpy as np

from materialsanalysis.calculations.curves import Curve
from materialsanalysis.result import Err, ErrorKind, Ok, Result, checked

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Below this the mean-stress denominator is treated as zero
DENOMINATOR_TOLERANCE = 1e-12


class MeanStressModel(StrEnum):
    GOODMAN = "Goodman"
    GERBER = "Gerber"
    SODERBERG = "Soderberg"


def equivalent_amplitude(
    amplitude: float,
    mean: float,
    uts: float,
    model: MeanStressModel = MeanStressModel.GOODMAN,
    yield_strength: Optional[float] = None
) -> Result[float]:
    """
    Fully reversed stress amplitude equivalent to (`amplitude`, `mean`).

    Goodman:   Seq = Sa / (1 - Sm/UTS)
    Gerber:    Seq = Sa / (1 - (Sm/UTS)²)
    Soderberg: Seq = Sa / (1 - Sm/Sy)

    Returns:
        ``Err(INVALID_MEAN_STRESS_RATIO)`` when the denominator is zero or
        negative (mean stress at or beyond the limit strength).
    """
    if model == MeanStressModel.SODERBERG:
        if yield_strength is None:
            return Err(ErrorKind.MISSING_INPUT, "Soderberg correction needs the yield strength")
        limit = yield_strength
    else:
        limit = uts

    if limit <= 0:
        return Err(ErrorKind.DOMAIN, "Limit strength must be positive")

    ratio = mean / limit
    if model == MeanStressModel.GERBER:
        denominator = 1 - ratio ** 2
    else:
        denominator = 1 - ratio

    if denominator <= DENOMINATOR_TOLERANCE:
        logger.debug(f"{model} denominator {denominator:g} for Sm={mean}, limit={limit}")
        return Err(ErrorKind.INVALID_MEAN_STRESS_RATIO, f"Mean stress {mean} MPa too close to {limit} MPa")
    return checked(amplitude / denominator)


def basquin_coefficient(uts: float, endurance_limit: float) -> Result[float]:
    """Basquin coefficient estimate ``a = (0.9·UTS)² / Se``."""
    if uts <= 0:
        return Err(ErrorKind.DOMAIN, "Ultimate strength must be positive")
    if endurance_limit <= 0:
        return Err(ErrorKind.DOMAIN, "Endurance limit must be positive")
    return checked((0.9 * uts) ** 2 / endurance_limit)


@dataclass(frozen=True)
class FatigueLife:
    """
    Attributes:
        cycles: Cycles to failure, None for infinite life.
        safety_factor: Endurance limit over applied equivalent amplitude.
    """
    cycles: Optional[float]
    safety_factor: float

    @property
    def infinite(self) -> bool:
        return self.cycles is None

    def display(self) -> str:
        return "Infinite" if self.cycles is None else f"{self.cycles:.2e}"


def fatigue_life(
    stress_amplitude: float,
    uts: float,
    endurance_limit: float,
    exponent: float
) -> Result[FatigueLife]:
    """
    Cycles to failure by Basquin ``N = (Seq/a)^(1/b)``.

    Only evaluated when the amplitude exceeds the endurance limit; at or
    below it the life is infinite.
    """
    if stress_amplitude <= 0:
        return Err(ErrorKind.DOMAIN, "Stress amplitude must be positive")
    coefficient = basquin_coefficient(uts, endurance_limit)
    if not coefficient.ok:
        return coefficient

    safety = endurance_limit / stress_amplitude
    if stress_amplitude <= endurance_limit:
        return Ok(FatigueLife(cycles=None, safety_factor=safety))
    if exponent == 0:
        return Err(ErrorKind.DOMAIN, "Basquin exponent must be non-zero")

    try:
        cycles = (stress_amplitude / coefficient.value) ** (1 / exponent)
    except (OverflowError, ZeroDivisionError) as e:
        return Err(ErrorKind.DOMAIN, f"Cycles to failure not computable: {e}")
    result = checked(cycles)
    if not result.ok:
        return result
    return Ok(FatigueLife(cycles=result.value, safety_factor=safety))


class SNCurve(Curve):
    """
    Basquin S-N curve ``S = a·N^b`` from 10³ to 10⁸ cycles, clamped between
    the endurance limit and the ultimate strength.
    """
    NAME = "S-N Curve"
    X_LABEL = "Cycles to Failure (N)"
    Y_LABEL = "Stress Amplitude (MPa)"
    LOG_X = True

    LOG_N_MIN = 3.0
    LOG_N_MAX = 8.0
    LOG_N_STEP = 0.2

    def __init__(self, uts: float, endurance_limit: float, exponent: float) -> None:
        if endurance_limit <= 0:
            raise ValueError("Endurance limit must be positive.")
        self.uts = uts
        self.endurance_limit = endurance_limit
        self.exponent = exponent

    def points(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        count = int(round((self.LOG_N_MAX - self.LOG_N_MIN) / self.LOG_N_STEP)) + 1
        cycles = 10.0 ** np.linspace(self.LOG_N_MIN, self.LOG_N_MAX, count)
        a = (0.9 * self.uts) ** 2 / self.endurance_limit
        stress = a * cycles ** self.exponent
        stress = np.maximum(stress, self.endurance_limit)
        stress = np.minimum(stress, self.uts)
        return cycles, stress
