"""
Creep
=====
Norton power-law creep rate, Larson-Miller rupture estimate and a schematic
three-stage creep curve.

Temperatures are passed in °C and converted to Kelvin internally.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from materialsanalysis.calculations.curves import Curve
from materialsanalysis.config import (
    CURVE_SAMPLES, GAS_CONSTANT, LMP_CONSTANT, LMP_INTERCEPT, LMP_STRESS_SLOPE
)
from materialsanalysis.result import Err, ErrorKind, Result, checked
from materialsanalysis.utils import celsius_to_kelvin

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def norton_creep_rate(
    coefficient: float,
    stress: float,
    exponent: float,
    activation_energy: float,
    temperature_C: float
) -> Result[float]:
    """
    Steady-state creep rate ``A·σ^n·exp(-Q/(R·T))``.

    Args:
        coefficient: Material constant A.
        stress: Applied stress in MPa.
        exponent: Stress exponent n.
        activation_energy: Activation energy Q in J/mol.
        temperature_C: Temperature in °C.

    Returns:
        Creep rate in 1/s (for A in matching units).
    """
    temperature_K = celsius_to_kelvin(temperature_C)
    if temperature_K <= 0:
        return Err(ErrorKind.DOMAIN, "Temperature must be above absolute zero")
    if stress < 0:
        return Err(ErrorKind.DOMAIN, "Stress must be non-negative")
    try:
        rate = coefficient * stress ** exponent * math.exp(-activation_energy / (GAS_CONSTANT * temperature_K))
    except (OverflowError, ZeroDivisionError) as e:
        return Err(ErrorKind.DOMAIN, f"Creep rate not computable: {e}")
    return checked(rate)


def larson_miller_parameter(
    temperature_C: float,
    time_h: float,
    constant: float = LMP_CONSTANT
) -> Result[float]:
    """
    ``LMP = T·(C + log10 t)`` with T in Kelvin and t in hours.

    The dashboard displays this divided by 1000.
    """
    temperature_K = celsius_to_kelvin(temperature_C)
    if temperature_K <= 0:
        return Err(ErrorKind.DOMAIN, "Temperature must be above absolute zero")
    if time_h <= 0:
        return Err(ErrorKind.DOMAIN, "Time must be positive")
    return checked(temperature_K * (constant + math.log10(time_h)))


def approximate_lmp(stress: float) -> float:
    """
    LMP from stress by the linear correlation ``22000 - 20·σ``.

    This is a placeholder correlation, not derived for any material; real
    use requires calibration against rupture data.
    """
    return LMP_INTERCEPT - LMP_STRESS_SLOPE * stress


def rupture_time(
    stress: float,
    temperature_C: float,
    constant: float = LMP_CONSTANT
) -> Result[float]:
    """
    Rupture time in hours from ``log10(tr) = LMP/T - C`` with the
    approximate LMP of `approximate_lmp`.
    """
    temperature_K = celsius_to_kelvin(temperature_C)
    if temperature_K <= 0:
        return Err(ErrorKind.DOMAIN, "Temperature must be above absolute zero")
    lmp = approximate_lmp(stress)
    if lmp <= 0:
        return Err(ErrorKind.DOMAIN, f"Stress {stress} MPa is outside the LMP correlation")
    log_tr = lmp / temperature_K - constant
    try:
        return checked(10.0 ** log_tr)
    except OverflowError:
        return Err(ErrorKind.DOMAIN, "Rupture time overflow")


class CreepCurve(Curve):
    """
    Schematic creep strain vs time: primary (saturating), secondary (linear)
    and tertiary (exponential) contributions. Strain is reported in %.
    """
    NAME = "Creep Curve"
    X_LABEL = "Time (h)"
    Y_LABEL = "Strain (%)"

    TERTIARY_SCALE = 0.00001

    def __init__(self, primary_strain: float, secondary_rate: float, time_h: float) -> None:
        if time_h <= 0:
            raise ValueError("Time must be positive.")
        self.primary_strain = primary_strain
        self.secondary_rate = secondary_rate
        self.time_h = time_h

    def points(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        t = np.linspace(0.0, self.time_h, CURVE_SAMPLES + 1)
        primary = self.primary_strain * (1 - np.exp(-5 * t / self.time_h))
        secondary = self.secondary_rate * t
        tertiary = self.TERTIARY_SCALE * np.exp(5 * t / self.time_h)
        return t, (primary + secondary + tertiary) * 100
