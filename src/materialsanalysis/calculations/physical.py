"""
Physical Properties
===================
Thermal, electrical, magnetic and optical property helpers.
"""
from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

import numpy as np

from materialsanalysis.result import Err, ErrorKind, Result, checked

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

CONDUCTOR_RESISTIVITY = 1e-5  # Ω·m
INSULATOR_RESISTIVITY = 1e5  # Ω·m
FERROMAGNETIC_PERMEABILITY = 1.01
HARD_MAGNET_COERCIVITY = 1000.0  # A/m


class ElectricalClass(StrEnum):
    CONDUCTOR = "Conductor"
    SEMICONDUCTOR = "Semiconductor"
    INSULATOR = "Insulator"


class MagneticClass(StrEnum):
    DIAMAGNETIC = "Diamagnetic"
    PARAMAGNETIC = "Paramagnetic"
    SOFT_FERROMAGNETIC = "Soft Ferromagnetic"
    HARD_FERROMAGNETIC = "Hard Ferromagnetic"
    UNKNOWN = "Unknown"


class OpticalClass(StrEnum):
    TRANSPARENT = "Transparent"
    TRANSLUCENT = "Translucent"
    OPAQUE = "Opaque"


def thermal_diffusivity(conductivity: float, density: float, specific_heat: float) -> Result[float]:
    """``k / (ρ·cp)`` in m²/s."""
    if conductivity <= 0 or density <= 0 or specific_heat <= 0:
        return Err(ErrorKind.DOMAIN, "k, ρ and cp must be positive")
    return checked(conductivity / (density * specific_heat))


def resistivity_to_conductivity(resistivity: float) -> Result[float]:
    """``σ = 1/ρ`` in S/m."""
    if resistivity <= 0:
        return Err(ErrorKind.DOMAIN, "Resistivity must be positive")
    return checked(1 / resistivity)


def classify_resistivity(resistivity: float) -> ElectricalClass:
    if resistivity < CONDUCTOR_RESISTIVITY:
        return ElectricalClass.CONDUCTOR
    if resistivity > INSULATOR_RESISTIVITY:
        return ElectricalClass.INSULATOR
    return ElectricalClass.SEMICONDUCTOR


def resistance_at_temperature(
    reference_resistance: float,
    temperature_coefficient: float,
    reference_temperature: float,
    temperature: float
) -> float:
    """Linear model ``R = R0·(1 + α·(T - T0))``."""
    return reference_resistance * (1 + temperature_coefficient * (temperature - reference_temperature))


def classify_magnetic(relative_permeability: float, coercivity: float) -> MagneticClass:
    """Classify by relative permeability μr and coercivity Hc (A/m)."""
    if relative_permeability < 1:
        return MagneticClass.DIAMAGNETIC
    if 1 < relative_permeability < FERROMAGNETIC_PERMEABILITY:
        return MagneticClass.PARAMAGNETIC
    if relative_permeability >= FERROMAGNETIC_PERMEABILITY:
        if coercivity > HARD_MAGNET_COERCIVITY:
            return MagneticClass.HARD_FERROMAGNETIC
        return MagneticClass.SOFT_FERROMAGNETIC
    return MagneticClass.UNKNOWN


def hysteresis_loop(
    saturation: float,
    coercivity: float,
    remanence: float
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Schematic B-H loop from tanh branches, clipped to ±saturation.

    Returns:
        h:          Field values from -1.5·Hc to 1.5·Hc in Hc/10 steps.
        ascending:  B on the ascending branch.
        descending: B on the descending branch.
        All empty when Hc or Ms is zero.
    """
    if coercivity == 0 or saturation == 0:
        empty = np.empty(0)
        return empty, empty, empty

    half = coercivity / 2
    h = np.linspace(-1.5 * coercivity, 1.5 * coercivity, 31)
    ascending = saturation * np.tanh((h - half) / half) + remanence / 2
    descending = saturation * np.tanh((h + half) / half) - remanence / 2
    limit = abs(saturation)
    return h, np.clip(ascending, -limit, limit), np.clip(descending, -limit, limit)


def classify_optical(transmittance: float) -> OpticalClass:
    """Classify by transmittance in %."""
    if transmittance > 80:
        return OpticalClass.TRANSPARENT
    if transmittance > 10:
        return OpticalClass.TRANSLUCENT
    return OpticalClass.OPAQUE


def optical_balance_ok(reflectance: float, transmittance: float, absorbance: float) -> bool:
    """R + T + A must add up to 100 % (within 0.1)."""
    return abs(reflectance + transmittance + absorbance - 100) < 0.1
