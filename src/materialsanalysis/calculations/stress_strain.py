"""
Stress-Strain Curve Synthesis
=============================
Builds an idealized tensile curve from a handful of properties: linear
elastic up to yield, parabolic hardening to the ultimate strength, then a
parabolic drop to a fracture stress of 0.85·UTS.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import numpy as np
from scipy.integrate import trapezoid

from materialsanalysis.calculations.curves import Curve
from materialsanalysis.result import Err, ErrorKind, Result, checked

if TYPE_CHECKING:
    import numpy.typing as npt

FRACTURE_STRESS_RATIO = 0.85
CURVE_STEPS = 100


class CurveType(StrEnum):
    ENGINEERING = "engineering"
    TRUE = "true"


@dataclass(frozen=True)
class StressStrainInputs:
    """
    Attributes:
        youngs_modulus: E in GPa.
        yield_strength: Sy in MPa.
        uts: Ultimate tensile strength in MPa.
        uniform_elongation: Strain at UTS in %.
        fracture_elongation: Strain at fracture in %.
    """
    youngs_modulus: float = 200.0
    yield_strength: float = 250.0
    uts: float = 400.0
    uniform_elongation: float = 10.0
    fracture_elongation: float = 20.0

    @property
    def yield_strain(self) -> float:
        """Yield strain (absolute)."""
        return self.yield_strength / (self.youngs_modulus * 1000)


def modulus_of_resilience(inputs: StressStrainInputs) -> Result[float]:
    """Area under the elastic part, ``0.5·Sy·εy``, in MJ/m³."""
    if inputs.youngs_modulus <= 0:
        return Err(ErrorKind.DOMAIN, "Young's modulus must be positive")
    return checked(0.5 * inputs.yield_strength * inputs.yield_strain)


class StressStrainCurve(Curve):
    NAME = "Stress-Strain Curve"
    X_LABEL = "Strain (%)"
    Y_LABEL = "Stress (MPa)"

    def __init__(self, inputs: StressStrainInputs, curve_type: CurveType = CurveType.ENGINEERING) -> None:
        if inputs.youngs_modulus <= 0:
            raise ValueError("Young's modulus must be positive.")
        self.inputs = inputs
        self.curve_type = curve_type

        strain, stress = self._generate()
        self.strain: npt.NDArray[np.float64] = strain  # engineering, %
        self.stress: npt.NDArray[np.float64] = stress  # engineering, MPa

    def _generate(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        p = self.inputs
        yield_strain_abs = p.yield_strain
        yield_strain = yield_strain_abs * 100

        # Keep the plastic segments non-degenerate
        safe_eu = max(p.uniform_elongation, yield_strain + 0.1)
        safe_ef = max(p.fracture_elongation, safe_eu + 0.1)

        strain = np.linspace(0.0, safe_ef, CURVE_STEPS + 1)
        strain_abs = strain / 100

        hardening = (p.uts - p.yield_strength) / (safe_eu - yield_strain) ** 2
        fracture_stress = p.uts * FRACTURE_STRESS_RATIO
        necking = (p.uts - fracture_stress) / (safe_ef - safe_eu) ** 2

        stress = np.where(
            strain_abs <= yield_strain_abs,
            strain_abs * p.youngs_modulus * 1000,
            np.where(
                strain <= safe_eu,
                p.uts - hardening * (safe_eu - strain) ** 2,
                p.uts - necking * (strain - safe_eu) ** 2
            )
        )
        return strain, stress

    @property
    def true_strain(self) -> npt.NDArray[np.float64]:
        """``ln(1 + ε)`` in %."""
        return np.log1p(self.strain / 100) * 100

    @property
    def true_stress(self) -> npt.NDArray[np.float64]:
        """``σ·(1 + ε)`` in MPa."""
        return self.stress * (1 + self.strain / 100)

    def points(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        if self.curve_type == CurveType.TRUE:
            return self.true_strain, self.true_stress
        return self.strain, self.stress

    def modulus_of_toughness(self) -> float:
        """Area under the engineering curve (trapezoid rule) in MJ/m³."""
        return float(trapezoid(self.stress, self.strain / 100))
