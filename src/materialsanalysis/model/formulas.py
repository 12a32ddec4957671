"""
Universal Formula Registry
==========================
Single-expression material property formulas, keyed by id.

Each `MaterialFormula` declares the inputs it needs; `evaluate` checks that
every input is present and finite before calling the expression and maps
division by zero or a non-finite outcome to an ``Err`` result.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple

from materialsanalysis.config import AVOGADRO
from materialsanalysis.result import Err, ErrorKind, Result, checked

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormulaInput:
    key: str
    label: str


@dataclass(frozen=True)
class MaterialFormula:
    id: str
    name: str
    equation: str
    inputs: Tuple[FormulaInput, ...]
    unit: str
    calc: Callable[[Mapping[str, float]], float]

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(i.key for i in self.inputs)

    def evaluate(self, values: Mapping[str, float]) -> Result[float]:
        missing = [k for k in self.keys if k not in values]
        if missing:
            return Err(ErrorKind.MISSING_INPUT, f"Missing inputs: {', '.join(missing)}")

        params: Dict[str, float] = {}
        for key in self.keys:
            try:
                value = float(values[key])
            except (TypeError, ValueError):
                return Err(ErrorKind.DOMAIN, f"Input '{key}' is not a number")
            if not math.isfinite(value):
                return Err(ErrorKind.DOMAIN, f"Input '{key}' is not finite")
            params[key] = value

        try:
            result = self.calc(params)
        except (ZeroDivisionError, OverflowError, ValueError) as e:
            logger.debug(f"Formula '{self.id}' failed for {params}: {e}")
            return Err(ErrorKind.DOMAIN, f"{self.name}: {e}")
        return checked(result, f"{self.name} is not computable for these inputs")


def _formula(id: str, name: str, equation: str, inputs: Tuple[Tuple[str, str], ...], unit: str,
             calc: Callable[[Mapping[str, float]], float]) -> MaterialFormula:
    return MaterialFormula(
        id=id,
        name=name,
        equation=equation,
        inputs=tuple(FormulaInput(key, label) for key, label in inputs),
        unit=unit,
        calc=calc
    )


FORMULAS: Dict[str, MaterialFormula] = {f.id: f for f in (
    _formula("stress", "Stress", "σ = F / A",
             (("F", "Force F (N)"), ("A", "Area A (m²)")), "Pa",
             lambda v: v["F"] / v["A"]),
    _formula("strain", "Strain", "ε = ΔL / L₀",
             (("dL", "Change in Length ΔL"), ("L0", "Original Length L₀")), "",
             lambda v: v["dL"] / v["L0"]),
    _formula("youngs", "Young's Modulus", "E = σ / ε",
             (("sigma", "Stress σ (Pa)"), ("epsilon", "Strain ε")), "Pa",
             lambda v: v["sigma"] / v["epsilon"]),
    _formula("shear", "Shear Modulus", "G = E / 2(1+ν)",
             (("E", "Young's Modulus E (GPa)"), ("nu", "Poisson's Ratio ν")), "GPa",
             lambda v: v["E"] / (2 * (1 + v["nu"]))),
    _formula("bulk", "Bulk Modulus", "K = E / 3(1-2ν)",
             (("E", "Young's Modulus E (GPa)"), ("nu", "Poisson's Ratio ν")), "GPa",
             lambda v: v["E"] / (3 * (1 - 2 * v["nu"]))),
    # E in GPa, hence the factor 1000 to get MPa
    _formula("thermal_stress", "Thermal Stress", "σ = E × α × ΔT",
             (("E", "Modulus E (GPa)"), ("alpha", "CTE α (1/K)"), ("dT", "Temp Change ΔT (K)")), "MPa",
             lambda v: v["E"] * 1000 * v["alpha"] * v["dT"]),
    _formula("safety_factor", "Safety Factor", "SF = σ_yield / σ_applied",
             (("sy", "Yield Strength (MPa)"), ("sa", "Applied Stress (MPa)")), "",
             lambda v: v["sy"] / v["sa"]),
    _formula("max_stress", "Max Stress", "σ_max = Kt × σ",
             (("stress", "Nominal Stress σ (MPa)"), ("Kt", "Stress Concentration Kt")), "MPa",
             lambda v: v["stress"] * v["Kt"]),
    _formula("density", "Theoretical Density", "ρ = nM / (NA × Vc)",
             (("n", "Atoms/Cell n"), ("M", "Molar Mass M (g/mol)"), ("Vc", "Cell Volume Vc (cm³)")), "g/cm³",
             lambda v: (v["n"] * v["M"]) / (AVOGADRO * v["Vc"])),
    _formula("diffusivity", "Thermal Diffusivity", "α = k / (ρ × Cp)",
             (("k", "Thermal Cond. k (W/m·K)"), ("rho", "Density ρ (kg/m³)"), ("cp", "Specific Heat Cp (J/kg·K)")),
             "m²/s",
             lambda v: v["k"] / (v["rho"] * v["cp"])),
    _formula("conductivity", "Conductivity", "σ = 1 / ρ",
             (("rho", "Resistivity ρ (Ω·m)"),), "S/m",
             lambda v: 1 / v["rho"]),
)}


def get_formula(formula_id: str) -> MaterialFormula:
    """Look up a formula by id; raises KeyError for an unknown id."""
    try:
        return FORMULAS[formula_id]
    except KeyError:
        raise KeyError(f"Unknown formula: {formula_id}") from None


def evaluate(formula_id: str, values: Mapping[str, float]) -> Result[float]:
    """Evaluate the registered formula `formula_id` with the given inputs."""
    return get_formula(formula_id).evaluate(values)
