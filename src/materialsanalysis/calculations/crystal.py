"""
Crystallography
===============
Unit cell volume, theoretical density and a simplified XRD peak list for the
common crystal structures.

Lattice parameters are in Å and angles in degrees.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import List, Tuple

import numpy as np

from materialsanalysis.config import AVOGADRO, CU_K_ALPHA
from materialsanalysis.result import Err, ErrorKind, Ok, Result, checked

logger = logging.getLogger(__name__)

ANGSTROM3_TO_CM3 = 1e-24


class CrystalSystem(StrEnum):
    SC = "SC"
    BCC = "BCC"
    FCC = "FCC"
    HCP = "HCP"
    DC = "DC"

    @property
    def atoms_per_cell(self) -> int:
        return _STRUCTURE_DATA[self][0]

    @property
    def packing_fraction(self) -> float:
        return _STRUCTURE_DATA[self][1]


# (atoms per cell, atomic packing fraction)
_STRUCTURE_DATA = {
    CrystalSystem.SC: (1, 0.52),
    CrystalSystem.BCC: (2, 0.68),
    CrystalSystem.FCC: (4, 0.74),
    CrystalSystem.HCP: (6, 0.74),
    CrystalSystem.DC: (8, 0.34),
}


@dataclass(frozen=True)
class LatticeParameters:
    a: float
    b: float
    c: float
    alpha: float = 90.0
    beta: float = 90.0
    gamma: float = 90.0

    @staticmethod
    def cubic(a: float) -> LatticeParameters:
        return LatticeParameters(a=a, b=a, c=a)

    @staticmethod
    def hexagonal(a: float, c: float) -> LatticeParameters:
        return LatticeParameters(a=a, b=a, c=c, gamma=120.0)


@dataclass(frozen=True)
class XRDPeak:
    hkl: Tuple[int, int, int]
    d_spacing: float  # Å
    two_theta: float  # degrees
    intensity: float  # relative, illustrative only


def cell_volume(lattice: LatticeParameters) -> Result[float]:
    """
    Triclinic cell volume
    ``abc·sqrt(1 - cos²α - cos²β - cos²γ + 2·cosα·cosβ·cosγ)`` in Å³.
    """
    if min(lattice.a, lattice.b, lattice.c) <= 0:
        return Err(ErrorKind.DOMAIN, "Lattice lengths must be positive")

    ca, cb, cg = (math.cos(math.radians(angle)) for angle in (lattice.alpha, lattice.beta, lattice.gamma))
    radicand = 1 - ca ** 2 - cb ** 2 - cg ** 2 + 2 * ca * cb * cg
    if radicand <= 0:
        return Err(ErrorKind.DOMAIN, "Cell angles do not form a valid cell")
    return checked(lattice.a * lattice.b * lattice.c * math.sqrt(radicand))


def unit_cell_volume(system: CrystalSystem, lattice: LatticeParameters) -> Result[float]:
    """
    Volume of the conventional cell holding `system.atoms_per_cell` atoms.

    For HCP the primitive cell (γ = 120°) is tripled to the full hexagonal
    prism, which is what the six atoms per cell refer to.
    """
    volume = cell_volume(lattice)
    if not volume.ok:
        return volume
    if system == CrystalSystem.HCP:
        return Ok(3 * volume.value)
    return volume


def theoretical_density(system: CrystalSystem, lattice: LatticeParameters, molar_mass: float) -> Result[float]:
    """Density ``n·M / (N_A·V)`` in g/cm³ for molar mass `molar_mass` in g/mol."""
    if molar_mass <= 0:
        return Err(ErrorKind.DOMAIN, "Molar mass must be positive")
    volume = unit_cell_volume(system, lattice)
    if not volume.ok:
        return volume
    return checked(system.atoms_per_cell * molar_mass / (AVOGADRO * volume.value * ANGSTROM3_TO_CM3))


def is_reflection_allowed(system: CrystalSystem, h: int, k: int, l: int) -> bool:
    """Structure-factor selection rule for the (h k l) reflection."""
    if system == CrystalSystem.SC:
        return True
    if system == CrystalSystem.BCC:
        return (h + k + l) % 2 == 0
    unmixed = (h % 2 == k % 2 == l % 2)
    if system == CrystalSystem.FCC:
        return unmixed
    if system == CrystalSystem.DC:
        return unmixed and (h + k + l) % 4 != 2
    if system == CrystalSystem.HCP:
        return not (l % 2 == 1 and (h + 2 * k) % 3 == 0)
    raise ValueError(f"Unknown crystal system: {system}")


def d_spacing(system: CrystalSystem, lattice: LatticeParameters, h: int, k: int, l: int) -> float:
    """Interplanar spacing (Å) for cubic systems or the hexagonal cell of HCP."""
    if system == CrystalSystem.HCP:
        inverse_sq = 4.0 / 3.0 * (h * h + h * k + k * k) / lattice.a ** 2 + l * l / lattice.c ** 2
    else:
        inverse_sq = (h * h + k * k + l * l) / lattice.a ** 2
    return 1.0 / math.sqrt(inverse_sq)


def _index_families(system: CrystalSystem, max_index: int) -> List[Tuple[int, int, int]]:
    families = []
    for h in range(max_index + 1):
        for k in range(h + 1):
            if system == CrystalSystem.HCP:
                ls = range(max_index + 1)
            else:
                ls = range(k + 1)
            for l in ls:
                if h == k == l == 0:
                    continue
                families.append((h, k, l))
    return families


def xrd_peaks(
    system: CrystalSystem,
    lattice: LatticeParameters,
    wavelength: float = CU_K_ALPHA,
    max_index: int = 4,
    decay: float = 30.0
) -> Result[List[XRDPeak]]:
    """
    Simplified powder pattern: Bragg angle ``θ = asin(λ / 2d)`` for each
    allowed reflection family, sorted by 2θ.

    Intensities are not structure factors; they decay as
    ``100·exp(-(2θ - 2θ_first) / decay)`` purely for visualization.
    Reflections with ``λ / 2d > 1`` are unreachable and omitted; families
    sharing a d-spacing are reported once under the lowest index.
    """
    if wavelength <= 0:
        return Err(ErrorKind.DOMAIN, "Wavelength must be positive")
    if lattice.a <= 0 or (system == CrystalSystem.HCP and lattice.c <= 0):
        return Err(ErrorKind.DOMAIN, "Lattice lengths must be positive")

    seen: dict[float, Tuple[int, int, int]] = {}
    for h, k, l in _index_families(system, max_index):
        if not is_reflection_allowed(system, h, k, l):
            continue
        d = d_spacing(system, lattice, h, k, l)
        sin_theta = wavelength / (2 * d)
        if sin_theta > 1:
            continue
        key = round(d, 9)
        if key not in seen:
            seen[key] = (h, k, l)

    if not seen:
        return Ok([])

    d_values = np.array(list(seen.keys()))
    two_theta = np.degrees(2 * np.arcsin(wavelength / (2 * d_values)))
    order = np.argsort(two_theta)
    first = two_theta[order[0]]
    intensity = 100.0 * np.exp(-(two_theta - first) / decay)

    hkls = list(seen.values())
    peaks = [
        XRDPeak(
            hkl=hkls[i],
            d_spacing=float(d_values[i]),
            two_theta=float(two_theta[i]),
            intensity=float(intensity[i])
        )
        for i in order
    ]
    logger.debug(f"{system}: {len(peaks)} reflections for λ={wavelength} Å.")
    return Ok(peaks)
