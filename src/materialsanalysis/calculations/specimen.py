"""
Test Specimen Checks
====================
Quick geometry checks used when preparing test specimens. Lengths in mm,
loads in kgf.
"""
from __future__ import annotations

import math

from materialsanalysis.result import Err, ErrorKind, Ok, Result, checked

PROPORTIONAL_FACTOR = 5.65
PROPORTIONAL_TOLERANCE = 2.0  # mm
CHARPY_WIDTH = 10.0  # mm


def tensile_cross_section(width: float, thickness: float) -> Result[float]:
    if width <= 0 or thickness <= 0:
        return Err(ErrorKind.DOMAIN, "Width and thickness must be positive")
    return Ok(width * thickness)


def is_proportional_gauge(gauge_length: float, area: float) -> bool:
    """True if ``L0 ≈ 5.65·sqrt(A)`` within 2 mm; False for a non-positive area."""
    if area <= 0:
        return False
    return abs(gauge_length - PROPORTIONAL_FACTOR * math.sqrt(area)) < PROPORTIONAL_TOLERANCE


def vickers_diagonal(load: float, hv: float) -> Result[float]:
    """Indent diagonal ``d = sqrt(1.8544·F / HV)`` in mm."""
    if load <= 0 or hv <= 0:
        return Err(ErrorKind.DOMAIN, "Load and hardness must be positive")
    return checked(math.sqrt(1.8544 * load / hv))


def minimum_hardness_thickness(load: float, hv: float) -> Result[float]:
    """Ten times the indent depth, taking the depth as d/7."""
    diagonal = vickers_diagonal(load, hv)
    if not diagonal.ok:
        return diagonal
    return Ok(10 * diagonal.value / 7)


def charpy_ligament(notch_depth: float) -> Result[float]:
    """Remaining ligament below the notch of a 10 mm Charpy bar."""
    if notch_depth < 0 or notch_depth >= CHARPY_WIDTH:
        return Err(ErrorKind.DOMAIN, "Notch depth must be between 0 and 10 mm")
    return Ok(CHARPY_WIDTH - notch_depth)


def stepped_shaft_kt(small_diameter: float, large_diameter: float, fillet_radius: float) -> Result[float]:
    """
    Very rough stress concentration factor of a shoulder fillet,
    ``Kt = 1 + sqrt(0.25 / (r/d))``; 1 for a plain shaft.
    """
    if small_diameter <= 0:
        return Err(ErrorKind.DOMAIN, "Diameter must be positive")
    ratio = large_diameter / small_diameter
    r_d = fillet_radius / small_diameter
    if ratio > 1 and r_d > 0:
        return checked(1 + math.sqrt(0.25 / r_d))
    return Ok(1.0)
