"""
Fracture Toughness
==================
Stress intensity factor K for the ASTM E399 compact tension C(T) and single
edge notched bend SE(B) specimens.

With load in MN and lengths in m the result is in MPa√m.
"""
from __future__ import annotations

import math

from materialsanalysis.result import Err, ErrorKind, Result, checked

A_W_MIN = 0.1
A_W_MAX = 0.9


def _crack_ratio(crack_length: float, width: float) -> Result[float]:
    if width <= 0:
        return Err(ErrorKind.DOMAIN, "Specimen width must be positive")
    a_w = crack_length / width
    if a_w < A_W_MIN or a_w > A_W_MAX:
        return Err(ErrorKind.INVALID_CRACK_RATIO, "Invalid a/W")
    return checked(a_w)


def compact_tension_factor(a_w: float) -> float:
    """C(T) geometry factor f(a/W)."""
    return (
        (2 + a_w)
        * (0.886 + 4.64 * a_w - 13.32 * a_w ** 2 + 14.72 * a_w ** 3 - 5.6 * a_w ** 4)
        / (1 - a_w) ** 1.5
    )


def single_edge_bend_factor(a_w: float) -> float:
    """SE(B) geometry factor f(a/W) for a span of S = 4W."""
    return (
        3 * math.sqrt(a_w)
        * (1.99 - a_w * (1 - a_w) * (2.15 - 3.93 * a_w + 2.7 * a_w ** 2))
        / (2 * (1 + 2 * a_w) * (1 - a_w) ** 1.5)
    )


def compact_tension_k(load: float, thickness: float, width: float, crack_length: float) -> Result[float]:
    """``K = P / (B·√W) · f(a/W)``, valid for 0.1 <= a/W <= 0.9."""
    a_w = _crack_ratio(crack_length, width)
    if not a_w.ok:
        return a_w
    if thickness <= 0:
        return Err(ErrorKind.DOMAIN, "Specimen thickness must be positive")
    return checked(load / (thickness * math.sqrt(width)) * compact_tension_factor(a_w.value))


def single_edge_bend_k(
    load: float,
    span: float,
    thickness: float,
    width: float,
    crack_length: float
) -> Result[float]:
    """``K = P·S / (B·W^1.5) · f(a/W)``, valid for 0.1 <= a/W <= 0.9."""
    a_w = _crack_ratio(crack_length, width)
    if not a_w.ok:
        return a_w
    if thickness <= 0 or span <= 0:
        return Err(ErrorKind.DOMAIN, "Specimen thickness and span must be positive")
    return checked(load * span / (thickness * width ** 1.5) * single_edge_bend_factor(a_w.value))
