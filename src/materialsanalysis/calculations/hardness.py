"""
Hardness Conversion
===================
Approximate conversion between hardness scales through Vickers (HV).

The relations are rough empirical fits in the spirit of ASTM E140 tables:

    HB  = 0.95·HV
    HK  = 1.05·HV
    HRC = 100 - 35000 / (HV + 100)
    HRB = 130 - 7000 / HV

They are lossy and not exact inverses of the tabulated data. Values outside
the range where a scale is meaningful are reported as sentinels
(``"< 20"``, ``"> 70"``, ``"Out of Range"``) instead of being
extrapolated. Shore scales (polymers) do not convert to metal scales.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Optional, Union

from materialsanalysis.utils import round_half_up

logger = logging.getLogger(__name__)

HardnessValue = Union[int, float, str]

NOT_AVAILABLE = "N/A"
OUT_OF_RANGE = "Out of Range"
POLYMER_ONLY = "Polymer Only"
HRC_BELOW = "< 20"
HRC_ABOVE = "> 70"

HRC_MIN = 20.0
HRC_MAX = 70.0
HRB_HV_MIN = 50.0
HRB_HV_MAX = 300.0
RELIABLE_HV_MIN = 50.0
RELIABLE_HV_MAX = 1000.0


class HardnessScale(StrEnum):
    HV = "HV"
    HB = "HB"
    HRC = "HRC"
    HRB = "HRB"
    HK = "HK"
    SHORE_A = "Shore A"
    SHORE_D = "Shore D"

    @property
    def is_polymer(self) -> bool:
        return self in (HardnessScale.SHORE_A, HardnessScale.SHORE_D)


@dataclass(frozen=True)
class HardnessConversion:
    hv: HardnessValue
    hb: HardnessValue
    hrc: HardnessValue
    hrb: HardnessValue
    hk: HardnessValue
    shore_a: HardnessValue
    shore_d: HardnessValue
    warning: Optional[str] = None


def to_vickers(value: float, scale: HardnessScale) -> float:
    """
    Convert a reading on `scale` to HV.

    Returns ``nan`` for Shore scales and for readings outside the domain of
    the fit (e.g. HRC >= 100).
    """
    try:
        if scale == HardnessScale.HV:
            hv = value
        elif scale == HardnessScale.HB:
            hv = value / 0.95
        elif scale == HardnessScale.HRC:
            hv = 35000 / (100 - value) - 100
        elif scale == HardnessScale.HRB:
            hv = 7000 / (130 - value)
        elif scale == HardnessScale.HK:
            hv = value / 1.05
        else:
            return math.nan
    except ZeroDivisionError:
        return math.nan
    return hv


def vickers_to_hrc(hv: float) -> HardnessValue:
    """HRC from HV, or a boundary sentinel outside [20, 70] HRC."""
    hrc = 100 - 35000 / (hv + 100)
    if hrc < HRC_MIN:
        return HRC_BELOW
    if hrc > HRC_MAX:
        return HRC_ABOVE
    return round_half_up(hrc)


def vickers_to_hrb(hv: float) -> HardnessValue:
    """HRB from HV, only for 50 < HV < 300."""
    if HRB_HV_MIN < hv < HRB_HV_MAX:
        return round_half_up(130 - 7000 / hv)
    return OUT_OF_RANGE


def convert_hardness(value: float, scale: HardnessScale) -> HardnessConversion:
    """
    Express a hardness reading on every supported scale.

    Metal scales are rounded to integers. A reading that maps to a
    non-positive or undefined HV gives ``"N/A"`` everywhere.
    """
    if scale.is_polymer:
        return HardnessConversion(
            hv=NOT_AVAILABLE,
            hb=NOT_AVAILABLE,
            hrc=NOT_AVAILABLE,
            hrb=NOT_AVAILABLE,
            hk=NOT_AVAILABLE,
            shore_a=value if scale == HardnessScale.SHORE_A else NOT_AVAILABLE,
            shore_d=value if scale == HardnessScale.SHORE_D else NOT_AVAILABLE,
            warning="Shore scales do not convert to metal hardness scales."
        )

    hv = to_vickers(value, scale)
    if not math.isfinite(hv) or hv <= 0:
        logger.warning(f"{value} {scale} has no Vickers equivalent.")
        return HardnessConversion(
            hv=NOT_AVAILABLE,
            hb=NOT_AVAILABLE,
            hrc=NOT_AVAILABLE,
            hrb=NOT_AVAILABLE,
            hk=NOT_AVAILABLE,
            shore_a=POLYMER_ONLY,
            shore_d=POLYMER_ONLY,
            warning=f"{value} {scale} is outside the conversion domain."
        )

    warning = None
    if hv < RELIABLE_HV_MIN or hv > RELIABLE_HV_MAX:
        warning = "Value is outside typical reliable conversion ranges."
        logger.debug(f"HV {hv:.1f} outside reliable range.")

    return HardnessConversion(
        hv=round_half_up(hv),
        hb=round_half_up(hv * 0.95),
        hrc=vickers_to_hrc(hv),
        hrb=vickers_to_hrb(hv),
        hk=round_half_up(hv * 1.05),
        shore_a=POLYMER_ONLY,
        shore_d=POLYMER_ONLY,
        warning=warning
    )
