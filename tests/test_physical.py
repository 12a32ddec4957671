import numpy as np
import pytest

from materialsanalysis.calculations.physical import (
    ElectricalClass, MagneticClass, OpticalClass, classify_magnetic, classify_optical,
    classify_resistivity, hysteresis_loop, optical_balance_ok, resistance_at_temperature,
    resistivity_to_conductivity, thermal_diffusivity
)
from materialsanalysis.result import ErrorKind


def test_thermal_diffusivity() -> None:
    assert thermal_diffusivity(400, 8960, 385).value == pytest.approx(1.16e-4, rel=1e-2)
    assert thermal_diffusivity(400, 0, 385).kind == ErrorKind.DOMAIN


def test_conductivity() -> None:
    assert resistivity_to_conductivity(1.68e-8).value == pytest.approx(5.95e7, rel=1e-3)
    assert not resistivity_to_conductivity(0).ok


@pytest.mark.parametrize("resistivity, expected", [
    (1.68e-8, ElectricalClass.CONDUCTOR),
    (2.3e3, ElectricalClass.SEMICONDUCTOR),
    (1e14, ElectricalClass.INSULATOR),
])
def test_classify_resistivity(resistivity, expected) -> None:
    assert classify_resistivity(resistivity) == expected


def test_resistance_at_temperature() -> None:
    assert resistance_at_temperature(10, 0.004, 20, 100) == pytest.approx(13.2)


@pytest.mark.parametrize("mu, hc, expected", [
    (0.99999, 0, MagneticClass.DIAMAGNETIC),
    (1.0002, 0, MagneticClass.PARAMAGNETIC),
    (5000, 50, MagneticClass.SOFT_FERROMAGNETIC),
    (1.05, 5000, MagneticClass.HARD_FERROMAGNETIC),
    (1.0, 0, MagneticClass.UNKNOWN),
])
def test_classify_magnetic(mu, hc, expected) -> None:
    assert classify_magnetic(mu, hc) == expected


def test_hysteresis_loop() -> None:
    h, ascending, descending = hysteresis_loop(1.5, 100, 1.0)

    assert len(h) == 31
    assert h[0] == pytest.approx(-150)
    assert h[-1] == pytest.approx(150)
    assert np.all(np.abs(ascending) <= 1.5)
    assert np.all(np.abs(descending) <= 1.5)
    # B at H = 0 is the remanence on each branch
    assert descending[15] > 0 > ascending[15]


def test_hysteresis_loop_without_coercivity() -> None:
    h, ascending, descending = hysteresis_loop(1.5, 0, 1.0)

    assert h.size == ascending.size == descending.size == 0


@pytest.mark.parametrize("transmittance, expected", [
    (90, OpticalClass.TRANSPARENT),
    (50, OpticalClass.TRANSLUCENT),
    (5, OpticalClass.OPAQUE),
])
def test_classify_optical(transmittance, expected) -> None:
    assert classify_optical(transmittance) == expected


def test_optical_balance() -> None:
    assert optical_balance_ok(4, 92, 4)
    assert not optical_balance_ok(10, 10, 10)
