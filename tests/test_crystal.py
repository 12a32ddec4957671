import math

import pytest

from materialsanalysis.calculations.crystal import (
    CrystalSystem, LatticeParameters, cell_volume, is_reflection_allowed,
    theoretical_density, unit_cell_volume, xrd_peaks
)
from materialsanalysis.result import ErrorKind


def test_cubic_volume() -> None:
    assert cell_volume(LatticeParameters.cubic(4.05)).value == pytest.approx(66.43, abs=1e-2)


def test_hcp_volume() -> None:
    a, c = 2.95, 4.68
    volume = unit_cell_volume(CrystalSystem.HCP, LatticeParameters.hexagonal(a, c))

    assert volume.value == pytest.approx(3 * math.sqrt(3) / 2 * a ** 2 * c)


def test_invalid_angles() -> None:
    lattice = LatticeParameters(1, 1, 1, alpha=150, beta=150, gamma=150)

    assert cell_volume(lattice).kind == ErrorKind.DOMAIN


def test_copper_density() -> None:
    result = theoretical_density(CrystalSystem.FCC, LatticeParameters.cubic(3.615), 63.55)

    assert result.value == pytest.approx(8.93, abs=0.05)


def test_structure_data() -> None:
    assert CrystalSystem.BCC.atoms_per_cell == 2
    assert CrystalSystem.FCC.packing_fraction == pytest.approx(0.74)
    assert CrystalSystem.DC.atoms_per_cell == 8


@pytest.mark.parametrize("system, hkl, allowed", [
    (CrystalSystem.SC, (1, 0, 0), True),
    (CrystalSystem.BCC, (1, 1, 0), True),
    (CrystalSystem.BCC, (1, 0, 0), False),
    (CrystalSystem.FCC, (1, 1, 1), True),
    (CrystalSystem.FCC, (2, 0, 0), True),
    (CrystalSystem.FCC, (1, 1, 0), False),
    (CrystalSystem.DC, (1, 1, 1), True),
    (CrystalSystem.DC, (2, 0, 0), False),
    (CrystalSystem.DC, (2, 2, 0), True),
    (CrystalSystem.HCP, (0, 0, 1), False),
    (CrystalSystem.HCP, (0, 0, 2), True),
    (CrystalSystem.HCP, (1, 0, 1), True),
])
def test_selection_rules(system, hkl, allowed) -> None:
    assert is_reflection_allowed(system, *hkl) is allowed


def test_aluminium_pattern() -> None:
    peaks = xrd_peaks(CrystalSystem.FCC, LatticeParameters.cubic(4.05)).unwrap()

    assert peaks[0].hkl == (1, 1, 1)
    assert peaks[0].two_theta == pytest.approx(38.47, abs=0.02)
    assert peaks[0].intensity == pytest.approx(100.0)
    assert peaks[1].hkl == (2, 0, 0)
    two_theta = [p.two_theta for p in peaks]
    assert two_theta == sorted(two_theta)
    assert all(b.intensity < a.intensity for a, b in zip(peaks, peaks[1:]))
    assert len({round(p.d_spacing, 9) for p in peaks}) == len(peaks)
    assert all(is_reflection_allowed(CrystalSystem.FCC, *p.hkl) for p in peaks)


def test_unreachable_reflections_are_omitted() -> None:
    peaks = xrd_peaks(CrystalSystem.SC, LatticeParameters.cubic(0.5)).unwrap()

    assert peaks == []


def test_invalid_wavelength() -> None:
    assert xrd_peaks(CrystalSystem.SC, LatticeParameters.cubic(3), wavelength=0).kind == ErrorKind.DOMAIN
