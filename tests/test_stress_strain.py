import matplotlib.pyplot as plt
import numpy as np
import pytest

from materialsanalysis.calculations.stress_strain import (
    CurveType, StressStrainCurve, StressStrainInputs, modulus_of_resilience
)
from materialsanalysis.result import ErrorKind

STEEL = StressStrainInputs()


def test_modulus_of_resilience() -> None:
    expected = STEEL.yield_strength ** 2 / (2 * STEEL.youngs_modulus * 1000)

    assert modulus_of_resilience(STEEL).value == pytest.approx(expected)
    assert modulus_of_resilience(STEEL).value == pytest.approx(0.15625)


def test_modulus_of_resilience_needs_positive_modulus() -> None:
    result = modulus_of_resilience(StressStrainInputs(youngs_modulus=0))

    assert result.kind == ErrorKind.DOMAIN


def test_curve_landmarks() -> None:
    curve = StressStrainCurve(STEEL)

    assert len(curve.strain) == 101
    assert curve.stress[0] == 0.0
    assert curve.stress.max() == pytest.approx(STEEL.uts)
    assert curve.strain[-1] == pytest.approx(STEEL.fracture_elongation)
    assert curve.stress[-1] == pytest.approx(0.85 * STEEL.uts)


def test_curve_is_continuous_at_yield() -> None:
    curve = StressStrainCurve(STEEL)
    plastic = curve.strain > STEEL.yield_strain * 100

    first_plastic = curve.stress[plastic][0]
    assert first_plastic >= STEEL.yield_strength
    assert first_plastic - STEEL.yield_strength < 0.1 * (STEEL.uts - STEEL.yield_strength)


def test_degenerate_elongations_are_widened() -> None:
    inputs = StressStrainInputs(uniform_elongation=0, fracture_elongation=0)
    curve = StressStrainCurve(inputs)

    assert np.all(np.isfinite(curve.stress))
    assert curve.strain[-1] > inputs.yield_strain * 100


def test_true_curve_lies_above_engineering() -> None:
    curve = StressStrainCurve(STEEL, CurveType.TRUE)
    strain, stress = curve.points()

    assert np.all(stress >= curve.stress)
    assert np.all(strain <= curve.strain)


def test_modulus_of_toughness() -> None:
    toughness = StressStrainCurve(STEEL).modulus_of_toughness()

    assert STEEL.yield_strength * 0.2 < toughness < STEEL.uts * 0.2


def test_plot() -> None:
    fig = StressStrainCurve(STEEL).plot(show=False)

    assert fig.axes[0].get_xlabel() == "Strain (%)"
    plt.close(fig)


def test_rejects_zero_modulus() -> None:
    with pytest.raises(ValueError):
        StressStrainCurve(StressStrainInputs(youngs_modulus=0))
