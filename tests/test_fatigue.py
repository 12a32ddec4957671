import matplotlib.pyplot as plt
import numpy as np
import pytest

from materialsanalysis.calculations.fatigue import (
    MeanStressModel, SNCurve, basquin_coefficient, equivalent_amplitude, fatigue_life
)
from materialsanalysis.result import ErrorKind

UTS = 600.0
SE = 300.0
SY = 450.0


def test_goodman() -> None:
    result = equivalent_amplitude(200, 50, UTS, MeanStressModel.GOODMAN)

    assert result.value == pytest.approx(218.18, abs=0.01)


def test_gerber() -> None:
    result = equivalent_amplitude(200, 50, UTS, MeanStressModel.GERBER)

    assert result.value == pytest.approx(200 / (1 - (50 / 600) ** 2))


def test_soderberg() -> None:
    result = equivalent_amplitude(200, 50, UTS, MeanStressModel.SODERBERG, yield_strength=SY)

    assert result.value == pytest.approx(225.0)


def test_soderberg_needs_yield_strength() -> None:
    result = equivalent_amplitude(200, 50, UTS, MeanStressModel.SODERBERG)

    assert result.kind == ErrorKind.MISSING_INPUT


@pytest.mark.parametrize("model", list(MeanStressModel))
def test_mean_stress_at_limit_is_invalid(model) -> None:
    result = equivalent_amplitude(200, 700, UTS, model, yield_strength=SY)

    assert result.kind == ErrorKind.INVALID_MEAN_STRESS_RATIO


def test_zero_mean_stress_leaves_amplitude_unchanged() -> None:
    for model in MeanStressModel:
        assert equivalent_amplitude(150, 0, UTS, model, yield_strength=SY).value == pytest.approx(150)


def test_basquin_coefficient() -> None:
    assert basquin_coefficient(UTS, SE).value == pytest.approx(972.0)
    assert basquin_coefficient(UTS, 0).kind == ErrorKind.DOMAIN


def test_finite_life() -> None:
    result = fatigue_life(400, UTS, SE, -0.1)

    life = result.unwrap()
    assert not life.infinite
    assert life.cycles == pytest.approx((400 / 972) ** (1 / -0.1))
    assert life.safety_factor == pytest.approx(0.75)
    assert life.display() == f"{life.cycles:.2e}"


def test_infinite_life_below_endurance_limit() -> None:
    life = fatigue_life(250, UTS, SE, -0.1).unwrap()

    assert life.infinite
    assert life.cycles is None
    assert life.safety_factor == pytest.approx(1.2)
    assert life.display() == "Infinite"


def test_zero_exponent() -> None:
    assert fatigue_life(400, UTS, SE, 0).kind == ErrorKind.DOMAIN


def test_sn_curve_is_clamped() -> None:
    cycles, stress = SNCurve(1200, SE, -0.15).points()

    assert len(cycles) == 26
    assert cycles[0] == pytest.approx(1e3)
    assert cycles[-1] == pytest.approx(1e8)
    assert stress[0] == pytest.approx(1200)
    assert stress[-1] == pytest.approx(SE)
    assert np.all(np.diff(stress) <= 0)


def test_sn_curve_plot() -> None:
    fig = SNCurve(UTS, SE, -0.1).plot(show=False)

    assert fig.axes[0].get_xscale() == "log"
    plt.close(fig)


def test_sn_curve_rejects_zero_endurance_limit() -> None:
    with pytest.raises(ValueError):
        SNCurve(UTS, 0, -0.1)


def test_zero_ultimate_strength_is_a_domain_error() -> None:
    assert basquin_coefficient(0, SE).kind == ErrorKind.DOMAIN
    assert fatigue_life(400, 0, SE, -0.1).kind == ErrorKind.DOMAIN
