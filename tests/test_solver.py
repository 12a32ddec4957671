from __future__ import annotations

import numpy as np
import pytest

from materialsanalysis.result import ErrorKind
from materialsanalysis.solvers.solver import (
    solve, solve_linear_system, solve_linear_system_checked
)


def test_well_conditioned_system() -> None:
    a = np.array([[2.0, 1.0], [1.0, 3.0]])
    b = np.array([3.0, 5.0])

    x = solve_linear_system(a, b)

    assert np.max(np.abs(a @ x - b)) < 1e-6
    np.testing.assert_allclose(x, [0.8, 1.4])


def test_pivoting_handles_zero_leading_entry() -> None:
    a = [[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [4.0, -3.0, 8.0]]
    b = [1.0, 2.0, 3.0]

    x = solve_linear_system(a, b)

    np.testing.assert_allclose(np.array(a) @ x, b, atol=1e-9)


def test_singular_matrix_falls_back_to_zero_vector() -> None:
    x = solve_linear_system([[1.0, 2.0], [2.0, 4.0]], [3.0, 6.0])

    assert np.all(np.isfinite(x))
    np.testing.assert_array_equal(x, [0.0, 0.0])


def test_singular_flag_and_checked_variant() -> None:
    _, singular = solve([[1.0, 2.0], [2.0, 4.0]], [1.0, 1.0])
    assert singular

    result = solve_linear_system_checked([[1.0, 2.0], [2.0, 4.0]], [1.0, 1.0])
    assert not result.ok
    assert result.kind == ErrorKind.SINGULAR_SYSTEM

    result = solve_linear_system_checked([[4.0]], [2.0])
    assert result.ok
    np.testing.assert_allclose(result.value, [0.5])


def test_inputs_are_not_modified() -> None:
    a = np.array([[1.0, 2.0], [3.0, 4.0]])
    b = np.array([5.0, 6.0])
    a_before, b_before = a.copy(), b.copy()

    solve_linear_system(a, b)

    np.testing.assert_array_equal(a, a_before)
    np.testing.assert_array_equal(b, b_before)


@pytest.mark.parametrize("a, b", [
    ([[1.0, 2.0, 3.0]], [1.0]),
    ([[1.0, 0.0], [0.0, 1.0]], [1.0, 2.0, 3.0]),
])
def test_shape_mismatch_raises(a, b) -> None:
    with pytest.raises(ValueError):
        solve_linear_system(a, b)
