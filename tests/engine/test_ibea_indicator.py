import numpy as np
import pytest

from ibeakit.engine.algorithm.ibea import indicator as indicator_mod
from ibeakit.engine.algorithm.ibea.indicator import IndicatorMatrix, hypervolume_contribution
from ibeakit.foundation.exceptions import DegenerateBoundsError
from ibeakit.foundation.metrics.pareto import dominance_compare


def _bounds(F: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    return F.max(axis=0), F.min(axis=0)


def test_single_objective_uses_base_case_only(monkeypatch) -> None:
    calls = []
    original = indicator_mod.hypervolume_contribution

    def counting(*args, **kwargs):
        calls.append(args[2])
        return original(*args, **kwargs)

    monkeypatch.setattr(indicator_mod, "hypervolume_contribution", counting)

    maximum, minimum = np.array([1.0]), np.array([0.0])
    value = indicator_mod.hypervolume_contribution([0.2], [0.8], 1, maximum, minimum)

    # r = 2 * (1 - 0) = 2, contribution = (0.8 - 0.2) / 2
    assert value == pytest.approx(0.3)
    assert calls == [1]


def test_single_objective_formula() -> None:
    maximum, minimum = np.array([3.0]), np.array([1.0])
    r = 2.0 * (3.0 - 1.0)
    ceiling = 1.0 + r
    assert hypervolume_contribution([1.5], None, 1, maximum, minimum) == pytest.approx((ceiling - 1.5) / r)
    assert hypervolume_contribution([2.5], [1.5], 1, maximum, minimum) == 0.0
    assert hypervolume_contribution([1.5], [1.5], 1, maximum, minimum) == 0.0


def test_two_objective_recursion_values() -> None:
    maximum, minimum = np.array([1.0, 1.0]), np.array([0.0, 0.0])
    a = [0.25, 0.5]
    b = [0.5, 0.25]

    # Without competitor the result is the normalized box up to the ceiling.
    assert hypervolume_contribution(a, None, 2, maximum, minimum) == pytest.approx(1.75 * 1.5 / 4.0)
    # a[1] >= b[1]: HC(a, b, 1) * (ceiling - b[1]) / r = 0.125 * 0.875
    assert hypervolume_contribution(a, b, 2, maximum, minimum) == pytest.approx(0.109375)
    # b[1] < a[1]: HC(b, None, 1) * (a[1] - b[1]) / r, the second term is 0.
    expected = (1.5 / 2.0) * (0.25 / 2.0)
    assert hypervolume_contribution(b, a, 2, maximum, minimum) == pytest.approx(expected)


def test_recursion_visits_lower_dimensions(monkeypatch) -> None:
    calls = []
    original = indicator_mod.hypervolume_contribution

    def counting(*args, **kwargs):
        calls.append(args[2])
        return original(*args, **kwargs)

    monkeypatch.setattr(indicator_mod, "hypervolume_contribution", counting)
    indicator_mod.hypervolume_contribution([0.1, 0.1], [0.9, 0.9], 2, np.ones(2), np.zeros(2))
    assert calls[0] == 2
    assert set(calls[1:]) == {1}


@pytest.mark.parametrize("n_obj", [1, 2, 3, 5])
def test_removing_competitor_never_decreases_contribution(n_obj: int) -> None:
    rng = np.random.default_rng(7)
    for _ in range(200):
        a = rng.random(n_obj)
        delta = rng.random(n_obj) * rng.integers(0, 2, size=n_obj)
        # Comparable pairs only: one point weakly dominates the other.
        b = a + delta if rng.random() < 0.5 else a - delta
        F = np.vstack([a, b, rng.random((3, n_obj)) * 2.0 - 0.5])
        maximum, minimum = _bounds(F)
        with_b = hypervolume_contribution(a, b, n_obj, maximum, minimum)
        without = hypervolume_contribution(a, None, n_obj, maximum, minimum)
        assert without >= with_b - 1e-12


def test_zero_width_range_is_skipped() -> None:
    maximum = np.array([1.0, 0.5])
    minimum = np.array([0.0, 0.5])
    # Only the first objective counts: r = 2, ceiling = 2.
    assert hypervolume_contribution([0.2, 0.5], None, 2, maximum, minimum) == pytest.approx(0.9)
    assert hypervolume_contribution([0.2, 0.5], [0.7, 0.5], 2, maximum, minimum) == pytest.approx(0.25)
    assert hypervolume_contribution([0.7, 0.5], [0.2, 0.5], 2, maximum, minimum) == 0.0


def test_zero_width_first_objective_is_skipped() -> None:
    maximum = np.array([5.0, 2.0])
    minimum = np.array([5.0, 0.0])
    # r = 4, ceiling = 4 on the second objective.
    assert hypervolume_contribution([5.0, 0.0], [5.0, 1.0], 2, maximum, minimum) == pytest.approx(0.25)
    assert hypervolume_contribution([5.0, 1.0], [5.0, 0.0], 2, maximum, minimum) == 0.0
    assert hypervolume_contribution([5.0], None, 1, maximum[:1], minimum[:1]) == 1.0
    assert hypervolume_contribution([5.0], [5.0], 1, maximum[:1], minimum[:1]) == 0.0


def test_constant_objective_keeps_dominance_signs() -> None:
    F = np.array([[0.0, 5.0], [1.0, 5.0], [2.0, 5.0]])
    maximum, minimum = _bounds(F)
    matrix = IndicatorMatrix.build(F, maximum, minimum)
    assert matrix[0, 1] == pytest.approx(-0.25)
    assert matrix[0, 2] == pytest.approx(-0.5)
    assert matrix[2, 0] == pytest.approx(0.5)
    assert matrix.max_abs_value == pytest.approx(0.5)


@pytest.mark.parametrize("n_obj", [2, 3, 5])
@pytest.mark.parametrize("n", [2, 9, 50])
def test_max_abs_value_matches_brute_force(n: int, n_obj: int) -> None:
    rng = np.random.default_rng(n * 31 + n_obj)
    F = rng.random((n, n_obj))
    maximum, minimum = _bounds(F)
    matrix = IndicatorMatrix.build(F, maximum, minimum)

    brute = 0.0
    for i in range(n):
        for j in range(n):
            brute = max(brute, abs(matrix[i, j]))
    assert matrix.size == n
    assert matrix.max_abs_value == brute


def test_cells_follow_dominance_sign_convention() -> None:
    rng = np.random.default_rng(3)
    F = rng.random((12, 3))
    F[1] = F[0] + 0.05  # 0 dominates 1
    maximum, minimum = _bounds(F)
    matrix = IndicatorMatrix.build(F, maximum, minimum)

    for i in range(F.shape[0]):
        for j in range(F.shape[0]):
            flag = dominance_compare(F[i], F[j])
            if flag == -1:
                expected = -hypervolume_contribution(F[i], F[j], 3, maximum, minimum)
            else:
                expected = hypervolume_contribution(F[j], F[i], 3, maximum, minimum)
            assert matrix[i, j] == pytest.approx(expected, abs=0.0)

    assert matrix[0, 1] < 0.0
    assert matrix[1, 0] == pytest.approx(-matrix[0, 1])


def test_diagonal_is_computed_not_zeroed() -> None:
    F = np.array([[0.0, 1.0], [1.0, 0.0], [0.5, 0.5]])
    maximum, minimum = _bounds(F)
    matrix = IndicatorMatrix.build(F, maximum, minimum)
    for i in range(3):
        assert matrix[i, i] == pytest.approx(hypervolume_contribution(F[i], F[i], 2, maximum, minimum))


def test_parallel_build_matches_sequential() -> None:
    rng = np.random.default_rng(11)
    F = rng.random((15, 3))
    maximum, minimum = _bounds(F)
    serial = IndicatorMatrix.build(F, maximum, minimum, n_jobs=1)
    parallel = IndicatorMatrix.build(F, maximum, minimum, n_jobs=2)
    assert np.array_equal(serial.values, parallel.values)
    assert serial.max_abs_value == parallel.max_abs_value


def test_degenerate_collection_yields_zero_matrix() -> None:
    F = np.array([[1.0, 2.0], [1.0, 2.0], [1.0, 2.0]])
    maximum, minimum = _bounds(F)
    matrix = IndicatorMatrix.build(F, maximum, minimum)
    assert np.all(matrix.values == 0.0)
    assert matrix.max_abs_value == 0.0
    assert np.all(matrix.contributions(0.05) == 1.0)
    assert matrix.contribution(0, 1, 0.05) == 1.0


@pytest.mark.parametrize(
    "maximum, minimum",
    [
        (np.array([1.0, np.inf]), np.array([0.0, 0.0])),
        (np.array([1.0, np.nan]), np.array([0.0, 0.0])),
        (np.array([1.0, 0.0]), np.array([0.0, 0.5])),
    ],
)
def test_invalid_bounds_raise(maximum, minimum) -> None:
    F = np.array([[0.5, 0.2], [0.2, 0.5]])
    with pytest.raises(DegenerateBoundsError):
        IndicatorMatrix.build(F, maximum, minimum)


def test_remove_deletes_row_and_column_and_keeps_normalization() -> None:
    rng = np.random.default_rng(5)
    F = rng.random((6, 2))
    maximum, minimum = _bounds(F)
    matrix = IndicatorMatrix.build(F, maximum, minimum)
    original = matrix.values.copy()
    max_abs = matrix.max_abs_value

    matrix.remove(2)

    keep = [0, 1, 3, 4, 5]
    assert matrix.size == 5
    assert np.array_equal(matrix.values, original[np.ix_(keep, keep)])
    assert matrix.max_abs_value == max_abs
    with pytest.raises(IndexError):
        matrix.remove(5)


def test_constraint_violation_drives_dominance() -> None:
    F = np.array([[0.0, 1.0], [1.0, 0.0]])
    maximum, minimum = _bounds(F)
    unconstrained = IndicatorMatrix.build(F, maximum, minimum)
    assert unconstrained[1, 0] > 0.0

    # Incomparable on objectives, but only point 1 is feasible.
    matrix = IndicatorMatrix.build(F, maximum, minimum, violations=np.array([2.0, 0.0]))
    assert matrix[1, 0] == pytest.approx(-0.25)
    assert matrix[0, 1] == pytest.approx(0.25)
