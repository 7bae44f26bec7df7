"""Tests for cptu_sbt.boundaries."""

import math

import numpy as np
import pytest

from cptu_sbt.boundaries import (
    boundary_cd70,
    boundary_ib,
    cd_qtn,
    fr_sampling_grid,
    ib_index,
    standard_boundaries,
)
from cptu_sbt.config import ChartSettings


class TestSamplingGrid:
    def test_starts_at_lower_bound(self):
        grid = fr_sampling_grid()
        assert grid[0] == 0.1

    def test_geometric_steps(self):
        grid = fr_sampling_grid()
        for prev, cur in zip(grid, grid[1:]):
            assert cur == prev * 1.1

    def test_stops_before_exceeding_upper_bound(self):
        grid = fr_sampling_grid()
        assert len(grid) == 49
        assert grid[-1] <= 10.0
        assert grid[-1] * 1.1 > 10.0
        assert grid[-1] == pytest.approx(0.1 * 1.1 ** 48)

    def test_upper_bound_not_inserted(self):
        assert 10.0 not in fr_sampling_grid()

    def test_invalid_parameters_give_empty_grid(self):
        assert fr_sampling_grid(start=0.0) == []
        assert fr_sampling_grid(ratio=1.0) == []

    def test_custom_range(self):
        assert fr_sampling_grid(1.0, 8.0, 2.0) == [1.0, 2.0, 4.0, 8.0]

    def test_infinite_stop_gives_empty_grid(self):
        assert fr_sampling_grid(0.1, math.inf, 1.1) == []
        assert fr_sampling_grid(0.1, math.nan, 1.1) == []


class TestCD70:
    def test_fr_zero(self):
        fr, qtn = boundary_cd70([0.0])
        assert fr == [0.0]
        assert qtn == [pytest.approx(81.0)]

    def test_formula(self):
        fr, qtn = boundary_cd70([1.0, 5.0])
        expected = [11 + 70 / (1 + 0.06 * f) ** 17 for f in (1.0, 5.0)]
        np.testing.assert_allclose(qtn, expected)

    def test_every_sample_emitted(self):
        grid = fr_sampling_grid()
        fr, qtn = boundary_cd70(grid)
        assert fr == grid
        assert len(qtn) == len(grid)
        assert all(q > 11.0 for q in qtn)

    def test_decreasing_towards_eleven(self):
        _, qtn = boundary_cd70(fr_sampling_grid())
        assert all(a > b for a, b in zip(qtn, qtn[1:]))

    def test_empty(self):
        assert boundary_cd70([]) == ([], [])

    def test_zero_base_does_not_raise(self):
        fr, qtn = boundary_cd70([-100.0 / 6.0 + 1e-12, -1e6])
        assert len(qtn) == 2

    def test_overflow_does_not_raise(self):
        _, qtn = boundary_cd70([1e300])
        assert qtn == [pytest.approx(11.0)]

    def test_cd_qtn_scales_with_cd(self):
        assert cd_qtn(0.0, 50.0) == pytest.approx(61.0)


class TestIB:
    def test_solved_curve_satisfies_index(self):
        fr, qtn = boundary_ib(22, [0.5, 1.0, 2.0])
        np.testing.assert_allclose(ib_index(qtn, fr), 22.0)

    def test_asymptote_sample_skipped(self):
        asymptote = 100 / 22
        fr, _ = boundary_ib(22, [1.0, asymptote, 6.0])
        assert asymptote not in fr
        assert fr == [1.0]

    def test_exact_zero_denominator_skipped(self):
        # 25 * 4 - 100 == 0 exactly
        fr, qtn = boundary_ib(25, [2.0, 4.0])
        assert fr == [2.0]
        assert all(math.isfinite(q) for q in qtn)

    def test_negative_qtn_omitted(self):
        assert boundary_ib(32, [20]) == ([], [])

    def test_positive_numerator_branch(self):
        # ib < 1000/70: numerator positive, points exist only right of the asymptote
        fr, qtn = boundary_ib(10, [5.0, 20.0])
        assert fr == [20.0]
        assert qtn == [pytest.approx(300.0 / 100.0)]

    def test_counts_over_default_grid(self):
        grid = fr_sampling_grid()
        assert len(boundary_ib(22, grid)[0]) == 41
        assert len(boundary_ib(32, grid)[0]) == 37

    def test_emitted_points_positive(self):
        _, qtn = boundary_ib(22, fr_sampling_grid())
        assert all(q > 0 for q in qtn)

    def test_nan_and_inf_inputs_do_not_raise(self):
        fr, qtn = boundary_ib(22, [float("nan"), float("inf"), 1.0])
        assert fr == [1.0]

    def test_negative_ib_accepted(self):
        # numerator positive, denominator negative for every positive Fr
        assert boundary_ib(-3.5, [1.0, 2.0]) == ([], [])
        fr, qtn = boundary_ib(-3.5, [-50.0])
        assert fr == [-50.0]
        assert qtn == [pytest.approx(1245.0 / 75.0)]

    def test_empty(self):
        assert boundary_ib(22, []) == ([], [])


class TestStandardBoundaries:
    def test_names_and_styles(self):
        curves = standard_boundaries()
        assert [c.name for c in curves] == ["CD = 70", "IB = 22", "IB = 32"]
        assert [c.style.color for c in curves] == ["red", "green", "orange"]
        assert [c.style.dash for c in curves] == ["solid", "dash", "dot"]

    def test_point_counts(self):
        curves = standard_boundaries(fr_sampling_grid())
        assert [len(c) for c in curves] == [49, 41, 37]

    def test_custom_ib_values(self):
        curves = standard_boundaries(settings=ChartSettings(ib_values=(22.0, 40.0)))
        assert [c.name for c in curves] == ["CD = 70", "IB = 22", "IB = 40"]
        assert curves[2].style.color not in ("red", "green", "orange")

    def test_points_property(self):
        curve = standard_boundaries([0.0])[0]
        assert curve.points == [(0.0, pytest.approx(81.0))]
