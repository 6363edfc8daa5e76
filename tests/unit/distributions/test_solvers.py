from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from types import SimpleNamespace

import pytest
from scipy.stats import norm

from binormal import ConvergenceError, IntegrationWarning, SolverOptions
from binormal.distributions import solvers
from binormal.distributions.solvers import (
    bracketed_root,
    expand_bracket,
    integrate_real_line,
    newton_root,
    num_derivative,
)


class TestNumDerivative:
    @pytest.mark.parametrize("x", [-1.0, 0.3, 2.0])
    def test_matches_analytic_derivative(self, x: float) -> None:
        assert num_derivative(math.sin, x, 1e-3) == pytest.approx(math.cos(x), rel=1e-9)

    def test_non_finite_point(self) -> None:
        assert math.isnan(num_derivative(math.sin, math.inf))


class TestNewtonRoot:
    def test_square_root(self) -> None:
        root = newton_root(lambda x: x * x - 2.0, 1.0)
        assert root == pytest.approx(math.sqrt(2.0), abs=1e-12)

    def test_failure_carries_context(self) -> None:
        with pytest.raises(ConvergenceError) as excinfo:
            newton_root(
                lambda x: x * x + 1.0,
                1.0,
                options=SolverOptions(max_iter=5),
                params=(0.5, 0.0, 1.0, 0.0, 1.0),
                inputs={"q": 0.5},
            )

        err = excinfo.value
        assert isinstance(err, RuntimeError)
        assert err.params == (0.5, 0.0, 1.0, 0.0, 1.0)
        assert err.inputs["q"] == 0.5
        assert err.inputs["x0"] == 1.0
        assert "q=0.5" in str(err)


class TestBracket:
    def test_expands_towards_a_distant_root(self) -> None:
        bracket = expand_bracket(lambda x: x - 100.0, 0.0)

        assert bracket is not None
        left, right = bracket
        assert left <= 100.0 <= right

    def test_expands_to_the_left(self) -> None:
        bracket = expand_bracket(lambda x: x + 37.0, 5.0)

        assert bracket is not None
        assert bracket[0] <= -37.0 <= bracket[1]

    def test_gives_up_after_max_expand(self) -> None:
        options = SolverOptions(max_expand=2)
        assert expand_bracket(lambda x: x - 1e6, 0.0, options=options) is None

    def test_bracketed_root(self) -> None:
        root = bracketed_root(lambda x: norm.cdf(x) - 0.975, 0.0)
        assert root == pytest.approx(norm.ppf(0.975), abs=1e-11)

    def test_bracketed_root_without_sign_change(self) -> None:
        with pytest.raises(ConvergenceError, match="No sign change"):
            bracketed_root(lambda x: 1.0, 0.0, options=SolverOptions(max_expand=3))


class TestIntegrateRealLine:
    def test_gaussian_mass(self) -> None:
        result = integrate_real_line(norm(1.0, 2.0).pdf, centers=[1.0], widths=[2.0])

        assert result.estimate == pytest.approx(1.0, abs=1e-10)
        assert result.residual < 1e-6
        assert result.messages == ()

    def test_two_features(self) -> None:
        def f(x: float) -> float:
            return 0.5 * norm.pdf(x, -10.0, 0.5) + 0.5 * norm.pdf(x, 10.0, 0.5)

        result = integrate_real_line(f, centers=[-10.0, 10.0], widths=[0.5, 0.5])
        assert result.estimate == pytest.approx(1.0, abs=1e-8)

    @pytest.mark.parametrize("sigma, distance", [(1e-2, 1e2), (1e-3, 1e3), (1e-4, 1e4)])
    def test_narrow_feature_far_from_a_wide_one(self, sigma: float, distance: float) -> None:
        def f(x: float) -> float:
            return 0.5 * norm.pdf(x, 0.0, sigma) + 0.5 * norm.pdf(x, distance, 1.0)

        result = integrate_real_line(f, centers=[0.0, distance], widths=[sigma, 1.0])
        assert result.estimate == pytest.approx(1.0, abs=1e-8)

    def test_quadrature_problems_warn(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = SimpleNamespace(quad=lambda *args, **kwargs: (0.25, 1e-3, {}, "roundoff error"))
        monkeypatch.setattr(solvers, "_sp_integrate", fake)

        with pytest.warns(IntegrationWarning, match="roundoff error"):
            result = integrate_real_line(lambda x: 0.0, centers=[0.0], widths=[1.0])

        assert result.estimate == pytest.approx(0.75)
        assert len(result.messages) == 3

    def test_non_finite_estimate_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = SimpleNamespace(quad=lambda *args, **kwargs: (math.nan, 0.0, {}))
        monkeypatch.setattr(solvers, "_sp_integrate", fake)

        with pytest.raises(ConvergenceError, match="non-finite"):
            integrate_real_line(lambda x: 0.0, centers=[0.0], widths=[1.0])
