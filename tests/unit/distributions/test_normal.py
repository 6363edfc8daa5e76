"""
Tests for the Gaussian component

Checks the closed-form characteristics of ``Normal`` against
``scipy.stats.norm`` and the parameter validation of the ``meanStd``
parametrization.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import norm

from binormal import SUPPORTED_MOMENT_ORDERS, Normal, UnsupportedMomentOrderError

from .base import BaseDistributionTest


class TestNormal(BaseDistributionTest):
    """Test suite for the Gaussian component."""

    def setup_method(self):
        """Setup before each test method."""
        self.dist = Normal(mu=2.0, sigma=1.5)
        self.reference = norm(loc=2.0, scale=1.5)

    def test_parametrization_properties(self):
        assert self.dist.name == "meanStd"
        assert self.dist.parameters == {"mu": 2.0, "sigma": 1.5}
        assert [c.description for c in self.dist.constraints] == ["mu is finite", "sigma > 0"]

    def test_parameters_are_coerced_to_float(self):
        dist = Normal(np.int64(1), 2)
        assert type(dist.mu) is float
        assert type(dist.sigma) is float

    @pytest.mark.parametrize(
        "mu, sigma, message",
        [
            (0.0, 0.0, "sigma > 0"),
            (0.0, -1.0, "sigma > 0"),
            (0.0, math.inf, "sigma > 0"),
            (math.nan, 1.0, "mu is finite"),
            (math.inf, 1.0, "mu is finite"),
        ],
    )
    def test_parametrization_constraints(self, mu, sigma, message):
        with pytest.raises(ValueError, match=message):
            Normal(mu, sigma)

    def test_is_frozen(self):
        with pytest.raises(AttributeError):
            self.dist.mu = 3.0  # type: ignore[misc]

    def test_pdf_logpdf_cdf_match_scipy(self):
        x = np.linspace(-5.0, 9.0, 57)

        self.assert_arrays_almost_equal(self.dist.pdf(x), self.reference.pdf(x))
        self.assert_arrays_almost_equal(self.dist.logpdf(x), self.reference.logpdf(x))
        self.assert_arrays_almost_equal(self.dist.cdf(x), self.reference.cdf(x))

    def test_scalar_input_returns_python_float(self):
        assert isinstance(self.dist.pdf(2.0), float)
        assert isinstance(self.dist.cdf(2.0), float)
        assert self.dist.cdf(2.0) == pytest.approx(0.5, abs=self.CALCULATION_PRECISION)
        assert isinstance(self.dist.cf(1.0), complex)

    def test_ppf(self):
        p = np.array([0.001, 0.1, 0.5, 0.9, 0.999])
        self.assert_arrays_almost_equal(self.dist.ppf(p), self.reference.ppf(p), precision=1e-8)

        assert self.dist.ppf(0.0) == -math.inf
        assert self.dist.ppf(1.0) == math.inf

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_ppf_outside_unit_interval(self, p):
        with pytest.raises(ValueError, match="Probability must be in"):
            self.dist.ppf(p)

    def test_cf_and_mgf(self):
        t = np.array([-1.0, 0.0, 0.5, 2.0])

        expected_cf = np.exp(1j * 2.0 * t - 0.5 * 1.5**2 * t**2)
        expected_mgf = np.exp(2.0 * t + 0.5 * 1.5**2 * t**2)
        self.assert_arrays_almost_equal(self.dist.cf(t), expected_cf)
        self.assert_arrays_almost_equal(self.dist.mgf(t), expected_mgf)
        assert self.dist.cf(0.0) == 1.0
        assert self.dist.mgf(0.0) == 1.0

    def test_mean_var_std(self):
        assert self.dist.mean() == 2.0
        assert self.dist.var() == 2.25
        assert self.dist.std() == 1.5

    @pytest.mark.parametrize("k", list(SUPPORTED_MOMENT_ORDERS))
    def test_raw_moments_match_scipy(self, k):
        assert self.dist.moment(k) == pytest.approx(self.reference.moment(k), rel=1e-10)

    def test_standard_normal_even_moments(self):
        std = Normal(0.0, 1.0)
        # (k - 1)!!
        assert [std.moment(k) for k in (2, 4, 6, 8)] == [1.0, 3.0, 15.0, 105.0]
        assert [std.moment(k) for k in (1, 3, 5, 7)] == [0.0, 0.0, 0.0, 0.0]

    @pytest.mark.parametrize("k", [0, 9, -1])
    def test_unsupported_moment_order(self, k):
        with pytest.raises(UnsupportedMomentOrderError) as excinfo:
            self.dist.moment(k)

        assert isinstance(excinfo.value, NotImplementedError)
        assert excinfo.value.order == k
        assert excinfo.value.supported == SUPPORTED_MOMENT_ORDERS

    def test_moment_order_must_be_integer(self):
        with pytest.raises(TypeError):
            self.dist.moment(2.5)  # type: ignore[arg-type]

    def test_rvs_is_reproducible(self):
        a = self.dist.rvs(np.random.default_rng(7), 100)
        b = self.dist.rvs(7, 100)

        assert a.shape == (100,)
        self.assert_arrays_almost_equal(a, b)
        assert isinstance(self.dist.rvs(7), float)
