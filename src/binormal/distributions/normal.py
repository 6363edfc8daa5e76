"""
Gaussian component of the bi-normal mixture.

Contains the :class:`Normal` value type with its analytical characteristics.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import operator
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import erf, erfinv

from binormal.distributions.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from binormal.errors import UnsupportedMomentOrderError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from binormal.types import ComplexArray, FloatArray, Number, NumericArray


def squeeze_scalar(values: Any, like: Any) -> Any:
    """Return a Python scalar when ``like`` is a scalar, else ``values`` as is."""
    if np.ndim(like) == 0:
        arr = np.asarray(values)
        return complex(arr) if np.iscomplexobj(arr) else float(arr)
    return values


_RAW_MOMENTS: dict[int, Callable[[float, float], float]] = {
    1: lambda mu, s: mu,
    2: lambda mu, s: mu**2 + s**2,
    3: lambda mu, s: mu * (mu**2 + 3 * s**2),
    4: lambda mu, s: mu**4 + 6 * mu**2 * s**2 + 3 * s**4,
    5: lambda mu, s: mu**5 + 10 * mu**3 * s**2 + 15 * mu * s**4,
    6: lambda mu, s: mu**6 + 15 * mu**4 * s**2 + 45 * mu**2 * s**4 + 15 * s**6,
    7: lambda mu, s: mu**7 + 21 * mu**5 * s**2 + 105 * mu**3 * s**4 + 105 * mu * s**6,
    8: lambda mu, s: (
        mu**8 + 28 * mu**6 * s**2 + 210 * mu**4 * s**4 + 420 * mu**2 * s**6 + 105 * s**8
    ),
}

SUPPORTED_MOMENT_ORDERS = range(1, 9)
"""Orders for which closed-form raw moments of a Gaussian are provided."""


@parametrization(name="meanStd")
class Normal(Parametrization):
    """
    Normal (Gaussian) distribution.

    The normal distribution is symmetric about its mean and is defined by
    two parameters: mean (μ) and standard deviation (σ).

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

    Parameters
    ----------
    mu : float
        Mean of the distribution
    sigma : float
        Standard deviation of the distribution
    """

    mu: float
    sigma: float

    @constraint(description="mu is finite")
    def check_mu_finite(self) -> bool:
        return math.isfinite(self.mu)

    @constraint(description="sigma > 0")
    def check_sigma_positive(self) -> bool:
        """Check that standard deviation is positive."""
        return math.isfinite(self.sigma) and self.sigma > 0

    def pdf(self, x: Number | NumericArray) -> Any:
        """
        Probability density function.

        Parameters
        ----------
        x : Number or NumericArray
            Points at which to evaluate the probability density function

        Returns
        -------
        float or NumericArray
            Probability density values at points x
        """
        x_arr = np.asarray(x, dtype=np.float64)
        coefficient = 1.0 / (self.sigma * np.sqrt(2 * np.pi))
        exponent = -((x_arr - self.mu) ** 2) / (2 * self.sigma**2)
        return squeeze_scalar(coefficient * np.exp(exponent), x)

    def logpdf(self, x: Number | NumericArray) -> Any:
        """Logarithm of the probability density function."""
        x_arr = np.asarray(x, dtype=np.float64)
        z = (x_arr - self.mu) / self.sigma
        return squeeze_scalar(-0.5 * z**2 - math.log(self.sigma) - 0.5 * math.log(2 * math.pi), x)

    def cdf(self, x: Number | NumericArray) -> Any:
        """
        Cumulative distribution function.

        Returns
        -------
        float or NumericArray
            Probabilities P(X ≤ x) for each point x
        """
        z = (np.asarray(x, dtype=np.float64) - self.mu) / (self.sigma * np.sqrt(2))
        return squeeze_scalar(0.5 * (1 + erf(z)), x)

    def ppf(self, p: Number | NumericArray) -> Any:
        """
        Percent point function (inverse CDF).

        If p is 0 or 1, the result is -inf and inf correspondingly.

        Raises
        ------
        ValueError
            If probability is outside [0, 1]
        """
        p_arr = np.asarray(p, dtype=np.float64)
        if np.any((p_arr < 0) | (p_arr > 1)):
            raise ValueError("Probability must be in [0, 1]")
        return squeeze_scalar(self.mu + self.sigma * np.sqrt(2) * erfinv(2 * p_arr - 1), p)

    def cf(self, t: Number | NumericArray) -> Any:
        """Characteristic function ``exp(iμt - σ²t²/2)``."""
        t_arr = np.asarray(t, dtype=np.float64)
        exponent = 1j * self.mu * t_arr - 0.5 * (self.sigma**2) * (t_arr**2)
        return squeeze_scalar(cast("ComplexArray", np.exp(exponent)), t)

    def mgf(self, t: Number | NumericArray) -> Any:
        """Moment generating function ``exp(μt + σ²t²/2)``."""
        t_arr = np.asarray(t, dtype=np.float64)
        return squeeze_scalar(np.exp(self.mu * t_arr + 0.5 * self.sigma**2 * t_arr**2), t)

    def mean(self) -> float:
        return self.mu

    def var(self) -> float:
        return self.sigma**2

    def std(self) -> float:
        return self.sigma

    def moment(self, k: int) -> float:
        """
        Raw moment ``E[X^k]`` about zero.

        Parameters
        ----------
        k : int
            Moment order, ``1 <= k <= 8``.

        Raises
        ------
        TypeError
            If ``k`` is not an integer.
        UnsupportedMomentOrderError
            If no closed form is available for ``k``.
        """
        order = operator.index(k)
        try:
            formula = _RAW_MOMENTS[order]
        except KeyError:
            raise UnsupportedMomentOrderError(order, SUPPORTED_MOMENT_ORDERS) from None
        return float(formula(self.mu, self.sigma))

    def rvs(self, rng: np.random.Generator | int, size: int | None = None) -> Any:
        """
        Draw random variates using the caller's random source.

        Parameters
        ----------
        rng : numpy.random.Generator or int
            Random source, or a seed for ``numpy.random.default_rng``.
        size : int, optional
            Number of draws; a single float is returned when omitted.
        """
        generator = np.random.default_rng(rng)
        if size is None:
            return float(generator.normal(self.mu, self.sigma))
        return cast("FloatArray", generator.normal(self.mu, self.sigma, size))


__all__ = ["Normal", "SUPPORTED_MOMENT_ORDERS", "squeeze_scalar"]
