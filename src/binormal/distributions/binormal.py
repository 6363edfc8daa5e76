"""
Bi-normal distribution
======================

Two-component Gaussian mixture

.. math::

    f(x; λ, μ_1, σ_1, μ_2, σ_2) = λ N(x; μ_1, σ_1) + (1 - λ) N(x; μ_2, σ_2)

with closed-form moments and numerically solved quantile, median and entropy.

Notes
-----
- By convention the first component is the dominant one, ``λ ∈ [1/2, 1]``.
  Values of ``λ`` in ``[0, 1/2)`` are accepted with a
  :class:`~binormal.errors.PrimaryComponentWarning`; values outside ``[0, 1]``
  are rejected.
- :meth:`BiNormal.rvs` returns, by default, the *weighted sum*
  ``λ X₁ + (1 - λ) X₂`` of one draw from each component. That random variable
  is Gaussian with variance ``λ²σ₁² + (1 - λ)²σ₂²`` and is **not** distributed
  according to :meth:`BiNormal.pdf`; pass ``method="mixture"`` to draw from
  the mixture density itself.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from dataclasses import field
from enum import StrEnum
from typing import TYPE_CHECKING, cast

import numpy as np
from scipy.special import entr, erf, logsumexp

from binormal.distributions.normal import Normal, squeeze_scalar
from binormal.distributions.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from binormal.distributions.sampling import ArraySample, as_1d_array
from binormal.distributions.solvers import (
    bracketed_root,
    integrate_real_line,
    newton_root,
)
from binormal.distributions.support import REAL_LINE
from binormal.errors import ConvergenceError, PrimaryComponentWarning
from binormal.types import CharacteristicName

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from binormal.config import SolverOptions
    from binormal.distributions.sampling import Sample
    from binormal.distributions.support import ContinuousSupport
    from binormal.types import FloatArray, Number, NumericArray, ParameterVector


class SamplingMethod(StrEnum):
    """
    How :meth:`BiNormal.rvs` turns component draws into a variate.

    Attributes
    ----------
    WEIGHTED_SUM : str
        ``λ x₁ + (1 - λ) x₂`` with ``x₁ ~ N₁`` and ``x₂ ~ N₂``.
    MIXTURE : str
        ``x₁`` with probability ``λ``, otherwise ``x₂``.
    """

    WEIGHTED_SUM = "weighted_sum"
    MIXTURE = "mixture"


class QuantileMethod(StrEnum):
    """Root-finding mode used by :meth:`BiNormal.quantile`."""

    NEWTON = "newton"
    BRACKET = "bracket"


@parametrization(name="BiNormal")
class BiNormal(Parametrization):
    """
    Linear combination of two Gaussians.

    Parameters
    ----------
    lam : float
        Mixture weight λ of the first component, ``0 <= λ <= 1``.
    mu1, sigma1 : float
        Mean and standard deviation of the first component.
    mu2, sigma2 : float
        Mean and standard deviation of the second component.

    Raises
    ------
    ValueError
        If ``λ`` is not in ``[0, 1]`` or a component is invalid
        (non-finite mean, non-positive standard deviation).

    Warns
    -----
    PrimaryComponentWarning
        If ``λ < 1/2``.

    Examples
    --------
    >>> d = BiNormal(0.7, 0.0, 1.0, 0.0, 1.0)
    >>> d.mean(), d.var(), d.skewness()
    (0.0, 1.0, 0.0)
    """

    lam: float
    mu1: float
    sigma1: float
    mu2: float
    sigma2: float
    n1: Normal = field(init=False, repr=False, compare=False)
    n2: Normal = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        Parametrization.__post_init__(self)
        object.__setattr__(self, "n1", Normal(self.mu1, self.sigma1))
        object.__setattr__(self, "n2", Normal(self.mu2, self.sigma2))
        if self.lam < 0.5:
            warnings.warn(
                f"λ={self.lam} < 1/2: the second component dominates the mixture",
                PrimaryComponentWarning,
                stacklevel=3,
            )

    @constraint(description="0 <= lam <= 1")
    def check_lam_unit_interval(self) -> bool:
        """Check that the mixture weight is a probability."""
        return 0.0 <= self.lam <= 1.0

    def params(self) -> ParameterVector:
        """Return the parameters ``(λ, μ₁, σ₁, μ₂, σ₂)``."""
        return (self.lam, self.mu1, self.sigma1, self.mu2, self.sigma2)

    @property
    def dtype(self) -> np.dtype[np.float64]:
        """Numeric type shared by all parameters."""
        return np.dtype(np.float64)

    # --- densities ------------------------------------------------------------

    def componentpdfs(self, x: Number | NumericArray) -> tuple[Any, Any]:
        """Weighted component densities ``(λ N₁.pdf(x), (1 - λ) N₂.pdf(x))``."""
        return self.lam * self.n1.pdf(x), (1 - self.lam) * self.n2.pdf(x)

    def componentcdfs(self, x: Number | NumericArray) -> tuple[Any, Any]:
        """Weighted component CDFs ``(λ N₁.cdf(x), (1 - λ) N₂.cdf(x))``."""
        return self.lam * self.n1.cdf(x), (1 - self.lam) * self.n2.cdf(x)

    def pdf(self, x: Number | NumericArray) -> Any:
        r"""
        Probability density function

        .. math::

            f(x) = λ N(x; μ_1, σ_1) + (1-λ) N(x; μ_2, σ_2)

        Parameters
        ----------
        x : Number or NumericArray
            Evaluation point(s).

        Returns
        -------
        float or FloatArray
        """
        p1, p2 = self.componentpdfs(x)
        return p1 + p2

    def logpdf(self, x: Number | NumericArray) -> Any:
        """
        Logarithm of :meth:`pdf`, evaluated in log space so that far tails do
        not underflow to ``-inf``.
        """
        x_arr = np.asarray(x, dtype=np.float64)
        with np.errstate(divide="ignore"):
            log_weights = np.log([self.lam, 1.0 - self.lam])
        terms = np.stack(
            [
                np.asarray(self.n1.logpdf(x_arr)) + log_weights[0],
                np.asarray(self.n2.logpdf(x_arr)) + log_weights[1],
            ]
        )
        return squeeze_scalar(logsumexp(terms, axis=0), x)

    def cdf(self, x: Number | NumericArray) -> Any:
        r"""
        Cumulative distribution function

        .. math::

            F(x) = λ F_N(x; μ_1, σ_1) + (1-λ) F_N(x; μ_2, σ_2)
        """
        c1, c2 = self.componentcdfs(x)
        return c1 + c2

    # --- support --------------------------------------------------------------

    @property
    def support(self) -> ContinuousSupport:
        """The real line."""
        return REAL_LINE

    def minimum(self) -> float:
        return float("-inf")

    def maximum(self) -> float:
        return float("inf")

    def insupport(self, x: Any) -> bool:
        """Always ``True``: the mixture is supported on the whole real line."""
        return True

    # --- moments --------------------------------------------------------------

    def mean(self) -> float:
        """Mean ``μ = λ μ₁ + (1 - λ) μ₂``."""
        return self.lam * self.n1.mean() + (1 - self.lam) * self.n2.mean()

    def var(self) -> float:
        r"""
        Variance

        .. math::

            σ^2 = λσ_1^2 + (1-λ)σ_2^2 + λ(1-λ)(μ_1 - μ_2)^2
        """
        lam, mu1, s1, mu2, s2 = self.params()
        return lam * s1**2 + (1 - lam) * s2**2 + lam * (1 - lam) * (mu1 - mu2) ** 2

    def std(self) -> float:
        return math.sqrt(self.var())

    def mode(self) -> float:
        """Mean of the first (primary) component; not a search over the density."""
        return self.mu1

    def modes(self) -> list[float]:
        """Component means ``[μ₁, μ₂]`` as candidate mode locations."""
        return [self.mu1, self.mu2]

    def skewness(self) -> float:
        r"""
        Skewness

        .. math::

            γ = \frac{λ μ_1 (μ_1^2 + 3σ_1^2) + (1-λ) μ_2 (μ_2^2 + 3σ_2^2)
                      - μ (3σ^2 + μ^2)}{σ^3}

        where ``μ`` and ``σ²`` are :meth:`mean` and :meth:`var`.
        """
        lam, mu1, s1, mu2, s2 = self.params()
        mu = self.mean()
        s2_total = self.var()

        third = (
            lam * mu1 * (mu1**2 + 3 * s1**2)
            + (1 - lam) * mu2 * (mu2**2 + 3 * s2**2)
            - mu * (3 * s2_total + mu**2)
        )
        return third / s2_total**1.5

    def kurtosis(self, excess: bool = False) -> float:
        r"""
        Raw or excess kurtosis

        .. math::

            \frac{
                     λ  (μ_1^4 + 3 σ_1^4 + 6 μ_1^2 σ_1^2)
                + (1-λ) (μ_2^4 + 3 σ_2^4 + 6 μ_2^2 σ_2^2)
                + 3 μ^2 (μ^2 + 2 σ^2)
                - 4 μ [λ μ_1 (μ_1^2 + 3 σ_1^2) + (1-λ) μ_2 (μ_2^2 + 3 σ_2^2)]
            }{σ^4}

        Parameters
        ----------
        excess : bool, default False
            Subtract 3 (the kurtosis of a Gaussian).
        """
        lam, mu1, s1, mu2, s2 = self.params()
        mu = self.mean()
        s2_total = self.var()

        numerator = (
            lam * (mu1**4 + 3 * s1**4 + 6 * mu1**2 * s1**2)
            + (1 - lam) * (mu2**4 + 3 * s2**4 + 6 * mu2**2 * s2**2)
            + 3 * mu**2 * (mu**2 + 2 * s2_total)
            - 4 * mu * (lam * mu1 * (mu1**2 + 3 * s1**2) + (1 - lam) * mu2 * (mu2**2 + 3 * s2**2))
        )
        kurt = numerator / s2_total**2
        return kurt - 3.0 if excess else kurt

    def moment(self, k: int) -> float:
        """
        ``k``-th raw moment about zero, ``λ E[X₁^k] + (1 - λ) E[X₂^k]``.

        Raises
        ------
        UnsupportedMomentOrderError
            For orders outside ``1..8``.
        """
        return self.lam * self.n1.moment(k) + (1 - self.lam) * self.n2.moment(k)

    def mgf(self, t: Number | NumericArray) -> Any:
        r"""
        Moment generating function

        .. math::

            M(t) = λ \exp(tμ_1 + \tfrac12 t^2σ_1^2) + (1-λ) \exp(tμ_2 + \tfrac12 t^2σ_2^2)
        """
        return self.lam * self.n1.mgf(t) + (1 - self.lam) * self.n2.mgf(t)

    def cf(self, t: Number | NumericArray) -> Any:
        r"""
        Characteristic function

        .. math::

            φ(t) = λ \exp(itμ_1 - \tfrac12 t^2σ_1^2) + (1-λ) \exp(itμ_2 - \tfrac12 t^2σ_2^2)
        """
        return self.lam * self.n1.cf(t) + (1 - self.lam) * self.n2.cf(t)

    # --- numerically solved characteristics ------------------------------------

    def _quantile_scalar(
        self, q: float, method: QuantileMethod, options: SolverOptions | None
    ) -> float:
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"Probability must be in [0, 1], got {q}")
        if q == 0.0:
            return float("-inf")
        if q == 1.0:
            return float("inf")

        def cdf_minus_q(x: float) -> float:
            return float(self.cdf(x)) - q

        inputs = {"characteristic": CharacteristicName.PPF, "q": q}
        if method is QuantileMethod.BRACKET:
            return bracketed_root(
                cdf_minus_q,
                self.mean(),
                scale=self.std(),
                options=options,
                params=self.params(),
                inputs=inputs,
            )
        try:
            return newton_root(
                cdf_minus_q,
                self.mean(),
                scale=self.std(),
                options=options,
                params=self.params(),
                inputs=inputs,
            )
        except ConvergenceError as e:
            raise ConvergenceError(
                f"Quantile at q={q} did not converge with Newton's method; "
                "retry with method='bracket'",
                params=e.params,
                inputs=e.inputs,
            ) from e

    def quantile(
        self,
        q: Number | NumericArray,
        *,
        method: QuantileMethod | str = QuantileMethod.NEWTON,
        options: SolverOptions | None = None,
    ) -> Any:
        """
        Quantile (inverse CDF), found by root finding on ``cdf(x) - q``.

        Parameters
        ----------
        q : Number or NumericArray
            Probabilities in ``[0, 1]``; ``0`` and ``1`` map to ``-inf`` and
            ``inf``.
        method : {"newton", "bracket"}, default "newton"
            ``"newton"`` iterates from :meth:`mean` with a numeric derivative
            of the CDF; ``"bracket"`` expands a bracket around the mean and
            refines it with Brent's method.
        options : SolverOptions, optional
            Tolerances and iteration bounds.

        Raises
        ------
        ValueError
            If a probability is outside ``[0, 1]`` or NaN.
        ConvergenceError
            If the root finder does not converge.
        """
        how = QuantileMethod(method)
        q_arr = np.asarray(q, dtype=np.float64)
        if q_arr.ndim == 0:
            return self._quantile_scalar(float(q_arr), how, options)
        flat = [self._quantile_scalar(float(qi), how, options) for qi in q_arr.ravel()]
        return cast("FloatArray", np.asarray(flat, dtype=np.float64).reshape(q_arr.shape))

    ppf = quantile

    def median(self, *, options: SolverOptions | None = None) -> float:
        r"""
        Median, the root of

        .. math::

            λ \operatorname{erf}\left(\frac{x-μ_1}{σ_1\sqrt2}\right)
            + (1-λ) \operatorname{erf}\left(\frac{x-μ_2}{σ_2\sqrt2}\right) = 0

        found from values only, starting at :meth:`mean`. Each error function
        takes its argument scaled by ``σ√2``, so the equation is exactly
        ``cdf(x) = 1/2`` and the root is the true median of the mixture.

        Raises
        ------
        ConvergenceError
            If no sign change is found or the refinement does not converge.
        """
        lam, mu1, s1, mu2, s2 = self.params()

        def f(x: float) -> float:
            return float(
                lam * erf((x - mu1) / (s1 * math.sqrt(2)))
                + (1 - lam) * erf((x - mu2) / (s2 * math.sqrt(2)))
            )

        return bracketed_root(
            f,
            self.mean(),
            scale=self.std(),
            options=options,
            params=self.params(),
            inputs={"characteristic": CharacteristicName.MEDIAN},
        )

    def entropy(self, *, options: SolverOptions | None = None) -> float:
        """
        Differential entropy ``-∫ f(x) log f(x) dx``, evaluated numerically.

        The quadrature residual is logged at DEBUG level; an unreliable
        estimate is reported with an :class:`~binormal.errors.IntegrationWarning`
        but still returned.

        Raises
        ------
        ConvergenceError
            If the quadrature estimate is not finite.
        """
        result = integrate_real_line(
            lambda x: float(entr(self.pdf(x))),
            centers=[self.mu1, self.mu2],
            widths=[self.sigma1, self.sigma2],
            options=options,
            params=self.params(),
            inputs={"characteristic": CharacteristicName.ENTROPY},
        )
        return result.estimate

    # --- sampling and likelihood ------------------------------------------------

    def rvs(
        self,
        rng: np.random.Generator | int,
        size: int | None = None,
        *,
        method: SamplingMethod | str = SamplingMethod.WEIGHTED_SUM,
    ) -> Any:
        """
        Draw random variates using the caller's random source.

        Parameters
        ----------
        rng : numpy.random.Generator or int
            Random source, or a seed for ``numpy.random.default_rng``.
        size : int, optional
            Number of draws; a single float is returned when omitted.
        method : {"weighted_sum", "mixture"}, default "weighted_sum"
            ``"weighted_sum"`` returns ``λ x₁ + (1 - λ) x₂`` for independent
            ``x₁ ~ N₁``, ``x₂ ~ N₂``. ``"mixture"`` returns ``x₁`` with
            probability ``λ`` and ``x₂`` otherwise, i.e. draws from
            :meth:`pdf`.
        """
        how = SamplingMethod(method)
        generator = np.random.default_rng(rng)
        x1 = np.asarray(self.n1.rvs(generator, size))
        x2 = np.asarray(self.n2.rvs(generator, size))

        if how is SamplingMethod.WEIGHTED_SUM:
            draws = self.lam * x1 + (1 - self.lam) * x2
        else:
            draws = np.where(generator.random(size) < self.lam, x1, x2)

        return float(draws) if size is None else cast("FloatArray", draws)

    def sample(
        self,
        n: int,
        rng: np.random.Generator | int,
        *,
        method: SamplingMethod | str = SamplingMethod.WEIGHTED_SUM,
    ) -> ArraySample:
        """
        Draw ``n`` variates into an :class:`ArraySample` of shape ``(n, 1)``.

        See :meth:`rvs` for ``rng`` and ``method``.
        """
        return ArraySample.from_values(self.rvs(rng, n, method=method))

    def loglikelihood(self, sample: Sample | npt.ArrayLike) -> float:
        """
        Log-likelihood ``Σ log f(xᵢ)`` of a sample; ``0.0`` for an empty one.
        """
        return float(np.sum(self.logpdf(as_1d_array(sample))))

    # --- display ----------------------------------------------------------------

    def __repr__(self) -> str:
        lam, mu1, s1, mu2, s2 = self.params()
        return f"{type(self).__name__}(λ={lam}, μ₁={mu1}, σ₁={s1}, μ₂={mu2}, σ₂={s2})"

    __str__ = __repr__


__all__ = ["BiNormal", "SamplingMethod", "QuantileMethod"]
