r"""
Log-likelihood of the bi-normal mixture and its analytic gradient.

The gradient is written in terms of the posterior responsibilities

.. math::

    r_1(x) = \frac{λ N_1(x)}{f(x)}, \qquad r_2(x) = \frac{(1-λ) N_2(x)}{f(x)},

so that, per sample point,

.. math::

    \partial_λ \log f = \frac{N_1 - N_2}{f}, \quad
    \partial_{μ_i} \log f = r_i \frac{x - μ_i}{σ_i^2}, \quad
    \partial_{σ_i} \log f = \frac{r_i}{σ_i}\left(\frac{(x - μ_i)^2}{σ_i^2} - 1\right).

Responsibilities are formed in log space; a point whose mixture density falls
below ``SolverOptions.min_density`` makes the ratios meaningless and raises
:class:`~binormal.errors.NumericalInstabilityError`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from typing import TYPE_CHECKING

import numpy as np
from scipy.special import logsumexp

from binormal.config import resolve_options
from binormal.distributions.binormal import BiNormal
from binormal.distributions.sampling import as_1d_array
from binormal.errors import NumericalInstabilityError, PrimaryComponentWarning

if TYPE_CHECKING:
    from collections.abc import Sequence

    import numpy.typing as npt

    from binormal.config import SolverOptions
    from binormal.distributions.sampling import Sample
    from binormal.types import FloatArray


def loglikelihood(d: BiNormal, sample: Sample | npt.ArrayLike) -> float:
    """
    Log-likelihood ``Σ logpdf(d, xᵢ)`` of a sample.

    Parameters
    ----------
    d : BiNormal
        Mixture whose parameters are evaluated.
    sample : Sample or array-like
        Univariate sample.

    Returns
    -------
    float
        The log-likelihood; ``0.0`` for an empty sample and ``-inf`` when a
        point has zero density in floating point.
    """
    return d.loglikelihood(sample)


def gradient_loglikelihood(
    d: BiNormal,
    sample: Sample | npt.ArrayLike,
    *,
    options: SolverOptions | None = None,
) -> FloatArray:
    """
    Analytic gradient of :func:`loglikelihood` with respect to the parameters.

    Parameters
    ----------
    d : BiNormal
        Point at which the gradient is evaluated.
    sample : Sample or array-like
        Univariate sample.
    options : SolverOptions, optional
        ``min_density`` is the smallest admissible mixture density.

    Returns
    -------
    FloatArray
        ``[∂λ, ∂μ₁, ∂σ₁, ∂μ₂, ∂σ₂]``; zeros for an empty sample.

    Raises
    ------
    NumericalInstabilityError
        If the mixture density at some point is below ``min_density`` or the
        gradient is not finite.
    """
    opts = resolve_options(options)
    x = as_1d_array(sample)
    lam, mu1, s1, mu2, s2 = d.params()

    log_p1 = np.asarray(d.n1.logpdf(x))
    log_p2 = np.asarray(d.n2.logpdf(x))
    with np.errstate(divide="ignore"):
        log_w = np.log([lam, 1.0 - lam])
    log_f = logsumexp(np.stack([log_p1 + log_w[0], log_p2 + log_w[1]]), axis=0)

    n_small = int(np.count_nonzero(log_f < math.log(opts.min_density)))
    if n_small:
        raise NumericalInstabilityError(
            f"Mixture density below {opts.min_density:g} at {n_small} of {x.size} sample points",
            params=d.params(),
        )

    # p_i / f per point
    q1 = np.exp(log_p1 - log_f)
    q2 = np.exp(log_p2 - log_f)
    z1 = (x - mu1) / s1
    z2 = (x - mu2) / s2

    grad = np.array(
        [
            np.sum(q1 - q2),
            lam * np.sum(q1 * z1) / s1,
            lam * np.sum(q1 * (z1**2 - 1)) / s1,
            (1 - lam) * np.sum(q2 * z2) / s2,
            (1 - lam) * np.sum(q2 * (z2**2 - 1)) / s2,
        ],
        dtype=np.float64,
    )
    if not np.all(np.isfinite(grad)):
        raise NumericalInstabilityError("Log-likelihood gradient is not finite", params=d.params())
    return grad


gradientLogLikelihood = gradient_loglikelihood


def negative_loglikelihood(
    params: Sequence[float] | FloatArray,
    sample: Sample | npt.ArrayLike,
    *,
    options: SolverOptions | None = None,
) -> tuple[float, FloatArray]:
    """
    Objective for external minimisers: negative log-likelihood and its gradient.

    Matches the ``fun(x, *args) -> (value, jac)`` protocol of
    :func:`scipy.optimize.minimize` with ``jac=True``.

    Parameters
    ----------
    params : Sequence[float]
        ``(λ, μ₁, σ₁, μ₂, σ₂)``.
    sample : Sample or array-like
        Univariate sample.
    options : SolverOptions, optional
        Passed to :func:`gradient_loglikelihood`.

    Returns
    -------
    tuple[float, FloatArray]
        ``(-loglikelihood, -gradient)``.

    Raises
    ------
    ValueError
        If ``params`` do not describe a valid mixture.
    NumericalInstabilityError
        See :func:`gradient_loglikelihood`.
    """
    with warnings.catch_warnings():
        # optimisers may visit λ < 1/2 on their way to the optimum
        warnings.simplefilter("ignore", PrimaryComponentWarning)
        d = BiNormal(*params)
    x = as_1d_array(sample)
    return -loglikelihood(d, x), -gradient_loglikelihood(d, x, options=options)


__all__ = [
    "loglikelihood",
    "gradient_loglikelihood",
    "gradientLogLikelihood",
    "negative_loglikelihood",
]
