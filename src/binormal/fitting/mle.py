"""
Maximum-likelihood fitting of the bi-normal mixture.

Starting values come from the two most prominent modes of a kernel density
estimate; the likelihood is then maximised with L-BFGS-B using the analytic
gradient from :mod:`binormal.fitting.likelihood`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import functools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.optimize import minimize

from binormal.config import resolve_options
from binormal.distributions.binormal import BiNormal
from binormal.distributions.sampling import as_1d_array
from binormal.errors import ConvergenceError, NumericalInstabilityError
from binormal.fitting.likelihood import negative_loglikelihood
from binormal.fitting.peaks import kdemaxes

if TYPE_CHECKING:
    from collections.abc import Sequence

    import numpy.typing as npt

    from binormal.config import SolverOptions
    from binormal.distributions.sampling import Sample
    from binormal.types import FloatArray, ParameterVector

logger = logging.getLogger(__name__)

# lower bound on component spread, relative to the sample standard deviation
_SIGMA_FLOOR = 1e-6


@dataclass(frozen=True, slots=True)
class FitResult:
    """
    Outcome of :func:`fit`.

    Parameters
    ----------
    distribution : BiNormal
        Fitted mixture, labelled so that ``λ >= 1/2``.
    loglikelihood : float
        Log-likelihood of the sample under ``distribution``.
    n_iterations : int
        Iterations performed by the optimiser.
    """

    distribution: BiNormal
    loglikelihood: float
    n_iterations: int


def _validated(sample: Sample | npt.ArrayLike) -> tuple[FloatArray, float]:
    x = as_1d_array(sample)
    if x.size < 2:
        raise ValueError(f"Fitting needs at least two observations, got {x.size}")
    spread = float(np.std(x))
    if spread == 0.0:
        raise ValueError("Cannot fit a mixture to a constant sample.")
    return x, spread


def _cluster_std(cluster: FloatArray, fallback: float) -> float:
    if cluster.size < 2:
        return fallback
    spread = float(np.std(cluster))
    return spread if spread > 0.0 else fallback


def _relabel(params: Sequence[float]) -> ParameterVector:
    lam, mu1, s1, mu2, s2 = (float(p) for p in params)
    if lam < 0.5:
        return (1.0 - lam, mu2, s2, mu1, s1)
    return (lam, mu1, s1, mu2, s2)


def initial_parameters(
    sample: Sample | npt.ArrayLike,
    *,
    options: SolverOptions | None = None,
) -> ParameterVector:
    """
    Heuristic starting point ``(λ, μ₁, σ₁, μ₂, σ₂)`` for :func:`fit`.

    The component means are placed at the two most prominent modes of a
    Gaussian KDE. Every observation is assigned to the nearer mode; the share
    of the first cluster gives ``λ`` and the cluster spreads give ``σ₁`` and
    ``σ₂``. With a single mode both means sit at the sample mean with a
    narrow primary and a wide secondary component.

    Parameters
    ----------
    sample : Sample or array-like
        Univariate sample.
    options : SolverOptions, optional
        Passed to :func:`~binormal.fitting.peaks.kdemaxes`.

    Returns
    -------
    tuple of float
        Parameters with ``λ >= 1/2``.

    Raises
    ------
    ValueError
        If the sample has fewer than two observations or no spread.
    """
    x, spread = _validated(sample)
    peaks = kdemaxes(x, 2, options=options)

    if len(peaks) < 2:
        center = float(np.mean(x))
        return (0.75, center, 0.8 * spread, center, 1.5 * spread)

    c1, c2 = (float(c) for c in peaks.locations)
    nearer_first = np.abs(x - c1) <= np.abs(x - c2)
    lam = float(np.mean(nearer_first))
    s1 = _cluster_std(x[nearer_first], spread)
    s2 = _cluster_std(x[~nearer_first], spread)
    return _relabel((lam, c1, s1, c2, s2))


def fit(
    sample: Sample | npt.ArrayLike,
    initial: Sequence[float] | None = None,
    *,
    options: SolverOptions | None = None,
) -> FitResult:
    """
    Maximum-likelihood estimate of the mixture parameters.

    Parameters
    ----------
    sample : Sample or array-like
        Univariate sample with at least two distinct values.
    initial : Sequence[float], optional
        Starting point ``(λ, μ₁, σ₁, μ₂, σ₂)``; :func:`initial_parameters`
        when omitted.
    options : SolverOptions, optional
        Passed to the likelihood gradient and the starting-point heuristic.

    Returns
    -------
    FitResult
        The fitted mixture is relabelled so that ``λ >= 1/2``.

    Raises
    ------
    ValueError
        If the sample is degenerate or ``initial`` does not hold five values.
    ConvergenceError
        If the optimiser fails or the likelihood becomes numerically
        unstable along the way.
    """
    opts = resolve_options(options)
    x, spread = _validated(sample)

    start = np.asarray(
        initial_parameters(x, options=opts) if initial is None else initial, dtype=np.float64
    )
    if start.shape != (5,):
        raise ValueError(f"Expected 5 initial parameters, got shape {start.shape}")

    floor = _SIGMA_FLOOR * spread
    bounds = [(0.0, 1.0), (None, None), (floor, None), (None, None), (floor, None)]
    objective = functools.partial(negative_loglikelihood, sample=x, options=opts)

    logger.debug("Fitting BiNormal to %d points from %r", x.size, tuple(start))
    try:
        result = minimize(objective, start, jac=True, method="L-BFGS-B", bounds=bounds)
    except NumericalInstabilityError as e:
        raise ConvergenceError(
            "Likelihood became numerically unstable during fitting",
            params=e.params,
            inputs={"initial": tuple(start)},
        ) from e

    if not result.success:
        raise ConvergenceError(
            f"Likelihood maximisation failed: {result.message}",
            params=_relabel(result.x),
            inputs={"initial": tuple(start), "iterations": result.nit},
        )

    distribution = BiNormal(*_relabel(result.x))
    logger.debug("Fit converged to %r in %d iterations", distribution, result.nit)
    return FitResult(
        distribution=distribution,
        loglikelihood=float(-result.fun),
        n_iterations=int(result.nit),
    )


__all__ = ["FitResult", "initial_parameters", "fit"]
