"""
Numerical Solvers
=================

Thin adapters over :mod:`scipy.optimize` and :mod:`scipy.integrate` used for
the characteristics of the mixture that have no closed form:

- :func:`newton_root`: Newton iteration with a numeric derivative;
- :func:`bracketed_root`: bracket expansion followed by Brent's method,
  for monotone value-only functions;
- :func:`integrate_real_line`: adaptive quadrature over ``(-inf, inf)``.

Notes
-----
- All loops are bounded by :class:`~binormal.config.SolverOptions`; a solver
  that runs out of iterations raises :class:`~binormal.errors.ConvergenceError`
  instead of returning its last iterate.
- ``scale`` arguments express step sizes and tolerances in units of the
  problem (typically the mixture standard deviation).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import warnings
from dataclasses import dataclass
from math import isfinite
from typing import TYPE_CHECKING

import numpy as np
from scipy import (
    integrate as _sp_integrate,
    optimize as _sp_optimize,
)

from binormal.config import resolve_options
from binormal.errors import ConvergenceError, IntegrationWarning

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from typing import Any

    from binormal.config import SolverOptions
    from binormal.types import ParameterVector, ScalarFunc

logger = logging.getLogger(__name__)

_RTOL = 4 * float(np.finfo(float).eps)

# break points of the central quadrature window, in units of feature width
_WINDOW = (1.0, 4.0, 12.0)


def num_derivative(f: ScalarFunc, x: float, h: float = 1e-5) -> float:
    """
    5-point central numerical derivative.

    Parameters
    ----------
    f : Callable[[float], float]
        Scalar function.
    x : float
        Evaluation point.
    h : float, default 1e-5
        Step for the stencil.

    Returns
    -------
    float
        Approximated derivative ``f'(x)``; ``nan`` for non-finite ``x``.
    """
    if not isfinite(x):
        return float("nan")
    f1 = float(f(x + h))
    f_1 = float(f(x - h))
    f2 = float(f(x + 2 * h))
    f_2 = float(f(x - 2 * h))
    return float((-f2 + 8 * f1 - 8 * f_1 + f_2) / (12.0 * h))


def newton_root(
    f: ScalarFunc,
    x0: float,
    *,
    scale: float = 1.0,
    options: SolverOptions | None = None,
    params: ParameterVector | None = None,
    inputs: Mapping[str, Any] | None = None,
) -> float:
    """
    Find a root of ``f`` by Newton's method starting from ``x0``.

    The derivative is obtained with :func:`num_derivative` using a stencil
    step of ``options.derivative_step * scale``.

    Parameters
    ----------
    f : Callable[[float], float]
        Scalar function whose root is sought.
    x0 : float
        Initial guess.
    scale : float, default 1.0
        Characteristic length of the problem.
    options : SolverOptions, optional
        Tolerances and iteration bounds.
    params, inputs
        Context attached to a :class:`ConvergenceError`.

    Returns
    -------
    float
        The root.

    Raises
    ------
    ConvergenceError
        If the iteration does not converge within ``options.max_iter`` steps
        or leaves the finite reals.
    """
    opts = resolve_options(options)
    h = opts.derivative_step * scale

    def fprime(x: float) -> float:
        return num_derivative(f, x, h)

    context = {**(inputs or {}), "x0": x0}
    with warnings.catch_warnings():
        # scipy warns on a vanishing derivative; reported below as ConvergenceError
        warnings.simplefilter("ignore", RuntimeWarning)
        root, result = _sp_optimize.newton(
            f,
            x0,
            fprime=fprime,
            tol=opts.x_tol * max(1.0, scale),
            rtol=_RTOL,
            maxiter=opts.max_iter,
            full_output=True,
            disp=False,
        )

    root = float(root)
    if not result.converged or not isfinite(root):
        raise ConvergenceError(
            f"Newton iteration did not converge: {result.flag}",
            params=params,
            inputs={**context, "iterations": result.iterations},
        )
    logger.debug("Newton converged to %r in %d iterations", root, result.iterations)
    return root


def expand_bracket(
    f: ScalarFunc,
    x0: float,
    *,
    scale: float = 1.0,
    options: SolverOptions | None = None,
) -> tuple[float, float] | None:
    """
    Grow an interval around ``x0`` until a non-decreasing ``f`` changes sign.

    Parameters
    ----------
    f : Callable[[float], float]
        Non-decreasing scalar function.
    x0 : float
        Initial bracket center.
    scale : float, default 1.0
        Unit of the initial half-width ``options.init_step``.
    options : SolverOptions, optional
        Expansion factor and bound on the number of expansions.

    Returns
    -------
    tuple[float, float] or None
        ``(L, R)`` with ``f(L) <= 0 <= f(R)``, or ``None`` when no bracket was
        found within ``options.max_expand`` expansions.
    """
    opts = resolve_options(options)
    step = opts.init_step * scale
    L, R = x0 - step, x0 + step
    FL, FR = float(f(L)), float(f(R))

    for _ in range(opts.max_expand):
        if FL <= 0.0 <= FR:
            return L, R
        if FL > 0.0:
            step *= opts.expand_factor
            L -= step
            FL = float(f(L))
        if FR < 0.0:
            step *= opts.expand_factor
            R += step
            FR = float(f(R))

    return (L, R) if FL <= 0.0 <= FR else None


def bracketed_root(
    f: ScalarFunc,
    x0: float,
    *,
    scale: float = 1.0,
    options: SolverOptions | None = None,
    params: ParameterVector | None = None,
    inputs: Mapping[str, Any] | None = None,
) -> float:
    """
    Find the root of a non-decreasing ``f`` from values only.

    A bracket is expanded around ``x0`` (see :func:`expand_bracket`) and
    refined with :func:`scipy.optimize.brentq`.

    Raises
    ------
    ConvergenceError
        If no sign change is found or Brent's method does not converge.
    """
    opts = resolve_options(options)
    context = {**(inputs or {}), "x0": x0}

    bracket = expand_bracket(f, x0, scale=scale, options=opts)
    if bracket is None:
        raise ConvergenceError(
            f"No sign change found after {opts.max_expand} bracket expansions",
            params=params,
            inputs=context,
        )

    L, R = bracket
    root, result = _sp_optimize.brentq(
        f,
        L,
        R,
        xtol=opts.x_tol * max(1.0, scale),
        rtol=_RTOL,
        maxiter=opts.max_iter,
        full_output=True,
        disp=False,
    )
    if not result.converged:
        raise ConvergenceError(
            f"Brent iteration did not converge: {result.flag}",
            params=params,
            inputs={**context, "bracket": (L, R), "iterations": result.iterations},
        )
    logger.debug(
        "Brent converged to %r in %d iterations on [%r, %r]", root, result.iterations, L, R
    )
    return float(root)


@dataclass(frozen=True, slots=True)
class QuadratureResult:
    """
    Outcome of :func:`integrate_real_line`.

    Parameters
    ----------
    estimate : float
        Value of the integral.
    residual : float
        Absolute error estimate summed over all pieces.
    messages : tuple[str, ...]
        Diagnostics reported by ``scipy.integrate.quad``; empty when every
        piece converged cleanly.
    """

    estimate: float
    residual: float
    messages: tuple[str, ...] = ()


def integrate_real_line(
    f: ScalarFunc,
    centers: Sequence[float],
    widths: Sequence[float],
    *,
    options: SolverOptions | None = None,
    params: ParameterVector | None = None,
    inputs: Mapping[str, Any] | None = None,
) -> QuadratureResult:
    """
    Integrate ``f`` over the real line with adaptive quadrature.

    The line is split into a central window covering ``center ± 12 * width``
    for every center and the two infinite tails. Inside the window ``quad``
    gets break points at every ``center`` and ``center ± k * width`` for
    ``k`` in 1, 4 and 12, so a narrow feature far from the others is
    never skipped by the adaptive sampling.

    Parameters
    ----------
    f : Callable[[float], float]
        Integrand.
    centers : Sequence[float]
        Locations of the features of ``f`` (e.g. component means).
    widths : Sequence[float]
        Spread of each feature (e.g. component standard deviations).
    options : SolverOptions, optional
        ``quad_limit`` bounds the number of subintervals per piece.
    params, inputs
        Context attached to a :class:`ConvergenceError`.

    Returns
    -------
    QuadratureResult

    Raises
    ------
    ConvergenceError
        If the estimate is not finite.

    Warns
    -----
    IntegrationWarning
        If ``quad`` reported a problem on any piece.
    """
    opts = resolve_options(options)
    lo = min(c - _WINDOW[-1] * w for c, w in zip(centers, widths, strict=True))
    hi = max(c + _WINDOW[-1] * w for c, w in zip(centers, widths, strict=True))
    # a narrow feature far from the others must get its own subintervals
    edges = {
        float(c + sign * k * w)
        for c, w in zip(centers, widths, strict=True)
        for k in (0.0, *_WINDOW)
        for sign in (-1.0, 1.0)
    }
    inner = sorted(p for p in edges if lo < p < hi)

    pieces: list[tuple[float, float, list[float] | None]] = [
        (float("-inf"), lo, None),
        (lo, hi, inner or None),
        (hi, float("inf"), None),
    ]

    estimate = 0.0
    residual = 0.0
    messages: list[str] = []
    for a, b, points in pieces:
        out = _sp_integrate.quad(f, a, b, points=points, limit=opts.quad_limit, full_output=1)
        estimate += float(out[0])
        residual += float(out[1])
        if len(out) > 3:
            messages.append(f"[{a}, {b}]: {out[3]}")

    if not isfinite(estimate):
        raise ConvergenceError(
            "Quadrature produced a non-finite estimate",
            params=params,
            inputs={**(inputs or {}), "residual": residual, "messages": messages},
        )
    if messages:
        warnings.warn(
            "Quadrature reported an unreliable estimate: " + "; ".join(messages),
            IntegrationWarning,
            stacklevel=3,
        )
    logger.debug("Quadrature estimate %r with residual %r", estimate, residual)
    return QuadratureResult(estimate=estimate, residual=residual, messages=tuple(messages))


__all__ = [
    "num_derivative",
    "newton_root",
    "expand_bracket",
    "bracketed_root",
    "QuadratureResult",
    "integrate_real_line",
]
