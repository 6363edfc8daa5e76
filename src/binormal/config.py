"""
Numerical Options
=================

Tolerances and iteration bounds shared by the root-finding, quadrature and
fitting routines.

Notes
-----
- Options are immutable; derive variants with :meth:`SolverOptions.replace`.
- Every routine that iterates accepts ``options=None`` and falls back to
  :data:`DEFAULT_OPTIONS`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class SolverOptions:
    """
    Numeric knobs for the BiNormal solvers.

    Parameters
    ----------
    x_tol : float, default 1e-12
        Absolute tolerance in ``x`` for root finding.
    max_iter : int, default 100
        Maximum iterations for Newton and Brent refinements.
    derivative_step : float, default 1e-5
        Step of the 5-point stencil used for numeric derivatives.
    init_step : float, default 1.0
        Initial half-width of a search bracket, in units of the mixture
        standard deviation.
    expand_factor : float, default 2.0
        Multiplicative factor for exponential bracket growth.
    max_expand : int, default 60
        Maximum bracket expansions before giving up.
    quad_limit : int, default 200
        Subinterval limit passed to ``scipy.integrate.quad``.
    min_density : float, default ``np.finfo(float).tiny``
        Smallest mixture density accepted when forming responsibilities.
    kde_points : int, default 512
        Number of grid points on which kernel density estimates are evaluated.
    """

    x_tol: float = 1e-12
    max_iter: int = 100
    derivative_step: float = 1e-5
    init_step: float = 1.0
    expand_factor: float = 2.0
    max_expand: int = 60
    quad_limit: int = 200
    min_density: float = float(np.finfo(float).tiny)
    kde_points: int = 512

    def __post_init__(self) -> None:
        if not self.x_tol > 0:
            raise ValueError("x_tol must be positive.")
        if self.max_iter < 1 or self.max_expand < 1:
            raise ValueError("max_iter and max_expand must be at least 1.")
        if not self.derivative_step > 0 or not self.init_step > 0:
            raise ValueError("derivative_step and init_step must be positive.")
        if not self.expand_factor > 1:
            raise ValueError("expand_factor must be greater than 1.")
        if self.quad_limit < 1:
            raise ValueError("quad_limit must be at least 1.")
        if not self.min_density > 0:
            raise ValueError("min_density must be positive.")
        if self.kde_points < 3:
            raise ValueError("kde_points must be at least 3 to locate interior maxima.")

    def replace(self, **changes: Any) -> SolverOptions:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)


DEFAULT_OPTIONS = SolverOptions()
"""Options used when a routine is called without explicit ``options``."""


def resolve_options(options: SolverOptions | None) -> SolverOptions:
    """Return ``options`` or :data:`DEFAULT_OPTIONS` when ``None``."""
    return DEFAULT_OPTIONS if options is None else options


__all__ = ["SolverOptions", "DEFAULT_OPTIONS", "resolve_options"]
