"""
Errors and Warnings
===================

Exceptions raised by the BiNormal functionals and fitting routines.

All failures carry the mixture parameters ``(λ, μ₁, σ₁, μ₂, σ₂)`` that were
in use, so a caller can reproduce the failing computation.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from binormal.types import ParameterVector


class ConvergenceError(RuntimeError):
    """
    Raised when an iterative numerical procedure does not converge.

    Covers quantile and median root finding, entropy quadrature and
    likelihood maximisation.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    params : tuple of float, optional
        Mixture parameters in constructor order.
    inputs : Mapping[str, Any], optional
        Inputs of the failed computation (e.g. ``{"q": 0.3, "x0": 1.2}``).
    """

    def __init__(
        self,
        message: str,
        *,
        params: ParameterVector | None = None,
        inputs: Mapping[str, Any] | None = None,
    ) -> None:
        self.params = params
        self.inputs = dict(inputs) if inputs is not None else {}
        details = []
        if params is not None:
            details.append(f"params={params}")
        if self.inputs:
            details.append(", ".join(f"{k}={v!r}" for k, v in self.inputs.items()))
        super().__init__(f"{message} ({'; '.join(details)})" if details else message)


class UnsupportedMomentOrderError(NotImplementedError):
    """
    Raised when a raw moment is requested for an order without a closed form.

    Parameters
    ----------
    order : int
        The requested moment order.
    supported : range
        Orders for which closed forms are available.
    """

    def __init__(self, order: int, supported: range) -> None:
        self.order = order
        self.supported = supported
        super().__init__(
            f"Raw moment of order {order} is not supported; "
            f"available orders are {supported.start}..{supported.stop - 1}."
        )


class NumericalInstabilityError(ArithmeticError):
    """
    Raised when the mixture density vanishes numerically at a sample point,
    so that responsibility ratios would divide by (almost) zero.

    Parameters
    ----------
    message : str
        Human-readable description of the failure.
    params : tuple of float
        Mixture parameters in constructor order.
    """

    def __init__(self, message: str, *, params: ParameterVector) -> None:
        self.params = params
        super().__init__(f"{message} (params={params})")


class PrimaryComponentWarning(UserWarning):
    """Issued when ``λ < 1/2``, i.e. the first component is not the dominant one."""


class IntegrationWarning(UserWarning):
    """Issued when adaptive quadrature reports an unreliable estimate."""


__all__ = [
    "ConvergenceError",
    "UnsupportedMomentOrderError",
    "NumericalInstabilityError",
    "PrimaryComponentWarning",
    "IntegrationWarning",
]
