"""
Core Type Definitions
=====================

Fundamental types and data structures shared by the BiNormal modules.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from enum import StrEnum
from typing import Any

import numpy as np
from numpy.typing import NDArray

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

ComplexArray = NDArray[np.complexfloating[Any]]
"""Type alias for complex arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for float64 arrays produced by the mixture functionals."""

ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""

ParameterVector = tuple[float, float, float, float, float]
"""Mixture parameters in constructor order ``(λ, μ₁, σ₁, μ₂, σ₂)``."""


class CharacteristicName(StrEnum):
    """
    Characteristics of a ``BiNormal`` that are solved numerically.

    Used to tag a :class:`~binormal.errors.ConvergenceError` with the
    characteristic that was being computed.
    """

    PPF = "ppf"
    MEDIAN = "median"
    ENTROPY = "entropy"

__all__ = [
    "ScalarFunc",
    "BoolArray",
    "ComplexArray",
    "FloatArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "ParameterVector",
    "CharacteristicName",
]
