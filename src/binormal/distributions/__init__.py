"""
Distributions subpackage

The bi-normal mixture and the pieces it is built from:

- the Gaussian component (:mod:`.normal`);
- the mixture itself (:mod:`.binormal`);
- validated parameter records (:mod:`.parametrizations`);
- sampling protocol and array-backed samples (:mod:`.sampling`);
- root finding and quadrature adapters (:mod:`.solvers`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .binormal import BiNormal, QuantileMethod, SamplingMethod
from .normal import SUPPORTED_MOMENT_ORDERS, Normal
from .parametrizations import (
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)
from .sampling import ArraySample, Sample
from .support import REAL_LINE, ContinuousSupport

__all__ = [
    # models
    "BiNormal",
    "Normal",
    "SUPPORTED_MOMENT_ORDERS",
    "SamplingMethod",
    "QuantileMethod",
    # parametrizations
    "Parametrization",
    "ParametrizationConstraint",
    "constraint",
    "parametrization",
    # sampling
    "Sample",
    "ArraySample",
    # support
    "ContinuousSupport",
    "REAL_LINE",
]
