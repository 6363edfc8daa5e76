"""
Fitting subpackage

Log-likelihood and its gradient (:mod:`.likelihood`), peak detection for
starting values (:mod:`.peaks`) and maximum-likelihood estimation
(:mod:`.mle`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .likelihood import (
    gradient_loglikelihood,
    gradientLogLikelihood,
    loglikelihood,
    negative_loglikelihood,
)
from .mle import FitResult, fit, initial_parameters
from .peaks import Peaks, kdemaxes, maxes

__all__ = [
    "loglikelihood",
    "gradient_loglikelihood",
    "gradientLogLikelihood",
    "negative_loglikelihood",
    "Peaks",
    "maxes",
    "kdemaxes",
    "FitResult",
    "initial_parameters",
    "fit",
]
