"""
BiNormal
========

Two-component Gaussian mixture ``λ N(μ₁, σ₁) + (1 - λ) N(μ₂, σ₂)`` with
closed-form moments, numerically solved quantiles, median and entropy, sample
moments, and maximum-likelihood fitting.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from importlib.metadata import version

from .config import *
from .config import __all__ as _config_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .fitting import *
from .fitting import __all__ as _fitting_all
from .stats import *
from .stats import __all__ as _stats_all
from .types import *
from .types import __all__ as _types_all

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = version("binormal")
__all__ = [
    "__version__",
    *_config_all,
    *_distr_all,
    *_errors_all,
    *_fitting_all,
    *_stats_all,
    *_types_all,
]

del _config_all
del _distr_all
del _errors_all
del _fitting_all
del _stats_all
del _types_all
