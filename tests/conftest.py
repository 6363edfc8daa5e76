from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from collections.abc import Generator
from typing import Any

import numpy as np
import pytest

from binormal import BiNormal, PrimaryComponentWarning


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random source so that Monte Carlo checks are reproducible."""
    return np.random.default_rng(20240917)


@pytest.fixture
def symmetric() -> BiNormal:
    """Mixture of two identical standard normals."""
    return BiNormal(0.7, 0.0, 1.0, 0.0, 1.0)


@pytest.fixture
def bimodal() -> BiNormal:
    """Well-separated mixture with a dominant left component."""
    return BiNormal(0.7, -2.0, 1.0, 3.0, 0.5)


@pytest.fixture
def quiet_primary_warning() -> Generator[None, Any, None]:
    """Silence the λ < 1/2 warning for tests that construct such mixtures on purpose."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", PrimaryComponentWarning)
        yield
