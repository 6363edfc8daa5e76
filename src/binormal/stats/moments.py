"""
Sample moments used to compare data with the mixture's closed forms.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import operator
from typing import TYPE_CHECKING

import numpy as np

from binormal.distributions.sampling import as_1d_array

if TYPE_CHECKING:
    import numpy.typing as npt

    from binormal.distributions.sampling import Sample
    from binormal.types import FloatArray


def _prepare(sample: Sample | npt.ArrayLike, n: int) -> tuple[FloatArray, int]:
    order = operator.index(n)
    if order < 1:
        raise ValueError(f"Number of moments must be at least 1, got {order}")
    x = as_1d_array(sample)
    if x.size == 0:
        raise ValueError("Moments of an empty sample are undefined.")
    return x, order


def moments(sample: Sample | npt.ArrayLike, n: int) -> FloatArray:
    r"""
    First ``n`` raw sample moments :math:`⟨x^k⟩`, :math:`k = 1, \dots, n`.

    Parameters
    ----------
    sample : Sample or array-like
        Univariate sample.
    n : int
        Number of moments, ``n >= 1``.

    Returns
    -------
    FloatArray
        Array of length ``n`` whose ``k-1``-th entry is ``mean(x**k)``.

    Raises
    ------
    ValueError
        If ``n < 1`` or the sample is empty.
    """
    x, order = _prepare(sample, n)
    return np.array([np.mean(x**k) for k in range(1, order + 1)], dtype=np.float64)


def centralmoments(sample: Sample | npt.ArrayLike, n: int) -> FloatArray:
    r"""
    First ``n`` central sample moments :math:`⟨(x - \bar x)^k⟩`.

    The ``k = 1`` entry is exactly ``0.0`` (the first central moment of any
    sample), not the sample mean.

    Parameters
    ----------
    sample : Sample or array-like
        Univariate sample.
    n : int
        Number of moments, ``n >= 1``.

    Returns
    -------
    FloatArray
        Array of length ``n``.

    Raises
    ------
    ValueError
        If ``n < 1`` or the sample is empty.
    """
    x, order = _prepare(sample, n)
    deviations = x - np.mean(x)
    result = np.array([np.mean(deviations**k) for k in range(1, order + 1)], dtype=np.float64)
    result[0] = 0.0
    return result


__all__ = ["moments", "centralmoments"]
