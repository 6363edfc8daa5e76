"""
Peak detection on signals and kernel density estimates.

Used to locate the modes of a sample before fitting a mixture to it.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
import logging
import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.signal import find_peaks, peak_prominences
from scipy.stats import gaussian_kde

from binormal.config import resolve_options
from binormal.distributions.sampling import as_1d_array

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from binormal.config import SolverOptions
    from binormal.distributions.sampling import Sample
    from binormal.types import FloatArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Peaks:
    """
    Local maxima ranked by prominence, as parallel arrays.

    Parameters
    ----------
    indices : numpy.ndarray
        Positions of the maxima in the evaluated signal.
    heights : numpy.ndarray
        Signal values at the maxima.
    prominences : numpy.ndarray
        Prominence of each maximum, in descending order.
    locations : numpy.ndarray
        Abscissae of the maxima: grid points for :func:`kdemaxes`, the
        indices themselves for :func:`maxes`.
    """

    indices: npt.NDArray[np.intp]
    heights: FloatArray
    prominences: FloatArray
    locations: FloatArray

    def __len__(self) -> int:
        return int(self.indices.size)


def maxes(signal: npt.ArrayLike, n: int | None = None) -> Peaks:
    """
    Local maxima of a 1D signal, sorted by descending prominence.

    The prominence of a peak is its height above the higher of the two minima
    separating it from a taller peak (or from the signal ends). Peaks with
    equal prominence keep their left-to-right order.

    Parameters
    ----------
    signal : array-like
        1D signal.
    n : int, optional
        Maximum number of peaks to return; all peaks when omitted.

    Returns
    -------
    Peaks

    Raises
    ------
    ValueError
        If the signal is not 1D or ``n`` is negative.
    """
    values = np.asarray(signal, dtype=np.float64)
    if values.ndim != 1:
        raise ValueError(f"Expected a 1D signal, got array of shape {values.shape}.")
    limit = None if n is None else operator.index(n)
    if limit is not None and limit < 0:
        raise ValueError(f"Number of peaks must be non-negative, got {limit}")

    indices, _ = find_peaks(values)
    prominences = (
        peak_prominences(values, indices)[0] if indices.size else np.empty(0, dtype=np.float64)
    )

    order = np.argsort(-prominences, kind="stable")[:limit]
    indices = indices[order]
    return Peaks(
        indices=indices,
        heights=values[indices],
        prominences=np.asarray(prominences[order], dtype=np.float64),
        locations=indices.astype(np.float64),
    )


def kdemaxes(
    sample: Sample | npt.ArrayLike,
    n: int | None = None,
    *,
    npoints: int | None = None,
    bw_method: Any = None,
    options: SolverOptions | None = None,
) -> Peaks:
    """
    Modes of a Gaussian kernel density estimate of ``sample``.

    The estimate is evaluated on ``npoints`` evenly spaced points
    spanning the sample range padded by three bandwidths, and its maxima are
    ranked with :func:`maxes`.

    Parameters
    ----------
    sample : Sample or array-like
        Univariate sample.
    n : int, optional
        Maximum number of peaks to return; all peaks when omitted.
    npoints : int, optional
        Grid size; defaults to ``options.kde_points``.
    bw_method : str, float or callable, optional
        Bandwidth rule passed to :class:`scipy.stats.gaussian_kde`.
    options : SolverOptions, optional
        ``kde_points`` is the default grid size.

    Returns
    -------
    Peaks
        With ``locations`` holding the grid abscissae of the modes and
        ``heights`` the estimated densities there.

    Raises
    ------
    ValueError
        If the sample has fewer than two distinct values or ``npoints < 3``.
    """
    opts = resolve_options(options)
    size = opts.kde_points if npoints is None else operator.index(npoints)
    if size < 3:
        raise ValueError(f"KDE grid needs at least 3 points, got {size}")
    x = as_1d_array(sample)
    if np.unique(x).size < 2:
        raise ValueError("Kernel density estimation needs at least two distinct values.")

    kde = gaussian_kde(x, bw_method=bw_method)
    bandwidth = float(np.sqrt(kde.covariance[0, 0]))
    grid = np.linspace(x.min() - 3 * bandwidth, x.max() + 3 * bandwidth, size)
    density = kde(grid)

    peaks = maxes(density, n)
    logger.debug("KDE with bandwidth %r has modes at %r", bandwidth, grid[peaks.indices])
    return dataclasses.replace(peaks, locations=grid[peaks.indices])


__all__ = ["Peaks", "maxes", "kdemaxes"]
