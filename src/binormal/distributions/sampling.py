"""
Sampling Interfaces
===================

Sample containers produced by :meth:`BiNormal.sample` and accepted by the
moment and fitting routines, plus the helper that flattens any accepted
sample into a 1D float array.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


@runtime_checkable
class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container.

    Stores univariate samples as a 2D floating-point array of shape ``(n, 1)``.

    Parameters
    ----------
    data : numpy.ndarray
        2D floating-point array of shape ``(n, 1)``.

    Raises
    ------
    ValueError
        If data is not 2D with a single column.
    """

    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        if data.ndim != 2 or data.shape[1] != 1:
            raise ValueError("ArraySample expects 2D array of shape (n, 1).")
        self.data = data

    @classmethod
    def from_values(cls, values: npt.ArrayLike) -> ArraySample:
        """Build a sample from any 1D array-like of draws."""
        return cls(np.asarray(values, dtype=np.float64).reshape(-1, 1))

    def __len__(self) -> int:
        """Return the number of samples (n)."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[float]:
        """Iterate over the drawn values."""
        for value in self.data[:, 0]:
            yield float(value)

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n, 1)."""
        n, d = self.data.shape
        return int(n), int(d)


def as_1d_array(sample: Sample | npt.ArrayLike) -> npt.NDArray[np.float64]:
    """
    Flatten a sample into a 1D ``float64`` array.

    Parameters
    ----------
    sample : Sample or array-like
        A :class:`Sample` container or any array-like of scalars.

    Returns
    -------
    numpy.ndarray
        1D array of the sample values.

    Raises
    ------
    ValueError
        If the values are not finite or the input is multi-column.
    """
    arr = np.asarray(sample.array if isinstance(sample, Sample) else sample, dtype=np.float64)
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr[:, 0]
    elif arr.ndim > 1:
        raise ValueError(f"Expected a univariate sample, got array of shape {arr.shape}.")
    arr = np.atleast_1d(arr)
    if not np.all(np.isfinite(arr)):
        raise ValueError("Sample contains non-finite values.")
    return arr
