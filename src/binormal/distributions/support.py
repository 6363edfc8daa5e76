from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import inf
from typing import TYPE_CHECKING, overload

import numpy as np

if TYPE_CHECKING:
    from binormal.types import BoolArray, Number, NumericArray


@dataclass(frozen=True, slots=True)
class ContinuousSupport:
    """
    Open interval ``(left, right)`` on which a distribution has positive density.

    Parameters
    ----------
    left : float, default -inf
    right : float, default inf
    """

    left: float = -inf
    right: float = inf

    def __post_init__(self) -> None:
        if not self.left < self.right:
            raise ValueError(f"Empty support: left={self.left} >= right={self.right}")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """Elementwise membership; ``nan`` is never contained."""
        arr = np.asarray(x)
        inside = (arr > self.left) & (arr < self.right)
        return bool(inside) if arr.ndim == 0 else inside

    def __contains__(self, x: object) -> bool:
        return bool(np.all(self.contains(x)))  # type: ignore[arg-type]


REAL_LINE = ContinuousSupport()
"""Support of every Gaussian mixture: the open real line."""
