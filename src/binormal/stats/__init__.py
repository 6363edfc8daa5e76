"""
Sample statistics subpackage

Raw and central moments of univariate samples (:mod:`.moments`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .moments import centralmoments, moments

__all__ = ["moments", "centralmoments"]
