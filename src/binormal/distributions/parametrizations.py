"""
Parameter value types with declarative constraints.

This module provides the base class used by the Gaussian component and the
mixture itself: parameters live in a frozen dataclass, are coerced to real
scalars on construction, and are validated against methods marked with
:func:`constraint`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import dataclasses
from abc import ABC
from dataclasses import dataclass, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec, TypeVar, dataclass_transform

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Abstract base class for real-valued parametrizations.

    Subclasses are turned into frozen dataclasses by :func:`parametrization`.
    On construction every ``init`` field is coerced to ``float`` and all
    constraints are checked, so an invalid instance never escapes.
    """

    # These attributes are set by the @parametrization decorator
    __param_name__: ClassVar[str]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):  # type: ignore[arg-type]
            if f.init:
                object.__setattr__(self, f.name, float(getattr(self, f.name)))
        self.validate()

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, float]:
        """Get constructor parameters as a dictionary."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)  # type: ignore[arg-type]
            if f.init
        }

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        ValueError
            If any constraint is not satisfied.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise ValueError(
                    f'Constraint "{constraint.description}" does not hold for {self.parameters}'
                )


P = ParamSpec("P")
T = TypeVar("T", bound="Parametrization")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.

    Notes
    -----
    The decorated function must be a predicate returning bool.
    Sets marker attributes on the function:
    - __is_constraint: True
    - __constraint_description: description
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


@dataclass_transform(frozen_default=True)
def parametrization(*, name: str) -> Callable[[type[T]], type[T]]:
    """
    Decorator to turn a class into a validated parametrization.

    Parameters
    ----------
    name : str
        Name of the parametrization.

    Returns
    -------
    Callable[[type[T]], type[T]]
        Class decorator.

    Notes
    -----
    Automatically converts the class to a frozen dataclass if not already one.
    Collects constraint methods marked with @constraint, including those
    inherited from parametrization base classes.
    """

    def _collect_constraints(
        cls: type[Parametrization],
    ) -> list[ParametrizationConstraint]:
        """Collect constraint methods from the class and its bases."""
        constraints: list[ParametrizationConstraint] = []
        seen: set[str] = set()
        for klass in cls.__mro__:
            for attr_name, attr in klass.__dict__.items():
                if attr_name in seen:
                    continue
                if isinstance(attr, (staticmethod, classmethod)) and getattr(
                    attr.__func__, "__is_constraint", False
                ):
                    raise TypeError(f"@constraint '{attr_name}' must be an instance method")

                func = attr if callable(attr) and isfunction(attr) else None
                if not func:
                    continue
                seen.add(attr_name)
                if getattr(func, "__is_constraint", False):
                    desc = getattr(func, "__constraint_description", func.__name__)
                    constraints.append(ParametrizationConstraint(description=desc, check=func))
        return constraints

    def decorator(cls: type[T]) -> type[T]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)
        return cls

    return decorator


__all__ = [
    "Parametrization",
    "ParametrizationConstraint",
    "constraint",
    "parametrization",
]
