from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import pytest

from binormal import (
    BiNormal,
    Parametrization,
    ParametrizationConstraint,
    constraint,
    parametrization,
)


@parametrization(name="interval")
class Interval(Parametrization):
    low: float
    high: float

    @constraint(description="low < high")
    def check_ordered(self) -> bool:
        return self.low < self.high


@parametrization(name="unitInterval")
class UnitInterval(Interval):
    @constraint(description="0 <= low")
    def check_low_nonnegative(self) -> bool:
        return self.low >= 0

    @constraint(description="high <= 1")
    def check_high_at_most_one(self) -> bool:
        return self.high <= 1


class TestParametrizationAPI:
    def test_constraint_is_a_simple_holder(self) -> None:
        def is_positive(obj: object) -> bool:
            return getattr(obj, "value", 0) > 0

        c = ParametrizationConstraint(description="Value must be positive", check=is_positive)
        assert c.description == "Value must be positive"
        assert c.check is is_positive

    def test_constraint_decorator_marks_function(self) -> None:
        @constraint("Value must be positive")
        def check_positive(self: Any) -> bool:
            return getattr(self, "value", 0) > 0

        assert getattr(check_positive, "__is_constraint", False) is True
        assert getattr(check_positive, "__constraint_description", None) == "Value must be positive"
        assert check_positive.__name__ == "check_positive"

    def test_decorated_class_is_a_frozen_dataclass(self) -> None:
        obj = Interval(low=1, high=2.5)

        assert obj.name == "interval"
        assert obj.parameters == {"low": 1.0, "high": 2.5}
        assert hasattr(Interval, "__dataclass_fields__")
        with pytest.raises(AttributeError):
            obj.low = 0.0  # type: ignore[misc]

    def test_violated_constraint_names_the_parameters(self) -> None:
        with pytest.raises(ValueError, match='"low < high" does not hold') as excinfo:
            Interval(low=3.0, high=2.0)
        assert "'low': 3.0" in str(excinfo.value)

    def test_constraints_are_inherited(self) -> None:
        descriptions = {c.description for c in UnitInterval(0.2, 0.8).constraints}
        assert descriptions == {"low < high", "0 <= low", "high <= 1"}

        with pytest.raises(ValueError, match="low < high"):
            UnitInterval(0.8, 0.2)
        with pytest.raises(ValueError, match="high <= 1"):
            UnitInterval(0.2, 1.8)

    def test_static_constraint_is_rejected(self) -> None:
        with pytest.raises(TypeError, match="must be an instance method"):

            @parametrization(name="broken")
            class Broken(Parametrization):
                value: float

                @staticmethod
                @constraint("value > 0")
                def check_positive() -> bool:
                    return True

    def test_derived_fields_are_not_parameters(self, bimodal: BiNormal) -> None:
        assert set(bimodal.parameters) == {"lam", "mu1", "sigma1", "mu2", "sigma2"}
