"""Equality and identity constraints."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint


class Equality(Constraint):
    """Asserts that the value is equal to the expected value."""

    NEGATED_TYPE = "verity.constraints.is_equal_to"
    TYPE = "verity.constraints.is_not_equal_to"

    def __init__(self, expected_value: Any, **options: Any) -> None:
        super().__init__(expected_value=expected_value, **options)

    @property
    def expected_value(self) -> Any:
        return self._options["expected_value"]

    def matches(self, actual: Any) -> bool:
        return bool(self.expected_value == actual)


class Identity(Constraint):
    """Asserts that the value is the expected object (``is``)."""

    NEGATED_TYPE = "verity.constraints.is_value"
    TYPE = "verity.constraints.is_not_value"

    def __init__(self, expected_value: Any, **options: Any) -> None:
        super().__init__(expected_value=expected_value, **options)

    @property
    def expected_value(self) -> Any:
        return self._options["expected_value"]

    def matches(self, actual: Any) -> bool:
        return actual is self.expected_value
