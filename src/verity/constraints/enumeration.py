"""Enumeration membership constraint."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint
from verity.errors import Errors


class Enum(Constraint):
    """Asserts that the value is one of a fixed list of values.

    Hashable values are checked with a set lookup; unhashable expected
    values fall back to an equality scan. Booleans only match booleans, so
    True is not a member of Enum(1, 2) and 0 is not a member of Enum(False).
    """

    NEGATED_TYPE = "verity.constraints.is_in_list"
    TYPE = "verity.constraints.is_not_in_list"

    def __init__(self, first: Any, *rest: Any, **options: Any) -> None:
        expected_values = [first, *rest]
        super().__init__(expected_values=expected_values, **options)

        self._matching_values: set[Any] = set()
        self._unhashable_values: list[Any] = []
        for value in expected_values:
            try:
                self._matching_values.add(_member_key(value))
            except TypeError:
                self._unhashable_values.append(value)

    @property
    def expected_values(self) -> list[Any]:
        return list(self._options["expected_values"])

    def matches(self, actual: Any) -> bool:
        try:
            if _member_key(actual) in self._matching_values:
                return True
        except TypeError:
            pass
        return any(_member_key(actual) == _member_key(value) for value in self._unhashable_values)

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(self.type, message=self.message, values=self.expected_values)

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(self.negated_type, message=self.negated_message, values=self.expected_values)


def _member_key(value: Any) -> tuple[bool, Any]:
    return isinstance(value, bool), value
