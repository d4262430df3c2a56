"""Capability ("responds to") constraints."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint
from verity.errors import Errors


class Signature(Constraint):
    """Asserts that the value exposes every one of the expected attributes.

    The negated form is stricter than ``not matches``: it requires the value
    to expose none of the expected attributes.
    """

    NEGATED_TYPE = "verity.constraints.has_methods"
    TYPE = "verity.constraints.does_not_have_methods"

    def __init__(self, *expected_methods: str, **options: Any) -> None:
        if not expected_methods:
            raise ValueError("expected methods can't be blank")
        if not all(isinstance(name, str) and name for name in expected_methods):
            raise ValueError("expected method must be a non-empty string")
        super().__init__(expected_methods=tuple(expected_methods), **options)

    @property
    def expected_methods(self) -> tuple[str, ...]:
        return self._options["expected_methods"]

    def missing_methods(self, actual: Any) -> list[str]:
        """List the expected attributes the value does not expose."""
        return [name for name in self.expected_methods if not hasattr(actual, name)]

    def matches(self, actual: Any) -> bool:
        return not self.missing_methods(actual)

    def does_not_match(self, actual: Any) -> bool:
        return self.missing_methods(actual) == list(self.expected_methods)

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(
            self.type,
            message=self.message,
            methods=list(self.expected_methods),
            missing=self.missing_methods(actual),
        )

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(
            self.negated_type,
            message=self.negated_message,
            methods=list(self.expected_methods),
            missing=self.missing_methods(actual),
        )


class TupleSignature(Signature):
    """Duck type for indexed, iterable, sized values."""

    EXPECTED_METHODS = ("__getitem__", "__iter__", "__len__")

    def __init__(self, **options: Any) -> None:
        super().__init__(*self.EXPECTED_METHODS, **options)


class MapSignature(Signature):
    """Duck type for key-indexed, iterable values with keys()."""

    EXPECTED_METHODS = ("__getitem__", "__iter__", "keys")

    def __init__(self, **options: Any) -> None:
        super().__init__(*self.EXPECTED_METHODS, **options)
