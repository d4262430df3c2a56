"""Constraints comparing properties of the same value.

Typical use is a confirmation field: MatchProperty("password",
"password_confirmation") asserts that both keys hold the same value.
Values of properties whose names look sensitive (see
VerityConfig.filter_parameters) are masked in error data.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from verity.config import get_config
from verity.constraints.base import Constraint
from verity.constraints.equality import Equality
from verity.constraints.presence import is_blank
from verity.constraints.signature import Signature
from verity.errors import Errors


def _fetch(actual: Any, name: str) -> Any:
    try:
        return actual[name]
    except (KeyError, IndexError, TypeError):
        return None


def _is_empty(value: Any) -> bool:
    return value is not None and is_blank(value)


class PropertyComparison(Constraint):
    """Shared behavior for constraints comparing properties to a reference.

    Args:
        reference_name: Key of the value the other properties are compared to
        *property_names: Keys of the compared properties
        allow_empty: Skip empty values
        allow_none: Skip None values
    """

    def __init__(
        self,
        reference_name: str,
        *property_names: str,
        allow_empty: bool = False,
        allow_none: bool = False,
        **options: Any,
    ) -> None:
        self._validate_name(reference_name, "reference name")
        if not property_names:
            raise ValueError("property names can't be empty")
        for index, name in enumerate(property_names):
            self._validate_name(name, f"property name at {index}")

        super().__init__(
            reference_name=reference_name,
            property_names=tuple(property_names),
            allow_empty=bool(allow_empty),
            allow_none=bool(allow_none),
            **options,
        )

    @property
    def reference_name(self) -> str:
        return self._options["reference_name"]

    @property
    def property_names(self) -> tuple[str, ...]:
        return self._options["property_names"]

    @property
    def allow_empty(self) -> bool:
        return self._options["allow_empty"]

    @property
    def allow_none(self) -> bool:
        return self._options["allow_none"]

    def _can_match_properties(self, actual: Any) -> bool:
        return hasattr(actual, "__getitem__")

    def _each_property(self, actual: Any) -> Iterator[tuple[str, Any]]:
        for name in self.property_names:
            yield name, _fetch(actual, name)

    def _expected_value(self, actual: Any) -> Any:
        return _fetch(actual, self.reference_name)

    def _skip_property(self, value: Any) -> bool:
        return (self.allow_empty and _is_empty(value)) or (self.allow_none and value is None)

    def _filtered(self, value: Any) -> Any:
        config = get_config()
        if config.is_filtered(self.reference_name, *self.property_names):
            return config.filtered_value
        return value

    def _invalid_object_errors(self, errors: Errors) -> Errors:
        return errors.add(Signature.TYPE, methods=["__getitem__"], missing=["__getitem__"])

    def _generic_errors(self, errors: Errors) -> Errors:
        return errors.add(Constraint.NEGATED_TYPE)

    @staticmethod
    def _validate_name(name: Any, as_: str) -> None:
        if not isinstance(name, str):
            raise ValueError(f"{as_} must be a string")
        if not name:
            raise ValueError(f"{as_} can't be blank")


class MatchProperty(PropertyComparison):
    """Asserts that each named property equals the reference property."""

    NEGATED_TYPE = Equality.NEGATED_TYPE
    TYPE = Equality.TYPE

    def matches(self, actual: Any) -> bool:
        if not self._can_match_properties(actual):
            return False
        expected = self._expected_value(actual)
        if self._skip_property(expected):
            return True
        return not self._non_matching_properties(actual, expected)

    def does_not_match(self, actual: Any) -> bool:
        if not self._can_match_properties(actual):
            return False
        expected = self._expected_value(actual)
        if self._skip_property(expected):
            return False
        return not self._matching_properties(actual, expected)

    def _value_matches(self, expected: Any, value: Any) -> bool:
        return self._skip_property(value) or value == expected

    def _matching_properties(self, actual: Any, expected: Any) -> list[tuple[str, Any]]:
        return [(n, v) for n, v in self._each_property(actual) if self._value_matches(expected, v)]

    def _non_matching_properties(self, actual: Any, expected: Any) -> list[tuple[str, Any]]:
        return [(n, v) for n, v in self._each_property(actual) if not self._value_matches(expected, v)]

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not self._can_match_properties(actual):
            return self._invalid_object_errors(errors)

        expected = self._expected_value(actual)
        for name, value in self._non_matching_properties(actual, expected):
            errors[name].add(
                self.type,
                message=self.message,
                expected=self._filtered(expected),
                actual=self._filtered(value),
            )
        return errors

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not self._can_match_properties(actual):
            return self._invalid_object_errors(errors)

        matching = self._matching_properties(actual, self._expected_value(actual))
        if not matching:
            return self._generic_errors(errors)
        for name, _ in matching:
            errors[name].add(self.negated_type, message=self.negated_message)
        return errors


class DoNotMatchProperty(PropertyComparison):
    """Asserts that no named property equals the reference property."""

    NEGATED_TYPE = Equality.TYPE
    TYPE = Equality.NEGATED_TYPE

    def matches(self, actual: Any) -> bool:
        if not self._can_match_properties(actual):
            return False
        expected = self._expected_value(actual)
        if self._skip_property(expected):
            return True
        return not self._matching_properties(actual, expected)

    def does_not_match(self, actual: Any) -> bool:
        if not self._can_match_properties(actual):
            return False
        expected = self._expected_value(actual)
        if self._skip_property(expected):
            return False
        return not self._non_matching_properties(actual, expected, include_all=True)

    def _matching_properties(self, actual: Any, expected: Any, include_all: bool = False) -> list[tuple[str, Any]]:
        return [
            (name, value)
            for name, value in self._each_property(actual)
            if (include_all or not self._skip_property(value)) and value == expected
        ]

    def _non_matching_properties(self, actual: Any, expected: Any, include_all: bool = False) -> list[tuple[str, Any]]:
        return [
            (name, value)
            for name, value in self._each_property(actual)
            if (include_all or not self._skip_property(value)) and value != expected
        ]

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not self._can_match_properties(actual):
            return self._invalid_object_errors(errors)

        matching = self._matching_properties(actual, self._expected_value(actual))
        if not matching:
            return self._generic_errors(errors)
        for name, _ in matching:
            errors[name].add(self.type, message=self.message)
        return errors

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not self._can_match_properties(actual):
            return self._invalid_object_errors(errors)

        expected = self._expected_value(actual)
        non_matching = self._non_matching_properties(actual, expected, include_all=True)
        if not non_matching:
            return self._generic_errors(errors)
        for name, value in non_matching:
            errors[name].add(
                self.negated_type,
                message=self.negated_message,
                expected=self._filtered(expected),
                actual=self._filtered(value),
            )
        return errors
