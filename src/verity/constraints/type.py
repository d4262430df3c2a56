"""Type membership constraint."""

from __future__ import annotations

import builtins
import importlib
from typing import Any

from verity.constraints.base import Constraint
from verity.errors import Errors


def resolve_type(type_or_name: Any) -> type:
    """Resolve a class, or the name of one, to the class itself.

    Names without a dot are looked up in builtins ("str", "int"); dotted
    names are imported ("decimal.Decimal", "collections.abc.Mapping").

    Raises:
        ValueError: If a name cannot be resolved to a class
        TypeError: If the argument is neither a class nor a string
    """
    if isinstance(type_or_name, type):
        return type_or_name

    if not isinstance(type_or_name, str):
        raise TypeError("expected type must be a class or the name of a class")

    module_name, _, attr = type_or_name.rpartition(".")
    try:
        if module_name:
            resolved = getattr(importlib.import_module(module_name), attr)
        else:
            resolved = getattr(builtins, attr)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Unable to resolve type {type_or_name!r}: {e}") from e

    if not isinstance(resolved, type):
        raise ValueError(f"{type_or_name!r} does not name a class")
    return resolved


def resolve_required(
    optional: bool | None = None,
    required: bool | None = None,
    required_by_default: bool = True,
) -> bool:
    """Resolve the optional/required flags to a single ``required`` value.

    Raises:
        ValueError: If a flag is not a bool, or both are given and disagree
    """
    for name, value in (("optional", optional), ("required", required), ("required_by_default", required_by_default)):
        if value is not None and not isinstance(value, bool):
            raise ValueError(f"{name} must be True or False")

    if optional is None and required is None:
        return required_by_default
    if required is None:
        return not optional
    if optional is None:
        return required
    if required == optional:
        raise ValueError("required and optional must match")
    return required


class Type(Constraint):
    """Asserts that the value is an instance of the expected type.

    Args:
        expected_type: A class, or the name of one (resolved immediately)
        optional: If True, None also matches
        required: Inverse of optional; both may not disagree
    """

    NEGATED_TYPE = "verity.constraints.is_type"
    TYPE = "verity.constraints.is_not_type"

    def __init__(
        self,
        expected_type: type | str,
        optional: bool | None = None,
        required: bool | None = None,
        required_by_default: bool = True,
        **options: Any,
    ) -> None:
        super().__init__(
            expected_type=resolve_type(expected_type),
            required=resolve_required(
                optional=optional,
                required=required,
                required_by_default=required_by_default,
            ),
            **options,
        )

    @property
    def expected_type(self) -> type:
        return self._options["expected_type"]

    @property
    def required(self) -> bool:
        return self._options["required"]

    @property
    def optional(self) -> bool:
        return not self._options["required"]

    def matches(self, actual: Any) -> bool:
        return self._matches_type(actual)

    def _matches_type(self, actual: Any) -> bool:
        if actual is None and self.optional:
            return True
        return isinstance(actual, self.expected_type)

    def _error_properties(self) -> dict[str, Any]:
        return {"required": self.required, "type": self.expected_type}

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(self.type, message=self.message, **self._error_properties())

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(self.negated_type, message=self.negated_message, **self._error_properties())
