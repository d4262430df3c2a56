"""Contracts mapping constraints onto properties of the evaluated value."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint
from verity.contracts.base import BaseContract
from verity.errors import Errors

_MISSING = object()


def _property_path(property: Any) -> tuple[Any, ...]:
    if isinstance(property, (list, tuple)):
        return tuple(property)
    return (property,)


class PropertyContract(BaseContract):
    """Contract whose definitions can target a nested attribute.

    A definition registered with ``property="name"`` or
    ``property=["manufacturer", "factory", "address"]`` is evaluated against
    that attribute (None if any step of the path is missing), and its errors
    are reported at ``property_name`` if given, else at the path itself.
    """

    def _validate_property(self, property: Any = None, property_type: Any = None, **options: Any) -> None:
        if property is None or property_type is not None:
            return

        path = _property_path(property)
        if not path:
            raise ValueError("property can't be empty")
        for step in path:
            if not isinstance(step, str) or not step:
                raise ValueError(f"invalid property {property!r}: each step must be a non-empty string")

    def _map_value(self, actual: Any, **options: Any) -> Any:
        property = options.get("property")
        if property is None or options.get("property_type") is not None:
            return super()._map_value(actual, **options)

        value = actual
        for step in _property_path(property):
            value = getattr(value, step, _MISSING)
            if value is _MISSING:
                return None
        return value

    def _map_errors(self, errors: Errors, **options: Any) -> Errors:
        name = options.get("property_name", options.get("property"))
        if name is None:
            return super()._map_errors(errors, **options)
        if isinstance(name, (list, tuple)):
            return errors.dig(*name)
        return errors[name]


class Contract(PropertyContract):
    """General purpose contract, with constraints on the value or its attributes.

    Example:
        contract = Contract()
        contract.add_constraint(Presence())
        contract.add_property_constraint("name", StringType())
        contract.add_property_constraint(["owner", "email"], Format("@"))
    """

    def add_property_constraint(
        self,
        property: Any,
        constraint: Constraint,
        sanity: bool = False,
        **options: Any,
    ) -> Contract:
        """Register a constraint on an attribute, or a path of attributes."""
        self.add_constraint(constraint, sanity=sanity, property=property, **options)
        return self
