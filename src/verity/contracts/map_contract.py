"""Contracts for record-shaped mappings."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint
from verity.constraints.hashes import ExtraKeys, IndifferentExtraKeys, IndifferentKey, indifferent_variants
from verity.constraints.signature import MapSignature
from verity.constraints.types import DictType
from verity.contracts.property_contract import PropertyContract
from verity.errors import Errors

KEY = "key"

_MISSING = object()


class MapContract(PropertyContract):
    """Contract for mappings with a constraint per key.

    The value must support ``[]``, iteration and ``keys()``. Unless
    ``allow_extra_keys`` is True, keys without a key constraint fail with an
    extra-key record at that key. The expected key set is read from the
    contract's key definitions at evaluation time, so keys registered after
    construction (or on an included contract) are honored.

    Example:
        contract = MapContract()
        contract.add_key_constraint("a", Presence())
        contract.add_key_constraint("b", Presence())

        contract.matches({"a": 1, "b": 2})          # True
        contract.matches({"a": 1, "b": 2, "c": 3})  # False, extra key at ["c"]
    """

    FROZEN_OPTIONS = ("allow_extra_keys",)

    def __init__(self, allow_extra_keys: bool = False, **options: Any) -> None:
        super().__init__(allow_extra_keys=bool(allow_extra_keys), **options)

    @property
    def allow_extra_keys(self) -> bool:
        return bool(self._options.get("allow_extra_keys"))

    def expected_keys(self) -> list[Any]:
        """Keys targeted by key definitions, in registration order."""
        keys = []
        for definition in self.each_definition():
            if definition.options.get("property_type") != KEY:
                continue
            if definition.property not in keys:
                keys.append(definition.property)
        return keys

    def add_key_constraint(
        self,
        key: Any,
        constraint: Constraint,
        sanity: bool = False,
        **options: Any,
    ) -> MapContract:
        """Register a constraint on the value at the given key."""
        self.add_constraint(constraint, sanity=sanity, property=key, property_type=KEY, **options)
        return self

    def _define_constraints(self) -> None:
        self._add_type_constraint()
        self._add_extra_keys_constraint()

    def _add_type_constraint(self) -> None:
        self.add_constraint(MapSignature(), sanity=True)

    def _add_extra_keys_constraint(self) -> None:
        if self.allow_extra_keys:
            return
        self.add_constraint(ExtraKeys(self.expected_keys))

    def _validate_property(self, property: Any = None, property_type: Any = None, **options: Any) -> None:
        if property_type != KEY:
            return super()._validate_property(property=property, property_type=property_type, **options)
        try:
            hash(property)
        except TypeError:
            raise ValueError(f"key must be hashable, got {property!r}") from None

    def _map_value(self, actual: Any, **options: Any) -> Any:
        if options.get("property_type") != KEY:
            return super()._map_value(actual, **options)
        value = self._fetch(actual, options["property"])
        return None if value is _MISSING else value

    def _map_errors(self, errors: Errors, **options: Any) -> Errors:
        if options.get("property_type") != KEY:
            return super()._map_errors(errors, **options)
        return errors[options.get("property_name", options["property"])]

    def _fetch(self, actual: Any, key: Any) -> Any:
        try:
            return actual[key]
        except (KeyError, IndexError, TypeError):
            return _MISSING


class DictContract(MapContract):
    """MapContract for dicts, optionally constraining every key and value.

    The sanity check is a strict DictType, so other mapping types do not
    match.

    Args:
        key_type: Class, class name or constraint every key must match
        value_type: Class, class name or constraint every value must match
        allow_extra_keys: If True, keys without a key constraint are allowed
    """

    FROZEN_OPTIONS = ("allow_extra_keys", "key_type", "value_type")

    def __init__(
        self,
        key_type: Any = None,
        value_type: Any = None,
        allow_extra_keys: bool = False,
        **options: Any,
    ) -> None:
        super().__init__(
            allow_extra_keys=allow_extra_keys,
            key_type=key_type,
            value_type=value_type,
            **options,
        )

    @property
    def key_type(self) -> Any:
        return self._options.get("key_type")

    @property
    def value_type(self) -> Any:
        return self._options.get("value_type")

    def _add_type_constraint(self) -> None:
        self.add_constraint(
            DictType(key_type=self.key_type, value_type=self.value_type),
            sanity=True,
        )


class IndifferentDictContract(DictContract):
    """DictContract treating str and bytes spellings of a key as the same key.

    Every key must be a non-empty str or bytes. A key constraint registered
    under "name" reads the value from either ``"name"`` or ``b"name"``.
    """

    def __init__(self, value_type: Any = None, allow_extra_keys: bool = False, **options: Any) -> None:
        super().__init__(
            key_type=IndifferentKey(),
            value_type=value_type,
            allow_extra_keys=allow_extra_keys,
            **options,
        )

    def _add_extra_keys_constraint(self) -> None:
        if self.allow_extra_keys:
            return
        self.add_constraint(IndifferentExtraKeys(self.expected_keys))

    def _fetch(self, actual: Any, key: Any) -> Any:
        for variant in indifferent_variants(key):
            value = super()._fetch(actual, variant)
            if value is not _MISSING:
                return value
        return _MISSING
