"""Contracts for fixed-shape sequences."""

from __future__ import annotations

from typing import Any

from verity.coercion import type_constraint
from verity.constraints.base import Constraint
from verity.constraints.signature import TupleSignature
from verity.constraints.tuples import ExtraItems, MissingItems
from verity.constraints.types import ListType
from verity.contracts.property_contract import PropertyContract
from verity.errors import Errors

INDEX = "index"


class TupleContract(PropertyContract):
    """Contract for sequences with a constraint per position.

    The value must support indexed access and ``len()``. A value with fewer
    items than the highest constrained index gets one missing-item record
    per absent index, and no per-index constraint is evaluated. Unless
    ``allow_extra_items`` is True, each item beyond the constrained
    positions gets an extra-item record carrying its value.

    Example:
        contract = TupleContract()
        contract.add_item_constraint(IntegerType())
        contract.add_item_constraint(StringType())

        contract.matches((1, "a"))     # True
        contract.matches((1,))         # False, missing item at [1]
        contract.matches((1, "a", 2))  # False, extra item at [2]
    """

    FROZEN_OPTIONS = ("allow_extra_items",)

    def __init__(self, allow_extra_items: bool = False, **options: Any) -> None:
        super().__init__(allow_extra_items=bool(allow_extra_items), **options)

    @property
    def allow_extra_items(self) -> bool:
        return bool(self._options.get("allow_extra_items"))

    @property
    def expected_count(self) -> int:
        """One past the highest constrained index."""
        count = 0
        for definition in self.each_definition():
            if definition.options.get("property_type") != INDEX:
                continue
            count = max(count, definition.property + 1)
        return count

    def add_index_constraint(
        self,
        index: int,
        constraint: Constraint,
        sanity: bool = False,
        **options: Any,
    ) -> TupleContract:
        """Register a constraint on the item at the given index."""
        self.add_constraint(constraint, sanity=sanity, property=index, property_type=INDEX, **options)
        return self

    def add_item_constraint(self, constraint: Constraint, **options: Any) -> TupleContract:
        """Register a constraint on the next unconstrained position."""
        return self.add_index_constraint(self.expected_count, constraint, **options)

    def _define_constraints(self) -> None:
        self._add_type_constraint()
        self._add_missing_items_constraint()
        self._add_extra_items_constraint()

    def _add_type_constraint(self) -> None:
        self.add_constraint(TupleSignature(), sanity=True)

    def _add_missing_items_constraint(self) -> None:
        self.add_constraint(MissingItems(lambda: self.expected_count), sanity=True)

    def _add_extra_items_constraint(self) -> None:
        if self.allow_extra_items:
            return
        self.add_constraint(ExtraItems(lambda: self.expected_count))

    def _validate_property(self, property: Any = None, property_type: Any = None, **options: Any) -> None:
        if property_type != INDEX:
            return super()._validate_property(property=property, property_type=property_type, **options)
        if not isinstance(property, int) or isinstance(property, bool) or property < 0:
            raise ValueError(f"index must be a non-negative integer, got {property!r}")

    def _map_value(self, actual: Any, **options: Any) -> Any:
        if options.get("property_type") != INDEX:
            return super()._map_value(actual, **options)
        try:
            return actual[options["property"]]
        except (IndexError, KeyError, TypeError):
            return None

    def _map_errors(self, errors: Errors, **options: Any) -> Errors:
        if options.get("property_type") != INDEX:
            return super()._map_errors(errors, **options)
        return errors[options.get("property_name", options["property"])]


class ListContract(TupleContract):
    """TupleContract for lists, optionally constraining every item.

    The sanity check is a strict ListType, so tuples and other sequences do
    not match. Extra items are allowed by default, since ``item_type``
    already applies to every item.

    Args:
        item_type: Class, class name or constraint every item must match
        allow_extra_items: If False, items beyond the indexed ones fail
    """

    FROZEN_OPTIONS = ("allow_extra_items", "item_type")

    def __init__(self, item_type: Any = None, allow_extra_items: bool = True, **options: Any) -> None:
        super().__init__(
            allow_extra_items=allow_extra_items,
            item_type=type_constraint(item_type, allow_none=True, as_="item type"),
            **options,
        )

    @property
    def item_type(self) -> Constraint | None:
        return self._options.get("item_type")

    def _add_type_constraint(self) -> None:
        self.add_constraint(ListType(item_type=self.item_type), sanity=True)
