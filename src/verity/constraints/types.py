"""Concrete type constraints.

Thin Type subclasses for common classes, plus ListType and DictType, which
also validate their members.
"""

from __future__ import annotations

import collections.abc
import datetime
import decimal
from typing import Any

from verity.coercion import type_constraint
from verity.constraints.base import Constraint
from verity.constraints.presence import Presence
from verity.constraints.type import Type
from verity.errors import Errors


class StringType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(str, **options)


class IntegerType(Type):
    """Asserts that the value is an int. Booleans are not integers here."""

    def __init__(self, **options: Any) -> None:
        super().__init__(int, **options)

    def _matches_type(self, actual: Any) -> bool:
        if isinstance(actual, bool):
            return False
        return super()._matches_type(actual)


class FloatType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(float, **options)


class DecimalType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(decimal.Decimal, **options)


class BooleanType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(bool, **options)


class NoneType(Type):
    NEGATED_TYPE = "verity.constraints.types.is_none"
    TYPE = "verity.constraints.types.is_not_none"

    def __init__(self, **options: Any) -> None:
        super().__init__(type(None), **options)


class CallableType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(collections.abc.Callable, **options)


class DateType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(datetime.date, **options)


class DateTimeType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(datetime.datetime, **options)


class TimeType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(datetime.time, **options)


class TupleType(Type):
    def __init__(self, **options: Any) -> None:
        super().__init__(tuple, **options)


class ListType(Type):
    """Asserts that the value is a list, optionally validating each item.

    Args:
        allow_empty: If False, an empty list fails with an "absent" error
        item_type: Class, class name or constraint every item must match
    """

    def __init__(self, allow_empty: bool = True, item_type: Any = None, **options: Any) -> None:
        super().__init__(
            list,
            allow_empty=bool(allow_empty),
            item_type=type_constraint(item_type, allow_none=True, as_="item type"),
            **options,
        )

    @property
    def allow_empty(self) -> bool:
        return self._options["allow_empty"]

    @property
    def item_type(self) -> Constraint | None:
        return self._options["item_type"]

    def matches(self, actual: Any) -> bool:
        if not self._matches_type(actual):
            return False
        if actual is None:
            return True
        return self._presence_matches(actual) and not self._non_matching_items(actual)

    def does_not_match(self, actual: Any) -> bool:
        return not self._matches_type(actual)

    def _presence_matches(self, actual: Any) -> bool:
        return self.allow_empty or len(actual) > 0

    def _non_matching_items(self, actual: list[Any]) -> list[tuple[int, Any]]:
        if self.item_type is None:
            return []
        return [
            (index, item)
            for index, item in enumerate(actual)
            if not self.item_type.matches(item)
        ]

    def _error_properties(self) -> dict[str, Any]:
        return {**super()._error_properties(), "allow_empty": self.allow_empty}

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not isinstance(actual, self.expected_type):
            return super()._update_errors_for(actual, errors)

        if not self._presence_matches(actual):
            return errors.add(Presence.TYPE, message=self.message, **self._error_properties())

        for index, item in self._non_matching_items(actual):
            self.item_type.errors_for(item, errors=errors[index])
        return errors


class DictType(Type):
    """Asserts that the value is a dict, optionally validating keys and values.

    Args:
        allow_empty: If False, an empty dict fails with an "absent" error
        key_type: Class, class name or constraint every key must match
        value_type: Class, class name or constraint every value must match
    """

    INVALID_KEY_TYPE = "verity.constraints.types.dict.invalid_key"

    def __init__(
        self,
        allow_empty: bool = True,
        key_type: Any = None,
        value_type: Any = None,
        **options: Any,
    ) -> None:
        super().__init__(
            dict,
            allow_empty=bool(allow_empty),
            key_type=type_constraint(key_type, allow_none=True, as_="key type"),
            value_type=type_constraint(value_type, allow_none=True, as_="value type"),
            **options,
        )

    @property
    def allow_empty(self) -> bool:
        return self._options["allow_empty"]

    @property
    def key_type(self) -> Constraint | None:
        return self._options["key_type"]

    @property
    def value_type(self) -> Constraint | None:
        return self._options["value_type"]

    def matches(self, actual: Any) -> bool:
        if not self._matches_type(actual):
            return False
        if actual is None:
            return True
        return (
            self._presence_matches(actual)
            and not self._non_matching_keys(actual)
            and not self._non_matching_values(actual)
        )

    def does_not_match(self, actual: Any) -> bool:
        return not self._matches_type(actual)

    def _presence_matches(self, actual: Any) -> bool:
        return self.allow_empty or len(actual) > 0

    def _non_matching_keys(self, actual: dict[Any, Any]) -> list[Any]:
        if self.key_type is None:
            return []
        return [key for key in actual if not self.key_type.matches(key)]

    def _non_matching_values(self, actual: dict[Any, Any]) -> list[tuple[Any, Any]]:
        if self.value_type is None:
            return []
        return [
            (key, value)
            for key, value in actual.items()
            if not self.value_type.matches(value)
        ]

    def _error_properties(self) -> dict[str, Any]:
        return {**super()._error_properties(), "allow_empty": self.allow_empty}

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not isinstance(actual, self.expected_type):
            return super()._update_errors_for(actual, errors)

        if not self._presence_matches(actual):
            return errors.add(Presence.TYPE, message=self.message, **self._error_properties())

        keys = self._non_matching_keys(actual)
        if keys:
            errors.add(self.INVALID_KEY_TYPE, message=self.message, keys=keys)

        for key, value in self._non_matching_values(actual):
            self.value_type.errors_for(value, errors=errors[key])
        return errors
