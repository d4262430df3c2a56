"""Constraints on sequence length."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from verity.constraints.base import Constraint
from verity.constraints.signature import Signature
from verity.errors import Errors


def _is_sized(actual: Any) -> bool:
    return hasattr(actual, "__len__") and hasattr(actual, "__getitem__")


class _ItemCount(Constraint):
    def __init__(self, expected_count: int | Callable[[], int], **options: Any) -> None:
        if not callable(expected_count) and (
            not isinstance(expected_count, int) or isinstance(expected_count, bool) or expected_count < 0
        ):
            raise ValueError("expected_count must be a non-negative integer or a callable")
        super().__init__(expected_count=expected_count, **options)

    @property
    def expected_count(self) -> int:
        count = self._options["expected_count"]
        return count() if callable(count) else count

    def _add_invalid_tuple_error(self, actual: Any, errors: Errors) -> Errors:
        methods = ["__getitem__", "__len__"]
        return errors.add(
            Signature.TYPE,
            methods=methods,
            missing=[name for name in methods if not hasattr(actual, name)],
        )

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not _is_sized(actual):
            return self._add_invalid_tuple_error(actual, errors)
        return super()._update_negated_errors_for(actual, errors)


class ExtraItems(_ItemCount):
    """Asserts that a sequence has at most the expected number of items.

    Args:
        expected_count: Item count, or a zero-argument callable returning one
    """

    NEGATED_TYPE = "verity.constraints.tuples.no_extra_items"
    TYPE = "verity.constraints.tuples.extra_items"

    def matches(self, actual: Any) -> bool:
        if not _is_sized(actual):
            return False
        return len(actual) <= self.expected_count

    def does_not_match(self, actual: Any) -> bool:
        if not _is_sized(actual):
            return False
        return len(actual) > self.expected_count

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not _is_sized(actual):
            return self._add_invalid_tuple_error(actual, errors)

        for index in range(self.expected_count, len(actual)):
            errors[index].add(self.type, message=self.message, value=actual[index])
        return errors


class MissingItems(_ItemCount):
    """Asserts that a sequence has at least the expected number of items."""

    NEGATED_TYPE = "verity.constraints.tuples.no_missing_items"
    TYPE = "verity.constraints.tuples.missing_item"

    def matches(self, actual: Any) -> bool:
        if not _is_sized(actual):
            return False
        return len(actual) >= self.expected_count

    def does_not_match(self, actual: Any) -> bool:
        if not _is_sized(actual):
            return False
        return len(actual) < self.expected_count

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not _is_sized(actual):
            return self._add_invalid_tuple_error(actual, errors)

        for index in range(len(actual), self.expected_count):
            errors[index].add(self.type, message=self.message)
        return errors
