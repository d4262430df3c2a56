"""Constraints on mapping keys."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from verity.constraints.base import Constraint
from verity.constraints.presence import Presence
from verity.constraints.signature import Signature
from verity.errors import Errors

MAPPING_METHODS = ("__getitem__", "keys")


def indifferent_variants(key: Any) -> list[Any]:
    """Return the str and bytes spellings of a key (or the key itself)."""
    if isinstance(key, str):
        return [key, key.encode("utf-8")]
    if isinstance(key, bytes):
        try:
            return [key, key.decode("utf-8")]
        except UnicodeDecodeError:
            return [key]
    return [key]


def _is_mapping_like(actual: Any) -> bool:
    return all(hasattr(actual, name) for name in MAPPING_METHODS)


class ExtraKeys(Constraint):
    """Asserts that a mapping has no keys outside the expected set.

    Args:
        expected_keys: Collection of keys, or a zero-argument callable
            returning one. A callable is re-evaluated on every check.
    """

    NEGATED_TYPE = "verity.constraints.hashes.no_extra_keys"
    TYPE = "verity.constraints.hashes.extra_keys"

    def __init__(self, expected_keys: Iterable[Any] | Callable[[], Iterable[Any]], **options: Any) -> None:
        self._validate_expected_keys(expected_keys)
        if not callable(expected_keys):
            expected_keys = frozenset(expected_keys)
        super().__init__(expected_keys=expected_keys, **options)

    @property
    def expected_keys(self) -> frozenset[Any]:
        keys = self._options["expected_keys"]
        if callable(keys):
            return frozenset(keys())
        return keys

    def matches(self, actual: Any) -> bool:
        if not _is_mapping_like(actual):
            return False
        return set(actual.keys()) <= self.expected_keys

    def does_not_match(self, actual: Any) -> bool:
        if not _is_mapping_like(actual):
            return False
        return not set(actual.keys()) <= self.expected_keys

    def extra_keys(self, actual: Any) -> list[Any]:
        """List the keys of the mapping that are not expected, in order."""
        expected = self.expected_keys
        return [key for key in actual.keys() if key not in expected]

    def _add_invalid_mapping_error(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(
            Signature.TYPE,
            methods=list(MAPPING_METHODS),
            missing=[name for name in MAPPING_METHODS if not hasattr(actual, name)],
        )

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not _is_mapping_like(actual):
            return self._add_invalid_mapping_error(actual, errors)

        for key in self.extra_keys(actual):
            errors[key].add(self.type, message=self.message, value=actual[key])
        return errors

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not _is_mapping_like(actual):
            return self._add_invalid_mapping_error(actual, errors)
        return super()._update_negated_errors_for(actual, errors)

    @staticmethod
    def _validate_expected_keys(expected_keys: Any) -> None:
        keys = expected_keys() if callable(expected_keys) else expected_keys
        if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
            raise TypeError("expected_keys must be a collection of keys or a callable")


class IndifferentExtraKeys(ExtraKeys):
    """ExtraKeys that treats str and bytes spellings of a key as the same key."""

    @property
    def expected_keys(self) -> frozenset[Any]:
        keys = super().expected_keys
        return frozenset(
            variant for key in keys for variant in indifferent_variants(key)
        )


class IndifferentKey(Constraint):
    """Asserts that the value is a non-empty str or bytes key."""

    NEGATED_TYPE = "verity.constraints.hashes.is_string_or_symbol"
    TYPE = "verity.constraints.hashes.is_not_string_or_symbol"

    def matches(self, actual: Any) -> bool:
        return isinstance(actual, (str, bytes)) and len(actual) > 0

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if actual is None:
            return errors.add(Presence.TYPE, message=self.message)
        if not isinstance(actual, (str, bytes)):
            return super()._update_errors_for(actual, errors)
        if len(actual) == 0:
            return errors.add(Presence.TYPE, message=self.message)
        return errors
