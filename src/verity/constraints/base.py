"""Base constraint.

A constraint pairs a predicate with error generation. Every constraint
supports four operations:

- matches(actual): the predicate
- does_not_match(actual): the negated predicate (defaults to ``not matches``)
- errors_for(actual): errors explaining why ``matches`` is False
- negated_errors_for(actual): errors explaining why ``does_not_match`` is False

match() and negated_match() combine evaluation and error generation.
Calling errors_for() on a value that matches is undefined; check first.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from verity.errors import Errors


class Constraint:
    """Constraint backed by an optional predicate.

    Without a predicate, matches() is always False. Subclasses override
    matches() and, where the error output needs more detail, the
    _update_errors_for() / _update_negated_errors_for() hooks.

    Options:
        type: Overrides the error token added on failure
        negated_type: Overrides the error token added on negated failure
        message: Message attached to errors
        negated_message: Message attached to negated errors
    """

    NEGATED_TYPE = "verity.constraints.valid"
    TYPE = "verity.constraints.invalid"

    def __init__(self, predicate: Callable[[Any], bool] | None = None, **options: Any) -> None:
        if predicate is not None and not callable(predicate):
            raise TypeError("predicate must be callable")
        self._predicate = predicate
        self._options: dict[str, Any] = dict(options)

    @property
    def options(self) -> Mapping[str, Any]:
        """Read-only view of the constraint's configuration."""
        return MappingProxyType(self._options)

    @property
    def type(self) -> str:
        return self._options.get("type", self.TYPE)

    @property
    def negated_type(self) -> str:
        return self._options.get("negated_type", self.NEGATED_TYPE)

    @property
    def message(self) -> str | None:
        return self._options.get("message")

    @property
    def negated_message(self) -> str | None:
        return self._options.get("negated_message")

    def matches(self, actual: Any) -> bool:
        """Check if the value satisfies the constraint."""
        if self._predicate is None:
            return False
        return bool(self._predicate(actual))

    def does_not_match(self, actual: Any) -> bool:
        """Check if the value satisfies the negated constraint."""
        return not self.matches(actual)

    def errors_for(self, actual: Any, errors: Errors | None = None) -> Errors:
        """Generate errors for a value that does not match.

        Args:
            actual: The value that failed matches()
            errors: Errors (or scoped view) to add to; a new Errors if None

        Returns:
            The errors object that was written to
        """
        if errors is None:
            errors = Errors()
        self._update_errors_for(actual, errors)
        return errors

    def negated_errors_for(self, actual: Any, errors: Errors | None = None) -> Errors:
        """Generate errors for a value that fails does_not_match()."""
        if errors is None:
            errors = Errors()
        self._update_negated_errors_for(actual, errors)
        return errors

    def match(self, actual: Any) -> tuple[bool, Errors]:
        """Evaluate the value and generate errors if it does not match.

        Returns:
            (True, empty Errors) on success, (False, errors) otherwise
        """
        if self.matches(actual):
            return True, Errors()
        return False, self.errors_for(actual)

    def negated_match(self, actual: Any) -> tuple[bool, Errors]:
        """Evaluate the negated constraint and generate errors on failure."""
        if self.does_not_match(actual):
            return True, Errors()
        return False, self.negated_errors_for(actual)

    def with_options(self, **options: Any) -> Constraint:
        """Return a copy of the constraint with merged options."""
        duplicate = copy.copy(self)
        duplicate._options = {**self._options, **options}
        return duplicate

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(self.type, message=self.message)

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(self.negated_type, message=self.negated_message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraint):
            return NotImplemented
        return (
            type(other) is type(self)
            and other._options == self._options
            and other._predicate == self._predicate
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._options)!r})"
