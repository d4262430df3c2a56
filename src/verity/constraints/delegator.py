"""Delegating constraint with a swappable receiver."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from verity.constraints.base import Constraint
from verity.errors import Errors


class Delegator(Constraint):
    """Forwards every operation to a receiver constraint.

    The receiver can be replaced after the delegator has been registered
    in a contract; the new receiver takes effect on the next evaluation.
    """

    def __init__(self, receiver: Constraint) -> None:
        super().__init__()
        self.receiver = receiver

    @property
    def receiver(self) -> Constraint:
        return self._receiver

    @receiver.setter
    def receiver(self, value: Constraint) -> None:
        if not isinstance(value, Constraint):
            raise TypeError("receiver must be a Constraint")
        self._receiver = value

    @property
    def options(self) -> Mapping[str, Any]:
        return self._receiver.options

    @property
    def type(self) -> str:
        return self._receiver.type

    @property
    def negated_type(self) -> str:
        return self._receiver.negated_type

    @property
    def message(self) -> str | None:
        return self._receiver.message

    @property
    def negated_message(self) -> str | None:
        return self._receiver.negated_message

    def matches(self, actual: Any) -> bool:
        return self._receiver.matches(actual)

    def does_not_match(self, actual: Any) -> bool:
        return self._receiver.does_not_match(actual)

    def errors_for(self, actual: Any, errors: Errors | None = None) -> Errors:
        return self._receiver.errors_for(actual, errors=errors)

    def negated_errors_for(self, actual: Any, errors: Errors | None = None) -> Errors:
        return self._receiver.negated_errors_for(actual, errors=errors)

    def match(self, actual: Any) -> tuple[bool, Errors]:
        return self._receiver.match(actual)

    def negated_match(self, actual: Any) -> tuple[bool, Errors]:
        return self._receiver.negated_match(actual)

    def with_options(self, **options: Any) -> Delegator:
        return Delegator(self._receiver.with_options(**options))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Delegator):
            return NotImplemented
        return other._receiver == self._receiver
