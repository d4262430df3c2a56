"""Presence and absence constraints."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint


def is_blank(actual: Any) -> bool:
    """Check if a value is None or an empty sized value."""
    if actual is None:
        return True
    try:
        return len(actual) == 0
    except TypeError:
        return False


class Presence(Constraint):
    """Asserts that the value is not None and not empty."""

    NEGATED_TYPE = "verity.constraints.present"
    TYPE = "verity.constraints.absent"

    def matches(self, actual: Any) -> bool:
        return not is_blank(actual)


class Absence(Constraint):
    """Asserts that the value is None or empty."""

    NEGATED_TYPE = Presence.TYPE
    TYPE = Presence.NEGATED_TYPE

    def matches(self, actual: Any) -> bool:
        return is_blank(actual)
