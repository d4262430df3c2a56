"""Always-true and always-false constraints."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint


class Anything(Constraint):
    """Matches any value, including None."""

    NEGATED_TYPE = "verity.constraints.anything"
    TYPE = "verity.constraints.nothing"

    def matches(self, actual: Any) -> bool:
        return True


class Nothing(Constraint):
    """Matches no value."""

    NEGATED_TYPE = "verity.constraints.nothing"
    TYPE = "verity.constraints.anything"

    def matches(self, actual: Any) -> bool:
        return False
