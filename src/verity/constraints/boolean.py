"""Boolean constraint."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint


class Boolean(Constraint):
    """Asserts that the value is exactly True or False."""

    NEGATED_TYPE = "verity.constraints.is_boolean"
    TYPE = "verity.constraints.is_not_boolean"

    def matches(self, actual: Any) -> bool:
        return actual is True or actual is False
