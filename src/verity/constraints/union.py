"""Union constraint."""

from __future__ import annotations

from typing import Any

from verity.constraints.base import Constraint
from verity.errors import Errors


class Union(Constraint):
    """Asserts that the value matches at least one of the given constraints."""

    NEGATED_TYPE = "verity.constraints.is_in_union"
    TYPE = "verity.constraints.is_not_in_union"

    def __init__(self, first: Constraint, *rest: Constraint, **options: Any) -> None:
        expected_constraints = [first, *rest]
        for constraint in expected_constraints:
            if not isinstance(constraint, Constraint):
                raise TypeError(f"expected constraint must be a Constraint, got {constraint!r}")
        super().__init__(expected_constraints=expected_constraints, **options)

    @property
    def expected_constraints(self) -> list[Constraint]:
        return list(self._options["expected_constraints"])

    def matches(self, actual: Any) -> bool:
        return any(c.matches(actual) for c in self._options["expected_constraints"])

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        constraints = [
            {"options": dict(c.options), "type": c.type}
            for c in self._options["expected_constraints"]
        ]
        return errors.add(self.type, message=self.message, constraints=constraints)

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        constraints = [
            {"negated_type": c.negated_type, "options": dict(c.options)}
            for c in self._options["expected_constraints"]
        ]
        return errors.add(self.negated_type, message=self.negated_message, constraints=constraints)
