"""
Contract evaluation engine.

A contract is a constraint composed of other constraints. Each registered
constraint is stored as a Definition; at evaluation time the contract walks
its definitions, maps the evaluated value for each one (e.g. to a key or an
attribute) and scopes errors the same way, so that every record lands at
the path of the value that produced it.

Definitions of included contracts are enumerated before the contract's own,
and sanity definitions are enumerated before all others. A failing sanity
definition stops the walk: no later definition is evaluated, and none of
their value mappings are computed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from verity.config import get_config
from verity.constraints.base import Constraint
from verity.contracts.definition import Definition
from verity.errors import Errors

logger = logging.getLogger(__name__)


class BaseContract(Constraint):
    """Composite constraint evaluating an ordered set of definitions.

    Subclasses register their structural constraints in _define_constraints(),
    which runs at the end of __init__, and customize value and error mapping
    by overriding _map_value() and _map_errors().
    """

    FROZEN_OPTIONS: tuple[str, ...] = ()

    def __init__(self, **options: Any) -> None:
        super().__init__(**options)
        self._definitions: list[Definition] = []
        self._included: list[BaseContract] = []
        self._define_constraints()
        self._structural_count = len(self._definitions)

    def add_constraint(self, constraint: Constraint, sanity: bool = False, **options: Any) -> BaseContract:
        """Register a constraint on the contract.

        Args:
            constraint: The constraint to register
            sanity: If True, the constraint is evaluated before all
                non-sanity constraints and a failure stops evaluation
            **options: Definition options used for value and error mapping

        Returns:
            The contract, so calls can be chained

        Raises:
            TypeError: If constraint is not a Constraint
        """
        if not isinstance(constraint, Constraint):
            raise TypeError("must be an instance of Constraint")

        self._validate_property(**options)

        definition = Definition(
            constraint=constraint,
            contract=self,
            options={**options, "sanity": bool(sanity)},
        )
        self._definitions.append(definition)
        logger.debug(f"Registered {type(constraint).__name__} on {type(self).__name__}: {dict(definition.options)}")
        return self

    def include(self, contract: BaseContract) -> BaseContract:
        """Include another contract's definitions in this contract.

        Inclusion is live: definitions added to the included contract later
        are observed on the next evaluation.

        Raises:
            TypeError: If contract is not a contract
        """
        if not isinstance(contract, BaseContract):
            raise TypeError("must be an instance of BaseContract")

        self._included.append(contract)
        logger.debug(f"Included {type(contract).__name__} in {type(self).__name__}")
        return self

    def each_definition(self) -> Iterator[Definition]:
        """Yield every definition, sanity definitions first."""
        definitions = list(self._each_unscoped_definition())
        yield from (d for d in definitions if d.sanity)
        yield from (d for d in definitions if not d.sanity)

    def each_pair(self, actual: Any) -> Iterator[tuple[Definition, Any]]:
        """Yield each definition with the value it is evaluated against.

        Values are mapped lazily, as the walk reaches each definition.
        """
        for definition in self.each_definition():
            yield definition, definition.contract._map_value(actual, **definition.options)

    def matches(self, actual: Any) -> bool:
        for definition, value in self.each_pair(actual):
            if not definition.contract._match_constraint(definition, value):
                self._log_evaluation(actual, False)
                return False
        self._log_evaluation(actual, True)
        return True

    def does_not_match(self, actual: Any) -> bool:
        for definition, value in self.each_pair(actual):
            if definition.contract._match_negated_constraint(definition, value):
                if definition.sanity:
                    return True
                continue
            return False
        return True

    def match(self, actual: Any) -> tuple[bool, Errors]:
        errors = Errors()
        status = self._walk_errors(actual, errors)
        self._log_evaluation(actual, status, errors)
        return status, errors

    def negated_match(self, actual: Any) -> tuple[bool, Errors]:
        errors = Errors()
        status = self._walk_negated_errors(actual, errors)
        return status, errors

    def with_options(self, **options: Any) -> BaseContract:
        """Return a copy of the contract with merged options.

        Raises:
            ValueError: If an option fixed at construction would change
        """
        for key in self.FROZEN_OPTIONS:
            if key in options:
                raise ValueError(f"can't change option {key!r}")

        duplicate = super().with_options(**options)
        duplicate._reset_definitions(self)
        return duplicate

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseContract):
            return NotImplemented
        return (
            super().__eq__(other)
            and other._included == self._included
            and other._comparison_key() == self._comparison_key()
        )

    __hash__ = None  # type: ignore[assignment]

    def _reset_definitions(self, original: BaseContract) -> None:
        """Rebuild structural definitions on a copy and re-own the registered ones.

        Structural definitions close over the contract that defined them.
        """
        self._definitions = []
        self._included = list(original._included)
        self._define_constraints()
        self._structural_count = len(self._definitions)
        self._definitions.extend(
            Definition(constraint=d.constraint, contract=self, options=d.options)
            for d in original._definitions[original._structural_count:]
        )

    def _comparison_key(self) -> list[Any]:
        """Registered (non-structural) definitions, as compared by __eq__."""
        return [(d.constraint, dict(d.options)) for d in self._definitions[self._structural_count:]]

    def _each_unscoped_definition(self) -> Iterator[Definition]:
        for contract in self._included:
            yield from contract._each_unscoped_definition()
        yield from self._definitions

    def _define_constraints(self) -> None:
        """Register the constraints every instance of the contract carries."""

    def _validate_property(self, **options: Any) -> None:
        """Check the mapping options of a new definition."""

    def _map_value(self, actual: Any, **options: Any) -> Any:
        return actual

    def _map_errors(self, errors: Errors, **options: Any) -> Errors:
        return errors

    def _match_constraint(self, definition: Definition, value: Any) -> bool:
        return definition.constraint.matches(value)

    def _match_negated_constraint(self, definition: Definition, value: Any) -> bool:
        return definition.constraint.does_not_match(value)

    def _add_errors_for(self, definition: Definition, value: Any, errors: Errors) -> Errors:
        return definition.constraint.errors_for(
            value, errors=self._map_errors(errors, **definition.options)
        )

    def _add_negated_errors_for(self, definition: Definition, value: Any, errors: Errors) -> Errors:
        return definition.constraint.negated_errors_for(
            value, errors=self._map_errors(errors, **definition.options)
        )

    def _walk_errors(self, actual: Any, errors: Errors) -> bool:
        status = True
        for definition, value in self.each_pair(actual):
            if definition.contract._match_constraint(definition, value):
                continue
            status = False
            definition.contract._add_errors_for(definition, value, errors)
            if definition.sanity:
                break
        return status

    def _walk_negated_errors(self, actual: Any, errors: Errors) -> bool:
        status = True
        for definition, value in self.each_pair(actual):
            if definition.contract._match_negated_constraint(definition, value):
                if definition.sanity:
                    break
                continue
            status = False
            definition.contract._add_negated_errors_for(definition, value, errors)
        return status

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        self._walk_errors(actual, errors)
        return errors

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        self._walk_negated_errors(actual, errors)
        return errors

    def _log_evaluation(self, actual: Any, status: bool, errors: Errors | None = None) -> None:
        if not get_config().log_evaluations:
            return
        if errors:
            logger.debug(f"{type(self).__name__} failed for {type(actual).__name__}: {errors.summary()}")
        else:
            logger.debug(f"{type(self).__name__} {'matched' if status else 'did not match'} {type(actual).__name__}")
