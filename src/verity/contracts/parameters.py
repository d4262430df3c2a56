"""
Contracts for call signatures.

A ParametersContract validates the parameters of a call, given as a mapping:

    {"arguments": [...], "keywords": {...}, "block": callable or None}

Positional arguments are checked by an ArgumentsContract, keyword arguments
by a KeywordsContract, and the block (a callback parameter, if the validated
function takes one) by a single constraint.

Arguments or keywords absent from the call are mapped to UNDEFINED. A
definition registered with ``default=True`` accepts an absent value;
otherwise its constraint is evaluated against None.
"""

from __future__ import annotations

import logging
from typing import Any

from verity.coercion import presence_constraint, type_constraint
from verity.constraints.base import Constraint
from verity.constraints.delegator import Delegator
from verity.constraints.parameters import ExtraArguments, ExtraKeywords
from verity.constraints.types import CallableType, DictType, ListType, NoneType, StringType
from verity.contracts.definition import Definition
from verity.contracts.map_contract import KEY, DictContract, MapContract
from verity.contracts.tuple_contract import INDEX, TupleContract
from verity.errors import Errors

logger = logging.getLogger(__name__)

VARIADIC = "variadic"


class _Undefined:
    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()


class _DefaultsMixin:
    """Evaluation of definitions whose value is UNDEFINED."""

    def _match_constraint(self, definition: Definition, value: Any) -> bool:
        if value is UNDEFINED:
            if definition.options.get("default"):
                return True
            value = None
        return super()._match_constraint(definition, value)

    def _match_negated_constraint(self, definition: Definition, value: Any) -> bool:
        if value is UNDEFINED:
            if definition.options.get("default"):
                return False
            value = None
        return super()._match_negated_constraint(definition, value)

    def _add_errors_for(self, definition: Definition, value: Any, errors: Errors) -> Errors:
        return super()._add_errors_for(definition, None if value is UNDEFINED else value, errors)

    def _add_negated_errors_for(self, definition: Definition, value: Any, errors: Errors) -> Errors:
        return super()._add_negated_errors_for(definition, None if value is UNDEFINED else value, errors)


class ArgumentsContract(_DefaultsMixin, TupleContract):
    """Contract for the positional arguments of a call.

    Arguments beyond the constrained positions fail with an extra-arguments
    record unless a variadic constraint is set, in which case the variadic
    constraint is evaluated against the list of remaining arguments and
    reports its errors under the variadic name.
    """

    def __init__(self, **options: Any) -> None:
        self._variadic_name: str | None = None
        super().__init__(allow_extra_items=False, **options)

    @property
    def next_index(self) -> int:
        return self.expected_count

    def add_argument_constraint(
        self,
        index: int | None,
        type: Any,
        default: bool = False,
        **options: Any,
    ) -> ArgumentsContract:
        """Register a constraint on the positional argument at index.

        Args:
            index: Position of the argument; None for the next free position
            type: Class, class name or constraint for the argument
            default: If True, the argument may be omitted

        Raises:
            ValueError: If the position is already constrained
        """
        if index is None:
            index = self.next_index
        if any(d.options.get("property_type") == INDEX and d.property == index for d in self.each_definition()):
            raise ValueError(f"argument at index {index} is already defined")

        constraint = type_constraint(type, as_="type")
        self.add_index_constraint(index, constraint, default=bool(default), **options)
        return self

    def set_variadic_constraint(self, constraint: Constraint, as_: str | None = None) -> ArgumentsContract:
        """Constrain the arguments beyond the named positions.

        Raises:
            ValueError: If a variadic constraint is already set
        """
        if self.allow_extra_items:
            raise ValueError("variadic arguments constraint is already set")

        self._options["allow_extra_items"] = True
        self._variadic_constraint.receiver = constraint
        self._variadic_name = as_
        logger.debug(f"Set variadic arguments constraint {type(constraint).__name__} as {as_!r}")
        return self

    def set_variadic_item_constraint(self, item_type: Any, as_: str | None = None) -> ArgumentsContract:
        """Constrain every argument beyond the named positions to a type."""
        item_type = type_constraint(item_type, as_="item type")
        return self.set_variadic_constraint(ListType(item_type=item_type), as_=as_)

    def _add_missing_items_constraint(self) -> None:
        # Absent arguments are handled per definition.
        pass

    def _add_extra_items_constraint(self) -> None:
        self._variadic_constraint = Delegator(ExtraArguments(lambda: self.expected_count))
        self.add_constraint(self._variadic_constraint, property_type=VARIADIC)

    def _reset_definitions(self, original: ArgumentsContract) -> None:
        super()._reset_definitions(original)
        if original.allow_extra_items:
            self._variadic_constraint.receiver = original._variadic_constraint.receiver

    def _comparison_key(self) -> list[Any]:
        variadic = self._variadic_constraint.receiver if self.allow_extra_items else None
        return [self._variadic_name, variadic, *super()._comparison_key()]

    def _map_value(self, actual: Any, **options: Any) -> Any:
        property_type = options.get("property_type")
        if property_type == VARIADIC and self.allow_extra_items:
            return list(actual[self.expected_count:])
        if property_type == INDEX and isinstance(actual, (list, tuple)) and options["property"] >= len(actual):
            return UNDEFINED
        return super()._map_value(actual, **options)

    def _map_errors(self, errors: Errors, **options: Any) -> Errors:
        if options.get("property_type") == VARIADIC:
            return errors[self._variadic_name] if self._variadic_name else errors
        return super()._map_errors(errors, **options)


class KeywordsContract(_DefaultsMixin, DictContract):
    """Contract for the keyword arguments of a call.

    Keywords without a keyword constraint fail with an extra-keywords record
    unless a variadic constraint is set, in which case the variadic
    constraint is evaluated against a dict of the remaining keywords.
    """

    def __init__(self, **options: Any) -> None:
        self._variadic_name: str | None = None
        super().__init__(key_type=StringType(), allow_extra_keys=False, **options)

    def add_keyword_constraint(
        self,
        keyword: str,
        type: Any,
        default: bool = False,
        **options: Any,
    ) -> KeywordsContract:
        """Register a constraint on a keyword argument.

        Raises:
            ValueError: If the keyword is not a string or is already defined
        """
        if not isinstance(keyword, str) or not keyword:
            raise ValueError("keyword must be a non-empty string")
        if keyword in self.expected_keys():
            raise ValueError(f"keyword {keyword!r} is already defined")

        constraint = type_constraint(type, as_="type")
        self.add_key_constraint(keyword, constraint, default=bool(default), **options)
        return self

    def set_variadic_constraint(self, constraint: Constraint, as_: str | None = None) -> KeywordsContract:
        """Constrain the keywords without a keyword constraint.

        Raises:
            ValueError: If a variadic constraint is already set
        """
        if self.allow_extra_keys:
            raise ValueError("variadic keywords constraint is already set")

        self._options["allow_extra_keys"] = True
        self._variadic_constraint.receiver = constraint
        self._variadic_name = as_
        logger.debug(f"Set variadic keywords constraint {type(constraint).__name__} as {as_!r}")
        return self

    def set_variadic_value_constraint(self, value_type: Any, as_: str | None = None) -> KeywordsContract:
        """Constrain the value of every keyword without a keyword constraint."""
        value_type = type_constraint(value_type, as_="value type")
        constraint = DictType(key_type=StringType(), value_type=value_type)
        return self.set_variadic_constraint(constraint, as_=as_)

    def _add_extra_keys_constraint(self) -> None:
        self._variadic_constraint = Delegator(ExtraKeywords(self.expected_keys))
        self.add_constraint(self._variadic_constraint, property_type=VARIADIC)

    def _reset_definitions(self, original: KeywordsContract) -> None:
        super()._reset_definitions(original)
        if original.allow_extra_keys:
            self._variadic_constraint.receiver = original._variadic_constraint.receiver

    def _comparison_key(self) -> list[Any]:
        variadic = self._variadic_constraint.receiver if self.allow_extra_keys else None
        return [self._variadic_name, variadic, *super()._comparison_key()]

    def _map_value(self, actual: Any, **options: Any) -> Any:
        property_type = options.get("property_type")
        if property_type == VARIADIC and self.allow_extra_keys:
            expected = set(self.expected_keys())
            return {key: value for key, value in actual.items() if key not in expected}
        if property_type == KEY and isinstance(actual, dict) and options["property"] not in actual:
            return UNDEFINED
        return super()._map_value(actual, **options)

    def _map_errors(self, errors: Errors, **options: Any) -> Errors:
        if options.get("property_type") == VARIADIC:
            return errors[self._variadic_name] if self._variadic_name else errors
        return super()._map_errors(errors, **options)


class SignatureContract(DictContract):
    """Sanity check for the shape of a parameters mapping."""

    def __init__(self, **options: Any) -> None:
        super().__init__(key_type=StringType(), **options)

    def _define_constraints(self) -> None:
        super()._define_constraints()
        self.add_key_constraint("arguments", ListType())
        self.add_key_constraint("keywords", DictType(key_type=StringType()))
        self.add_key_constraint("block", CallableType(optional=True))


class ParametersContract(MapContract):
    """Contract for the parameters of a call.

    Example:
        contract = ParametersContract()
        contract.argument("name", str)
        contract.argument("size", int, default=True)
        contract.arguments("rest", str)
        contract.keyword("verbose", bool, default=True)
        contract.keywords("extra", object)
        contract.block(False)

        contract.matches({"arguments": ["box"], "keywords": {}, "block": None})  # True
    """

    def __init__(self, **options: Any) -> None:
        self._arguments_contract = ArgumentsContract()
        self._keywords_contract = KeywordsContract()
        self._block_constraint: Constraint | None = None
        self._argument_names: list[str] = []
        super().__init__(**options)

    @property
    def arguments_contract(self) -> ArgumentsContract:
        return self._arguments_contract

    @property
    def keywords_contract(self) -> KeywordsContract:
        return self._keywords_contract

    @property
    def block_constraint(self) -> Constraint | None:
        return self._block_constraint

    def argument(self, name: str, type: Any, index: int | None = None, **options: Any) -> ParametersContract:
        """Constrain a named positional argument.

        Raises:
            ValueError: If an argument with that name is already defined
        """
        if not isinstance(name, str) or not name:
            raise ValueError("argument name must be a non-empty string")
        if name in self._argument_names:
            raise ValueError(f"argument {name!r} is already defined")

        self.add_argument_constraint(index, type, property_name=name, **options)
        self._argument_names.append(name)
        return self

    def arguments(self, name: str, type: Any) -> ParametersContract:
        """Constrain the variadic positional arguments."""
        return self.set_arguments_item_constraint(name, type)

    def keyword(self, name: str, type: Any, **options: Any) -> ParametersContract:
        """Constrain a keyword argument."""
        return self.add_keyword_constraint(name, type, **options)

    def keywords(self, name: str, type: Any) -> ParametersContract:
        """Constrain the variadic keyword arguments."""
        return self.set_keywords_value_constraint(name, type)

    def block(self, present: Any) -> ParametersContract:
        """Require (True), forbid (False) or constrain the block."""
        return self.set_block_constraint(present)

    def add_argument_constraint(self, index: int | None, type: Any, **options: Any) -> ParametersContract:
        self._arguments_contract.add_argument_constraint(index, type, **options)
        return self

    def add_keyword_constraint(self, keyword: str, type: Any, **options: Any) -> ParametersContract:
        self._keywords_contract.add_keyword_constraint(keyword, type, **options)
        return self

    def set_arguments_item_constraint(self, name: str, type: Any) -> ParametersContract:
        self._arguments_contract.set_variadic_item_constraint(type, as_=name)
        return self

    def set_keywords_value_constraint(self, name: str, type: Any) -> ParametersContract:
        self._keywords_contract.set_variadic_value_constraint(type, as_=name)
        return self

    def set_block_constraint(self, present: Any) -> ParametersContract:
        """Register the block constraint.

        Raises:
            ValueError: If the block constraint is already set
        """
        if self._block_constraint is not None:
            raise ValueError("block constraint is already set")

        self._block_constraint = presence_constraint(present, as_="present", factory=_block_type)
        self.add_key_constraint("block", self._block_constraint)
        return self

    def _define_constraints(self) -> None:
        super()._define_constraints()
        self.add_key_constraint("arguments", self._arguments_contract)
        self.add_key_constraint("keywords", self._keywords_contract)

    def _reset_definitions(self, original: ParametersContract) -> None:
        self._arguments_contract = original._arguments_contract.with_options()
        self._keywords_contract = original._keywords_contract.with_options()
        self._argument_names = list(original._argument_names)
        super()._reset_definitions(original)

    def _comparison_key(self) -> list[Any]:
        return [self._arguments_contract, self._keywords_contract, *super()._comparison_key()]

    def _add_type_constraint(self) -> None:
        self.add_constraint(SignatureContract(), sanity=True)

    def _add_extra_keys_constraint(self) -> None:
        # The signature contract already rejects unknown keys.
        pass


def _block_type(present: bool, **options: Any) -> Constraint:
    if present:
        return CallableType(**options)
    return NoneType(**options)
