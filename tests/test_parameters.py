"""Tests for call signature contracts and parameter validation."""

from __future__ import annotations

import collections.abc

import pytest

from verity.constraints import ListType, StringType
from verity.contracts import ArgumentsContract, KeywordsContract, ParametersContract
from verity.parameter_validation import (
    InvalidParametersError,
    build_parameters_contract,
    validate_parameters,
)


def params(*args, block=None, **kwargs):
    return {"arguments": list(args), "keywords": kwargs, "block": block}


def is_not_type(path, expected_type, **data):
    return {
        "type": "verity.constraints.is_not_type",
        "path": path,
        "data": {"required": True, "type": expected_type, **data},
    }


class TestArgumentsContract:
    """Test positional argument contracts."""

    def test_next_index(self):
        """Test arguments without an index take the next position."""
        contract = ArgumentsContract()
        contract.add_argument_constraint(None, str)
        contract.add_argument_constraint(None, int)

        assert contract.next_index == 2
        assert contract.matches(["a", 1])

    def test_missing_argument(self):
        """Test a missing argument is evaluated as None."""
        contract = ArgumentsContract().add_argument_constraint(None, str)

        assert contract.errors_for([]) == [is_not_type([0], str)]

    def test_default_argument(self):
        """Test an argument with a default may be omitted."""
        contract = ArgumentsContract().add_argument_constraint(None, str, default=True)

        assert contract.matches([])
        assert not contract.matches([1])
        assert not contract.does_not_match([])

    def test_extra_arguments(self):
        """Test arguments beyond the constrained positions are reported."""
        contract = ArgumentsContract().add_argument_constraint(None, str)

        assert contract.errors_for(["a", "b"]) == [
            {"type": "verity.constraints.parameters.extra_arguments", "path": [1], "data": {"value": "b"}}
        ]

    def test_variadic_constraint(self):
        """Test the variadic constraint applies to the remaining arguments."""
        contract = ArgumentsContract().add_argument_constraint(None, str)
        contract.set_variadic_constraint(ListType(item_type=int))

        assert contract.matches(["a"])
        assert contract.matches(["a", 1, 2])
        assert contract.errors_for(["a", 1, "x"]) == [is_not_type([1], int)]

    def test_named_variadic_constraint(self):
        """Test variadic errors are reported under the variadic name."""
        contract = ArgumentsContract().add_argument_constraint(None, str)
        contract.set_variadic_item_constraint(int, as_="rest")

        assert contract.errors_for(["a", "x"]) == [is_not_type(["rest", 0], int)]

    def test_duplicate_index(self):
        """Test an index can only be constrained once."""
        contract = ArgumentsContract().add_argument_constraint(0, str)

        with pytest.raises(ValueError):
            contract.add_argument_constraint(0, int)

    def test_variadic_set_once(self):
        """Test the variadic constraint can only be set once."""
        contract = ArgumentsContract().set_variadic_item_constraint(int)

        with pytest.raises(ValueError):
            contract.set_variadic_item_constraint(str)

    def test_invalid_type(self):
        """Test argument types must be classes or constraints."""
        with pytest.raises(ValueError):
            ArgumentsContract().add_argument_constraint(None, 3)

    def test_duplicate_keeps_variadic(self):
        """Test a duplicate keeps the variadic constraint and counts its own arguments."""
        contract = ArgumentsContract().add_argument_constraint(None, str)
        contract.set_variadic_item_constraint(int, as_="rest")
        duplicate = contract.with_options(message="is invalid")
        duplicate.add_argument_constraint(None, str)

        assert duplicate.matches(["a", "b", 1])
        assert duplicate.errors_for(["a", "b", "x"]) == [is_not_type(["rest", 0], int)]
        assert contract.errors_for(["a", "b", 1]) == [is_not_type(["rest", 0], int)]


class TestKeywordsContract:
    """Test keyword argument contracts."""

    def test_keywords(self):
        """Test keyword values are checked by name."""
        contract = KeywordsContract().add_keyword_constraint("size", int)

        assert contract.matches({"size": 1})
        assert contract.errors_for({"size": "large"}) == [is_not_type(["size"], int)]

    def test_missing_keyword(self):
        """Test a missing keyword is evaluated as None unless it has a default."""
        contract = KeywordsContract()
        contract.add_keyword_constraint("size", int)
        contract.add_keyword_constraint("color", str, default=True)

        assert contract.errors_for({}) == [is_not_type(["size"], int)]

    def test_extra_keywords(self):
        """Test keywords without a constraint are reported."""
        contract = KeywordsContract().add_keyword_constraint("size", int)

        assert contract.errors_for({"size": 1, "color": "red"}) == [
            {"type": "verity.constraints.parameters.extra_keywords", "path": ["color"], "data": {"value": "red"}}
        ]

    def test_string_keys_only(self):
        """Test every keyword must be a string."""
        assert not KeywordsContract().matches({1: "a"})

    def test_variadic_value_constraint(self):
        """Test the variadic constraint applies to the remaining keywords."""
        contract = KeywordsContract().add_keyword_constraint("size", int)
        contract.set_variadic_value_constraint(str, as_="options")

        assert contract.matches({"size": 1, "color": "red"})
        assert contract.errors_for({"size": 1, "count": 3}) == [is_not_type(["options", "count"], str)]

    def test_invalid_keywords(self):
        """Test keywords must be unique non-empty strings."""
        contract = KeywordsContract().add_keyword_constraint("size", int)

        with pytest.raises(ValueError):
            contract.add_keyword_constraint("size", str)
        with pytest.raises(ValueError):
            contract.add_keyword_constraint(1, str)
        with pytest.raises(ValueError):
            contract.add_keyword_constraint("", str)

    def test_duplicate_keeps_variadic(self):
        """Test a duplicate keeps the variadic constraint and expects its own keywords."""
        contract = KeywordsContract().add_keyword_constraint("size", int)
        contract.set_variadic_value_constraint(str, as_="options")
        duplicate = contract.with_options(message="is invalid")
        duplicate.add_keyword_constraint("count", int)

        assert duplicate.matches({"size": 1, "count": 2, "color": "red"})
        assert contract.errors_for({"size": 1, "count": 2}) == [is_not_type(["options", "count"], str)]


class TestParametersContract:
    """Test full call signatures."""

    def contract(self):
        contract = ParametersContract()
        contract.argument("name", str)
        contract.argument("size", int, default=True)
        contract.keyword("verbose", bool, default=True)
        return contract

    def test_valid_calls(self):
        """Test calls matching the signature."""
        contract = self.contract()

        assert contract.matches(params("box"))
        assert contract.matches(params("box", 3, verbose=True))

    def test_argument_errors_use_names(self):
        """Test argument errors are reported by argument name."""
        assert self.contract().errors_for(params(3, "large")) == [
            is_not_type(["arguments", "name"], str),
            is_not_type(["arguments", "size"], int),
        ]

    def test_missing_argument(self):
        """Test a missing required argument is reported."""
        assert self.contract().errors_for(params()) == [is_not_type(["arguments", "name"], str)]

    def test_extra_arguments_and_keywords(self):
        """Test unexpected arguments and keywords are reported."""
        errors = self.contract().errors_for(params("box", 1, 2, color="red"))

        assert errors == [
            {"type": "verity.constraints.parameters.extra_arguments", "path": ["arguments", 2], "data": {"value": 2}},
            {"type": "verity.constraints.parameters.extra_keywords", "path": ["keywords", "color"], "data": {"value": "red"}},
        ]

    def test_variadic_parameters(self):
        """Test variadic arguments and keywords."""
        contract = self.contract()
        contract.arguments("rest", str)
        contract.keywords("options", int)

        assert contract.matches(params("box", 1, "a", "b", verbose=False, depth=2))
        assert contract.errors_for(params("box", 1, "a", 2, depth="deep")) == [
            is_not_type(["arguments", "rest", 1], str),
            is_not_type(["keywords", "options", "depth"], int),
        ]

    def test_required_block(self):
        """Test a required block must be callable."""
        contract = self.contract().block(True)

        assert contract.matches(params("box", block=print))
        assert contract.errors_for(params("box")) == [is_not_type(["block"], collections.abc.Callable)]

    def test_forbidden_block(self):
        """Test a forbidden block must be None."""
        contract = self.contract().block(False)

        assert contract.matches(params("box"))
        assert contract.errors_for(params("box", block=print)) == [
            {
                "type": "verity.constraints.types.is_not_none",
                "path": ["block"],
                "data": {"required": True, "type": type(None)},
            }
        ]

    def test_signature_sanity(self):
        """Test malformed parameter mappings fail the sanity check only."""
        contract = self.contract()

        assert contract.errors_for([]) == [
            {
                "type": "verity.constraints.is_not_type",
                "data": {"allow_empty": True, "required": True, "type": dict},
            }
        ]
        errors = contract.errors_for({"arguments": "box", "keywords": {}, "block": None})
        assert errors == [is_not_type(["arguments"], list, allow_empty=True)]

    def test_signature_rejects_unknown_keys(self):
        """Test parameter mappings may only have the known keys."""
        errors = self.contract().errors_for({**params("box"), "other": 1})

        assert errors == [{"type": "verity.constraints.hashes.extra_keys", "path": ["other"], "data": {"value": 1}}]

    def test_duplicate_definitions(self):
        """Test arguments, variadics and the block are defined once."""
        contract = self.contract().arguments("rest", str).block(True)

        with pytest.raises(ValueError):
            contract.argument("name", int)
        with pytest.raises(ValueError):
            contract.keyword("verbose", str)
        with pytest.raises(ValueError):
            contract.arguments("more", int)
        with pytest.raises(ValueError):
            contract.block(False)

    def test_block_constraint(self):
        """Test the block accepts an explicit constraint."""
        contract = ParametersContract().block(StringType(optional=True))

        assert contract.block_constraint == StringType(optional=True)

    def test_duplicate_has_its_own_signature(self):
        """Test arguments added to a duplicate leave the original unchanged."""
        contract = self.contract()
        duplicate = contract.with_options(message="is invalid")
        duplicate.argument("count", int)

        assert duplicate.arguments_contract is not contract.arguments_contract
        assert duplicate.matches(params("box", 1, 2))
        assert not contract.matches(params("box", 1, 2))
        assert contract.argument("count", str) is contract

    def test_equality(self):
        """Test signatures compare by their argument, keyword and block constraints."""
        assert self.contract() == self.contract()
        assert self.contract() != ParametersContract()
        assert self.contract() != self.contract().arguments("rest", str)
        assert self.contract() != self.contract().keywords("options", int)
        assert self.contract().block(True) != self.contract().block(False)


class TestValidateParameters:
    """Test the validate_parameters decorator."""

    @staticmethod
    def build(contract):
        contract.argument("name", str)
        contract.argument("size", int, default=True)

    def test_valid_call(self):
        """Test a valid call reaches the function."""

        @validate_parameters(self.build)
        def make_box(name, size=1):
            return name, size

        assert make_box("box") == ("box", 1)
        assert make_box("box", 2) == ("box", 2)
        assert make_box.__name__ == "make_box"

    def test_invalid_call(self):
        """Test an invalid call raises with the errors attached."""

        @validate_parameters(self.build)
        def make_box(name, size=1):
            return name, size

        with pytest.raises(InvalidParametersError) as exc_info:
            make_box(3)

        assert isinstance(exc_info.value, TypeError)
        assert exc_info.value.errors == [is_not_type(["arguments", "name"], str)]
        assert "make_box" in str(exc_info.value)
        assert "arguments.name: verity.constraints.is_not_type" in str(exc_info.value)

    def test_block_parameter(self):
        """Test the named keyword is validated as the block."""

        def build(contract):
            contract.argument("items", list)
            contract.block(True)

        @validate_parameters(build, block_param="callback")
        def each(items, callback=None):
            return [callback(item) for item in items]

        assert each([1, 2], callback=str) == ["1", "2"]
        with pytest.raises(InvalidParametersError) as exc_info:
            each([1, 2])
        assert exc_info.value.errors == [is_not_type(["block"], collections.abc.Callable)]

    def test_contract_is_exposed(self):
        """Test the wrapped function exposes its contract."""
        contract = ParametersContract().argument("name", str)

        @validate_parameters(contract)
        def greet(name):
            return f"hello {name}"

        assert greet.__contract__ is contract
        assert greet("you") == "hello you"

    def test_invalid_builder(self):
        """Test the contract argument must be a contract or a callable."""
        with pytest.raises(TypeError):
            build_parameters_contract(3)
