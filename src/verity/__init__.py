"""Verity - runtime structural validation.

Constraints check a single condition on a value; contracts compose
constraints and map them onto keys, indices and attributes of the value.
Every failure is reported as a record at the path of the offending value.

Example:
    from verity import DictContract, Enum, IntegerType, Presence

    contract = DictContract()
    contract.add_key_constraint("name", Presence())
    contract.add_key_constraint("color", Enum("red", "green", "blue"))
    contract.add_key_constraint("size", IntegerType(optional=True))

    ok, errors = contract.match({"name": "box", "color": "yellow"})
    # ok is False
    # errors.summary() == "color: verity.constraints.is_not_in_list"
"""

__version__ = "0.1.0"

from verity.config import VerityConfig, get_config, reset_config, set_config

# Constraints load before verity.coercion, which the type constraints use
from verity.constraints import (
    Absence,
    Anything,
    Boolean,
    BooleanType,
    CallableType,
    Constraint,
    DateTimeType,
    DateType,
    DecimalType,
    Delegator,
    DictType,
    DoNotMatchProperty,
    Enum,
    Equality,
    ExtraArguments,
    ExtraItems,
    ExtraKeys,
    ExtraKeywords,
    FloatType,
    Format,
    Identity,
    IndifferentExtraKeys,
    IndifferentKey,
    IntegerType,
    ListType,
    MapSignature,
    MatchProperty,
    MissingItems,
    NoneType,
    Nothing,
    Presence,
    Signature,
    StringType,
    TimeType,
    TupleSignature,
    TupleType,
    Type,
    Union,
    Uuid,
)
from verity.contracts import (
    UNDEFINED,
    ArgumentsContract,
    BaseContract,
    Contract,
    Definition,
    DictContract,
    IndifferentDictContract,
    KeywordsContract,
    ListContract,
    MapContract,
    ParametersContract,
    PropertyContract,
    SignatureContract,
    TupleContract,
)
from verity.errors import Errors
from verity.loader import ContractDocumentError, load_contract, load_contract_file
from verity.parameter_validation import InvalidParametersError, validate_parameters

__all__ = [
    "__version__",
    # Errors
    "Errors",
    # Configuration
    "VerityConfig",
    "get_config",
    "reset_config",
    "set_config",
    # Constraints
    "Absence",
    "Anything",
    "Boolean",
    "BooleanType",
    "CallableType",
    "Constraint",
    "DateTimeType",
    "DateType",
    "DecimalType",
    "Delegator",
    "DictType",
    "DoNotMatchProperty",
    "Enum",
    "Equality",
    "ExtraArguments",
    "ExtraItems",
    "ExtraKeys",
    "ExtraKeywords",
    "FloatType",
    "Format",
    "Identity",
    "IndifferentExtraKeys",
    "IndifferentKey",
    "IntegerType",
    "ListType",
    "MapSignature",
    "MatchProperty",
    "MissingItems",
    "NoneType",
    "Nothing",
    "Presence",
    "Signature",
    "StringType",
    "TimeType",
    "TupleSignature",
    "TupleType",
    "Type",
    "Union",
    "Uuid",
    # Contracts
    "UNDEFINED",
    "ArgumentsContract",
    "BaseContract",
    "Contract",
    "Definition",
    "DictContract",
    "IndifferentDictContract",
    "KeywordsContract",
    "ListContract",
    "MapContract",
    "ParametersContract",
    "PropertyContract",
    "SignatureContract",
    "TupleContract",
    # Documents and decorators
    "ContractDocumentError",
    "InvalidParametersError",
    "load_contract",
    "load_contract_file",
    "validate_parameters",
]
