"""Contracts: composite constraints with value and error path mapping."""

from verity.contracts.base import BaseContract
from verity.contracts.definition import Definition
from verity.contracts.map_contract import DictContract, IndifferentDictContract, MapContract
from verity.contracts.parameters import (
    UNDEFINED,
    ArgumentsContract,
    KeywordsContract,
    ParametersContract,
    SignatureContract,
)
from verity.contracts.property_contract import Contract, PropertyContract
from verity.contracts.tuple_contract import ListContract, TupleContract

__all__ = [
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
]
