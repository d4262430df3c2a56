"""Constraints: single predicates over a value with paired error generation.

Every constraint exposes matches / does_not_match, errors_for /
negated_errors_for and match / negated_match. Error records use the
constraint's namespaced ``type`` and ``negated_type`` tokens.
"""

from verity.constraints.base import Constraint
from verity.constraints.boolean import Boolean
from verity.constraints.delegator import Delegator
from verity.constraints.enumeration import Enum
from verity.constraints.equality import Equality, Identity
from verity.constraints.format import Format, Uuid
from verity.constraints.hashes import ExtraKeys, IndifferentExtraKeys, IndifferentKey
from verity.constraints.parameters import ExtraArguments, ExtraKeywords
from verity.constraints.presence import Absence, Presence
from verity.constraints.properties import DoNotMatchProperty, MatchProperty
from verity.constraints.sentinels import Anything, Nothing
from verity.constraints.signature import MapSignature, Signature, TupleSignature
from verity.constraints.tuples import ExtraItems, MissingItems
from verity.constraints.type import Type
from verity.constraints.types import (
    BooleanType,
    CallableType,
    DateTimeType,
    DateType,
    DecimalType,
    DictType,
    FloatType,
    IntegerType,
    ListType,
    NoneType,
    StringType,
    TimeType,
    TupleType,
)
from verity.constraints.union import Union

__all__ = [
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
]
