"""Declarative contract documents.

Builds contract graphs from plain data (dicts, or YAML/JSON files):

    contract: dict
    allow_extra_keys: false
    keys:
      name: {presence: true}
      age: {type: int, optional: true}
      color: {enum: [red, green, blue]}
      tags: {contract: list, item_type: str}

A node with a ``contract`` key builds a contract; any other node builds a
single constraint and holds exactly one constraint key. A key, item or
property may also hold a list of nodes, each registered in order.

Documents are validated against CONTRACT_DOCUMENT_SCHEMA (JSON Schema
Draft 7) before anything is built.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from verity.coercion import presence_constraint
from verity.constraints.base import Constraint
from verity.constraints.boolean import Boolean
from verity.constraints.enumeration import Enum
from verity.constraints.equality import Equality, Identity
from verity.constraints.format import Format, Uuid
from verity.constraints.presence import Absence, Presence
from verity.constraints.sentinels import Anything, Nothing
from verity.constraints.type import Type
from verity.constraints.types import (
    BooleanType,
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
)
from verity.constraints.union import Union
from verity.contracts.base import BaseContract
from verity.contracts.map_contract import DictContract, IndifferentDictContract, MapContract
from verity.contracts.property_contract import Contract
from verity.contracts.tuple_contract import ListContract, TupleContract
from verity.errors import format_path

logger = logging.getLogger(__name__)

CONTRACT_KINDS = ("map", "dict", "indifferent_dict", "tuple", "list", "property")

CONSTRAINT_KEYS = (
    "presence",
    "absence",
    "type",
    "equal",
    "identical",
    "enum",
    "union",
    "format",
    "uuid",
    "boolean",
    "anything",
    "nothing",
)

# Members each contract kind may constrain
KIND_MEMBERS = {
    "map": "keys",
    "dict": "keys",
    "indifferent_dict": "keys",
    "tuple": "items",
    "list": "items",
    "property": "properties",
}

TYPE_ALIASES: dict[str, type[Type]] = {
    "bool": BooleanType,
    "boolean": BooleanType,
    "date": DateType,
    "datetime": DateTimeType,
    "decimal": DecimalType,
    "dict": DictType,
    "float": FloatType,
    "int": IntegerType,
    "integer": IntegerType,
    "list": ListType,
    "none": NoneType,
    "null": NoneType,
    "str": StringType,
    "string": StringType,
    "time": TimeType,
}

CONTRACT_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "allOf": [{"$ref": "#/definitions/contract"}],
    "definitions": {
        "node": {
            "oneOf": [
                {"$ref": "#/definitions/contract"},
                {"$ref": "#/definitions/constraint"},
            ],
        },
        "nodes": {
            "anyOf": [
                {"$ref": "#/definitions/node"},
                {"type": "array", "items": {"$ref": "#/definitions/node"}},
            ],
        },
        "contract": {
            "type": "object",
            "required": ["contract"],
            "properties": {
                "contract": {"enum": list(CONTRACT_KINDS)},
                "description": {"type": "string"},
                "sanity": {"type": "boolean"},
                "allow_extra_keys": {"type": "boolean"},
                "allow_extra_items": {"type": "boolean"},
                "key_type": {"type": "string"},
                "value_type": {"type": "string"},
                "item_type": {"type": "string"},
                "keys": {
                    "type": "object",
                    "additionalProperties": {"$ref": "#/definitions/nodes"},
                },
                "items": {
                    "type": "array",
                    "items": {"$ref": "#/definitions/nodes"},
                },
                "properties": {
                    "type": "object",
                    "additionalProperties": {"$ref": "#/definitions/nodes"},
                },
                "constraints": {
                    "type": "array",
                    "items": {"$ref": "#/definitions/node"},
                },
            },
            "additionalProperties": False,
        },
        "constraint": {
            "type": "object",
            "properties": {
                "presence": {"type": "boolean"},
                "absence": {"type": "boolean"},
                "type": {"type": "string", "minLength": 1},
                "optional": {"type": "boolean"},
                "equal": {},
                "identical": {},
                "enum": {"type": "array", "minItems": 1},
                "union": {
                    "type": "array",
                    "minItems": 1,
                    "items": {"$ref": "#/definitions/node"},
                },
                "format": {"type": "string"},
                "uuid": {"const": True},
                "boolean": {"const": True},
                "anything": {"const": True},
                "nothing": {"const": True},
                "message": {"type": "string"},
                "negated_message": {"type": "string"},
                "sanity": {"type": "boolean"},
            },
            "additionalProperties": False,
            "oneOf": [{"required": [key]} for key in CONSTRAINT_KEYS],
        },
    },
}


class ContractDocumentError(ValueError):
    """Error raised when a contract document is invalid."""

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


def validate_contract_document(document: Any) -> list[str]:
    """Validate a contract document against the document schema.

    Returns:
        List of error messages, ordered by location (empty if valid)
    """
    validator = jsonschema.Draft7Validator(CONTRACT_DOCUMENT_SCHEMA)
    errors = sorted(validator.iter_errors(document), key=lambda e: [str(p) for p in e.absolute_path])
    return [f"{_location(error.absolute_path)}: {error.message}" for error in errors]


def load_contract(document: dict[str, Any]) -> BaseContract:
    """Build a contract from a contract document.

    Raises:
        ContractDocumentError: If the document is invalid
    """
    errors = validate_contract_document(document)
    if errors:
        raise ContractDocumentError(f"Invalid contract document ({len(errors)} errors)", errors)
    return _build_contract(document, ())


def load_contract_file(path: Path | str) -> BaseContract:
    """Build a contract from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ContractDocumentError: If the file does not hold a valid document
    """
    path = Path(path)
    document = load_document(path)
    if not isinstance(document, dict):
        raise ContractDocumentError(f"Invalid contract document in {path}: expected a mapping")

    contract = load_contract(document)
    logger.info(f"Loaded {type(contract).__name__} from {path}")
    return contract


def load_document(path: Path) -> Any:
    """Read a JSON (``.json``) or YAML (anything else) file."""
    with open(path, encoding="utf-8") as f:
        if path.suffix == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def _location(path: Any) -> str:
    return format_path(list(path)) or "<root>"


def _invalid(path: tuple[Any, ...], reason: Any) -> ContractDocumentError:
    location = _location(path)
    return ContractDocumentError(f"Invalid contract document at {location}", [f"{location}: {reason}"])


def _as_list(nodes: Any) -> list[dict[str, Any]]:
    return nodes if isinstance(nodes, list) else [nodes]


def _build_node(node: dict[str, Any], path: tuple[Any, ...]) -> Constraint:
    if "contract" in node:
        return _build_contract(node, path)
    return _build_constraint(node, path)


def _build_contract(node: dict[str, Any], path: tuple[Any, ...]) -> BaseContract:
    kind = node["contract"]
    members = KIND_MEMBERS[kind]
    for key in sorted(set(KIND_MEMBERS.values()) - {members}):
        if key in node:
            raise _invalid(path, f"{kind} contracts can't constrain {key}")

    try:
        contract = _new_contract(kind, node)
    except (TypeError, ValueError) as e:
        raise _invalid(path, e) from e

    if members == "keys":
        for key, nodes in node.get("keys", {}).items():
            for child in _as_list(nodes):
                constraint = _build_node(child, (*path, "keys", key))
                contract.add_key_constraint(key, constraint, sanity=child.get("sanity", False))
    elif members == "items":
        for index, nodes in enumerate(node.get("items", [])):
            for child in _as_list(nodes):
                constraint = _build_node(child, (*path, "items", index))
                contract.add_index_constraint(index, constraint, sanity=child.get("sanity", False))
    else:
        for name, nodes in node.get("properties", {}).items():
            for child in _as_list(nodes):
                constraint = _build_node(child, (*path, "properties", name))
                contract.add_property_constraint(name.split("."), constraint, sanity=child.get("sanity", False))

    for index, child in enumerate(node.get("constraints", [])):
        constraint = _build_node(child, (*path, "constraints", index))
        contract.add_constraint(constraint, sanity=child.get("sanity", False))

    return contract


def _new_contract(kind: str, node: dict[str, Any]) -> BaseContract:
    if kind == "map":
        return MapContract(allow_extra_keys=node.get("allow_extra_keys", False))
    if kind == "dict":
        return DictContract(
            key_type=_type_constraint(node.get("key_type")),
            value_type=_type_constraint(node.get("value_type")),
            allow_extra_keys=node.get("allow_extra_keys", False),
        )
    if kind == "indifferent_dict":
        return IndifferentDictContract(
            value_type=_type_constraint(node.get("value_type")),
            allow_extra_keys=node.get("allow_extra_keys", False),
        )
    if kind == "tuple":
        return TupleContract(allow_extra_items=node.get("allow_extra_items", False))
    if kind == "list":
        return ListContract(
            item_type=_type_constraint(node.get("item_type")),
            allow_extra_items=node.get("allow_extra_items", True),
        )
    return Contract()


def _type_constraint(name: str | None, **options: Any) -> Type | None:
    if name is None:
        return None
    if name in TYPE_ALIASES:
        return TYPE_ALIASES[name](**options)
    return Type(name, **options)


def _build_constraint(node: dict[str, Any], path: tuple[Any, ...]) -> Constraint:
    options = {key: node[key] for key in ("message", "negated_message") if key in node}
    try:
        return _new_constraint(node, path, options)
    except ContractDocumentError:
        raise
    except (TypeError, ValueError, re.error) as e:
        raise _invalid(path, e) from e


def _new_constraint(node: dict[str, Any], path: tuple[Any, ...], options: dict[str, Any]) -> Constraint:
    if "presence" in node:
        return presence_constraint(node["presence"], **options)
    if "absence" in node:
        return Absence(**options) if node["absence"] else Presence(**options)
    if "type" in node:
        if "optional" in node:
            options["optional"] = node["optional"]
        return _type_constraint(node["type"], **options)
    if "equal" in node:
        return Equality(node["equal"], **options)
    if "identical" in node:
        return Identity(node["identical"], **options)
    if "enum" in node:
        return Enum(*node["enum"], **options)
    if "union" in node:
        members = [_build_node(child, (*path, "union", i)) for i, child in enumerate(node["union"])]
        return Union(*members, **options)
    if "format" in node:
        return Format(re.compile(node["format"]), **options)
    if "uuid" in node:
        return Uuid(**options)
    if "boolean" in node:
        return Boolean(**options)
    if "anything" in node:
        return Anything(**options)
    return Nothing(**options)
