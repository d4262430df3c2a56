"""Constraints on extra call arguments."""

from __future__ import annotations

from verity.constraints.hashes import ExtraKeys
from verity.constraints.tuples import ExtraItems


class ExtraArguments(ExtraItems):
    NEGATED_TYPE = "verity.constraints.parameters.no_extra_arguments"
    TYPE = "verity.constraints.parameters.extra_arguments"


class ExtraKeywords(ExtraKeys):
    NEGATED_TYPE = "verity.constraints.parameters.no_extra_keywords"
    TYPE = "verity.constraints.parameters.extra_keywords"
