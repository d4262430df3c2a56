"""String format constraints."""

from __future__ import annotations

import re
from typing import Any

from verity.constraints.base import Constraint
from verity.constraints.type import Type
from verity.errors import Errors


class Format(Constraint):
    """Asserts that the value is a string matching the expected format.

    A string format must appear as a substring; a compiled pattern must
    match somewhere in the value (``re.search``). Values that are not
    strings fail with a type error instead of a format error.
    """

    NEGATED_TYPE = "verity.constraints.matches_format"
    TYPE = "verity.constraints.does_not_match_format"

    def __init__(self, expected_format: str | re.Pattern[str], **options: Any) -> None:
        if not isinstance(expected_format, (str, re.Pattern)):
            raise TypeError("expected format must be a string or a compiled pattern")
        super().__init__(expected_format=expected_format, **options)
        self._type_constraint = Type(str)

    @property
    def expected_format(self) -> str | re.Pattern[str]:
        return self._options["expected_format"]

    def matches(self, actual: Any) -> bool:
        if not self._type_constraint.matches(actual):
            return False

        if isinstance(self.expected_format, str):
            return self.expected_format in actual
        return self.expected_format.search(actual) is not None

    def _format_data(self) -> dict[str, Any]:
        expected = self.expected_format
        return {"format": expected if isinstance(expected, str) else expected.pattern}

    def _update_errors_for(self, actual: Any, errors: Errors) -> Errors:
        if not self._type_constraint.matches(actual):
            return self._type_constraint.errors_for(actual, errors=errors)
        return errors.add(self.type, message=self.message, **self._format_data())

    def _update_negated_errors_for(self, actual: Any, errors: Errors) -> Errors:
        return errors.add(self.negated_type, message=self.negated_message, **self._format_data())


class Uuid(Format):
    """Asserts that the value is a string in canonical UUID format."""

    NEGATED_TYPE = "verity.constraints.is_a_uuid"
    TYPE = "verity.constraints.is_not_a_uuid"

    UUID_FORMAT = re.compile(
        r"\A[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z"
    )

    def __init__(self, **options: Any) -> None:
        super().__init__(self.UUID_FORMAT, **options)
