"""Coercion of constraint-or-shorthand arguments.

Registration methods accept either a constraint or a shorthand for one: a
class (or class name) for a type constraint, or a bool for a presence
constraint. These helpers normalize such arguments.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from verity.constraints.base import Constraint
from verity.constraints.presence import Absence, Presence
from verity.constraints.type import Type


def type_constraint(
    value: Any,
    allow_none: bool = False,
    as_: str = "type",
    factory: Callable[..., Constraint] | None = None,
    **options: Any,
) -> Constraint | None:
    """Coerce a class, class name or constraint into a constraint.

    Args:
        value: Class, class name, or constraint
        allow_none: If True, None is passed through
        as_: Name of the argument, used in error messages
        factory: Builds the constraint from a class; defaults to Type
        **options: Options applied to the resulting constraint

    Returns:
        A constraint, or None when allowed

    Raises:
        ValueError: If the value cannot be coerced
    """
    if value is None and allow_none:
        return None

    if isinstance(value, Constraint):
        return value.with_options(**options) if options else value

    if isinstance(value, (type, str)):
        if factory is not None:
            return factory(value, **options)
        return Type(value, **options)

    raise ValueError(f"{as_} must be a class or a constraint")


def presence_constraint(
    present: Any,
    allow_none: bool = False,
    as_: str = "present",
    factory: Callable[..., Constraint] | None = None,
    **options: Any,
) -> Constraint | None:
    """Coerce a bool or constraint into a presence constraint.

    True builds Presence, False builds Absence, unless a factory is given,
    in which case ``factory(present, **options)`` builds the constraint.

    Raises:
        ValueError: If the value cannot be coerced
    """
    if present is None and allow_none:
        return None

    if isinstance(present, Constraint):
        return present.with_options(**options) if options else present

    if present is True or present is False:
        if factory is not None:
            return factory(present, **options)
        return Presence(**options) if present else Absence(**options)

    raise ValueError(f"{as_} must be True or False or a constraint")
