"""Definition record binding a constraint to its owning contract."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from verity.constraints.base import Constraint

if TYPE_CHECKING:
    from verity.contracts.base import BaseContract


@dataclass(frozen=True, eq=False)
class Definition:
    """A constraint registered on a contract, with its registration options.

    Options drive how the owning contract maps the evaluated value and the
    errors scope (``property``, ``property_name``, ``property_type``), and
    whether the definition is a sanity check (``sanity``).
    """

    constraint: Constraint
    contract: BaseContract
    options: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def sanity(self) -> bool:
        """True if a failed match stops evaluation of the contract."""
        return bool(self.options.get("sanity", False))

    @property
    def property_name(self) -> Any:
        """Name used to scope errors; defaults to the property itself."""
        return self.options.get("property_name", self.options.get("property"))

    # Must stay the last property in the class body: it shadows the builtin.
    @property
    def property(self) -> Any:
        return self.options.get("property")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Definition):
            return NotImplemented
        return (
            other.constraint == self.constraint
            and other.contract is self.contract
            and dict(other.options) == dict(self.options)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Definition(constraint={self.constraint!r}, "
            f"contract={type(self.contract).__name__}, options={dict(self.options)!r})"
        )
