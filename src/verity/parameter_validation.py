"""Call-time validation of function parameters.

Example:
    def build(contract):
        contract.argument("name", str)
        contract.keyword("size", int, default=True)

    @validate_parameters(build)
    def make_box(name, size=1):
        ...

    make_box("box", size="large")
    # InvalidParametersError: invalid parameters for make_box:
    #   keywords.size: verity.constraints.is_not_type
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from verity.contracts.parameters import ParametersContract
from verity.errors import Errors

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class InvalidParametersError(TypeError):
    """Error raised when a call does not match its parameters contract."""

    def __init__(self, message: str, errors: Errors | None = None):
        super().__init__(message)
        self.errors = errors if errors is not None else Errors()


def build_parameters_contract(
    contract_or_builder: ParametersContract | Callable[[ParametersContract], Any],
) -> ParametersContract:
    """Return a parameters contract, building it from a callback if needed.

    Raises:
        TypeError: If the argument is neither a contract nor a callable
    """
    if isinstance(contract_or_builder, ParametersContract):
        return contract_or_builder
    if callable(contract_or_builder):
        contract = ParametersContract()
        contract_or_builder(contract)
        return contract
    raise TypeError("expected a ParametersContract or a callable building one")


def validate_parameters(
    contract_or_builder: ParametersContract | Callable[[ParametersContract], Any],
    block_param: str | None = None,
) -> Callable[[F], F]:
    """Decorate a function so each call is checked against a parameters contract.

    Args:
        contract_or_builder: A ParametersContract, or a callable that
            configures a new one
        block_param: Name of a keyword parameter validated as the block
            instead of as a keyword

    Returns:
        Decorator; the wrapped function exposes the contract as ``__contract__``

    Raises:
        InvalidParametersError: At call time, if the parameters do not match
    """
    contract = build_parameters_contract(contract_or_builder)

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            keywords = dict(kwargs)
            block = keywords.pop(block_param, None) if block_param else None
            parameters = {"arguments": list(args), "keywords": keywords, "block": block}

            ok, errors = contract.match(parameters)
            if not ok:
                logger.debug(f"Rejected call to {func.__qualname__}: {errors.summary()}")
                raise InvalidParametersError(
                    f"invalid parameters for {func.__qualname__}: {errors.summary()}",
                    errors,
                )
            return func(*args, **kwargs)

        wrapper.__contract__ = contract  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorator
