"""Validation protocols for type checking.

Generic validator protocol that can be used for type hints.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from fluent_validators.results import ValidationError


@runtime_checkable
class ValidatorProtocol(Protocol):
    """Protocol for anything that can act as a validator.

    Called with just a value it is a plain predicate. Called with an error
    collector it appends one error per detected problem before returning False.
    """

    def __call__(
        self,
        value: Any,
        error_collector: list[ValidationError] | None = None,
        path: str | None = None,
    ) -> bool:
        """Judge a value."""
        ...
