"""Validation result containers.

Path-tagged validation errors and a result object that aggregates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic_core import PydanticCustomError

__all__ = ["ErrorCollector", "ValidationError", "ValidationResult"]


@dataclass
class ValidationError:
    """A single validation error.

    Attributes:
        path: Dot-joined field keys locating the failure (e.g. "engines.type").
            An empty or missing path means the root of the validation call.
        error: Human readable error message.
    """

    path: str | None
    error: str

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.error}"
        return self.error


ErrorCollector = list[ValidationError]


@dataclass
class ValidationResult:
    """Result of validation with error aggregation."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(self, path: str | None, error: str) -> None:
        """Add a validation error."""
        self.errors.append(ValidationError(path=path, error=error))
        self.is_valid = False

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Merge another validation result into this one.

        This method mutates the current instance in-place by extending
        its errors list with errors from the other result.

        Args:
            other: Another ValidationResult to merge into this one.

        Returns:
            Self, for method chaining (e.g., result.merge(a).merge(b)).
        """
        if not other.is_valid:
            self.is_valid = False
            self.errors.extend(other.errors)
        return self

    @property
    def error_summary(self) -> list[tuple[str, str]]:
        """Get (path, error) tuples for all errors."""
        return [(err.path or "", err.error) for err in self.errors]

    def raise_for_errors(self) -> None:
        """Raise if this result is invalid.

        Raises:
            PydanticCustomError: With error type "validation_error". The
                context carries the individual errors under "errors".
        """
        if self.is_valid:
            return
        context: dict[str, Any] = {
            "errors": [{"path": err.path or "", "error": err.error} for err in self.errors],
        }
        raise PydanticCustomError(
            "validation_error",
            "; ".join(str(err) for err in self.errors) or "Value is not valid",
            context,
        )
