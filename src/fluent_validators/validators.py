"""Composable validators and the fluent builder API.

A Validator is an immutable callable. Called with just a value it works as a
type guard; called with an error collector it also appends a path-tagged
ValidationError for every problem it finds. Every chain method returns a new
Validator with one more rule than the receiver, so a validator can be shared
as the base of several independent derived validators.

Example:
    from fluent_validators import validator_for

    engine_validator = validator_for().with_rule_for(
        "type",
        lambda kind: kind in ("Fusion Rocket", "Chemical Rocket"),
        lambda kind: f"{kind} is not a valid engine type",
    )

    spaceship_validator = (
        validator_for()
        .with_rule(lambda ship: ship["crew_count"] > 0, lambda ship: "Spaceships need a crew!")
        .with_rule_for("name", lambda name: len(name) > 0, lambda name: "Ships need cool names")
        .with_rule_for("engines", engine_validator)
    )

    errors = []
    spaceship_validator(ship, errors)
    # errors -> [ValidationError(path="engines.type", error="Reactionless is not ...")]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeGuard, TypeVar

from fluent_validators.paths import get_field, has_own_field, join_object_paths
from fluent_validators.results import ValidationError, ValidationResult

__all__ = [
    "Check",
    "ErrorMessageBuilder",
    "Validator",
    "ValidatorBuilder",
    "option_validator",
    "validator_for",
]

T = TypeVar("T")

Check = Callable[[Any], Any]
"""Predicate over a value. Its result is used for its truthiness."""

ErrorMessageBuilder = Callable[[Any], str]
"""Builds an error message from the value that failed a check."""

Evaluate = Callable[[Any, list[ValidationError] | None, str | None], bool]


class Validator(Generic[T]):
    """Immutable validator with chainable composition methods.

    A validator holds a flat tuple of rules. Calling it runs every rule,
    newest first, against the same value, path and collector, and conforms
    only if all of them pass. Chain methods return a new validator with one
    more rule, so chains of any length evaluate without deepening the stack.

    Instances should be created through validator_for(), the primitive rules
    in fluent_validators.rules, or the chain methods of another validator.
    """

    __slots__ = ("_name", "_rules")

    def __init__(self, *rules: Evaluate, name: str = "validator") -> None:
        self._rules = rules
        self._name = name

    @property
    def name(self) -> str:
        """Description of how this validator was built."""
        return self._name

    def __call__(
        self,
        value: Any,
        error_collector: list[ValidationError] | None = None,
        path: str | None = None,
    ) -> TypeGuard[T]:
        """Judge a value.

        Args:
            value: The value to validate.
            error_collector: Optional list that receives one ValidationError per
                detected problem. Omit it to use the validator as a plain predicate.
            path: Dot-joined object path of ``value`` within the root subject.

        Returns:
            True if the value conforms.
        """
        is_valid = True
        for rule in reversed(self._rules):
            if not rule(value, error_collector, path):
                is_valid = False
        return is_valid

    def _extend(self, rule: Evaluate, name: str) -> Validator[T]:
        return Validator(*self._rules, rule, name=name)

    def with_rule(
        self,
        rule: Validator[T] | Check,
        error_message_builder: ErrorMessageBuilder | None = None,
    ) -> Validator[T]:
        """Add a rule checking the whole value.

        Args:
            rule: A check function, or a pre-built validator for the whole value.
            error_message_builder: Builds the error message when ``rule`` is a
                check. Must be omitted when ``rule`` is a validator.

        Returns:
            A new validator. This validator is left unchanged.
        """
        actual_rule = _as_validator(rule, error_message_builder)
        return self._extend(actual_rule, name=f"{self._name}.with_rule({actual_rule.name})")

    def with_rule_for(
        self,
        key: str,
        rule: Validator[Any] | Check,
        error_message_builder: ErrorMessageBuilder | None = None,
    ) -> Validator[T]:
        """Add a rule for the field ``key``.

        The field must be present as an own field of the value. Errors raised
        by the rule carry ``key`` appended to the current path, so nested
        sub-validators build up paths like ``engines.type``.

        Args:
            key: Name of the field to validate.
            rule: A check function, or a sub-validator for the field value.
            error_message_builder: Builds the error message when ``rule`` is a
                check. Must be omitted when ``rule`` is a validator.

        Returns:
            A new validator. This validator is left unchanged.
        """
        field_validator = _as_validator(rule, error_message_builder)
        return self._extend(
            _field_rule(key, field_validator),
            name=f"{self._name}.with_rule_for({key!r}, {field_validator.name})",
        )

    def and_also(self, other: Validator[T]) -> Validator[T]:
        """Require ``other`` to pass on the same value as well."""
        return self.with_rule(other)

    def is_optional(self) -> Validator[T | None]:
        """Accept None in addition to whatever this validator accepts."""
        return option_validator(self)

    def validate(self, value: Any, path: str | None = None) -> ValidationResult:
        """Validate a value with a fresh error collector.

        Args:
            value: The value to validate.
            path: Optional root path for reported errors.

        Returns:
            ValidationResult with every error found.
        """
        errors: list[ValidationError] = []
        is_valid = bool(self(value, errors, path))
        return ValidationResult(is_valid=is_valid, errors=errors)

    def __repr__(self) -> str:
        return f"Validator(name={self._name!r})"


ValidatorBuilder = Validator


def _as_validator(
    rule: Validator[Any] | Check,
    error_message_builder: ErrorMessageBuilder | None,
) -> Validator[Any]:
    if isinstance(rule, Validator):
        if error_message_builder is not None:
            raise TypeError("An error message builder cannot be combined with a validator")
        return rule
    if error_message_builder is None:
        raise TypeError(
            "A check function needs an error message builder; "
            "pass a Validator to reuse its messages"
        )
    return validator_for(rule, error_message_builder)


def _field_rule(key: str, field_validator: Validator[Any]) -> Evaluate:
    def evaluate(
        value: Any,
        error_collector: list[ValidationError] | None,
        path: str | None,
    ) -> bool:
        if has_own_field(value, key):
            field_path = join_object_paths(path, key)
            return bool(field_validator(get_field(value, key), error_collector, field_path))
        if error_collector is not None:
            error_collector.append(
                ValidationError(
                    path=path or "",
                    error=f"Value of type {type(value).__name__} does not have a property {key}!",
                )
            )
        return False

    return evaluate


def option_validator(base_validator: Validator[T]) -> Validator[T | None]:
    """Wrap a validator so that None always passes.

    Any other value is delegated to ``base_validator`` unchanged.
    """

    def evaluate(
        value: Any,
        error_collector: list[ValidationError] | None,
        path: str | None,
    ) -> bool:
        if value is None:
            return True
        return bool(base_validator(value, error_collector, path))

    return Validator(evaluate, name=f"{base_validator.name}.is_optional()")


def validator_for(
    check: Check | None = None,
    error_message_builder: ErrorMessageBuilder | None = None,
    *,
    name: str | None = None,
) -> Validator[Any]:
    """Create a validator from a check and an error message builder.

    With no arguments this returns the identity validator, which accepts every
    value and is the usual start of a builder chain.

    Args:
        check: Predicate over the value.
        error_message_builder: Builds the error message for a failing value.
        name: Optional description used in ``repr``.

    Returns:
        A new Validator.

    Raises:
        TypeError: If only one of ``check`` and ``error_message_builder`` is given.
    """
    if check is None and error_message_builder is None:
        return Validator(name=name or "validator_for()")

    if check is None or error_message_builder is None:
        raise TypeError(
            "validator_for() needs both a check and an error message builder, or neither"
        )

    def evaluate(
        value: Any,
        error_collector: list[ValidationError] | None,
        path: str | None,
    ) -> bool:
        valid = bool(check(value))
        if error_collector is not None and not valid:
            error_collector.append(
                ValidationError(path=path or "", error=error_message_builder(value))
            )
        return valid

    return Validator(evaluate, name=name or getattr(check, "__name__", "check"))
