"""Built-in primitive rules.

Each rule is a factory returning a Validator. Every factory accepts an
optional error message builder to replace its default message, and the
returned validators chain like any other:

    from fluent_validators.rules import has_length_between, is_string

    is_name = is_string().and_also(has_length_between(1, 50))
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sized
from decimal import Decimal
from typing import Any

from fluent_validators.paths import is_object_shaped
from fluent_validators.results import ValidationError
from fluent_validators.validators import ErrorMessageBuilder, Validator, validator_for

__all__ = [
    "has_length_between",
    "has_precision",
    "is_",
    "is_array_of",
    "is_boolean",
    "is_function",
    "is_greater_than",
    "is_greater_than_or_equal_to",
    "is_less_than",
    "is_less_than_or_equal_to",
    "is_number",
    "is_object",
    "is_one_of",
    "is_string",
    "matches_regex",
]


def _type_name(value: Any) -> str:
    return type(value).__name__


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _same(value: Any, expected: Any) -> bool:
    return type(value) is type(expected) and value == expected


def is_string(error_message_builder: ErrorMessageBuilder | None = None) -> Validator[str]:
    """Accept str values."""
    return validator_for(
        lambda x: isinstance(x, str),
        error_message_builder
        or (lambda x: f"Expected value of type string, but got type {_type_name(x)}"),
        name="is_string()",
    )


def is_number(error_message_builder: ErrorMessageBuilder | None = None) -> Validator[float]:
    """Accept int and float values. Booleans are rejected."""
    return validator_for(
        _is_number,
        error_message_builder
        or (lambda x: f"Expected value of type number, but got type {_type_name(x)}"),
        name="is_number()",
    )


def is_boolean(error_message_builder: ErrorMessageBuilder | None = None) -> Validator[bool]:
    """Accept True and False."""
    return validator_for(
        lambda x: isinstance(x, bool),
        error_message_builder
        or (lambda x: f"Expected value of type boolean, but got type {_type_name(x)}"),
        name="is_boolean()",
    )


def is_function(error_message_builder: ErrorMessageBuilder | None = None) -> Validator[Any]:
    """Accept callables."""
    return validator_for(
        callable,
        error_message_builder
        or (lambda x: f"Expected value of type function, but got type {_type_name(x)}"),
        name="is_function()",
    )


def is_object(error_message_builder: ErrorMessageBuilder | None = None) -> Validator[Any]:
    """Accept values with named fields (mappings, models, plain objects)."""
    return validator_for(
        is_object_shaped,
        error_message_builder
        or (lambda x: f"Expected value of type object, but got type {_type_name(x)}"),
        name="is_object()",
    )


def is_(expected: Any, error_message_builder: ErrorMessageBuilder | None = None) -> Validator[Any]:
    """Accept exactly ``expected``: same type and equal."""
    return validator_for(
        lambda x: _same(x, expected),
        error_message_builder or (lambda x: f"Expected {expected!r}, but got {x!r}"),
        name=f"is_({expected!r})",
    )


def is_one_of(
    options: Iterable[Any],
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[Any]:
    """Accept any value matching one of ``options`` (same type and equal)."""
    choices = tuple(options)
    return validator_for(
        lambda x: any(_same(x, option) for option in choices),
        error_message_builder or (lambda x: f"Expected one of {list(choices)!r}, but got {x!r}"),
        name=f"is_one_of({list(choices)!r})",
    )


def has_length_between(
    min_length: int,
    max_length: int,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[Any]:
    """Accept sized values with ``min_length <= len(x) < max_length``.

    The upper bound is exclusive: ``has_length_between(1, 50)`` accepts
    lengths 1 through 49.
    """

    def check(x: Any) -> bool:
        return isinstance(x, Sized) and min_length <= len(x) < max_length

    return validator_for(
        check,
        error_message_builder
        or (
            lambda x: (
                f"Expected length between {min_length} and {max_length}, "
                f"but got {len(x) if isinstance(x, Sized) else 'a value without a length'}"
            )
        ),
        name=f"has_length_between({min_length}, {max_length})",
    )


def matches_regex(
    pattern: str | re.Pattern[str],
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[str]:
    """Accept strings in which ``pattern`` matches (``re.search`` semantics)."""
    compiled = re.compile(pattern)
    return validator_for(
        lambda x: isinstance(x, str) and compiled.search(x) is not None,
        error_message_builder
        or (lambda x: f"{x!r} does not match the pattern {compiled.pattern!r}"),
        name=f"matches_regex({compiled.pattern!r})",
    )


def is_greater_than(
    bound: float,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[float]:
    """Accept numbers strictly greater than ``bound``."""
    return validator_for(
        lambda x: _is_number(x) and x > bound,
        error_message_builder
        or (lambda x: f"Expected a number greater than {bound}, but got {x!r}"),
        name=f"is_greater_than({bound!r})",
    )


def is_greater_than_or_equal_to(
    bound: float,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[float]:
    """Accept numbers greater than or equal to ``bound``."""
    return validator_for(
        lambda x: _is_number(x) and x >= bound,
        error_message_builder
        or (lambda x: f"Expected a number greater than or equal to {bound}, but got {x!r}"),
        name=f"is_greater_than_or_equal_to({bound!r})",
    )


def is_less_than(
    bound: float,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[float]:
    """Accept numbers strictly less than ``bound``."""
    return validator_for(
        lambda x: _is_number(x) and x < bound,
        error_message_builder
        or (lambda x: f"Expected a number less than {bound}, but got {x!r}"),
        name=f"is_less_than({bound!r})",
    )


def is_less_than_or_equal_to(
    bound: float,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[float]:
    """Accept numbers less than or equal to ``bound``."""
    return validator_for(
        lambda x: _is_number(x) and x <= bound,
        error_message_builder
        or (lambda x: f"Expected a number less than or equal to {bound}, but got {x!r}"),
        name=f"is_less_than_or_equal_to({bound!r})",
    )


def has_precision(
    digits: int,
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[float]:
    """Accept numbers with at most ``digits`` decimal places.

    ``has_precision(0)`` accepts whole numbers, ``has_precision(2)`` accepts
    amounts like 19.99.
    """

    def check(x: Any) -> bool:
        if not _is_number(x):
            return False
        if isinstance(x, int):
            return True
        exponent = Decimal(str(x)).as_tuple().exponent
        # NaN and infinities report a string exponent
        return isinstance(exponent, int) and exponent >= -digits

    return validator_for(
        check,
        error_message_builder
        or (lambda x: f"Expected a number with at most {digits} decimal places, but got {x!r}"),
        name=f"has_precision({digits})",
    )


def is_array_of(
    element_validator: Validator[Any],
    error_message_builder: ErrorMessageBuilder | None = None,
) -> Validator[list[Any]]:
    """Accept lists and tuples whose every element passes ``element_validator``.

    Element errors are reported at ``path[i]``, e.g. ``addresses[2].city``.
    All elements are checked, so one call reports every failing element.
    """
    if not isinstance(element_validator, Validator):
        raise TypeError("is_array_of() needs a Validator for its elements")
    emb = error_message_builder or (
        lambda x: f"Expected value of type array, but got type {_type_name(x)}"
    )

    def evaluate(
        value: Any,
        error_collector: list[ValidationError] | None,
        path: str | None,
    ) -> bool:
        if not isinstance(value, (list, tuple)):
            if error_collector is not None:
                error_collector.append(ValidationError(path=path or "", error=emb(value)))
            return False
        all_valid = True
        for i, item in enumerate(value):
            item_path = f"{path}[{i}]" if path else f"[{i}]"
            if not element_validator(item, error_collector, item_path):
                all_valid = False
        return all_valid

    return Validator(evaluate, name=f"is_array_of({element_validator.name})")
