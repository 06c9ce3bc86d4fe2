"""pydantic integration.

Lets a fluent validator guard a field of a pydantic model:

    from typing import Annotated

    from pydantic import BaseModel

    from fluent_validators import as_after_validator
    from fluent_validators.rules import has_length_between, is_string

    class Spaceship(BaseModel):
        name: Annotated[str, as_after_validator(is_string().and_also(has_length_between(1, 50)))]

A failing value makes pydantic raise its usual ValidationError. The failing
entry has type "validation_error" and the fluent errors in ``ctx["errors"]``.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import AfterValidator

from fluent_validators.validators import Validator

__all__ = ["as_after_validator"]

T = TypeVar("T")


def as_after_validator(validator: Validator[Any], *, path: str | None = None) -> AfterValidator:
    """Wrap a validator as a pydantic AfterValidator.

    Args:
        validator: Validator run on the value pydantic has already parsed.
        path: Optional root path for the reported errors.

    Returns:
        An AfterValidator to use inside ``Annotated[...]``. It returns the value
        unchanged when it conforms and raises PydanticCustomError otherwise.
    """

    def check(value: T) -> T:
        validator.validate(value, path).raise_for_errors()
        return value

    return AfterValidator(check)
