"""Object paths and generic field access.

Helpers shared by the combinators: joining field keys into error paths and
reading a named field off an arbitrary object-shaped subject.
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

__all__ = ["get_field", "has_own_field", "is_object_shaped", "join_object_paths"]


def join_object_paths(*segments: str | None) -> str:
    """Join path segments with dots, skipping missing ones.

    Example:
        join_object_paths("spaceship", "engines", "type")  # "spaceship.engines.type"
        join_object_paths(None, "name")                    # "name"
        join_object_paths()                                # ""
    """
    return ".".join(segment for segment in segments if segment)


def is_object_shaped(value: Any) -> bool:
    """Check whether a value has named fields a rule can be scoped to.

    Mappings, pydantic models, dataclass instances and plain objects with an
    instance ``__dict__`` qualify. Strings, numbers, sequences, ``None``,
    classes, functions and modules do not.
    """
    if isinstance(value, (Mapping, BaseModel)):
        return True
    if isinstance(value, type) or inspect.isroutine(value) or inspect.ismodule(value):
        return False
    if dataclasses.is_dataclass(value):
        return True
    return hasattr(value, "__dict__")


def has_own_field(value: Any, key: str) -> bool:
    """Check that an object-shaped value carries ``key`` as its own field.

    Inherited class attributes and methods do not count, and neither do
    declared fields that were never assigned.
    """
    if isinstance(value, Mapping):
        return key in value
    if isinstance(value, BaseModel):
        # model_construct() can leave declared fields unset
        return key in value.__dict__ or key in (value.model_extra or {})
    if not is_object_shaped(value):
        return False
    if dataclasses.is_dataclass(value):
        if not any(f.name == key for f in dataclasses.fields(value)):
            return False
        # an init=False field without a default stays unset until assigned
        return hasattr(value, key)
    return key in vars(value)


def get_field(value: Any, key: str) -> Any:
    """Read field ``key`` off an object-shaped value.

    Callers must check ``has_own_field`` first.
    """
    if isinstance(value, Mapping):
        return value[key]
    return getattr(value, key)
