"""Shared fixtures and Hypothesis strategies for tests."""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import strategies as st

from fluent_validators import ValidationEvent, ValidationEventType, Validator, validator_for

# -----------------------------------------------------------------------------
# Hypothesis Strategies
# -----------------------------------------------------------------------------

# Strategy for field keys (letters and numbers only)
field_names = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(whitelist_categories=("L", "N")),
)

# Strategy for error messages
messages = st.text(min_size=1, max_size=200)

# Strategy for optional root paths
optional_paths = st.one_of(st.none(), field_names)

# Strategy for arbitrary JSON-like subjects
json_values = st.recursive(
    st.one_of(st.none(), st.booleans(), st.integers(), st.floats(allow_nan=False), st.text()),
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(field_names, children, max_size=5),
    ),
    max_leaves=20,
)


# -----------------------------------------------------------------------------
# Spaceships
# -----------------------------------------------------------------------------


def a_valid_spaceship() -> dict[str, Any]:
    """A spaceship that passes every validator in these tests."""
    return {
        "name": "Spaceship McAwesome",
        "crew_count": 470,
        "mass_in_tons": 1000000,
        "length_in_meters": 324,
        "engines": {
            "type": "Fusion Rocket",
            "max_acceleration": 90000,
            "safe_in_atmosphere": False,
        },
    }


def make_engine_validator() -> Validator[Any]:
    return (
        validator_for()
        .with_rule_for(
            "type",
            lambda engine_type: engine_type in ("Fusion Rocket", "Chemical Rocket"),
            lambda engine_type: f"{engine_type} is not a valid engine type",
        )
        .with_rule(
            lambda engine: engine.get("safe_in_atmosphere") is not True
            or engine.get("type") == "Chemical Rocket",
            lambda engine: "Only chemical rockets are possibly safe in the atmosphere",
        )
    )


# -----------------------------------------------------------------------------
# Observers
# -----------------------------------------------------------------------------


class RecordingObserver:
    """Observer that records all events for testing."""

    def __init__(self) -> None:
        self.events: list[ValidationEvent] = []

    def on_event(self, event: ValidationEvent) -> None:
        self.events.append(event)

    @property
    def event_types(self) -> list[ValidationEventType]:
        return [e.event_type for e in self.events]

    def of_type(self, event_type: ValidationEventType) -> list[ValidationEvent]:
        return [e for e in self.events if e.event_type == event_type]


# -----------------------------------------------------------------------------
# Pytest Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def spaceship() -> dict[str, Any]:
    """Create a fresh valid spaceship."""
    return a_valid_spaceship()


@pytest.fixture
def crew_and_name_validator() -> Validator[Any]:
    """Validator with two whole-object rules."""
    return (
        validator_for()
        .with_rule(
            lambda ship: ship.get("crew_count", 0) > 0,
            lambda ship: "Spaceships need a crew!",
        )
        .with_rule(
            lambda ship: bool(ship.get("name")),
            lambda ship: "Spaceships need cool names!",
        )
    )


@pytest.fixture
def engine_validator() -> Validator[Any]:
    """Validator for the engines of a spaceship."""
    return make_engine_validator()


@pytest.fixture
def spaceship_validator(engine_validator: Validator[Any]) -> Validator[Any]:
    """Validator for a spaceship with a nested engine validator."""
    return (
        validator_for()
        .with_rule_for(
            "name",
            lambda name: bool(name),
            lambda name: "Spaceships need cool names",
        )
        .with_rule_for("engines", engine_validator)
    )
