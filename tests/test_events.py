"""Tests for observer pattern and events."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from fluent_validators import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)

from .conftest import RecordingObserver

# =============================================================================
# Test Helpers
# =============================================================================


class Emitter(ObservableMixin):
    """Minimal observable used to exercise the mixin."""

    def emit(self, event_type: ValidationEventType, **data: object) -> None:
        self.notify(ValidationEvent(event_type=event_type, source=self, data=dict(data)))


class CountingObserver:
    """Observer that counts events by type."""

    def __init__(self) -> None:
        self.counts: dict[ValidationEventType, int] = {}

    def on_event(self, event: ValidationEvent) -> None:
        self.counts[event.event_type] = self.counts.get(event.event_type, 0) + 1


# =============================================================================
# ValidationEventType / ValidationEvent Tests
# =============================================================================


class TestValidationEventType:
    """Tests for ValidationEventType enum."""

    def test_event_types_are_distinct(self) -> None:
        """Test that all event types have distinct values."""
        types = [
            ValidationEventType.VALIDATION_STARTED,
            ValidationEventType.ROW_PROCESSED,
            ValidationEventType.ERROR_ADDED,
            ValidationEventType.VALIDATION_COMPLETED,
        ]
        assert len(set(types)) == len(types)
        assert len(ValidationEventType) == 4


class TestValidationEvent:
    """Tests for ValidationEvent dataclass."""

    def test_event_creation(self) -> None:
        """Test creating a validation event."""
        event = ValidationEvent(
            event_type=ValidationEventType.ERROR_ADDED,
            source="test_source",
            data={"path": "name", "error": "Invalid"},
        )

        assert event.event_type == ValidationEventType.ERROR_ADDED
        assert event.source == "test_source"
        assert event.data == {"path": "name", "error": "Invalid"}

    def test_event_default_data(self) -> None:
        """Test that data defaults to a fresh empty dict."""
        first = ValidationEvent(event_type=ValidationEventType.ROW_PROCESSED, source=None)
        second = ValidationEvent(event_type=ValidationEventType.ROW_PROCESSED, source=None)

        assert first.data == {}
        assert first.data is not second.data


class TestValidationObserverProtocol:
    """Tests for ValidationObserver protocol."""

    def test_observers_satisfy_protocol(self) -> None:
        """Test any object with on_event satisfies the protocol."""
        assert isinstance(RecordingObserver(), ValidationObserver)
        assert isinstance(CountingObserver(), ValidationObserver)
        assert not isinstance(object(), ValidationObserver)


# =============================================================================
# ObservableMixin Tests
# =============================================================================


class TestObservableMixin:
    """Tests for ObservableMixin registration and notification."""

    def test_add_observer(self) -> None:
        """Test adding an observer."""
        emitter = Emitter()
        observer = RecordingObserver()

        emitter.add_observer(observer)

        assert observer in emitter.observers

    def test_add_observer_no_duplicates(self) -> None:
        """Test that same observer isn't added twice."""
        emitter = Emitter()
        observer = RecordingObserver()

        emitter.add_observer(observer)
        emitter.add_observer(observer)

        assert len(emitter.observers) == 1

    def test_remove_observer(self) -> None:
        """Test removing an observer, including one never added."""
        emitter = Emitter()
        observer = RecordingObserver()

        emitter.add_observer(observer)
        emitter.remove_observer(observer)
        emitter.remove_observer(observer)

        assert observer not in emitter.observers

    def test_clear_observers(self) -> None:
        """Test clearing all observers."""
        emitter = Emitter()
        emitter.add_observer(RecordingObserver())
        emitter.add_observer(RecordingObserver())

        emitter.clear_observers()

        assert emitter.observers == []

    def test_observers_property_returns_copy(self) -> None:
        """Test that observers property returns a copy."""
        emitter = Emitter()
        emitter.add_observer(RecordingObserver())

        emitter.observers.clear()

        assert len(emitter.observers) == 1

    def test_notify_in_registration_order(self) -> None:
        """Test observers are called in the order they were added."""
        emitter = Emitter()
        calls: list[str] = []

        class Named:
            def __init__(self, name: str) -> None:
                self.name = name

            def on_event(self, event: ValidationEvent) -> None:
                calls.append(self.name)

        emitter.add_observer(Named("first"))
        emitter.add_observer(Named("second"))
        emitter.emit(ValidationEventType.VALIDATION_STARTED)

        assert calls == ["first", "second"]

    def test_notify_without_observers(self) -> None:
        """Test notify with no observers does nothing."""
        Emitter().emit(ValidationEventType.ERROR_ADDED, path="", error="boom")

    def test_event_carries_source_and_data(self) -> None:
        """Test observers receive the emitted event unchanged."""
        emitter = Emitter()
        observer = RecordingObserver()
        emitter.add_observer(observer)

        emitter.emit(ValidationEventType.ERROR_ADDED, path="engines.type", error="bad")

        assert observer.event_types == [ValidationEventType.ERROR_ADDED]
        assert observer.events[0].source is emitter
        assert observer.events[0].data == {"path": "engines.type", "error": "bad"}


# =============================================================================
# Property-Based Tests
# =============================================================================


class TestObserverProperties:
    """Property-based tests for observer functionality."""

    @given(
        kinds=st.lists(st.sampled_from(list(ValidationEventType)), max_size=20),
        observer_count=st.integers(min_value=1, max_value=4),
    )
    @settings(max_examples=30)
    def test_every_observer_sees_every_event(
        self, kinds: list[ValidationEventType], observer_count: int
    ) -> None:
        """Test each observer receives each event exactly once."""
        emitter = Emitter()
        observers = [CountingObserver() for _ in range(observer_count)]
        for observer in observers:
            emitter.add_observer(observer)

        for kind in kinds:
            emitter.emit(kind)

        for observer in observers:
            assert sum(observer.counts.values()) == len(kinds)
            for kind in set(kinds):
                assert observer.counts[kind] == kinds.count(kind)
