"""Observer support for validation runs.

Validators themselves are pure and emit nothing. Long-running drivers such as
ValidationRunner emit ValidationEvents to registered observers, which is how
progress, error patterns and timings are reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "ObservableMixin",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
]


class ValidationEventType(Enum):
    """Types of validation events that can be observed."""

    VALIDATION_STARTED = auto()
    """Emitted before the first subject of a run is validated."""

    ROW_PROCESSED = auto()
    """Emitted after each subject has been validated."""

    ERROR_ADDED = auto()
    """Emitted once per ValidationError found on a subject."""

    VALIDATION_COMPLETED = auto()
    """Emitted after the last subject of a run."""


@dataclass
class ValidationEvent:
    """A validation event that can be observed.

    Attributes:
        event_type: The type of event that occurred.
        source: The object that emitted the event.
        data: Event-specific data dictionary.

    Example:
        event = ValidationEvent(
            event_type=ValidationEventType.ERROR_ADDED,
            source=runner,
            data={"row_index": 3, "path": "engines.type", "error": "Reactionless is not valid"},
        )
    """

    event_type: ValidationEventType
    source: object
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class ValidationObserver(Protocol):
    """Protocol for validation event observers.

    Example:
        class PrintingObserver:
            def on_event(self, event: ValidationEvent) -> None:
                if event.event_type == ValidationEventType.ERROR_ADDED:
                    print(f"{event.data['path']}: {event.data['error']}")
    """

    def on_event(self, event: ValidationEvent) -> None:
        """Handle a validation event."""
        ...


class ObservableMixin:
    """Mixin adding observer registration and notification.

    The observer list is created lazily so subclasses need not call a
    particular ``__init__``.
    """

    _observers: list[ValidationObserver]

    def _ensure_observers(self) -> list[ValidationObserver]:
        if getattr(self, "_observers", None) is None:
            self._observers = []
        return self._observers

    def add_observer(self, observer: ValidationObserver) -> None:
        """Register an observer. Adding the same observer twice is a no-op."""
        observers = self._ensure_observers()
        if observer not in observers:
            observers.append(observer)

    def remove_observer(self, observer: ValidationObserver) -> None:
        """Unregister an observer if it is registered."""
        observers = self._ensure_observers()
        if observer in observers:
            observers.remove(observer)

    def notify(self, event: ValidationEvent) -> None:
        """Send an event to every registered observer, in registration order."""
        for observer in self._ensure_observers():
            observer.on_event(event)

    @property
    def observers(self) -> list[ValidationObserver]:
        """Get a copy of the current observers list."""
        return self._ensure_observers().copy()

    def clear_observers(self) -> None:
        """Remove all observers."""
        self._ensure_observers().clear()
