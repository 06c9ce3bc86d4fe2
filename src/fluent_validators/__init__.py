"""Composable runtime validators with path-tagged error reporting."""

from fluent_validators import rules
from fluent_validators.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
    ValidationObserver,
)
from fluent_validators.paths import join_object_paths
from fluent_validators.protocols import ValidatorProtocol
from fluent_validators.pydantic_support import as_after_validator
from fluent_validators.results import ErrorCollector, ValidationError, ValidationResult
from fluent_validators.rich_observers import (
    RichDashboardObserver,
    SimpleProgressObserver,
)
from fluent_validators.runner import RowResult, RunnerStats, ValidationRunner
from fluent_validators.validators import (
    Check,
    ErrorMessageBuilder,
    Validator,
    ValidatorBuilder,
    option_validator,
    validator_for,
)

__all__ = [
    # Builder API
    "Check",
    "ErrorMessageBuilder",
    "Validator",
    "ValidatorBuilder",
    "option_validator",
    "validator_for",
    "join_object_paths",
    "ValidatorProtocol",
    # Primitive rules
    "rules",
    # Validation results
    "ErrorCollector",
    "ValidationError",
    "ValidationResult",
    # pydantic integration
    "as_after_validator",
    # Observer pattern
    "ObservableMixin",
    "ValidationEvent",
    "ValidationEventType",
    "ValidationObserver",
    # Streaming runner
    "RowResult",
    "RunnerStats",
    "ValidationRunner",
    # Rich observers
    "RichDashboardObserver",
    "SimpleProgressObserver",
]

__version__ = "0.1.0"
