"""Streaming validation runner.

Runs one validator over an iterable of subjects (rows from a CSV reader,
decoded JSON documents, ...). Results are streamed rather than stored, while
counts and error patterns are tracked for an audit report.
"""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from fluent_validators.events import (
    ObservableMixin,
    ValidationEvent,
    ValidationEventType,
)
from fluent_validators.results import ValidationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from fluent_validators.validators import Validator

__all__ = ["RowResult", "RunnerStats", "ValidationRunner"]

T = TypeVar("T")


@dataclass
class RowResult:
    """Result for a single subject.

    Attributes:
        row_index: Zero-based position of the subject in the input.
        value: The subject that was validated.
        is_valid: Verdict returned by the validator.
        errors: Every error collected while validating the subject.
    """

    row_index: int
    value: Any
    is_valid: bool = True
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def error_summary(self) -> list[tuple[str, str]]:
        """Get (path, error) tuples for all errors."""
        return [(err.path or "", err.error) for err in self.errors]


@dataclass
class RunnerStats:
    """Streaming statistics for a validation run.

    Attributes:
        total_rows: Number of subjects processed.
        valid_rows: Number of subjects that conformed.
        start_time: perf_counter() value when the run started.
        end_time: perf_counter() value when the run finished.
        error_counts: Counter of (path, error) -> occurrences.
        failed_samples: The first ``max_samples`` failing subjects.
        max_samples: Limit for ``failed_samples``.
    """

    total_rows: int = 0
    valid_rows: int = 0
    start_time: float = 0.0
    end_time: float = 0.0

    error_counts: Counter[tuple[str, str]] = field(default_factory=Counter)
    failed_samples: list[Any] = field(default_factory=list)
    max_samples: int = 100

    @property
    def error_rows(self) -> int:
        """Get the number of subjects with errors."""
        return self.total_rows - self.valid_rows

    @property
    def duration_ms(self) -> float:
        """Get the duration of the run in milliseconds."""
        return (self.end_time - self.start_time) * 1000

    @property
    def success_rate(self) -> float:
        """Get the success rate as a percentage (0-100)."""
        if self.total_rows == 0:
            return 0.0
        return self.valid_rows / self.total_rows * 100

    def top_errors(self, n: int = 10) -> list[tuple[tuple[str, str], int, float]]:
        """Get the ``n`` most frequent errors.

        Returns:
            List of ((path, error), count, percentage) tuples, most frequent first.
        """
        total_errors = sum(self.error_counts.values())
        result: list[tuple[tuple[str, str], int, float]] = []
        for (path, error), count in self.error_counts.most_common(n):
            pct = (count / total_errors * 100) if total_errors > 0 else 0
            result.append(((path, error), count, pct))
        return result

    def record_error(self, path: str, error: str) -> None:
        """Record one occurrence of an error."""
        self.error_counts[(path, error)] += 1

    def add_failed_sample(self, value: Any) -> None:
        """Keep a failing subject if under the sample limit."""
        if len(self.failed_samples) < self.max_samples:
            self.failed_samples.append(value)

    def merge(self, other: RunnerStats) -> None:
        """Add the counts of another RunnerStats into this one."""
        self.total_rows += other.total_rows
        self.valid_rows += other.valid_rows
        self.error_counts.update(other.error_counts)

        remaining = self.max_samples - len(self.failed_samples)
        if remaining > 0:
            self.failed_samples.extend(other.failed_samples[:remaining])


class ValidationRunner(ObservableMixin, Generic[T]):
    """Validate a stream of subjects against one validator.

    Each subject gets its own error collector, so errors are always
    attributable to the row they came from.

    Example:
        runner = ValidationRunner(documents, spaceship_validator, total_hint=len(documents))
        runner.add_observer(SimpleProgressObserver(progress))

        for result in runner.run():
            if not result.is_valid:
                print(result.row_index, result.error_summary)

        print(runner.audit_report()["summary"])
    """

    def __init__(
        self,
        data: Iterable[Any],
        validator: Validator[T],
        *,
        root_path: str | None = None,
        fail_fast: bool = False,
        total_hint: int | None = None,
        max_samples: int = 100,
    ) -> None:
        """Initialize the validation runner.

        Args:
            data: Subjects to validate. Consumed lazily, once.
            validator: Validator applied to every subject.
            root_path: Path passed to the validator for every subject.
            fail_fast: If True, stop after the first failing subject.
            total_hint: Optional total count for progress display.
            max_samples: Number of failing subjects kept for the audit report.
        """
        self._data = data
        self._validator = validator
        self._root_path = root_path
        self._fail_fast = fail_fast
        self._total_hint = total_hint
        self._max_samples = max_samples
        self._stats = RunnerStats(max_samples=max_samples)

    def __enter__(self) -> ValidationRunner[T]:
        return self

    def __exit__(self, *args: object) -> None:
        if self._stats.end_time == 0 and self._stats.start_time > 0:
            self._stats.end_time = time.perf_counter()

    def run(self) -> Iterator[RowResult]:
        """Validate subjects one by one, yielding a RowResult for each.

        Note:
            Emits VALIDATION_STARTED first, then ERROR_ADDED for every error and
            ROW_PROCESSED for every subject, and VALIDATION_COMPLETED once the
            input is exhausted (or the first failure, with fail_fast).
        """
        self._stats = RunnerStats(start_time=time.perf_counter(), max_samples=self._max_samples)

        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.VALIDATION_STARTED,
                source=self,
                data={
                    "validator_name": self._validator.name,
                    "total_hint": self._total_hint,
                },
            )
        )

        for row_index, value in enumerate(self._data):
            result = self._validate_row(row_index, value)
            self._update_stats(result)
            self._emit_row_events(result)

            yield result

            if self._fail_fast and not result.is_valid:
                break

        self._stats.end_time = time.perf_counter()

        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.VALIDATION_COMPLETED,
                source=self,
                data={"stats": self._stats},
            )
        )

    def run_collect_valid(self) -> Iterator[T]:
        """Yield only the subjects that conformed."""
        for result in self.run():
            if result.is_valid:
                yield result.value

    def run_collect_failed(self) -> Iterator[RowResult]:
        """Yield only the results of subjects that failed."""
        for result in self.run():
            if not result.is_valid:
                yield result

    def _validate_row(self, row_index: int, value: Any) -> RowResult:
        errors: list[ValidationError] = []
        is_valid = bool(self._validator(value, errors, self._root_path))
        return RowResult(row_index=row_index, value=value, is_valid=is_valid, errors=errors)

    def _update_stats(self, result: RowResult) -> None:
        self._stats.total_rows += 1

        if result.is_valid:
            self._stats.valid_rows += 1
            return

        for path, error in result.error_summary:
            self._stats.record_error(path, error)
        self._stats.add_failed_sample(result.value)

    def _emit_row_events(self, result: RowResult) -> None:
        for path, error in result.error_summary:
            self.notify(
                ValidationEvent(
                    event_type=ValidationEventType.ERROR_ADDED,
                    source=self,
                    data={"row_index": result.row_index, "path": path, "error": error},
                )
            )

        self.notify(
            ValidationEvent(
                event_type=ValidationEventType.ROW_PROCESSED,
                source=self,
                data={
                    "row_index": result.row_index,
                    "is_valid": result.is_valid,
                    "stats_snapshot": {
                        "total": self._stats.total_rows,
                        "valid": self._stats.valid_rows,
                        "failed": self._stats.error_rows,
                        "total_hint": self._total_hint,
                    },
                    "errors": result.error_summary,
                },
            )
        )

    @property
    def stats(self) -> RunnerStats:
        """Get current statistics."""
        return self._stats

    def audit_report(self) -> dict[str, Any]:
        """Summarize the last run.

        Returns:
            Dict with 'summary', 'top_errors', and 'failed_samples' keys.
        """
        return {
            "summary": {
                "total_rows": self._stats.total_rows,
                "valid_rows": self._stats.valid_rows,
                "error_rows": self._stats.error_rows,
                "success_rate": f"{self._stats.success_rate:.1f}%",
                "duration_ms": self._stats.duration_ms,
            },
            "top_errors": [
                {"path": p, "error": e, "count": c, "percentage": f"{pct:.1f}%"}
                for (p, e), c, pct in self._stats.top_errors(20)
            ],
            "failed_samples": self._stats.failed_samples,
        }
