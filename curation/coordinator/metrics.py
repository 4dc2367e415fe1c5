"""Metrics collection for the mutation coordinator."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class CoordinatorMetrics:
    """Counters for coordinated mutations.

    Attributes:
        started: Mutations that reached the optimistic update.
        succeeded: Mutations confirmed by the store.
        failed: Mutations the store rejected (and were rolled back).
        rejected: Mutations refused locally (validation, in-flight, declined).
        stale: Mutations targeting items missing from the working set.
        rollbacks_skipped: Rollbacks whose item vanished before completion.
        failures_by_field: Failure count per field.
        write_durations_ms: Store write latencies.
    """

    started: int = 0
    succeeded: int = 0
    failed: int = 0
    rejected: int = 0
    stale: int = 0
    rollbacks_skipped: int = 0
    failures_by_field: dict[str, int] = field(default_factory=dict)
    write_durations_ms: list[float] = field(default_factory=list)

    _instance: ClassVar["CoordinatorMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "CoordinatorMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_started(self) -> None:
        """Record an optimistic update."""
        self.started += 1

    def record_success(self, duration_ms: float) -> None:
        """Record a confirmed write."""
        self.succeeded += 1
        self.write_durations_ms.append(duration_ms)

    def record_failure(self, field_name: str, duration_ms: float) -> None:
        """Record a failed write."""
        self.failed += 1
        self.failures_by_field[field_name] = self.failures_by_field.get(field_name, 0) + 1
        self.write_durations_ms.append(duration_ms)

    def record_rejected(self) -> None:
        """Record a locally refused mutation."""
        self.rejected += 1

    def record_stale(self) -> None:
        """Record a mutation against a missing item."""
        self.stale += 1

    def record_rollback_skipped(self) -> None:
        """Record a rollback whose item was gone."""
        self.rollbacks_skipped += 1

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary."""
        durations = sorted(self.write_durations_ms)
        p50 = durations[len(durations) // 2] if durations else 0.0
        return {
            "started": self.started,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "rejected": self.rejected,
            "stale": self.stale,
            "rollbacks_skipped": self.rollbacks_skipped,
            "failures_by_field": dict(self.failures_by_field),
            "write_p50_ms": p50,
        }
