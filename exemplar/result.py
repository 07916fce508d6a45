"""Execution result of a single example.

Standardized, immutable record produced by ExampleRunner and stored in the
example's metadata under ``EXECUTION_RESULT_KEY`` for reporters.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .errors import classify_fault


EXECUTION_RESULT_KEY = "execution_result"


class ExecutionStatus(Enum):
    """Final (or not-yet-run) status of an example."""
    NOT_RUN = "not_run"
    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


@dataclass(frozen=True)
class ExecutionResult:
    """Sealed outcome of one example run.

    Attributes:
        status: NOT_RUN until the run is finalized.
        pending: Whether the example was marked pending during its run.
        exception_encountered: The first fault raised by the example body
            or any of its per-example hooks. Later faults are not kept.
        pending_message: Optional reason passed to ``mark_pending()``.
        started_at / finished_at: Wall-clock timestamps of the run.
        run_time: Duration of the run in seconds.
    """
    status: ExecutionStatus = ExecutionStatus.NOT_RUN
    pending: bool = False
    exception_encountered: BaseException | None = None
    pending_message: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    run_time: float | None = None

    @property
    def finalized(self) -> bool:
        return self.status is not ExecutionStatus.NOT_RUN

    @property
    def fault_kind(self) -> str | None:
        """'assertion', 'runtime', or None when no fault was captured."""
        return classify_fault(self.exception_encountered)

    @classmethod
    def not_run(cls) -> ExecutionResult:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly representation for file reporters."""
        exc = self.exception_encountered
        return {
            "status": self.status.value,
            "pending": self.pending,
            "pending_message": self.pending_message,
            "exception": None if exc is None else {
                "type": type(exc).__name__,
                "message": str(exc),
                "kind": self.fault_kind,
            },
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "run_time": self.run_time,
        }
