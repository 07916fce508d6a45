"""ExecutionContext: mutable per-run state of one example.

Passed explicitly to the example body and to every each-scoped hook. All
access to description, metadata, pending state and the in-body flag goes
through this object. A context is created by ExampleRunner for exactly one
run and closed (never reused) once the result is sealed.
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Mapping, TYPE_CHECKING

from ..errors import ExamplePending, NoExecutionContextError, UsageFault
from ..metadata import read_only

if TYPE_CHECKING:
    from ..example import Example
    from ..group import ExampleGroup


class ExamplePhase(Enum):
    """Which part of the example is currently executing."""
    SETUP = "setup"         # around hooks before run(), before(:each) hooks
    BODY = "body"
    TEARDOWN = "teardown"   # after(:each) hooks, around hooks after run()


class ExecutionContext:
    """Per-run handle exposed to the running example and its hooks."""

    def __init__(self, example: Example):
        self._example = example
        self._metadata = read_only(example.metadata)
        self._in_block = False
        self._pending = False
        self._pending_message: str | None = None
        self._fault: BaseException | None = None
        self._closed = False
        self._phase = ExamplePhase.SETUP

    # --- Read-only views ---

    @property
    def example(self) -> Example:
        return self._example

    @property
    def example_group(self) -> ExampleGroup:
        return self._example.example_group

    @property
    def description(self) -> str:
        return self._example.description

    @property
    def full_description(self) -> str:
        return self._example.full_description

    @property
    def metadata(self) -> Mapping[str, Any]:
        """Group chain metadata merged with the example's own (read-only)."""
        return self._metadata

    @property
    def options(self) -> Mapping[str, Any]:
        """Ad-hoc option lookup, e.g. ``ctx.options['demo']``."""
        return self._metadata

    @property
    def in_block(self) -> bool:
        """True only while the example body itself is executing."""
        return self._in_block

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def phase(self) -> ExamplePhase:
        return self._phase

    def enter_phase(self, phase: ExamplePhase):
        """Set by ExampleRunner as the run moves from setup to body to teardown."""
        self._phase = phase

    # --- Pending ---

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def pending_message(self) -> str | None:
        return self._pending_message

    def mark_pending(self, message: str | None = None):
        """Mark the running example pending and stop it.

        Valid from the body, a before(:each) hook, or an around(:each) hook
        that has not yet run the wrapped example. Raises ExamplePending to
        unwind the caller: the rest of the setup and the body are skipped,
        after hooks still run.

        Raises:
            NoExecutionContextError: If the context is already finalized.
            UsageFault: If called during teardown (after hooks, or an around
                hook after the wrapped example ran).
        """
        if self._closed:
            raise NoExecutionContextError("mark_pending", scope="finalized example")
        if self._phase is ExamplePhase.TEARDOWN:
            raise UsageFault(
                "mark_pending cannot be called once the example body has finished; "
                "use it from the body, a before hook, or an around hook before run()",
                details={"example": self.full_description, "phase": self._phase.value},
            )
        self._pending = True
        if message is not None:
            self._pending_message = message
        raise ExamplePending(message)

    # --- Fault slot (runner only) ---

    @property
    def fault(self) -> BaseException | None:
        return self._fault

    def record_fault(self, fault: BaseException) -> bool:
        """Store *fault* if no fault has been recorded yet.

        Returns True if it was stored, False if an earlier fault already
        occupies the slot.
        """
        if self._fault is not None:
            return False
        self._fault = fault
        return True

    @contextmanager
    def inside_body(self):
        """Scope during which ``in_block`` is True. Released on every exit path."""
        self._phase = ExamplePhase.BODY
        self._in_block = True
        try:
            yield self
        finally:
            self._in_block = False

    def close(self):
        self._in_block = False
        self._closed = True

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(description={self.description!r}, "
            f"in_block={self._in_block}, pending={self._pending}, "
            f"closed={self._closed})"
        )
