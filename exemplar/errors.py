"""Fault taxonomy for example execution.

Exception Hierarchy:
    ExemplarError (base)
    ├── AssertionFault
    │   └── ExpectationNotMetError (also an AssertionError)
    ├── RuntimeFault
    └── UsageFault
        ├── NoExecutionContextError
        └── RegistryFrozenError

    ExamplePending (BaseException, not a fault)

AssertionFault and RuntimeFault describe test outcomes: the runner captures
them into an example's result and never lets them reach the group's run loop.
UsageFault describes a structurally invalid test definition and is always
raised to the caller.

Any ``AssertionError`` raised by an assertion library counts as an assertion
fault, and any other ``Exception`` counts as a runtime fault, whether or not it
derives from this hierarchy. See ``classify_fault``.

ExamplePending is the signal ``mark_pending()`` raises to unwind the running
hook or body. The runner catches it; it never becomes a recorded fault.
"""

from __future__ import annotations

from typing import Any


class ExemplarError(Exception):
    """Base exception for all exemplar errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
        cause: Optional original exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"cause={self.cause!r})"
        )


class AssertionFault(ExemplarError):
    """An expectation did not match."""


class ExpectationNotMetError(AssertionFault, AssertionError):
    """Raised by matchers when an expectation fails.

    Inherits from ``AssertionError`` so that code written against bare
    ``assert`` statements and code using matchers are reported the same way.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: Any = None,
        actual: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if expected is not None:
            details["expected"] = expected
        if actual is not None:
            details["actual"] = actual
        super().__init__(message, details=details)
        self.expected = expected
        self.actual = actual


class RuntimeFault(ExemplarError):
    """A fault raised somewhere other than the example itself.

    Used to attribute a group-level failure (for instance a failing
    before-all hook) to every example that could not run because of it.
    The original exception is available as ``cause``.
    """

    def __init__(
        self,
        message: str,
        *,
        hook_name: str | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        details = dict(details or {})
        if hook_name:
            details["hook"] = hook_name
        super().__init__(message, details=details, cause=cause)
        self.hook_name = hook_name


class UsageFault(ExemplarError):
    """The test definition uses the API in a way it does not support."""


class NoExecutionContextError(UsageFault):
    """A per-example operation was attempted where no example is running.

    Raised when an all-scoped hook (which runs once per group) tries to mark
    an example pending, and when a finalized context is used again.
    """

    def __init__(
        self,
        operation: str,
        *,
        scope: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if scope:
            details["scope"] = scope
        super().__init__(
            f"no execution context available for '{operation}': "
            f"it is only valid while a single example is running",
            details=details,
        )
        self.operation = operation
        self.scope = scope


class RegistryFrozenError(UsageFault):
    """A hook was registered after its group started running."""


def classify_fault(fault: BaseException | None) -> str | None:
    """Return ``"assertion"``, ``"runtime"`` or ``None`` for a captured fault."""
    if fault is None:
        return None
    if isinstance(fault, (AssertionFault, AssertionError)):
        return "assertion"
    return "runtime"


class ExamplePending(BaseException):
    """Unwinds the current hook or body after ``mark_pending()``.

    Not an ``Exception``: ``except Exception`` in test code does not catch
    it. ExampleRunner catches it, skips the remaining setup and the body,
    and still runs the after hooks.
    """

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
