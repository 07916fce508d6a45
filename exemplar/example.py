"""Example: one unit of test execution inside a group."""

from __future__ import annotations

import warnings
from typing import Any, Callable, TYPE_CHECKING

from .metadata import chain_metadata
from .result import EXECUTION_RESULT_KEY, ExecutionResult, ExecutionStatus

if TYPE_CHECKING:
    from .contexts import ExecutionContext
    from .group import ExampleGroup


class Example:
    """A described test body registered on an ExampleGroup.

    The example keeps only its own metadata; ``metadata`` merges it with the
    owning group chain on every lookup, so group metadata is inherited and
    the example's own keys win collisions. The finalized ExecutionResult of
    the latest run is stored under ``metadata['execution_result']``.

    ``example_group`` is a back-reference used for metadata and hook lookup;
    the group owns the example, not the other way round.
    """

    def __init__(
        self,
        example_group: ExampleGroup,
        description: str | None,
        body: Callable | None,
        metadata: dict[str, Any] | None = None,
    ):
        self.example_group = example_group
        self.description = description if description is not None else describe_body(body)
        self.body = body
        self.own_metadata: dict[str, Any] = dict(metadata or {})
        self._execution_result = ExecutionResult.not_run()
        self._context: ExecutionContext | None = None

    @property
    def metadata(self) -> dict[str, Any]:
        merged = chain_metadata(self.example_group.lineage(), self.own_metadata)
        merged[EXECUTION_RESULT_KEY] = self._execution_result
        return merged

    @property
    def options(self) -> dict[str, Any]:
        return self.metadata

    @property
    def full_description(self) -> str:
        parts = [g.description for g in self.example_group.lineage() if g.description]
        if self.description:
            parts.append(self.description)
        return ' '.join(parts)

    @property
    def described_class(self) -> type | None:
        """The class (if any) described by the outermost group."""
        return self.example_group.described_class

    @property
    def behaviour(self) -> ExampleGroup:
        """Deprecated alias for ``example_group``."""
        warnings.warn(
            "Example.behaviour is deprecated; use Example.example_group",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.example_group

    # --- Run state ---

    @property
    def in_block(self) -> bool:
        """True only while this example's body is executing."""
        return self._context is not None and self._context.in_block

    @property
    def execution_result(self) -> ExecutionResult:
        return self._execution_result

    @property
    def pending(self) -> bool:
        return self._execution_result.status is ExecutionStatus.PENDING

    @property
    def passed(self) -> bool:
        return self._execution_result.status is ExecutionStatus.PASSED

    @property
    def failed(self) -> bool:
        return self._execution_result.status is ExecutionStatus.FAILED

    def _attach_context(self, ctx: ExecutionContext):
        self._context = ctx

    def _detach_context(self):
        self._context = None

    def _store_result(self, result: ExecutionResult):
        self._execution_result = result

    def __repr__(self) -> str:
        return f"Example({self.full_description!r}, status={self._execution_result.status.value})"


def describe_body(body: Callable | None) -> str:
    """Fallback description: the body's docstring first line, else its name."""
    if body is None:
        return ""
    doc = (getattr(body, '__doc__', None) or '').strip()
    if doc:
        return doc.splitlines()[0]
    name = getattr(body, '__name__', '')
    if not name or name == '<lambda>':
        return ""
    return name.replace('_', ' ')
