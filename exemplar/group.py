"""
ExampleGroup: a described collection of examples, child groups and hooks.

Groups are built fully before they run. Hooks are declared with the
``before`` / ``after`` / ``around`` decorators, examples with ``example``
(alias ``it``) and nested groups with ``context``. Top-level groups come
from ``describe()`` or ``ExampleGroup.describe()``::

    group = describe("Stack", kind="unit")

    @group.before
    def setup(ctx):
        ...

    with group.context("when empty") as empty:

        @empty.it("has no items")
        def _(ctx):
            ...

    group.run()
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, TYPE_CHECKING

from exconsole import ExConsole

from .config import RunConfig
from .contexts import GroupContext
from .errors import RuntimeFault, UsageFault
from .example import Example, describe_body
from .hooks import HookPhase, HookRegistry, HookScope
from .metadata import merge_metadata
from .result import ExecutionStatus
from .runner import ExampleRunner

if TYPE_CHECKING:
    from .reporters import Reporter
    from .result import ExecutionResult


class ExampleGroup:
    """Owns examples (in run order), child groups, hooks and metadata.

    Metadata is inherited down the group chain; a child's own keys override
    its parent's.
    """

    def __init__(
        self,
        description: str = "",
        *,
        parent: ExampleGroup | None = None,
        described_class: type | None = None,
        metadata: dict[str, Any] | None = None,
    ):
        self.description = description
        self.parent = parent
        self._described_class = described_class
        self.own_metadata: dict[str, Any] = dict(metadata or {})
        self.examples: list[Example] = []
        self.children: list[ExampleGroup] = []
        self.hook_registry = HookRegistry()

    @classmethod
    def describe(cls, subject: Any = None, description: str | None = None, **metadata) -> ExampleGroup:
        """Create a top-level group.

        *subject* may be a string description or a class; a class becomes
        the group's ``described_class`` and its name the description.
        """
        text, described_class = _split_subject(subject, description)
        return cls(text, described_class=described_class, metadata=metadata)

    # --- Group chain ---

    def ancestors(self) -> Iterator[ExampleGroup]:
        """This group, then its parent, up to the top-level group."""
        group = self
        while group is not None:
            yield group
            group = group.parent

    def lineage(self) -> list[ExampleGroup]:
        """The group chain, top-level group first and this group last."""
        return list(reversed(list(self.ancestors())))

    @property
    def top_level(self) -> ExampleGroup:
        return self.lineage()[0]

    @property
    def metadata(self) -> dict[str, Any]:
        return merge_metadata(*(g.own_metadata for g in self.lineage()))

    @property
    def described_class(self) -> type | None:
        """The class described by the outermost group that describes one."""
        for group in self.lineage():
            if group._described_class is not None:
                return group._described_class
        return None

    @property
    def full_description(self) -> str:
        return ' '.join(g.description for g in self.lineage() if g.description)

    # --- Declaration DSL ---

    def context(self, subject: Any = None, description: str | None = None, **metadata) -> ExampleGroup:
        text, described_class = _split_subject(subject, description)
        child = type(self)(text, parent=self, described_class=described_class, metadata=metadata)
        self.children.append(child)
        return child

    def example(self, description_or_fn: str | Callable | None = None, fn: Callable | None = None, **metadata):
        """Register an example.

        Usage:
            group.example("adds", body)          # returns the Example
            group.example("pending idea")        # returns a decorator; unused -> pending

            @group.example("adds", demo="data")  # decorator, returns the Example
            def _(ctx): ...

            @group.example                       # description from docstring/name
            def adds_numbers(ctx): ...
        """
        # Case 1: @group.example -- applied directly to the body
        if callable(description_or_fn):
            return self._add_example(None, description_or_fn, metadata)

        description = description_or_fn
        # Case 2: group.example("desc", fn)
        if fn is not None:
            return self._add_example(description, fn, metadata)

        # Case 3: @group.example("desc", **metadata) -- or no body at all
        pending_example = self._add_example(description, None, metadata)

        def decorator(body: Callable) -> Example:
            pending_example.body = body
            if description is None:
                pending_example.description = describe_body(body)
            return pending_example
        return decorator

    it = example

    def before(self, scope_or_fn: str | HookScope | Callable = HookScope.EACH, fn: Callable | None = None):
        """Register a before hook. ``@group.before``, ``@group.before("all")``, or ``group.before("each", fn)``."""
        return self._hook_decorator(HookPhase.BEFORE, scope_or_fn, fn)

    def after(self, scope_or_fn: str | HookScope | Callable = HookScope.EACH, fn: Callable | None = None):
        """Register an after hook. Same calling conventions as ``before``."""
        return self._hook_decorator(HookPhase.AFTER, scope_or_fn, fn)

    def around(self, scope_or_fn: str | HookScope | Callable = HookScope.EACH, fn: Callable | None = None):
        """Register an around hook, called as ``fn(ctx, example)``; it must call ``example.run()``."""
        return self._hook_decorator(HookPhase.AROUND, scope_or_fn, fn)

    def _hook_decorator(self, phase: HookPhase, scope_or_fn, fn):
        if callable(scope_or_fn):
            self.hook_registry.register(HookScope.EACH, phase, scope_or_fn)
            return scope_or_fn
        scope = HookScope.coerce(scope_or_fn)
        if fn is not None:
            self.hook_registry.register(scope, phase, fn)
            return fn

        def decorator(hook_fn: Callable) -> Callable:
            self.hook_registry.register(scope, phase, hook_fn)
            return hook_fn
        return decorator

    def _add_example(self, description: str | None, body: Callable | None, metadata: dict[str, Any]) -> Example:
        example = Example(self, description, body, metadata)
        self.examples.append(example)
        return example

    def __enter__(self) -> ExampleGroup:
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    # --- Traversal ---

    def all_examples(self) -> list[Example]:
        """Every example in this group and its descendants, in run order."""
        found = list(self.examples)
        for child in self.children:
            found.extend(child.all_examples())
        return found

    # --- Running ---

    def run(
        self,
        config: RunConfig | None = None,
        reporters: list[Reporter] | None = None,
    ) -> bool:
        """Run every example in this group and its descendants.

        Returns True when no example failed. Example faults never escape
        this method; UsageFault does.
        """
        from .reporters import build_reporters

        config = config or RunConfig()
        if reporters is None:
            reporters = build_reporters(config)
        runner = ExampleRunner(config)
        try:
            self._run_group(runner, reporters, inherited_fault=None)
        finally:
            for reporter in reporters:
                reporter.flush()
        if config.profile_examples:
            ExConsole().rule("example profiler")
            runner.profiler.report()
        return runner.failure_count == 0

    def _run_group(
        self,
        runner: ExampleRunner,
        reporters: list[Reporter],
        inherited_fault: BaseException | None,
    ):
        ctx = GroupContext(self)
        self.hook_registry.freeze()
        try:
            fault = inherited_fault
            ran_before_all = fault is None
            if ran_before_all:
                fault = self._run_before_all(ctx)
            try:
                for example in self.examples:
                    if runner.should_stop:
                        return
                    self._run_example(runner, reporters, example, fault)
                for child in self.children:
                    if runner.should_stop:
                        return
                    child._run_group(runner, reporters, fault)
            finally:
                if ran_before_all:
                    self._run_after_all(ctx)
        finally:
            self.hook_registry.unfreeze()

    def _run_example(
        self,
        runner: ExampleRunner,
        reporters: list[Reporter],
        example: Example,
        fault: BaseException | None,
    ) -> ExecutionResult:
        for reporter in reporters:
            reporter.example_started(example)
        if fault is not None:
            result = runner.finalize_unrun(example, fault)
        else:
            result = runner.run(example)
        for reporter in reporters:
            reporter.example_finished(example, result)
        return result

    def _run_before_all(self, ctx: GroupContext) -> RuntimeFault | None:
        """Run before(:all) hooks in order; the first fault stops the rest."""
        for hook in self.hook_registry.hooks(HookScope.ALL, HookPhase.BEFORE):
            try:
                hook(ctx)
            except UsageFault:
                raise
            except Exception as exc:
                ExConsole().print_error(
                    f"{self.full_description}: before(:all) hook {hook.name} raised "
                    f"{type(exc).__name__}: {exc}"
                )
                return RuntimeFault(
                    f"before(:all) hook failed: {type(exc).__name__}: {exc}",
                    hook_name=hook.name,
                    cause=exc,
                )
        return None

    def _run_after_all(self, ctx: GroupContext):
        """Run after(:all) hooks, most recently registered first. Faults are reported, not raised."""
        for hook in reversed(self.hook_registry.hooks(HookScope.ALL, HookPhase.AFTER)):
            try:
                hook(ctx)
            except UsageFault:
                raise
            except Exception as exc:
                ExConsole().print_warning(
                    f"{self.full_description}: after(:all) hook {hook.name} raised "
                    f"{type(exc).__name__}: {exc}"
                )

    # --- Results ---

    def results(self) -> dict[ExecutionStatus, int]:
        """Count of examples per status, including descendants."""
        counts = {status: 0 for status in ExecutionStatus}
        for example in self.all_examples():
            counts[example.execution_result.status] += 1
        return counts

    def __repr__(self) -> str:
        return (
            f"ExampleGroup({self.full_description!r}, examples={len(self.examples)}, "
            f"children={len(self.children)})"
        )


def _split_subject(subject: Any, description: str | None) -> tuple[str, type | None]:
    if isinstance(subject, type):
        text = subject.__name__ if description is None else f"{subject.__name__} {description}"
        return text, subject
    if subject is None:
        return description or "", None
    text = str(subject) if description is None else f"{subject} {description}"
    return text, None


def describe(subject: Any = None, description: str | None = None, **metadata) -> ExampleGroup:
    """Create a top-level example group. See ``ExampleGroup.describe``."""
    return ExampleGroup.describe(subject, description, **metadata)
