"""
ExampleRunner: runs one example through its hooks and seals the result.

Execution of a single example, outermost to innermost:

    around(:each) hooks, ancestors outermost
      before(:each) hooks, ancestors first      <- first fault stops the rest
        example body                            <- skipped if a before faulted
                                                   or marked the example pending
      after(:each) hooks, innermost first       <- always run, each guarded

Faults from the body and from every per-example hook are captured into a
single fault slot (first one wins) and never propagate to the group's run
loop. UsageFault is the exception: it signals a broken test definition and
is raised to the caller.

``ctx.mark_pending()`` stops the hook or body that calls it. A fault decides
the outcome over pending: FAILED, then PENDING, then PASSED.
"""

import time
from datetime import datetime, timezone
from enum import Enum, auto
from functools import partial
from typing import Callable, TYPE_CHECKING

from exconsole import ExConsole

from .config import RunConfig
from .contexts import ExamplePhase, ExampleProfiler, ExecutionContext
from .errors import ExamplePending, UsageFault
from .hooks import Hook, HookPhase, HookRegistry, HookScope
from .result import ExecutionResult, ExecutionStatus

if TYPE_CHECKING:
    from .example import Example


NOT_YET_IMPLEMENTED = "Not yet implemented"


class RunnerState(Enum):
    """Lifecycle of one example run."""
    NOT_STARTED = auto()
    RUNNING = auto()
    PASSED = auto()
    FAILED = auto()
    PENDING = auto()
    FINALIZED = auto()


_OUTCOME_STATES = {
    ExecutionStatus.PASSED: RunnerState.PASSED,
    ExecutionStatus.FAILED: RunnerState.FAILED,
    ExecutionStatus.PENDING: RunnerState.PENDING,
}


class ExampleHandle:
    """What an around(:each) hook receives as the wrapped example.

    Calling ``run()`` executes the next layer inward (another around hook,
    or the before/body/after core). A hook that never calls ``run()``
    prevents the example from running at all.
    """

    def __init__(self, ctx: ExecutionContext, inner: Callable[[], None]):
        self._ctx = ctx
        self._inner = inner
        self._executed = False

    @property
    def executed(self) -> bool:
        return self._executed

    @property
    def description(self) -> str:
        return self._ctx.description

    @property
    def metadata(self):
        return self._ctx.metadata

    def run(self):
        if self._executed:
            raise UsageFault(
                "around hook invoked the wrapped example more than once",
                details={"example": self._ctx.full_description},
            )
        self._executed = True
        self._inner()

    def __call__(self):
        self.run()


class ExampleRunner:
    """Runs examples one at a time and finalizes their results.

    One runner is shared by a whole group run; it holds the run
    configuration, the profiler and the failure count used by fail-fast.
    """

    def __init__(self, config: RunConfig | None = None):
        self._config = config or RunConfig()
        self._profiler = ExampleProfiler(
            enabled=self._config.profile_examples,
            slowest=self._config.profile_slowest,
        )
        self._state = RunnerState.NOT_STARTED
        self._failures = 0

    @property
    def state(self) -> RunnerState:
        """State of the most recent (or current) example run."""
        return self._state

    @property
    def profiler(self) -> ExampleProfiler:
        return self._profiler

    @property
    def failure_count(self) -> int:
        return self._failures

    @property
    def should_stop(self) -> bool:
        """Whether fail-fast wants the group to stop starting new examples."""
        return self._config.fail_fast and self._failures > 0

    def run(self, example: 'Example') -> ExecutionResult:
        """Run *example* with its hooks and return the sealed result.

        The result is also stored on the example (``execution_result`` and
        ``metadata['execution_result']``).

        Raises:
            UsageFault: If the body or a hook misuses the API. The example's
                stored result is left untouched in that case.
        """
        self._state = RunnerState.NOT_STARTED
        ctx = ExecutionContext(example)
        example._attach_context(ctx)
        started_at = datetime.now(timezone.utc)
        start = time.perf_counter()

        self._state = RunnerState.RUNNING
        try:
            with self._profiler.example(example):
                around = HookRegistry.resolve(example.example_group, HookScope.EACH, HookPhase.AROUND)
                chain = self._compose(ctx, around, partial(self._run_core, ctx, example))
                chain()
        except BaseException:
            # No result is sealed for an aborted run
            self._state = RunnerState.FINALIZED
            raise
        finally:
            ctx.close()
            example._detach_context()

        status = self._outcome(ctx)
        self._state = _OUTCOME_STATES[status]
        if status is ExecutionStatus.FAILED:
            self._failures += 1

        result = ExecutionResult(
            status=status,
            pending=ctx.pending,
            exception_encountered=ctx.fault,
            pending_message=ctx.pending_message,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc),
            run_time=time.perf_counter() - start,
        )
        example._store_result(result)
        self._state = RunnerState.FINALIZED
        return result

    def finalize_unrun(self, example: 'Example', fault: BaseException) -> ExecutionResult:
        """Seal *example* as failed by *fault* without running it.

        Used when a before(:all) hook of an enclosing group failed.
        """
        now = datetime.now(timezone.utc)
        result = ExecutionResult(
            status=ExecutionStatus.FAILED,
            exception_encountered=fault,
            started_at=now,
            finished_at=now,
            run_time=0.0,
        )
        example._store_result(result)
        self._failures += 1
        self._state = RunnerState.FINALIZED
        return result

    # --- Composition ---

    def _compose(self, ctx: ExecutionContext, around: list[Hook], core: Callable[[], None]) -> Callable[[], None]:
        """Wrap *core* in around hooks; the first hook in *around* is outermost."""
        unit = core
        for hook in reversed(around):
            unit = partial(self._run_around, ctx, hook, unit)
        return unit

    def _run_around(self, ctx: ExecutionContext, hook: Hook, inner: Callable[[], None]):
        handle = ExampleHandle(ctx, inner)
        self._guard(ctx, f"around hook {hook.name}", hook, ctx, handle)

    def _run_core(self, ctx: ExecutionContext, example: 'Example'):
        """before(:each) hooks, then the body, then after(:each) hooks."""
        group = example.example_group
        befores = HookRegistry.resolve(group, HookScope.EACH, HookPhase.BEFORE)
        afters = HookRegistry.resolve(group, HookScope.EACH, HookPhase.AFTER)
        try:
            with self._profiler.phase("before"):
                setup_ok = all(
                    self._guard(ctx, f"before hook {hook.name}", hook, ctx)
                    for hook in befores
                )
            if setup_ok:
                with self._profiler.phase("body"):
                    self._run_body(ctx, example)
        finally:
            ctx.enter_phase(ExamplePhase.TEARDOWN)
            with self._profiler.phase("after"):
                for hook in afters:
                    self._guard(ctx, f"after hook {hook.name}", hook, ctx)

    def _run_body(self, ctx: ExecutionContext, example: 'Example'):
        if example.body is None:
            self._guard(ctx, "example body", ctx.mark_pending, NOT_YET_IMPLEMENTED)
            return
        with ctx.inside_body():
            self._guard(ctx, "example body", example.body, ctx)

    def _guard(self, ctx: ExecutionContext, label: str, fn: Callable, *args) -> bool:
        """Call ``fn(*args)``, capturing any fault.

        Returns True on success, False if *fn* faulted or marked the
        example pending.
        """
        try:
            fn(*args)
            return True
        except ExamplePending:
            return False
        except UsageFault:
            raise
        except Exception as exc:
            if not ctx.record_fault(exc) and self._config.report_suppressed_faults:
                ExConsole().print_warning(
                    f"{ctx.full_description}: {label} raised {type(exc).__name__}: {exc} "
                    f"(not recorded; an earlier fault was already captured)"
                )
            return False

    @staticmethod
    def _outcome(ctx: ExecutionContext) -> ExecutionStatus:
        if ctx.fault is not None:
            return ExecutionStatus.FAILED
        if ctx.pending:
            return ExecutionStatus.PENDING
        return ExecutionStatus.PASSED
