"""Single-example execution engine for a describe/it style test framework.

Runs each example inside its group's hook chain:
- ExampleGroup: examples, child groups, hooks and inherited metadata
- ExampleRunner: around/before/body/after orchestration and fault capture
- ExecutionContext / GroupContext: what bodies and hooks receive
- ExecutionResult: sealed outcome stored under metadata['execution_result']

Result reporting:
- Reporter base class, ConsoleReporter, JSONLReporter (exemplar.reporters)
"""

from .config import RunConfig
from .errors import (
    ExemplarError, AssertionFault, ExpectationNotMetError, RuntimeFault,
    UsageFault, NoExecutionContextError, RegistryFrozenError, ExamplePending,
    classify_fault,
)
from .result import EXECUTION_RESULT_KEY, ExecutionResult, ExecutionStatus
from .hooks import Hook, HookPhase, HookScope, HookRegistry
from .contexts import ExamplePhase, ExecutionContext, GroupContext, ExampleProfiler
from .example import Example
from .runner import ExampleRunner, ExampleHandle, RunnerState
from .group import ExampleGroup, describe
from .reporters import (
    Reporter, ReporterRegistry, ConsoleReporter, JSONLReporter, build_reporters,
)

__all__ = [
    'RunConfig',
    'ExemplarError', 'AssertionFault', 'ExpectationNotMetError', 'RuntimeFault',
    'UsageFault', 'NoExecutionContextError', 'RegistryFrozenError', 'ExamplePending',
    'classify_fault',
    'EXECUTION_RESULT_KEY', 'ExecutionResult', 'ExecutionStatus',
    'Hook', 'HookPhase', 'HookScope', 'HookRegistry',
    'ExamplePhase', 'ExecutionContext', 'GroupContext', 'ExampleProfiler',
    'Example',
    'ExampleRunner', 'ExampleHandle', 'RunnerState',
    'ExampleGroup', 'describe',
    'Reporter', 'ReporterRegistry', 'ConsoleReporter', 'JSONLReporter', 'build_reporters',
]
