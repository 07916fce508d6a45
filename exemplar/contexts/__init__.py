"""Context objects handed to example bodies and hooks.

- ExecutionContext: per-example state for bodies and each-scoped hooks
- GroupContext: what all-scoped hooks receive (no single example)
- ExampleProfiler: per-example before/body/after timings
"""

from .execution_context import ExamplePhase, ExecutionContext
from .group_context import GroupContext
from .profiler import ExampleProfiler

__all__ = [
    'ExamplePhase',
    'ExecutionContext',
    'GroupContext',
    'ExampleProfiler',
]
