"""Reporters that consume finalized example results.

Reporters receive each example as it starts and its sealed ExecutionResult
when it finishes, and route them to different destinations (console, JSONL).
They are looked up by name in ReporterRegistry.
"""

from .base import Reporter, FilePathReporter
from .registry import ReporterRegistry, build_reporters
from .console import ConsoleReporter
from .jsonl import JSONLReporter

__all__ = [
    'Reporter',
    'FilePathReporter',
    'ReporterRegistry',
    'ConsoleReporter',
    'JSONLReporter',
    'build_reporters',
]
