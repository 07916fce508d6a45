"""Reporter base classes and shared formatting helpers.

Defines the Reporter ABC and the FilePathReporter base for reporters that
write to a file resolved from the run configuration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import RunConfig

if TYPE_CHECKING:
    from ..example import Example
    from ..result import ExecutionResult


# --- Formatting helpers used by multiple reporters ---

def _format_run_time(seconds: float | None) -> str:
    """Format a run time in seconds for display."""
    if seconds is None:
        return "-"
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    return f"{seconds:.2f}s"


def _format_fault(fault: BaseException | None) -> str:
    if fault is None:
        return ""
    return f"{type(fault).__name__}: {fault}"


# --- Base classes ---

class Reporter(ABC):
    """Base class for result destinations."""

    name: str = "base"

    @classmethod
    def from_config(cls, config: RunConfig) -> Reporter:
        """Build an instance for a run. Override when construction needs config."""
        return cls()

    def example_started(self, example: Example):
        """Called right before an example runs. Default is a no-op."""
        pass

    @abstractmethod
    def example_finished(self, example: Example, result: ExecutionResult):
        """Receive the sealed result of an example.

        Args:
            example: The example that ran (or was skipped by a failing
                before(:all) hook).
            result: Its finalized ExecutionResult.
        """
        ...

    def flush(self):
        """Flush any buffered output. Called at the end of a run."""
        pass


class FilePathReporter(Reporter):
    """Base for reporters that write to a file.

    Handles two modes:
    - Fixed path: filepath provided directly
    - Auto path: ``{output_dir}/{run_name}.{ext}`` with collision avoidance
    """

    _file_extension: str  # subclasses must set this

    def __init__(self, filepath: str | Path):
        self._filepath = Path(filepath)
        self._file = None

    @classmethod
    def from_config(cls, config: RunConfig) -> FilePathReporter:
        return cls(cls._resolve_path(Path(config.output_dir), config.run_name))

    @classmethod
    def _resolve_path(cls, output_dir: Path, run_name: str) -> Path:
        """Resolve a collision-free path for the given run name."""
        base_path = output_dir / f"{run_name}.{cls._file_extension}"
        if not base_path.exists():
            return base_path
        num = 1
        while True:
            candidate = output_dir / f"{run_name}_{num}.{cls._file_extension}"
            if not candidate.exists():
                return candidate
            num += 1

    @property
    def filepath(self) -> Path:
        return self._filepath

    def _close_file(self):
        """Flush and close the current file handle if open."""
        if self._file is not None:
            self._file.flush()
            self._file.close()
            self._file = None

    def flush(self):
        self._close_file()

