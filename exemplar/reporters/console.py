"""Console reporter for Rich-based result display."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from exconsole import ExConsole, apply_style, subtle
from .registry import ReporterRegistry
from ..result import ExecutionStatus
from .base import Reporter, _format_fault, _format_run_time

if TYPE_CHECKING:
    from ..example import Example
    from ..result import ExecutionResult


@ReporterRegistry.register
class ConsoleReporter(Reporter):
    """Print one line per example and a summary table via ExConsole.

    Failed and pending examples are remembered and listed again in the
    summary printed by ``flush()``, so they are not lost in long output.
    """

    name = "console"

    _MARKS = {
        ExecutionStatus.PASSED: ("status.passed", "✔"),
        ExecutionStatus.FAILED: ("status.failed", "✖"),
        ExecutionStatus.PENDING: ("status.pending", "…"),
        ExecutionStatus.NOT_RUN: ("status.not_run", "-"),
    }

    def __init__(self):
        self._console = ExConsole()
        self._counts = {status: 0 for status in ExecutionStatus}
        self._notable: list[tuple[str, ExecutionResult]] = []
        self._total_time = 0.0

    @property
    def counts(self) -> dict[ExecutionStatus, int]:
        return dict(self._counts)

    def example_finished(self, example: Example, result: ExecutionResult):
        self._counts[result.status] += 1
        self._total_time += result.run_time or 0.0
        style, mark = self._MARKS[result.status]
        self._console.print(
            f"{apply_style(mark, style)} {escape(example.full_description)} "
            f"{subtle(f'({_format_run_time(result.run_time)})')}"
        )
        if result.status in (ExecutionStatus.FAILED, ExecutionStatus.PENDING):
            self._notable.append((example.full_description, result))

    def flush(self):
        """Print the summary table and reset for the next run."""
        from rich.table import Table
        from rich import box

        total = sum(self._counts.values())
        if total == 0:
            return

        if self._notable:
            table = Table(
                box=box.SIMPLE,
                show_header=True,
                header_style="table.header",
                title="Failures and pending examples",
                title_style="detail",
                padding=(0, 1),
            )
            table.add_column("Example")
            table.add_column("Status")
            table.add_column("Detail", style="detail")
            for description, result in self._notable:
                style, _ = self._MARKS[result.status]
                if result.status is ExecutionStatus.FAILED:
                    detail = apply_style(
                        escape(_format_fault(result.exception_encountered)),
                        f"fault.{result.fault_kind}",
                    )
                else:
                    detail = escape(result.pending_message or "")
                table.add_row(escape(description), apply_style(result.status.value, style), detail)
            self._console.print(table)

        summary = (
            f"{total} examples, "
            f"{self._counts[ExecutionStatus.FAILED]} failed, "
            f"{self._counts[ExecutionStatus.PENDING]} pending "
            f"in {_format_run_time(self._total_time)}"
        )
        if self._counts[ExecutionStatus.FAILED]:
            self._console.print_error(summary)
        else:
            self._console.print_success(summary)

        self._counts = {status: 0 for status in ExecutionStatus}
        self._notable = []
        self._total_time = 0.0
