"""Per-example phase timings for profiled runs."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

from rich import box
from rich.markup import escape
from rich.table import Table

from exconsole import ExConsole

if TYPE_CHECKING:
    from ..example import Example


PHASES = ("before", "body", "after")


class ExampleProfiler:
    """Times the before(:each) hooks, body and after(:each) hooks of every example.

    ExampleRunner opens one record per example with ``example()`` and times
    each part of it with ``phase()``. A re-run replaces the example's record.
    ``report()`` prints the slowest examples with their breakdown::

        profiler = ExampleProfiler(enabled=True, slowest=5)
        with profiler.example(example):
            with profiler.phase("before"):
                ...
        profiler.report()
    """

    def __init__(self, enabled: bool = False, slowest: int = 10):
        self.enabled = enabled
        self.slowest = slowest
        self._records: dict[Example, dict[str, float]] = {}
        self._current: dict[str, float] | None = None

    @contextmanager
    def example(self, example: Example):
        if not self.enabled:
            yield
            return
        record = dict.fromkeys(PHASES, 0.0)
        self._records[example] = record
        self._current = record
        try:
            yield
        finally:
            self._current = None

    @contextmanager
    def phase(self, name: str):
        """Add the time spent in the block to *name* of the current example."""
        record = self._current
        if record is None:
            yield
            return
        start = time.perf_counter()
        try:
            yield
        finally:
            record[name] = record.get(name, 0.0) + time.perf_counter() - start

    @property
    def timings(self) -> dict[Example, dict[str, float]]:
        """Seconds per phase, keyed by example."""
        return {example: dict(record) for example, record in self._records.items()}

    def report(self) -> list[dict]:
        """Print the slowest examples and return every profiled one.

        Returns:
            Rows sorted slowest first, each
            ``{example, before_ms, body_ms, after_ms, total_ms}``.
        """
        rows = []
        for example, record in self._records.items():
            row = {'example': example.full_description}
            for name in PHASES:
                row[f'{name}_ms'] = record.get(name, 0.0) * 1000
            row['total_ms'] = sum(record.values()) * 1000
            rows.append(row)
        rows.sort(key=lambda row: row['total_ms'], reverse=True)
        if not rows:
            return rows

        shown = rows[:self.slowest]
        table = Table(
            box=box.SIMPLE,
            header_style="table.header",
            title=f"Slowest {len(shown)} of {len(rows)} examples",
            title_style="detail",
        )
        table.add_column("Example")
        for name in PHASES:
            table.add_column(name, justify="right", style="metric.value")
        table.add_column("total", justify="right", style="metric.value")
        for row in shown:
            table.add_row(
                escape(row['example']),
                *(f"{row[f'{name}_ms']:.1f}ms" for name in PHASES),
                f"{row['total_ms']:.1f}ms",
            )
        ExConsole().print(table)
        return rows

    def reset(self):
        self._records.clear()
        self._current = None
