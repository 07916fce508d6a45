"""JSONL reporter for appending example results as JSON Lines."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from .registry import ReporterRegistry
from .base import FilePathReporter

if TYPE_CHECKING:
    from ..example import Example
    from ..result import ExecutionResult


@ReporterRegistry.register
class JSONLReporter(FilePathReporter):
    """Append one JSON object per finished example.

    Each record carries the example's description, its full description
    and the result's ``to_dict()`` fields. The file is opened lazily on the
    first result, so a run with no examples writes nothing.
    """

    name = "jsonl"
    _file_extension = "jsonl"

    def _ensure_open(self):
        if self._file is None:
            self._filepath.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self._filepath, 'a', encoding='utf-8', newline='')

    def example_finished(self, example: Example, result: ExecutionResult):
        self._ensure_open()
        record = {
            "description": example.description,
            "full_description": example.full_description,
            **result.to_dict(),
        }
        self._file.write(json.dumps(record, default=str) + '\n')
        self._file.flush()
