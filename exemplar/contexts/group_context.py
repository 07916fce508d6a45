"""GroupContext: what before(:all) / after(:all) hooks receive.

All-scoped hooks run once per group, outside any single example, so the
per-example operations are unavailable and fail loudly.
"""

from __future__ import annotations

from typing import Any, Mapping, TYPE_CHECKING

from ..errors import NoExecutionContextError
from ..metadata import read_only

if TYPE_CHECKING:
    from ..group import ExampleGroup


class GroupContext:

    def __init__(self, group: ExampleGroup):
        self._group = group
        self._metadata = read_only(group.metadata)

    @property
    def example_group(self) -> ExampleGroup:
        return self._group

    @property
    def description(self) -> str:
        return self._group.description

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._metadata

    @property
    def options(self) -> Mapping[str, Any]:
        return self._metadata

    @property
    def in_block(self) -> bool:
        return False

    @property
    def example(self):
        raise NoExecutionContextError("example", scope="all")

    def mark_pending(self, message: str | None = None):
        raise NoExecutionContextError("mark_pending", scope="all")
