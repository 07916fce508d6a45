"""Metadata inheritance along the group chain.

Example metadata is never stored pre-merged: it is rebuilt from the owning
group chain at lookup time, so a lookup always reflects the groups'
declared metadata with the example's own keys winning collisions.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping


def merge_metadata(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge metadata mappings, later layers overriding earlier ones.

    Pass layers outermost first; ``None`` layers are skipped.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def chain_metadata(groups_outermost_first: Iterable, own: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Merge each group's own metadata (outermost first) and then *own*."""
    return merge_metadata(*(g.own_metadata for g in groups_outermost_first), own)


def read_only(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    """A read-only view of *mapping*."""
    return MappingProxyType(dict(mapping))
