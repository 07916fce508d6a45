"""Hook scopes and phases.

A hook is identified by where it runs relative to an example (its phase)
and how often it runs (its scope). Every registered hook is stored under a
``(HookScope, HookPhase)`` pair.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class HookScope(Enum):
    """How often a hook runs."""
    EACH = "each"   # once per example, inside that example's context
    ALL = "all"     # once per group, outside any single example

    @classmethod
    def coerce(cls, value: 'HookScope | str') -> 'HookScope':
        """Accept either a HookScope or its string value ('each' / 'all')."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ', '.join(repr(s.value) for s in cls)
            raise ValueError(f"Unknown hook scope: {value!r}. Expected one of {valid}") from None


class HookPhase(Enum):
    """Where a hook runs relative to the example body."""
    BEFORE = "before"
    AFTER = "after"
    AROUND = "around"


# Around hooks wrap a single example, so they only exist per example.
SUPPORTED_HOOK_KEYS = frozenset({
    (HookScope.EACH, HookPhase.BEFORE),
    (HookScope.EACH, HookPhase.AFTER),
    (HookScope.EACH, HookPhase.AROUND),
    (HookScope.ALL, HookPhase.BEFORE),
    (HookScope.ALL, HookPhase.AFTER),
})


@dataclass(frozen=True)
class Hook:
    """A registered hook callable plus where it was declared."""
    fn: Callable
    scope: HookScope
    phase: HookPhase

    @property
    def name(self) -> str:
        return getattr(self.fn, '__qualname__', None) or repr(self.fn)

    def __call__(self, *args, **kwargs):
        return self.fn(*args, **kwargs)
