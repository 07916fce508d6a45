"""Ordered hook storage for a single example group."""

from __future__ import annotations

from typing import Callable, TYPE_CHECKING

from ..errors import RegistryFrozenError, UsageFault
from .hook_point import Hook, HookPhase, HookScope, SUPPORTED_HOOK_KEYS

if TYPE_CHECKING:
    from ..group import ExampleGroup


class HookRegistry:
    """Hooks declared directly on one group, keyed by (scope, phase).

    Registration order is preserved per key. The registry knows nothing about
    ancestor groups; ``resolve()`` walks the group chain and applies the
    ordering rules for each phase.

    A registry is frozen while its group runs, so hook lists are read-only for
    the duration of any example's execution.
    """

    def __init__(self):
        self._hooks: dict[tuple[HookScope, HookPhase], list[Hook]] = {
            key: [] for key in SUPPORTED_HOOK_KEYS
        }
        self._frozen = False

    def register(
        self,
        scope: HookScope | str,
        phase: HookPhase,
        fn: Callable,
    ) -> Hook:
        """Append *fn* to the hook list for (*scope*, *phase*).

        Raises:
            UsageFault: For around hooks with ALL scope.
            RegistryFrozenError: If the owning group is currently running.
        """
        scope = HookScope.coerce(scope)
        if not callable(fn):
            raise TypeError(f"Hook must be callable, got {type(fn).__name__}")
        if (scope, phase) not in self._hooks:
            raise UsageFault(
                f"{phase.value}({scope.value!r}) hooks are not supported; "
                f"around hooks only wrap individual examples",
                details={"scope": scope.value, "phase": phase.value},
            )
        if self._frozen:
            raise RegistryFrozenError(
                "hooks cannot be registered while the group is running",
                details={"scope": scope.value, "phase": phase.value},
            )
        hook = Hook(fn=fn, scope=scope, phase=phase)
        self._hooks[(scope, phase)].append(hook)
        return hook

    def hooks(self, scope: HookScope | str, phase: HookPhase) -> list[Hook]:
        """This group's own hooks for (*scope*, *phase*), in registration order."""
        return list(self._hooks.get((HookScope.coerce(scope), phase), []))

    def has_hooks(self, scope: HookScope | str, phase: HookPhase) -> bool:
        return bool(self._hooks.get((HookScope.coerce(scope), phase)))

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._hooks.values())

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self):
        self._frozen = True

    def unfreeze(self):
        self._frozen = False

    @classmethod
    def resolve(
        cls,
        group: ExampleGroup,
        scope: HookScope | str,
        phase: HookPhase,
    ) -> list[Hook]:
        """Hooks that apply to an example in *group*, in execution order.

        - BEFORE: outermost group first, each group in registration order.
        - AFTER: innermost group first, each group most-recent first, so
          teardown unwinds like a stack.
        - AROUND: outermost group first; the first hook in the list is the
          outermost wrapper.
        """
        scope = HookScope.coerce(scope)
        chain = group.lineage()
        if phase is HookPhase.AFTER:
            resolved = []
            for g in reversed(chain):
                resolved.extend(reversed(g.hook_registry.hooks(scope, phase)))
            return resolved
        resolved = []
        for g in chain:
            resolved.extend(g.hook_registry.hooks(scope, phase))
        return resolved

