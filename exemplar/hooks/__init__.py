"""Hook storage and resolution: scopes, phases, and per-group registries."""

from .hook_point import Hook, HookPhase, HookScope, SUPPORTED_HOOK_KEYS
from .registry import HookRegistry

__all__ = [
    'Hook',
    'HookPhase',
    'HookScope',
    'SUPPORTED_HOOK_KEYS',
    'HookRegistry',
]
