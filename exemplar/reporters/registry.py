"""Reporter lookup by name.

``RunConfig.reporters`` lists reporter names; ``build_reporters()`` turns
them into fresh Reporter instances for a single run.
"""

from __future__ import annotations

from ..config import RunConfig
from .base import Reporter


class ReporterRegistry:
    """Maps reporter names to Reporter subclasses.

    Holds classes, not instances: reporters keep open files and per-run
    counts, so each run builds its own through ``from_config()``.
    """

    _reporters: dict[str, type[Reporter]] = {}

    @classmethod
    def register(cls, reporter_cls: type[Reporter]) -> type[Reporter]:
        """Class decorator registering *reporter_cls* under its ``name``.

        Raises:
            TypeError: If *reporter_cls* is not a Reporter subclass with a
                name of its own.
            ValueError: If another class already uses that name.
        """
        if not (isinstance(reporter_cls, type) and issubclass(reporter_cls, Reporter)):
            raise TypeError(f"Only Reporter subclasses can be registered, got {reporter_cls!r}")
        name = reporter_cls.name
        if not name or name == Reporter.name:
            raise TypeError(f"{reporter_cls.__name__} must define its own 'name'")
        existing = cls._reporters.get(name)
        if existing is not None and existing is not reporter_cls:
            raise ValueError(f"Reporter name '{name}' is already used by {existing.__name__}")
        cls._reporters[name] = reporter_cls
        return reporter_cls

    @classmethod
    def unregister(cls, name: str):
        cls._reporters.pop(name, None)

    @classmethod
    def get(cls, name: str) -> type[Reporter]:
        try:
            return cls._reporters[name]
        except KeyError:
            available = ', '.join(cls.names())
            raise ValueError(f"Unknown reporter: '{name}'. Available: {available}") from None

    @classmethod
    def names(cls) -> list[str]:
        return sorted(cls._reporters)


def build_reporters(config: RunConfig) -> list[Reporter]:
    """Instantiate the reporters named in *config*, in order."""
    return [ReporterRegistry.get(name).from_config(config) for name in config.reporters]
