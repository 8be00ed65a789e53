from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Dict, Generic, Tuple, Type, TypeVar

from .errors import ConfigError

if TYPE_CHECKING:
    from .sink import EventSink

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)


class RegistryBase(Generic[T]):
    """Name-to-class table filled by decorators; each subclass has its own table."""

    kind: ClassVar[str] = "entry"
    _registry_entries: ClassVar[Dict[str, Any]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry_entries = {}

    @classmethod
    def register(cls, key: str) -> Callable[[T], T]:
        def decorator(entry: T) -> T:
            if key in cls._registry_entries:
                raise ValueError(f"{cls.kind} {key!r} is already registered with {cls.__name__}")
            cls._registry_entries[key] = entry
            return entry

        return decorator

    @classmethod
    def get(cls, key: str) -> T:
        entry = cls._registry_entries.get(key)
        if entry is None:
            available = ", ".join(sorted(cls._registry_entries)) or "none"
            raise ConfigError(f"unknown {cls.kind} {key!r} (available: {available})")
        return entry

    @classmethod
    def create(cls, key: str, *args: Any, **kwargs: Any) -> Any:
        """Instantiate the class registered under ``key``."""
        entry = cls.get(key)
        logger.debug("creating %s %r (%s)", cls.kind, key, entry.__name__)
        return entry(*args, **kwargs)

    @classmethod
    def ids(cls) -> Tuple[str, ...]:
        return tuple(cls._registry_entries)

    @classmethod
    def items(cls) -> Tuple[Tuple[str, T], ...]:
        return tuple(cls._registry_entries.items())

    @classmethod
    def clear(cls) -> None:
        cls._registry_entries.clear()


class SinkRegistry(RegistryBase[Type["EventSink"]]):
    """Event sinks by ``sink_id``; the CLI builds every sink through it."""

    kind = "sink"


__all__ = ["RegistryBase", "SinkRegistry"]
