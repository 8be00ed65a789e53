from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence


class EventSink(ABC):
    """Destination for flushed batches of raw lines.

    ``flush_events`` must treat the batch as atomic: either every event is
    accepted downstream or the call raises. Implementations must not mutate
    ``batch``.
    """

    sink_id: str
    sink_name: str

    def __init__(self, **config: Any) -> None:
        self._config = config

    @abstractmethod
    def flush_events(self, batch: Sequence[bytes]) -> None:
        """Deliver ``batch`` or raise :class:`piper.core.errors.PiperError`."""

    def close(self) -> None:
        """Release transport resources."""

    def __enter__(self) -> "EventSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["EventSink"]
