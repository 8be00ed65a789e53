"""JSON Lines sink used for dry runs."""

from __future__ import annotations

import json
import sys
from datetime import datetime
from typing import Any, Mapping, Sequence, TextIO

from ..core.registry import SinkRegistry
from ..core.sink import EventSink
from ..execution.timeutil import format_rfc3339_nano
from .base import EventBuilder


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_rfc3339_nano(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@SinkRegistry.register("jsonl")
class JsonlEventSink(EventSink):
    """Write each built event as one JSON line instead of sending it."""

    sink_id = "jsonl"
    sink_name = "JSON Lines"

    def __init__(self, builder: EventBuilder[Mapping[str, Any]], stream: TextIO | None = None) -> None:
        super().__init__()
        self.builder = builder
        self._handle = stream if stream is not None else sys.stdout

    def flush_events(self, batch: Sequence[bytes]) -> None:
        for event in self.builder.build_batch(batch):
            json.dump(event, self._handle, ensure_ascii=False, default=_json_default)
            self._handle.write("\n")
        self._handle.flush()


__all__ = ["JsonlEventSink"]
