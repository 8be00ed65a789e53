"""Splunk HTTP Event Collector sink."""

from __future__ import annotations

import json
from typing import Any, Dict, Sequence

import httpx

from ..core.registry import SinkRegistry
from ..core.types import SplunkConfig
from ..execution.fields import LineData
from ..execution.timeutil import epoch_seconds
from .base import EventBuilder, HttpEventSink, normalize_endpoint

DEFAULT_PATH = "/services/collector/event"


def splunk_url(endpoint: str) -> str:
    return normalize_endpoint(endpoint, DEFAULT_PATH)


class SplunkEventBuilder(EventBuilder[Dict[str, Any]]):
    def build(self, line: LineData) -> Dict[str, Any]:
        fields = self.fields
        event: Dict[str, Any] = {
            "index": fields.value("index", line),
            "host": fields.value("host", line),
            "sourcetype": fields.value("sourcetype", line),
            "source": fields.value("source", line),
        }
        raw_time = fields.value("time", line)
        if raw_time:
            event["time"] = epoch_seconds(raw_time)
        event["event"] = line.parsed()
        return {key: value for key, value in event.items() if value not in ("", None)}


@SinkRegistry.register("splunk")
class SplunkSink(HttpEventSink[Dict[str, Any]]):
    sink_id = "splunk"
    sink_name = "Splunk HEC"

    def __init__(
        self,
        config: SplunkConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(
            splunk_url(config.endpoint),
            SplunkEventBuilder(config.field_specs()),
            headers=config.headers,
            timeout=config.timeout,
            transport=transport,
        )

    def encode(self, events: Sequence[Dict[str, Any]]) -> bytes:
        # HEC batches are concatenated JSON objects, not an array.
        return "".join(json.dumps(event, ensure_ascii=False) + "\n" for event in events).encode("utf-8")


__all__ = ["SplunkSink", "SplunkEventBuilder", "splunk_url"]
