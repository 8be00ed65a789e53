from __future__ import annotations

import io
import json

from piper.core.types import EventBridgeConfig, SplunkConfig
from piper.sinks.eventbridge import EventBridgeEventBuilder
from piper.sinks.jsonl import JsonlEventSink
from piper.sinks.splunk import SplunkEventBuilder


def test_writes_one_event_per_line() -> None:
    stream = io.StringIO()
    builder = SplunkEventBuilder(SplunkConfig(endpoint="x", source="jp:src").field_specs())
    sink = JsonlEventSink(builder, stream)

    sink.flush_events([b'{"src": "a"}', b'{"src": "b"}'])

    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert events == [
        {"source": "a", "event": {"src": "a"}},
        {"source": "b", "event": {"src": "b"}},
    ]


def test_datetimes_rendered_as_rfc3339() -> None:
    stream = io.StringIO()
    builder = EventBridgeEventBuilder(
        EventBridgeConfig(source="s", detail_type="t", time="jp:ts")
    )
    sink = JsonlEventSink(builder, stream)

    sink.flush_events([b'{"ts": 1608309835000}'])

    assert json.loads(stream.getvalue())["Time"] == "2020-12-18T16:43:55Z"
