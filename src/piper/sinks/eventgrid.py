"""Azure Event Grid topic sink (Event Grid event schema)."""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from ..core.registry import SinkRegistry
from ..core.types import EventGridConfig
from ..execution.fields import LineData
from ..execution.timeutil import NOW, format_rfc3339_nano, parse_epoch_millis, utcnow
from .base import EventBuilder, HttpEventSink, normalize_endpoint

DEFAULT_PATH = "/api/events"
API_VERSION = "2018-01-01"


def eventgrid_url(endpoint: str) -> str:
    """Topic endpoint with the default events path and ``api-version`` query."""
    url = normalize_endpoint(endpoint, DEFAULT_PATH)
    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    if not query.get("api-version"):
        query["api-version"] = API_VERSION
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


class EventGridEventBuilder(EventBuilder[Dict[str, Any]]):
    def build(self, line: LineData) -> Dict[str, Any]:
        fields = self.fields
        event: Dict[str, Any] = {
            "id": fields.value("id", line) or str(uuid.uuid4()),
            "subject": fields.value("subject", line),
            "dataVersion": fields.value("dataVersion", line),
            "eventTime": self._event_time(line),
            "eventType": fields.value("eventType", line),
            "data": line.parsed(),
        }
        return {key: value for key, value in event.items() if value not in ("", None)}

    def _event_time(self, line: LineData) -> str:
        raw = self.fields.value("eventTime", line)
        if raw == NOW:
            return format_rfc3339_nano(utcnow())
        if not raw:
            return ""
        return format_rfc3339_nano(parse_epoch_millis(raw))


@SinkRegistry.register("eventgrid")
class EventGridSink(HttpEventSink[Dict[str, Any]]):
    sink_id = "eventgrid"
    sink_name = "Azure Event Grid"

    def __init__(
        self,
        config: EventGridConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(
            eventgrid_url(config.endpoint),
            EventGridEventBuilder(config.field_specs()),
            headers=config.headers,
            timeout=config.timeout,
            transport=transport,
        )

    def encode(self, events: Sequence[Dict[str, Any]]) -> bytes:
        return json.dumps(list(events), ensure_ascii=False).encode("utf-8")


__all__ = ["EventGridSink", "EventGridEventBuilder", "eventgrid_url"]
