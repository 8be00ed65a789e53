"""Shared plumbing for sinks: event builders and the httpx transport."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterable, Mapping, Sequence, TypeVar
from urllib.parse import urlsplit, urlunsplit

import httpx

from ..core.errors import ConfigError, SinkError
from ..core.sink import EventSink
from ..execution.fields import FieldResolver, LineData

logger = logging.getLogger(__name__)

E = TypeVar("E")

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class EventBuilder(ABC, Generic[E]):
    """Turn one raw input line into a vendor-specific event.

    Builders run once per buffered line at flush time. Each builder owns a
    :class:`FieldResolver`, so ``jp:`` expressions are compiled once per run
    and each line is decoded at most once however many fields query it.
    """

    def __init__(self, field_specs: Mapping[str, str]) -> None:
        self.fields = FieldResolver(field_specs)

    def build_batch(self, batch: Sequence[bytes]) -> list[E]:
        return [self.build_event(raw) for raw in batch]

    def build_event(self, raw: bytes) -> E:
        return self.build(LineData(raw))

    @abstractmethod
    def build(self, line: LineData) -> E:
        """Build the event for ``line``."""


def parse_headers(values: Iterable[str]) -> Dict[str, str]:
    """Parse curl-style ``Name: value`` header arguments."""
    headers: Dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep:
            raise ConfigError(f"invalid header {raw!r}")
        headers[name.strip()] = value.strip()
    return headers


def normalize_endpoint(endpoint: str, default_path: str) -> str:
    """Default to https and fill in ``default_path`` when the URL has none."""
    if "://" not in endpoint:
        endpoint = f"https://{endpoint}"
    parts = urlsplit(endpoint)
    if not parts.netloc:
        raise ConfigError(f"invalid endpoint {endpoint!r}")
    path = parts.path or default_path
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


class HttpEventSink(EventSink, Generic[E]):
    """POST each batch as a single request and require a 200 response."""

    def __init__(
        self,
        endpoint: str,
        builder: EventBuilder[E],
        *,
        headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        **config: Any,
    ) -> None:
        super().__init__(**config)
        self.endpoint = endpoint
        self.builder = builder
        request_headers: Dict[str, str] = dict(headers or {})
        request_headers["Content-Type"] = JSON_CONTENT_TYPE
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout),
            headers=request_headers,
            transport=transport,
        )

    def flush_events(self, batch: Sequence[bytes]) -> None:
        events = self.builder.build_batch(batch)
        body = self.encode(events)
        logger.debug("posting %d events (%d bytes) to %s", len(events), len(body), self.endpoint)
        try:
            response = self._client.post(self.endpoint, content=body)
        except httpx.HTTPError as exc:
            raise SinkError(f"{self.sink_name} request failed: {exc}") from exc
        if response.status_code != 200:
            raise SinkError(
                f"{self.sink_name} rejected batch: not OK, status code {response.status_code}",
                status_code=response.status_code,
            )

    @abstractmethod
    def encode(self, events: Sequence[E]) -> bytes:
        """Serialize a built batch into the request body."""

    def close(self) -> None:
        self._client.close()


__all__ = [
    "EventBuilder",
    "HttpEventSink",
    "JSON_CONTENT_TYPE",
    "normalize_endpoint",
    "parse_headers",
]
