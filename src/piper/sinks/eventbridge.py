"""AWS EventBridge sink backed by boto3 ``put_events``."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import ConfigError, SinkError
from ..core.registry import SinkRegistry
from ..core.sink import EventSink
from ..core.types import EventBridgeConfig, resource_field_name
from ..execution.fields import LineData
from ..execution.timeutil import NOW, parse_epoch_millis, utcnow
from .base import EventBuilder

logger = logging.getLogger(__name__)

# PutEvents accepts at most 10 entries per request.
MAX_BATCH_SIZE = 10


def check_batch_size(batch_size: int) -> None:
    if batch_size > MAX_BATCH_SIZE:
        raise ConfigError("batch size exceeds aws maximum")


class EventBridgeEventBuilder(EventBuilder[Dict[str, Any]]):
    def __init__(self, config: EventBridgeConfig) -> None:
        super().__init__(config.field_specs())
        self._event_bus = config.event_bus
        self._resource_count = len(config.resources)

    def build(self, line: LineData) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"Detail": line.text()}
        if self._event_bus:
            entry["EventBusName"] = self._event_bus

        detail_type = self.fields.value("DetailType", line)
        if detail_type:
            entry["DetailType"] = detail_type

        source = self.fields.value("Source", line)
        if source:
            entry["Source"] = source

        event_time = self._event_time(line)
        if event_time is not None:
            entry["Time"] = event_time

        resources = [
            self.fields.value(resource_field_name(index), line)
            for index in range(self._resource_count)
        ]
        if resources:
            entry["Resources"] = resources
        return entry

    def _event_time(self, line: LineData) -> Optional[datetime]:
        raw = self.fields.value("Time", line)
        if not raw:
            return None
        if raw == NOW:
            return utcnow()
        return parse_epoch_millis(raw)


@SinkRegistry.register("eventbridge")
class EventBridgeSink(EventSink):
    sink_id = "eventbridge"
    sink_name = "AWS EventBridge"

    def __init__(self, config: EventBridgeConfig, *, client: Any = None) -> None:
        super().__init__(region=config.region)
        self.builder = EventBridgeEventBuilder(config)
        self._client = client if client is not None else boto3.client("events", region_name=config.region)

    def flush_events(self, batch: Sequence[bytes]) -> None:
        if len(batch) > MAX_BATCH_SIZE:
            raise SinkError(f"{len(batch)} events exceed the PutEvents limit of {MAX_BATCH_SIZE}")
        entries = self.builder.build_batch(batch)
        logger.debug("putting %d events", len(entries))
        try:
            response = self._client.put_events(Entries=entries)
        except (BotoCoreError, ClientError) as exc:
            raise SinkError(f"{self.sink_name} request failed: {exc}") from exc

        failed = int(response.get("FailedEntryCount") or 0)
        if failed:
            errors = sorted(
                {
                    f"{item.get('ErrorCode')}: {item.get('ErrorMessage')}"
                    for item in response.get("Entries") or []
                    if item.get("ErrorCode")
                }
            )
            raise SinkError(
                f"one or more failed entries ({failed} of {len(entries)}): {'; '.join(errors)}",
                failed_entries=failed,
            )


__all__ = ["EventBridgeSink", "EventBridgeEventBuilder", "MAX_BATCH_SIZE", "check_batch_size"]
