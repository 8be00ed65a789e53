from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from .errors import ConfigError

DEFAULT_BATCH_SIZE = 10
DEFAULT_FLUSH_INTERVAL_MS = 2000


@dataclass(slots=True)
class PublisherConfig:
    """Batching thresholds for a publisher run."""

    batch_size: int = DEFAULT_BATCH_SIZE
    flush_interval_ms: int = DEFAULT_FLUSH_INTERVAL_MS

    def __post_init__(self) -> None:
        if not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ConfigError(f"batch size must be a positive integer, got {self.batch_size!r}")
        if not isinstance(self.flush_interval_ms, int) or self.flush_interval_ms < 0:
            raise ConfigError(
                f"flush interval must be a non-negative number of milliseconds, got {self.flush_interval_ms!r}"
            )

    @property
    def flush_interval(self) -> float:
        """Flush interval in seconds; ``0.0`` disables time-triggered flushes."""
        return self.flush_interval_ms / 1000.0


@dataclass(slots=True)
class PublisherStats:
    """Counters reported by a finished publisher run."""

    lines_read: int = 0
    lines_skipped: int = 0
    events_sent: int = 0
    batches_sent: int = 0


@dataclass(slots=True)
class EventGridConfig:
    endpoint: str
    subject: str
    event_type: str
    event_id: str = ""
    event_time: str = "now"
    data_version: str = "1.0"
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 30.0

    def field_specs(self) -> dict[str, str]:
        return {
            "id": self.event_id,
            "subject": self.subject,
            "eventType": self.event_type,
            "eventTime": self.event_time,
            "dataVersion": self.data_version,
        }


@dataclass(slots=True)
class SplunkConfig:
    endpoint: str
    source: str = ""
    sourcetype: str = ""
    host: str = ""
    index: str = ""
    time: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = 30.0

    def field_specs(self) -> dict[str, str]:
        return {
            "index": self.index,
            "host": self.host,
            "source": self.source,
            "sourcetype": self.sourcetype,
            "time": self.time,
        }


@dataclass(slots=True)
class EventBridgeConfig:
    source: str
    detail_type: str
    region: str = "us-east-1"
    event_bus: str = ""
    time: str = ""
    resources: Sequence[str] = field(default_factory=tuple)

    def field_specs(self) -> dict[str, str]:
        specs = {
            "DetailType": self.detail_type,
            "Source": self.source,
            "Time": self.time,
        }
        for index, spec in enumerate(self.resources):
            specs[resource_field_name(index)] = spec
        return specs


def resource_field_name(index: int) -> str:
    return f"resource_{index}"


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "DEFAULT_FLUSH_INTERVAL_MS",
    "PublisherConfig",
    "PublisherStats",
    "EventGridConfig",
    "SplunkConfig",
    "EventBridgeConfig",
    "resource_field_name",
]
