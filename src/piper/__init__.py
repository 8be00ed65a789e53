"""
Batching publisher that pipes newline-delimited JSON to event ingestion
endpoints (Azure Event Grid, Splunk HEC, AWS EventBridge).

Prefer importing concrete sinks from ``piper.sinks``; the publisher and the
field resolver are exposed here for embedding.
"""

from .core.errors import (
    AlreadyRunningError,
    ConfigError,
    FieldCompileError,
    FieldEvalError,
    InputReadError,
    LineParseError,
    PiperError,
    SinkError,
)
from .core.sink import EventSink
from .core.types import PublisherConfig, PublisherStats
from .execution import BatchPublisher, FieldResolver, LineData

__version__ = "0.1.0"

__all__ = [
    "AlreadyRunningError",
    "BatchPublisher",
    "ConfigError",
    "EventSink",
    "FieldCompileError",
    "FieldEvalError",
    "FieldResolver",
    "InputReadError",
    "LineData",
    "LineParseError",
    "PiperError",
    "PublisherConfig",
    "PublisherStats",
    "SinkError",
]
