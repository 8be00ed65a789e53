"""Event sink implementations.

Sinks register themselves with ``piper.core.SinkRegistry``.
"""

from .base import EventBuilder, HttpEventSink
from .eventbridge import EventBridgeSink
from .eventgrid import EventGridSink
from .jsonl import JsonlEventSink
from .splunk import SplunkSink

__all__ = [
    "EventBuilder",
    "HttpEventSink",
    "EventBridgeSink",
    "EventGridSink",
    "JsonlEventSink",
    "SplunkSink",
]
