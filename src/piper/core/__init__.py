"""
Core abstractions shared by the publisher and the sinks.
"""

from .errors import (
    AlreadyRunningError,
    ConfigError,
    FieldCompileError,
    FieldEvalError,
    InputReadError,
    LineParseError,
    PiperError,
    SinkError,
)
from .types import (
    EventBridgeConfig,
    EventGridConfig,
    PublisherConfig,
    PublisherStats,
    SplunkConfig,
)
from .registry import RegistryBase, SinkRegistry
from .sink import EventSink

__all__ = [
    "AlreadyRunningError",
    "ConfigError",
    "FieldCompileError",
    "FieldEvalError",
    "InputReadError",
    "LineParseError",
    "PiperError",
    "SinkError",
    "EventBridgeConfig",
    "EventGridConfig",
    "PublisherConfig",
    "PublisherStats",
    "SplunkConfig",
    "RegistryBase",
    "SinkRegistry",
    "EventSink",
]
