"""Execution pipeline components: field resolution, flush timing, and batching."""

from .fields import FieldResolver, LineData
from .publisher import BatchPublisher
from .ticker import FlushTicker

__all__ = [
    "BatchPublisher",
    "FieldResolver",
    "FlushTicker",
    "LineData",
]
