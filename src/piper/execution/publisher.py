"""Batching publisher: buffer input lines and flush them to a sink."""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import TYPE_CHECKING, Iterable, Optional

from ..core.errors import AlreadyRunningError, InputReadError
from ..core.types import PublisherConfig, PublisherStats
from .ticker import FlushTicker

if TYPE_CHECKING:
    from ..core.sink import EventSink

logger = logging.getLogger(__name__)


class BatchPublisher:
    """Accumulate non-blank lines and hand them to a sink in ordered batches.

    A batch is flushed when it reaches ``config.batch_size`` lines, when the
    flush interval elapses after the first line of a batch was buffered, and
    once more when input ends. Buffer mutation, the running flag, and the
    sink call itself share one lock, so timer flushes and size flushes never
    interleave. After a failed flush the publisher accepts no further lines
    and never flushes again within the same run, so a rejected batch is
    not re-sent as part of a later one.
    """

    def __init__(self, config: PublisherConfig, sink: "EventSink") -> None:
        self._config = config
        self._sink = sink
        self._lock = threading.Lock()
        self._buffer: list[bytes] = []
        self._running = False
        self._ticker: Optional[FlushTicker] = None
        self._stats = PublisherStats()
        self._failure: Optional[BaseException] = None

    @property
    def config(self) -> PublisherConfig:
        return self._config

    @property
    def running(self) -> bool:
        with self._lock:
            return self._running

    def pending(self) -> tuple[bytes, ...]:
        """Lines buffered but not yet flushed."""
        with self._lock:
            return tuple(self._buffer)

    def run(
        self,
        stream: Iterable[bytes | str],
        cancel: Optional[threading.Event] = None,
    ) -> PublisherStats:
        """Consume ``stream`` until it ends or ``cancel`` is set.

        Returns the run's counters once the final flush has succeeded. Any
        sink, field, or input error aborts the run and is raised to the
        caller.
        """
        with self._lock:
            if self._running:
                raise AlreadyRunningError()
            self._running = True
            self._stats = PublisherStats()
            self._failure = None
            if self._buffer:
                logger.warning("discarding %d events left over from a failed run", len(self._buffer))
                self._buffer.clear()

        try:
            return self._run(stream, cancel)
        finally:
            with self._lock:
                self._running = False
                self._ticker = None

    def flush(self, reason: str = "manual") -> None:
        with self._lock:
            self._flush_locked(reason)

    def _run(
        self,
        stream: Iterable[bytes | str],
        cancel: Optional[threading.Event],
    ) -> PublisherStats:
        ticker: Optional[FlushTicker] = None
        if self._config.flush_interval_ms:
            ticker = FlushTicker(self._config.flush_interval, self._flush_on_timer)
        with self._lock:
            self._ticker = ticker

        logger.debug(
            "publisher started (batch size %d, flush interval %dms, sink %s)",
            self._config.batch_size,
            self._config.flush_interval_ms,
            getattr(self._sink, "sink_id", type(self._sink).__name__),
        )

        read_error: Optional[BaseException] = None
        if ticker is not None:
            ticker.start()
        try:
            iterator = iter(stream)
            while True:
                try:
                    raw = next(iterator)
                except StopIteration:
                    break
                except (OSError, ValueError) as exc:
                    read_error = exc
                    break

                line = _strip_terminator(raw)
                if not line.strip():
                    with self._lock:
                        self._stats.lines_skipped += 1
                    continue

                self._add_line(line)

                if ticker is not None and ticker.error is not None:
                    raise ticker.error
                if cancel is not None and cancel.is_set():
                    logger.info("cancellation requested; no further input will be read")
                    break
        finally:
            if ticker is not None:
                ticker.stop()

        if ticker is not None and ticker.error is not None:
            raise ticker.error

        self.flush("final")

        if read_error is not None:
            raise InputReadError(f"failed to read input: {read_error}") from read_error

        with self._lock:
            stats = replace(self._stats)
        logger.info(
            "sent %d events in %d batches (%d blank lines skipped)",
            stats.events_sent,
            stats.batches_sent,
            stats.lines_skipped,
        )
        return stats

    def _add_line(self, line: bytes) -> None:
        with self._lock:
            if self._failure is not None:
                raise self._failure
            self._buffer.append(line)
            self._stats.lines_read += 1
            if len(self._buffer) == 1 and self._ticker is not None:
                self._ticker.reset()
            if len(self._buffer) >= self._config.batch_size:
                self._flush_locked("size")

    def _flush_on_timer(self) -> None:
        self.flush("timer")

    def _flush_locked(self, reason: str) -> None:
        if self._failure is not None:
            raise self._failure
        if not self._buffer:
            logger.debug("skipping %s flush of empty batch", reason)
            return
        batch = tuple(self._buffer)
        logger.debug("flushing %d events (%s)", len(batch), reason)
        try:
            self._sink.flush_events(batch)
        except Exception as exc:
            self._failure = exc
            logger.error("%s flush of %d events failed: %s", reason, len(batch), exc)
            raise
        self._buffer.clear()
        self._stats.events_sent += len(batch)
        self._stats.batches_sent += 1


def _strip_terminator(raw: bytes | str) -> bytes:
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    return raw.rstrip(b"\r\n")


__all__ = ["BatchPublisher"]
