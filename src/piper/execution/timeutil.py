"""Epoch-millisecond conversion helpers used by the sinks."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from ..core.errors import FieldEvalError

NOW = "now"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_epoch_millis(text: str) -> datetime:
    """Convert an integer count of epoch milliseconds to an aware UTC datetime."""
    try:
        millis = int(text.strip(), 10)
    except (AttributeError, ValueError) as exc:
        raise FieldEvalError(f"invalid epoch milliseconds {text!r}") from exc
    return _EPOCH + timedelta(milliseconds=millis)


def epoch_seconds(text: str) -> float:
    """Epoch milliseconds as fractional seconds, e.g. ``1608309835.123``."""
    try:
        millis = int(text.strip(), 10)
    except (AttributeError, ValueError) as exc:
        raise FieldEvalError(f"invalid epoch milliseconds {text!r}") from exc
    return millis / 1000


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_rfc3339_nano(moment: datetime) -> str:
    """RFC 3339 in UTC with trailing fractional zeros trimmed.

    ``2020-12-18T16:43:55Z`` for whole seconds, ``2020-12-18T16:43:55.123Z``
    otherwise.
    """
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    return text + "Z"


__all__ = ["NOW", "parse_epoch_millis", "epoch_seconds", "utcnow", "format_rfc3339_nano"]
