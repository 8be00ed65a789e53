from __future__ import annotations

from datetime import datetime, timezone

import pytest

from piper.core.errors import FieldEvalError
from piper.execution.timeutil import epoch_seconds, format_rfc3339_nano, parse_epoch_millis


def test_parse_epoch_millis_whole_seconds() -> None:
    moment = parse_epoch_millis("1608309835000")
    assert moment == datetime(2020, 12, 18, 16, 43, 55, tzinfo=timezone.utc)
    assert format_rfc3339_nano(moment) == "2020-12-18T16:43:55Z"


def test_parse_epoch_millis_keeps_milliseconds() -> None:
    moment = parse_epoch_millis("1608309835123")
    assert format_rfc3339_nano(moment) == "2020-12-18T16:43:55.123Z"


def test_format_trims_trailing_zeros() -> None:
    moment = datetime(2021, 1, 2, 3, 4, 5, 120000, tzinfo=timezone.utc)
    assert format_rfc3339_nano(moment) == "2021-01-02T03:04:05.12Z"


def test_format_converts_to_utc() -> None:
    from datetime import timedelta

    eastern = timezone(timedelta(hours=-5))
    moment = datetime(2020, 12, 18, 11, 43, 55, tzinfo=eastern)
    assert format_rfc3339_nano(moment) == "2020-12-18T16:43:55Z"


def test_epoch_seconds() -> None:
    assert epoch_seconds("1608309835123") == pytest.approx(1608309835.123)


@pytest.mark.parametrize("raw", ["", "now", "12.5", "2020-12-18"])
def test_invalid_epoch_millis(raw: str) -> None:
    with pytest.raises(FieldEvalError):
        parse_epoch_millis(raw)
    with pytest.raises(FieldEvalError):
        epoch_seconds(raw)
