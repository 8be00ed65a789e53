from __future__ import annotations

import pytest

from piper.core.errors import ConfigError, FieldCompileError, SinkError
from piper.core.types import EventBridgeConfig, EventGridConfig, PublisherConfig, SplunkConfig


class TestPublisherConfig:
    def test_defaults(self) -> None:
        config = PublisherConfig()
        assert config.batch_size == 10
        assert config.flush_interval_ms == 2000
        assert config.flush_interval == pytest.approx(2.0)

    def test_zero_interval_allowed(self) -> None:
        assert PublisherConfig(flush_interval_ms=0).flush_interval == 0.0

    @pytest.mark.parametrize("batch_size", [0, -1])
    def test_rejects_non_positive_batch_size(self, batch_size: int) -> None:
        with pytest.raises(ConfigError):
            PublisherConfig(batch_size=batch_size)

    def test_rejects_negative_interval(self) -> None:
        with pytest.raises(ConfigError):
            PublisherConfig(flush_interval_ms=-5)


class TestSinkConfigs:
    def test_eventgrid_field_specs(self) -> None:
        config = EventGridConfig(endpoint="example.net", subject="s", event_type="jp:type")
        assert config.field_specs() == {
            "id": "",
            "subject": "s",
            "eventType": "jp:type",
            "eventTime": "now",
            "dataVersion": "1.0",
        }

    def test_splunk_field_specs(self) -> None:
        config = SplunkConfig(endpoint="example.net", host="h", time='jp:"@timestamp"')
        specs = config.field_specs()
        assert specs["host"] == "h"
        assert specs["time"] == 'jp:"@timestamp"'
        assert specs["index"] == ""

    def test_eventbridge_resources_get_indexed_names(self) -> None:
        config = EventBridgeConfig(source="src", detail_type="t", resources=("a", "jp:b"))
        specs = config.field_specs()
        assert specs["resource_0"] == "a"
        assert specs["resource_1"] == "jp:b"


def test_error_details() -> None:
    compile_error = FieldCompileError("id", "foo[", "unexpected end")
    assert "id" in str(compile_error)
    assert compile_error.expression == "foo["

    sink_error = SinkError("nope", status_code=500)
    assert sink_error.status_code == 500
    assert sink_error.failed_entries is None
