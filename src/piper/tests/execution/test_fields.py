"""Tests for field specifications and per-line JSON caching."""

from __future__ import annotations

import json

import jmespath
import pytest

from piper.core.errors import FieldCompileError, FieldEvalError, LineParseError
from piper.execution import fields as fields_module
from piper.execution.fields import FieldResolver, LineData, is_query, stringify


@pytest.fixture
def count_loads(monkeypatch: pytest.MonkeyPatch):
    calls = {"count": 0}
    real_loads = json.loads

    def counting_loads(*args, **kwargs):
        calls["count"] += 1
        return real_loads(*args, **kwargs)

    monkeypatch.setattr(fields_module.json, "loads", counting_loads)
    return calls


class TestFieldResolver:
    def test_literal_is_returned_for_every_record(self) -> None:
        resolver = FieldResolver({"subject": "my subject"})
        lines = [b'{"subject": "other"}', b'{"a": 1}', b"not json at all"]

        values = [resolver.value("subject", LineData(raw)) for raw in lines]

        assert values == ["my subject"] * 3

    def test_query_extracts_string(self) -> None:
        resolver = FieldResolver({"type": "jp:type"})
        assert resolver.value("type", LineData(b'{"type": "obj.add"}')) == "obj.add"

    def test_quoted_identifier_query(self) -> None:
        resolver = FieldResolver({"time": 'jp:"@timestamp"'})
        line = LineData(b'{"@timestamp": 1604953432032}')
        assert resolver.value("time", line) == "1604953432032"

    def test_unset_field_resolves_to_empty_string(self) -> None:
        resolver = FieldResolver({"id": ""})
        assert resolver.value("id", LineData(b"{}")) == ""
        assert resolver.value("never-configured", LineData(b"{}")) == ""

    def test_missing_path_resolves_to_empty_string(self) -> None:
        resolver = FieldResolver({"id": "jp:doc.id"})
        assert resolver.value("id", LineData(b'{"other": true}')) == ""

    def test_is_query(self) -> None:
        resolver = FieldResolver({"a": "jp:a", "b": "literal"})
        assert resolver.is_query("a")
        assert not resolver.is_query("b")
        assert is_query("jp:")
        assert not is_query("JP:a")

    def test_line_parsed_once_across_fields(self, count_loads) -> None:
        resolver = FieldResolver({"id": "jp:id", "type": "jp:type", "time": "jp:time", "subject": "lit"})
        line = LineData(b'{"id": "foo", "type": "bar", "time": 1}')

        for name in ("time", "subject", "id", "type", "id"):
            resolver.value(name, line)

        assert count_loads["count"] == 1

    def test_each_line_parsed_separately(self, count_loads) -> None:
        resolver = FieldResolver({"id": "jp:id"})

        assert resolver.value("id", LineData(b'{"id": "a"}')) == "a"
        assert resolver.value("id", LineData(b'{"id": "b"}')) == "b"
        assert count_loads["count"] == 2

    def test_literal_fields_do_not_parse(self, count_loads) -> None:
        resolver = FieldResolver({"subject": "fixed"})
        resolver.value("subject", LineData(b"{"))
        assert count_loads["count"] == 0

    def test_invalid_json_fails_every_query(self, count_loads) -> None:
        resolver = FieldResolver({"id": "jp:id", "type": "jp:type"})
        line = LineData(b'{"id": "foo",')

        with pytest.raises(LineParseError):
            resolver.value("id", line)
        with pytest.raises(LineParseError):
            resolver.value("type", line)
        assert count_loads["count"] == 1

    def test_compile_error(self) -> None:
        resolver = FieldResolver({"id": "jp:foo["})

        with pytest.raises(FieldCompileError) as excinfo:
            resolver.value("id", LineData(b"{}"))

        assert excinfo.value.field_name == "id"
        assert excinfo.value.expression == "foo["

    def test_expression_compiled_once_per_field(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = []
        real_compile = jmespath.compile

        def counting_compile(expression):
            calls.append(expression)
            return real_compile(expression)

        monkeypatch.setattr(fields_module.jmespath, "compile", counting_compile)
        resolver = FieldResolver({"id": "jp:id", "type": "jp:type"})

        for raw in (b'{"id": 1, "type": "a"}', b'{"id": 2, "type": "b"}', b'{"id": 3}'):
            line = LineData(raw)
            resolver.value("id", line)
            resolver.value("type", line)

        assert calls == ["id", "type"]

    def test_evaluation_error(self) -> None:
        resolver = FieldResolver({"size": "jp:abs(name)"})

        with pytest.raises(FieldEvalError):
            resolver.value("size", LineData(b'{"name": "not a number"}'))


class TestLineData:
    def test_accepts_text(self) -> None:
        line = LineData('{"a": "b"}')
        assert line.parsed() == {"a": "b"}
        assert line.text() == '{"a": "b"}'

    def test_text_decodes_bytes(self) -> None:
        assert LineData('{"name": "café"}'.encode("utf-8")).text() == '{"name": "café"}'

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_rejected(self, constant: str) -> None:
        line = LineData(f'{{"ts": {constant}}}'.encode("utf-8"))
        resolver = FieldResolver({"time": "jp:ts"})

        with pytest.raises(LineParseError, match=constant):
            resolver.value("time", line)


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1608309835000", "1608309835000"),
            (1608309835000, "1608309835000"),
            (1608309835000.0, "1608309835000"),
            (1.6, "2"),
            (1e21, "1000000000000000000000"),
            (True, "true"),
            (False, "false"),
            (None, ""),
            ({"a": [1, 2]}, '{"a":[1,2]}'),
            (["x", "y"], '["x","y"]'),
        ],
    )
    def test_conversion(self, value, expected) -> None:
        assert stringify(value) == expected
