"""Per-record field extraction with literal or ``jp:`` JMESPath specifications."""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping

import jmespath
from jmespath.exceptions import JMESPathError
from jmespath.parser import ParsedResult

from ..core.errors import FieldCompileError, FieldEvalError, LineParseError

JMESPATH_PREFIX = "jp:"

_UNPARSED = object()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON value")


def is_query(spec: str) -> bool:
    return spec.startswith(JMESPATH_PREFIX)


class LineData:
    """One raw input line whose JSON is decoded at most once.

    The decoded value (or the decode failure) is cached on first access, so
    every field queried against the same line shares one parse.
    """

    __slots__ = ("raw", "_parsed", "_error")

    def __init__(self, raw: bytes | str) -> None:
        self.raw = raw
        self._parsed: Any = _UNPARSED
        self._error: LineParseError | None = None

    def parsed(self) -> Any:
        if self._error is not None:
            raise self._error
        if self._parsed is _UNPARSED:
            try:
                self._parsed = json.loads(self.raw, parse_constant=_reject_constant)
            except (ValueError, TypeError) as exc:
                self._error = LineParseError(f"line is not valid JSON: {exc}")
                raise self._error from exc
        return self._parsed

    def text(self) -> str:
        if isinstance(self.raw, bytes):
            return self.raw.decode("utf-8", errors="replace")
        return self.raw


class FieldResolver:
    """Resolve named fields for a line from their field specifications.

    A specification starting with ``jp:`` is compiled on first use and cached
    for the lifetime of the resolver, keyed by field name. Anything else is
    returned verbatim for every line.
    """

    def __init__(self, field_specs: Mapping[str, str]) -> None:
        self._specs: Dict[str, str] = {name: spec or "" for name, spec in field_specs.items()}
        self._compiled: Dict[str, ParsedResult] = {}

    def spec(self, name: str) -> str:
        return self._specs.get(name, "")

    def is_query(self, name: str) -> bool:
        return is_query(self.spec(name))

    def value(self, name: str, line: LineData) -> str:
        spec = self.spec(name)
        if not is_query(spec):
            return spec
        compiled = self._compile(name, spec)
        document = line.parsed()
        try:
            result = compiled.search(document)
        except JMESPathError as exc:
            raise FieldEvalError(f"failed to evaluate field {name!r}: {exc}") from exc
        return stringify(result)

    def _compile(self, name: str, spec: str) -> ParsedResult:
        compiled = self._compiled.get(name)
        if compiled is None:
            expression = spec[len(JMESPATH_PREFIX) :]
            try:
                compiled = jmespath.compile(expression)
            except JMESPathError as exc:
                raise FieldCompileError(name, expression, str(exc)) from exc
            self._compiled[name] = compiled
        return compiled


def stringify(value: Any) -> str:
    """Render a query result as a field value."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:.0f}"
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


__all__ = ["JMESPATH_PREFIX", "FieldResolver", "LineData", "is_query", "stringify"]
