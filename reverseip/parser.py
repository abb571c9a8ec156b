"""Decoding of Reverse IP/DNS API response bodies.

The service does not tag its payloads: a page of results and an error
report share one JSON object shape. Bodies are decoded into an
:class:`Envelope` holding the fields of both, and the envelope decides
which one it is.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from .errors import APIError, ParseError
from .models import LookupResponse, LookupResult


_DECODER = json.JSONDecoder()

# Literals a truncated body can stop inside of
_LITERALS = ("null", "true", "false")


@dataclass(frozen=True)
class Envelope:
    """Every field a response body may carry."""

    results: tuple[LookupResult, ...] = ()
    current_page: str = ""
    size: int = 0
    code: int = 0
    message: str = ""

    @property
    def is_error(self) -> bool:
        # Any non-zero "code" counts, even on an otherwise valid page.
        return self.message != "" or self.code != 0

    def lookup_response(self) -> LookupResponse:
        return LookupResponse(
            results=self.results,
            current_page=self.current_page,
            size=self.size,
        )

    def api_error(self) -> APIError:
        return APIError(self.code, self.message)


def parse(raw: bytes) -> Envelope:
    """Decode a response body into an :class:`Envelope`.

    Raises :class:`ParseError` when the body is not a JSON object of the
    expected field types.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(str(exc)) from exc

    # Only the first JSON value counts; anything after it is ignored.
    try:
        data, _ = _DECODER.raw_decode(text.lstrip(" \t\n\r"))
    except json.JSONDecodeError as exc:
        raise ParseError(_describe(exc)) from exc

    if not isinstance(data, dict):
        raise ParseError(f"expected a JSON object, got {_json_type(data)}")

    results = tuple(
        _result(record, index)
        for index, record in enumerate(_field(data, "result", list, []))
    )
    return Envelope(
        results=results,
        current_page=_field(data, "current_page", str, ""),
        size=_field(data, "size", int, 0),
        code=_field(data, "code", int, 0),
        message=_field(data, "messages", str, ""),
    )


def _result(record: Any, index: int) -> LookupResult:
    if not isinstance(record, dict):
        raise ParseError(f"result[{index}]: expected a JSON object, got {_json_type(record)}")
    return LookupResult(
        name=_field(record, "name", str, "", prefix=f"result[{index}]."),
        first_seen=_field(record, "first_seen", int, 0, prefix=f"result[{index}]."),
        last_visit=_field(record, "last_visit", int, 0, prefix=f"result[{index}]."),
    )


def _field(data: dict, key: str, kind: type, default: Any, prefix: str = "") -> Any:
    """Fetch *key* from *data*; missing and null values give *default*."""
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass but never a valid count or timestamp
    if isinstance(value, kind) and not (kind is int and isinstance(value, bool)):
        return value
    raise ParseError(
        f"field {prefix}{key!r}: expected {_json_type(kind())}, got {_json_type(value)}"
    )


def _describe(exc: json.JSONDecodeError) -> str:
    """Failure description for a body that is not valid JSON.

    Truncated documents and documents that cannot start a JSON value get
    fixed wording; other failures keep the decoder's message.
    """
    doc = exc.doc
    if not doc.strip():
        return "EOF"
    if exc.pos >= len(doc.rstrip()) or exc.msg.startswith("Unterminated string"):
        return "unexpected EOF"
    tail = doc[exc.pos :].strip()
    if tail == "-" or any(lit.startswith(tail) and tail != lit for lit in _LITERALS):
        return "unexpected EOF"
    if exc.msg == "Expecting value" and not doc[: exc.pos].strip():
        return f"invalid character {doc[exc.pos]!r} looking for beginning of value"
    return str(exc)


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
