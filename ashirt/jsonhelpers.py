"""Lenient JSON decoding that falls back to empty values on malformed input."""

from __future__ import annotations

import json
from typing import Any, Callable, TypeVar

T = TypeVar("T")

JsonObject = dict[str, Any]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def _load(data: bytes | bytearray | memoryview | str) -> Any:
    if isinstance(data, (bytes, bytearray, memoryview)):
        data = bytes(data).decode("utf-8")
    return json.loads(data, parse_constant=_reject_constant)


def parse_json_list(
    data: bytes | str, item_from_json: Callable[[JsonObject], T]
) -> list[T]:
    """Decode a JSON array into items; malformed input yields an empty list.

    Elements that are not objects are handed to ``item_from_json`` as ``{}``.
    """
    try:
        document = _load(data)
    except ValueError:
        return []
    if not isinstance(document, list):
        return []
    return [item_from_json(value if isinstance(value, dict) else {}) for value in document]


def parse_json_item(
    data: bytes | str,
    item_from_json: Callable[[JsonObject], T],
    default_factory: Callable[[], T],
) -> T:
    """Decode a single JSON object; malformed input yields ``default_factory()``.

    A document that is valid JSON but not an object is handed over as ``{}``.
    """
    try:
        document = _load(data)
    except ValueError:
        return default_factory()
    return item_from_json(document if isinstance(document, dict) else {})