# src/core/document.py - v1
"""Normalized, queryable JSON documents.

Every piece of smartctl output (real or fixture) passes through
``normalize`` before anything else looks at it. The result is always a
valid ``Document``: malformed, empty or non-UTF-8 input collapses to the
empty object, so callers can query any path without type checks.

Usage:
    doc = normalize(stdout)
    doc.get_int("smartctl.exit_status")
    doc.get("smartctl.messages.0.string")
"""

from __future__ import annotations

import copy
import json
from typing import Any

_EMPTY_RAW = "{}"
_MISSING = object()


def _reject_constant(token: str) -> Any:
    """Refuse NaN/Infinity, which are not JSON."""
    raise ValueError(f"Invalid JSON constant: {token}")


class Document:
    """Immutable JSON tree addressed by dotted paths.

    Integer path segments index into arrays, other segments are object
    keys. ``raw`` keeps the exact text the document was parsed from.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, data: Any, raw: str) -> None:
        self._data = data
        self._raw = raw

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def is_empty(self) -> bool:
        """True for the empty-object document produced on bad input."""
        return self._data == {}

    def get(self, path: str, default: Any = None) -> Any:
        """Return the value at ``path``, or ``default`` when absent.

        Containers are returned as copies.
        """
        value = self._lookup(path)
        if value is _MISSING:
            return default
        if isinstance(value, (dict, list)):
            return copy.deepcopy(value)
        return value

    def exists(self, path: str) -> bool:
        return self._lookup(path) is not _MISSING

    def get_int(self, path: str, default: int = 0) -> int:
        """Integer value at ``path``; floats truncate, numeric strings parse.

        Values with no integer form (1e400, "nan", "abc") give ``default``.
        """
        value = self._lookup(path)
        if value is _MISSING or isinstance(value, bool):
            return default
        if isinstance(value, int):
            return value
        try:
            if isinstance(value, float):
                return int(value)
            if isinstance(value, str):
                return int(float(value.strip()))
        except (ValueError, OverflowError):
            # NaN, out-of-range numbers such as 1e400, non-numeric strings
            return default
        return default

    def get_str(self, path: str, default: str = "") -> str:
        value = self._lookup(path)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, str):
            return value
        return json.dumps(value)

    def as_dict(self) -> Any:
        """Fresh deep copy of the whole tree."""
        return copy.deepcopy(self._data)

    def _lookup(self, path: str) -> Any:
        node = self._data
        if not path:
            return node
        for segment in path.split("."):
            if isinstance(node, dict):
                if segment not in node:
                    return _MISSING
                node = node[segment]
            elif isinstance(node, list):
                if not (segment.isascii() and segment.isdigit()):
                    return _MISSING
                index = int(segment)
                if index >= len(node):
                    return _MISSING
                node = node[index]
            else:
                return _MISSING
        return node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(json.dumps(self._data, sort_keys=True))

    def __repr__(self) -> str:
        preview = self._raw if len(self._raw) <= 60 else self._raw[:57] + "..."
        return f"Document({preview!r})"


def empty_document() -> Document:
    """The empty-object document."""
    return Document({}, _EMPTY_RAW)


def normalize(raw: str | bytes | Document | None) -> Document:
    """Parse ``raw`` into a Document, falling back to the empty object.

    Never raises. A Document passed in is returned unchanged.
    """
    if isinstance(raw, Document):
        return raw
    if raw is None:
        return empty_document()
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8")
        except UnicodeDecodeError:
            return empty_document()
    if not raw.strip():
        return empty_document()
    try:
        data = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return empty_document()
    return Document(data, raw)
