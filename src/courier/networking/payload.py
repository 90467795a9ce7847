"""Request payload classification and encoding.

A payload is one of three tagged shapes: ``Text`` and ``Structured`` values
are serialized to JSON, ``Stream`` values are sent as-is. Callers may build a
variant themselves or pass a plain value and let :func:`classify` infer it.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import IO, Any, Mapping, Union

from .errors import SerializationError, UnsupportedPayloadError


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Structured:
    value: Mapping[str, Any]


@dataclass(frozen=True)
class Stream:
    source: IO[bytes]


Payload = Union[Text, Structured, Stream]


def _is_readable(value: Any) -> bool:
    # Text streams yield str, not bytes.
    if isinstance(value, io.TextIOBase):
        return False
    return callable(getattr(value, "read", None))


def classify(body: Any) -> Payload:
    """Infer the payload variant from the shape of ``body``.

    Raises:
        UnsupportedPayloadError: ``body`` is not text, a mapping, or a
            readable byte source.
    """
    if isinstance(body, (Text, Structured, Stream)):
        return body
    if isinstance(body, str):
        return Text(body)
    if isinstance(body, Mapping):
        return Structured(body)
    if _is_readable(body):
        return Stream(body)
    raise UnsupportedPayloadError(
        f"unsupported payload type: {type(body).__name__}"
    )


def is_json(payload: Payload) -> bool:
    """Return True when the encoded payload is a JSON document."""
    return isinstance(payload, (Text, Structured))


def encode(body: Any) -> IO[bytes]:
    """Turn ``body`` into a byte stream suitable for a request body.

    Streams are returned unchanged; text and mappings are JSON-encoded into a
    new buffer. The caller's value is never modified.

    Raises:
        SerializationError: JSON encoding failed (unsupported nested value or
            a cyclic structure).
        UnsupportedPayloadError: the shape of ``body`` is not recognized.
    """
    payload = classify(body)
    if isinstance(payload, Stream):
        return payload.source
    try:
        encoded = json.dumps(payload.value)
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc
    return io.BytesIO(encoded.encode("utf-8"))
