"""Captured response holder and JSON decoding helper."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from requests.structures import CaseInsensitiveDict

from .errors import DeserializationError


@dataclass(frozen=True)
class ResponseCapture:
    """Body, headers, and status of one completed exchange."""

    body: bytes
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    status_code: int = 200

    def json(self) -> dict[str, Any]:
        return decode_json(self)


def decode_json(capture: ResponseCapture) -> dict[str, Any]:
    """Parse the captured body as a top-level JSON object.

    Raises:
        DeserializationError: the body is not valid JSON or its top level is
            not an object.
    """
    try:
        data = json.loads(capture.body)
    except ValueError as exc:
        raise DeserializationError(f"invalid JSON body: {exc}") from exc
    if not isinstance(data, dict):
        raise DeserializationError(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data
