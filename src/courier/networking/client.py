"""Synchronous HTTP client for the courier networking layer.

Each verb encodes its payload, dispatches through the configured transport
with the configured retry policy, and records the captured response on the
client. Results are also returned directly so callers that share a client
across threads can ignore the shared holder.
"""

from __future__ import annotations

import logging
from typing import Any

from requests.structures import CaseInsensitiveDict

from .config import RequestConfig
from .dispatch import dispatch
from .errors import DeserializationError, EncodingError, HttpClientError
from .payload import classify, encode, is_json
from .response import ResponseCapture, decode_json
from .transport import RequestsTransport, Transport
from .types import Err, Result

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"

# Marks a request sent without a body; distinct from a None payload.
NO_BODY: Any = object()


class HttpClient:
    """Request helper with a shared response holder (sync).

    ``response`` holds the capture of the most recent successful call. A
    failed call leaves it untouched, so its contents may be from an earlier
    call. The holder is shared mutable state: overlapping calls on one client
    race on it. Use one client per logical call, or read ``result.value``
    instead.
    """

    def __init__(
        self,
        config: RequestConfig | None = None,
        transport: Transport | None = None,
    ) -> None:
        """Create a new HttpClient.

        Args:
            config: Headers, TLS, timeout, and retry settings. Defaults to
                ten retries ten seconds apart and no headers.
            transport: Collaborator performing the exchanges. Defaults to a
                requests-based transport.
        """
        self.config = config if config is not None else RequestConfig()
        self._transport = (
            transport if transport is not None else RequestsTransport()
        )
        self.response: ResponseCapture | None = None

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._transport.close()

    @property
    def headers(self) -> CaseInsensitiveDict[str]:
        """Headers sent with every request; edit in place before a call."""
        return self.config.headers

    def request(
        self, method: str, url: str, body: Any = NO_BODY
    ) -> Result[ResponseCapture, HttpClientError]:
        """Encode ``body`` and dispatch the request.

        Leaving ``body`` unset sends no body. Any other value, None included,
        must be text, a mapping, or a readable byte stream.

        Returns:
            Ok with the captured response, or Err with the error. Encoding
            errors are returned before any network attempt.
        """
        self.config.validate()
        method = method.upper()
        headers = CaseInsensitiveDict(self.config.headers)
        stream = None
        if body is not NO_BODY:
            try:
                payload = classify(body)
                stream = encode(payload)
            except EncodingError as exc:
                logger.debug("%s %s: payload rejected: %s", method, url, exc)
                return Err(
                    exc,
                    meta={
                        "method": method,
                        "url": url,
                        "attempts": 0,
                        "final_error": type(exc).__name__,
                    },
                )
            if is_json(payload):
                headers.setdefault("Content-Type", JSON_CONTENT_TYPE)

        result = dispatch(
            method,
            url,
            headers,
            stream,
            self._transport,
            self.config.retries,
            self.config.retry_delay_seconds,
            tls=self.config.tls,
            timeout=self.config.timeout_seconds,
        )
        if result.ok:
            self.response = result.value
        return result

    def get(self, url: str) -> Result[ResponseCapture, HttpClientError]:
        """Perform an HTTP GET request; GET never carries a body."""
        return self.request("GET", url)

    def post(
        self, url: str, body: Any
    ) -> Result[ResponseCapture, HttpClientError]:
        """Perform an HTTP POST request.

        Args:
            url: Absolute URL to request.
            body: Text or mapping (sent as JSON) or a readable byte stream.
        """
        return self.request("POST", url, body)

    def put(
        self, url: str, body: Any
    ) -> Result[ResponseCapture, HttpClientError]:
        """Perform an HTTP PUT request with the same body rules as post."""
        return self.request("PUT", url, body)

    def delete(
        self, url: str, body: Any
    ) -> Result[ResponseCapture, HttpClientError]:
        """Perform an HTTP DELETE request with the same body rules as post."""
        return self.request("DELETE", url, body)

    def json(self) -> dict[str, Any]:
        """Decode the last captured response body as a JSON object."""
        if self.response is None:
            raise DeserializationError("no response has been captured")
        return decode_json(self.response)
