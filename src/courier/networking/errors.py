"""Error types raised or returned by the courier networking layer."""

from __future__ import annotations


class HttpClientError(Exception):
    """Base class for all courier networking errors."""


class EncodingError(HttpClientError):
    """The request payload could not be turned into a byte stream."""


class SerializationError(EncodingError):
    """The payload has a supported shape but JSON encoding failed."""


class UnsupportedPayloadError(EncodingError):
    """The payload shape is neither text, a mapping, nor a byte stream."""


class TransportError(HttpClientError):
    """A request/response exchange failed before a response arrived."""

    def __init__(self, message: str, *, retryable: bool = True) -> None:
        super().__init__(message)
        self.retryable = retryable


class RequestTimeoutError(TransportError):
    """The exchange did not complete within the per-attempt timeout."""


class ConnectionFailedError(TransportError):
    """The connection could not be established or was dropped."""


class TLSError(ConnectionFailedError):
    """The TLS handshake failed."""


class DispatchError(HttpClientError):
    """All attempts of a dispatch failed; wraps the last transport error."""

    def __init__(
        self,
        message: str,
        *,
        last_error: TransportError,
        attempts: int,
    ) -> None:
        super().__init__(message)
        self.last_error = last_error
        self.attempts = attempts


class ReadError(HttpClientError):
    """Reading the response body failed after a completed exchange."""


class DeserializationError(HttpClientError):
    """The captured body is not a JSON object."""
